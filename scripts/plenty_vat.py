#!/usr/bin/env python
"""List VAT configurations (/vat), following every page."""

from __future__ import annotations

import argparse
import json
import logging

from plenty_client.accounting import Accounting
from plenty_client.client import PlentyClient


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    parser = argparse.ArgumentParser(description="Fetch VAT configurations")
    parser.add_argument("--location", type=int, help="Location id (optional)")
    parser.add_argument("--country", type=int, help="Country id, requires --location")
    parser.add_argument("--max-pages", type=int, default=50, help="Stop after this many pages")
    args = parser.parse_args()

    client = PlentyClient.from_env()
    client.config.max_pages = args.max_pages
    vat = Accounting(client)

    if args.location is not None and args.country is not None:
        rows = vat.list_for_country(args.location, args.country, on_page=lambda entries: entries)
    elif args.location is not None:
        rows = vat.list_for_location(args.location, on_page=lambda entries: entries)
    else:
        rows = vat.list(on_page=lambda entries: entries)

    print(json.dumps(rows, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
