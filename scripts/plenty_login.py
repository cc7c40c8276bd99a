#!/usr/bin/env python
from __future__ import annotations

import argparse
import json
import logging

from plenty_client.auth import ensure_authenticated
from plenty_client.config import Config


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    parser = argparse.ArgumentParser(description="Log in to the plentymarkets REST API")
    parser.add_argument("--site-url", default=None, help="Defaults to $PLENTY_SITE_URL or .env")
    parser.add_argument("--user", default=None, help="Defaults to $PLENTY_API_USER or .env")
    args = parser.parse_args()

    config = Config.from_env()
    if args.site_url:
        config.site_url = args.site_url
    if args.user:
        config.api_user = args.user

    ensure_authenticated(config)
    token = config.access_token or ""
    print(
        json.dumps(
            {
                "ok": True,
                "accessToken_prefix": token[:16] + "...",
                "expiryDate": config.expiry_date.isoformat() if config.expiry_date else None,
            }
        )
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
