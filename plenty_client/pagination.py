"""Page-number pagination over list endpoints.

List endpoints answer with an envelope::

    {"page": 1, "totalsCount": 3, "isLastPage": false, "entries": [...]}

``iterate_pages`` requests page after page until ``isLastPage`` is true.
A server that never reports the last page keeps the loop going forever
unless ``max_pages`` is given.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from plenty_client.config import PlentyClientError

logger = logging.getLogger(__name__)


class PaginationLimitExceeded(PlentyClientError):
    """Raised when max_pages pages were read without reaching the last page."""

    def __init__(self, path: str, max_pages: int):
        super().__init__(f"Stopped after {max_pages} pages of {path} without isLastPage")
        self.path = path
        self.max_pages = max_pages


@dataclass
class Page:
    page_number: int
    totals_count: int | None
    is_last_page: bool
    entries: list[Any] = field(default_factory=list)

    @classmethod
    def from_response(cls, body: Any, requested_page: int) -> Page:
        """Interpret a decoded body as a page.

        Bodies without an ``entries`` list are not paginated; they become a
        single last page holding the body itself.
        """
        if not isinstance(body, Mapping) or not isinstance(body.get("entries"), list):
            if body is None:
                entries = []
            elif isinstance(body, list):
                entries = body
            else:
                entries = [body]
            return cls(requested_page, len(entries), True, entries)

        return cls(
            page_number=int(body.get("page") or requested_page),
            totals_count=body.get("totalsCount"),
            is_last_page=body.get("isLastPage") is True,
            entries=list(body["entries"]),
        )


def iterate_pages(
    fetch: Callable[[dict[str, Any]], Any],
    path: str,
    params: Mapping[str, Any] | None = None,
    max_pages: int | None = None,
) -> Iterator[Page]:
    """Yield pages lazily, one ``fetch`` per advancement.

    ``fetch`` receives the params for one page and returns the decoded body.
    Iteration starts at the caller's ``page`` param, or 1.
    """
    base = dict(params or {})
    page = int(base.pop("page", 1) or 1)
    fetched = 0
    while True:
        if max_pages is not None and fetched >= max_pages:
            raise PaginationLimitExceeded(path, max_pages)

        body = fetch({**base, "page": page})
        fetched += 1
        current = Page.from_response(body, page)
        logger.debug(
            f"Fetched page {current.page_number} of {path} "
            f"({len(current.entries)} entries, last={current.is_last_page})"
        )
        yield current

        if current.is_last_page:
            return
        page += 1
