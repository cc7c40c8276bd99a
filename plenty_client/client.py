from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from plenty_client.auth import build_auth_headers, ensure_authenticated
from plenty_client.config import Config, PlentyClientError
from plenty_client.pagination import Page, iterate_pages

logger = logging.getLogger(__name__)

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")
# verbs whose params travel in the query string; the rest send a JSON body
QUERY_METHODS = ("GET", "DELETE")


class AuthorizationFailed(PlentyClientError):
    """Raised when a request is still unauthorized after re-authenticating."""

    def __init__(self, method: str, path: str, body: str | None = None):
        super().__init__(f"{method} {path} unauthorized after re-authentication")
        self.method = method
        self.path = path
        self.body = body


def _session_with_retries(total: int = 3, backoff: float = 0.5) -> requests.Session:
    sess = requests.Session()
    retries = Retry(
        total=total,
        read=total,
        connect=total,
        backoff_factor=backoff,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET", "PUT", "DELETE"),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retries)
    sess.mount("http://", adapter)
    sess.mount("https://", adapter)
    return sess


@dataclass(frozen=True)
class RequestSpec:
    method: str
    path: str
    params: dict[str, Any]

    @classmethod
    def build(
        cls, method: str | None, path: str | None, params: Mapping[str, Any] | None = None
    ) -> RequestSpec | None:
        """Validate call arguments; None means the call must not be sent."""
        if not method or not path:
            return None
        verb = str(method).upper()
        if verb not in HTTP_METHODS:
            return None
        return cls(verb, path, dict(params or {}))


@dataclass
class PlentyClient:
    """Authenticated client for the plentymarkets REST API.

    Logs in on first use, retries once with a fresh login when a request
    comes back 401, and walks paginated list endpoints.

    One client is meant for one thread of work. The config lock only
    serialises logins; sharing a client between threads otherwise needs
    external synchronisation.
    """

    config: Config
    session: requests.Session = field(default_factory=_session_with_retries)

    @classmethod
    def from_env(cls, prefix: str = "PLENTY_") -> PlentyClient:
        return cls(config=Config.from_env(prefix=prefix))

    def request(
        self, method: str | None, path: str | None, params: Mapping[str, Any] | None = None
    ) -> Any:
        """Send one authenticated request and return the decoded JSON body.

        Returns False without touching the network when method or path is
        missing. NoCredentials and InvalidCredentials from the login step,
        requests.HTTPError for non-2xx answers and transport errors all
        propagate to the caller.
        """
        spec = RequestSpec.build(method, path, params)
        if spec is None:
            logger.debug(f"Ignoring request with method={method!r} path={path!r}")
            return False

        ensure_authenticated(self.config, self.session)
        res = self._send(spec)

        if res.status_code == 401:
            logger.warning(f"{spec.method} {spec.path} returned 401, logging in again")
            self.config.clear_tokens()
            ensure_authenticated(self.config, self.session, force=True)
            res = self._send(spec)
            if res.status_code == 401:
                raise AuthorizationFailed(spec.method, spec.path, res.text)

        res.raise_for_status()
        return _decode(res)

    def _send(self, spec: RequestSpec) -> requests.Response:
        url = f"{self.config.site_url}{spec.path}"
        headers = {"Accept": "application/json", **build_auth_headers(self.config.access_token)}
        if spec.method in QUERY_METHODS:
            payload = {"params": spec.params}
        else:
            payload = {"json": spec.params}
        logger.debug(f"{spec.method} {url}")
        return self.session.request(
            spec.method, url, headers=headers, timeout=self.config.timeout, **payload
        )

    def get(
        self,
        path: str | None,
        params: Mapping[str, Any] | None = None,
        on_page: Callable[[list[Any]], Any] | None = None,
    ) -> Any:
        """GET a resource, or every page of a list resource.

        Without ``on_page`` a single request is made with ``page`` defaulting
        to 1. With ``on_page`` all pages are fetched in order, the callback is
        called with each page's entries, and its return values are collected
        (lists are flattened into the result).
        """
        if on_page is None:
            return self.request("GET", path, {"page": 1, **(params or {})})
        if not path:
            return False

        results: list[Any] = []
        for page in self.iter_pages(path, params):
            value = on_page(page.entries)
            if isinstance(value, list):
                results.extend(value)
            else:
                results.append(value)
        return results

    def post(self, path: str | None, params: Mapping[str, Any] | None = None) -> Any:
        return self.request("POST", path, params)

    def put(self, path: str | None, params: Mapping[str, Any] | None = None) -> Any:
        return self.request("PUT", path, params)

    def patch(self, path: str | None, params: Mapping[str, Any] | None = None) -> Any:
        return self.request("PATCH", path, params)

    def delete(self, path: str | None, params: Mapping[str, Any] | None = None) -> Any:
        return self.request("DELETE", path, params)

    def iter_pages(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        max_pages: int | None = None,
    ) -> Iterator[Page]:
        """Lazily yield pages of a list endpoint; stop iterating to stop fetching.

        ``max_pages`` defaults to ``config.max_pages``. Without any cap the
        iteration only ends when the server reports ``isLastPage``.
        """
        if not path:
            return
        cap = max_pages if max_pages is not None else self.config.max_pages
        yield from iterate_pages(
            lambda page_params: self.request("GET", path, page_params), path, params, cap
        )

    def iter_entries(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        max_pages: int | None = None,
    ) -> Iterator[Any]:
        for page in self.iter_pages(path, params, max_pages=max_pages):
            yield from page.entries

    def get_all(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        max_pages: int | None = None,
    ) -> list[Any]:
        """Fetch every page and return all entries in order."""
        return list(self.iter_entries(path, params, max_pages=max_pages))


def _decode(res: requests.Response) -> Any:
    if not res.content:
        return None
    return res.json()
