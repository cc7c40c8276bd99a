from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
import requests

from plenty_client.auth import LOGIN_PATH
from plenty_client.client import PlentyClient
from plenty_client.config import Config

SITE_URL = "https://www.example.com"


def _make_response(status: int = 200, body: Any = None, url: str = SITE_URL) -> requests.Response:
    """Build a real requests.Response carrying ``body`` as JSON."""
    res = requests.Response()
    res.status_code = status
    res.url = url
    res.reason = "OK" if status < 400 else "Error"
    res.headers["Content-Type"] = "application/json"
    if body is None:
        res._content = b""
    elif isinstance(body, bytes):
        res._content = body
    else:
        res._content = json.dumps(body).encode("utf-8")
    return res


def _route(login: list[requests.Response], resource: list[requests.Response]):
    """Side effect for a patched Session.request that answers login and resource calls in order."""
    login_queue = iter(login)
    resource_queue = iter(resource)

    def _side_effect(method: str, url: str, **kwargs: Any) -> requests.Response:
        if url.endswith(LOGIN_PATH):
            return next(login_queue)
        return next(resource_queue)

    return _side_effect


def _page_body(page: int, last: int = 3, entries: list[Any] | None = None) -> dict[str, Any]:
    return {
        "page": page,
        "totalsCount": last,
        "isLastPage": page == last,
        "entries": entries if entries is not None else ["a", "b", "c"],
    }


@pytest.fixture
def site_url():
    return SITE_URL


@pytest.fixture
def make_response():
    """Factory for requests.Response objects carrying a JSON body."""
    return _make_response


@pytest.fixture
def route():
    """Side-effect factory that answers login and resource calls from queues."""
    return _route


@pytest.fixture
def page_body():
    """Factory for paginated list envelopes."""
    return _page_body


@pytest.fixture
def clean_env(monkeypatch):
    """Remove PLENTY_* variables so tests do not pick up a developer's settings."""
    for key in [
        "PLENTY_SITE_URL",
        "PLENTY_API_USER",
        "PLENTY_API_PASSWORD",
        "PLENTY_MAX_PAGES",
        "PLENTY_TIMEOUT",
    ]:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def login_body():
    """A successful login answer."""
    return {
        "tokenType": "Bearer",
        "expiresIn": 86400,
        "accessToken": "foo_access_token",
        "refreshToken": "foo_refresh_token",
    }


@pytest.fixture
def rejected_login_body():
    """A login answer for wrong credentials."""
    return {
        "error": "invalid_credentials",
        "message": "The user credentials were incorrect.",
        "tokenType": None,
        "expiresIn": None,
        "accessToken": None,
        "refreshToken": None,
    }


@pytest.fixture
def config():
    """Context with credentials and a token that is still valid."""
    return Config(
        site_url=SITE_URL,
        api_user="foouser",
        api_password="foopass",
        access_token="foobar",
        refresh_token="foobar",
        expiry_date=datetime.now(timezone.utc) + timedelta(days=1),
    )


@pytest.fixture
def anonymous_config():
    """Context with credentials but no token yet."""
    return Config(site_url=SITE_URL, api_user="foouser", api_password="foopass")


@pytest.fixture
def client(config):
    return PlentyClient(config=config)
