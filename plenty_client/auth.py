from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import requests

from plenty_client.config import Config, InvalidCredentials, NoCredentials

logger = logging.getLogger(__name__)

LOGIN_PATH = "/rest/login"
TOKEN_FIELDS = ("tokenType", "expiresIn", "accessToken", "refreshToken")


def build_auth_headers(access_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}


def ensure_authenticated(
    config: Config, session: requests.Session | None = None, force: bool = False
) -> bool:
    """Make sure ``config`` holds a usable token triple, logging in if needed.

    Raises NoCredentials before any network call when api_user or api_password
    is missing. Returns True when a login request was made, False when the
    existing tokens were reused. ``force`` skips the reuse check.

    Expiry is only checked here; tokens are not refreshed ahead of time.
    """
    if not config.has_credentials():
        raise NoCredentials("api_user and api_password must be set before making requests")

    with config.lock:
        if not force and config.is_authenticated():
            return False
        login(config, session)
        return True


def login(config: Config, session: requests.Session | None = None) -> None:
    """POST the stored credentials to the login endpoint and store the tokens.

    On success the token triple is replaced as a whole. On rejection it is
    cleared and InvalidCredentials is raised, even when the response carried
    some token fields. Rejection means an `error` field in the body, or a
    200/401 answer without the token fields. Any other error status (5xx,
    429, a 404 from a wrong site_url) propagates as requests.HTTPError.
    """
    if not config.has_credentials():
        raise NoCredentials("api_user and api_password must be set before making requests")

    http = session or requests
    url = f"{config.site_url}{LOGIN_PATH}"
    logger.info(f"Logging in to {config.site_url} as {config.api_user}")
    res = http.post(
        url,
        json={"username": config.api_user, "password": config.api_password},
        headers={"Accept": "application/json"},
        timeout=config.timeout,
    )
    if res.status_code >= 500 or res.status_code == 429:
        config.clear_tokens()
        res.raise_for_status()

    data = _decode_login_response(res)
    if res.status_code >= 400 and res.status_code != 401 and not data.get("error"):
        config.clear_tokens()
        res.raise_for_status()
    if data.get("error") or not all(data.get(name) for name in TOKEN_FIELDS):
        config.clear_tokens()
        error = data.get("error")
        message = data.get("message") or f"Login failed with status {res.status_code}"
        raise InvalidCredentials(f"Login rejected: {message}", error=error)

    expiry_date = datetime.now(timezone.utc) + timedelta(seconds=int(data["expiresIn"]))
    config.set_tokens(data["accessToken"], data["refreshToken"], expiry_date)
    logger.info(f"Login succeeded, token valid until {expiry_date.isoformat()}")


def _decode_login_response(res: requests.Response) -> dict[str, Any]:
    try:
        data = res.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
