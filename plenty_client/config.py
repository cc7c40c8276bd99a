"""Client context: site URL, API credentials and the current token state.

A ``Config`` is created by the host application and passed to
``PlentyClient``. Only the authenticator writes the token fields, and it
always writes or clears all three of them together.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone

from plenty_client.utils.env import env_value, load_env_file_if_present

logger = logging.getLogger(__name__)


class PlentyClientError(RuntimeError):
    """Base class for errors raised by plenty_client."""

    pass


class NoCredentials(PlentyClientError):
    """Raised when api_user or api_password is missing."""

    pass


class InvalidCredentials(PlentyClientError):
    """Raised when the login endpoint rejects the stored credentials."""

    def __init__(self, message: str, error: str | None = None):
        super().__init__(message)
        self.error = error


@dataclass
class Config:
    site_url: str | None = None
    api_user: str | None = None
    api_password: str | None = None
    access_token: str | None = None
    refresh_token: str | None = None
    expiry_date: datetime | None = None
    max_pages: int | None = None
    timeout: float = 30.0
    lock: threading.RLock = field(
        default_factory=threading.RLock, repr=False, compare=False
    )

    @classmethod
    def from_env(cls, prefix: str = "PLENTY_", dotenv: bool = True) -> Config:
        """Build a context from ``<prefix>SITE_URL``, ``<prefix>API_USER`` etc.

        When ``dotenv`` is true a ``.env`` file in the working directory is
        loaded first. Missing credentials are not an error here; they surface
        as ``NoCredentials`` on the first request.
        """
        if dotenv:
            load_env_file_if_present()

        max_pages = env_value("MAX_PAGES", prefix)
        timeout = env_value("TIMEOUT", prefix)
        config = cls(
            site_url=env_value("SITE_URL", prefix),
            api_user=env_value("API_USER", prefix),
            api_password=env_value("API_PASSWORD", prefix),
            max_pages=int(max_pages) if max_pages else None,
            timeout=float(timeout) if timeout else 30.0,
        )
        logger.debug(f"Loaded configuration for {config.site_url} from environment")
        return config

    def has_credentials(self) -> bool:
        return bool(self.api_user) and bool(self.api_password)

    def is_authenticated(self, now: datetime | None = None) -> bool:
        """True when a full token triple is present and not yet expired."""
        if not (self.access_token and self.refresh_token and self.expiry_date):
            return False
        if now is None:
            # naive expiry dates are taken as local time
            now = datetime.now() if self.expiry_date.tzinfo is None else datetime.now(timezone.utc)
        return self.expiry_date > now

    def set_tokens(self, access_token: str, refresh_token: str, expiry_date: datetime) -> None:
        with self.lock:
            self.access_token = access_token
            self.refresh_token = refresh_token
            self.expiry_date = expiry_date

    def clear_tokens(self) -> None:
        with self.lock:
            self.access_token = None
            self.refresh_token = None
            self.expiry_date = None
