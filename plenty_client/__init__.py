"""Small client for the plentymarkets REST API.

This package provides:
- A client context (site URL, credentials, tokens) loadable from environment/.env
- Login on demand with a single retry after a 401
- Page iteration helpers for list endpoints
- Endpoint tables built on path templates
"""

from plenty_client.client import AuthorizationFailed, PlentyClient
from plenty_client.config import Config, InvalidCredentials, NoCredentials, PlentyClientError
from plenty_client.endpoint import UnresolvedPlaceholder, build_endpoint
from plenty_client.pagination import Page, PaginationLimitExceeded

__all__ = [
    "AuthorizationFailed",
    "Config",
    "InvalidCredentials",
    "NoCredentials",
    "Page",
    "PaginationLimitExceeded",
    "PlentyClient",
    "PlentyClientError",
    "UnresolvedPlaceholder",
    "build_endpoint",
]
