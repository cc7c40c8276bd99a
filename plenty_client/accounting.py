"""VAT configuration endpoints (``/vat``)."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from plenty_client.client import PlentyClient
from plenty_client.endpoint import build_endpoint

LIST_VAT_OF_LOCATION = "/vat/locations/{locationId}"
LIST_VAT_OF_COUNTRY = "/vat/locations/{locationId}/countries/{countryId}"
LIST_VAT_CONFIGURATIONS = "/vat"
LIST_VAT_STANDARD = "/vat/standard"

OnPage = Callable[[list[Any]], Any]


class Accounting:
    def __init__(self, client: PlentyClient):
        self.client = client

    def list(self, params: Mapping[str, Any] | None = None, on_page: OnPage | None = None) -> Any:
        return self.client.get(build_endpoint(LIST_VAT_CONFIGURATIONS), params, on_page)

    def list_for_country(
        self,
        location_id: int,
        country_id: int,
        params: Mapping[str, Any] | None = None,
        on_page: OnPage | None = None,
    ) -> Any:
        path = build_endpoint(LIST_VAT_OF_COUNTRY, location=location_id, country=country_id)
        return self.client.get(path, params, on_page)

    def list_for_location(
        self,
        location_id: int,
        params: Mapping[str, Any] | None = None,
        on_page: OnPage | None = None,
    ) -> Any:
        path = build_endpoint(LIST_VAT_OF_LOCATION, location=location_id)
        return self.client.get(path, params, on_page)

    def standard(self, params: Mapping[str, Any] | None = None, on_page: OnPage | None = None) -> Any:
        return self.client.get(build_endpoint(LIST_VAT_STANDARD), params, on_page)
