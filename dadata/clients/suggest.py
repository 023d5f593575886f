"""Autocomplete suggestions, lookups by identifier, and geolocation."""

from collections.abc import Mapping

from dadata.clients.base import EndpointClient, build_payload, pluck
from dadata.transport.base import GET, POST


class SuggestClient(EndpointClient):
    BASE_URL = "https://suggestions.dadata.ru/suggestions/api/4_1/rs/"

    def geolocate(
        self,
        name: str,
        lat: float,
        lon: float,
        radius_meters: int = 100,
        *,
        count: int | None = None,
        language: str | None = None,
        extra: Mapping | None = None,
    ):
        """Reverse geocoding: addresses (or postal units) near a point.

        ``radius_meters`` is capped server-side at 1000.
        """
        payload = build_payload(
            {"lat": lat, "lon": lon, "radius_meters": radius_meters},
            {"count": None if count is None else self._count(count), "language": language},
            extra,
        )
        return pluck(self.submit(f"geolocate/{name}", payload, POST), "suggestions")

    def iplocate(self, ip: str, *, language: str | None = None, extra: Mapping | None = None):
        payload = build_payload({"ip": ip}, {"language": language}, extra)
        return pluck(self.submit("iplocate/address", payload, GET), "location")

    def suggest(
        self,
        name: str,
        query: str,
        count: int | None = None,
        *,
        language: str | None = None,
        filters: list | None = None,
        extra: Mapping | None = None,
    ):
        payload = build_payload(
            {"query": query, "count": self._count(count)},
            {"language": language, "filters": filters},
            extra,
        )
        return pluck(self.submit(f"suggest/{name}", payload, POST), "suggestions")

    def find_by_id(
        self,
        name: str,
        query: str,
        count: int | None = None,
        *,
        kpp: str | None = None,
        branch_type: str | None = None,
        type: str | None = None,
        status: list[str] | None = None,
        language: str | None = None,
        extra: Mapping | None = None,
    ):
        """Lookup by code (INN, OGRN, BIC, FIAS id...).

        ``kpp``, ``branch_type``, ``type`` and ``status`` only apply to ``party``.
        """
        payload = build_payload(
            {"query": query, "count": self._count(count)},
            {
                "kpp": kpp,
                "branch_type": branch_type,
                "type": type,
                "status": status,
                "language": language,
            },
            extra,
        )
        return pluck(self.submit(f"findById/{name}", payload, POST), "suggestions")

    def find_by_email(self, query: str):
        return pluck(self.submit("findByEmail/company", {"query": query}, POST), "suggestions")

    def find_affiliated(
        self,
        query: str,
        count: int | None = None,
        *,
        scope: list[str] | None = None,
        extra: Mapping | None = None,
    ):
        """Companies affiliated through founders or managers (default scope: both)."""
        payload = build_payload(
            {"query": query, "count": self._count(count)},
            {"scope": scope},
            extra,
        )
        return pluck(self.submit("findAffiliated/party", payload, POST), "suggestions")
