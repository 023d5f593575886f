"""Standardization ("cleaning") of addresses, names, phones and records."""

from dadata.clients.base import EndpointClient, pluck
from dadata.transport.base import POST


class CleanClient(EndpointClient):
    BASE_URL = "https://cleaner.dadata.ru/api/v1/"

    def clean(self, name: str, source: str):
        """Standardize a single value.

        Args:
            name: address, phone, passport, name, email, birthdate, vehicle
                or simple_party_name.
            source: Raw value to standardize.

        Returns:
            The standardized object, or None if the service returned nothing.
        """
        response = self.submit(f"clean/{name}", [source], POST)
        if not isinstance(response, list) or not response:
            return None
        return response[0]

    def clean_record(self, structure: list[str], record: list[str]):
        """Standardize a composite record; ``record`` follows ``structure`` order."""
        response = self.submit("clean", {"structure": structure, "data": [record]}, POST)
        data = pluck(response, "data")
        if not data:
            return None
        return data[0]
