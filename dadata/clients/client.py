"""Single entry point bundling the cleaning, suggestions and profile clients."""

from collections.abc import Mapping
from contextlib import contextmanager

import httpx

from dadata.clients.clean import CleanClient
from dadata.clients.profile import ProfileClient
from dadata.clients.suggest import SuggestClient
from dadata.config.settings import Configuration
from dadata.security.redaction import sanitize_message


class Client:
    """Facade over every API area, sharing one Configuration.

    Failures are logged with the operation name and re-raised unchanged,
    so callers can still tell ApiError, DadataConnectionError and
    ConfigurationError apart.
    """

    def __init__(self, config: Configuration | None = None, transport: httpx.BaseTransport | None = None):
        self.config = config if config is not None else Configuration.from_settings()
        self._cleaner = CleanClient(self.config, transport=transport)
        self._suggestions = SuggestClient(self.config, transport=transport)
        self._profile = ProfileClient(self.config, transport=transport)

    @contextmanager
    def _log_errors(self, operation: str):
        try:
            yield
        except Exception as exc:
            self.config.logger.error("Error %s: %s", operation, sanitize_message(str(exc)))
            raise

    def clean(self, name: str, source: str):
        with self._log_errors(f"cleaning {name}"):
            return self._cleaner.clean(name, source)

    def clean_record(self, structure: list[str], record: list[str]):
        with self._log_errors("cleaning record"):
            return self._cleaner.clean_record(structure, record)

    def geolocate(self, name: str, lat: float, lon: float, radius_meters: int = 100, **options):
        with self._log_errors("geolocating"):
            return self._suggestions.geolocate(name, lat, lon, radius_meters, **options)

    def iplocate(self, ip: str, **options):
        with self._log_errors("iplocating"):
            return self._suggestions.iplocate(ip, **options)

    def suggest(self, name: str, query: str, count: int | None = None, **options):
        with self._log_errors("suggesting"):
            return self._suggestions.suggest(name, query, count, **options)

    def find_by_id(self, name: str, query: str, count: int | None = None, **options):
        with self._log_errors("finding by id"):
            return self._suggestions.find_by_id(name, query, count, **options)

    def find_by_email(self, query: str):
        with self._log_errors("finding by email"):
            return self._suggestions.find_by_email(query)

    def find_affiliated(
        self,
        query: str,
        count: int | None = None,
        *,
        scope: list[str] | None = None,
        extra: Mapping | None = None,
    ):
        with self._log_errors("finding affiliated"):
            return self._suggestions.find_affiliated(query, count, scope=scope, extra=extra)

    def balance(self):
        with self._log_errors("getting balance"):
            return self._profile.balance()

    def daily_stats(self, day=None):
        with self._log_errors("getting daily stats"):
            return self._profile.daily_stats(day)

    def versions(self):
        with self._log_errors("getting versions"):
            return self._profile.versions()

    def close(self) -> None:
        with self._log_errors("closing client"):
            self._cleaner.close()
            self._suggestions.close()
            self._profile.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
