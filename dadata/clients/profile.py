"""Account queries: balance, daily usage and reference data versions."""

from datetime import date, datetime

from dadata.clients.base import EndpointClient, pluck
from dadata.transport.base import GET


def _resolve_date(value) -> date:
    """Accept a date, datetime or ISO string; anything unparseable means today."""
    if value is None:
        return date.today()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        return date.today()


class ProfileClient(EndpointClient):
    BASE_URL = "https://dadata.ru/api/v2/"

    def balance(self):
        return pluck(self.submit("profile/balance", {}, GET), "balance")

    def daily_stats(self, day=None):
        return self.submit("stat/daily", {"date": _resolve_date(day).isoformat()}, GET)

    def versions(self):
        return self.submit("version", {}, GET)
