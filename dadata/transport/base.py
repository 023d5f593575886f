"""Value objects for a single exchange with the DaData API."""

from dataclasses import dataclass, field
from typing import Any

GET = "GET"
POST = "POST"


@dataclass(frozen=True)
class Request:
    path: str
    payload: Any = field(default_factory=dict)  # Mapping for GET (query), mapping or list for POST
    method: str = GET
    timeout_sec: float | None = None  # None = configuration default

    @property
    def is_query(self) -> bool:
        """GET sends the payload as query parameters; everything else as a JSON body."""
        return self.method == GET


@dataclass(frozen=True)
class Response:
    status_code: int
    body: Any = None  # Parsed JSON, raw text, or None for an empty body

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300
