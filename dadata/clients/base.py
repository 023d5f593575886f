"""Shared plumbing for the per-area endpoint clients."""

from collections.abc import Mapping

import httpx

from dadata.config.settings import MAX_SUGGESTIONS, Configuration
from dadata.transport.pipeline import RequestPipeline


def build_payload(required: dict, options: dict | None = None, extra: Mapping | None = None) -> dict:
    """Merge required fields, the options that were set, then ``extra`` last."""
    payload = dict(required)
    if options:
        payload.update({key: value for key, value in options.items() if value is not None})
    if extra:
        payload.update(extra)
    return payload


def pluck(body, key: str):
    """Return ``body[key]`` for a JSON object body, None otherwise."""
    if isinstance(body, dict):
        return body.get(key)
    return None


class EndpointClient:
    """Base class for one API area; owns the pipeline for its base URL."""

    BASE_URL: str = ""

    def __init__(self, config: Configuration, transport: httpx.BaseTransport | None = None):
        self.config = config
        self._pipeline = RequestPipeline(self.BASE_URL, config, transport=transport)

    def submit(self, path: str, payload=None, method: str = "GET", timeout: float | None = None):
        return self._pipeline.submit(path, payload, method, timeout)

    def _count(self, count: int | None) -> int:
        if count is None:
            count = self.config.suggestions_count
        return min(count, MAX_SUGGESTIONS)

    def close(self) -> None:
        self._pipeline.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
