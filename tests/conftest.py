"""Shared fixtures for the DaData client test suite."""

import io
import logging

import httpx
import pytest

import dadata.transport.pipeline as pipeline_mod
from dadata.config.settings import Configuration, get_settings
from dadata.transport.retry import build_retrying

API_KEY = "test_token"
SECRET_KEY = "test_secret"


class ScriptedTransport(httpx.BaseTransport):
    """Replays a fixed script of outcomes, recording every request.

    An outcome is an httpx.Response or an httpx exception class, which is
    raised for that attempt. The last outcome repeats once the script runs out.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.requests: list[httpx.Request] = []

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, type) and issubclass(outcome, httpx.TransportError):
            raise outcome(f"Authorization: Token {API_KEY}, X-Secret: {SECRET_KEY}", request=request)
        return outcome


@pytest.fixture(autouse=True)
def no_retry_sleep(monkeypatch):
    """Keep the retry policy but skip its backoff sleeps."""
    monkeypatch.setattr(pipeline_mod, "build_retrying", lambda: build_retrying(sleep=lambda _: None))


@pytest.fixture
def log_output():
    """A logger writing plain messages into a StringIO; yields the stream."""
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    logger = logging.getLogger("dadata.tests")
    logger.setLevel(logging.DEBUG)
    logger.addHandler(handler)
    logger.propagate = False
    yield stream
    logger.removeHandler(handler)


@pytest.fixture
def config(log_output) -> Configuration:
    return Configuration(
        api_key=API_KEY,
        secret_key=SECRET_KEY,
        logger=logging.getLogger("dadata.tests"),
    )


@pytest.fixture
def override_settings(monkeypatch):
    """Factory fixture: set DADATA_* env vars and clear settings cache.

    Usage:
        override_settings(API_KEY="key", TIMEOUT_SEC=5)
    """
    def _override(**kwargs):
        for key, value in kwargs.items():
            monkeypatch.setenv(f"DADATA_{key.upper()}", str(value))
        # Clear lru_cache so Settings re-reads env
        get_settings.cache_clear()

    yield _override

    # Always clear cache on teardown so other tests get fresh settings
    get_settings.cache_clear()


def json_response(body, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=body)
