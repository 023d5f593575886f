"""Client settings loaded from environment variables, and the Configuration
object that every client is constructed with."""

from functools import lru_cache

from pydantic_settings import BaseSettings

from dadata.errors import ConfigurationError
from dadata.logging.secure import get_logger, wrap_logger

SUGGESTIONS_COUNT = 10
TIMEOUT_SEC = 3
MAX_SUGGESTIONS = 20


class Settings(BaseSettings):
    # Credentials
    api_key: str = ""
    secret_key: str = ""  # Empty = no X-Secret header

    # Request behaviour
    timeout_sec: float = TIMEOUT_SEC
    suggestions_count: int = SUGGESTIONS_COUNT

    # Connection pool
    connection_pool_size: int = 25
    connection_pool_timeout: float = 5

    # Logging
    log_level: str = "INFO"
    log_file: str = ""  # Empty = stdout only

    model_config = {"env_prefix": "DADATA_", "env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()


class Configuration:
    """Credentials and request options shared by the clients built from it.

    Setters re-validate the value they receive; ``validate()`` checks the
    whole object and is called by every pipeline before it is used.
    """

    def __init__(
        self,
        api_key: str | None = None,
        secret_key: str | None = None,
        timeout_sec: float = TIMEOUT_SEC,
        suggestions_count: int = SUGGESTIONS_COUNT,
        logger=None,
        connection_pool_size: int = 25,
        connection_pool_timeout: float = 5,
    ):
        self.api_key = api_key
        self.secret_key = secret_key or None
        self._timeout_sec = TIMEOUT_SEC
        self._suggestions_count = SUGGESTIONS_COUNT
        self.timeout_sec = timeout_sec
        self.suggestions_count = suggestions_count
        self.connection_pool_size = connection_pool_size
        self.connection_pool_timeout = connection_pool_timeout
        self.logger = logger if logger is not None else get_logger()

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **overrides) -> "Configuration":
        """Build a configuration from environment settings plus explicit overrides."""
        settings = settings or get_settings()
        options = {
            "api_key": settings.api_key,
            "secret_key": settings.secret_key,
            "timeout_sec": settings.timeout_sec,
            "suggestions_count": settings.suggestions_count,
            "connection_pool_size": settings.connection_pool_size,
            "connection_pool_timeout": settings.connection_pool_timeout,
        }
        options.update(overrides)
        return cls(**options)

    @property
    def timeout_sec(self) -> float:
        return self._timeout_sec

    @timeout_sec.setter
    def timeout_sec(self, value: float) -> None:
        if value is None:
            return
        if value <= 0:
            raise ConfigurationError("Timeout must be positive")
        self._timeout_sec = value

    @property
    def suggestions_count(self) -> int:
        return self._suggestions_count

    @suggestions_count.setter
    def suggestions_count(self, value: int) -> None:
        """Values above MAX_SUGGESTIONS are capped rather than rejected."""
        if value is None:
            return
        if value < 1:
            raise ConfigurationError(f"Suggestions count must be between 1 and {MAX_SUGGESTIONS}")
        self._suggestions_count = min(value, MAX_SUGGESTIONS)

    @property
    def logger(self):
        return self._logger

    @logger.setter
    def logger(self, value) -> None:
        self._logger = wrap_logger(value)

    def validate(self) -> "Configuration":
        if self.timeout_sec <= 0:
            raise ConfigurationError("Timeout must be positive")
        if not 1 <= self.suggestions_count <= MAX_SUGGESTIONS:
            raise ConfigurationError(f"Suggestions count must be between 1 and {MAX_SUGGESTIONS}")
        if self.api_key is None or not self.api_key.strip():
            raise ConfigurationError("API key can't be blank")
        return self

    def __repr__(self) -> str:
        # Credentials stay out of reprs that may end up in logs
        return (
            f"Configuration(timeout_sec={self.timeout_sec}, "
            f"suggestions_count={self.suggestions_count}, "
            f"secret_key={'set' if self.secret_key else 'unset'})"
        )
