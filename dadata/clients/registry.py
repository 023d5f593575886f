"""Process-wide default client, offered as a convenience at the API surface.

Nothing below this module reads the default; clients and pipelines always
receive their Configuration explicitly.
"""

from dadata.clients.client import Client
from dadata.config.settings import Configuration

_default: dict[str, object] = {}


def configure(**options) -> Configuration:
    """Build the default configuration from environment settings plus ``options``.

    Any previously created default client is closed so that the next
    get_default_client() call picks up the new configuration.
    """
    config = Configuration.from_settings(**options).validate()
    close_default_client()
    _default["config"] = config
    return config


def get_default_client() -> Client:
    """Get or create the default client."""
    if "client" in _default:
        return _default["client"]

    config = _default.get("config")
    if config is None:
        config = configure()
    _default["client"] = Client(config)
    return _default["client"]


def close_default_client() -> None:
    """Close the default client; the default configuration is kept."""
    client = _default.pop("client", None)
    if client is not None:
        client.close()
