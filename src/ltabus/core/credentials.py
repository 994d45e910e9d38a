from collections.abc import Mapping
from typing import Protocol

from ltabus.core.config import Settings, get_settings
from ltabus.core.errors import ConfigError

API_KEY_NAME = "LTA_API_KEY"


class CredentialSource(Protocol):
    def get(self, name: str) -> str:
        """Return the named credential or raise ``ConfigError``."""
        ...


def _require(name: str, value: str | None) -> str:
    if value is None or not value.strip():
        raise ConfigError(f"{name} is not configured; add it to the environment or .env file")
    return value.strip()


class SettingsCredentialSource:
    """Credentials loaded by pydantic-settings from the environment and ``.env``."""

    _fields = {API_KEY_NAME: "lta_api_key"}

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def get(self, name: str) -> str:
        field = self._fields.get(name)
        value = getattr(self.settings, field) if field else None
        return _require(name, value)


class StaticCredentialSource:
    def __init__(self, values: Mapping[str, str]) -> None:
        self._values = dict(values)

    def get(self, name: str) -> str:
        return _require(name, self._values.get(name))
