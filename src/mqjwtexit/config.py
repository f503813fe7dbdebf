"""Process-wide configuration for the security exit.

The exit is configured entirely through environment variables set on the
process that hosts the channel:

==========================  =============================================
Variable                    Meaning
==========================  =============================================
``JWT_TOKEN_ENDPOINT``      Token issuer URL (password grant)
``JWT_TOKEN_CLIENTID``      OAuth2 client id
``JWT_TOKEN_USERNAME``      Resource owner user name
``JWT_TOKEN_PWD``           Resource owner password
``JWT_TOKEN_TIMEOUT``       Optional request timeout in seconds (default 30)
``JWT_TOKEN_VERIFY_SSL``    Optional TLS verification switch (default true)
==========================  =============================================

Lookups go through a :class:`ConfigProvider` so tests and embedding hosts can
supply values without touching ``os.environ``.
"""

from __future__ import annotations

import os
from typing import Mapping, Optional, Protocol

from pydantic import ValidationError

from mqjwtexit.exceptions import ConfigError
from mqjwtexit.models import ExitSettings, TokenRequestConfig

ENV_TOKEN_ENDPOINT = "JWT_TOKEN_ENDPOINT"
ENV_TOKEN_CLIENTID = "JWT_TOKEN_CLIENTID"
ENV_TOKEN_USERNAME = "JWT_TOKEN_USERNAME"
ENV_TOKEN_PWD = "JWT_TOKEN_PWD"
ENV_TOKEN_TIMEOUT = "JWT_TOKEN_TIMEOUT"
ENV_TOKEN_VERIFY_SSL = "JWT_TOKEN_VERIFY_SSL"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigProvider(Protocol):
    """Source of named configuration values."""

    def get(self, name: str) -> Optional[str]:
        """Return the value for *name*, or ``None`` when it is not set."""
        ...


class EnvironmentConfigProvider:
    """Reads configuration from the process environment on every lookup."""

    def get(self, name: str) -> Optional[str]:
        return os.environ.get(name)


class MappingConfigProvider:
    """Serves configuration from a fixed mapping."""

    def __init__(self, values: Mapping[str, str]) -> None:
        self._values = dict(values)

    def get(self, name: str) -> Optional[str]:
        return self._values.get(name)


def resolve_token_request(provider: ConfigProvider) -> TokenRequestConfig:
    """Resolve the token endpoint and credentials for one fetch.

    No fallback values are applied: an unset variable becomes an empty
    string and its name is recorded in
    :attr:`~mqjwtexit.models.TokenRequestConfig.missing`.

    Args:
        provider: Where to look the values up.

    Returns:
        A :class:`~mqjwtexit.models.TokenRequestConfig` snapshot.
    """
    names = {
        "endpoint": ENV_TOKEN_ENDPOINT,
        "client_id": ENV_TOKEN_CLIENTID,
        "username": ENV_TOKEN_USERNAME,
        "password": ENV_TOKEN_PWD,
    }
    values: dict[str, str] = {}
    missing: list[str] = []
    for field_name, env_name in names.items():
        value = provider.get(env_name)
        if value is None:
            missing.append(env_name)
            value = ""
        values[field_name] = value
    return TokenRequestConfig(**values, missing=tuple(missing))


def load_settings(provider: ConfigProvider) -> ExitSettings:
    """Build :class:`~mqjwtexit.models.ExitSettings` from optional variables.

    Args:
        provider: Where to look the values up.

    Returns:
        The HTTP settings, with defaults for anything unset.

    Raises:
        ConfigError: If a value is set but cannot be parsed.
    """
    raw: dict[str, object] = {}

    timeout = provider.get(ENV_TOKEN_TIMEOUT)
    if timeout:
        raw["timeout"] = timeout

    verify = provider.get(ENV_TOKEN_VERIFY_SSL)
    if verify:
        raw["verify_ssl"] = _parse_bool(ENV_TOKEN_VERIFY_SSL, verify)

    try:
        return ExitSettings.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid exit settings: {exc}") from exc


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean (true/false), got '{value}'")
