"""Shared test fixtures for mqjwtexit.

Provides reusable fixtures for token endpoint configuration and logging
state isolation.
These fixtures are automatically discovered by pytest and available to all
test modules without explicit imports.
"""

from __future__ import annotations

import socket
from typing import Iterator

import pytest

from mqjwtexit.config import (
    ENV_TOKEN_CLIENTID,
    ENV_TOKEN_ENDPOINT,
    ENV_TOKEN_PWD,
    ENV_TOKEN_USERNAME,
    MappingConfigProvider,
)
from mqjwtexit.output import reset_logging


STUB_ENDPOINT = "http://stub/token"


# ---------------------------------------------------------------------------
# Auto-reset global logging state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_logging_between_tests() -> None:
    """Remove the Rich handler after every test.

    ``DEBUG`` exit data installs a handler on the package logger; leaving it
    in place would leak debug output and levels into later tests.
    """
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_token_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make sure no real JWT_TOKEN_* variables leak into tests."""
    for var in [
        ENV_TOKEN_ENDPOINT,
        ENV_TOKEN_CLIENTID,
        ENV_TOKEN_USERNAME,
        ENV_TOKEN_PWD,
        "JWT_TOKEN_TIMEOUT",
        "JWT_TOKEN_VERIFY_SSL",
    ]:
        monkeypatch.delenv(var, raising=False)


# ---------------------------------------------------------------------------
# Configuration fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def token_values() -> dict[str, str]:
    """The complete set of token endpoint settings."""
    return {
        ENV_TOKEN_ENDPOINT: STUB_ENDPOINT,
        ENV_TOKEN_CLIENTID: "cid",
        ENV_TOKEN_USERNAME: "u",
        ENV_TOKEN_PWD: "p",
    }


@pytest.fixture
def config_provider(token_values: dict[str, str]) -> MappingConfigProvider:
    """A config provider serving :func:`token_values`."""
    return MappingConfigProvider(token_values)


@pytest.fixture
def token_env(token_values: dict[str, str], monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Export :func:`token_values` into the process environment."""
    for name, value in token_values.items():
        monkeypatch.setenv(name, value)
    return token_values



@pytest.fixture
def hung_endpoint() -> Iterator[str]:
    """URL of a local socket that accepts connections but never answers."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
        server.bind(("127.0.0.1", 0))
        server.listen(8)
        host, port = server.getsockname()
        yield f"http://{host}:{port}/token"
