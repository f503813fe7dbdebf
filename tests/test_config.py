"""Tests for configuration providers and settings loading."""

from __future__ import annotations

import pytest

from mqjwtexit.config import (
    EnvironmentConfigProvider,
    MappingConfigProvider,
    load_settings,
    resolve_token_request,
)
from mqjwtexit.exceptions import ConfigError


# ---------------------------------------------------------------------------
# Providers
# ---------------------------------------------------------------------------


class TestProviders:
    def test_environment_provider(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JWT_TOKEN_ENDPOINT", "https://issuer/token")

        assert EnvironmentConfigProvider().get("JWT_TOKEN_ENDPOINT") == "https://issuer/token"

    def test_environment_provider_unset(self) -> None:
        assert EnvironmentConfigProvider().get("JWT_TOKEN_ENDPOINT") is None

    def test_mapping_provider(self) -> None:
        provider = MappingConfigProvider({"A": "1"})

        assert provider.get("A") == "1"
        assert provider.get("B") is None

    def test_mapping_provider_copies_input(self) -> None:
        values = {"A": "1"}
        provider = MappingConfigProvider(values)
        values["A"] = "2"

        assert provider.get("A") == "1"


# ---------------------------------------------------------------------------
# resolve_token_request
# ---------------------------------------------------------------------------


class TestResolveTokenRequest:
    def test_all_values_present(self, config_provider: MappingConfigProvider) -> None:
        config = resolve_token_request(config_provider)

        assert config.endpoint == "http://stub/token"
        assert config.client_id == "cid"
        assert config.username == "u"
        assert config.password == "p"
        assert config.missing == ()

    def test_absent_values_become_empty(self) -> None:
        config = resolve_token_request(
            MappingConfigProvider({"JWT_TOKEN_USERNAME": "u"})
        )

        assert config.endpoint == ""
        assert config.client_id == ""
        assert config.username == "u"
        assert config.password == ""
        assert config.missing == (
            "JWT_TOKEN_ENDPOINT",
            "JWT_TOKEN_CLIENTID",
            "JWT_TOKEN_PWD",
        )

    def test_empty_string_is_not_missing(self) -> None:
        config = resolve_token_request(MappingConfigProvider({
            "JWT_TOKEN_ENDPOINT": "http://stub/token",
            "JWT_TOKEN_CLIENTID": "",
            "JWT_TOKEN_USERNAME": "u",
            "JWT_TOKEN_PWD": "p",
        }))

        assert config.client_id == ""
        assert config.missing == ()

    def test_reads_environment(self, token_env: dict[str, str]) -> None:
        config = resolve_token_request(EnvironmentConfigProvider())

        assert config.form_body() == "client_id=cid&username=u&password=p&grant_type=password"


# ---------------------------------------------------------------------------
# load_settings
# ---------------------------------------------------------------------------


class TestLoadSettings:
    def test_defaults(self) -> None:
        settings = load_settings(MappingConfigProvider({}))

        assert settings.timeout == 30.0
        assert settings.verify_ssl is True

    def test_timeout(self) -> None:
        settings = load_settings(MappingConfigProvider({"JWT_TOKEN_TIMEOUT": "5"}))

        assert settings.timeout == 5.0

    @pytest.mark.parametrize("value", ["0", "-1", "soon"])
    def test_invalid_timeout(self, value: str) -> None:
        with pytest.raises(ConfigError, match="Invalid exit settings"):
            load_settings(MappingConfigProvider({"JWT_TOKEN_TIMEOUT": value}))

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("false", False), ("0", False), ("No", False), ("true", True), ("YES", True)],
    )
    def test_verify_ssl(self, value: str, expected: bool) -> None:
        settings = load_settings(MappingConfigProvider({"JWT_TOKEN_VERIFY_SSL": value}))

        assert settings.verify_ssl is expected

    def test_invalid_verify_ssl(self) -> None:
        with pytest.raises(ConfigError, match="JWT_TOKEN_VERIFY_SSL"):
            load_settings(MappingConfigProvider({"JWT_TOKEN_VERIFY_SSL": "maybe"}))
