"""OAuth2 Resource Owner Password Credentials token provider.

This module provides :class:`PasswordGrantTokenProvider`, which performs
the password grant (:rfc:`6749` section 4.3): a single form POST carrying a
``client_id``, ``username`` and ``password`` to the token issuer, answered
by a JSON document whose ``access_token`` is used as the channel's bearer
token.

The endpoint and credentials are read from configuration on every fetch.
Nothing is cached: each handshake gets its own freshly issued token.

See Also:
    :class:`mqjwtexit.auth.base.TokenProvider` for the base interface.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from mqjwtexit.auth.base import TokenProvider
from mqjwtexit.config import (
    ConfigProvider,
    EnvironmentConfigProvider,
    load_settings,
    resolve_token_request,
)
from mqjwtexit.exceptions import MalformedResponse, NetworkFailure
from mqjwtexit.models import ExitSettings, TokenRequestConfig, TokenResponse

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class PasswordGrantTokenProvider(TokenProvider):
    """Fetch a bearer token with the OAuth2 password grant.

    Args:
        config_provider: Source of the ``JWT_TOKEN_*`` values. Defaults to
            the process environment.
        settings: HTTP settings. Defaults to :func:`~mqjwtexit.config.load_settings`
            applied to *config_provider*.
        strict: When ``True``, refuse to send a request if any endpoint or
            credential value is unset. By default absent values are sent
            as empty strings.
        transport: Optional :class:`httpx.BaseTransport`, used by tests to
            stub the token issuer.

    Raises:
        ConfigError: If the optional HTTP settings cannot be parsed.
    """

    def __init__(
        self,
        config_provider: Optional[ConfigProvider] = None,
        settings: Optional[ExitSettings] = None,
        strict: bool = False,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config_provider = config_provider or EnvironmentConfigProvider()
        self._settings = settings or load_settings(self._config_provider)
        self._strict = strict
        self._transport = transport

    @property
    def grant_type(self) -> str:
        return "password"

    @property
    def settings(self) -> ExitSettings:
        return self._settings

    def fetch_token(self) -> str:
        """Request a token from the configured issuer.

        Returns:
            The ``access_token`` string from the issuer's response.

        Raises:
            ConfigurationMissing: In strict mode, if a value is unset.
            NetworkFailure: If the request cannot be sent or no response
                arrives, including an absent or malformed endpoint URL.
            MalformedResponse: If the body is not a JSON object with a
                string ``access_token``.
        """
        request_config = resolve_token_request(self._config_provider)
        self._check_config(request_config)

        logger.info(
            "Obtaining token from endpoint '%s' with user '%s'",
            request_config.endpoint,
            request_config.username,
        )
        response = self._post(request_config)
        logger.debug("Token endpoint answered with status %d", response.status_code)

        token = self._parse_token(response)
        logger.info("Obtained token from endpoint '%s'", request_config.endpoint)
        logger.debug("Using token: %s", token)
        return token

    def _check_config(self, request_config: TokenRequestConfig) -> None:
        if request_config.missing:
            if self._strict:
                request_config.require_complete()
            logger.warning(
                "Token configuration not set, sending empty values for: %s",
                ", ".join(request_config.missing),
            )
        unsafe = request_config.unsafe_fields()
        if unsafe:
            logger.warning(
                "Credential values are sent without form encoding and contain "
                "reserved characters in: %s",
                ", ".join(unsafe),
            )

    def _post(self, request_config: TokenRequestConfig) -> httpx.Response:
        """POST the password-grant form body to the token endpoint.

        Raises:
            NetworkFailure: On any transport error, an unusable URL, or credentials
                that cannot be encoded into the request body.
        """
        try:
            body = request_config.form_body().encode("utf-8")
        except UnicodeEncodeError as exc:
            raise NetworkFailure(
                f"Token request body cannot be encoded as UTF-8: {exc.reason}"
            ) from exc

        try:
            with httpx.Client(
                timeout=self._settings.timeout,
                verify=self._settings.verify_ssl,
                transport=self._transport,
            ) as client:
                return client.post(
                    request_config.endpoint,
                    content=body,
                    headers={"Content-Type": FORM_CONTENT_TYPE},
                )
        except httpx.InvalidURL as exc:
            raise NetworkFailure(
                f"Invalid token endpoint '{request_config.endpoint}': {exc}"
            ) from exc
        except httpx.HTTPError as exc:
            raise NetworkFailure(
                f"Token request to '{request_config.endpoint}' failed: {exc}"
            ) from exc

    def _parse_token(self, response: httpx.Response) -> str:
        """Extract ``access_token`` from the response body.

        Raises:
            MalformedResponse: If the body is not a JSON object holding a
                string ``access_token``.
        """
        try:
            payload: Any = response.json()
        except (ValueError, RecursionError) as exc:
            raise MalformedResponse(
                f"Token response (status {response.status_code}) is not valid JSON: {exc}"
            ) from exc

        if not isinstance(payload, dict):
            raise MalformedResponse(
                f"Token response (status {response.status_code}) is not a JSON object"
            )

        try:
            return TokenResponse.model_validate(payload).access_token
        except ValidationError as exc:
            raise MalformedResponse(
                f"Token response (status {response.status_code}) has no string "
                f"'access_token' field"
            ) from exc
