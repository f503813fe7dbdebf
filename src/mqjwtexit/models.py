"""Canonical Pydantic models shared across all mqjwtexit modules.

The models fall into two groups:

**Handshake models** -- exchanged with the host transport:
    :class:`LifecycleEvent`, :class:`AuthenticationType`, and
    :class:`SecurityParameters`.

**Token exchange models** -- used by the token provider for a single fetch:
    :class:`TokenRequestConfig`, :class:`TokenResponse`, and
    :class:`ExitSettings`.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from mqjwtexit.exceptions import ConfigurationMissing

TOKEN_AUTH_VERSION = 3
"""Security parameters version required by the transport for token authentication."""

RESERVED_FORM_CHARS = frozenset("&=+%# ")
"""Characters that change the meaning of an unencoded form body."""


# --- Handshake ---


class LifecycleEvent(str, enum.Enum):
    """Handshake phases at which the host transport invokes a security exit."""

    INIT = "init"
    INIT_SECURITY = "init_security"
    SECURITY_PARAMS_REQUESTED = "security_params_requested"
    TERMINATE = "terminate"

    @classmethod
    def from_reason(cls, reason: str) -> Optional[LifecycleEvent]:
        """Map an MQ exit reason name (``MQXR_*``) or event value to an event.

        Args:
            reason: Either an ``MQXR_*`` constant name such as
                ``"MQXR_SEC_PARMS"`` or a member value such as ``"init"``.

        Returns:
            The matching :class:`LifecycleEvent`, or ``None`` for reasons
            this exit does not handle (``MQXR_SEC_MSG``, ``MQXR_XMIT``, ...).
        """
        mapped = _MQ_EXIT_REASONS.get(reason.upper())
        if mapped is not None:
            return mapped
        try:
            return cls(reason.lower())
        except ValueError:
            return None


_MQ_EXIT_REASONS: dict[str, LifecycleEvent] = {
    "MQXR_INIT": LifecycleEvent.INIT,
    "MQXR_INIT_SEC": LifecycleEvent.INIT_SECURITY,
    "MQXR_SEC_PARMS": LifecycleEvent.SECURITY_PARAMS_REQUESTED,
    "MQXR_TERM": LifecycleEvent.TERMINATE,
}


class AuthenticationType(enum.IntEnum):
    """Authentication type tags carried in the security parameters (``MQCSP_AUTH_*``)."""

    NONE = 0
    USER_ID_AND_PWD = 1
    ID_TOKEN = 2


class SecurityParameters(BaseModel):
    """Mutable security parameters record owned by the host transport.

    The exit writes ``authentication_type``, ``version`` and ``token`` during
    :attr:`LifecycleEvent.SECURITY_PARAMS_REQUESTED`; every other field is
    left as the host supplied it.
    """

    model_config = ConfigDict(validate_assignment=True)

    authentication_type: AuthenticationType = Field(
        default=AuthenticationType.NONE, description="Authentication type tag"
    )
    version: int = Field(default=1, ge=1, description="Security parameters version")
    token: str = Field(default="", description="Opaque bearer token")
    user_id: str = Field(default="", description="Static user id, unused for token auth")
    password: str = Field(default="", description="Static password, unused for token auth")

    @property
    def token_length(self) -> int:
        return len(self.token)

    def __repr__(self) -> str:
        return (
            f"SecurityParameters(authentication_type={self.authentication_type.name}, "
            f"version={self.version}, token_length={self.token_length})"
        )


# --- Token exchange ---


class TokenRequestConfig(BaseModel):
    """Token endpoint and credentials resolved for a single fetch.

    Values are taken verbatim from configuration. Absent values are kept as
    empty strings; :attr:`missing` records which ones were absent so the
    provider can report them.
    """

    model_config = ConfigDict(frozen=True)

    endpoint: str = ""
    client_id: str = ""
    username: str = ""
    password: str = ""
    missing: tuple[str, ...] = Field(
        default=(), description="Configuration names that were not set"
    )

    def form_body(self) -> str:
        """Build the password-grant form body.

        Field values are concatenated without percent-encoding so the body
        matches byte for byte what existing token issuers were configured
        against.

        Returns:
            ``client_id=<id>&username=<user>&password=<pass>&grant_type=password``
        """
        return (
            f"client_id={self.client_id}&username={self.username}"
            f"&password={self.password}&grant_type=password"
        )

    def unsafe_fields(self) -> list[str]:
        """Return the names of credential fields holding reserved form characters."""
        fields = {
            "client_id": self.client_id,
            "username": self.username,
            "password": self.password,
        }
        return [
            name for name, value in fields.items()
            if any(ch in RESERVED_FORM_CHARS for ch in value)
        ]

    def require_complete(self) -> None:
        """Raise if any configuration value was absent.

        Raises:
            ConfigurationMissing: Listing every missing configuration name.
        """
        if self.missing:
            raise ConfigurationMissing(
                f"Token configuration is incomplete, missing: {', '.join(self.missing)}"
            )

    def __repr__(self) -> str:
        return (
            f"TokenRequestConfig(endpoint='{self.endpoint}', "
            f"client_id='{self.client_id}', username='{self.username}')"
        )


class TokenResponse(BaseModel):
    """Parsed token endpoint response. Only ``access_token`` is retained."""

    model_config = ConfigDict(extra="ignore")

    access_token: StrictStr


class ExitSettings(BaseModel):
    """HTTP settings applied to every token request."""

    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify the issuer's TLS certificate")
