"""JWT security exit -- inject a freshly issued bearer token into the handshake.

This module provides :class:`JwtSecurityExit`, registered as the ``jwt``
exit. When the transport reaches
:attr:`~mqjwtexit.models.LifecycleEvent.SECURITY_PARAMS_REQUESTED`, the exit
switches the security parameters to token authentication and stores a
token obtained from its :class:`~mqjwtexit.auth.base.TokenProvider`.

Token failures are fail-open: the handshake continues with an empty token
and the failure is only visible in the log. The queue manager then rejects
the connection on its own terms, so the channel negotiation itself never
faults because of the token issuer.

See Also:
    :class:`mqjwtexit.exits.base.SecurityExit` for the base interface.
    :class:`mqjwtexit.auth.password_grant.PasswordGrantTokenProvider` for
    the default token source.
"""

from __future__ import annotations

import logging
from typing import Optional

from mqjwtexit.auth.base import TokenProvider
from mqjwtexit.auth.password_grant import PasswordGrantTokenProvider
from mqjwtexit.exits.base import SecurityExit
from mqjwtexit.models import (
    TOKEN_AUTH_VERSION,
    AuthenticationType,
    LifecycleEvent,
    SecurityParameters,
)
from mqjwtexit.output import enable_debug

logger = logging.getLogger(__name__)

DEBUG_OPTION = "DEBUG"
"""Exit data keyword that turns on debug logging."""


class JwtSecurityExit(SecurityExit):
    """Supply a bearer token as the channel's security parameters.

    The exit holds no per-channel state; each invocation works only on the
    record it is handed.

    Args:
        token_provider: Where tokens come from. Defaults to a
            :class:`~mqjwtexit.auth.password_grant.PasswordGrantTokenProvider`
            reading the process environment.
        exit_data: The channel's exit data string. If it contains ``DEBUG``,
            debug logging is enabled for the package.
    """

    def __init__(
        self,
        token_provider: Optional[TokenProvider] = None,
        exit_data: Optional[str] = "",
    ) -> None:
        if token_provider is None:
            token_provider = PasswordGrantTokenProvider()
        self._token_provider = token_provider
        self._exit_data = exit_data or ""
        if DEBUG_OPTION in self._exit_data:
            enable_debug()
            logger.debug("Debug logging enabled by exit data")

    @property
    def name(self) -> str:
        return "jwt"

    @property
    def token_provider(self) -> TokenProvider:
        return self._token_provider

    def on_lifecycle_event(
        self, event: LifecycleEvent, params: Optional[SecurityParameters]
    ) -> Optional[SecurityParameters]:
        """Dispatch a handshake phase.

        Only SECURITY_PARAMS_REQUESTED changes anything; every other event,
        including ones this exit does not know, returns *params* untouched.

        Args:
            event: The phase the transport has reached.
            params: The transport's security parameters record, or ``None``.

        Returns:
            *params*, or a new record created for SECURITY_PARAMS_REQUESTED
            when *params* is ``None``.
        """
        if event is LifecycleEvent.INIT:
            logger.info("Channel exit initialised (no token needed)")
        elif event is LifecycleEvent.INIT_SECURITY:
            logger.info("Security exchange initialised (no token needed)")
        elif event is LifecycleEvent.SECURITY_PARAMS_REQUESTED:
            params = self._supply_security_params(params)
        elif event is LifecycleEvent.TERMINATE:
            logger.info("Channel exit terminating (no token needed)")
        else:
            logger.debug("Ignoring unrecognised lifecycle event %r", event)
        return params

    def _supply_security_params(
        self, params: Optional[SecurityParameters]
    ) -> SecurityParameters:
        """Switch *params* to token auth and store a fresh token in it."""
        logger.info("Security parameters requested")
        if params is None:
            params = SecurityParameters()
            logger.info("Creating security parameters")

        params.authentication_type = AuthenticationType.ID_TOKEN
        params.version = TOKEN_AUTH_VERSION

        try:
            outcome = self._token_provider.obtain_token()
            params.token = outcome.token
        except Exception:
            # The transport must never see a fault from this exit.
            logger.exception("Unexpected error while supplying the token")
            return params

        if outcome.ok:
            logger.info("Set obtained token (%d characters)", params.token_length)
        else:
            logger.error(
                "Continuing handshake with an empty token (%s)", outcome.reason
            )
        return params
