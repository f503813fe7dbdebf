"""Exception hierarchy for mqjwtexit.

All exceptions inherit from :class:`MqJwtExitError`. Token acquisition
failures share the :class:`TokenFetchError` umbrella, and every subclass sets
a class-level ``reason`` string that
:class:`~mqjwtexit.auth.base.TokenOutcome` reports when a fetch is converted
into an empty token.

Subclass hierarchy::

    MqJwtExitError
    +-- ConfigError               (invalid exit settings)
    +-- ExitLoadError             (exit discovery / loading)
    +-- TokenFetchError           (token_fetch_error)
        +-- ConfigurationMissing  (configuration_missing)
        +-- NetworkFailure        (network_failure)
        +-- MalformedResponse     (malformed_response)
"""


class MqJwtExitError(Exception):
    """Base exception for all mqjwtexit errors.

    Args:
        message: Human-readable error description, written to the log.
    """

    reason: str = "error"

    def __init__(self, message: str):
        super().__init__(message)


class ConfigError(MqJwtExitError):
    """Raised for invalid exit settings (bad timeout, unparseable boolean)."""

    reason = "config_error"


class ExitLoadError(MqJwtExitError):
    """Raised when a security exit cannot be located, imported, or instantiated."""

    reason = "exit_load_error"


class TokenFetchError(MqJwtExitError):
    """Raised when a bearer token cannot be obtained from the token issuer."""

    reason = "token_fetch_error"


class ConfigurationMissing(TokenFetchError):
    """A required environment variable is unset.

    Absent values are substituted with an empty string and the request is
    still sent, so this is only raised by hosts that opt into strict checks
    through :meth:`~mqjwtexit.models.TokenRequestConfig.require_complete`.
    """

    reason = "configuration_missing"


class NetworkFailure(TokenFetchError):
    """Raised on transport failures (connection refused, timeout, TLS, bad URL)."""

    reason = "network_failure"


class MalformedResponse(TokenFetchError):
    """Raised when the response body is not JSON or lacks ``access_token``."""

    reason = "malformed_response"
