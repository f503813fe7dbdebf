"""Abstract base class for token providers.

This module defines the two foundational types of the auth subsystem:

- :class:`TokenOutcome` -- the result of one token acquisition: either a
  token, or an empty token together with the error that caused it.
- :class:`TokenProvider` -- the abstract base class that every token
  source must extend.

To implement a new token source, subclass :class:`TokenProvider` and
implement :meth:`~TokenProvider.fetch_token`. Security exits call
:meth:`~TokenProvider.obtain_token`, which never raises a
:class:`~mqjwtexit.exceptions.TokenFetchError`.

See Also:
    :mod:`mqjwtexit.auth.password_grant` for the OAuth2 password grant.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from mqjwtexit.exceptions import TokenFetchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenOutcome:
    """Result of a token acquisition attempt.

    Attributes:
        token: The bearer token, or ``""`` when the fetch failed.
        error: The failure, or ``None`` on success.

    Example::

        outcome = TokenOutcome.failed(NetworkFailure("connection refused"))
        assert outcome.token == ""
        assert outcome.reason == "network_failure"
    """

    token: str = ""
    error: Optional[TokenFetchError] = None

    @classmethod
    def success(cls, token: str) -> TokenOutcome:
        return cls(token=token)

    @classmethod
    def failed(cls, error: TokenFetchError) -> TokenOutcome:
        return cls(token="", error=error)

    @property
    def ok(self) -> bool:
        """Whether a token was obtained."""
        return self.error is None

    @property
    def reason(self) -> Optional[str]:
        """The failure reason code, or ``None`` on success."""
        return self.error.reason if self.error is not None else None


class TokenProvider(ABC):
    """Abstract base class for bearer token sources.

    Subclasses implement :meth:`fetch_token`, which raises on failure. The
    fail-open conversion to an empty token lives in :meth:`obtain_token`
    so every provider degrades the same way.
    """

    @property
    @abstractmethod
    def grant_type(self) -> str:
        """Return the identifier of the flow this provider performs.

        Returns:
            A lowercase string such as ``"password"``.
        """
        ...

    @abstractmethod
    def fetch_token(self) -> str:
        """Obtain a fresh bearer token.

        Returns:
            The token string.

        Raises:
            TokenFetchError: If the exchange cannot be completed.
        """
        ...

    def obtain_token(self) -> TokenOutcome:
        """Fetch a token, converting failures into an empty-token outcome.

        Failures are logged at error severity here, at the call-site
        boundary, because the transport will not report them.

        Returns:
            A :class:`TokenOutcome` carrying either the token or the error.
        """
        try:
            token = self.fetch_token()
        except TokenFetchError as exc:
            logger.error("Token fetch failed (%s): %s", exc.reason, exc)
            return TokenOutcome.failed(exc)
        return TokenOutcome.success(token)
