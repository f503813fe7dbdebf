"""Token providers for the security exit.

The main entry points are:

- :class:`TokenProvider` -- abstract base class for token sources.
- :class:`TokenOutcome` -- typed success / empty-with-reason result.
- :class:`PasswordGrantTokenProvider` -- OAuth2 password grant against the
  issuer named by ``JWT_TOKEN_ENDPOINT``.

Typical usage::

    from mqjwtexit.auth import PasswordGrantTokenProvider

    outcome = PasswordGrantTokenProvider().obtain_token()
    if not outcome.ok:
        ...  # outcome.reason says why, outcome.token is ""
"""

from mqjwtexit.auth.base import TokenOutcome, TokenProvider
from mqjwtexit.auth.password_grant import PasswordGrantTokenProvider

__all__ = [
    "PasswordGrantTokenProvider",
    "TokenOutcome",
    "TokenProvider",
]
