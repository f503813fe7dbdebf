"""JWT bearer-token security exit.

Implements the ``jwt`` exit, which answers the transport's request for
security parameters with a token obtained from an OAuth2 token issuer
using the password grant.

See Also:
    :class:`~mqjwtexit.exits.jwt_token.plugin.JwtSecurityExit`
    :mod:`mqjwtexit.exits.base` for the exit interface contract.
"""

from mqjwtexit.exits.jwt_token.plugin import JwtSecurityExit

__all__ = ["JwtSecurityExit"]
