"""mqjwtexit -- JWT channel security exit for message-queue clients.

The host transport calls a *security exit* at fixed points of the channel
handshake. This package provides one that, when the transport asks for
security parameters, fetches a short-lived bearer token from an OAuth2
token issuer (password grant) and hands it to the queue manager in place
of a static user id and password.

Typical usage::

    from mqjwtexit.exits.jwt_token import JwtSecurityExit
    from mqjwtexit.models import LifecycleEvent

    exit_ = JwtSecurityExit()
    params = exit_.on_lifecycle_event(LifecycleEvent.SECURITY_PARAMS_REQUESTED, None)

Modules:
    models: Pydantic models for the handshake and the token exchange.
    config: Environment-backed configuration providers.
    exceptions: Exception hierarchy with failure reason codes.
    output: stderr logging setup.
    auth: Token providers.
    exits: The security exit interface, implementation, and host-side helpers.
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
