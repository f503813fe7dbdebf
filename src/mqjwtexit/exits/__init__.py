"""Security exits and the host-side helpers that drive them.

- :class:`SecurityExit` -- the callback interface the transport invokes.
- :class:`ExitManager` -- locates exits by entry point or dotted path.
- :class:`HandshakeRunner` -- plays a channel handshake through an exit.
"""

from mqjwtexit.exits.base import SecurityExit
from mqjwtexit.exits.handshake import HandshakeContext, HandshakeRunner
from mqjwtexit.exits.manager import ENTRY_POINT_GROUP, ExitManager

__all__ = [
    "ENTRY_POINT_GROUP",
    "ExitManager",
    "HandshakeContext",
    "HandshakeRunner",
    "SecurityExit",
]
