"""Host-side driver for a channel handshake.

This module provides two components:

* :class:`HandshakeContext` -- a mutable dataclass that carries the security
  parameters record and the events delivered so far through one handshake.
* :class:`HandshakeRunner` -- invokes a :class:`SecurityExit` for each
  lifecycle event in the order the transport would, so embedding hosts and
  tests get the same call sequence a real channel produces.

The runner owns nothing but the context; the exit stays stateless.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from mqjwtexit.exits.base import SecurityExit
from mqjwtexit.models import LifecycleEvent, SecurityParameters

logger = logging.getLogger(__name__)

HANDSHAKE_SEQUENCE: tuple[LifecycleEvent, ...] = (
    LifecycleEvent.INIT,
    LifecycleEvent.INIT_SECURITY,
    LifecycleEvent.SECURITY_PARAMS_REQUESTED,
    LifecycleEvent.TERMINATE,
)
"""Order in which a client channel delivers lifecycle events."""


@dataclass
class HandshakeContext:
    """Mutable state threaded through one handshake.

    Attributes:
        params: The security parameters record, ``None`` until an exit
            creates one (or the host supplies one).
        events: Events delivered so far, in order.
    """

    params: Optional[SecurityParameters] = None
    events: list[Optional[LifecycleEvent]] = field(default_factory=list)


class HandshakeRunner:
    """Plays lifecycle events through a single security exit.

    Args:
        security_exit: The exit to invoke.
    """

    def __init__(self, security_exit: SecurityExit) -> None:
        self._exit = security_exit

    def deliver(
        self, ctx: HandshakeContext, event: Optional[LifecycleEvent]
    ) -> HandshakeContext:
        """Invoke the exit for one event and record the returned parameters.

        Args:
            ctx: The handshake context to update.
            event: The lifecycle event to deliver. ``None`` stands for a
                reason code with no :class:`LifecycleEvent` counterpart and
                is passed through for the exit to ignore.

        Returns:
            The same *ctx* with ``params`` replaced by the exit's result.
        """
        logger.debug("Delivering %s to exit '%s'", event, self._exit.name)
        ctx.params = self._exit.on_lifecycle_event(event, ctx.params)
        ctx.events.append(event)
        return ctx

    def run(
        self,
        params: Optional[SecurityParameters] = None,
        events: Iterable[LifecycleEvent] = HANDSHAKE_SEQUENCE,
    ) -> HandshakeContext:
        """Run a complete handshake.

        Args:
            params: An existing record supplied by the host, if any.
            events: Events to deliver. Defaults to the full client sequence.

        Returns:
            The final :class:`HandshakeContext`.
        """
        ctx = HandshakeContext(params=params)
        for event in events:
            self.deliver(ctx, event)
        return ctx
