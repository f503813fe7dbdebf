"""Abstract base class for channel security exits.

A security exit is driven by the host transport, not the other way round:
the transport calls :meth:`SecurityExit.on_lifecycle_event` at each phase of
the channel handshake, passing the security parameters record it owns. The
exit may mutate that record, create one when the transport has none, and
returns the record the transport should use.

Every exit must subclass :class:`SecurityExit` and implement :attr:`name`
and :meth:`on_lifecycle_event`. Exits are registered as entry points in the
``mqjwtexit.exits`` group and located at runtime by
:class:`~mqjwtexit.exits.manager.ExitManager`.

Example:
    Minimal exit implementation::

        class StaticUserExit(SecurityExit):
            @property
            def name(self) -> str:
                return "static-user"

            def on_lifecycle_event(self, event, params):
                if event is LifecycleEvent.SECURITY_PARAMS_REQUESTED:
                    params = params or SecurityParameters()
                    params.user_id = "app"
                return params
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from mqjwtexit.models import LifecycleEvent, SecurityParameters


class SecurityExit(ABC):
    """Base class for all channel security exits.

    The exit lifecycle is:

    1. Instantiation -- the host (or :class:`ExitManager`) calls the
       constructor, optionally with the channel's exit data string.
    2. :meth:`on_lifecycle_event` -- called once per handshake phase, in
       the order INIT, INIT_SECURITY, SECURITY_PARAMS_REQUESTED, TERMINATE.

    Implementations must not raise out of :meth:`on_lifecycle_event`; a
    fault there would abort the channel negotiation.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the unique exit name used for discovery and logging.

        Returns:
            A short, human-readable identifier (e.g. ``"jwt"``).
        """
        ...

    @property
    def version(self) -> str:
        """Return the exit version string.

        Returns:
            A semver-compatible version string. Defaults to ``"0.1.0"``.
        """
        return "0.1.0"

    @abstractmethod
    def on_lifecycle_event(
        self, event: LifecycleEvent, params: Optional[SecurityParameters]
    ) -> Optional[SecurityParameters]:
        """Handle one handshake phase.

        Args:
            event: The phase the transport has reached.
            params: The transport's security parameters record, or ``None``
                if it has not created one.

        Returns:
            The record the transport should use: the same object (possibly
            mutated), a newly created one, or ``None``.
        """
        ...
