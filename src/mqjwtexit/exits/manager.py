"""Exit manager -- discovery and loading of security exits.

This module contains :class:`ExitManager`, which locates security exits the
way a channel definition names them. An exit name is either

* an entry point in the ``mqjwtexit.exits`` group (e.g. ``"jwt"``), or
* a dotted path ``"package.module:ClassName"``.

Third-party packages register exits by declaring an entry point under this
group in their ``pyproject.toml``::

    [project.entry-points."mqjwtexit.exits"]
    my-exit = "my_package.exit:MyExit"
"""

from __future__ import annotations

import importlib
import importlib.metadata
import logging
from typing import Any

from mqjwtexit.exceptions import ExitLoadError
from mqjwtexit.exits.base import SecurityExit

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "mqjwtexit.exits"
"""The entry-point group name used for exit discovery."""


class ExitManager:
    """Discovers and instantiates security exits.

    Loaded exit classes are cached by name; every :meth:`create` call
    returns a new instance so channels never share an exit object.

    Example:
        Typical usage::

            manager = ExitManager()
            security_exit = manager.create("jwt", exit_data="DEBUG")
    """

    def __init__(self) -> None:
        self._exit_classes: dict[str, type[SecurityExit]] = {}

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def discover(self) -> list[str]:
        """Load every exit class registered in the ``mqjwtexit.exits`` group.

        Returns:
            Names of the exits that loaded. Entry points that fail to load
            are logged as warnings and skipped.
        """
        loaded_names: list[str] = []
        for ep in importlib.metadata.entry_points().select(group=ENTRY_POINT_GROUP):
            try:
                self.register(ep.name, ep.load())
                loaded_names.append(ep.name)
            except Exception as exc:
                logger.warning("Failed to load exit '%s': %s", ep.name, exc)
        return loaded_names

    def register(self, name: str, exit_cls: Any) -> None:
        """Register an exit class under *name*.

        Args:
            name: The name channels use to refer to the exit.
            exit_cls: A :class:`SecurityExit` subclass.

        Raises:
            ExitLoadError: If *exit_cls* is not a :class:`SecurityExit` subclass.
        """
        if not (isinstance(exit_cls, type) and issubclass(exit_cls, SecurityExit)):
            raise ExitLoadError(f"Exit '{name}' is not a SecurityExit subclass")
        self._exit_classes[name] = exit_cls
        logger.debug("Registered exit '%s' (%s)", name, exit_cls.__qualname__)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def get_exit_class(self, name: str) -> type[SecurityExit]:
        """Resolve an exit name to its class.

        Registered names are checked first, then the entry-point group, then
        *name* is treated as a ``module:Class`` dotted path.

        Args:
            name: Entry-point name or dotted path.

        Returns:
            The :class:`SecurityExit` subclass.

        Raises:
            ExitLoadError: If the exit cannot be found or imported.
        """
        if name in self._exit_classes:
            return self._exit_classes[name]

        if ":" in name:
            self.register(name, self._import_dotted(name))
            return self._exit_classes[name]

        for ep in importlib.metadata.entry_points().select(group=ENTRY_POINT_GROUP):
            if ep.name == name:
                try:
                    exit_cls = ep.load()
                except Exception as exc:
                    raise ExitLoadError(f"Failed to load exit '{name}': {exc}") from exc
                self.register(name, exit_cls)
                return self._exit_classes[name]

        available = ", ".join(sorted(self._exit_classes)) or "(none)"
        raise ExitLoadError(
            f"No security exit named '{name}'. Registered exits: {available}"
        )

    def create(self, name: str, **kwargs: Any) -> SecurityExit:
        """Instantiate the exit named *name*.

        Args:
            name: Entry-point name or dotted path.
            **kwargs: Forwarded to the exit's constructor (e.g. ``exit_data``).

        Returns:
            A new :class:`SecurityExit` instance.

        Raises:
            ExitLoadError: If the exit cannot be resolved or its constructor
                raises.
        """
        exit_cls = self.get_exit_class(name)
        try:
            security_exit = exit_cls(**kwargs)
        except Exception as exc:
            raise ExitLoadError(f"Failed to initialise exit '{name}': {exc}") from exc
        logger.info("Loaded exit '%s' v%s", security_exit.name, security_exit.version)
        return security_exit

    def list_exits(self) -> list[str]:
        """Return the names of all registered exit classes, sorted."""
        return sorted(self._exit_classes)

    @staticmethod
    def _import_dotted(path: str) -> Any:
        module_name, _, attr = path.partition(":")
        try:
            module = importlib.import_module(module_name)
        except ImportError as exc:
            raise ExitLoadError(f"Cannot import exit module '{module_name}': {exc}") from exc
        try:
            return getattr(module, attr)
        except AttributeError:
            raise ExitLoadError(
                f"Module '{module_name}' has no exit class '{attr}'"
            ) from None
