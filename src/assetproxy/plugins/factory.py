"""Manager implementation factory.

The factory is the only way the proxy service reaches into the plugin
system: it lists the identifiers of discoverable managers and constructs
new manager instances by identifier.
"""

from __future__ import annotations

import logging
from typing import Optional

from assetproxy.exceptions import UnknownIdentifier
from assetproxy.managers import ManagerInterface
from assetproxy.shared.logging import get_logger

from .system import PluginSystem


class ManagerImplementationFactory:
    """Lists and instantiates manager implementations from a PluginSystem.

    Each ``instantiate`` call builds a new, independent instance, even for
    the same identifier; nothing is cached.
    """

    def __init__(self, plugin_system: PluginSystem, logger: Optional[logging.Logger] = None):
        """Initialize the factory.

        Args:
            plugin_system: Scanned plugin system to instantiate managers from
            logger: Logger to use, defaults to the module logger
        """
        self._plugin_system = plugin_system
        self._logger: Optional[logging.Logger] = logger

    @property
    def logger(self) -> logging.Logger:
        if not self._logger:
            self._logger = get_logger(__name__)
        return self._logger

    def identifiers(self) -> list[str]:
        """Get the identifiers of all discoverable manager implementations.

        Returns:
            list[str]: Identifiers, empty if no plugins were found
        """
        return self._plugin_system.identifiers()

    def instantiate(self, identifier: str) -> ManagerInterface:
        """Construct a new manager instance.

        Args:
            identifier: Identifier of the manager implementation

        Returns:
            ManagerInterface: New manager instance

        Raises:
            UnknownIdentifier: If no plugin provides the identifier
            TypeError: If the plugin returns something other than a ManagerInterface
        """
        plugin = self._plugin_system.plugin(identifier)
        if plugin is None:
            raise UnknownIdentifier(identifier)

        self.logger.debug(f"Instantiating {identifier} with {plugin.__name__}")
        interface = plugin.interface()
        if not isinstance(interface, ManagerInterface):
            raise TypeError(
                f"Plugin '{identifier}' returned {type(interface).__name__}, "
                f"expected a ManagerInterface"
            )
        return interface
