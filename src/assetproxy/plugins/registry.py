"""Registry of discovered manager plugins.

This module provides lightweight storage for manager plugin classes keyed by
identifier. Discovery lives in ``PluginSystem``; instantiation lives in
``ManagerImplementationFactory``.
"""

from typing import Optional

from assetproxy.managers import ManagerPlugin

PluginClass = type[ManagerPlugin]


class PluginRegistry:
    """Manager plugin storage registry.

    The registry:
    - Stores plugin classes by manager identifier
    - Keeps registration order
    - Rejects a second plugin for an already registered identifier
    """

    def __init__(self):
        """Initialize an empty plugin registry."""
        self._plugins: dict[str, PluginClass] = {}

    def register(self, plugin: PluginClass) -> str:
        """Register a plugin in the registry.

        Args:
            plugin: ManagerPlugin subclass to register

        Returns:
            str: The identifier the plugin was registered under

        Raises:
            ValueError: If a plugin with the same identifier is already registered
            TypeError: If plugin isn't a ManagerPlugin subclass
        """
        if not isinstance(plugin, type) or not issubclass(plugin, ManagerPlugin):
            raise TypeError(
                f"Plugin must be a ManagerPlugin subclass, got {plugin!r}"
            )

        identifier = plugin.identifier()

        if identifier in self._plugins:
            raise ValueError(
                f"Plugin '{identifier}' is already registered. "
                f"Existing: {self._plugins[identifier].__name__}, New: {plugin.__name__}"
            )

        self._plugins[identifier] = plugin
        return identifier

    def get(self, identifier: str) -> Optional[PluginClass]:
        """Get a plugin by manager identifier.

        Returns:
            Optional[PluginClass]: The plugin class, or None if not found
        """
        return self._plugins.get(identifier)

    def identifiers(self) -> list[str]:
        """Get identifiers of all registered plugins, in registration order."""
        return list(self._plugins.keys())

    def clear(self) -> None:
        """Remove all plugins from the registry."""
        self._plugins.clear()

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._plugins

    def __len__(self) -> int:
        return len(self._plugins)

    def __repr__(self) -> str:
        """String representation of the registry."""
        return f"PluginRegistry(plugins={len(self._plugins)}, identifiers={self.identifiers()})"
