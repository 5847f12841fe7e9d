"""Manager plugin discovery.

The PluginSystem finds manager plugins and records them in a PluginRegistry.
Plugins are looked for in two places, in this order:

1. Each directory of the plugin search path. Every ``*.py`` module and every
   package directory in it is loaded and must expose a top-level ``plugin``
   attribute bound to a ``ManagerPlugin`` subclass.
2. The ``assetproxy.manager_plugin`` entry point group. Entry points may
   reference the plugin class itself or a module exposing ``plugin``.

The first plugin found for an identifier wins; later ones are skipped.
"""

from __future__ import annotations

import logging
from importlib.metadata import entry_points
from pathlib import Path
from types import ModuleType
from typing import Any, Iterable, Optional

from assetproxy.managers import ManagerPlugin
from assetproxy.shared.logging import get_logger

from .module_loader import ModuleLoader
from .registry import PluginClass, PluginRegistry

ENTRY_POINT_GROUP = "assetproxy.manager_plugin"
PLUGIN_ATTRIBUTE = "plugin"


class PluginSystem:
    """Discovers manager plugins from search paths and entry points.

    Loading plugin code runs arbitrary imports, so the system is expected to
    be driven by the backend runtime, which serialises access to it.
    """

    def __init__(
            self,
            registry: Optional[PluginRegistry] = None,
            loader: Optional[ModuleLoader] = None,
            logger: Optional[logging.Logger] = None
    ):
        self._registry = registry or PluginRegistry()
        self._loader = loader or ModuleLoader()
        self._logger: Optional[logging.Logger] = logger

    @property
    def logger(self) -> logging.Logger:
        if not self._logger:
            self._logger = get_logger(__name__)
        return self._logger

    @property
    def registry(self) -> PluginRegistry:
        return self._registry

    def reset(self) -> None:
        """Forget all previously discovered plugins."""
        self._registry.clear()

    def scan(self, paths: Iterable[str | Path] = (), use_entry_points: bool = True) -> list[str]:
        """Discover plugins, replacing any earlier scan results.

        Args:
            paths: Plugin search path directories, in precedence order
            use_entry_points: Whether to also consider installed entry points

        Returns:
            list[str]: Identifiers of all registered plugins
        """
        self.reset()

        for path in paths:
            self._scan_directory(Path(path))

        if use_entry_points:
            self._scan_entry_points()

        identifiers = self._registry.identifiers()
        self.logger.debug(
            f"Plugin scan complete. Found {len(identifiers)} manager plugin(s): "
            f"{', '.join(identifiers)}"
        )
        return identifiers

    def identifiers(self) -> list[str]:
        """Get identifiers of all discovered plugins."""
        return self._registry.identifiers()

    def plugin(self, identifier: str) -> Optional[PluginClass]:
        """Get the plugin registered for an identifier, if any."""
        return self._registry.get(identifier)

    def _scan_directory(self, directory: Path) -> None:
        if not directory.is_dir():
            self.logger.debug(f"Skipping plugin path '{directory}': not a directory")
            return

        self.logger.debug(f"Searching for manager plugins in '{directory}'")
        for location in sorted(directory.iterdir()):
            if not self._loader.is_loadable(location):
                continue
            try:
                module = self._loader.load_from_location(location)
            except Exception as e:
                self.logger.warning(f"Failed to load plugin module '{location}': {e}")
                continue
            self._register(self._plugin_from_module(module), source=str(location))

    def _scan_entry_points(self) -> None:
        for entry_point in entry_points(group=ENTRY_POINT_GROUP):
            try:
                loaded = entry_point.load()
            except Exception as e:
                self.logger.warning(f"Failed to load plugin entry point '{entry_point.name}': {e}")
                continue

            plugin = self._plugin_from_module(loaded) if isinstance(loaded, ModuleType) else loaded
            self._register(plugin, source=f"entry point '{entry_point.name}'")

    def _plugin_from_module(self, module: ModuleType) -> Any:
        plugin = getattr(module, PLUGIN_ATTRIBUTE, None)
        if plugin is None:
            self.logger.debug(f"Module '{module.__name__}' has no top-level '{PLUGIN_ATTRIBUTE}' attribute")
        return plugin

    def _register(self, plugin: Any, source: str) -> None:
        if plugin is None:
            return

        if not isinstance(plugin, type) or not issubclass(plugin, ManagerPlugin):
            self.logger.warning(f"Ignoring plugin from {source}: not a ManagerPlugin subclass")
            return

        try:
            identifier = plugin.identifier()
        except Exception as e:
            self.logger.warning(f"Ignoring plugin from {source}: identifier() raised {e}")
            return

        if identifier in self._registry:
            self.logger.debug(
                f"Skipping plugin '{identifier}' from {source}: already registered "
                f"by {self._registry.get(identifier).__name__}"
            )
            return

        self._registry.register(plugin)
        self.logger.debug(f"Registered manager plugin '{identifier}' from {source}")
