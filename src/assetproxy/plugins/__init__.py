"""Plugin system for manager implementations.

Architecture:
- ModuleLoader: loads plugin modules from files, packages or dotted paths
- PluginRegistry: simple storage of plugin classes by identifier
- PluginSystem: discovery from search paths and entry points
- ManagerImplementationFactory: lists identifiers and builds manager instances
"""

from .factory import ManagerImplementationFactory
from .module_loader import ModuleLoader
from .registry import PluginRegistry
from .system import ENTRY_POINT_GROUP, PluginSystem

__all__ = [
    "ENTRY_POINT_GROUP",
    "ManagerImplementationFactory",
    "ModuleLoader",
    "PluginRegistry",
    "PluginSystem",
]
