"""Base class for manager plugins.

A manager plugin is the discoverable unit of the plugin system. Plugin
modules expose a top-level ``plugin`` attribute bound to a ``ManagerPlugin``
subclass, e.g.::

    class MyManagerPlugin(ManagerPlugin):
        @classmethod
        def identifier(cls) -> str:
            return "org.example.my_manager"

        @classmethod
        def interface(cls) -> ManagerInterface:
            return MyManagerInterface()

    plugin = MyManagerPlugin
"""

from abc import ABC, abstractmethod

from .interface import ManagerInterface

__all__ = [
    "ManagerPlugin",
]


class ManagerPlugin(ABC):
    """Abstract base for plugins that construct manager instances."""

    @classmethod
    @abstractmethod
    def identifier(cls) -> str:
        """Get the identifier of the manager this plugin provides.

        Returns:
            str: Manager identifier
        """
        pass

    @classmethod
    @abstractmethod
    def interface(cls) -> ManagerInterface:
        """Construct a new, independent manager instance.

        Returns:
            ManagerInterface: Fresh manager instance
        """
        pass
