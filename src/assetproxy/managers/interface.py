"""Manager interface implemented by every asset manager.

A manager instance is a stateful object. It is created by its plugin, handed
a settings dictionary and a host session through ``initialize``, and then
queried for as long as the proxy keeps its handle alive.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from .host_session import HostSession

__all__ = [
    "InfoDictionary",
    "ManagerInterface",
]

# Primitive-valued dictionary exchanged with managers for settings and info
InfoDictionary = dict[str, Union[bool, int, float, str]]


class ManagerInterface(ABC):
    """Abstract base for asset manager implementations.

    Implementations are provided by manager plugins (see ``ManagerPlugin``)
    and must not assume they are the only instance in the process: the proxy
    creates a new instance for every Instantiate call.
    """

    @abstractmethod
    def identifier(self) -> str:
        """Get the unique identifier of this manager implementation.

        Identifiers are reverse-DNS style strings, e.g. "org.example.manager",
        and must match the identifier of the plugin that created the instance.

        Returns:
            str: Manager identifier
        """
        pass

    @abstractmethod
    def display_name(self) -> str:
        """Get a human readable name for this manager.

        Returns:
            str: Display name
        """
        pass

    def info(self) -> InfoDictionary:
        """Get static information about the manager implementation.

        Returns:
            InfoDictionary: Implementation specific information
        """
        return {}

    def settings(self, host_session: "HostSession") -> InfoDictionary:
        """Get the settings currently applied to this manager.

        Args:
            host_session: Session of the host making the request

        Returns:
            InfoDictionary: Current settings
        """
        return {}

    @abstractmethod
    def initialize(self, manager_settings: InfoDictionary, host_session: "HostSession") -> None:
        """Prepare the manager for use.

        Called with the settings to apply and the session of the host that
        owns this instance. Unrecognized settings keys are the manager's own
        business: it may ignore them or raise.

        Args:
            manager_settings: Settings to apply
            host_session: Session of the host making the request
        """
        pass

    def __repr__(self) -> str:
        """String representation of the manager."""
        return f"{self.__class__.__name__}(identifier={self.identifier()!r})"
