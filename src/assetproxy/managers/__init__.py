"""Manager API for asset manager implementations.

This module provides the contract that manager plugins implement:
- ManagerInterface: a live, stateful asset manager instance
- ManagerPlugin: the discoverable factory for a manager implementation
- HostSession: the calling host's context handed to manager operations
"""

from .host_session import HostSession, HostSessionLogger
from .interface import InfoDictionary, ManagerInterface
from .plugin import ManagerPlugin

__all__ = [
    "HostSession",
    "HostSessionLogger",
    "InfoDictionary",
    "ManagerInterface",
    "ManagerPlugin",
]
