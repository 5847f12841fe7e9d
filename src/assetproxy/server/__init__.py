from .handles import HandleTable
from .runtime import BackendRuntime
from .server import ManagerProxyServer
from .service import ManagerProxyService

__all__ = [
    "BackendRuntime",
    "HandleTable",
    "ManagerProxyServer",
    "ManagerProxyService",
]
