from .client import ManagerProxyClient

__all__ = [
    "ManagerProxyClient",
]
