import logging
from dataclasses import dataclass
from typing import Any, MutableMapping

__all__ = [
    "HostSession",
    "HostSessionLogger",
]


class HostSessionLogger(logging.LoggerAdapter):
    """
    Logger handed to managers as part of a host session.

    Prefixes every message with the id of the host the session belongs to,
    so diagnostics emitted by a manager are attributed to the remote caller.
    """

    def __init__(self, logger: logging.Logger, host_id: str):
        super().__init__(logger, {"host_id": host_id})
        self.host_id = host_id

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        return f"[host {self.host_id}] {msg}", kwargs


@dataclass(frozen=True)
class HostSession:
    """
    Describes the host a manager call is made on behalf of.

    Rebuilt for every call from the wire request and never persisted.
    """
    host_id: str
    logger: HostSessionLogger
