import threading
import uuid
from typing import Optional

from assetproxy.exceptions import InstanceLimitReached
from assetproxy.managers import ManagerInterface

__all__ = [
    "HandleTable",
]


class HandleTable:
    """Thread-safe registry of live manager instances by opaque handle.

    Handles are random tokens, unrelated to the identity of the instance they
    stand for, so a caller cannot derive one handle from another. Every
    operation holds the table lock only for the dictionary access itself;
    no manager code is ever called while it is held.
    """

    def __init__(self, max_instances: Optional[int] = None):
        """
        Args:
            max_instances: Maximum number of live instances, unbounded if None
        """
        self._managers: dict[str, ManagerInterface] = {}
        self._lock = threading.Lock()
        self.max_instances = max_instances

    def register(self, manager: ManagerInterface) -> str:
        """Store a manager under a new handle.

        Returns:
            str: Handle distinct from every currently registered handle

        Raises:
            InstanceLimitReached: If the table is full
        """
        with self._lock:
            if self.max_instances is not None and len(self._managers) >= self.max_instances:
                raise InstanceLimitReached(self.max_instances)

            handle = uuid.uuid4().hex
            while handle in self._managers:
                handle = uuid.uuid4().hex
            self._managers[handle] = manager
            return handle

    def resolve(self, handle: str) -> Optional[ManagerInterface]:
        """Get the manager registered under a handle, or None."""
        with self._lock:
            return self._managers.get(handle)

    def remove(self, handle: str) -> bool:
        """Drop a handle.

        Returns:
            bool: Whether the handle was registered
        """
        with self._lock:
            manager = self._managers.pop(handle, None)
        # Finalizers of the dropped manager run here, outside the lock
        removed = manager is not None
        del manager
        return removed

    def clear(self) -> int:
        """Drop every handle.

        Returns:
            int: Number of instances dropped
        """
        with self._lock:
            managers, self._managers = self._managers, {}
        count = len(managers)
        del managers
        return count

    def handles(self) -> list[str]:
        """Snapshot of the currently registered handles."""
        with self._lock:
            return list(self._managers)

    def __contains__(self, handle: str) -> bool:
        with self._lock:
            return handle in self._managers

    def __len__(self) -> int:
        with self._lock:
            return len(self._managers)

    def __repr__(self) -> str:
        return f"HandleTable(instances={len(self)}, max_instances={self.max_instances})"
