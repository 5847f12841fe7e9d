"""Backend runtime hosting the manager plugins.

The runtime is a single process-wide resource. It is started once before
the proxy accepts connections and stopped once after the last call has been
served. While it is running, plugin code may only execute inside
``active()``, which admits one caller at a time.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Optional

from assetproxy.exceptions import RuntimeStateError
from assetproxy.plugins import ManagerImplementationFactory, PluginSystem
from assetproxy.shared.logging import get_logger
from assetproxy.shared.metaclasses import Singleton

__all__ = [
    "BackendRuntime",
]


class BackendRuntime(metaclass=Singleton):
    """Lifecycle and execution guard of the plugin environment.

    Use ``running()`` to bracket the serving lifetime and ``active()`` around
    every call into plugin code:

        runtime = BackendRuntime()
        with runtime.running(plugin_paths):
            with runtime.active() as factory:
                factory.identifiers()
    """

    def __init__(self, plugin_system: Optional[PluginSystem] = None, logger: Optional[logging.Logger] = None):
        self._plugin_system = plugin_system or PluginSystem()
        self._factory = ManagerImplementationFactory(self._plugin_system)
        self._execution_lock = threading.Lock()
        self._state_lock = threading.Lock()
        self._started = False
        self._stopped = False
        self._logger: Optional[logging.Logger] = logger

    @property
    def logger(self) -> logging.Logger:
        if not self._logger:
            self._logger = get_logger(__name__)
        return self._logger

    @property
    def is_running(self) -> bool:
        return self._started and not self._stopped

    def start(self, plugin_paths: Iterable[str | Path] = (), use_entry_points: bool = True) -> None:
        """Bring up the plugin environment and discover plugins.

        Raises:
            RuntimeStateError: If the runtime was already started
        """
        with self._state_lock:
            if self._started:
                raise RuntimeStateError("Backend runtime can only be started once")
            self._started = True

        with self._execution_lock:
            identifiers = self._plugin_system.scan(plugin_paths, use_entry_points=use_entry_points)
        self.logger.info(f"Backend runtime started with {len(identifiers)} manager plugin(s)")

    def stop(self) -> None:
        """Tear down the plugin environment.

        Waits for the call currently executing plugin code, if any.

        Raises:
            RuntimeStateError: If the runtime is not running
        """
        with self._state_lock:
            if not self.is_running:
                raise RuntimeStateError("Backend runtime is not running")
            self._stopped = True

        with self._execution_lock:
            self._plugin_system.reset()
        self.logger.info("Backend runtime stopped")

    @contextmanager
    def running(self, plugin_paths: Iterable[str | Path] = (), use_entry_points: bool = True) -> Iterator["BackendRuntime"]:
        """Start the runtime for the duration of the block, stopping it on every exit path."""
        self.start(plugin_paths, use_entry_points=use_entry_points)
        try:
            yield self
        finally:
            self.stop()

    @contextmanager
    def active(self) -> Iterator[ManagerImplementationFactory]:
        """Enter the plugin environment.

        Blocks until no other caller is executing plugin code. Not reentrant:
        code already inside ``active()`` must not enter it again.

        Yields:
            ManagerImplementationFactory: Factory bound to the discovered plugins

        Raises:
            RuntimeStateError: If the runtime is not running
        """
        with self._execution_lock:
            if not self.is_running:
                raise RuntimeStateError("Backend runtime is not running")
            yield self._factory
