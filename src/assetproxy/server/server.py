"""
Manager Proxy Server
Serves the manager proxy RPC operations over HTTP, bracketing the serving
lifetime with the backend runtime.
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Callable, Iterable, Optional

import uvicorn
from fastapi import FastAPI
from starlette.concurrency import run_in_threadpool

from assetproxy import __version__
from assetproxy.shared.logging import AssetProxyLogger, get_logger
from assetproxy.shared.settings import ProxySettings, app_settings, proxy_settings

from .handles import HandleTable
from .middlewares import CallLoggingMiddleware
from .routes import ManagerProxyRouter
from .runtime import BackendRuntime
from .service import ManagerProxyService

# Set custom logger class globally for all loggers including uvicorn/fastapi
logging.setLoggerClass(AssetProxyLogger)

logger = get_logger(__name__)


class ManagerProxyServer:
    """
    HTTP server exposing manager plugins to remote callers.

    The backend runtime is started before the listener opens and stopped
    after it has fully shut down; live manager instances are dropped when
    the application shuts down.
    """

    def __init__(
            self,
            runtime: Optional[BackendRuntime] = None,
            plugin_paths: Iterable[str | Path] = (),
            use_entry_points: bool = True,
            strict_destroy: bool = False,
            max_instances: Optional[int] = None,
            startup_callback: Optional[Callable] = None
    ):
        """
        Initialize the proxy server

        Args:
            runtime: Backend runtime, defaults to the process-wide instance
            plugin_paths: Manager plugin search path, in precedence order
            use_entry_points: Whether to discover plugins from entry points
            strict_destroy: Report Destroy of an unknown handle as a failure
            max_instances: Maximum number of live manager instances
            startup_callback: Optional callback to call once the server is ready
        """
        self.runtime = runtime or BackendRuntime()
        self.plugin_paths = list(plugin_paths)
        self.use_entry_points = use_entry_points
        self.startup_callback = startup_callback

        self.service = ManagerProxyService(
            runtime=self.runtime,
            handles=HandleTable(max_instances=max_instances),
            strict_destroy=strict_destroy
        )

        self.app = FastAPI(
            title="Asset Manager Proxy",
            version=__version__,
            lifespan=self._lifespan
        )
        self.app.add_middleware(CallLoggingMiddleware)
        ManagerProxyRouter(app=self.app, service=self.service).register_routes()

    @classmethod
    def from_settings(cls, settings: Optional[ProxySettings] = None, **kwargs) -> "ManagerProxyServer":
        """Build a server configured from environment settings"""
        settings = settings or proxy_settings
        return cls(
            plugin_paths=settings.plugin_paths,
            use_entry_points=not settings.disable_entrypoint_plugins,
            strict_destroy=settings.strict_destroy,
            max_instances=settings.max_instances,
            **kwargs
        )

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        if self.startup_callback is not None:
            self.startup_callback()

        yield

        if self.runtime.is_running:
            await run_in_threadpool(self.service.shutdown)

    async def start(self, port: int, host: str = "0.0.0.0"):
        """
        Start the backend runtime and serve until shut down

        Args:
            port: Port to bind the server to
            host: Host to bind the server to (default: "0.0.0.0")
        """
        config = uvicorn.Config(
            app=self.app,
            host=host,
            port=port,
            log_level=app_settings.log_level.lower(),
            log_config=None,
            access_log=False
        )
        server = uvicorn.Server(config)

        with self.runtime.running(self.plugin_paths, use_entry_points=self.use_entry_points):
            logger.info(f"Starting manager proxy server on http://{host}:{port}")
            await server.serve()
