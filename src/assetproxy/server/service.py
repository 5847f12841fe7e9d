"""Manager proxy service.

Implements the RPC operations of the proxy on top of the backend runtime
and the handle table. Every method is synchronous and blocking: it is meant
to run in a worker thread, one per in-flight call, and serialises itself
against other calls only while plugin code is executing.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, TypeVar

from assetproxy.exceptions import BackendFault, InvalidHandle, UnknownIdentifier
from assetproxy.managers import ManagerInterface
from assetproxy.shared.context import call_context
from assetproxy.shared.logging import get_logger

from .codec import (
    DestroyRequest,
    DisplayNameRequest,
    DisplayNameResponse,
    EmptyResponse,
    IdentifierRequest,
    IdentifierResponse,
    IdentifiersResponse,
    InitializeRequest,
    InstantiateRequest,
    InstantiateResponse,
    msg_to_host_session,
    msg_to_info_dictionary,
)
from .handles import HandleTable
from .runtime import BackendRuntime

T = TypeVar("T")


class ManagerProxyService:
    """Routes RPC calls to manager instances held in a handle table.

    Args:
        runtime: Running backend runtime hosting the manager plugins
        handles: Table of live manager instances
        strict_destroy: Report Destroy of an unknown handle as InvalidHandle
            instead of succeeding
        logger: Logger for service diagnostics; host sessions handed to
            managers log through it as well
    """

    def __init__(
            self,
            runtime: BackendRuntime,
            handles: Optional[HandleTable] = None,
            strict_destroy: bool = False,
            logger: Optional[logging.Logger] = None
    ):
        self.runtime = runtime
        self.handles = handles if handles is not None else HandleTable()
        self.strict_destroy = strict_destroy
        self._logger: Optional[logging.Logger] = logger

    @property
    def logger(self) -> logging.Logger:
        if not self._logger:
            self._logger = get_logger(__name__)
        return self._logger

    def list_identifiers(self) -> IdentifiersResponse:
        with call_context("ListIdentifiers"):
            with self.runtime.active() as factory:
                try:
                    identifiers = factory.identifiers()
                except Exception as e:
                    self.logger.error(f"Failed to list manager identifiers: {e}", exc_info=True)
                    raise BackendFault("ListIdentifiers", e) from e
            return IdentifiersResponse(identifiers=identifiers)

    def instantiate(self, request: InstantiateRequest) -> InstantiateResponse:
        identifier = request.identifier
        with call_context("Instantiate"):
            with self.runtime.active() as factory:
                try:
                    manager = factory.instantiate(identifier)
                except UnknownIdentifier:
                    self.logger.error(f"Instantiate: Unknown identifier {identifier}")
                    raise
                except Exception as e:
                    self.logger.error(f"Failed to instantiate {identifier}: {e}", exc_info=True)
                    raise BackendFault("Instantiate", e) from e

                handle = self.handles.register(manager)

            self.logger.debug(f"Instantiated {identifier} with handle {handle}")
            return InstantiateResponse(handle=handle)

    def destroy(self, request: DestroyRequest) -> EmptyResponse:
        handle = request.handle
        with call_context("Destroy", handle):
            # Dropping the last reference may run manager finalizers
            with self.runtime.active():
                removed = self.handles.remove(handle)

            if not removed:
                if self.strict_destroy:
                    self.logger.error(f"Destroy: Unknown handle {handle}")
                    raise InvalidHandle(handle, "Destroy")
                self.logger.warning(f"Requested to destroy non-existent handle {handle}")
                return EmptyResponse()

            self.logger.debug(f"Destroyed {handle}")
            return EmptyResponse()

    def get_identifier(self, request: IdentifierRequest) -> IdentifierResponse:
        with call_context("GetIdentifier", request.handle):
            identifier = self._call_manager(
                "GetIdentifier", request.handle, lambda manager: manager.identifier()
            )
            return IdentifierResponse(identifier=identifier)

    def get_display_name(self, request: DisplayNameRequest) -> DisplayNameResponse:
        with call_context("GetDisplayName", request.handle):
            display_name = self._call_manager(
                "GetDisplayName", request.handle, lambda manager: manager.display_name()
            )
            return DisplayNameResponse(display_name=display_name)

    def initialize(self, request: InitializeRequest) -> EmptyResponse:
        handle = request.handle
        with call_context("Initialize", handle):
            host_session = msg_to_host_session(request.host_session, self.logger)
            manager_settings = msg_to_info_dictionary(request.settings)

            self.logger.debug(f"{handle} initialize()")
            self._call_manager(
                "Initialize", handle, lambda manager: manager.initialize(manager_settings, host_session)
            )
            return EmptyResponse()

    def shutdown(self) -> int:
        """Drop every live manager instance.

        Returns:
            int: Number of instances dropped
        """
        with self.runtime.active():
            count = self.handles.clear()
        if count:
            self.logger.info(f"Dropped {count} live manager instance(s) on shutdown")
        return count

    def _manager_from_handle(self, operation: str, handle: str) -> ManagerInterface:
        manager = self.handles.resolve(handle)
        if manager is None:
            self.logger.error(f"{operation}: Unknown handle {handle}")
            raise InvalidHandle(handle, operation)
        return manager

    def _call_manager(self, operation: str, handle: str, call: Callable[[ManagerInterface], T]) -> T:
        with self.runtime.active():
            # Resolved under the execution lock so a concurrent Destroy cannot interleave
            manager = self._manager_from_handle(operation, handle)
            try:
                return call(manager)
            except Exception as e:
                # The instance stays registered; only Destroy evicts it
                self.logger.error(f"{operation} failed on {handle}: {e}", exc_info=True)
                raise BackendFault(operation, e) from e
