"""
Route definitions for the manager proxy server
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from assetproxy.exceptions import ManagerProxyError

from .codec import (
    DestroyRequest,
    DisplayNameRequest,
    DisplayNameResponse,
    EmptyResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    IdentifierRequest,
    IdentifierResponse,
    IdentifiersResponse,
    InitializeRequest,
    InstantiateRequest,
    InstantiateResponse,
)
from .constants import (
    DESTROY_URL,
    GET_DISPLAY_NAME_URL,
    GET_IDENTIFIER_URL,
    HEALTH_CHECK_URL,
    INITIALIZE_URL,
    INSTANTIATE_URL,
    LIST_IDENTIFIERS_URL,
)
from .service import ManagerProxyService

_ERROR_RESPONSES = {
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


class ManagerProxyRouter:
    """
    Router class for the manager proxy server

    Registers one POST route per RPC operation. Service calls block while
    plugin code runs, so they are executed in the worker thread pool.
    """

    def __init__(self, app: FastAPI, service: ManagerProxyService):
        self.app = app
        self.service = service

    def register_routes(self) -> None:
        """Register all routes and error handlers with the FastAPI application"""
        self._register_error_handler()
        self._register_health_check()
        self._register_list_identifiers()
        self._register_instantiate()
        self._register_destroy()
        self._register_get_identifier()
        self._register_get_display_name()
        self._register_initialize()

    def _register_error_handler(self) -> None:
        """Report failed calls with their kind and reason"""

        @self.app.exception_handler(ManagerProxyError)
        async def manager_proxy_error_handler(request: Request, exc: ManagerProxyError) -> JSONResponse:
            body = ErrorResponse(detail=ErrorDetail(error=exc.message, kind=exc.kind))
            return JSONResponse(status_code=exc.status_code, content=body.model_dump())

    def _register_health_check(self) -> None:

        @self.app.get(
            HEALTH_CHECK_URL,
            response_model=HealthResponse,
            summary="Health check",
            description="Check if the proxy server is running"
        )
        async def health_check() -> HealthResponse:
            return HealthResponse()

    def _register_list_identifiers(self) -> None:

        @self.app.post(
            LIST_IDENTIFIERS_URL,
            response_model=IdentifiersResponse,
            summary="List identifiers",
            description="List the identifiers of all discoverable manager implementations"
        )
        async def list_identifiers() -> IdentifiersResponse:
            return await run_in_threadpool(self.service.list_identifiers)

    def _register_instantiate(self) -> None:

        @self.app.post(
            INSTANTIATE_URL,
            response_model=InstantiateResponse,
            responses=_ERROR_RESPONSES,
            summary="Instantiate",
            description="Create a manager instance and return its handle"
        )
        async def instantiate(request: InstantiateRequest) -> InstantiateResponse:
            return await run_in_threadpool(self.service.instantiate, request)

    def _register_destroy(self) -> None:

        @self.app.post(
            DESTROY_URL,
            response_model=EmptyResponse,
            responses=_ERROR_RESPONSES,
            summary="Destroy",
            description="Release the manager instance referenced by a handle"
        )
        async def destroy(request: DestroyRequest) -> EmptyResponse:
            return await run_in_threadpool(self.service.destroy, request)

    def _register_get_identifier(self) -> None:

        @self.app.post(
            GET_IDENTIFIER_URL,
            response_model=IdentifierResponse,
            responses=_ERROR_RESPONSES,
            summary="Get identifier",
            description="Get the identifier of a manager instance"
        )
        async def get_identifier(request: IdentifierRequest) -> IdentifierResponse:
            return await run_in_threadpool(self.service.get_identifier, request)

    def _register_get_display_name(self) -> None:

        @self.app.post(
            GET_DISPLAY_NAME_URL,
            response_model=DisplayNameResponse,
            responses=_ERROR_RESPONSES,
            summary="Get display name",
            description="Get the human readable name of a manager instance"
        )
        async def get_display_name(request: DisplayNameRequest) -> DisplayNameResponse:
            return await run_in_threadpool(self.service.get_display_name, request)

    def _register_initialize(self) -> None:

        @self.app.post(
            INITIALIZE_URL,
            response_model=EmptyResponse,
            responses=_ERROR_RESPONSES,
            summary="Initialize",
            description="Apply settings and a host session to a manager instance"
        )
        async def initialize(request: InitializeRequest) -> EmptyResponse:
            return await run_in_threadpool(self.service.initialize, request)
