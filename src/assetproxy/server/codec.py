"""
Wire models of the manager proxy RPC surface and their conversion to the
in-memory types handed to manager implementations.
"""
import logging
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr

from assetproxy.managers import HostSession, HostSessionLogger, InfoDictionary

__all__ = [
    "PrimitiveValue",
    "EmptyResponse",
    "IdentifiersResponse",
    "InstantiateRequest",
    "InstantiateResponse",
    "HandleRequest",
    "DestroyRequest",
    "IdentifierRequest",
    "IdentifierResponse",
    "DisplayNameRequest",
    "DisplayNameResponse",
    "HostSessionMessage",
    "InitializeRequest",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "msg_to_info_dictionary",
    "msg_to_host_session",
]

# Strict types keep booleans, integers and floats apart when decoding JSON
PrimitiveValue = Union[StrictBool, StrictInt, StrictFloat, StrictStr]


class WireModel(BaseModel):
    """Base for wire messages: camelCase aliases, snake_case attributes."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class EmptyResponse(WireModel):
    """Response without results"""
    pass


class IdentifiersResponse(WireModel):
    identifiers: list[str] = Field(
        default_factory=list,
        description="Identifiers of all discoverable manager implementations"
    )


class InstantiateRequest(WireModel):
    identifier: str = Field(
        description="Identifier of the manager implementation to instantiate"
    )


class InstantiateResponse(WireModel):
    handle: str = Field(
        description="Opaque handle of the new manager instance"
    )


class HandleRequest(WireModel):
    handle: str = Field(
        description="Handle of a live manager instance"
    )


class DestroyRequest(HandleRequest):
    pass


class IdentifierRequest(HandleRequest):
    pass


class IdentifierResponse(WireModel):
    identifier: str = Field(
        description="Identifier of the manager instance"
    )


class DisplayNameRequest(HandleRequest):
    pass


class DisplayNameResponse(WireModel):
    display_name: str = Field(
        alias="displayName",
        description="Human readable name of the manager instance"
    )


class HostSessionMessage(WireModel):
    id: str = Field(
        description="Identifier of the host the session belongs to"
    )


class InitializeRequest(HandleRequest):
    settings: dict[str, PrimitiveValue] = Field(
        default_factory=dict,
        description="Manager settings to apply"
    )
    host_session: HostSessionMessage = Field(
        alias="hostSession",
        description="Session of the calling host"
    )


class ErrorDetail(BaseModel):
    """Error detail information"""
    error: str = Field(
        description="Error message"
    )
    kind: str = Field(
        description="Kind of failure, e.g. InvalidHandle"
    )


class ErrorResponse(BaseModel):
    """Standard error response"""
    detail: Union[str, ErrorDetail] = Field(
        description="Error details"
    )


class HealthResponse(BaseModel):
    """Simple health check response"""
    status: Literal["ok"] = Field(
        default="ok",
        description="Health status of the proxy server"
    )


def msg_to_info_dictionary(settings: Optional[dict[str, PrimitiveValue]]) -> InfoDictionary:
    """Decode a settings message into a fresh InfoDictionary."""
    return dict(settings or {})


def msg_to_host_session(msg: HostSessionMessage, logger: logging.Logger) -> HostSession:
    """Decode a host session message, attributing its logger to the host."""
    return HostSession(host_id=msg.id, logger=HostSessionLogger(logger, msg.id))
