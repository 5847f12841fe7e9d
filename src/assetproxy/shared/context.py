from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator, Optional

__all__ = [
    "CallContext",
    "call_context_var",
    "get_context",
    "call_context",
]


@dataclass(frozen=True)
class CallContext:
    """
    Identifies the RPC call currently being served, so that log records
    emitted anywhere below the service can be attributed to it.
    """
    operation: str
    handle: Optional[str] = None

    @property
    def call_name(self) -> str:
        if self.handle:
            return f"{self.operation} {self.handle}"
        return self.operation


call_context_var: ContextVar[Optional[CallContext]] = ContextVar("call_context", default=None)


def get_context() -> Optional[CallContext]:
    """Get the context of the call being served, if any"""
    return call_context_var.get()


@contextmanager
def call_context(operation: str, handle: Optional[str] = None) -> Iterator[CallContext]:
    """Bind a call context for the duration of the block."""
    context = CallContext(operation=operation, handle=handle)
    token = call_context_var.set(context)
    try:
        yield context
    finally:
        call_context_var.reset(token)
