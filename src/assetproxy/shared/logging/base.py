from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from assetproxy.shared.context import CallContext


class AssetProxyLogRecord(logging.LogRecord):
    """
    Custom LogRecord that captures the context of the RPC call being served.

    Attributes:
        call_context: CallContext of the current call, or None outside a call.
        rpc_operation: Name of the RPC operation, if any.
        rpc_handle: Manager handle the call targets, if any.
    """
    call_context: Optional[CallContext]
    rpc_operation: Optional[str]
    rpc_handle: Optional[str]

    def __init__(self, *args, **kwargs):
        from assetproxy.shared.context import get_context

        super().__init__(*args, **kwargs)

        try:
            call_context = get_context()
        except Exception:
            call_context = None

        self.call_context = call_context
        self.rpc_operation = getattr(call_context, "operation", None)
        self.rpc_handle = getattr(call_context, "handle", None)


class AssetProxyLogger(logging.Logger):
    """
    Custom Logger that creates AssetProxyLogRecord instances, so every entry
    carries the call context it was emitted from.
    """

    def makeRecord(self, name, level, fn, lno, msg, args, exc_info,
                   func=None, extra=None, sinfo=None) -> AssetProxyLogRecord:
        """
        Create a custom AssetProxyLogRecord instance.

        Raises:
            KeyError: If extra dict attempts to overwrite protected keys
                     ('message', 'asctime', or any existing record attribute)
        """
        rv = AssetProxyLogRecord(
            name, level, fn, lno, msg,
            args, exc_info, func, sinfo
        )
        if extra is not None:
            for key in extra:
                if (key in ["message", "asctime"]) or (key in rv.__dict__):
                    raise KeyError("Attempt to overwrite %r in AssetProxyLogRecord" % key)
                rv.__dict__[key] = extra[key]
        return rv
