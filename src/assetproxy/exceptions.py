from typing import Optional

__all__ = [
    "ManagerProxyError",
    "UnknownIdentifier",
    "InvalidHandle",
    "BackendFault",
    "InstanceLimitReached",
    "RuntimeStateError",
    "error_for_kind",
]


class ManagerProxyError(Exception):
    """Base error for failed manager proxy calls.

    Every subclass names the ``kind`` reported to remote callers and the
    HTTP status the failed call is answered with.
    """
    kind: str = "ManagerProxyError"
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnknownIdentifier(ManagerProxyError):
    """No manager plugin is registered for the requested identifier"""
    kind = "UnknownIdentifier"
    status_code = 404

    def __init__(self, identifier: str):
        super().__init__(f"No manager plugin registered for identifier '{identifier}'")
        self.identifier = identifier


class InvalidHandle(ManagerProxyError):
    """The handle does not reference a live manager instance"""
    kind = "InvalidHandle"
    status_code = 404

    def __init__(self, handle: str, operation: Optional[str] = None):
        if operation:
            message = f"{operation}: Unknown handle {handle}"
        else:
            message = f"Unknown handle {handle}"
        super().__init__(message)
        self.handle = handle
        self.operation = operation


class BackendFault(ManagerProxyError):
    """The manager implementation raised while serving the call"""
    kind = "BackendFault"
    status_code = 500

    def __init__(self, operation: str, cause: BaseException):
        super().__init__(f"{operation}: {type(cause).__name__}: {cause}")
        self.operation = operation
        self.cause = cause


class InstanceLimitReached(ManagerProxyError):
    """The handle table holds the maximum number of live instances"""
    kind = "InstanceLimitReached"
    status_code = 503

    def __init__(self, limit: int):
        super().__init__(f"Maximum number of live manager instances reached ({limit})")
        self.limit = limit


class RuntimeStateError(RuntimeError):
    """The backend runtime was used outside its start/stop lifecycle"""
    pass


def error_for_kind(kind: Optional[str], message: str) -> ManagerProxyError:
    """Rebuild a failed call reported by a remote server as an exception.

    The original constructor arguments are not on the wire, so the message is
    restored as sent and the remaining attributes are left unset.
    """
    for error_class in (UnknownIdentifier, InvalidHandle, BackendFault, InstanceLimitReached):
        if error_class.kind == kind:
            error = error_class.__new__(error_class)
            ManagerProxyError.__init__(error, message)
            return error
    return ManagerProxyError(message)
