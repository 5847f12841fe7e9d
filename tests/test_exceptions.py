import pytest

from assetproxy.exceptions import (
    BackendFault,
    InstanceLimitReached,
    InvalidHandle,
    ManagerProxyError,
    UnknownIdentifier,
    error_for_kind,
)


def test_invalid_handle_message():
    assert str(InvalidHandle("abc", "Destroy")) == "Destroy: Unknown handle abc"
    assert str(InvalidHandle("abc")) == "Unknown handle abc"


def test_backend_fault_wraps_cause():
    cause = ValueError("bad setting")
    error = BackendFault("Initialize", cause)

    assert error.cause is cause
    assert str(error) == "Initialize: ValueError: bad setting"


@pytest.mark.parametrize("error, status_code", [
    (UnknownIdentifier("org.example.manager"), 404),
    (InvalidHandle("abc"), 404),
    (BackendFault("GetDisplayName", RuntimeError("x")), 500),
    (InstanceLimitReached(4), 503),
])
def test_status_codes(error, status_code):
    assert isinstance(error, ManagerProxyError)
    assert error.status_code == status_code


@pytest.mark.parametrize("error_class", [UnknownIdentifier, InvalidHandle, BackendFault, InstanceLimitReached])
def test_error_for_kind(error_class):
    error = error_for_kind(error_class.kind, "remote message")

    assert type(error) is error_class
    assert error.message == "remote message"
    assert str(error) == "remote message"


def test_error_for_unknown_kind():
    error = error_for_kind("SomethingElse", "remote message")
    assert type(error) is ManagerProxyError
