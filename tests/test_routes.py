import pytest
from fastapi.testclient import TestClient

from assetproxy.server import ManagerProxyServer
from assetproxy.server.constants import (
    DESTROY_URL,
    GET_DISPLAY_NAME_URL,
    GET_IDENTIFIER_URL,
    HEALTH_CHECK_URL,
    INITIALIZE_URL,
    INSTANTIATE_URL,
    LIST_IDENTIFIERS_URL,
)

from conftest import ALL_IDENTIFIERS, FAULTY_IDENTIFIER, MOCK_IDENTIFIER


@pytest.fixture
def server(runtime):
    return ManagerProxyServer(runtime=runtime, use_entry_points=False)


@pytest.fixture
def client(server):
    # Not used as a context manager, so the lifespan does not run
    return TestClient(server.app)


def instantiate(client, identifier=MOCK_IDENTIFIER) -> str:
    response = client.post(INSTANTIATE_URL, json={"identifier": identifier})
    assert response.status_code == 200
    return response.json()["handle"]


def assert_error(response, status_code, kind):
    assert response.status_code == status_code
    detail = response.json()["detail"]
    assert detail["kind"] == kind
    assert detail["error"]
    return detail


def test_health_check(client):
    response = client.get(HEALTH_CHECK_URL)
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_list_identifiers(client):
    response = client.post(LIST_IDENTIFIERS_URL, json={})
    assert response.status_code == 200
    assert set(response.json()["identifiers"]) == ALL_IDENTIFIERS


def test_list_identifiers_without_body(client):
    response = client.post(LIST_IDENTIFIERS_URL)
    assert response.status_code == 200


def test_manager_lifecycle(client, server):
    handle = instantiate(client)

    response = client.post(GET_IDENTIFIER_URL, json={"handle": handle})
    assert response.status_code == 200
    assert response.json() == {"identifier": MOCK_IDENTIFIER}

    response = client.post(GET_DISPLAY_NAME_URL, json={"handle": handle})
    assert response.status_code == 200
    assert response.json() == {"displayName": "Mock Manager"}

    response = client.post(INITIALIZE_URL, json={
        "handle": handle,
        "settings": {"enabled": True, "retries": 2, "ratio": 1.5, "root": "/assets"},
        "hostSession": {"id": "maya-1"},
    })
    assert response.status_code == 200
    assert response.json() == {}
    manager = server.service.handles.resolve(handle)
    assert manager.manager_settings == {"enabled": True, "retries": 2, "ratio": 1.5, "root": "/assets"}
    assert manager.host_session.host_id == "maya-1"

    response = client.post(DESTROY_URL, json={"handle": handle})
    assert response.status_code == 200
    assert response.json() == {}

    response = client.post(GET_IDENTIFIER_URL, json={"handle": handle})
    detail = assert_error(response, 404, "InvalidHandle")
    assert detail["error"] == f"GetIdentifier: Unknown handle {handle}"


def test_instantiate_unknown_identifier(client):
    response = client.post(INSTANTIATE_URL, json={"identifier": "org.example.unknown"})
    assert_error(response, 404, "UnknownIdentifier")


def test_instantiate_backend_fault(client):
    response = client.post(INSTANTIATE_URL, json={"identifier": "org.assetproxy.test.unbuildable"})
    assert_error(response, 500, "BackendFault")


def test_backend_fault_keeps_instance(client):
    handle = instantiate(client, FAULTY_IDENTIFIER)

    response = client.post(GET_DISPLAY_NAME_URL, json={"handle": handle})
    detail = assert_error(response, 500, "BackendFault")
    assert "display name unavailable" in detail["error"]

    response = client.post(GET_IDENTIFIER_URL, json={"handle": handle})
    assert response.status_code == 200
    assert response.json() == {"identifier": FAULTY_IDENTIFIER}


@pytest.mark.parametrize("url, operation", [
    (GET_IDENTIFIER_URL, "GetIdentifier"),
    (GET_DISPLAY_NAME_URL, "GetDisplayName"),
])
def test_unknown_handle(client, url, operation):
    response = client.post(url, json={"handle": "nope"})
    detail = assert_error(response, 404, "InvalidHandle")
    assert detail["error"] == f"{operation}: Unknown handle nope"


def test_initialize_unknown_handle(client):
    response = client.post(INITIALIZE_URL, json={"handle": "nope", "hostSession": {"id": "maya-1"}})
    assert_error(response, 404, "InvalidHandle")


def test_initialize_rejects_nested_settings(client):
    handle = instantiate(client)
    response = client.post(INITIALIZE_URL, json={
        "handle": handle,
        "settings": {"nested": {"a": 1}},
        "hostSession": {"id": "maya-1"},
    })
    assert response.status_code == 422


def test_destroy_unknown_handle_is_ok(client):
    response = client.post(DESTROY_URL, json={"handle": "never-issued"})
    assert response.status_code == 200


def test_strict_destroy(runtime):
    server = ManagerProxyServer(runtime=runtime, strict_destroy=True)
    client = TestClient(server.app)

    response = client.post(DESTROY_URL, json={"handle": "never-issued"})

    assert_error(response, 404, "InvalidHandle")


def test_instance_limit(runtime):
    server = ManagerProxyServer(runtime=runtime, max_instances=1)
    client = TestClient(server.app)
    instantiate(client)

    response = client.post(INSTANTIATE_URL, json={"identifier": MOCK_IDENTIFIER})

    assert_error(response, 503, "InstanceLimitReached")
