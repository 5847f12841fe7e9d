import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
src_path = PROJECT_ROOT / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

import pytest

from assetproxy.server import BackendRuntime, ManagerProxyService

RESOURCES_DIR = Path(__file__).resolve().parent / "resources"

MOCK_IDENTIFIER = "org.assetproxy.test.mock"
FAULTY_IDENTIFIER = "org.assetproxy.test.faulty"
PACKAGE_IDENTIFIER = "org.assetproxy.test.package"
UNBUILDABLE_IDENTIFIER = "org.assetproxy.test.unbuildable"

ALL_IDENTIFIERS = {MOCK_IDENTIFIER, FAULTY_IDENTIFIER, PACKAGE_IDENTIFIER, UNBUILDABLE_IDENTIFIER}


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def plugins_dir() -> Path:
    """Directory holding the test manager plugins."""
    return RESOURCES_DIR / "plugins"


@pytest.fixture
def override_plugins_dir() -> Path:
    """Directory with a second plugin for the mock identifier."""
    return RESOURCES_DIR / "plugins_override"


@pytest.fixture(autouse=True)
def reset_runtime():
    """Give every test its own backend runtime singleton."""
    BackendRuntime.drop_instance()
    yield
    BackendRuntime.drop_instance()


@pytest.fixture
def runtime(plugins_dir):
    """Running backend runtime over the test plugins, without entry points."""
    runtime = BackendRuntime()
    runtime.start([plugins_dir], use_entry_points=False)
    yield runtime
    if runtime.is_running:
        runtime.stop()


@pytest.fixture
def service(runtime) -> ManagerProxyService:
    return ManagerProxyService(runtime=runtime)
