import pytest

from assetproxy.exceptions import UnknownIdentifier
from assetproxy.managers import ManagerPlugin
from assetproxy.plugins import ManagerImplementationFactory, PluginRegistry, PluginSystem

from conftest import ALL_IDENTIFIERS, MOCK_IDENTIFIER


class NotAManagerPlugin(ManagerPlugin):

    @classmethod
    def identifier(cls):
        return "org.assetproxy.test.not_a_manager"

    @classmethod
    def interface(cls):
        return object()


class TestManagerImplementationFactory:
    """Tests for ManagerImplementationFactory class."""

    @pytest.fixture
    def factory(self, plugins_dir):
        plugin_system = PluginSystem()
        plugin_system.scan([plugins_dir], use_entry_points=False)
        return ManagerImplementationFactory(plugin_system)

    def test_identifiers(self, factory):
        assert set(factory.identifiers()) == ALL_IDENTIFIERS

    def test_identifiers_without_plugins(self):
        assert ManagerImplementationFactory(PluginSystem()).identifiers() == []

    def test_instantiate(self, factory):
        manager = factory.instantiate(MOCK_IDENTIFIER)

        assert manager.identifier() == MOCK_IDENTIFIER
        assert manager.display_name() == "Mock Manager"
        assert manager.info() == {"isTest": True}

    def test_instantiate_returns_new_instances(self, factory):
        first = factory.instantiate(MOCK_IDENTIFIER)
        second = factory.instantiate(MOCK_IDENTIFIER)

        assert first is not second

    def test_instantiate_unknown_identifier(self, factory):
        with pytest.raises(UnknownIdentifier) as exc_info:
            factory.instantiate("org.example.unknown")

        assert exc_info.value.identifier == "org.example.unknown"
        assert exc_info.value.kind == "UnknownIdentifier"

    def test_instantiate_propagates_plugin_errors(self, factory):
        with pytest.raises(RuntimeError, match="offline"):
            factory.instantiate("org.assetproxy.test.unbuildable")

    def test_instantiate_rejects_non_manager(self):
        registry = PluginRegistry()
        registry.register(NotAManagerPlugin)
        factory = ManagerImplementationFactory(PluginSystem(registry=registry))

        with pytest.raises(TypeError, match="expected a ManagerInterface"):
            factory.instantiate("org.assetproxy.test.not_a_manager")
