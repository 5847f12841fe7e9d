"""Manager plugin shipped as a package, using relative imports."""
from assetproxy.managers import ManagerPlugin

from .interface import IDENTIFIER, PackageManagerInterface


class PackageManagerPlugin(ManagerPlugin):

    @classmethod
    def identifier(cls):
        return IDENTIFIER

    @classmethod
    def interface(cls):
        return PackageManagerInterface()


plugin = PackageManagerPlugin
