"""Module loader for manager plugin modules.

This module provides utilities for loading plugin code from the forms it is
found in on a plugin search path (single ``.py`` files and package
directories).
"""

from __future__ import annotations

import hashlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    import logging


def _get_logger() -> logging.Logger:
    from assetproxy.shared.logging import get_logger
    return get_logger(__name__)


class ModuleLoader:
    """Loader for Python modules from plugin paths.

    This class handles loading modules from:
    - Module files: "/plugins/my_manager.py"
    - Package directories: "/plugins/my_manager" (containing __init__.py)

    Modules loaded from the file system are registered in ``sys.modules``
    under a name derived from their location, so that two plugins with the
    same file name in different directories do not shadow each other and
    packages can use relative imports.
    """

    MODULE_PREFIX = "assetproxy_plugin_"

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger: Optional[logging.Logger] = logger

    @property
    def logger(self) -> logging.Logger:
        if not self._logger:
            self._logger = _get_logger()
        return self._logger

    @staticmethod
    def is_loadable(path: Path) -> bool:
        """Check whether a plugin path entry is a module file or package."""
        if path.name.startswith((".", "_")):
            return False
        if path.is_file():
            return path.suffix == ".py"
        return path.is_dir() and (path / "__init__.py").is_file()

    def load_from_location(self, location: Path) -> ModuleType:
        """Load module from a module file or a package directory.

        Args:
            location: Path to a .py file or to a directory with __init__.py

        Returns:
            ModuleType: Loaded module

        Raises:
            FileNotFoundError: If the location doesn't exist
            ValueError: If the location cannot be loaded as a module
        """
        location = location.resolve()
        if not location.exists():
            raise FileNotFoundError(f"Module location not found: {location}")

        mod_name = self._module_name_for(location)

        if location.is_dir():
            init_file = location / "__init__.py"
            if not init_file.is_file():
                raise ValueError(f"Directory is not a Python package: {location}")
            spec = importlib.util.spec_from_file_location(
                mod_name, init_file, submodule_search_locations=[str(location)]
            )
        else:
            spec = importlib.util.spec_from_file_location(mod_name, location)

        if spec is None or spec.loader is None:
            raise ValueError(
                f"Could not create module spec from: {location}\n"
                f"File may not be a valid Python module."
            )

        self.logger.debug(f"Loading module from: {location}")
        module = importlib.util.module_from_spec(spec)
        sys.modules[mod_name] = module

        try:
            spec.loader.exec_module(module)
        except Exception as e:
            sys.modules.pop(mod_name, None)
            raise ValueError(
                f"Failed to execute module from {location}: {e}"
            ) from e

        return module

    def _module_name_for(self, location: Path) -> str:
        digest = hashlib.sha1(str(location).encode("utf-8")).hexdigest()[:12]
        return f"{self.MODULE_PREFIX}{location.stem}_{digest}"
