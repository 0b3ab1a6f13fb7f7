"""Load-once execution of resolved source files."""

import hashlib
import importlib.machinery
import importlib.util
import logging
import re
import sys
from pathlib import Path
from types import ModuleType

from .errors import FileLoadError

logger = logging.getLogger(__name__)


def module_name_for(path: Path, identifier: str | None = None) -> str:
    """Derive a module name for a file loaded outside the import system.

    The readable part comes from identifier (or the file stem); a digest of
    the absolute path keeps names of distinct files distinct.
    """
    source = identifier or path.stem
    digest = hashlib.sha256(str(Path(path).resolve()).encode()).hexdigest()[:12]
    readable = re.sub(r"\W", "_", source)
    return f"nsloader_loaded.{readable}_{digest}"


class FileLoader:
    """Execute Python files at most once, keyed by absolute path."""

    def __init__(self):
        self._loaded: dict[Path, ModuleType] = {}

    def is_loaded(self, path: str | Path) -> bool:
        return Path(path).resolve() in self._loaded

    def loaded_files(self) -> list[Path]:
        return list(self._loaded)

    def load(self, path: str | Path, identifier: str | None = None) -> ModuleType:
        """Execute the file at path unless it was already loaded.

        Args:
            path: File to execute
            identifier: Identifier the file was resolved from, used for the module name

        Returns:
            The module object produced by executing the file

        Raises:
            FileLoadError: The file could not be executed
        """
        path = Path(path).resolve()
        if path in self._loaded:
            logger.debug(f"[nsloader:load] already loaded: {path}")
            return self._loaded[path]

        name = module_name_for(path, identifier)
        # Explicit source loader so files with any configured extension execute
        loader = importlib.machinery.SourceFileLoader(name, str(path))
        spec = importlib.util.spec_from_file_location(name, path, loader=loader)

        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            sys.modules.pop(name, None)
            raise FileLoadError(f"Failed to load {path}: {e}", name=name, path=str(path)) from e

        self._loaded[path] = module
        logger.debug(f"[nsloader:load] loaded {path} as {name}")
        return module
