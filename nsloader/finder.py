"""Import-system hook backed by an AutoLoader.

Dotted import names are rewritten to the loader's canonical delimiter, so
``import Vendor.Widgets.Button`` resolves like the identifier
``Vendor\\Widgets\\Button``. Namespaces with no file of their own (declared
modules, or directories under a module or search path) are imported as empty
packages so their children can be imported beneath them.
"""

import importlib.machinery
import importlib.util
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .resolver import AutoLoader

logger = logging.getLogger(__name__)


class AutoLoaderFinder:
    """Meta path finder delegating lookups to an AutoLoader."""

    def __init__(self, loader: "AutoLoader"):
        self.loader = loader

    def _identifier(self, fullname: str) -> str:
        return fullname.replace(".", self.loader.tokenizer.canonical)

    def find_spec(self, fullname, path=None, target=None):
        identifier = self._identifier(fullname)

        found = self.loader.find(identifier)
        if found is not None:
            logger.debug(f"[nsloader:import] {fullname} -> {found}")
            source_loader = importlib.machinery.SourceFileLoader(fullname, str(found))
            return importlib.util.spec_from_file_location(fullname, found, loader=source_loader)

        if self.loader.is_namespace(identifier):
            logger.debug(f"[nsloader:import] {fullname} -> namespace package")
            return importlib.machinery.ModuleSpec(fullname, self, is_package=True)

        return None

    def create_module(self, spec):
        return None

    def exec_module(self, module) -> None:
        """Namespace packages carry no code of their own."""

    def invalidate_caches(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"AutoLoaderFinder({self.loader!r})"
