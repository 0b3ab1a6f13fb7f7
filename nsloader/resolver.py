"""Identifier-to-file resolution.

AutoLoader tracks a module tree, independent search paths and
directory-scoped prefixes, and turns a delimited identifier such as
"Vendor\\Widgets\\Button" into the file that defines it.

Resolution order (first match wins):
1. Module tree: walk declared modules along the namespace tokens,
   accumulating their path fragments, then look up the leaf name
2. Search paths: look up <path>/<namespace tokens>/<leaf> for every
   registered path, in registration order

In both stages a prefix-stripped leaf name ("AbstractWidget" -> "Widget")
is tried before the raw leaf name. A lookup that finds nothing returns None
so other resolvers can take over.
"""

import logging
import os
import sys
from pathlib import Path
from types import ModuleType
from typing import Any

from .config import LoaderConfig
from .config import LoaderSettings
from .config import ModuleSettings
from .errors import ConfigurationError
from .loading import FileLoader
from .modules import ModuleNode
from .paths import PathEntry
from .prefixes import PrefixRegistry
from .tokenizer import DelimiterTokenizer

logger = logging.getLogger(__name__)


class AutoLoader:
    """Resolve delimited identifiers to files and load them on demand."""

    def __init__(
        self,
        paths: list[PathEntry | str] | None = None,
        config: LoaderConfig | None = None,
        delimiters: list[str] | None = None,
        file_loader: FileLoader | None = None,
    ):
        """Initialize loader.

        Args:
            paths: Fallback search paths, in lookup order
            config: Lookup options (default: LoaderConfig())
            delimiters: Delimiters added to the default namespace separator
            file_loader: Load-once executor for resolved files
        """
        self.config = config or LoaderConfig()
        self.tokenizer = DelimiterTokenizer(delimiters)
        self.prefixes = PrefixRegistry()
        self.root = ModuleNode()
        self.file_loader = file_loader or FileLoader()
        self._paths: list[PathEntry] = []
        self._finder = None

        for path in paths or []:
            self.add_path(path)

        if self.config.auto_register:
            self.register()

    @classmethod
    def from_settings(cls, settings: LoaderSettings, file_loader: FileLoader | None = None) -> "AutoLoader":
        """Build a loader from a validated settings document."""
        loader = cls(
            paths=list(settings.paths),
            config=settings.options(),
            delimiters=settings.delimiters,
            file_loader=file_loader,
        )
        for directory, prefixes in settings.prefixes.items():
            for prefix in prefixes:
                loader.add_prefix(directory, prefix)
        _attach_modules(loader.root, settings.modules)
        return loader

    # Delimiters

    def get_delimiters(self) -> list[str]:
        return self.tokenizer.get_delimiters()

    def add_delimiter(self, delimiter: str) -> None:
        self.tokenizer.add_delimiter(delimiter)

    def remove_delimiter(self, delimiter: str) -> None:
        self.tokenizer.remove_delimiter(delimiter)

    def default_delimiters(self) -> None:
        self.tokenizer.default_delimiters()

    # Search paths

    def get_paths(self) -> list[PathEntry]:
        return list(self._paths)

    def add_path(self, path: PathEntry | str, extensions: list[str] | None = None) -> PathEntry:
        """Append a fallback search path (duplicates allowed, order significant)."""
        if isinstance(path, str):
            path = PathEntry(path=path, extensions=extensions or [])
        self._paths.append(path)
        return path

    def remove_path(self, path: PathEntry | str) -> None:
        """Remove every search path pointing at the given directory."""
        target = path.path if isinstance(path, PathEntry) else path
        self._paths = [entry for entry in self._paths if os.path.normpath(entry.path) != os.path.normpath(target)]

    # Prefixes

    def add_prefix(self, directory: str | Path, prefix: str) -> None:
        self.prefixes.add_prefix(directory, prefix)

    def remove_prefix(self, directory: str | Path, prefix: str) -> None:
        self.prefixes.remove_prefix(directory, prefix)

    def get_prefixes(self, directory: str | Path) -> list[str]:
        return self.prefixes.get_prefixes(directory)

    # Module tree

    def add_module(self, identifier: str, path: PathEntry | str, extensions: list[str] | None = None) -> ModuleNode:
        """Declare the module named by identifier, creating missing ancestors.

        Ancestors created on the way get an empty relative fragment and
        therefore contribute nothing to the accumulated directory.

        Raises:
            ConfigurationError: identifier has an empty segment
            ModuleConflictError: the module is already declared
        """
        tokens = self._module_tokens(identifier)
        if isinstance(path, str):
            path = PathEntry(path=path, extensions=extensions or [])

        parent = self.root
        for token in tokens[:-1]:
            if not parent.has_child(token):
                parent.add_submodule(ModuleNode(token))
            parent = parent.child(token)
        return parent.add_submodule(ModuleNode(tokens[-1], path))

    def remove_module(self, identifier: str) -> ModuleNode | None:
        """Detach the module named by identifier together with its subtree."""
        tokens = self._module_tokens(identifier)
        parent = self.root.walk(tokens[:-1])
        if parent is None:
            return None
        return parent.remove_submodule(tokens[-1])

    def get_module(self, identifier: str) -> ModuleNode | None:
        return self.root.walk(self._module_tokens(identifier))

    def _module_tokens(self, identifier: str) -> list[str]:
        tokens = self.tokenizer.tokenize(identifier)
        if not all(tokens):
            raise ConfigurationError(f"Invalid module identifier: {identifier!r}")
        return tokens

    # Resolution

    def tokenize(self, identifier: str) -> list[str]:
        return self.tokenizer.tokenize(identifier)

    def module_directory(self, tokens: list[str]) -> tuple[str, ModuleNode, list[str]] | None:
        """Walk the module tree along namespace tokens.

        Args:
            tokens: Namespace tokens (leaf name already removed)

        Returns:
            Tuple of (accumulated directory, terminating module, unconsumed tokens),
            or None when no top-level module claims the first token
        """
        if not tokens or not self.root.has_child(tokens[0]):
            return None

        remaining = list(tokens)
        node = self.root.child(remaining[0])
        directory = ""
        absolute = False

        while remaining:
            fragment = node.path
            if not fragment.is_relative:
                directory = fragment.path
                absolute = True
            elif fragment.path:
                directory += os.sep + fragment.path

            remaining.pop(0)

            if remaining:
                if not node.has_child(remaining[0]):
                    break
                node = node.child(remaining[0])

        # Relative concatenation leaves one leading separator behind
        if not absolute and directory.startswith(os.sep):
            directory = directory[1:]

        return directory, node, remaining

    def resolve_via_modules(self, tokens: list[str]) -> Path | None:
        """Locate the file for tokens through the module tree."""
        if len(tokens) < 2:
            return None

        *namespace, leaf = tokens
        walked = self.module_directory(namespace)
        if walked is None:
            return None

        directory, node, remaining = walked
        matcher = PathEntry(
            path=os.path.join(*remaining) if remaining else "",
            extensions=node.path.extensions or [self.config.file_extension],
            strict=self.config.strict,
        )
        search_base = self.config.effective_base_path() / directory

        found = self._try_names(matcher, search_base, self.prefixes.strip_prefix(directory, leaf), leaf)
        if found:
            logger.debug(f"[nsloader:resolve] {leaf} -> module tree ({found})")
        return found

    def resolve_via_paths(self, identifier: str) -> Path | None:
        """Locate the file for identifier through the independent search paths."""
        *namespace, leaf = self.tokenizer.tokenize(identifier)
        if not namespace:
            return None

        base_path = self.config.effective_base_path()
        for entry in self._paths:
            matcher = PathEntry(
                path=os.path.join(entry.path, *namespace),
                extensions=entry.extensions or [self.config.file_extension],
                strict=self.config.strict,
            )
            found = self._try_names(matcher, base_path, self.prefixes.strip_prefix(entry.path, leaf), leaf)
            if found:
                logger.debug(f"[nsloader:resolve] {leaf} -> search path {entry.path} ({found})")
                return found

        return None

    def _try_names(self, matcher: PathEntry, search_base: Path, unprefixed: str, leaf: str) -> Path | None:
        if unprefixed and (found := matcher.is_filename(unprefixed, search_base)):
            return found
        return matcher.is_filename(leaf, search_base)

    def find(self, identifier: str) -> Path | None:
        """Return the file defining identifier, or None.

        Unqualified identifiers (no delimiter) and identifiers with an empty
        leaf name ("Vendor\\") are never looked up.
        """
        tokens = self.tokenizer.tokenize(identifier)
        if len(tokens) < 2 or not tokens[-1]:
            logger.debug(f"[nsloader:resolve] {identifier} is unqualified, skipping")
            return None

        found = self.resolve_via_modules(tokens) or self.resolve_via_paths(identifier)
        if found is None:
            logger.debug(f"[nsloader:resolve] {identifier} not found")
        return found

    def resolve(self, identifier: str) -> ModuleType | None:
        """Find and load the file defining identifier.

        Returns:
            The loaded module, None if no file matched

        Raises:
            FileLoadError: A file matched but executing it failed
        """
        found = self.find(identifier)
        if found is None:
            return None
        return self.file_loader.load(found, identifier)

    def namespace_directories(self, identifier: str) -> list[Path]:
        """Existing directories that identifier names as a namespace.

        Candidates are the module-tree directory (including undeclared
        trailing tokens as subdirectories) and <path>/<tokens> for every
        search path, in lookup order.
        """
        tokens = self.tokenizer.tokenize(identifier)
        if not all(tokens):
            return []

        base_path = self.config.effective_base_path()
        candidates = []
        walked = self.module_directory(tokens)
        if walked is not None:
            directory, _node, remaining = walked
            candidates.append(base_path.joinpath(directory, *remaining))
        for entry in self._paths:
            candidates.append(entry.directory(base_path).joinpath(*tokens))

        return [candidate for candidate in candidates if candidate.is_dir()]

    def is_namespace(self, identifier: str) -> bool:
        """True if identifier names a declared module or an existing namespace directory."""
        tokens = self.tokenizer.tokenize(identifier)
        if not all(tokens):
            return False
        return self.root.walk(tokens) is not None or bool(self.namespace_directories(identifier))

    # Import system

    def register(self) -> None:
        """Install this loader's import hook at the end of sys.meta_path."""
        from .finder import AutoLoaderFinder

        if self._finder is None:
            self._finder = AutoLoaderFinder(self)
        if self._finder not in sys.meta_path:
            sys.meta_path.append(self._finder)
            logger.debug("[nsloader:register] import hook installed")

    def unregister(self) -> None:
        if self._finder is not None and self._finder in sys.meta_path:
            sys.meta_path.remove(self._finder)
            logger.debug("[nsloader:register] import hook removed")

    @property
    def registered(self) -> bool:
        return self._finder is not None and self._finder in sys.meta_path

    def debug_info(self) -> dict[str, Any]:
        """Snapshot of the current configuration for diagnostics."""
        return {
            "options": {
                "strict": self.config.strict,
                "auto_register": self.config.auto_register,
                "file_extension": self.config.file_extension,
                "base_path": str(self.config.effective_base_path()),
            },
            "delimiters": self.get_delimiters(),
            "paths": [entry.model_dump(exclude={"strict"}) for entry in self._paths],
            "prefixes": self.prefixes.to_dict(),
            "modules": {node.identifier: node.to_dict() for node in self.root.children()},
        }

    def __repr__(self) -> str:
        return f"AutoLoader(paths={len(self._paths)}, delimiters={self.get_delimiters()!r})"


def _attach_modules(parent: ModuleNode, modules: dict[str, ModuleSettings]) -> None:
    for identifier, spec in modules.items():
        node = parent.add_submodule(ModuleNode(identifier, PathEntry(path=spec.path, extensions=spec.extensions)))
        _attach_modules(node, spec.modules)
