"""Module tree used to map namespaces onto directories."""

import logging
from collections.abc import Iterator
from typing import Any

from .errors import ConfigurationError
from .errors import ModuleConflictError
from .paths import PathEntry

logger = logging.getLogger(__name__)


class ModuleNode:
    """A named node in the module tree.

    Each node owns exactly one path fragment and any number of uniquely named
    children. The root node has the empty identifier and an empty relative
    fragment.
    """

    def __init__(self, identifier: str = "", path: PathEntry | str | None = None):
        if path is None:
            path = PathEntry()
        elif isinstance(path, str):
            path = PathEntry(path=path)

        self.identifier = identifier
        self.path = path
        self._children: dict[str, ModuleNode] = {}

    def has_child(self, identifier: str) -> bool:
        return identifier in self._children

    def child(self, identifier: str) -> "ModuleNode":
        """Return the child registered under identifier.

        Raises:
            KeyError: No such child
        """
        return self._children[identifier]

    def children(self) -> Iterator["ModuleNode"]:
        return iter(self._children.values())

    def add_submodule(self, node: "ModuleNode") -> "ModuleNode":
        """Attach node as a child.

        Raises:
            ConfigurationError: Node has an empty identifier
            ModuleConflictError: A child with the same identifier exists
        """
        if not node.identifier:
            raise ConfigurationError("Submodules must have a non-empty identifier")
        if node.identifier in self._children:
            raise ModuleConflictError(self.identifier, node.identifier)

        self._children[node.identifier] = node
        logger.debug(f"[nsloader:modules] {self.identifier or '<root>'} += {node.identifier} ({node.path})")
        return node

    def remove_submodule(self, identifier: str) -> "ModuleNode | None":
        """Detach and return the child named identifier, None if absent."""
        return self._children.pop(identifier, None)

    def walk(self, tokens: list[str]) -> "ModuleNode | None":
        """Follow tokens down the tree; None if any token is not a declared child."""
        node = self
        for token in tokens:
            if not node.has_child(token):
                return None
            node = node.child(token)
        return node

    def to_dict(self) -> dict[str, Any]:
        """Nested dictionary view for diagnostics."""
        result: dict[str, Any] = {"path": self.path.path}
        if self.path.extensions:
            result["extensions"] = list(self.path.extensions)
        if self._children:
            result["modules"] = {name: child.to_dict() for name, child in self._children.items()}
        return result

    def __repr__(self) -> str:
        return f"ModuleNode({self.identifier!r}, {self.path.path!r}, children={list(self._children)})"
