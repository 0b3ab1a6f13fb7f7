"""Directory-scoped identifier prefixes."""

import os
from pathlib import Path


def _key(directory: str | Path) -> str:
    return os.path.normpath(str(directory))


class PrefixRegistry:
    """Prefixes registered per directory.

    A prefix never excludes a directory from a lookup; it only yields an
    alternate leaf name to try first (e.g. "AbstractWidget" -> "Widget").
    """

    def __init__(self):
        self._prefixes: dict[str, list[str]] = {}

    def add_prefix(self, directory: str | Path, prefix: str) -> None:
        if not prefix:
            return
        prefixes = self._prefixes.setdefault(_key(directory), [])
        if prefix not in prefixes:
            prefixes.append(prefix)

    def remove_prefix(self, directory: str | Path, prefix: str) -> None:
        key = _key(directory)
        prefixes = self._prefixes.get(key)
        if prefixes and prefix in prefixes:
            prefixes.remove(prefix)
            if not prefixes:
                del self._prefixes[key]

    def get_prefixes(self, directory: str | Path) -> list[str]:
        return list(self._prefixes.get(_key(directory), []))

    def strip_prefix(self, directory: str | Path, leaf_name: str) -> str:
        """Return leaf_name without its registered prefix, or "" when none matches.

        Every matching prefix is applied to the original name in registration
        order and the last match wins.
        """
        stripped = ""
        for prefix in self._prefixes.get(_key(directory), []):
            if leaf_name.startswith(prefix):
                stripped = leaf_name[len(prefix) :]
        return stripped

    def to_dict(self) -> dict[str, list[str]]:
        return {directory: list(prefixes) for directory, prefixes in self._prefixes.items()}
