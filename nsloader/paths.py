"""Path entries and file matching.

A PathEntry is a directory fragment plus the file extensions it accepts. It is
used three ways: as the path fragment owned by a module node, as an
independently registered search path, and as the matcher that decides whether
a candidate file exists.
"""

import logging
from pathlib import Path

from pydantic import BaseModel
from pydantic import Field
from pydantic import field_validator

logger = logging.getLogger(__name__)


class PathEntry(BaseModel):
    """Directory fragment with an extension policy."""

    path: str = Field(default="", description="Relative or absolute directory")
    extensions: list[str] = Field(default_factory=list, description="Accepted file extensions, in lookup order")
    strict: bool = Field(default=False, description="Only accept files carrying one of the extensions")

    @field_validator("extensions")
    @classmethod
    def normalize_extensions(cls, value: list[str]) -> list[str]:
        return [ext if ext.startswith(".") else f".{ext}" for ext in value if ext]

    @property
    def is_relative(self) -> bool:
        return not Path(self.path).is_absolute()

    def directory(self, search_base: str | Path) -> Path:
        """Directory this entry points at once anchored to search_base."""
        if self.is_relative:
            return Path(search_base) / self.path
        return Path(self.path)

    def candidates(self, name: str) -> list[str]:
        """File names tried for name, in order (excluding the non-strict stem scan)."""
        if not self.extensions:
            return [name]
        names = [f"{name}{ext}" for ext in self.extensions]
        if not self.strict:
            names.append(name)
        return names

    def is_filename(self, name: str, search_base: str | Path) -> Path | None:
        """Locate name in this entry's directory.

        Args:
            name: Bare file name without extension (e.g. "Button")
            search_base: Directory a relative entry is anchored to

        Returns:
            Absolute path of the first matching regular file, None if nothing matches
        """
        directory = self.directory(search_base)

        try:
            for candidate in self.candidates(name):
                target = directory / candidate
                if target.is_file():
                    return target.resolve()

            if self.strict or not directory.is_dir():
                return None

            # Non-strict: any file sharing the stem, whatever its extension
            for target in sorted(directory.glob(f"{_escape_glob(name)}.*")):
                if target.stem == name and target.is_file():
                    return target.resolve()
        except OSError as e:
            logger.debug(f"[nsloader:paths] cannot search {directory} for {name}: {e}")
            return None

        return None

    def __str__(self) -> str:
        return self.path


def _escape_glob(name: str) -> str:
    return "".join(f"[{c}]" if c in "*?[" else c for c in name)
