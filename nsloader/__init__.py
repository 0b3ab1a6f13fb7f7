"""Resolve delimited identifiers to source files and load them on demand.

The resolver walks a tree of declared modules, each owning a directory
fragment, then falls back to independently registered search paths.
"""

from .config import LoaderConfig
from .config import LoaderSettings
from .config import ModuleSettings
from .config import load_settings
from .errors import ConfigurationError
from .errors import FileLoadError
from .errors import LoaderError
from .errors import ModuleConflictError
from .finder import AutoLoaderFinder
from .loading import FileLoader
from .modules import ModuleNode
from .paths import PathEntry
from .prefixes import PrefixRegistry
from .resolver import AutoLoader
from .tokenizer import DEFAULT_DELIMITER
from .tokenizer import DelimiterTokenizer

__all__ = [
    "AutoLoader",
    "AutoLoaderFinder",
    "ConfigurationError",
    "DEFAULT_DELIMITER",
    "DelimiterTokenizer",
    "FileLoadError",
    "FileLoader",
    "LoaderConfig",
    "LoaderError",
    "LoaderSettings",
    "ModuleConflictError",
    "ModuleNode",
    "ModuleSettings",
    "PathEntry",
    "PrefixRegistry",
    "load_settings",
]
