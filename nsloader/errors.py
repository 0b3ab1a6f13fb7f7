"""Exceptions raised by nsloader.

Lookups never raise: a failed resolution returns None so several resolvers
can be chained. These exceptions cover configuration mistakes and failures
while executing a file that was successfully located.
"""


class LoaderError(Exception):
    """Base class for all nsloader errors."""


class ConfigurationError(LoaderError, ValueError):
    """Invalid loader configuration (delimiters, modules, settings file)."""


class ModuleConflictError(LoaderError):
    """A submodule with the same identifier is already registered."""

    def __init__(self, parent: str, identifier: str):
        self.parent = parent
        self.identifier = identifier
        super().__init__(f"Module '{identifier}' already registered under '{parent or '<root>'}'")


class FileLoadError(LoaderError, ImportError):
    """A resolved file exists but could not be executed."""
