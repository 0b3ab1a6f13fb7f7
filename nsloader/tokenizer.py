"""Identifier tokenizer with a configurable delimiter set."""

import logging

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = "\\"


class DelimiterTokenizer:
    """Split identifiers on any of several equivalent delimiters.

    The first delimiter is canonical: every other delimiter is rewritten to it
    before splitting, so "Foo_Bar" and "Foo\\Bar" tokenize identically once
    "_" is registered. The set is never empty; removing the last delimiter
    reinstates the default namespace separator.
    """

    def __init__(self, delimiters: list[str] | None = None):
        self.default_delimiters()
        for delimiter in delimiters or []:
            self.add_delimiter(delimiter)

    @property
    def canonical(self) -> str:
        return self._delimiters[0]

    def default_delimiters(self) -> None:
        """Reset to the namespace separator only."""
        self._delimiters = [DEFAULT_DELIMITER]

    def get_delimiters(self) -> list[str]:
        return list(self._delimiters)

    def add_delimiter(self, delimiter: str) -> None:
        """Append a delimiter.

        Raises:
            ConfigurationError: delimiter is empty
        """
        if not delimiter:
            raise ConfigurationError("Delimiter must be a non-empty string")
        self._delimiters.append(delimiter)

    def remove_delimiter(self, delimiter: str) -> None:
        """Remove the first occurrence of delimiter; unknown delimiters are ignored."""
        if delimiter in self._delimiters:
            self._delimiters.remove(delimiter)
        if not self._delimiters:
            logger.debug("[nsloader:tokenize] delimiter set emptied, restoring default")
            self.default_delimiters()

    def tokenize(self, identifier: str) -> list[str]:
        canonical = self.canonical
        for delimiter in self._delimiters[1:]:
            identifier = identifier.replace(delimiter, canonical)
        return identifier.split(canonical)
