"""
Protocols (interfaces) for phonepack collaborators.

Fetching raw data is not part of the encoding core; builders receive a
SourceProvider and only ever see bytes or a directory tree.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Tuple, Union

from phonepack.models import MetadataCollection

__all__ = [
    'SourceProvider',
    'RegionExtractor',
]


class SourceProvider(ABC):
    """Protocol for obtaining raw source data."""

    @abstractmethod
    def fetch(self, name: str) -> bytes:
        """
        Return the raw contents of a single source file.

        Args:
            name: Source identifier, e.g. 'timezones/map_data.txt'

        Returns:
            File contents as bytes
        """
        pass

    @abstractmethod
    def export_tree(self, name: str) -> Path:
        """
        Return the root of an exported directory tree of raw text files.

        Args:
            name: Tree identifier, e.g. 'carrier'

        Returns:
            Path to a directory holding one subdirectory per language
        """
        pass


# Reduces a metadata collection to prefix -> region code(s)
RegionExtractor = Callable[
    [MetadataCollection],
    Union[Iterable[Tuple[int, str]], Dict[int, List[str]]],
]
