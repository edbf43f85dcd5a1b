"""
Source providers backed by the local filesystem.
"""

from pathlib import Path
from typing import Union

from phonepack.errors import BuildError
from phonepack.protocols import SourceProvider


class DirectorySource(SourceProvider):
    """
    Serves sources from a local checkout of the upstream resources
    directory, e.g. a libphonenumber `resources/` tree:

        resources/
          timezones/map_data.txt
          carrier/en/1.txt
          geocoding/de/49.txt
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def fetch(self, name: str) -> bytes:
        path = self.root / name
        try:
            return path.read_bytes()
        except OSError as err:
            raise BuildError(f"error reading source {path}: {err}") from err

    def export_tree(self, name: str) -> Path:
        path = self.root / name
        if not path.is_dir():
            raise BuildError(f"source tree not found: {path}")
        return path
