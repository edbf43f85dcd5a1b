"""
Error types raised while building embedded prefix tables.

Every fatal condition derives from BuildError so a single top-level handler
can report it and stop the run.
"""

from typing import Optional


class BuildError(Exception):
    """Base class for every fatal build condition."""


class InputFormatError(BuildError):
    """A raw input line could not be turned into a record."""

    def __init__(self, message: str, source: Optional[str] = None,
                 line_number: Optional[int] = None, line: Optional[str] = None):
        self.source = source
        self.line_number = line_number
        self.line = line

        location = []
        if source is not None:
            location.append(str(source))
        if line_number is not None:
            location.append(f"line {line_number}")
        prefix = ':'.join(location)
        text = f"{prefix}: {message}" if prefix else message
        if line is not None:
            text = f"{text}: {line!r}"
        super().__init__(text)


class DuplicateKeyError(InputFormatError):
    """The same prefix appeared twice within one table."""

    def __init__(self, key: int, source: Optional[str] = None,
                 line_number: Optional[int] = None, line: Optional[str] = None):
        self.key = key
        super().__init__(f"repeated prefix {key}", source, line_number, line)


class CapacityError(BuildError):
    """A table holds more than its wire format can index."""


class TargetMissingError(BuildError):
    """The artifact to overwrite does not exist."""

    def __init__(self, path):
        self.path = path
        super().__init__(
            f"no such file: {path} make sure you are running from the root "
            f"of the repo directory"
        )


class ArtifactFormatError(BuildError):
    """An encoded buffer or generated file could not be read back."""
