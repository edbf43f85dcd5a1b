"""
Compression and source embedding for encoded buffers.

A buffer is gzip-compressed, base64-encoded and written as a quoted string
constant inside a generated source file, so the data ships as part of the
package with no runtime file or database.
"""

import base64
import binascii
import gzip
import json
import re
import zlib
from enum import Enum
from typing import Dict, Tuple

from phonepack.errors import ArtifactFormatError

DEFAULT_PACKAGE = "phonenumbers"


class SourceDialect(Enum):
    """Language of the generated source fragment."""
    GO = "go"
    PYTHON = "python"


def embed_bytes(data: bytes, compresslevel: int = 9) -> str:
    """
    Compress bytes and encode them as a single-line printable literal

    gzip mtime is pinned to 0 so identical input gives identical output.
    """
    compressed = gzip.compress(data, compresslevel=compresslevel, mtime=0)
    return base64.b64encode(compressed).decode('ascii')


def unembed_bytes(text: str) -> bytes:
    """Inverse of embed_bytes."""
    try:
        return gzip.decompress(base64.b64decode(text, validate=True))
    except (binascii.Error, OSError, EOFError, zlib.error) as err:
        raise ArtifactFormatError(f"cannot decode embedded literal: {err}") from err


def _quote(text: str) -> str:
    # JSON string escaping is also a valid Go and Python literal for our
    # ASCII payloads
    return json.dumps(text)


def _header(package: str, dialect: SourceDialect) -> str:
    if dialect is SourceDialect.GO:
        return f"package {package}\n\n"
    return (
        f'"""Embedded prefix data for {package}."""\n'
        f"# Code generated by phonepack. DO NOT EDIT.\n\n"
    )


def generate_bin_file(variable_name: str, data: bytes,
                      package: str = DEFAULT_PACKAGE,
                      dialect: SourceDialect = SourceDialect.GO) -> Tuple[str, str]:
    """
    Render a source fragment declaring one embedded string constant

    Args:
        variable_name: Name of the constant in the generated source
        data: Raw bytes to embed
        package: Package/namespace the consumer expects
        dialect: Target language of the fragment

    Returns:
        Tuple of (variable_name, generated_source_text)

    Example (Go):
        package phonenumbers

        var timezoneMapData = "H4sIAAAAAAAC/..."
    """
    literal = _quote(embed_bytes(data))
    output = [_header(package, dialect)]

    if dialect is SourceDialect.GO:
        output.append(f"var {variable_name} = {literal}\n")
    else:
        output.append(f"{variable_name} = {literal}\n")

    return variable_name, ''.join(output)


def generate_map_file(variable_name: str, buffers: Dict[str, bytes],
                      package: str = DEFAULT_PACKAGE,
                      dialect: SourceDialect = SourceDialect.GO) -> Tuple[str, str]:
    """
    Render a source fragment declaring a language -> embedded literal map

    Languages are written in sorted order so the file is reproducible.
    """
    output = [_header(package, dialect)]

    if dialect is SourceDialect.GO:
        output.append(f"var {variable_name} = map[string]string {{\n")
        indent = "\t"
    else:
        output.append(f"{variable_name} = {{\n")
        indent = "    "

    for lang in sorted(buffers):
        output.append(f"{indent}{_quote(lang)}: {_quote(embed_bytes(buffers[lang]))},\n")

    output.append("}\n")
    return variable_name, ''.join(output)


_LITERAL_PATTERN = re.compile(
    r'^\s*(?:var\s+)?"?(?P<name>[\w.-]+)"?\s*[:=]\s*"(?P<literal>[A-Za-z0-9+/=]*)",?\s*$',
    re.MULTILINE,
)


def extract_literals(text: str) -> Dict[str, str]:
    """
    Read embedded literals back out of a generated source file

    Returns:
        {variable or language name: base64 literal}
    """
    literals = {match.group('name'): match.group('literal')
                for match in _LITERAL_PATTERN.finditer(text)}
    if not literals:
        raise ArtifactFormatError("no embedded literals found")
    return literals
