"""
Services layer - build orchestration.
"""

from phonepack.services.builder import BuildResult, PrefixDataBuilder, write_artifact
from phonepack.services.sources import DirectorySource

# Provide consistent naming
Builder = PrefixDataBuilder

__all__ = [
    'BuildResult',
    'PrefixDataBuilder',
    'DirectorySource',
    'write_artifact',
    # Aliases
    'Builder',
]
