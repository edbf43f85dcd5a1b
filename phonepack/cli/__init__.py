"""
Command line interface.
"""

from phonepack.cli.commands import build, embed, inspect

__all__ = ['build', 'embed', 'inspect']
