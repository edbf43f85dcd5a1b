"""
Entry point for python -m phonepack
"""

import click
from phonepack import __version__
from phonepack.cli import build, embed, inspect

@click.group()
@click.version_option(version=__version__)
def cli():
    """phonepack - Embedded Phone Prefix Table Builder"""
    pass

cli.add_command(build)
cli.add_command(embed)
cli.add_command(inspect)

if __name__ == '__main__':
    cli()
