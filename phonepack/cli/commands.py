"""
CLI commands for phonepack.
"""

import logging
import sys
from dataclasses import replace
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from phonepack.config import (
    DEFAULT_BUILDS, METADATA_BLOBS,
    BlobBuild, BuildSettings, SourceKind, find_build, load_settings,
)
from phonepack.context.encoding.embedding import SourceDialect, extract_literals, unembed_bytes
from phonepack.context.encoding.table import read_table
from phonepack.context.metadata import load_metadata_collection
from phonepack.errors import BuildError
from phonepack.models import Layout
from phonepack.services import DirectorySource, PrefixDataBuilder

console = Console()

BUILD_NAMES = [build.name for build in DEFAULT_BUILDS]
DIALECTS = [dialect.value for dialect in SourceDialect]


def setup_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _settings(config, output, package, dialect) -> BuildSettings:
    settings = load_settings(config) if config else BuildSettings()
    changes = {}
    if output:
        changes['output_dir'] = Path(output)
    if package:
        changes['package'] = package
    if dialect:
        changes['dialect'] = SourceDialect(dialect)
    return replace(settings, **changes)


@click.command()
@click.option('--source', '-s', required=True, type=click.Path(exists=True, file_okay=False),
              help='Resources directory holding timezones/, carrier/ and geocoding/')
@click.option('--output', '-o', type=click.Path(file_okay=False),
              help='Directory holding the generated files to overwrite (default: .)')
@click.option('--metadata', '-m', type=click.Path(exists=True, dir_okay=False),
              help='JSON territory list for the region map')
@click.option('--only', multiple=True, type=click.Choice(BUILD_NAMES),
              help='Run only the named build (repeatable)')
@click.option('--package', help='Package name written at the top of generated files')
@click.option('--dialect', type=click.Choice(DIALECTS), help='Generated source language')
@click.option('--config', '-c', type=click.Path(exists=True, dir_okay=False),
              help='JSON settings file')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def build(source, output, metadata, only, package, dialect, config, verbose):
    """
    Rebuild the embedded prefix tables from raw resource files.

    Example:
        phonepack build -s libphonenumber/resources -m territories.json -o ../phonenumbers
    """
    setup_logging(verbose)

    try:
        settings = _settings(config, output, package, dialect)

        collection = None
        if metadata:
            collection = load_metadata_collection(Path(metadata).read_bytes(), metadata)

        if only:
            builds = [find_build(name) for name in BUILD_NAMES if name in only]
        else:
            builds = [b for b in DEFAULT_BUILDS
                      if b.kind is not SourceKind.METADATA or collection is not None]
            if collection is None:
                logging.getLogger(__name__).warning(
                    "No --metadata given, skipping region map"
                )

        builder = PrefixDataBuilder(DirectorySource(source), settings, collection)
        results = builder.run(builds)
    except (BuildError, OSError) as err:
        click.echo(f"Error: {err}", err=True)
        sys.exit(1)

    table = Table(title="Build Results")
    table.add_column("Build", style="cyan")
    table.add_column("Target")
    table.add_column("Tables", justify="right")
    table.add_column("Entries", justify="right")
    table.add_column("Values", justify="right")
    table.add_column("Encoded", justify="right")
    table.add_column("Artifact", justify="right")
    table.add_column("Time", justify="right")
    for result in results:
        table.add_row(
            result.name,
            str(result.target),
            str(result.table_count),
            f"{result.entry_count:,}",
            f"{result.value_count:,}",
            f"{result.encoded_size:,} B",
            f"{result.artifact_size:,} B",
            f"{result.build_time:.2f}s",
        )
    console.print(table)
    click.echo(f"\n✓ Wrote {len(results)} artifact(s)")


@click.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False))
@click.argument('target', type=click.Path(dir_okay=False))
@click.option('--variable', help='Constant name (defaults to the known name for the target file)')
@click.option('--package', help='Package name written at the top of the generated file')
@click.option('--dialect', type=click.Choice(DIALECTS), help='Generated source language')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def embed(input_file, target, variable, package, dialect, verbose):
    """
    Embed a serialized blob (e.g. binary phone metadata) into TARGET.

    Example:
        phonepack embed metadata.bin ../phonenumbers/metadata_bin.go
    """
    setup_logging(verbose)
    target_path = Path(target)

    if variable is None:
        known = {blob.target: blob.variable for blob in METADATA_BLOBS}
        variable = known.get(target_path.name)
        if variable is None:
            click.echo(f"Error: --variable is required for {target_path.name}", err=True)
            sys.exit(1)

    try:
        settings = _settings(None, str(target_path.parent), package, dialect)
        builder = PrefixDataBuilder(DirectorySource(target_path.parent), settings)
        blob = BlobBuild(name=Path(input_file).name, target=target_path.name, variable=variable)
        result = builder.build_blob(blob, Path(input_file).read_bytes())
    except (BuildError, OSError) as err:
        click.echo(f"Error: {err}", err=True)
        sys.exit(1)

    click.echo(f"✓ Embedded {result.encoded_size:,} bytes into {result.target} "
               f"({result.artifact_size:,} bytes)")


@click.command()
@click.argument('generated_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--multi-value', is_flag=True, help='Tables use the multi-value layout (timezones)')
@click.option('--limit', type=int, default=0, help='Entries to print per table (default: 0)')
def inspect(generated_file, multi_value, limit):
    """
    Decode the tables embedded in a generated file and summarize them.

    Example:
        phonepack inspect ../phonenumbers/prefix_to_timezone_bin.go --multi-value --limit 5
    """
    layout = Layout.MULTI if multi_value else Layout.SINGLE

    try:
        text = Path(generated_file).read_text(encoding='utf-8')
        decoded = {name: read_table(unembed_bytes(literal), layout)
                   for name, literal in extract_literals(text).items()}
    except (BuildError, OSError) as err:
        click.echo(f"Error: {err}", err=True)
        sys.exit(1)

    table = Table(title=Path(generated_file).name)
    table.add_column("Table", style="cyan")
    table.add_column("Entries", justify="right")
    table.add_column("Values", justify="right")
    table.add_column("First prefix", justify="right")
    table.add_column("Last prefix", justify="right")
    for name, mapping in decoded.items():
        values = set()
        for value in mapping.values():
            values.update([value] if isinstance(value, str) else value)
        keys = sorted(mapping)
        table.add_row(
            name,
            f"{len(mapping):,}",
            f"{len(values):,}",
            str(keys[0]) if keys else "-",
            str(keys[-1]) if keys else "-",
        )
    console.print(table)

    if limit:
        for name, mapping in decoded.items():
            click.echo(f"\n{name}:")
            for key in sorted(mapping)[:limit]:
                value = mapping[key]
                shown = value if isinstance(value, str) else ' & '.join(value)
                click.echo(f"  {key}|{shown}")
