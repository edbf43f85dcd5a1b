"""
Builder: turns raw prefix sources into embedded source artifacts

Each build runs the same pipeline:
1. Parse raw records into one table (timezone, region) or one table per
   language directory (carrier, geocoding)
2. Intern values and serialize every table (see context.encoding.table)
3. gzip + base64 the buffers and render them as a source fragment
4. Overwrite the existing target file

Builds are fail-fast: the first BuildError propagates out of run() and no
partially written artifact is left behind.
"""

import logging
import os
import stat
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from phonepack.config import (
    DEFAULT_BUILDS, REGION_BUILD, TIMEZONE_BUILD,
    BlobBuild, BuildSettings, Grouping, PrefixBuild, SourceKind,
)
from phonepack.context.encoding.embedding import generate_bin_file, generate_map_file
from phonepack.context.encoding.table import serialize_table
from phonepack.context.metadata import main_region_pairs, region_table
from phonepack.context.parsing import parse_prefix_bytes, read_language_group
from phonepack.errors import BuildError, TargetMissingError
from phonepack.models import MetadataCollection, PrefixTable
from phonepack.protocols import RegionExtractor, SourceProvider

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Summary of one written artifact."""
    name: str
    target: Path
    table_count: int
    entry_count: int
    value_count: int
    encoded_size: int
    artifact_size: int
    build_time: float


def write_artifact(path: Union[str, Path], text: str):
    """
    Overwrite an existing generated file

    The target must already exist: a missing file almost always means the
    build is running from the wrong directory. Content goes to a temporary
    sibling first and is moved into place in one step. The file keeps its
    permissions, and a symlinked target is updated through the link.
    """
    path = Path(path)
    if not path.is_file():
        raise TargetMissingError(path)
    path = path.resolve()
    mode = stat.S_IMODE(os.stat(path).st_mode)

    logger.info("Writing new %s", path)
    fd, tmp_path = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, 'w', encoding='utf-8', newline='\n') as f:
            f.write(text)
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except OSError as err:
        try:
            os.remove(tmp_path)
        except OSError:
            logger.debug("Temporary file %s already gone", tmp_path)
        raise BuildError(f"Error writing '{path}': {err}") from err


class PrefixDataBuilder:
    """
    Drives the encode pipeline for each configured build

    Args:
        source: Provider of raw files and exported directory trees
        settings: Output directory, package name and dialect
        metadata: Territory collection for the region build
        extractor: Reduction of the collection to prefix -> region
    """

    def __init__(self, source: SourceProvider,
                 settings: Optional[BuildSettings] = None,
                 metadata: Optional[MetadataCollection] = None,
                 extractor: RegionExtractor = main_region_pairs):
        self.source = source
        self.settings = settings or BuildSettings()
        self.metadata = metadata
        self.extractor = extractor

    def run(self, builds: Iterable[PrefixBuild] = DEFAULT_BUILDS) -> List[BuildResult]:
        """Run builds in order, stopping at the first failure."""
        return [self.build(build) for build in builds]

    def build(self, build: PrefixBuild) -> BuildResult:
        if build.kind is SourceKind.METADATA:
            return self.build_regions(build)
        if build.grouping is Grouping.PER_LANGUAGE:
            return self.build_prefix_data(build)
        return self.build_flat(build)

    def build_regions(self, build: PrefixBuild = REGION_BUILD) -> BuildResult:
        """Country calling code -> region code(s), from the metadata collection."""
        logger.info("Building %s map", build.name)
        if self.metadata is None:
            raise BuildError(f"{build.name} build needs a metadata collection")

        start = time.time()
        table = region_table(self.metadata, self.extractor, build.layout, build.name)
        return self._write_flat(build, table, start)

    def build_timezones(self, build: PrefixBuild = TIMEZONE_BUILD) -> BuildResult:
        return self.build_flat(build)

    def build_flat(self, build: PrefixBuild) -> BuildResult:
        """One pipe-delimited source file -> one embedded table."""
        logger.info("Building %s map", build.name)
        start = time.time()
        data = self.source.fetch(build.source)
        table = parse_prefix_bytes(data, build.source, build.layout)
        return self._write_flat(build, table, start)

    def build_prefix_data(self, build: PrefixBuild) -> BuildResult:
        """Directory tree -> one embedded table per language, in a single file."""
        logger.info("Building %s maps", build.name)
        start = time.time()
        root = self.source.export_tree(build.source)
        group = read_language_group(root, build.layout)

        buffers: Dict[str, bytes] = {}
        for lang, table in group.items():
            buffers[lang] = serialize_table(table)

        _, text = generate_map_file(build.variable, buffers,
                                    self.settings.package, self.settings.dialect)
        target = self.settings.target_path(build)
        write_artifact(target, text)

        return BuildResult(
            name=build.name,
            target=target,
            table_count=len(group),
            entry_count=sum(len(t) for t in group.values()),
            value_count=sum(len(set(t.iter_values())) for t in group.values()),
            encoded_size=sum(len(b) for b in buffers.values()),
            artifact_size=len(text),
            build_time=time.time() - start,
        )

    def build_blob(self, build: BlobBuild, data: bytes) -> BuildResult:
        """Embed an already-serialized blob, e.g. binary phone metadata."""
        logger.info("Writing %s blob", build.name)
        start = time.time()
        _, text = generate_bin_file(build.variable, data,
                                    self.settings.package, self.settings.dialect)
        target = self.settings.target_path(build)
        write_artifact(target, text)
        return BuildResult(build.name, target, 0, 0, 0, len(data), len(text),
                           time.time() - start)

    def _write_flat(self, build: PrefixBuild, table: PrefixTable, start: float) -> BuildResult:
        encoded = serialize_table(table)
        _, text = generate_bin_file(build.variable, encoded,
                                    self.settings.package, self.settings.dialect)
        target = self.settings.target_path(build)
        write_artifact(target, text)

        return BuildResult(
            name=build.name,
            target=target,
            table_count=1,
            entry_count=len(table),
            value_count=len(set(table.iter_values())),
            encoded_size=len(encoded),
            artifact_size=len(text),
            build_time=time.time() - start,
        )
