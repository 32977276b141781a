"""Copy photos from a volume into a date-partitioned destination tree."""

import logging
import os
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .config import Config
from .date_resolver import DateResolver
from .preferences import FileTypeFilter
from .utils import ensure_directory, find_media_files, get_file_size

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, str], None]


class FileOutcome(Enum):
    COPIED = 'copied'
    SKIPPED_DUPLICATE = 'skipped'
    COPY_FAILED = 'failed'


@dataclass
class ImportResult:
    """Tally of one import pass."""
    found: int = 0
    copied: int = 0
    skipped: int = 0

    @property
    def no_matches(self) -> bool:
        return self.found == 0


def is_duplicate(source: Path, destination: Path) -> bool:
    """Same-named destination file whose nonzero size equals the source's."""
    if not destination.is_file():
        return False
    source_size = get_file_size(source)
    return source_size != 0 and source_size == get_file_size(destination)


class FileImporter:
    """Imports matching files into <destination>/<YYYY>/<YYYY>-<MM>/<name>."""

    def __init__(self, resolver: DateResolver, extension_sets: Dict[str, List[str]]):
        self.resolver = resolver
        self.extension_sets = extension_sets

    @classmethod
    def from_config(cls, config: Config, resolver: DateResolver) -> 'FileImporter':
        return cls(resolver, config.get_import_extensions())

    def find_files(self, source: Path, file_filter: FileTypeFilter) -> List[Path]:
        """Regular files under source whose extension matches the filter."""
        return find_media_files(source, file_filter.extensions(self.extension_sets))

    def import_file(self, src_path: Path, destination: Path) -> FileOutcome:
        """Place one file under its resolved date directory."""
        date = self.resolver.resolve(src_path)
        dest_dir = destination / date.relative_dir
        ensure_directory(dest_dir)
        dst_path = dest_dir / src_path.name

        if is_duplicate(src_path, dst_path):
            logger.debug(f"Skip (exists): {dst_path}")
            return FileOutcome.SKIPPED_DUPLICATE

        if dst_path.exists() and not dst_path.is_file():
            logger.debug(f"Destination is not a regular file: {dst_path}")
            return FileOutcome.COPY_FAILED

        # dst_path is only replaced once the copy is complete
        part_path = dest_dir / f".{src_path.name}.part"
        try:
            shutil.copy2(src_path, part_path)
            os.replace(part_path, dst_path)
        except OSError as e:
            logger.debug(f"Failed to copy {src_path} -> {dst_path}: {e}")
            if part_path.exists():
                try:
                    part_path.unlink()
                except OSError as cleanup_error:
                    logger.debug(f"Could not remove {part_path}: {cleanup_error}")
            return FileOutcome.COPY_FAILED

        logger.debug(f"Copied {src_path} -> {dst_path}")
        return FileOutcome.COPIED

    def import_files(
        self,
        source: Path,
        destination: Path,
        file_filter: FileTypeFilter,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> ImportResult:
        """Import every matching file from source.

        For each file:
        1. Resolve its year and month
        2. Create <destination>/<YYYY>/<YYYY>-<MM>
        3. Skip it if a same-named file of the same nonzero size is there
        4. Otherwise copy it, overwriting a differently sized file

        Nothing is created under destination when no file matches.

        Returns:
            ImportResult with counts of found, copied and skipped files
        """
        logger.info(f"Enumerating {file_filter.label} on {source}...")
        media_files = self.find_files(source, file_filter)
        total = len(media_files)
        logger.info(f"Found {total:,} matching files on {source}")

        result = ImportResult(found=total)
        if total == 0:
            return result

        for i, src_path in enumerate(media_files, 1):
            outcome = self.import_file(src_path, destination)
            if outcome is FileOutcome.COPIED:
                result.copied += 1
            elif outcome is FileOutcome.SKIPPED_DUPLICATE:
                result.skipped += 1

            if progress_callback:
                progress_callback(i * 100 // total, src_path.name)

        logger.info(
            f"Import complete: {result.found:,} found, "
            f"{result.copied:,} copied, {result.skipped:,} skipped"
        )
        return result
