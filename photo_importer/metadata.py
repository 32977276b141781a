"""Reading date tags from embedded photo metadata.

Readers return the tag formatted as ``"YYYY MM"`` or None when the tag is
missing or unreadable. They never raise for problems with a single file.
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Optional

import exifread

logger = logging.getLogger(__name__)

CAPTURE_TAG = 'DateTimeOriginal'
MODIFY_TAG = 'FileModifyDate'

DATE_FORMAT = '%Y %m'


class MetadataReader:
    """Base class for metadata backends."""

    name = 'base'

    def read_date(self, file_path: Path, tag: str) -> Optional[str]:
        raise NotImplementedError


class ExifToolReader(MetadataReader):
    """Reads tags by running the exiftool command line utility."""

    name = 'exiftool'

    def __init__(self, exiftool_path: Optional[str] = None, timeout: int = 30):
        self.exiftool_path = exiftool_path or shutil.which('exiftool')
        self.timeout = timeout
        if not self.exiftool_path:
            raise FileNotFoundError("exiftool not found on PATH")

    def read_date(self, file_path: Path, tag: str) -> Optional[str]:
        try:
            result = subprocess.run(
                [self.exiftool_path, '-s3', f'-{tag}', '-d', DATE_FORMAT, str(file_path)],
                capture_output=True, text=True, timeout=self.timeout
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug(f"exiftool failed on {file_path}: {e}")
            return None

        if result.returncode != 0:
            logger.debug(f"exiftool exit {result.returncode} for {file_path}: {result.stderr.strip()}")
            return None

        lines = result.stdout.splitlines()
        return lines[0].strip() if lines else None


class ExifReadReader(MetadataReader):
    """Reads EXIF tags in-process with the exifread library."""

    name = 'exifread'

    # exiftool tag names mapped to exifread keys
    TAG_MAP = {
        CAPTURE_TAG: 'EXIF DateTimeOriginal',
        MODIFY_TAG: 'Image DateTime',
    }

    def read_date(self, file_path: Path, tag: str) -> Optional[str]:
        exif_key = self.TAG_MAP.get(tag)
        if exif_key is None:
            logger.debug(f"Tag {tag} not supported by exifread backend")
            return None

        try:
            with open(file_path, 'rb') as f:
                tags = exifread.process_file(f, details=False)
        except Exception as e:
            logger.debug(f"Could not read EXIF from {file_path}: {e}")
            return None

        value = tags.get(exif_key)
        if not value:
            return None

        # Format: "2020:07:28 11:49:03"
        date_str = str(value).strip()
        if len(date_str) >= 7 and date_str[4] == ':':
            return f"{date_str[:4]} {date_str[5:7]}"
        return None


def create_metadata_reader(backend: str = 'auto') -> MetadataReader:
    """
    Build a metadata reader.

    Args:
        backend: 'exiftool', 'exifread', or 'auto' to use exiftool when it
            is installed and exifread otherwise

    Returns:
        MetadataReader instance
    """
    if backend == 'exiftool':
        return ExifToolReader()
    if backend == 'exifread':
        return ExifReadReader()
    if backend == 'auto':
        if shutil.which('exiftool'):
            return ExifToolReader()
        logger.info("exiftool not installed, reading EXIF with exifread")
        return ExifReadReader()
    raise ValueError(f"Unknown metadata backend: {backend}")
