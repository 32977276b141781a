"""Resolve the (year, month) a photo belongs to."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, List, NamedTuple, Optional, Tuple

from .metadata import CAPTURE_TAG, MODIFY_TAG, MetadataReader

logger = logging.getLogger(__name__)

RawDate = Tuple[str, str]  # (year text, month text) as reported by a source
DateSource = Callable[[Path], Optional[RawDate]]

PLACEHOLDERS = {'-', '----', '0000'}


class YearMonth(NamedTuple):
    """Destination partition of a file."""
    year: int
    month: int

    @property
    def year_text(self) -> str:
        return f"{self.year:04d}"

    @property
    def month_text(self) -> str:
        return f"{self.month:02d}"

    @property
    def relative_dir(self) -> Path:
        """Directory below the destination root: YYYY/YYYY-MM."""
        return Path(self.year_text) / f"{self.year_text}-{self.month_text}"

    @classmethod
    def from_datetime(cls, value: datetime) -> 'YearMonth':
        return cls(value.year, value.month)


def split_date_text(text: Optional[str]) -> Optional[RawDate]:
    """Split "YYYY MM" metadata output into its parts."""
    if not text:
        return None
    parts = text.split()
    if not parts:
        return None
    return parts[0], parts[1] if len(parts) > 1 else ''


def is_usable(raw: Optional[RawDate]) -> bool:
    """Non-empty, not a placeholder, and the year starts with 4 digits."""
    if not raw:
        return False
    year = raw[0].strip()
    if not year or year in PLACEHOLDERS:
        return False
    return len(year) >= 4 and year[:4].isdigit() and year[:4] != '0000'


def parse_year_month(raw: RawDate) -> Optional[YearMonth]:
    """Parse a usable source value; None if year or month is malformed."""
    year, month = raw[0].strip(), raw[1].strip()
    if len(year) != 4 or not year.isdigit():
        return None
    if not 1 <= len(month) <= 2 or not month.isdigit():
        return None
    month_number = int(month)
    if not 1 <= month_number <= 12:
        return None
    return YearMonth(int(year), month_number)


def metadata_source(reader: MetadataReader, tag: str) -> DateSource:
    """Source reading one embedded metadata tag."""
    def source(file_path: Path) -> Optional[RawDate]:
        return split_date_text(reader.read_date(file_path, tag))
    source.__name__ = f"metadata:{tag}"
    return source


def filesystem_mtime(file_path: Path) -> Optional[RawDate]:
    """Source using the modification time recorded by the filesystem."""
    try:
        modified = datetime.fromtimestamp(file_path.stat().st_mtime)
    except (OSError, OverflowError, ValueError) as e:
        logger.debug(f"Could not stat {file_path}: {e}")
        return None
    return modified.strftime('%Y'), modified.strftime('%m')


class DateResolver:
    """
    Determine the (year, month) for a file from an ordered chain of sources.

    The chain is: capture date from metadata, modify date from metadata,
    filesystem modification time, then the current date. The first source
    giving a usable value wins; if its month does not parse, the current
    date is used instead.
    """

    def __init__(self, reader: MetadataReader, clock: Callable[[], datetime] = datetime.now):
        self.clock = clock
        self.sources: List[DateSource] = [
            metadata_source(reader, CAPTURE_TAG),
            metadata_source(reader, MODIFY_TAG),
            filesystem_mtime,
            self._current_date,
        ]

    def _current_date(self, file_path: Path) -> RawDate:
        now = self.clock()
        return now.strftime('%Y'), now.strftime('%m')

    def resolve(self, file_path: Path) -> YearMonth:
        for source in self.sources:
            raw = source(file_path)
            if not is_usable(raw):
                continue

            resolved = parse_year_month(raw)
            if resolved is None:
                logger.debug(f"Unparseable date {raw!r} from {source.__name__} for {file_path}")
                resolved = YearMonth.from_datetime(self.clock())
            logger.debug(f"{file_path.name}: {resolved.relative_dir} via {source.__name__}")
            return resolved

        return YearMonth.from_datetime(self.clock())
