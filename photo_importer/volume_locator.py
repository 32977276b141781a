"""Detection of a mounted photo volume (SD card or similar)."""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional

from .config import Config
from .utils import has_extension

logger = logging.getLogger(__name__)


def _subdirectories(root: Path) -> List[Path]:
    """Immediate non-hidden subdirectories of root, sorted like shell glob expansion."""
    try:
        return sorted(
            entry for entry in root.iterdir()
            if not entry.name.startswith('.') and entry.is_dir()
        )
    except OSError as e:
        logger.debug(f"Cannot list mount root {root}: {e}")
        return []


def contains_photo_file(directory: Path, extensions: Iterable[str], max_depth: int = 2) -> bool:
    """
    Check for at least one photo file at most max_depth levels below directory.

    Files directly inside directory are at depth 1.
    """
    extensions = [ext.lower() for ext in extensions]
    pending = [(directory, 1)]
    while pending:
        current, depth = pending.pop(0)
        try:
            entries = sorted(os.scandir(current), key=lambda e: e.name)
        except OSError as e:
            logger.debug(f"Cannot scan {current}: {e}")
            continue
        for entry in entries:
            try:
                if entry.is_file() and has_extension(Path(entry.name), extensions):
                    return True
                if entry.is_dir() and depth < max_depth:
                    pending.append((Path(entry.path), depth + 1))
            except OSError:
                continue
    return False


def is_photo_volume(
    candidate: Path,
    camera_dirs: Iterable[str],
    marker_extensions: Iterable[str],
    search_depth: int = 2,
) -> bool:
    """A readable directory holding a camera directory or a photo near its root."""
    if not candidate.is_dir() or not os.access(candidate, os.R_OK):
        return False

    for camera_dir in camera_dirs:
        if (candidate / camera_dir).is_dir():
            logger.debug(f"{candidate} has camera directory {camera_dir}")
            return True

    return contains_photo_file(candidate, marker_extensions, search_depth)


def find_photo_volume(
    mount_roots: Iterable[Path],
    camera_dirs: Iterable[str],
    marker_extensions: Iterable[str],
    search_depth: int = 2,
) -> Optional[Path]:
    """
    Find the first mounted directory that looks like a photo volume.

    Mount roots are searched in the order given; within each root the
    immediate subdirectories are examined. There is no retry or polling.

    Args:
        mount_roots: Directories holding mount points, e.g. /media
        camera_dirs: Camera output directory names, e.g. DCIM
        marker_extensions: Photo extensions (without dots) that mark a volume
        search_depth: How many directory levels to search for photo files

    Returns:
        Path of the photo volume, or None if no candidate qualifies
    """
    camera_dirs = list(camera_dirs)
    marker_extensions = list(marker_extensions)

    for root in mount_roots:
        root = Path(root)
        if not root.is_dir():
            continue
        for candidate in _subdirectories(root):
            if is_photo_volume(candidate, camera_dirs, marker_extensions, search_depth):
                logger.info(f"Photo volume found at {candidate}")
                return candidate

    logger.info("No photo volume found")
    return None


def locate_from_config(config: Config) -> Optional[Path]:
    """Run find_photo_volume with the configured search settings."""
    return find_photo_volume(
        config.get_mount_roots(),
        config.get_camera_dirs(),
        config.get_marker_extensions(),
        config.get_search_depth(),
    )
