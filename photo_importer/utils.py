"""Utility functions for photo import."""

import os
from pathlib import Path
from typing import Iterable, List
import logging

logger = logging.getLogger(__name__)


def get_file_size(file_path: Path) -> int:
    """
    Get file size in bytes.

    Args:
        file_path: Path to file

    Returns:
        File size in bytes, 0 if error
    """
    try:
        return file_path.stat().st_size
    except Exception as e:
        logger.error(f"Failed to get size for {file_path}: {e}")
        return 0


def ensure_directory(path: Path) -> bool:
    """
    Ensure directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure

    Returns:
        True if directory exists or was created successfully
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
        return True
    except Exception as e:
        logger.error(f"Failed to create directory {path}: {e}")
        return False


def has_extension(file_path: Path, extensions: Iterable[str]) -> bool:
    """Check the file suffix against extensions (without dots), ignoring case."""
    extension = file_path.suffix.lower().lstrip('.')
    return extension in {ext.lower() for ext in extensions}


def is_media_file(file_path: Path, supported_extensions: Iterable[str]) -> bool:
    """
    Check if file is a regular file with a supported extension.

    Args:
        file_path: Path to file
        supported_extensions: List of supported extensions (without dots)

    Returns:
        True if file is supported media type
    """
    if not file_path.is_file():
        return False
    return has_extension(file_path, supported_extensions)


def find_media_files(directory: Path, supported_extensions: Iterable[str]) -> List[Path]:
    """
    Recursively find all media files in a directory.

    Args:
        directory: Directory to search
        supported_extensions: List of supported file extensions

    Returns:
        Paths of media files in filesystem enumeration order
    """
    if not directory.exists() or not directory.is_dir():
        logger.warning(f"Directory does not exist or is not a directory: {directory}")
        return []

    extensions = [ext.lower() for ext in supported_extensions]
    found = []
    try:
        for file_path in directory.rglob('*'):
            if is_media_file(file_path, extensions):
                found.append(file_path)
    except Exception as e:
        logger.error(f"Error scanning directory {directory}: {e}")
    return found


def expand_home(path_text: str) -> Path:
    """Expand a leading ~ to the operator's home directory."""
    return Path(os.path.expanduser(path_text.strip()))
