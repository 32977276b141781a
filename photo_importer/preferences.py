"""Operator preferences: which file types to import and where to."""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from .prompts import Prompter
from .utils import ensure_directory, expand_home

logger = logging.getLogger(__name__)

PROMPT_TITLE = "SD Card Photo Import"


class FileTypeFilter(Enum):
    """File types the operator can choose to import."""
    JPEG = 'JPEGs'
    RAW = 'RAW files'
    BOTH = 'JPEGs and RAW files'

    @property
    def label(self) -> str:
        return self.value

    def extensions(self, extension_sets: Dict[str, List[str]]) -> List[str]:
        """Extensions matched by this filter, given the 'jpeg'/'raw' sets."""
        if self is FileTypeFilter.JPEG:
            return list(extension_sets['jpeg'])
        if self is FileTypeFilter.RAW:
            return list(extension_sets['raw'])
        return list(extension_sets['jpeg']) + list(extension_sets['raw'])


FILE_TYPE_CHOICES = [
    ('1', "JPEGs only", FileTypeFilter.JPEG),
    ('2', "RAW files only", FileTypeFilter.RAW),
    ('3', "Both JPEGs and RAW files", FileTypeFilter.BOTH),
]


@dataclass(frozen=True)
class ImportPreferences:
    """Selections made by the operator before the import starts."""
    file_filter: FileTypeFilter
    destination: Path


def ask_file_type(prompter: Prompter) -> Optional[FileTypeFilter]:
    """Ask which file types to import; None if cancelled or invalid."""
    choice = prompter.select(
        PROMPT_TITLE,
        "Select file types to import:",
        [(key, label) for key, label, _ in FILE_TYPE_CHOICES],
    )
    for key, _, file_filter in FILE_TYPE_CHOICES:
        if choice == key:
            return file_filter
    return None


def ask_import_directory(prompter: Prompter, default_destination: str) -> Optional[Path]:
    """
    Ask for the destination directory and create it.

    Empty input falls back to the default and a leading ~ is expanded.

    Returns:
        The destination directory, or None if cancelled or it cannot be created
    """
    answer = prompter.input_text(PROMPT_TITLE, "Enter import directory:", default_destination)
    if answer is None:
        return None
    if not answer.strip():
        answer = default_destination

    destination = expand_home(answer)
    if not ensure_directory(destination):
        return None
    return destination


def collect_preferences(prompter: Prompter, default_destination: str) -> Optional[ImportPreferences]:
    """Ask the operator for file types and destination; None if they back out."""
    file_filter = ask_file_type(prompter)
    if file_filter is None:
        logger.info("No file type chosen")
        return None

    destination = ask_import_directory(prompter, default_destination)
    if destination is None:
        logger.info("No import directory chosen")
        return None

    logger.info(f"Importing {file_filter.label} into {destination}")
    return ImportPreferences(file_filter=file_filter, destination=destination)
