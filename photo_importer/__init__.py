"""
SD Card Photo Import

Detects an inserted photo volume, asks which file types to import and
where, and copies photos into YEAR/YEAR-MONTH folders while skipping
files that are already there.
"""

__version__ = "1.0.0"

from .config import Config
from .date_resolver import DateResolver, YearMonth
from .importer import FileImporter, ImportResult
from .metadata import create_metadata_reader
from .preferences import FileTypeFilter, ImportPreferences, collect_preferences
from .prompts import Prompter, PromptUnavailableError, create_prompter
from .volume_locator import find_photo_volume, locate_from_config
from .volume_release import ReleaseOutcome, release_volume

__all__ = [
    'Config',
    'DateResolver',
    'YearMonth',
    'FileImporter',
    'ImportResult',
    'create_metadata_reader',
    'FileTypeFilter',
    'ImportPreferences',
    'collect_preferences',
    'Prompter',
    'PromptUnavailableError',
    'create_prompter',
    'find_photo_volume',
    'locate_from_config',
    'ReleaseOutcome',
    'release_volume',
]
