#!/usr/bin/env python3
"""
SD Card Photo Import CLI

Detects an SD card, asks the operator which photos to import and where,
and organizes them into YEAR/YEAR-MONTH folders by EXIF date.
"""

import sys
import time
import logging
import click
from pathlib import Path
from typing import Optional
from colorama import init, Fore, Style

from photo_importer import (
    Config,
    DateResolver,
    FileImporter,
    Prompter,
    PromptUnavailableError,
    ReleaseOutcome,
    collect_preferences,
    create_metadata_reader,
    create_prompter,
    locate_from_config,
    release_volume,
)
from photo_importer.reporter import (
    format_confirmation,
    format_import_summary,
    format_release_message,
)

# Initialize colorama for cross-platform colored output
init()

_console_handler = None
_file_handler = None

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = 'WARNING', log_dir: Path = None):
    """Set up logging configuration."""
    global _console_handler
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if _console_handler is not None:
        root_logger.removeHandler(_console_handler)

    # Console stays quiet by default so it does not interleave with prompts
    _console_handler = logging.StreamHandler(sys.stderr)
    _console_handler.setLevel(numeric_level)
    _console_handler.setFormatter(formatter)
    root_logger.addHandler(_console_handler)

    if log_dir:
        _setup_file_logging(log_dir, formatter, root_logger)


def _setup_file_logging(log_dir: Path, formatter: logging.Formatter, root_logger: logging.Logger,
                        log_name: str = 'photo_import'):
    """Add file handler to root logger."""
    global _file_handler
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print_warning(f"File logging disabled, cannot create {log_dir}: {e}")
        return

    if _file_handler is not None:
        root_logger.removeHandler(_file_handler)
        _file_handler.close()

    _file_handler = logging.FileHandler(log_dir / f'{log_name}.log')
    _file_handler.setLevel(logging.DEBUG)
    _file_handler.setFormatter(formatter)
    root_logger.addHandler(_file_handler)


def print_error(message: str):
    """Print error message."""
    click.echo(f"{Fore.RED}ERROR: {message}{Style.RESET_ALL}", err=True)


def print_warning(message: str):
    """Print warning message."""
    click.echo(f"{Fore.YELLOW}WARN: {message}{Style.RESET_ALL}", err=True)


def load_config(config_path: Optional[str], log_level: Optional[str]) -> Config:
    """Load and validate configuration, then set up logging. Exits on error."""
    setup_logging(log_level or 'WARNING')

    try:
        config = Config(config_path)
    except Exception as e:
        print_error(f"Failed to load configuration: {e}")
        sys.exit(1)

    errors = config.validate_config()
    if errors:
        print_error("Configuration validation failed:")
        for error in errors:
            click.echo(f"  - {error}", err=True)
        sys.exit(1)

    setup_logging(log_level or config.get_log_level(), config.get_log_dir())
    return config


def run_import(config: Config, prompter: Optional[Prompter] = None) -> int:
    """
    Run the interactive import once.

    Returns:
        Process exit code: 0 on completion or cancellation, 1 when no photo
        volume is found or the operator cannot be prompted
    """
    if prompter is None:
        try:
            prompter = create_prompter(config.get_ui_backend())
        except PromptUnavailableError as e:
            print_error(str(e))
            return 1

    source = locate_from_config(config)
    if source is None:
        prompter.message("Error", "No SD card detected!\n\nPlease insert an SD card and try again.")
        return 1

    if not prompter.message("SD Card Detected", f"SD card found at:\n\n{source}"):
        return 0

    preferences = collect_preferences(prompter, config.get_default_destination())
    if preferences is None:
        return 0

    if not prompter.confirm("Confirm Import", format_confirmation(source, preferences)):
        return 0

    try:
        reader = create_metadata_reader(config.get_metadata_backend())
    except FileNotFoundError as e:
        print_error(str(e))
        return 1

    importer = FileImporter.from_config(config, DateResolver(reader))
    try:
        result = importer.import_files(
            source, preferences.destination, preferences.file_filter, prompter.progress
        )
    finally:
        prompter.close_progress()

    prompter.message("Import Complete", format_import_summary(result))

    if prompter.confirm("Unmount SD Card", "Import complete!\n\nUnmount SD card now?"):
        outcome = release_volume(source, config.get_unmount_command())
        title = "Unmount" if outcome is ReleaseOutcome.UNMOUNTED else "Unmount Warning"
        prompter.message(title, format_release_message(outcome, source))

    return 0


@click.command()
@click.option('--config', '-c', help='Path to configuration file')
@click.option('--log-level', '-l', default=None,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              help='Console logging level')
def cli(config, log_level):
    """SD Card Photo Import - copy photos into YEAR/YEAR-MONTH folders."""
    config_obj = load_config(config, log_level)
    sys.exit(run_import(config_obj))


@click.command()
@click.option('--config', '-c', help='Path to configuration file')
@click.option('--log-level', '-l', default=None,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              help='Console logging level')
def auto(config, log_level):
    """Wait for the card to finish mounting, then run the import once."""
    config_obj = load_config(config, log_level)
    delay = config_obj.get_trigger_delay()
    logging.getLogger(__name__).info(f"Waiting {delay}s for the card to mount")
    time.sleep(delay)
    sys.exit(run_import(config_obj))


if __name__ == '__main__':
    cli()
