"""Operator-facing summaries of import and unmount results."""

from pathlib import Path

from .importer import ImportResult
from .preferences import ImportPreferences
from .volume_release import ReleaseOutcome

NO_MATCHES_MESSAGE = "No matching files found on SD card."


def format_import_summary(result: ImportResult) -> str:
    """
    Generate the summary shown once the import finishes.

    Args:
        result: Tally from FileImporter.import_files

    Returns:
        Formatted summary text
    """
    if result.no_matches:
        return NO_MATCHES_MESSAGE

    report = ["Import complete!", ""]
    report.append(f"Files found: {result.found}")
    report.append(f"Files copied: {result.copied}")
    report.append(f"Files skipped: {result.skipped}")
    return "\n".join(report)


def format_confirmation(source: Path, preferences: ImportPreferences) -> str:
    """Text of the question asked before anything is copied."""
    report = [f"Ready to import {preferences.file_filter.label}", ""]
    report.append(f"Source: {source}")
    report.append(f"Destination: {preferences.destination}")
    report.append("")
    report.append("Proceed with import?")
    return "\n".join(report)


def format_release_message(outcome: ReleaseOutcome, mount_point: Path) -> str:
    if outcome is ReleaseOutcome.UNMOUNTED:
        return "SD card unmounted successfully"
    if outcome is ReleaseOutcome.UNMOUNT_FAILED:
        return f"Could not unmount {mount_point}\n\nYou may need to unmount it manually."
    return f"Could not determine device for {mount_point}"
