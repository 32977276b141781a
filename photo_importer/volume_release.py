"""Unmounting the photo volume once the import is done."""

import logging
import os
import subprocess
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence

import psutil

logger = logging.getLogger(__name__)


class ReleaseOutcome(Enum):
    UNMOUNTED = 'unmounted'
    UNMOUNT_FAILED = 'unmount_failed'
    NO_DEVICE = 'no_device'


def resolve_device(mount_point: Path) -> Optional[str]:
    """
    Look up the device mounted at mount_point in the system mount table.

    Args:
        mount_point: Mount point path

    Returns:
        Device identifier such as /dev/sdb1, or None if not mounted
    """
    target = os.path.realpath(str(mount_point))
    try:
        partitions = psutil.disk_partitions(all=True)
    except Exception as e:
        logger.error(f"Failed to read mount table: {e}")
        return None

    for partition in partitions:
        if os.path.realpath(partition.mountpoint) == target and partition.device:
            return partition.device
    return None


def unmount(mount_point: Path, command: Sequence[str] = ('umount',)) -> bool:
    """Run the unmount command for mount_point; True on success."""
    cmd: List[str] = list(command) + [str(mount_point)]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=60)
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning(f"Could not run {cmd[0]}: {e}")
        return False

    if result.returncode != 0:
        logger.warning(f"Unmount of {mount_point} failed: {result.stderr.strip()}")
        return False
    return True


def release_volume(mount_point: Path, command: Sequence[str] = ('umount',)) -> ReleaseOutcome:
    """Unmount the volume; failures are reported, never raised."""
    device = resolve_device(mount_point)
    if not device:
        logger.warning(f"Could not determine device for {mount_point}")
        return ReleaseOutcome.NO_DEVICE

    logger.info(f"Unmounting {device} from {mount_point}")
    if unmount(mount_point, command):
        return ReleaseOutcome.UNMOUNTED
    return ReleaseOutcome.UNMOUNT_FAILED
