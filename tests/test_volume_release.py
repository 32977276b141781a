"""Tests for unmounting the photo volume."""

import subprocess
from collections import namedtuple
from pathlib import Path
from unittest.mock import patch

from photo_importer.volume_release import (
    ReleaseOutcome,
    release_volume,
    resolve_device,
    unmount,
)

Partition = namedtuple('Partition', ['device', 'mountpoint', 'fstype', 'opts'])

PARTITIONS = [
    Partition('/dev/nvme0n1p2', '/', 'ext4', 'rw'),
    Partition('/dev/sdb1', '/run/media/alice/CARD', 'vfat', 'rw,nosuid'),
]


def completed(returncode=0, stderr=''):
    return subprocess.CompletedProcess(args=['umount'], returncode=returncode, stdout='', stderr=stderr)


class TestResolveDevice:

    def test_device_found_in_mount_table(self):
        with patch('photo_importer.volume_release.psutil.disk_partitions', return_value=PARTITIONS):
            assert resolve_device(Path('/run/media/alice/CARD')) == '/dev/sdb1'

    def test_unknown_mount_point(self):
        with patch('photo_importer.volume_release.psutil.disk_partitions', return_value=PARTITIONS):
            assert resolve_device(Path('/media/other')) is None

    def test_mount_table_error(self):
        with patch('photo_importer.volume_release.psutil.disk_partitions', side_effect=OSError("no /proc")):
            assert resolve_device(Path('/run/media/alice/CARD')) is None


class TestReleaseVolume:

    def test_successful_unmount(self):
        with patch('photo_importer.volume_release.psutil.disk_partitions', return_value=PARTITIONS), \
             patch('photo_importer.volume_release.subprocess.run', return_value=completed()) as run:
            outcome = release_volume(Path('/run/media/alice/CARD'))

        assert outcome is ReleaseOutcome.UNMOUNTED
        assert run.call_args[0][0] == ['umount', '/run/media/alice/CARD']

    def test_failed_unmount_is_a_warning(self):
        with patch('photo_importer.volume_release.psutil.disk_partitions', return_value=PARTITIONS), \
             patch('photo_importer.volume_release.subprocess.run',
                   return_value=completed(returncode=32, stderr='target is busy')):
            outcome = release_volume(Path('/run/media/alice/CARD'))

        assert outcome is ReleaseOutcome.UNMOUNT_FAILED

    def test_no_device_skips_unmount(self):
        with patch('photo_importer.volume_release.psutil.disk_partitions', return_value=PARTITIONS), \
             patch('photo_importer.volume_release.subprocess.run') as run:
            outcome = release_volume(Path('/media/unknown'))

        assert outcome is ReleaseOutcome.NO_DEVICE
        run.assert_not_called()

    def test_custom_unmount_command(self):
        with patch('photo_importer.volume_release.psutil.disk_partitions', return_value=PARTITIONS), \
             patch('photo_importer.volume_release.subprocess.run', return_value=completed()) as run:
            release_volume(Path('/run/media/alice/CARD'), ['fusermount', '-u'])

        assert run.call_args[0][0] == ['fusermount', '-u', '/run/media/alice/CARD']


def test_missing_unmount_binary_counts_as_failure():
    with patch('photo_importer.volume_release.subprocess.run', side_effect=FileNotFoundError('umount')):
        assert unmount(Path('/run/media/alice/CARD')) is False
