"""Tests for photo import configuration."""

from pathlib import Path

import pytest
import yaml

from photo_importer.config import Config, DEFAULTS


def write_config(tmp_path, data, name='config.yml'):
    config_path = tmp_path / name
    with open(config_path, 'w') as f:
        yaml.dump(data, f)
    return str(config_path)


def test_should_use_defaults_when_no_config_file_exists(tmp_path, monkeypatch):
    """Should fall back to built-in defaults when no config file is found."""
    monkeypatch.setenv('HOME', str(tmp_path))
    monkeypatch.delenv('XDG_CONFIG_HOME', raising=False)

    config = Config()

    assert config.config_path is None
    assert config.get_default_destination() == '~/Pictures/Input'
    assert config.get_camera_dirs() == ['DCIM']
    assert config.get_search_depth() == 2
    assert config.validate_config() == []


def test_should_find_config_in_xdg_home(tmp_path, monkeypatch):
    config_dir = tmp_path / 'xdg' / 'photo-importer'
    config_dir.mkdir(parents=True)
    write_config(config_dir, {'ui': {'backend': 'dialog'}})
    monkeypatch.setenv('XDG_CONFIG_HOME', str(tmp_path / 'xdg'))

    config = Config()

    assert config.get_ui_backend() == 'dialog'


def test_should_merge_file_over_defaults(tmp_path):
    path = write_config(tmp_path, {'import': {'extensions': {'raw': ['CR3', '.nef']}}})
    config = Config(path)

    extensions = config.get_import_extensions()
    assert extensions['raw'] == ['cr3', 'nef']
    assert extensions['jpeg'] == ['jpg', 'jpeg']
    assert config.get_metadata_backend() == 'auto'


def test_should_not_mutate_defaults(tmp_path):
    path = write_config(tmp_path, {'volume': {'camera_dirs': ['DCIM', 'PRIVATE']}})
    Config(path)
    assert DEFAULTS['volume']['camera_dirs'] == ['DCIM']


def test_should_raise_when_explicit_config_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config(str(tmp_path / 'missing.yml'))


def test_should_expand_user_in_mount_roots(tmp_path, monkeypatch):
    monkeypatch.setenv('USER', 'alice')
    path = write_config(tmp_path, {'volume': {'mount_roots': ['/media', '/run/media/$USER']}})
    assert Config(path).get_mount_roots() == [Path('/media'), Path('/run/media/alice')]


def test_should_drop_roots_with_unset_variables(tmp_path, monkeypatch):
    monkeypatch.delenv('PHOTO_MOUNT', raising=False)
    path = write_config(tmp_path, {'volume': {'mount_roots': ['/mnt', '/media/$PHOTO_MOUNT']}})
    assert Config(path).get_mount_roots() == [Path('/mnt')]


def test_should_split_string_unmount_command(tmp_path):
    path = write_config(tmp_path, {'volume': {'unmount_command': 'udisksctl unmount --no-user-interaction -p'}})
    assert Config(path).get_unmount_command()[:2] == ['udisksctl', 'unmount']


def test_should_report_invalid_settings(tmp_path):
    path = write_config(tmp_path, {
        'metadata': {'backend': 'pillow'},
        'ui': {'backend': 'whiptail'},
        'volume': {'search_depth': 0},
        'trigger': {'delay_seconds': -1},
        'import': {'extensions': {'jpeg': []}},
    })
    errors = Config(path).validate_config()

    assert any('metadata backend' in e for e in errors)
    assert any('ui backend' in e for e in errors)
    assert any('search_depth' in e for e in errors)
    assert any('trigger delay' in e for e in errors)
    assert any('JPEG extensions' in e for e in errors)


def test_should_expand_log_dir(tmp_path, monkeypatch):
    monkeypatch.setenv('HOME', str(tmp_path))
    path = write_config(tmp_path, {'logging': {'log_dir': '~/logs'}})
    assert Config(path).get_log_dir() == tmp_path / 'logs'


def test_should_disable_file_logging_when_log_dir_empty(tmp_path):
    path = write_config(tmp_path, {'logging': {'log_dir': None}})
    assert Config(path).get_log_dir() is None


def test_should_treat_null_lists_as_empty(tmp_path):
    """Keys left blank in YAML load as None and must not break the getters."""
    path = write_config(tmp_path, {
        'import': {'extensions': None},
        'volume': {
            'mount_roots': None,
            'camera_dirs': None,
            'marker_extensions': None,
            'unmount_command': None,
        },
    })
    config = Config(path)

    assert config.get_import_extensions() == {'jpeg': [], 'raw': []}
    assert config.get_mount_roots() == []
    assert config.get_camera_dirs() == []
    assert config.get_marker_extensions() == []
    assert config.get_unmount_command() == []

    errors = config.validate_config()
    assert "No JPEG extensions configured" in errors
    assert "No RAW extensions configured" in errors
    assert "No mount roots configured" in errors
    assert "Unmount command is empty" in errors


def test_should_treat_null_extension_set_as_empty(tmp_path):
    path = write_config(tmp_path, {'import': {'extensions': {'jpeg': ['jpg'], 'raw': None}}})
    assert Config(path).get_import_extensions() == {'jpeg': ['jpg'], 'raw': []}
