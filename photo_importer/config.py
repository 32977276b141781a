"""Configuration management for photo import."""

import copy
import os
import yaml
from pathlib import Path
from typing import Dict, List, Any, Optional
import logging

logger = logging.getLogger(__name__)

JPEG_EXTENSIONS = ['jpg', 'jpeg']
RAW_EXTENSIONS = ['raw', 'cr2', 'nef', 'arw', 'dng', 'raf', 'orf']

METADATA_BACKENDS = ('auto', 'exiftool', 'exifread')
UI_BACKENDS = ('click', 'dialog')

DEFAULTS: Dict[str, Any] = {
    'import': {
        'default_destination': '~/Pictures/Input',
        'extensions': {
            'jpeg': JPEG_EXTENSIONS,
            'raw': RAW_EXTENSIONS,
        },
    },
    'volume': {
        'mount_roots': ['/media', '/media/$USER', '/run/media', '/run/media/$USER', '/mnt'],
        'camera_dirs': ['DCIM'],
        'marker_extensions': ['jpg', 'jpeg', 'raw', 'cr2', 'nef', 'arw'],
        'search_depth': 2,
        'unmount_command': ['umount'],
    },
    'metadata': {
        'backend': 'auto',
    },
    'ui': {
        'backend': 'click',
    },
    'trigger': {
        'delay_seconds': 3,
    },
    'logging': {
        'level': 'WARNING',
        'log_dir': '~/.local/state/photo-importer/logs',
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Manages configuration for photo import from an optional YAML file."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to config file. If None, searches the standard
                locations and falls back to built-in defaults.
        """
        if config_path and not Path(config_path).exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        self.config_path = config_path or self._find_config_file()
        self.config: Dict[str, Any] = copy.deepcopy(DEFAULTS)
        if self.config_path:
            self._load_config()

    def _find_config_file(self) -> Optional[str]:
        """Find configuration file in standard locations."""
        possible_paths = []
        xdg_home = os.environ.get('XDG_CONFIG_HOME')
        if xdg_home:
            possible_paths.append(Path(xdg_home) / 'photo-importer' / 'config.yml')
        possible_paths.append(Path.home() / '.config' / 'photo-importer' / 'config.yml')

        for config_file in possible_paths:
            if config_file.exists():
                logger.info(f"Found config file: {config_file}")
                return str(config_file.resolve())

        logger.debug("No configuration file found, using defaults")
        return None

    def _load_config(self) -> None:
        """Load configuration from YAML file over the defaults."""
        try:
            with open(self.config_path, 'r') as f:
                loaded = yaml.safe_load(f) or {}
            self.config = _merge(DEFAULTS, loaded)
            logger.info(f"Loaded configuration from {self.config_path}")
        except Exception as e:
            logger.error(f"Failed to load config from {self.config_path}: {e}")
            raise

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key_path: Dot-separated path like 'volume.mount_roots'
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self.config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    def get_default_destination(self) -> str:
        """Get destination directory offered to the operator."""
        return self.get('import.default_destination', DEFAULTS['import']['default_destination'])

    def get_import_extensions(self) -> Dict[str, List[str]]:
        """Get JPEG and RAW extension sets used when importing."""
        extensions = self.get('import.extensions') or {}
        return {
            'jpeg': [ext.lower().lstrip('.') for ext in extensions.get('jpeg') or []],
            'raw': [ext.lower().lstrip('.') for ext in extensions.get('raw') or []],
        }

    def get_mount_roots(self) -> List[Path]:
        """Get mount roots with $USER and ~ expanded, in search order."""
        roots = self.get('volume.mount_roots') or []
        expanded = []
        for root in roots:
            root = os.path.expanduser(os.path.expandvars(root))
            # an unset variable leaves the literal '$' in place
            if '$' in root:
                continue
            expanded.append(Path(root))
        return expanded

    def get_camera_dirs(self) -> List[str]:
        return self.get('volume.camera_dirs') or []

    def get_marker_extensions(self) -> List[str]:
        return [ext.lower().lstrip('.') for ext in self.get('volume.marker_extensions') or []]

    def get_search_depth(self) -> int:
        return self.get('volume.search_depth', 2)

    def get_unmount_command(self) -> List[str]:
        command = self.get('volume.unmount_command') or []
        if isinstance(command, str):
            return command.split()
        return list(command)

    def get_metadata_backend(self) -> str:
        return self.get('metadata.backend', 'auto')

    def get_ui_backend(self) -> str:
        return self.get('ui.backend', 'click')

    def get_trigger_delay(self) -> float:
        """Get delay before the auto-triggered import starts, in seconds."""
        return self.get('trigger.delay_seconds', 3)

    def get_log_level(self) -> str:
        """Get logging level."""
        return self.get('logging.level', 'WARNING')

    def get_log_dir(self) -> Optional[Path]:
        """Get log directory, or None when file logging is disabled."""
        log_dir = self.get('logging.log_dir')
        if not log_dir:
            return None
        return Path(os.path.expanduser(log_dir))

    def validate_config(self) -> List[str]:
        """
        Validate configuration and return list of errors.

        Returns:
            List of validation error messages
        """
        errors = []

        extensions = self.get_import_extensions()
        if not extensions.get('jpeg'):
            errors.append("No JPEG extensions configured")
        if not extensions.get('raw'):
            errors.append("No RAW extensions configured")

        if not self.get_default_destination():
            errors.append("Default destination not configured")

        if not self.get('volume.mount_roots'):
            errors.append("No mount roots configured")

        search_depth = self.get_search_depth()
        if not isinstance(search_depth, int) or search_depth < 1:
            errors.append(f"Invalid search_depth value: {search_depth} (must be >= 1)")

        if not self.get_unmount_command():
            errors.append("Unmount command is empty")

        backend = self.get_metadata_backend()
        if backend not in METADATA_BACKENDS:
            errors.append(f"Unknown metadata backend: {backend} "
                          f"(expected one of {', '.join(METADATA_BACKENDS)})")

        ui_backend = self.get_ui_backend()
        if ui_backend not in UI_BACKENDS:
            errors.append(f"Unknown ui backend: {ui_backend} "
                          f"(expected one of {', '.join(UI_BACKENDS)})")

        delay = self.get_trigger_delay()
        if not isinstance(delay, (int, float)) or delay < 0:
            errors.append(f"Invalid trigger delay: {delay} (must be >= 0)")

        return errors

    def __str__(self) -> str:
        """String representation of configuration."""
        return f"Config(path={self.config_path}, roots={len(self.get_mount_roots())})"
