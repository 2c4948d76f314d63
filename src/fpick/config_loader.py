"""
Configuration loader for fpick
Handles loading of the optional YAML configuration file
"""

import os
import yaml
import logging
from pathlib import Path
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field, asdict

from .file_handle import DEFAULT_FILENAME

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "FPICK_CONFIG"
LOCAL_CONFIG_NAME = "fpick.yml"


@dataclass
class PickerSettings:
    """Settings read from the configuration file"""

    default_filename: str = DEFAULT_FILENAME
    start_dir: Optional[str] = None
    clear_screen: bool = True
    log_level: str = "WARNING"
    log_to_file: bool = False
    log_dir: str = "~/.cache/fpick/logs"

    def start_path(self) -> Path:
        """Directory the browser starts in; falls back to the working directory"""
        if self.start_dir:
            candidate = Path(self.start_dir).expanduser()
            if candidate.is_dir():
                return candidate
            logger.warning(f"start_dir {self.start_dir} is not a directory, using {Path.cwd()}")
        return Path.cwd()


def _valid_setting(key: str, value: Any, default: Any) -> bool:
    """A value must have the type of its default; start_dir is an optional str"""
    if default is None:
        return value is None or isinstance(value, str)
    if key == "default_filename" and not value:
        return False
    return type(value) is type(default)


def config_search_paths() -> List[Path]:
    """Candidate configuration files, highest priority first"""
    paths = []
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        paths.append(Path(env_path).expanduser())
    paths.append(Path.cwd() / LOCAL_CONFIG_NAME)
    paths.append(Path.home() / ".config" / "fpick" / "config.yml")
    return paths


@dataclass
class ConfigLoader:
    """Configuration loader for fpick"""

    config_path: Optional[Path] = None
    raw_config: Dict[str, Any] = field(default_factory=dict, init=False)
    settings: PickerSettings = field(default_factory=PickerSettings, init=False)

    def __post_init__(self):
        if self.config_path is not None:
            self.config_path = Path(self.config_path).expanduser()
        else:
            for candidate in config_search_paths():
                if candidate.is_file():
                    self.config_path = candidate
                    break

        self.load()

    def load(self) -> PickerSettings:
        """Load settings from the configuration file, keeping defaults on error"""
        self.raw_config = {}
        self.settings = PickerSettings()

        if self.config_path is None or not self.config_path.is_file():
            logger.info("No config file found, using defaults")
            return self.settings

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Error loading config {self.config_path}: {e}")
            return self.settings

        if not isinstance(data, dict):
            logger.error(f"Config {self.config_path} must contain a mapping, got {type(data).__name__}")
            return self.settings

        self.raw_config = data
        defaults = asdict(self.settings)
        for key, value in data.items():
            if key not in defaults:
                logger.debug(f"Ignoring unknown config key: {key}")
                continue
            if not _valid_setting(key, value, defaults[key]):
                logger.error(f"Invalid value for {key}: {value!r}, keeping default {defaults[key]!r}")
                continue
            setattr(self.settings, key, value)

        logger.info(f"Loaded config from {self.config_path}")
        logger.debug(f"Settings: {self.settings}")
        return self.settings

    def get(self, key: str, default: Any = None) -> Any:
        """Get a single setting value"""
        return getattr(self.settings, key, default)


def create_sample_config(path: Path) -> Path:
    """Write a sample configuration file with the default settings"""
    path = Path(path)
    if path.exists():
        logger.info(f"Config file already exists at {path}")
        raise FileExistsError(f"Config file already exists: {path}")

    sample = asdict(PickerSettings())
    sample['start_dir'] = str(Path.cwd())
    with open(path, 'w', encoding='utf-8') as f:
        yaml.dump(sample, f, default_flow_style=False, sort_keys=False, indent=2)
    logger.info(f"Created sample config at {path}")
    return path


# Global instance
_config_loader = None


def get_config_loader() -> ConfigLoader:
    """Get the global configuration loader instance"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader


def get_settings() -> PickerSettings:
    """Convenience function to get the loaded settings"""
    return get_config_loader().settings


def reset_config_loader() -> None:
    """Drop the cached loader so the next call re-reads the configuration"""
    global _config_loader
    _config_loader = None
