"""
Configuration management for EnvGuard
Handles user settings, project overrides and environment overrides
"""
import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import dotenv_values

from envguard.core.exceptions import ConfigurationError

ENV_PREFIX = "ENVGUARD_"
PROJECT_SETTINGS_FILE = ".envguardrc"


@dataclass
class EnvGuardConfig:
    """EnvGuard configuration"""
    default_env_file: str = ".env"
    schema_file: str = "env.schema.yaml"
    example_output: str = ".env.example"
    history_depth: int = 100
    max_history_bytes: int = 20 * 1024 * 1024
    log_level: str = "WARNING"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EnvGuardConfig':
        """Create from dictionary, ignoring unknown keys"""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


def coerce_value(key: str, value: Any) -> Any:
    """Convert a raw setting to the type its field declares"""
    field_types = {f.name: f.type for f in fields(EnvGuardConfig)}
    if key not in field_types:
        raise ConfigurationError(f"Invalid config key: {key}")

    if field_types[key] in (int, "int"):
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Config key {key} expects an integer, got {value!r}")
    return str(value)


class ConfigManager:
    """Manages EnvGuard configuration"""

    def __init__(self, config_path: Optional[Path] = None, project_dir: Optional[Path] = None):
        """
        Initialize config manager

        Args:
            config_path: Path to config file (defaults to ~/.envguard/config.json)
            project_dir: Directory holding an optional .envguardrc (defaults to cwd)
        """
        if config_path is None:
            config_path = Path.home() / ".envguard" / "config.json"

        self.config_path = Path(config_path)
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self._config: Optional[EnvGuardConfig] = None

    def load(self) -> EnvGuardConfig:
        """
        Load configuration.

        User file first, then .envguardrc in the project directory, then
        ENVGUARD_* environment variables; later sources win.
        """
        if self._config is not None:
            return self._config

        config = self._load_user_config()

        for key, value in self._overrides().items():
            setattr(config, key, coerce_value(key, value))

        self._config = config
        return self._config

    def _load_user_config(self) -> EnvGuardConfig:
        if not self.config_path.exists():
            return EnvGuardConfig()

        try:
            with open(self.config_path, 'r') as f:
                return EnvGuardConfig.from_dict(json.load(f))
        except (json.JSONDecodeError, TypeError, AttributeError):
            # If config is corrupted, start fresh
            return EnvGuardConfig()

    def _overrides(self) -> Dict[str, Any]:
        known = {f.name for f in fields(EnvGuardConfig)}
        overrides: Dict[str, Any] = {}

        rc_file = self.project_dir / PROJECT_SETTINGS_FILE
        if rc_file.is_file():
            for raw_key, value in dotenv_values(rc_file).items():
                key = raw_key.lower()
                if key.startswith(ENV_PREFIX.lower()):
                    key = key[len(ENV_PREFIX):]
                if key in known and value is not None:
                    overrides[key] = value

        for name in known:
            value = os.getenv(ENV_PREFIX + name.upper())
            if value is not None:
                overrides[name] = value

        return overrides

    def save(self, config: Optional[EnvGuardConfig] = None) -> None:
        """
        Save configuration to file

        Args:
            config: Configuration to save (uses current if None)
        """
        if config is not None:
            self._config = config

        if self._config is None:
            raise ValueError("No configuration to save")

        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, 'w') as f:
            json.dump(self._config.to_dict(), f, indent=2)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value"""
        config = self.load()
        return getattr(config, key, default)

    def set(self, key: str, value: Any) -> None:
        """Set and persist a configuration value in the user file"""
        config = self._load_user_config()
        setattr(config, key, coerce_value(key, value))
        self.save(config)
        # Re-apply project and environment overrides on next load
        self._config = None
