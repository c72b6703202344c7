"""
Configuration Management System for Tally

This module provides a centralized configuration system that supports a 4-tier
precedence hierarchy: environment → project → user → system defaults.
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent.parent / "config" / "settings"


class ValidationLevel(Enum):
    """Configuration validation strictness levels"""
    STRICT = "strict"      # Fail fast on validation errors
    LENIENT = "lenient"    # Log warnings, use defaults


class StoreConfig(BaseModel):
    """In-memory item store configuration"""
    model_config = ConfigDict(extra='forbid')

    fetch_delay_min: float = Field(default=1.0, ge=0.0, le=30.0, description="Lower bound of simulated fetch latency (seconds)")
    fetch_delay_max: float = Field(default=2.0, ge=0.0, le=30.0, description="Upper bound of simulated fetch latency (seconds)")
    seed_on_start: bool = Field(default=True, description="Load the demo seed items on start")

    @model_validator(mode='after')
    def _check_delay_range(self) -> 'StoreConfig':
        if self.fetch_delay_min > self.fetch_delay_max:
            raise ValueError("fetch_delay_min must not exceed fetch_delay_max")
        return self


class LoggingConfig(BaseModel):
    """Logging Configuration"""
    model_config = ConfigDict(extra='forbid')

    level: str = Field(default="DEBUG", description="File handler log level")
    console_level: str = Field(default="WARNING", description="Console handler log level")
    log_dir: str = Field(default="data/logs", description="Directory for rotating log files")
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024, description="Rotate after this many bytes")
    backup_count: int = Field(default=5, ge=0, le=50, description="Rotated files to keep")


class SystemConfig(BaseModel):
    """Complete system configuration"""
    model_config = ConfigDict(extra='forbid')

    store: StoreConfig = Field(default_factory=StoreConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # Metadata
    schema_version: int = Field(default=1, description="Configuration schema version")


class ConfigManager:
    """Centralized configuration manager with 4-tier precedence hierarchy"""

    ENV_MAP = {
        'TALLY_FETCH_DELAY_MIN': ('store', 'fetch_delay_min', float),
        'TALLY_FETCH_DELAY_MAX': ('store', 'fetch_delay_max', float),
        'TALLY_SEED_ON_START': ('store', 'seed_on_start', bool),
        'LOG_LEVEL': ('logging', 'level', str),
        'TALLY_LOG_DIR': ('logging', 'log_dir', str),
    }

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir else DEFAULT_CONFIG_DIR
        self._system_config: Optional[SystemConfig] = None
        self._user_config: Optional[Dict[str, Any]] = None
        self._project_config: Optional[Dict[str, Any]] = None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load YAML configuration file"""
        if not file_path.exists():
            return {}

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.warning(f"Failed to load {file_path}: {e}")
            return {}

    def _save_yaml_file(self, file_path: Path, data: Dict[str, Any]) -> bool:
        """Save configuration to YAML file"""
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, 'w', encoding='utf-8') as f:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False, indent=2)
            return True
        except OSError as e:
            logger.error(f"Failed to save {file_path}: {e}")
            return False

    def _load_system_defaults(self) -> SystemConfig:
        """Load system default configuration"""
        if self._system_config is None:
            defaults_dict = self._load_yaml_file(self.config_dir / "defaults.yaml")

            try:
                self._system_config = SystemConfig(**defaults_dict)
            except ValidationError as e:
                logger.warning(f"System defaults validation failed: {e}")
                self._system_config = SystemConfig()

        return self._system_config

    def _load_user_config(self) -> Dict[str, Any]:
        """Load user-level configuration"""
        if self._user_config is None:
            self._user_config = self._load_yaml_file(self.config_dir / "user.yaml")
        return self._user_config

    def _load_project_config(self) -> Dict[str, Any]:
        """Load project-specific configuration"""
        if self._project_config is None:
            self._project_config = self._load_yaml_file(self.config_dir / "project.yaml")
        return self._project_config

    def _merge_configs(self) -> Dict[str, Any]:
        """Merge configurations with precedence: env → project → user → system"""
        merged = self._load_system_defaults().model_dump()
        self._deep_merge(merged, self._load_user_config())
        self._deep_merge(merged, self._load_project_config())
        self._deep_merge(merged, self._get_env_overrides())
        return merged

    def _deep_merge(self, base: Dict[str, Any], updates: Dict[str, Any]) -> None:
        """Deep merge configuration dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _get_env_overrides(self) -> Dict[str, Any]:
        """Extract configuration overrides from environment variables"""
        overrides: Dict[str, Any] = {}
        for env_key, (section, config_key, kind) in self.ENV_MAP.items():
            value = os.getenv(env_key)
            if value is None:
                continue

            if kind is bool:
                converted: Any = value.lower() in ('true', '1', 'yes', 'on')
            elif kind is float:
                try:
                    converted = float(value)
                except ValueError:
                    logger.warning(f"Ignoring non-numeric {env_key}={value!r}")
                    continue
            else:
                converted = value.upper() if config_key == 'level' else value

            overrides.setdefault(section, {})[config_key] = converted

        return overrides

    def get_config(self, validation_level: ValidationLevel = ValidationLevel.STRICT) -> SystemConfig:
        """Get merged configuration with validation"""
        merged_config = self._merge_configs()

        try:
            return SystemConfig(**merged_config)
        except ValidationError as e:
            if validation_level == ValidationLevel.STRICT:
                raise ValueError(f"Configuration validation failed: {e}") from e
            logger.warning(f"Configuration validation failed, using defaults: {e}")
            return SystemConfig()

    def save_project_config(self, config_updates: Dict[str, Any]) -> bool:
        """Save project-specific configuration updates"""
        project_path = self.config_dir / "project.yaml"

        existing_config = self._load_yaml_file(project_path)
        self._deep_merge(existing_config, config_updates)

        success = self._save_yaml_file(project_path, existing_config)
        if success:
            # Force reload on next read
            self._project_config = None

        return success


def get_config(
    config_dir: Optional[Path] = None,
    validation_level: ValidationLevel = ValidationLevel.STRICT,
) -> SystemConfig:
    """Load the merged configuration from ``config_dir`` (package defaults when omitted)."""
    return ConfigManager(config_dir).get_config(validation_level)
