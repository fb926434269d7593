#!/usr/bin/env python3

"""
Configuration management for the GFF coordinate remapper.

Centralized configuration with support for file-based configuration
and environment variable overrides.
"""

import os
import json
from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any

import yaml

from .exceptions import ConfigurationError

MAPPING_FORMATS = ('auto', 'agp', 'gff')


def _as_bool(value: str) -> bool:
    return value.lower() in ('true', '1', 'yes')


@dataclass
class RemapConfig:
    """Centralized configuration for the remapper."""

    # Mapping source
    mapping_format: str = "auto"
    feature_type: Optional[str] = None
    swap_direction: bool = False

    # Reconciliation
    pass_through_unmapped: bool = False

    # Diagnostics
    verbose: bool = False
    report_failed_ids: bool = True
    debug_mode: bool = False

    # Resources
    memory_limit_mb: int = 4096
    batch_size: int = 10000
    enable_memory_monitoring: bool = True

    @classmethod
    def from_file(cls, config_path: str) -> 'RemapConfig':
        """Load configuration from file (JSON or YAML)."""
        return cls.from_dict(cls.read_file(config_path))

    @staticmethod
    def read_file(config_path: str) -> Dict[str, Any]:
        """Read the raw settings of a JSON or YAML file."""
        if not os.path.exists(config_path):
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'r') as f:
                if config_path.lower().endswith(('.yaml', '.yml')):
                    config_data = yaml.safe_load(f)
                else:
                    config_data = json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Invalid configuration file format: {e}")
        except OSError as e:
            raise ConfigurationError(f"Error loading configuration: {e}")

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Configuration file must contain a mapping: {config_path}")

        return config_data

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'RemapConfig':
        """Create configuration from dictionary."""
        # Filter out unknown keys
        known_keys = set(cls.__dataclass_fields__.keys())
        filtered_dict = {k: v for k, v in config_dict.items() if k in known_keys}

        try:
            return cls(**filtered_dict)
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration parameters: {e}")

    @classmethod
    def from_env(cls) -> 'RemapConfig':
        """Load configuration from environment variables."""
        config = cls()

        env_mappings = {
            'GFF_REMAP_MAPPING_FORMAT': ('mapping_format', str),
            'GFF_REMAP_FEATURE_TYPE': ('feature_type', str),
            'GFF_REMAP_SWAP_DIRECTION': ('swap_direction', _as_bool),
            'GFF_REMAP_PASS_THROUGH_UNMAPPED': ('pass_through_unmapped', _as_bool),
            'GFF_REMAP_VERBOSE': ('verbose', _as_bool),
            'GFF_REMAP_MEMORY_LIMIT_MB': ('memory_limit_mb', int),
            'GFF_REMAP_BATCH_SIZE': ('batch_size', int),
            'GFF_REMAP_DEBUG_MODE': ('debug_mode', _as_bool),
        }

        for env_var, (field_name, converter) in env_mappings.items():
            env_value = os.getenv(env_var)
            if env_value:
                try:
                    setattr(config, field_name, converter(env_value))
                except (ValueError, TypeError) as e:
                    raise ConfigurationError(f"Invalid environment variable {env_var}: {e}")

        config.validate()
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    def save_to_file(self, config_path: str) -> None:
        """Save configuration to file."""
        config_dict = self.to_dict()

        try:
            with open(config_path, 'w') as f:
                if config_path.lower().endswith(('.yaml', '.yml')):
                    yaml.safe_dump(config_dict, f, default_flow_style=False)
                else:
                    json.dump(config_dict, f, indent=2)
        except OSError as e:
            raise ConfigurationError(f"Error saving configuration: {e}")

    def validate(self) -> None:
        """Validate configuration parameters."""
        if self.mapping_format not in MAPPING_FORMATS:
            raise ConfigurationError(
                f"mapping_format must be one of {', '.join(MAPPING_FORMATS)}"
            )

        if self.feature_type is not None and not self.feature_type:
            raise ConfigurationError("feature_type must not be empty")

        if self.memory_limit_mb < 100:
            raise ConfigurationError("memory_limit_mb must be >= 100")

        if self.batch_size < 1:
            raise ConfigurationError("batch_size must be >= 1")

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.validate()


def load_config(config_path: Optional[str] = None,
                use_env: bool = True) -> RemapConfig:
    """
    Load configuration with priority: file > environment > defaults.

    Args:
        config_path: Path to configuration file (optional)
        use_env: Whether to load environment variables

    Returns:
        RemapConfig: Loaded configuration
    """
    config = RemapConfig()

    if use_env:
        env_config = RemapConfig.from_env()
        for field_name in RemapConfig.__dataclass_fields__.keys():
            env_value = getattr(env_config, field_name)
            if env_value != getattr(config, field_name):
                setattr(config, field_name, env_value)

    if config_path:
        # Only keys present in the file override env values
        file_data = RemapConfig.read_file(config_path)
        config = RemapConfig.from_dict({**config.to_dict(), **file_data})

    return config
