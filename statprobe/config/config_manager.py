"""Configuration loading and management."""
import os
from dataclasses import replace
from typing import Mapping, Optional

import yaml

from .config import Config
from .threshold_config import ThresholdConfig

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), 'default_config.yaml')

# Environment variable -> (Config field, converter)
ENV_OVERRIDES = {
    'STATPROBE_URL': ('stats_url', str),
    'STATPROBE_INTERVAL': ('poll_interval', float),
    'STATPROBE_TIMEOUT': ('request_timeout', float),
    'STATPROBE_MAX_ERRORS': ('max_errors', int),
}


class ConfigManager:
    """Configuration loading and management."""

    @staticmethod
    def load_config(config_path: Optional[str] = None) -> Config:
        """Load configuration from YAML file - let it crash if bad."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        # Missing keys keep the dataclass defaults
        thresholds = ThresholdConfig(**config_data.get('thresholds', {}))

        settings = {key: config_data[key]
                    for key in ('stats_url', 'poll_interval', 'request_timeout', 'max_errors')
                    if key in config_data}

        return Config(thresholds=thresholds, **settings)

    @staticmethod
    def apply_env(config: Config, environ: Optional[Mapping[str, str]] = None) -> Config:
        """Return a copy of config with STATPROBE_* environment overrides applied."""
        if environ is None:
            environ = os.environ

        overrides = {}
        for name, (field_name, convert) in ENV_OVERRIDES.items():
            value = environ.get(name)
            if value:
                overrides[field_name] = convert(value)

        if not overrides:
            return config
        return replace(config, **overrides)
