"""
Configuration Manager

Handles hierarchical configuration loading and validation with support
for CLI args → environment variables → config files → defaults.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import ValidationError

from mailchain.core.config.models import AppConfig, StageConfig
from mailchain.core.exceptions import ConfigurationError, ErrorCode


class ConfigManager:
    """
    Manages application configuration with hierarchical loading and validation.

    Configuration sources in order of precedence:
    1. CLI arguments (highest priority)
    2. Environment variables
    3. Configuration files
    4. Default values (lowest priority)

    Stages given on the command line replace the configured stage list
    rather than merging with it.
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Optional path to configuration file
        """
        self.config_file = Path(config_file) if config_file else None
        self.logger = logging.getLogger("mailchain.config")
        self._config: Optional[AppConfig] = None
        self._config_paths = self._get_default_config_paths()

    def _get_default_config_paths(self) -> List[Path]:
        """Get default configuration file search paths."""
        search_paths = [
            Path.cwd() / "mailchain.yaml",
            Path.cwd() / "mailchain.yml",
            Path.cwd() / ".mailchain.yaml",
            Path.home() / ".config" / "mailchain" / "config.yaml",
        ]

        xdg_config = os.environ.get('XDG_CONFIG_HOME')
        if xdg_config:
            search_paths.append(Path(xdg_config) / "mailchain" / "config.yaml")

        return search_paths

    def load_config(
        self,
        cli_args: Optional[Dict[str, Any]] = None,
        env_prefix: str = "MAILCHAIN_"
    ) -> AppConfig:
        """
        Load and validate configuration from all sources.

        Args:
            cli_args: Dictionary of CLI arguments
            env_prefix: Prefix for environment variables

        Returns:
            Validated AppConfig instance

        Raises:
            ConfigurationError: If configuration is invalid
        """
        config_data: Dict[str, Any] = {}

        file_config = self._load_config_file()
        if file_config:
            config_data.update(file_config)

        env_config = self._load_env_config(env_prefix)
        if env_config:
            config_data = self._deep_merge(config_data, env_config)

        if cli_args:
            cli_config = self._normalize_cli_args(cli_args)
            config_data = self._deep_merge(config_data, cli_config)

        try:
            self._config = AppConfig(**config_data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Configuration validation failed: {e}",
                error_code=ErrorCode.CONFIG_INVALID_VALUE,
                cause=e
            )

        self.logger.debug(f"Loaded configuration with {len(self._config.stages)} stage(s)")
        return self._config

    def _load_config_file(self) -> Optional[Dict[str, Any]]:
        """Load configuration from file."""
        config_file = self.config_file

        if config_file is not None and not config_file.is_file():
            raise ConfigurationError(
                f"Configuration file not found: {config_file}",
                error_code=ErrorCode.CONFIG_FILE_NOT_FOUND,
                config_key="config_file",
                config_value=str(config_file)
            )

        if not config_file:
            for path in self._config_paths:
                if path.exists() and path.is_file():
                    config_file = path
                    break

        if not config_file:
            return None

        self.logger.info(f"Loading configuration from {config_file}")
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                if config_file.suffix.lower() == '.json':
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f) or {}
        except (IOError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to load config file {config_file}: {e}", cause=e)

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file {config_file} must contain a mapping, got {type(data).__name__}"
            )
        return data

    def _load_env_config(self, prefix: str) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        env_config: Dict[str, Any] = {}

        env_mappings = {
            f"{prefix}INPUT": [("input", "path", str)],
            f"{prefix}ON_PARTIAL": [("input", "on_partial", str)],
            f"{prefix}OUTPUT": [("output", "path", str)],
            f"{prefix}APPEND": [("output", "append", self._parse_bool)],
            f"{prefix}ENCODING": [("input", "encoding", str), ("output", "encoding", str)],
            f"{prefix}VERBOSE": [("verbose", None, self._parse_bool)],
            f"{prefix}DEBUG": [("debug", None, self._parse_bool)],
        }

        for env_var, targets in env_mappings.items():
            value = os.environ.get(env_var)
            if value is None:
                continue
            for section, key, parser in targets:
                try:
                    parsed_value = parser(value)
                except (ValueError, TypeError) as e:
                    raise ConfigurationError(
                        f"Invalid value for {env_var}: {value} ({e})",
                        error_code=ErrorCode.CONFIG_INVALID_VALUE,
                        config_key=env_var,
                        config_value=value
                    )
                if key is None:
                    env_config[section] = parsed_value
                else:
                    env_config.setdefault(section, {})[key] = parsed_value

        return env_config

    def _normalize_cli_args(self, cli_args: Dict[str, Any]) -> Dict[str, Any]:
        """Normalize CLI arguments to configuration structure."""
        normalized: Dict[str, Any] = {}

        cli_mappings = {
            'input': ('input', 'path'),
            'on_partial': ('input', 'on_partial'),
            'output': ('output', 'path'),
            'append': ('output', 'append'),
            'verbose': ('verbose', None),
            'debug': ('debug', None),
        }

        for cli_key, (section, key) in cli_mappings.items():
            value = cli_args.get(cli_key)
            if value is None:
                continue
            if key is None:
                normalized[section] = value
            else:
                normalized.setdefault(section, {})[key] = value

        encoding = cli_args.get('encoding')
        if encoding is not None:
            normalized.setdefault('input', {})['encoding'] = encoding
            normalized.setdefault('output', {})['encoding'] = encoding

        stages = self._stages_from_cli_args(cli_args)
        if stages:
            normalized['stages'] = stages

        return normalized

    @staticmethod
    def _stages_from_cli_args(cli_args: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Build a stage list from CLI options: filters, then copies, then one sink."""
        stages: List[Dict[str, Any]] = []

        for arg, filter_type, option in (
            ('senders', 'sender', 'addresses'),
            ('recipients', 'recipient', 'addresses'),
            ('keywords', 'keyword', 'keywords_include'),
        ):
            values = cli_args.get(arg)
            if values:
                stages.append({
                    'type': 'filter',
                    'filters': [{'type': filter_type, 'config': {option: list(values)}}],
                })

        for recipient in cli_args.get('copy_to') or []:
            stages.append({'type': 'copy_to', 'recipient': recipient})

        if stages:
            stages.append({'type': 'send'})
        return stages

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries, with override taking precedence."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    @staticmethod
    def _parse_bool(value: Union[str, bool]) -> bool:
        """Parse boolean value from string."""
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in {'true', '1', 'yes', 'on', 'enabled'}
        return bool(value)

    def create_example_config(self, output_file: Path) -> None:
        """
        Write an example configuration file.

        Args:
            output_file: Path to write configuration file
        """
        config = AppConfig(
            stages=[
                StageConfig(
                    type="filter",
                    filters=[{'type': 'sender', 'config': {'addresses': ['erich@example.com']}}],
                ),
                StageConfig(type="copy_to", recipient="richard@example.com"),
                StageConfig(type="send"),
            ]
        )

        # mode='json' serializes Path and Enum values as plain strings
        config_dict = config.model_dump(mode='json', exclude_none=True)

        with open(output_file, 'w', encoding='utf-8') as f:
            yaml.safe_dump(config_dict, f, default_flow_style=False, indent=2, sort_keys=False)

    @property
    def config(self) -> Optional[AppConfig]:
        """Get the loaded configuration."""
        return self._config
