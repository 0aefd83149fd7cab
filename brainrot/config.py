"""
Configuration Management for Brainrot Comments
===============================================
Loads default settings, merges an optional JSON config file over them and
gives dot-path access to individual values.

The config file never holds the API key; that lives in the secrets file
managed by CredentialStore.
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import click

from .errors import ConfigError
from .models import FALLBACK_PHRASE, MAX_WORDS

DEFAULT_CONFIG_FILE = 'brainrot_config.json'


class ConfigManager:
    """Configuration manager with defaults, file merging and validation."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Path to configuration file, defaults to 'brainrot_config.json'
        """
        self.config_file = config_file or DEFAULT_CONFIG_FILE
        self.logger = logging.getLogger('config')
        self.config = self._load_default_config()

        if os.path.exists(self.config_file):
            self._load_config_file()
        else:
            self.logger.debug(f"Config file {self.config_file} not found, using defaults")

    def _load_default_config(self) -> Dict[str, Any]:
        """
        Load default configuration.

        Returns:
            Dictionary containing default configuration
        """
        return {
            "llm": {
                "endpoint": "https://api.openai.com/v1",
                "model": "gpt-4o-mini",
                "max_tokens": 50,
                "temperature": 0.9,
                "timeout": None  # Transport default
            },
            "comments": {
                "fallback_phrase": FALLBACK_PHRASE,
                "max_words": MAX_WORDS
            },
            "context": {
                "max_chars": 2000,
                "window_lines": 2
            },
            "credentials": {
                "secrets_file": str(Path.home() / '.brainrot' / 'secrets.json'),
                "key_name": "brainrot.openaiApiKey",
                "key_prefix": "sk-"
            },
            "logging": {
                "log_level": "WARNING",
                "log_file": None
            }
        }

    def _load_config_file(self) -> None:
        """Load configuration from file and merge with defaults."""
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                user_config = json.load(f)

            if not isinstance(user_config, dict):
                raise ValueError("top-level value must be an object")

            self.config = self._merge_configs(self.config, user_config)
            self.logger.info(f"Loaded configuration from {self.config_file}")

        except json.JSONDecodeError as e:
            self.logger.error(f"Invalid JSON in config file {self.config_file}: {e}")
            self.logger.info("Using default configuration")
        except (OSError, ValueError) as e:
            self.logger.error(f"Error loading config file {self.config_file}: {e}")
            self.logger.info("Using default configuration")

    def _merge_configs(self, default: Dict[str, Any], user: Dict[str, Any]) -> Dict[str, Any]:
        """
        Recursively merge user configuration with defaults.

        Args:
            default: Default configuration dictionary
            user: User configuration dictionary

        Returns:
            Merged configuration dictionary
        """
        merged = copy.deepcopy(default)

        for key, value in user.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._merge_configs(merged[key], value)
            else:
                merged[key] = value

        return merged

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key_path: Dot-separated path to configuration value (e.g., 'llm.model')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self.config

        for key in key_path.split('.'):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def set(self, key_path: str, value: Any) -> None:
        """
        Set configuration value using dot notation.

        Args:
            key_path: Dot-separated path to configuration value
            value: Value to set
        """
        keys = key_path.split('.')
        target = self.config

        for key in keys[:-1]:
            if key not in target or not isinstance(target[key], dict):
                target[key] = {}
            target = target[key]

        target[keys[-1]] = value

    def save(self, file_path: Optional[str] = None) -> bool:
        """
        Save current configuration to file.

        Args:
            file_path: Optional path to save to, defaults to config_file

        Returns:
            True if saved successfully, False otherwise
        """
        save_path = file_path or self.config_file

        try:
            with open(save_path, 'w', encoding='utf-8') as f:
                json.dump(self.config, f, indent=2, ensure_ascii=False)
            self.logger.info(f"Configuration saved to {save_path}")
            return True
        except OSError as e:
            self.logger.error(f"Error saving configuration to {save_path}: {e}")
            return False

    def validate_llm_config(self) -> None:
        """
        Validate LLM configuration settings.

        Raises:
            ConfigError: If a required setting is missing or out of range
        """
        llm_config = self.config.get('llm', {})

        for field in ('endpoint', 'model', 'max_tokens'):
            if not llm_config.get(field):
                raise ConfigError(f"Missing required LLM config field: {field}")

        endpoint = llm_config['endpoint']
        if not endpoint.startswith(('http://', 'https://')):
            raise ConfigError(f"Invalid LLM endpoint format: {endpoint}")

        if not isinstance(llm_config['max_tokens'], int) or llm_config['max_tokens'] <= 0:
            raise ConfigError("LLM max_tokens must be a positive integer")

        temperature = llm_config.get('temperature')
        if temperature is not None and (isinstance(temperature, bool)
                                        or not isinstance(temperature, (int, float))):
            raise ConfigError(f"LLM temperature must be a number, got {temperature!r}")
        if temperature is not None and not 0 <= temperature <= 2:
            self.logger.warning("LLM temperature should be between 0 and 2")

    def print_config_summary(self, key_status: str = "unknown") -> None:
        """Print a summary of current configuration settings."""
        click.echo("\n" + "=" * 60)
        click.echo("BRAINROT COMMENTS CONFIGURATION")
        click.echo("=" * 60)

        click.echo(f"Config File: {self.config_file}")

        llm = self.config.get('llm', {})
        click.echo(f"\nLLM Endpoint: {llm.get('endpoint', 'Not set')}")
        click.echo(f"Model: {llm.get('model', 'Not set')}")
        click.echo(f"Max Tokens: {llm.get('max_tokens', 'Not set')}")
        click.echo(f"Temperature: {llm.get('temperature', 'Not set')}")
        click.echo(f"Timeout: {llm.get('timeout') or 'transport default'}")

        click.echo(f"\nFallback Phrase: {self.get('comments.fallback_phrase')}")
        click.echo(f"Max Words: {self.get('comments.max_words')}")
        click.echo(f"Context Cap: {self.get('context.max_chars')} characters")

        click.echo(f"\nSecrets File: {self.get('credentials.secrets_file')}")
        click.echo(f"API Key: {key_status}")

        click.echo("=" * 60)
