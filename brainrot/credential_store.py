"""
Credential Storage
==================
Persists the OpenAI API key, the only state that outlives a single action.

Secrets are kept in a small JSON object keyed by name (the key lives under
'brainrot.openaiApiKey' by default) in a file readable only by its owner.
The key itself is never logged; log lines use mask_secret().
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional

from .errors import BrainrotError, InvalidCredential

DEFAULT_KEY_NAME = 'brainrot.openaiApiKey'
DEFAULT_KEY_PREFIX = 'sk-'


def mask_secret(secret: Optional[str]) -> str:
    """Return a form of the secret that is safe to show or log."""
    if not secret:
        return "not set"
    if len(secret) <= 10:
        return "*" * len(secret)
    return f"{secret[:3]}...{secret[-4:]}"


def validate_api_key(value: Optional[str], prefix: str = DEFAULT_KEY_PREFIX) -> str:
    """
    Validate a key entered by the user.

    Args:
        value: Raw input
        prefix: Required key prefix

    Returns:
        The key with surrounding whitespace removed

    Raises:
        InvalidCredential: If the key is empty or lacks the prefix
    """
    key = (value or "").strip()
    if not key:
        raise InvalidCredential("API key cannot be empty")
    if not key.startswith(prefix):
        raise InvalidCredential(f"Invalid API key format. Keys start with '{prefix}'.")
    return key


class CredentialStore:
    """JSON-file backed secret store holding the API key."""

    def __init__(self, secrets_file: str, key_name: str = DEFAULT_KEY_NAME):
        """
        Initialize the store.

        Args:
            secrets_file: Path of the JSON secrets file (created on first write)
            key_name: Name the API key is stored under
        """
        self.secrets_file = Path(secrets_file).expanduser()
        self.key_name = key_name
        self.logger = logging.getLogger('credential_store')

    def _read_all(self) -> Dict[str, str]:
        if not self.secrets_file.exists():
            return {}

        try:
            with open(self.secrets_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            self.logger.error(f"Secrets file {self.secrets_file} is not valid JSON: {e}")
            return {}
        except (OSError, UnicodeDecodeError) as e:
            raise BrainrotError(f"Could not read secrets file {self.secrets_file}: {e}") from e

        if not isinstance(data, dict):
            self.logger.error(f"Secrets file {self.secrets_file} does not hold an object")
            return {}
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        temp_path = self.secrets_file.with_suffix(self.secrets_file.suffix + '.tmp')
        try:
            self.secrets_file.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(temp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
            os.replace(temp_path, self.secrets_file)
        except OSError as e:
            raise BrainrotError(f"Could not write secrets file {self.secrets_file}: {e}") from e

    def get(self) -> Optional[str]:
        """Return the stored API key, or None if none is configured or readable."""
        try:
            value = self._read_all().get(self.key_name)
        except BrainrotError as e:
            self.logger.error(e.message)
            return None
        return value or None

    def store(self, api_key: str) -> None:
        """
        Store (or overwrite) the API key.

        Raises:
            BrainrotError: If the secrets file cannot be read or written
        """
        data = self._read_all()
        data[self.key_name] = api_key
        self._write_all(data)
        self.logger.info(f"Stored API key {mask_secret(api_key)} in {self.secrets_file}")

    def delete(self) -> bool:
        """
        Remove the API key.

        Returns:
            True if a key was removed, False if none was stored
        """
        data = self._read_all()
        if self.key_name not in data:
            return False

        del data[self.key_name]
        self._write_all(data)
        self.logger.info(f"Removed API key from {self.secrets_file}")
        return True
