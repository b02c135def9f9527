"""Configuration for Grok Search.

Settings are resolved from the environment, overlaid with a small JSON file:

  1. ``GROK_API_URL``, ``GROK_API_KEY``, ``GROK_MODEL``, ``DEBUG`` /
     ``GROK_DEBUG``, ``GROK_LOG_LEVEL``
  2. ``~/.config/grok-search/config.json`` (only the ``model`` key is read)

A model chosen through :meth:`ConfigStore.persist_model_choice` is cached on
the store and wins over the file and the environment for the rest of the
store's lifetime.  Edits made to the file by another process are not seen
while a cached choice exists.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, SecretStr

from grok_search.errors import ConfigError

_logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.x.ai/v1"
DEFAULT_MODEL = "grok-4-fast"
DEFAULT_LOG_LEVEL = "INFO"

CONFIG_DIR = Path.home() / ".config" / "grok-search"
CONFIG_FILENAME = "config.json"


# ---------------------------------------------------------------------------
# Config data structures
# ---------------------------------------------------------------------------

class Settings(BaseModel):
    """Resolved settings for one tool call."""

    model_config = ConfigDict(frozen=True)

    api_url: str = DEFAULT_API_URL
    api_key: SecretStr
    model: str = DEFAULT_MODEL

    @property
    def api_key_prefix(self) -> str:
        return self.api_key.get_secret_value()[:10] + "..."


class FileConfig(BaseModel):
    """Contents of the on-disk JSON file.  Unknown keys survive a rewrite."""

    model_config = ConfigDict(extra="allow")

    model: str | None = None


def _is_true(value: str | None) -> bool:
    return (value or "").strip().lower() == "true"


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class ConfigStore:
    """Resolves :class:`Settings` and persists model switches.

    Parameters
    ----------
    config_file:
        Path of the JSON file.  Defaults to
        ``~/.config/grok-search/config.json``.
    env:
        Environment mapping.  Defaults to ``os.environ`` (read on every call).
    """

    def __init__(
        self,
        config_file: str | Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self.config_file = (
            Path(config_file) if config_file else CONFIG_DIR / CONFIG_FILENAME
        )
        self._env = env
        self._cached_model: str | None = None

    @property
    def env(self) -> Mapping[str, str]:
        return os.environ if self._env is None else self._env

    @property
    def log_dir(self) -> Path:
        return self.config_file.parent / "logs"

    # ------------------------------------------------------------------
    # Individual settings
    # ------------------------------------------------------------------

    @property
    def api_url(self) -> str:
        return (self.env.get("GROK_API_URL") or DEFAULT_API_URL).rstrip("/")

    @property
    def api_key(self) -> str:
        key = self.env.get("GROK_API_KEY")
        if not key:
            raise ConfigError("GROK_API_KEY environment variable is not set")
        return key

    @property
    def debug_enabled(self) -> bool:
        return _is_true(self.env.get("DEBUG")) or _is_true(self.env.get("GROK_DEBUG"))

    @property
    def log_level(self) -> str:
        return (self.env.get("GROK_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()

    def current_model(self) -> str:
        """Return the active model without requiring an API key."""
        if self._cached_model:
            return self._cached_model
        file_config = self.load_file()
        if file_config is not None and file_config.model:
            return file_config.model
        return self.env.get("GROK_MODEL") or DEFAULT_MODEL

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self) -> Settings:
        """Build :class:`Settings`.  Raises :class:`ConfigError` without a key."""
        return Settings(
            api_url=self.api_url,
            api_key=SecretStr(self.api_key),
            model=self.current_model(),
        )

    def validate(self) -> tuple[bool, str | None]:
        """Return ``(valid, error_message)``."""
        try:
            self.api_key
        except ConfigError as e:
            return False, str(e)
        return True, None

    # ------------------------------------------------------------------
    # File I/O
    # ------------------------------------------------------------------

    def load_file(self) -> FileConfig | None:
        """Load the JSON file.  A missing or unreadable file yields ``None``."""
        try:
            raw = json.loads(self.config_file.read_text(encoding="utf-8"))
            return FileConfig.model_validate(raw)
        except (OSError, ValueError) as e:
            # pydantic.ValidationError is a ValueError
            _logger.debug("No usable config at %s: %s", self.config_file, e)
            return None

    def save_file(self, data: FileConfig | dict[str, Any]) -> None:
        """Write *data* as indented JSON, creating the directory if needed."""
        if isinstance(data, FileConfig):
            data = data.model_dump(exclude_none=True)
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(
            json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8",
        )

    def persist_model_choice(self, model: str) -> None:
        """Store *model* in the file and in this store's cache."""
        file_config = self.load_file() or FileConfig()
        file_config.model = model
        self.save_file(file_config)
        self._cached_model = model
        _logger.info("Model switched to %s (saved to %s)", model, self.config_file)
