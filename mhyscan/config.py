"""Persistent JSON configuration text stored on disk."""

from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar

from mhyscan.log import log_info

DEFAULT_PATH = Path("./Config/userinfo.json")
DEFAULT_CONFIG = (
    '{"auto_exit": false,"auto_login":false,"auto_start": false,'
    '"account":[],"last_account":0,"num":0}'
)


class ConfigStore:
    """Holds the configuration text and mirrors every change to a file."""

    _instance: ClassVar[ConfigStore | None] = None

    def __init__(self, path: str | os.PathLike[str] = DEFAULT_PATH) -> None:
        self._path = Path(path)
        self._config = ""
        self._config = self._load()

    @classmethod
    def get_instance(cls) -> ConfigStore:
        """Return the shared store at the default location, creating it once."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @property
    def path(self) -> Path:
        return self._path

    def get_config(self) -> str:
        return self._config

    def update_config(self, config: str) -> None:
        """Replace the configuration and write it to the file."""
        self._config = config
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(config, encoding="utf-8")

    def default_config(self) -> str:
        """Reset to the default configuration, write it out and return it."""
        self._config = DEFAULT_CONFIG
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(DEFAULT_CONFIG, encoding="utf-8")
        log_info("created default config file {}", self._path)
        return DEFAULT_CONFIG

    def _load(self) -> str:
        if self._path.exists():
            content = self._path.read_text(encoding="utf-8")
            log_info("read config file {}", self._path)
            return content
        return self.default_config()