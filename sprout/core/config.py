"""Configuration management for Sprout.

This module provides a clean interface for reading and writing
both repository-local and global configuration files.
"""

import configparser
import io
import os
from pathlib import Path
from typing import Dict, Optional

from .errors import Corrupt, NotFound
from sprout.utils.fs import write_atomic

DEFAULTS = {
    ('init', 'defaultbranch'): 'main',
    ('core', 'workers'): '4',
}


def split_key(name: str):
    """
    Split a dotted config name into (section, key).

    Raises:
        NotFound: If name has no section part
    """
    if '.' not in name:
        raise NotFound(f"Config key must be section.key: {name}")
    section, key = name.split('.', 1)
    if not section or not key:
        raise NotFound(f"Config key must be section.key: {name}")
    return section, key


class Config:
    """
    Manages Sprout configuration files.

    Configuration is stored in INI format:
    - Global config: ~/.sproutconfig
    - Repository config: .sprout/config

    Repository config takes precedence over global config.
    Environment variables (SPROUT_<SECTION>_<KEY>) take highest precedence.
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.sproutconfig'

    def __init__(self, repo_config_path: Optional[Path] = None,
                 global_config_path: Optional[Path] = None):
        """
        Initialize Config manager.

        Args:
            repo_config_path: Path to repository config file, if in a repo
            global_config_path: Override for the global config location
        """
        self.repo_config_path = Path(repo_config_path) if repo_config_path else None
        self.global_config_path = Path(global_config_path) if global_config_path else self.GLOBAL_CONFIG_PATH
        self._global_config = None
        self._repo_config = None

    @staticmethod
    def _load(path: Path) -> configparser.ConfigParser:
        parser = configparser.ConfigParser()
        if path.exists():
            try:
                parser.read(path)
            except configparser.Error as exc:
                raise Corrupt(f"Cannot parse config file {path}: {exc}") from exc
        return parser

    @property
    def global_config(self) -> configparser.ConfigParser:
        """Load and return global configuration."""
        if self._global_config is None:
            self._global_config = self._load(self.global_config_path)
        return self._global_config

    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        """Load and return repository configuration."""
        if self._repo_config is None and self.repo_config_path:
            self._repo_config = self._load(self.repo_config_path)
        return self._repo_config

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.

        Priority order (highest to lowest):
        1. Environment variables (SPROUT_<SECTION>_<KEY>)
        2. Repository config
        3. Global config
        4. Fallback value, then the built-in default

        Returns:
            Configuration value or fallback
        """
        env_key = f"SPROUT_{section.upper()}_{key.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return env_value

        if self.repo_config and self.repo_config.has_option(section, key):
            return self.repo_config.get(section, key)

        if self.global_config.has_option(section, key):
            return self.global_config.get(section, key)

        if fallback is not None:
            return fallback
        return DEFAULTS.get((section, key))

    def get_int(self, section: str, key: str, fallback: int = 0) -> int:
        """Get a configuration value as an integer."""
        value = self.get(section, key)
        if value is None:
            return fallback
        try:
            return int(value)
        except ValueError as exc:
            raise Corrupt(f"Config {section}.{key} is not a number: {value!r}") from exc

    def _target(self, global_config: bool):
        if global_config:
            return self.global_config, self.global_config_path
        if not self.repo_config_path:
            raise NotFound("No repository config path available")
        return self.repo_config, self.repo_config_path

    @staticmethod
    def _save(config: configparser.ConfigParser, path: Path) -> None:
        buffer = io.StringIO()
        config.write(buffer)
        write_atomic(path, buffer.getvalue().encode('utf-8'))

    def set(self, section: str, key: str, value: str, global_config: bool = False) -> None:
        """
        Set a configuration value.

        Args:
            section: Config section
            key: Config key
            value: Value to set
            global_config: If True, write to global config; otherwise repo config
        """
        config, config_path = self._target(global_config)

        if not config.has_section(section):
            config.add_section(section)

        config.set(section, key, value)
        self._save(config, config_path)

    def unset(self, section: str, key: str, global_config: bool = False) -> bool:
        """
        Remove a configuration value.

        Returns:
            True if value was removed, False if it didn't exist
        """
        config, config_path = self._target(global_config)

        if not config.has_option(section, key):
            return False

        config.remove_option(section, key)

        # Remove empty sections
        if not config.options(section):
            config.remove_section(section)

        self._save(config, config_path)
        return True

    def list_all(self) -> Dict[str, str]:
        """
        List all configuration values as dotted names.

        Repository values override global ones.
        """
        result = {}
        sources = [self.global_config]
        if self.repo_config:
            sources.append(self.repo_config)

        for config in sources:
            for section in config.sections():
                for key, value in config.items(section):
                    result[f"{section}.{key}"] = value

        return dict(sorted(result.items()))
