"""
Configuration Module for Vendor Bill Extraction System.

Settings are layered:

    1. config/settings.yaml, shipped with the package (always loaded)
    2. an optional site file, given to ConfigurationManager or named by the
       BILL_EXTRACTION_CONFIG environment variable, merged key by key on top
    3. in-memory overrides made with set(), e.g. from command-line switches

so a site file only needs the keys it changes.
"""

import os
import yaml
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Optional

ENV_CONFIG_PATH = "BILL_EXTRACTION_CONFIG"
DEFAULT_CONFIG_PATH = Path(__file__).parent / "settings.yaml"
PROJECT_ROOT = Path(__file__).parent.parent


def _deep_merge(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Return base updated by overlay; nested mappings merge, anything else replaces."""
    merged = deepcopy(base)
    for key, value in overlay.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = deepcopy(value)
    return merged


class ConfigurationManager:
    """
    Process-wide settings, read by dot-notation key.

    Attributes:
        override_path: Site file merged over the defaults, if any
        sources: Files the current settings were loaded from, in order

    Example:
        >>> config = ConfigurationManager()
        >>> config.get("extraction.rule_set")
        'vendorbill'
    """

    _instance: Optional['ConfigurationManager'] = None

    def __new__(cls, config_path: Optional[str] = None) -> 'ConfigurationManager':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Load settings on first construction; later calls return the same
        settings and ignore ``config_path``.

        Args:
            config_path: Site file to merge over the defaults. Falls back
                to $BILL_EXTRACTION_CONFIG when None.

        Raises:
            FileNotFoundError: If a settings file does not exist.
            yaml.YAMLError: If a settings file is not valid YAML.
        """
        if self._initialized:
            return

        config_path = config_path or os.environ.get(ENV_CONFIG_PATH)
        self.override_path = Path(config_path) if config_path else None

        self._load_config()
        self._initialized = True

    def _load_config(self) -> None:
        self.sources: List[Path] = [DEFAULT_CONFIG_PATH]
        config = self._read(DEFAULT_CONFIG_PATH)

        if self.override_path is not None:
            config = _deep_merge(config, self._read(self.override_path))
            self.sources.append(self.override_path)

        self._config = config
        self._resolve_paths()

    @staticmethod
    def _read(path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    def _resolve_paths(self) -> None:
        """Make relative entries under 'paths' absolute, based at the project root."""
        paths = self._config.get('paths') or {}
        for key, value in paths.items():
            if value and not Path(value).is_absolute():
                paths[key] = str(PROJECT_ROOT / value)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a value by dot-notation key.

        Example:
            >>> config.get("reconciliation.fallback_account_name")
            'SYSTEM GENERATED - FROM TOTALS'
            >>> config.get("nonexistent.key", "default_value")
            'default_value'
        """
        node: Any = self._config
        for part in key.split('.'):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def set(self, key: str, value: Any) -> None:
        """Override a value in memory until the next reload()."""
        *parents, leaf = key.split('.')
        node = self._config
        for part in parents:
            node = node.setdefault(part, {})
        node[leaf] = value

    def get_all(self) -> Dict[str, Any]:
        """Get a deep copy of the merged settings."""
        return deepcopy(self._config)

    def reload(self) -> None:
        """Re-read the settings files, dropping in-memory overrides."""
        self._load_config()

    @classmethod
    def reset(cls) -> None:
        """Forget the shared instance; the next construction loads afresh."""
        cls._instance = None


def get_config(key: str, default: Any = None) -> Any:
    """Shortcut for ConfigurationManager().get(key, default)."""
    return ConfigurationManager().get(key, default)


__all__ = ['ConfigurationManager', 'get_config']
