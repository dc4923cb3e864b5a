"""
Settings - packaged YAML defaults overlaid with an optional user file

Precedence (lowest first): ai_translate/config/settings.yaml, the file given
with --config, then command-line flags (applied by the CLI).
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from functools import lru_cache

DEFAULT_CONFIG_DIR = Path(__file__).parent.parent / "config"
SETTINGS_NAME = "settings"


def load_yaml_file(path: Path) -> Dict[str, Any]:
    """
    Parse one YAML document that must be a mapping (an empty file is `{}`).

    Raises:
        FileNotFoundError: Missing file
        yaml.YAMLError: Invalid YAML
        ValueError: Top level is not a mapping
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level, got {type(data).__name__}")
    return data


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """New dict with `override` merged into `base`; nested mappings are copied, never shared"""
    merged = {k: deep_merge(v, {}) if isinstance(v, dict) else v for k, v in base.items()}
    for key, value in override.items():
        if isinstance(value, dict):
            merged[key] = deep_merge(merged.get(key) if isinstance(merged.get(key), dict) else {}, value)
        else:
            merged[key] = value
    return merged


class ConfigLoader:
    """
    Cached access to the YAML files in a config directory.

    Usage:
        loader = ConfigLoader()
        defaults = loader.load("settings")
        settings = loader.load_settings("my_settings.yaml")
    """

    def __init__(self, config_dir: Optional[str] = None):
        self.config_dir = Path(config_dir) if config_dir else DEFAULT_CONFIG_DIR

    @lru_cache(maxsize=8)
    def load(self, name: str) -> Dict[str, Any]:
        """
        `<name>.yaml` (or `.yml`) from the config directory.

        The returned dict is shared by every caller; use load_settings() for a
        private copy.
        """
        for suffix in (".yaml", ".yml"):
            path = self.config_dir / f"{name}{suffix}"
            if path.is_file():
                return load_yaml_file(path)
        raise FileNotFoundError(f"No {name}.yaml in {self.config_dir}")

    def load_settings(self, override_path: Optional[str] = None) -> Dict[str, Any]:
        """Packaged settings, deep-merged with `override_path` when given"""
        settings = deep_merge(self.load(SETTINGS_NAME), {})
        if override_path:
            settings = deep_merge(settings, load_yaml_file(Path(override_path)))
        return settings

    def clear_cache(self):
        self.load.cache_clear()


_default_loader: Optional[ConfigLoader] = None


def get_config_loader() -> ConfigLoader:
    global _default_loader
    if _default_loader is None:
        _default_loader = ConfigLoader()
    return _default_loader


def get_config(name: str) -> Dict[str, Any]:
    return get_config_loader().load(name)


def get_settings(override_path: Optional[str] = None) -> Dict[str, Any]:
    """Merged settings for one run (safe to mutate)"""
    return get_config_loader().load_settings(override_path)
