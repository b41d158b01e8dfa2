from copy import deepcopy
from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULT_CONFIG_PATH = Path("userbase.config.yaml")

ALLOWED_BACKENDS = ("sqlite", "memory")

BASE_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "storage": {
        "backend": "sqlite",
        "sqlite_path": "userbase.db",
    },
    "logging": {
        "level": "INFO",
    },
}


def _merge_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay user sections on the built-in defaults, one level deep."""
    merged = deepcopy(BASE_DEFAULTS)
    for section, values in config.items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section].update(values)
        else:
            merged[section] = values
    return merged


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load userbase configuration from YAML file.

    Args:
        path: Optional path to config file. Defaults to userbase.config.yaml

    Returns:
        Config dict with defaults filled in

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the file is not a mapping or names an unknown backend
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError("Config must be a dictionary")

    config = _merge_defaults(raw)
    backend = config["storage"].get("backend")
    if backend not in ALLOWED_BACKENDS:
        raise ValueError(f"Unknown storage backend: {backend} (expected one of {ALLOWED_BACKENDS})")
    return config


def load_config_or_defaults(path: Path | None = None) -> Dict[str, Any]:
    """Like load_config, but a missing file yields the built-in defaults."""
    try:
        return load_config(path)
    except FileNotFoundError:
        return deepcopy(BASE_DEFAULTS)
