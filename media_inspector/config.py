"""Load, save, and validate configuration from config.yaml."""

import copy
import logging
import os
import secrets
import shutil
from pathlib import Path

import yaml

DEFAULT_CONFIG = {
    "server": {
        "host": "0.0.0.0",
        "port": 8080,
    },
    "secret_token": None,
    "ffmpeg": {
        "binary": "ffmpeg",
        "timeout": 60,
    },
    "probe": {
        "workers": min(4, os.cpu_count() or 1),
        "allowed_dirs": [],
    },
    "logging": {
        "level": "INFO",
    },
}


def _find_config_path() -> Path:
    """Find the config.yaml file, checking env var then default locations."""
    if env_path := os.environ.get("MEDIA_INSPECTOR_CONFIG"):
        return Path(env_path)
    # Default: config.yaml next to the package's parent directory
    return Path(__file__).resolve().parent.parent / "config.yaml"


def _deep_merge(base: dict, override: dict) -> dict:
    """Merge override into base recursively."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def normalize_allowed_dirs(value) -> list[str] | None:
    """Return allowed_dirs as a list of strings, or None if it cannot be one.

    null becomes an empty list and a bare string a one-item list.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, list) and all(isinstance(d, str) and d for d in value):
        return list(value)
    return None


def valid_timeout(value) -> bool:
    """True for a positive int or float (bool excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def load_config(config_path: Path | None = None) -> dict:
    """Load config from YAML file, merged with defaults."""
    if config_path is None:
        config_path = _find_config_path()

    config = copy.deepcopy(DEFAULT_CONFIG)
    if config_path.exists():
        with open(config_path) as f:
            user_config = yaml.safe_load(f) or {}
        config = _deep_merge(config, user_config)

    if not isinstance(config.get("probe"), dict):
        config["probe"] = copy.deepcopy(DEFAULT_CONFIG["probe"])
    probe = config["probe"]
    probe["allowed_dirs"] = normalize_allowed_dirs(probe.get("allowed_dirs")) or []

    return config


def save_config(config: dict, config_path: Path | None = None) -> None:
    """Save config back to YAML file."""
    if config_path is None:
        config_path = _find_config_path()

    # Runtime-only keys are not persisted
    save_data = {k: v for k, v in config.items() if k != "_config_path"}

    with open(config_path, "w") as f:
        yaml.dump(save_data, f, default_flow_style=False, sort_keys=False)


def generate_secret_token() -> str:
    """Generate a cryptographically secure token."""
    return secrets.token_urlsafe(32)


def validate_config(config: dict) -> list[str]:
    """Validate configuration, returning a list of warnings."""
    warnings = []
    for d in config.get("probe", {}).get("allowed_dirs") or []:
        p = Path(d)
        if not p.is_absolute():
            warnings.append(f"Allowed directory must be absolute: {d}")
        elif not p.exists():
            warnings.append(f"Allowed directory does not exist: {d}")

    timeout = config.get("ffmpeg", {}).get("timeout")
    if timeout is not None and not valid_timeout(timeout):
        warnings.append(f"ffmpeg timeout must be a positive number: {timeout!r}")

    binary = config.get("ffmpeg", {}).get("binary") or "ffmpeg"
    if shutil.which(binary) is None:
        warnings.append(f"ffmpeg binary not found: {binary}")

    level = str(config.get("logging", {}).get("level", "INFO")).upper()
    if not isinstance(logging.getLevelName(level), int):
        warnings.append(f"Unknown log level: {level}")

    if config["server"]["host"] == "0.0.0.0" and not config.get("secret_token"):
        warnings.append(
            "Server bound to 0.0.0.0 without secret_token: anyone on the network can access"
        )
    return warnings
