"""
Settings loader: YAML loading, env variable injection, Pydantic validation.

- CLI settings from hotprops.yaml (source, interval_ms, encoding, log_level).
- File location: explicit path, else HOTPROPS_SETTINGS env, else ./hotprops.yaml.
- Environment variable injection: ${ENV_VAR} replacement in YAML values.
- HOTPROPS_SOURCE / HOTPROPS_INTERVAL_MS env override the file.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from hotprops.config.schemas import CliSettings
from hotprops.exceptions import SettingsError

_settings: CliSettings | None = None


def reset_settings_cache() -> None:
    """Clear cached settings (for tests). Next get_settings() will reload from file and env."""
    global _settings
    _settings = None


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings; recurse into dict/list."""
    if isinstance(value, str):
        pattern = re.compile(r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)")
        def repl(m: re.Match[str]) -> str:
            name = m.group(1) or m.group(2) or ""
            return os.environ.get(name, m.group(0))
        return pattern.sub(repl, value)
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML file and return dict with env substitution."""
    if not path.exists():
        return {}
    text = path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise SettingsError(f"{path}: invalid YAML: {e}") from e
    if not isinstance(data, dict):
        raise SettingsError(f"{path}: settings must be a mapping at root level")
    return _substitute_env(data)


def settings_path(path: str | Path | None = None) -> Path:
    """Path to hotprops.yaml; explicit path, HOTPROPS_SETTINGS env, or ./hotprops.yaml."""
    if path:
        return Path(path).expanduser().resolve()
    return Path(os.environ.get("HOTPROPS_SETTINGS", "hotprops.yaml")).expanduser().resolve()


def load_settings(path: str | Path | None = None) -> CliSettings:
    """
    Load and validate CLI settings.

    Args:
        path: Settings file override (default from settings_path()).

    Returns:
        Validated CliSettings; defaults when the file does not exist.

    Raises:
        SettingsError: If the YAML is invalid or fails validation.
    """
    data = _load_yaml(settings_path(path))
    if os.environ.get("HOTPROPS_SOURCE"):
        data["source"] = os.environ["HOTPROPS_SOURCE"]
    if os.environ.get("HOTPROPS_INTERVAL_MS"):
        data["interval_ms"] = os.environ["HOTPROPS_INTERVAL_MS"]
    try:
        return CliSettings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"invalid settings: {e}") from e


def get_settings(path: str | Path | None = None) -> CliSettings:
    """Return CLI settings; loaded once, then cached until reset_settings_cache()."""
    global _settings
    if _settings is None:
        _settings = load_settings(path)
    return _settings
