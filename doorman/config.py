"""Configuration loader with TOML reader, env var bridge, and precedence chain.

Precedence (highest → lowest):
    env vars  >  ~/.doorman.toml (or $DOORMAN_CONFIG)  >  compiled defaults
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

# ---------------------------------------------------------------------------
# TOML reader (stdlib 3.11+ / tomli fallback for 3.10)
# ---------------------------------------------------------------------------

try:
    import tomllib  # type: ignore[import-not-found]
except ModuleNotFoundError:
    import tomli as tomllib  # type: ignore[import-untyped,no-redef]

from doorman.errors import ConfigError
from doorman.fetch import DEFAULT_KEYS_URL, DEFAULT_TIMEOUT

# ---------------------------------------------------------------------------
# Compiled defaults
# ---------------------------------------------------------------------------

CONFIG_FILENAME = ".doorman.toml"
CONFIG_ENV = "DOORMAN_CONFIG"

DEFAULTS: dict[str, dict[str, Any]] = {
    "source": {
        "url": DEFAULT_KEYS_URL,
        "timeout": DEFAULT_TIMEOUT,
    },
    "store": {
        "authorized_keys": "",  # empty → ~/.ssh/authorized_keys
    },
}

# TOML key → env var mapping (explicit, no magic)
ENV_MAP: dict[tuple[str, str], str] = {
    ("source", "url"): "DOORMAN_KEYS_URL",
    ("source", "timeout"): "DOORMAN_TIMEOUT",
    ("store", "authorized_keys"): "DOORMAN_AUTHORIZED_KEYS",
}


# ---------------------------------------------------------------------------
# Config discovery
# ---------------------------------------------------------------------------


def find_config() -> Path | None:
    """Return $DOORMAN_CONFIG if set, else ~/.doorman.toml when it exists."""
    explicit = os.environ.get(CONFIG_ENV)
    if explicit:
        return Path(explicit).expanduser()
    try:
        candidate = Path.home() / CONFIG_FILENAME
    except (RuntimeError, KeyError):
        return None
    return candidate if candidate.is_file() else None


# ---------------------------------------------------------------------------
# TOML loading
# ---------------------------------------------------------------------------


def load_toml(path: Path) -> dict[str, Any]:
    """Parse a TOML file and return a dict."""
    with open(path, "rb") as fh:
        return tomllib.load(fh)


# ---------------------------------------------------------------------------
# Merged config (defaults ← file ← env vars)
# ---------------------------------------------------------------------------


def load_config(path: Path | None = None) -> dict[str, dict[str, Any]]:
    """Return the fully-resolved configuration dict.

    Merge order: compiled defaults ← TOML file ← env vars.
    """
    cfg: dict[str, dict[str, Any]] = {
        section: dict(values) for section, values in DEFAULTS.items()
    }

    config_path = path or find_config()
    if config_path and config_path.is_file():
        try:
            file_data = load_toml(config_path)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigError(f"cannot load config {config_path}: {exc}") from exc
        for section, values in file_data.items():
            if isinstance(values, dict) and section in cfg:
                cfg[section].update(values)

    for (section, key), env_var in ENV_MAP.items():
        env_val = os.environ.get(env_var)
        if env_val is not None:
            default_val = DEFAULTS.get(section, {}).get(key)
            cfg.setdefault(section, {})[key] = _coerce(env_val, default_val)

    return cfg


def _coerce(value: str, reference: Any) -> Any:
    """Coerce a string env value to the type of the reference default."""
    if isinstance(reference, int):
        try:
            return int(value)
        except ValueError:
            return value
    return value
