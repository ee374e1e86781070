"""reqline config - optional YAML defaults and .env resolution."""

import os
import re
from pathlib import Path

import yaml
from dotenv import dotenv_values

from reqline.errors import ConfigError


def load_config(config_path: str | Path | None) -> dict:
    """Load a YAML config file.

    Nothing is read unless a path is given. Stores '_config_dir' in the
    returned dict so env_file can be resolved relative to the config file.
    """
    if config_path is None:
        return {"defaults": {}, "_config_dir": None}
    path = Path(config_path)
    if not path.is_file():
        raise ConfigError(f"Config file '{path}' not found")
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid config file '{path}': {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config file '{path}': expected a mapping")
    defaults = data.get("defaults") or {}
    if not isinstance(defaults, dict):
        raise ConfigError(f"Invalid config file '{path}': 'defaults' must be a mapping")
    return {
        "defaults": defaults,
        "_config_dir": path.resolve().parent,
    }


def load_env(env_file: str | None, base_dir: str | Path = ".") -> dict[str, str]:
    """Build the environment used to expand config header values.

    ``env_file`` comes from the config's defaults and is resolved against
    ``base_dir``, the config file's directory. Its values take precedence
    over os.environ; a missing file is ignored.
    """
    env = dict(os.environ)
    if env_file:
        dotenv_path = Path(base_dir) / env_file
        if dotenv_path.exists():
            dotenv_vars = dotenv_values(str(dotenv_path))
            env.update({k: v for k, v in dotenv_vars.items() if v is not None})
    return env


def resolve_value(value, env: dict[str, str]):
    """Resolve $VAR and ${VAR} references in a string value.

    Unknown variables are left as written. Non-strings pass through.
    """
    if not isinstance(value, str):
        return value

    def _replace(m: re.Match) -> str:
        var_name = m.group(1) or m.group(2)
        return env.get(var_name, m.group(0))

    return re.sub(r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)", _replace, value)


def default_headers(config: dict) -> dict[str, str]:
    """Return the config's default headers with names lower-cased and values resolved."""
    defaults = config.get("defaults", {})
    headers = defaults.get("headers") or {}
    if not isinstance(headers, dict):
        raise ConfigError("'defaults.headers' must be a mapping")
    env = load_env(defaults.get("env_file"), config.get("_config_dir") or ".")
    return {
        str(k).lower(): str(resolve_value(str(v), env)).strip()
        for k, v in headers.items()
    }


def default_timeout(config: dict) -> float | None:
    timeout = config.get("defaults", {}).get("timeout")
    if timeout is None:
        return None
    try:
        value = float(timeout)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid timeout '{timeout}' in config") from None
    if value <= 0:
        raise ConfigError(f"Invalid timeout '{timeout}' in config: must be greater than 0")
    return value
