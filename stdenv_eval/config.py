"""stdenv_eval.config

Evaluation settings.

Sources, lowest to highest precedence:

1. defaults on :class:`EvalConfig`
2. an optional YAML file (top-level mapping, same keys as the dataclass)
3. environment variables (``.env`` at the repo root is loaded first and
   never overrides a variable that is already exported)
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv

from stdenv_eval.platforms import platform_from_system, system_of
from stdenv_eval.stdenvs import AbsencePolicy
from tools.core_root import ENV_PATH


class ConfigError(ValueError):
    """Invalid configuration value or file."""


# environment variable -> EvalConfig field
ENV_VARS: Dict[str, str] = {
    "STDENV_SYSTEM": "system",
    "NIX_REMOTE": "nix_remote",
    "STDENV_EVAL_TIMEOUT": "timeout_seconds",
    "STDENV_INITIAL_HEAP_SIZE": "initial_heap_size",
    "STDENV_LIMIT_SUPPORTED_SYSTEMS": "limit_supported_systems",
    "STDENV_ABSENCE_POLICY": "absence_policy",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class EvalConfig:
    system: str = "x86_64-linux"
    nix_remote: str = ""
    timeout_seconds: int = 1200
    initial_heap_size: Optional[str] = None
    limit_supported_systems: bool = True
    absence_policy: AbsencePolicy = AbsencePolicy.SAME

    def with_overrides(self, overrides: Mapping[str, Any]) -> "EvalConfig":
        known = {f.name for f in dataclasses.fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {unknown}")
        coerced = {k: _coerce(k, v) for k, v in overrides.items()}
        return dataclasses.replace(self, **coerced)


def _coerce(key: str, value: Any) -> Any:
    if key == "timeout_seconds":
        try:
            n = int(str(value).strip())
        except ValueError:
            raise ConfigError(f"timeout_seconds must be an integer, got {value!r}") from None
        if n <= 0:
            raise ConfigError(f"timeout_seconds must be positive, got {n}")
        return n
    if key == "limit_supported_systems":
        if isinstance(value, bool):
            return value
        s = str(value).strip().lower()
        if s in _TRUE:
            return True
        if s in _FALSE:
            return False
        raise ConfigError(f"limit_supported_systems must be a boolean, got {value!r}")
    if key == "absence_policy":
        if isinstance(value, AbsencePolicy):
            return value
        try:
            return AbsencePolicy.parse(str(value))
        except ValueError as e:
            raise ConfigError(str(e)) from None
    if key == "system":
        try:
            return system_of(platform_from_system(str(value or "")))
        except ValueError as e:
            raise ConfigError(str(e)) from None
    if key == "initial_heap_size":
        s = "" if value is None else str(value).strip()
        return s or None
    if value is None:
        raise ConfigError(f"{key} must not be empty")
    return str(value).strip()


def load_config_yaml(path: Path) -> Dict[str, Any]:
    """Load a config mapping from YAML."""
    import yaml

    p = Path(path).expanduser().resolve()
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {p}")
    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {p}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"Config YAML must be a mapping/object at top level: {p}")
    return raw


def config_from_env(environ: Mapping[str, str]) -> Dict[str, str]:
    return {field: environ[var] for var, field in ENV_VARS.items() if var in environ}


def load_config(
    config_path: Optional[Path] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    dotenv_path: Optional[Path] = ENV_PATH,
) -> EvalConfig:
    """Build an :class:`EvalConfig` from defaults, YAML, and the environment.

    Pass ``environ`` to read from a mapping instead of ``os.environ``; the
    ``.env`` file is only consulted when reading the real environment.
    """
    if environ is None:
        if dotenv_path is not None and Path(dotenv_path).exists():
            load_dotenv(dotenv_path, override=False)
        environ = os.environ

    cfg = EvalConfig()
    if config_path is not None:
        cfg = cfg.with_overrides(load_config_yaml(config_path))
    return cfg.with_overrides(config_from_env(environ))
