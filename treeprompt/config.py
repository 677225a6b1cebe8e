#!/usr/bin/env python3
# treeprompt/config.py
from __future__ import annotations

"""
Configuration loader (stdlib-only).

Precedence (low → high):
  1) Built-in defaults
  2) Files in CWD: .env, config.ini, config.json, config.toml
  3) Environment variables prefixed with TREEPROMPT_ (prefix stripped)

Validation:
  - PROMPT: str (may contain ANSI escapes; literal '\\x1b' / '\\033' are decoded)
  - HISTORY_FILE_PATH / LOG_FILE_PATH: None or normalized path
  - LOG_LEVEL: one of {'DEBUG','INFO','WARNING','ERROR','CRITICAL'}
  - COMMANDS_PACKAGE: dotted module name
  - FRONTEND: one of {'auto','prompt_toolkit','readline','plain'}
  - COMPLETE_WHILE_TYPING / SHOW_COMPLETION_AT_START / SHOW_BOOT: bool
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping
import configparser
import json
import os
import re
import tomllib

from treeprompt.interface.cli import FRONTENDS

ENV_PREFIX = "TREEPROMPT_"

DEFAULTS: dict[str, Any] = {
    "PROMPT": "> ",
    "HISTORY_FILE_PATH": str(Path.home() / ".treeprompt_history"),
    "LOG_FILE_PATH": None,
    "LOG_LEVEL": "WARNING",
    "COMMANDS_PACKAGE": "plugins",
    "FRONTEND": "auto",
    "COMPLETE_WHILE_TYPING": True,
    "SHOW_COMPLETION_AT_START": True,
    "SHOW_BOOT": False,
}


# ---------- data model ----------

@dataclass(frozen=True)
class AppConfig:
    prompt: str
    history_file_path: Path | None
    log_file_path: Path | None
    log_level: str
    commands_package: str
    frontend: str

    complete_while_typing: bool
    show_completion_at_start: bool
    show_boot: bool

    # Unrecognized keys preserved for debugging/forward-compat
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- file loaders (stdlib) ----------

def _load_env_file(path: Path) -> dict[str, str]:
    """Very small .env parser: KEY=VALUE, supports quotes; ignores comments/blank lines."""
    out: dict[str, str] = {}
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return out

    line_re = re.compile(r"""^\s*([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*?)\s*$""")
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        m = line_re.match(line)
        if not m:
            continue
        k, v = m.group(1), m.group(2)
        if len(v) >= 2 and v[0] == v[-1] and v[0] in "'\"":
            v = v[1:-1]
        out[k] = v
    return out


def _load_ini_file(path: Path) -> dict[str, str]:
    cfg = configparser.ConfigParser(interpolation=None)
    cfg.optionxform = str  # type: ignore[assignment]
    if not cfg.read(path, encoding="utf-8"):
        return {}
    flat: dict[str, str] = {}
    for sec in cfg.sections():
        for k, v in cfg.items(sec):
            flat[k] = v
    return flat


def _load_json_file(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    return data if isinstance(data, dict) else {}


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc


def _flatten_mapping(obj: Any, prefix: str = "") -> dict[str, Any]:
    """
    Flatten nested dicts to UPPER_SNAKE keys.
    Example: {'log': {'level': 'debug'}} -> {'LOG_LEVEL': 'debug'}
    """
    flat: dict[str, Any] = {}
    if isinstance(obj, Mapping):
        for k, v in obj.items():
            key = f"{prefix}_{k}" if prefix else str(k)
            if isinstance(v, Mapping):
                flat.update(_flatten_mapping(v, key))
            else:
                flat[key.upper()] = v
    return flat


def _find_config_files(base: Path | None = None) -> list[Path]:
    cwd = base or Path.cwd()
    return [
        cwd / ".env",
        cwd / "config.ini",
        cwd / "config.json",
        cwd / "config.toml",
    ]


# ---------- normalization & coercion ----------

_BOOL_TRUE = {"1", "true", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "no", "n", "off"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _as_bool(key: str, val: Any) -> bool:
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in _BOOL_TRUE:
        return True
    if s in _BOOL_FALSE:
        return False
    raise ValueError(f"{key} must be a boolean, got: {val!r}")


def _as_opt_str(val: Any) -> str | None:
    return None if val is None or str(val).strip().lower() in {"", "none"} else str(val)


def _as_opt_path(val: Any) -> Path | None:
    v = _as_opt_str(val)
    if v is None:
        return None
    # expand both ~ and env vars
    return Path(os.path.expandvars(os.path.expanduser(v))).resolve()


def _as_prompt(val: Any) -> str:
    text = "" if val is None else str(val)
    # allow colour codes written literally in config files
    return text.replace("\\x1b", "\x1b").replace("\\033", "\x1b").replace("\\e", "\x1b")


def _as_choice(key: str, val: Any, allowed: set[str] | tuple[str, ...], *, upper: bool = False) -> str:
    s = str(val).strip()
    s = s.upper() if upper else s.lower()
    if s not in allowed:
        raise ValueError(f"{key} must be one of {sorted(allowed)}, got {val!r}")
    return s


def _normalize_keys(d: Mapping[str, Any]) -> dict[str, Any]:
    return {str(k).upper(): v for k, v in d.items()}


# ---------- merge & load ----------

def _merge_sources(base: Path | None = None, environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    merged: dict[str, Any] = dict(DEFAULTS)

    for file in _find_config_files(base):
        if file.suffix == ".env" or file.name == ".env":
            merged.update(_normalize_keys(_load_env_file(file)))
        elif file.suffix == ".ini":
            merged.update(_normalize_keys(_load_ini_file(file)))
        elif file.suffix == ".json":
            merged.update(_flatten_mapping(_load_json_file(file)))
        elif file.suffix == ".toml":
            merged.update(_flatten_mapping(_load_toml_file(file)))

    # Environment variables override all
    env = os.environ if environ is None else environ
    merged.update({
        k[len(ENV_PREFIX):]: v for k, v in env.items()
        if k.startswith(ENV_PREFIX) and len(k) > len(ENV_PREFIX)
    })
    return merged


def _validate_and_build(config: dict[str, Any]) -> AppConfig:
    def get(key: str) -> Any:
        return config.get(key, DEFAULTS[key])

    package = str(get("COMMANDS_PACKAGE")).strip()
    if not re.fullmatch(r"[A-Za-z_][\w]*(\.[A-Za-z_][\w]*)*", package):
        raise ValueError(f"COMMANDS_PACKAGE must be a dotted module name, got {package!r}")

    recognized = set(DEFAULTS)
    return AppConfig(
        prompt=_as_prompt(get("PROMPT")),
        history_file_path=_as_opt_path(get("HISTORY_FILE_PATH")),
        log_file_path=_as_opt_path(get("LOG_FILE_PATH")),
        log_level=_as_choice("LOG_LEVEL", get("LOG_LEVEL") or "WARNING", _LOG_LEVELS, upper=True),
        commands_package=package,
        frontend=_as_choice("FRONTEND", get("FRONTEND"), FRONTENDS),
        complete_while_typing=_as_bool("COMPLETE_WHILE_TYPING", get("COMPLETE_WHILE_TYPING")),
        show_completion_at_start=_as_bool("SHOW_COMPLETION_AT_START", get("SHOW_COMPLETION_AT_START")),
        show_boot=_as_bool("SHOW_BOOT", get("SHOW_BOOT")),
        extra={k: v for k, v in config.items() if k not in recognized},
    )


# ---------- public API ----------

def load_config(base: Path | None = None, environ: Mapping[str, str] | None = None) -> AppConfig:
    """
    Load, merge, normalize, and validate configuration.
    `base` replaces the CWD for file lookup and `environ` replaces os.environ.
    No filesystem side-effects. Raises ValueError on invalid values.
    """
    return _validate_and_build(_merge_sources(base, environ))
