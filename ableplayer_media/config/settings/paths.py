from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

_CONFIG_DIR = Path(__file__).resolve().parent.parent
_PACKAGE_ROOT = _CONFIG_DIR.parent
_PATH_BASES = [_PACKAGE_ROOT, *_PACKAGE_ROOT.parents]

load_dotenv(_PACKAGE_ROOT / ".env")

_DEFAULT_CONFIG_PATHS = {
    "user_settings": str(_PACKAGE_ROOT / "var" / "user_settings.json"),
}

_ENV_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def expand_env_in_str(value: str) -> str:
    """Expand ``${VAR}`` tokens within a string."""

    def _repl(match: re.Match[str]) -> str:
        var = match.group(1)
        return os.getenv(var, "")

    return _ENV_PATTERN.sub(_repl, value)


def read_json(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


def _resolve_candidate(value: str) -> str:
    candidate = Path(expand_env_in_str(value)).expanduser()
    if candidate.is_absolute():
        return str(candidate.resolve())

    for base in _PATH_BASES:
        resolved = (base / candidate).resolve()
        if resolved.exists() or resolved.parent.exists():
            return str(resolved)

    return str((_PACKAGE_ROOT / candidate).resolve())


def load_config_paths() -> Dict[str, str]:
    cfg_path = _CONFIG_DIR / "config_paths.json"
    merged: Dict[str, Any] = dict(_DEFAULT_CONFIG_PATHS)
    if cfg_path.exists():
        merged.update(read_json(cfg_path) or {})

    return {key: _resolve_candidate(str(value)) for key, value in merged.items()}


PATHS: Dict[str, str] = load_config_paths()


def get_user_settings_path() -> Path:
    override = os.getenv("ABLEPLAYER_USER_SETTINGS")
    if override:
        return Path(override).expanduser()
    return Path(PATHS["user_settings"])


def load_user_settings() -> Dict[str, Any]:
    user_path = get_user_settings_path()
    if not user_path.exists():
        return {}
    try:
        data = read_json(user_path)
    except (OSError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def write_user_settings(payload: Dict[str, Any]) -> None:
    user_path = get_user_settings_path()
    user_path.parent.mkdir(parents=True, exist_ok=True)
    with user_path.open("w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=2, ensure_ascii=False, sort_keys=True)


__all__ = [
    "PATHS",
    "expand_env_in_str",
    "get_user_settings_path",
    "load_config_paths",
    "load_user_settings",
    "read_json",
    "write_user_settings",
]
