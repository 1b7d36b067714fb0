from __future__ import annotations

import os
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from ableplayer_media.backend.common.errors import ConfigError
from ableplayer_media.backend.common.logging import get_logger

from .filetypes import ADMIN_SETTINGS, PLUGIN_NAME, validate_filetypes
from .paths import get_user_settings_path, load_user_settings, write_user_settings

log = get_logger(__name__)

_SETTINGS_LOCK = threading.Lock()
_SETTINGS_SINGLETON: Optional["Settings"] = None

DEFAULT_MEDIA_WIDTH = 400


def _coerce_dimension(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def _default_plugin_config() -> Dict[str, Dict[str, str]]:
    return {PLUGIN_NAME: {key: s.default for key, s in ADMIN_SETTINGS.items()}}


@dataclass
class Settings:
    app_name: str = "ableplayer-media"
    env: str = "development"
    log_level: str = "INFO"
    wwwroot: str = ""
    media_default_width: int = DEFAULT_MEDIA_WIDTH
    plugins: Dict[str, Dict[str, str]] = field(default_factory=_default_plugin_config)

    def get_config(self, plugin: str, key: str) -> Optional[str]:
        return self.plugins.get(plugin, {}).get(key)

    def set_config(self, plugin: str, key: str, value: str) -> None:
        self.plugins.setdefault(plugin, {})[key] = value

    def as_dict(self) -> Dict[str, Any]:
        return {
            "app_name": self.app_name,
            "env": self.env,
            "log_level": self.log_level,
            "wwwroot": self.wwwroot,
            "media_default_width": self.media_default_width,
            "plugins": {name: dict(cfg) for name, cfg in self.plugins.items()},
        }


def _plugin_config(user_cfg: Mapping[str, Any]) -> Dict[str, Dict[str, str]]:
    plugins = _default_plugin_config()
    raw = user_cfg.get("plugins")
    if isinstance(raw, Mapping):
        for name, values in raw.items():
            if not isinstance(values, Mapping):
                continue
            target = plugins.setdefault(str(name), {})
            for key, value in values.items():
                if value is not None:
                    target[str(key)] = str(value)

    ableplayer = plugins[PLUGIN_NAME]
    video = os.getenv("ABLEPLAYER_VIDEO_EXTENSIONS")
    if video is not None:
        ableplayer["videoextensions"] = video
    audio = os.getenv("ABLEPLAYER_AUDIO_EXTENSIONS")
    if audio is not None:
        ableplayer["audioextensions"] = audio
    return plugins


def build_settings(user_cfg: Optional[Mapping[str, Any]] = None) -> Settings:
    if user_cfg is None:
        user_cfg = load_user_settings()
    app_name = os.getenv("ABLEPLAYER_APP_NAME", user_cfg.get("app_name", "ableplayer-media"))
    env = os.getenv("ABLEPLAYER_ENV", user_cfg.get("env", "development"))
    log_level = os.getenv("ABLEPLAYER_LOG_LEVEL", user_cfg.get("log_level", "INFO")).upper()
    wwwroot = os.getenv("ABLEPLAYER_WWWROOT", user_cfg.get("wwwroot", "")) or ""

    width = _coerce_dimension(
        os.getenv("ABLEPLAYER_DEFAULT_WIDTH") or user_cfg.get("media_default_width"),
        DEFAULT_MEDIA_WIDTH,
    )

    return Settings(
        app_name=app_name,
        env=env,
        log_level=log_level,
        wwwroot=wwwroot.rstrip("/"),
        media_default_width=width,
        plugins=_plugin_config(user_cfg),
    )


def get_settings(*, reload: bool = False) -> Settings:
    global _SETTINGS_SINGLETON
    with _SETTINGS_LOCK:
        if _SETTINGS_SINGLETON is None or reload:
            _SETTINGS_SINGLETON = build_settings()

        return _SETTINGS_SINGLETON


def update_settings(**changes: Any) -> Settings:
    """Persist top-level settings and reload the singleton."""

    payload = load_user_settings()
    for key in ("app_name", "env", "log_level", "wwwroot", "media_default_width"):
        if changes.get(key) is not None:
            payload[key] = changes[key]
    payload["updated_at"] = datetime.now(timezone.utc).isoformat()
    write_user_settings(payload)
    log.info("settings_updated", extra={"keys": sorted(k for k, v in changes.items() if v is not None)})

    return get_settings(reload=True)


def update_plugin_config(key: str, value: str, *, plugin: str = PLUGIN_NAME) -> Settings:
    """Validate and persist one plugin setting, then reload the singleton."""

    setting = ADMIN_SETTINGS.get(key) if plugin == PLUGIN_NAME else None
    if plugin == PLUGIN_NAME and setting is None:
        raise ConfigError(f"Unknown setting '{plugin}/{key}'")
    if setting is not None:
        value = validate_filetypes(value, setting.only_types)

    payload = load_user_settings()
    plugins = payload.get("plugins")
    if not isinstance(plugins, dict):
        plugins = {}
    plugins.setdefault(plugin, {})[key] = value
    payload["plugins"] = plugins
    payload["updated_at"] = datetime.now(timezone.utc).isoformat()
    write_user_settings(payload)
    log.info(
        "plugin_config_updated",
        extra={"plugin": plugin, "key": key, "path": str(get_user_settings_path())},
    )

    return get_settings(reload=True)


__all__ = [
    "DEFAULT_MEDIA_WIDTH",
    "Settings",
    "build_settings",
    "get_settings",
    "update_plugin_config",
    "update_settings",
]
