from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Any

__all__ = [
    "ADMIN_SETTINGS",
    "AUDIO_EXTENSIONS",
    "PATHS",
    "PLUGIN_NAME",
    "Settings",
    "VIDEO_EXTENSIONS",
    "build_settings",
    "core",
    "filetypes",
    "get_settings",
    "get_user_settings_path",
    "load_user_settings",
    "paths",
    "update_plugin_config",
    "update_settings",
    "validate_filetypes",
    "write_user_settings",
]

_MODULE_EXPORTS = {
    "core": {
        "Settings",
        "build_settings",
        "get_settings",
        "update_plugin_config",
        "update_settings",
    },
    "filetypes": {
        "ADMIN_SETTINGS",
        "AUDIO_EXTENSIONS",
        "PLUGIN_NAME",
        "VIDEO_EXTENSIONS",
        "validate_filetypes",
    },
    "paths": {
        "PATHS",
        "get_user_settings_path",
        "load_user_settings",
        "write_user_settings",
    },
}

_SUBMODULE_NAMES = {"core", "filetypes", "paths"}

if TYPE_CHECKING:  # pragma: no cover - only for static analysis
    from . import core, filetypes, paths
    from .core import Settings, build_settings, get_settings, update_plugin_config, update_settings
    from .filetypes import ADMIN_SETTINGS, AUDIO_EXTENSIONS, PLUGIN_NAME, VIDEO_EXTENSIONS, validate_filetypes
    from .paths import PATHS, get_user_settings_path, load_user_settings, write_user_settings


def __getattr__(name: str) -> Any:
    if name in _SUBMODULE_NAMES:
        module = importlib.import_module(f"{__name__}.{name}")
        globals()[name] = module
        return module

    for module_name, symbols in _MODULE_EXPORTS.items():
        if name in symbols:
            module = importlib.import_module(f"{__name__}.{module_name}")
            value = getattr(module, name)
            globals()[name] = value
            return value

    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


def __dir__() -> list[str]:
    exported = set(__all__)
    exported.update(_SUBMODULE_NAMES)
    for symbols in _MODULE_EXPORTS.values():
        exported.update(symbols)
    exported.update(globals().keys())
    return sorted(exported)
