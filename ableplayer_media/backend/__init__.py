"""Backend public interfaces with lazy loading to avoid circular imports."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Any

__all__ = [
    "AblePlayerPlugin",
    "EmbedOptions",
    "FileTypeRegistry",
    "MediaPlayer",
    "MediaSource",
    "Page",
    "TemplateContext",
    "TemplateRenderer",
    "UserAgent",
]

_MODULE_EXPORTS = {
    "player": {
        "AblePlayerPlugin",
        "MediaPlayer",
    },
    "host": {
        "FileTypeRegistry",
        "Page",
        "TemplateRenderer",
        "UserAgent",
    },
    "common.types": {
        "EmbedOptions",
        "MediaSource",
        "TemplateContext",
    },
}

if TYPE_CHECKING:  # pragma: no cover - for static analysis only
    from .common.types import EmbedOptions, MediaSource, TemplateContext
    from .host import FileTypeRegistry, Page, TemplateRenderer, UserAgent
    from .player import AblePlayerPlugin, MediaPlayer


def __getattr__(name: str) -> Any:
    for module_name, symbols in _MODULE_EXPORTS.items():
        if name in symbols:
            module = importlib.import_module(f"{__name__}.{module_name}")
            value = getattr(module, name)
            globals()[name] = value
            return value
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


def __dir__() -> list[str]:
    exported = set(__all__)
    for symbols in _MODULE_EXPORTS.values():
        exported.update(symbols)
    exported.update(globals().keys())
    return sorted(exported)
