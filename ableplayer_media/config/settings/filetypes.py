"""Admin-configurable extension settings of the Able Player plugin."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ableplayer_media.backend.common.errors import ConfigError
from ableplayer_media.backend.host.filetypes import FileTypeRegistry, get_default_registry

PLUGIN_NAME = "media_ableplayer"

_SPLIT = re.compile(r"\s*,\s*")


@dataclass(frozen=True)
class FiletypesSetting:
    key: str
    default: str
    only_types: Tuple[str, ...]
    description: str


VIDEO_EXTENSIONS = FiletypesSetting(
    key="videoextensions",
    default="html_video,media_source,.f4v,.flv",
    only_types=("video", "web_video", "html_video", "media_source"),
    description="Video file extensions or type groups handled by the player.",
)

AUDIO_EXTENSIONS = FiletypesSetting(
    key="audioextensions",
    default="html_audio",
    only_types=("audio", "web_audio", "html_audio"),
    description="Audio file extensions or type groups handled by the player.",
)

ADMIN_SETTINGS: Dict[str, FiletypesSetting] = {
    VIDEO_EXTENSIONS.key: VIDEO_EXTENSIONS,
    AUDIO_EXTENSIONS.key: AUDIO_EXTENSIONS,
}


def split_filetypes(value: Optional[str]) -> List[str]:
    """Lower-case, trimmed, non-empty tokens of a comma separated list."""

    text = (value or "").strip().lower()
    if not text:
        return []
    return [token for token in _SPLIT.split(text) if token]


def normalize_filetypes(value: Optional[str]) -> str:
    seen: List[str] = []
    for token in split_filetypes(value):
        if token not in seen:
            seen.append(token)
    return ",".join(seen)


def validate_filetypes(
    value: Optional[str],
    only_types: Tuple[str, ...],
    registry: Optional[FileTypeRegistry] = None,
) -> str:
    """Check every token is known and falls within ``only_types``.

    Returns the normalized list; raises :class:`ConfigError` otherwise.
    """

    registry = registry or get_default_registry()
    allowed = registry.get_typegroup("extension", only_types)
    unknown: List[str] = []
    disallowed: List[str] = []
    for token in split_filetypes(value):
        if not registry.is_known(token):
            unknown.append(token)
            continue
        if token in only_types:
            continue
        expanded = registry.get_typegroup("extension", token)
        if not expanded <= allowed:
            disallowed.append(token)

    if unknown:
        raise ConfigError(f"Unknown file types: {', '.join(unknown)}")
    if disallowed:
        raise ConfigError(
            f"File types not allowed here: {', '.join(disallowed)} "
            f"(allowed groups: {', '.join(only_types)})"
        )
    return normalize_filetypes(value)


__all__ = [
    "ADMIN_SETTINGS",
    "AUDIO_EXTENSIONS",
    "FiletypesSetting",
    "PLUGIN_NAME",
    "VIDEO_EXTENSIONS",
    "normalize_filetypes",
    "split_filetypes",
    "validate_filetypes",
]
