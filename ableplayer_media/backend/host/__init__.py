"""Host services consumed by player plugins, with in-process defaults."""

from ableplayer_media.backend.host.filetypes import (
    FileType,
    FileTypeRegistry,
    get_default_registry,
)
from ableplayer_media.backend.host.page import Page, PageRequirements
from ableplayer_media.backend.host.renderer import PLAYER_TEMPLATE, TemplateRenderer
from ableplayer_media.backend.host.useragent import UserAgent

__all__ = [
    "FileType",
    "FileTypeRegistry",
    "PLAYER_TEMPLATE",
    "Page",
    "PageRequirements",
    "TemplateRenderer",
    "UserAgent",
    "get_default_registry",
]
