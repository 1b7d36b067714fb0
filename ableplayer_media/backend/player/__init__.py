"""Media player plugins rendering native HTML5 players."""

from ableplayer_media.backend.player.ableplayer import AblePlayerPlugin
from ableplayer_media.backend.player.base import MediaPlayer
from ableplayer_media.backend.player.markup import (
    LINKPLACEHOLDER,
    OriginalMarkup,
    fill_link_fallback,
    inspect_original,
)

__all__ = [
    "AblePlayerPlugin",
    "LINKPLACEHOLDER",
    "MediaPlayer",
    "OriginalMarkup",
    "fill_link_fallback",
    "inspect_original",
]
