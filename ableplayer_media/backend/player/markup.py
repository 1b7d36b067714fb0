from __future__ import annotations

"""Best-effort introspection and escaping helpers for media markup."""

import re
from dataclasses import dataclass, field
from html import escape, unescape
from typing import List, Optional, Sequence

LINKPLACEHOLDER = "<!--LINKFALLBACK-->"

_MEDIA_TAG = re.compile(r"^<(video|audio)\b", re.IGNORECASE)
_HAS_TRACK = re.compile(r"<track\b", re.IGNORECASE)
_TRACK_TAG = re.compile(r"(<track.*?>)", re.IGNORECASE)
_NUMERIC_ENTITY = re.compile(r"&amp;#(\d+|x[0-9a-f]+);", re.IGNORECASE)
_PRE_ESCAPED = (("&amp;", "&"), ("&gt;", ">"), ("&lt;", "<"))


@dataclass(frozen=True)
class OriginalMarkup:
    """What a pre-existing ``<video>``/``<audio>`` tag tells us."""

    text: Optional[str] = None
    isaudio: Optional[bool] = None
    hastracks: bool = False
    tracks: List[str] = field(default_factory=list)
    poster: Optional[str] = None

    @property
    def hasposter(self) -> bool:
        return self.poster is not None


def get_attribute(tag: str, name: str) -> Optional[str]:
    """Decoded value of a double-quoted attribute on the first tag, if any."""

    pattern = re.compile(r'^<[^>]*\b' + re.escape(name) + r'="(.*?)"', re.IGNORECASE | re.DOTALL)
    match = pattern.search(tag or "")
    if not match:
        return None
    return unescape(match.group(1))


def inspect_original(text: Optional[str]) -> OriginalMarkup:
    if not isinstance(text, str):
        return OriginalMarkup()
    match = _MEDIA_TAG.match(text)
    if not match:
        return OriginalMarkup()

    hastracks = bool(_HAS_TRACK.search(text))
    tracks = _TRACK_TAG.findall(text) if hastracks else []
    return OriginalMarkup(
        text=text,
        isaudio=match.group(1).lower() == "audio",
        hastracks=hastracks,
        tracks=tracks,
        poster=get_attribute(text, "poster"),
    )


def s(value: str) -> str:
    """Escape for HTML output, leaving numeric character references intact."""

    return _NUMERIC_ENTITY.sub(r"&#\1;", escape(value, quote=True))


def escape_title(title: str) -> str:
    # The name may arrive already escaped; undo that first so it is escaped once.
    for entity, char in _PRE_ESCAPED:
        title = title.replace(entity, char)
    return s(title)


def source_tag(src: str, mimetype: str) -> str:
    return f'<source src="{s(src)}" type="{s(mimetype)}" />'


def fill_link_fallback(markup: str, urls: Sequence[str], name: str = "") -> str:
    """Swap the link placeholder for a plain download link to the first URL."""

    if LINKPLACEHOLDER not in markup:
        return markup
    if not urls:
        return markup.replace(LINKPLACEHOLDER, "")
    url = urls[0]
    link = f'<a class="mediafallbacklink" href="{s(url)}">{s(name or url)}</a>'
    return markup.replace(LINKPLACEHOLDER, link)


__all__ = [
    "LINKPLACEHOLDER",
    "OriginalMarkup",
    "escape_title",
    "fill_link_fallback",
    "get_attribute",
    "inspect_original",
    "s",
    "source_tag",
]
