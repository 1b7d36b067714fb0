"""Client capability checks derived from the requesting browser's user agent."""

from __future__ import annotations

import re
from typing import Optional, Tuple

HTML5_VIDEO_EXTENSIONS: Tuple[str, ...] = ("m4v", "webm", "ogv", "mp4", "mov", "fmp4")
HTML5_AUDIO_EXTENSIONS: Tuple[str, ...] = ("ogg", "oga", "aac", "m4a", "mp3", "wav", "flac", "opus")
OGG_EXTENSIONS: Tuple[str, ...] = ("ogg", "oga", "ogv")

_VERSION_PATTERNS = {
    "edge": re.compile(r"\bEdg(?:e|A|iOS)?/(\d+(?:\.\d+)*)"),
    "chrome": re.compile(r"\b(?:Chrome|CriOS)/(\d+(?:\.\d+)*)"),
    "firefox": re.compile(r"\b(?:Firefox|FxiOS)/(\d+(?:\.\d+)*)"),
    "safari": re.compile(r"\bVersion/(\d+(?:\.\d+)*)"),
    "ie": re.compile(r"(?:\bMSIE (\d+(?:\.\d+)*)|\bTrident/.*\brv:(\d+(?:\.\d+)*))"),
}


def _parse_version(value: str) -> Tuple[int, ...]:
    parts = []
    for piece in value.split("."):
        if not piece.isdigit():
            break
        parts.append(int(piece))
    return tuple(parts)


class UserAgent:
    """Browser sniffing over a single request's user agent string."""

    def __init__(self, user_agent: Optional[str] = None) -> None:
        self.user_agent = (user_agent or "").strip()

    def __repr__(self) -> str:
        return f"UserAgent({self.user_agent!r})"

    def version(self, browser: str) -> Optional[Tuple[int, ...]]:
        pattern = _VERSION_PATTERNS.get(browser)
        if pattern is None or not self.user_agent:
            return None
        match = pattern.search(self.user_agent)
        if not match:
            return None
        raw = next((g for g in match.groups() if g), "")
        return _parse_version(raw) or None

    def _at_least(self, browser: str, minimum: str) -> bool:
        found = self.version(browser)
        if found is None:
            return False
        return found >= _parse_version(minimum)

    # ------------------------------------------------------------------
    # Browser families
    # ------------------------------------------------------------------
    def is_edge(self) -> bool:
        return self.version("edge") is not None

    def is_chrome(self) -> bool:
        if self.is_edge() or "OPR/" in self.user_agent:
            return False
        return self.version("chrome") is not None

    def is_firefox(self) -> bool:
        return self.version("firefox") is not None

    def is_ie(self) -> bool:
        return self.version("ie") is not None

    def is_safari_ios(self) -> bool:
        ua = self.user_agent
        if not re.search(r"\b(iPhone|iPad|iPod)\b", ua):
            return False
        return "Safari" in ua and not (self.is_chrome() or self.is_edge() or self.is_firefox())

    def is_safari(self) -> bool:
        ua = self.user_agent
        if "Safari" not in ua or self.is_safari_ios():
            return False
        if self.is_chrome() or self.is_edge() or self.is_firefox() or "OPR/" in ua:
            return False
        return "Android" not in ua

    # ------------------------------------------------------------------
    # HTML5 playback
    # ------------------------------------------------------------------
    def supports_html5(self, extension: str) -> bool:
        """Whether this client can natively play files with ``extension``."""

        ext = (extension or "").strip().lower().lstrip(".")
        safari = self.is_safari() or self.is_safari_ios()

        if ext == "m3u8":
            return safari
        if ext not in HTML5_VIDEO_EXTENSIONS and ext not in HTML5_AUDIO_EXTENSIONS:
            return False
        if not self.user_agent:
            return True

        ie = self.is_ie()
        if ie and not self._at_least("ie", "9.0"):
            return False

        # Only Chromium based Edge handles webm and ogg.
        legacy_edge = self.is_edge() and not self._at_least("edge", "79.0")
        if ext == "webm" and (ie or legacy_edge or safari):
            return False
        if ext in OGG_EXTENSIONS and (ie or legacy_edge or safari):
            return False
        if ext == "flac" and (ie or (self.is_edge() and not self._at_least("edge", "16.0"))):
            return False
        if ext == "wav" and ie:
            return False
        if ext == "aac" and ie and not self._at_least("ie", "11.0"):
            return False
        if ext == "mp3" and ie and not self._at_least("ie", "10.0"):
            return False
        if ext == "mov" and not (safari or self.is_chrome() or self.is_edge()):
            return False
        return True


__all__ = [
    "HTML5_AUDIO_EXTENSIONS",
    "HTML5_VIDEO_EXTENSIONS",
    "OGG_EXTENSIONS",
    "UserAgent",
]
