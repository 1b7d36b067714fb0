"""Per-page collection of client-side script and style requirements."""

from __future__ import annotations

from dataclasses import dataclass, field
from html import escape
from typing import List

from ableplayer_media.backend.common.logging import get_logger

log = get_logger(__name__)

JQUERY_PATH = "/lib/jquery/jquery.min.js"


@dataclass(frozen=True)
class ScriptRequirement:
    url: str
    in_head: bool = False


class PageRequirements:
    """Ordered, de-duplicated scripts and stylesheets for one page."""

    def __init__(self, wwwroot: str = "") -> None:
        self._wwwroot = (wwwroot or "").rstrip("/")
        self._scripts: List[ScriptRequirement] = []
        self._styles: List[str] = []

    def _resolve(self, path: str) -> str:
        if "://" in path or path.startswith("//"):
            return path
        if not path.startswith("/"):
            path = "/" + path
        return self._wwwroot + path

    def jquery(self) -> None:
        self.js(JQUERY_PATH, in_head=True)

    def js(self, path: str, in_head: bool = False) -> None:
        url = self._resolve(path)
        for index, existing in enumerate(self._scripts):
            if existing.url == url:
                # Promote to head if any caller needs it there.
                if in_head and not existing.in_head:
                    self._scripts[index] = ScriptRequirement(url=url, in_head=True)
                return
        self._scripts.append(ScriptRequirement(url=url, in_head=in_head))
        log.debug("page_js_required", extra={"url": url, "in_head": in_head})

    def css(self, path: str) -> None:
        url = self._resolve(path)
        if url not in self._styles:
            self._styles.append(url)
            log.debug("page_css_required", extra={"url": url})

    @property
    def scripts(self) -> List[ScriptRequirement]:
        return list(self._scripts)

    @property
    def styles(self) -> List[str]:
        return list(self._styles)

    def head_code(self) -> str:
        lines = [f'<link rel="stylesheet" type="text/css" href="{escape(url)}" />' for url in self._styles]
        lines.extend(
            f'<script src="{escape(s.url)}"></script>' for s in self._scripts if s.in_head
        )
        return "\n".join(lines)

    def footer_code(self) -> str:
        return "\n".join(
            f'<script src="{escape(s.url)}"></script>' for s in self._scripts if not s.in_head
        )


@dataclass
class Page:
    """Minimal page object exposing ``requires`` to player plugins."""

    wwwroot: str = ""
    requires: PageRequirements = field(init=False)

    def __post_init__(self) -> None:
        self.requires = PageRequirements(self.wwwroot)


__all__ = ["JQUERY_PATH", "Page", "PageRequirements", "ScriptRequirement"]
