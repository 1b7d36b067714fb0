from __future__ import annotations

"""Able Player: accessible HTML5 audio/video embedding."""

import re
from typing import Iterable, List, Optional, Sequence, Set

from ableplayer_media.backend.common.logging import get_logger
from ableplayer_media.backend.common.types import (
    MP4_MIMETYPE,
    QUICKTIME_MIMETYPE,
    EmbedOptions,
    MediaSource,
    TemplateContext,
)
from ableplayer_media.backend.host.contracts import (
    AssetRequirements,
    ClientCapabilities,
    ConfigStore,
    MediaResolver,
    PageLike,
    Renderer,
)
from ableplayer_media.backend.host.filetypes import get_default_registry
from ableplayer_media.backend.host.renderer import PLAYER_TEMPLATE, TemplateRenderer
from ableplayer_media.backend.host.useragent import UserAgent
from ableplayer_media.config.settings.core import get_settings
from ableplayer_media.config.settings.filetypes import PLUGIN_NAME

from .base import MediaPlayer, Options
from .markup import escape_title, inspect_original, source_tag

log = get_logger(__name__)

RANK = 2000

ASSET_ROOT = "/media/player/ableplayer"
SCRIPTS = (
    f"{ASSET_ROOT}/build/ableplayer.min.js",
    f"{ASSET_ROOT}/thirdparty/js.cookie.min.js",
)
STYLES = (f"{ASSET_ROOT}/build/ableplayer.min.css",)

_SPLIT = re.compile(r"\s*,\s*")
_PLAYABLE_GROUPS = ("html_video", "html_audio", "media_source")


class AblePlayerPlugin(MediaPlayer):
    """Embeds audio and video with Able Player over native HTML5 elements.

    All host services are injected. The supported extension set is computed
    on first use and kept for the lifetime of the instance, so configuration
    changes only apply to new instances.
    """

    def __init__(
        self,
        config: ConfigStore,
        *,
        resolver: Optional[MediaResolver] = None,
        useragent: Optional[ClientCapabilities] = None,
        renderer: Optional[Renderer] = None,
    ) -> None:
        super().__init__(resolver or get_default_registry())
        self._config = config
        self._useragent = useragent or UserAgent()
        self._renderer = renderer or TemplateRenderer()
        self._extensions: Optional[Set[str]] = None

    @classmethod
    def for_request(
        cls,
        user_agent: Optional[str] = None,
        config: Optional[ConfigStore] = None,
        renderer: Optional[Renderer] = None,
    ) -> "AblePlayerPlugin":
        """Plugin bound to the stored settings and one client's user agent."""

        return cls(
            config if config is not None else get_settings(),
            useragent=UserAgent(user_agent),
            renderer=renderer,
        )

    # ------------------------------------------------------------------
    # Extension filter
    # ------------------------------------------------------------------
    def get_supported_extensions(self) -> Set[str]:
        if self._extensions is None:
            video = self._config.get_config(PLUGIN_NAME, "videoextensions") or ""
            audio = self._config.get_config(PLUGIN_NAME, "audioextensions") or ""
            filetypes = _SPLIT.split(f"{video},{audio}".strip().lower())

            extensions = self._resolver.get_typegroup("extension", filetypes)
            if extensions:
                playable = self._resolver.get_typegroup("extension", _PLAYABLE_GROUPS)
                extensions = extensions & playable
            self._extensions = set(extensions)
            log.debug(
                "supported_extensions_resolved",
                extra={"extensions": sorted(self._extensions)},
            )
        return self._extensions

    # ------------------------------------------------------------------
    # URL selector
    # ------------------------------------------------------------------
    def list_supported_urls(self, urls: Iterable[str], options: Options = None) -> List[str]:
        extensions = self.get_supported_extensions()
        result: List[str] = []
        for url in urls:
            ext = self._resolver.get_extension(url)
            # Native elements do not fall back between sources the browser
            # cannot decode, so unsupported types never reach the page.
            if "." + ext in extensions and self._useragent.supports_html5(ext):
                result.append(url)
        return result

    # ------------------------------------------------------------------
    # Markup assembler
    # ------------------------------------------------------------------
    def build_sources(self, urls: Sequence[str]) -> List[MediaSource]:
        """Source descriptors with MP4 entries moved to the front."""

        remap = self._useragent.is_chrome() or self._useragent.is_edge()
        mp4: List[MediaSource] = []
        others: List[MediaSource] = []
        for url in urls:
            mimetype = self._resolver.get_mimetype(url)
            if mimetype == QUICKTIME_MIMETYPE and remap:
                mimetype = MP4_MIMETYPE
            source = MediaSource(src=url, type=mimetype)
            (mp4 if source.is_mp4 else others).append(source)
        return mp4 + others

    def pick_video_size(self, width: Optional[int], height: Optional[int]) -> tuple[int, Optional[int]]:
        if not width:
            width = self._config.media_default_width
        return int(width), (int(height) if height else None)

    def embed(
        self,
        urls: Sequence[str],
        name: Optional[str],
        width: Optional[int],
        height: Optional[int],
        options: Options = None,
    ) -> str:
        return self._renderer.render(
            PLAYER_TEMPLATE,
            self.build_context(urls, name, width, height, options),
        )

    def build_context(
        self,
        urls: Sequence[str],
        name: Optional[str],
        width: Optional[int],
        height: Optional[int],
        options: Options = None,
    ) -> TemplateContext:
        urls = list(urls or [])
        original = inspect_original(EmbedOptions.coerce(options).original_text)

        sources = self.build_sources(urls)
        title = escape_title(self.get_name(name, urls))

        width, height = self.pick_video_size(width, height)
        if not height:
            # Let the player choose height automatically.
            size = f'width="{width}"'
        else:
            size = f'width="{width}" height="{height}"'

        # Sources were already filtered per client, so a second player would
        # only produce nested media tags; fall back to a plain link.
        return TemplateContext(
            text=original.text,
            isaudio=original.isaudio,
            hasposter=original.hasposter,
            poster=original.poster,
            hastracks=original.hastracks,
            title=title,
            size=size,
            width=width,
            height=height,
            sources="\n".join(source_tag(s.src, s.type) for s in sources),
            arrsources=sources,
            tracks="\n".join(original.tracks),
            arrtracks=list(original.tracks),
            fallback=self.LINKPLACEHOLDER,
        )

    # ------------------------------------------------------------------
    # Host accessors
    # ------------------------------------------------------------------
    def get_rank(self) -> int:
        return RANK

    def setup(self, page: PageLike) -> None:
        requires: AssetRequirements = page.requires
        requires.jquery()
        for script in SCRIPTS:
            requires.js(script, True)
        for style in STYLES:
            requires.css(style)


__all__ = ["AblePlayerPlugin", "ASSET_ROOT", "PLUGIN_NAME", "RANK", "SCRIPTS", "STYLES"]
