from __future__ import annotations

"""Player plugin base class."""

from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Set, Union

from ableplayer_media.backend.common.types import EmbedOptions
from ableplayer_media.backend.host.contracts import MediaResolver, PageLike

from .markup import LINKPLACEHOLDER

Options = Union[EmbedOptions, Mapping[str, Any], None]


class MediaPlayer(ABC):
    """Capability set a host expects from every media player plugin."""

    #: Placeholder the host replaces with a plain link to the media.
    LINKPLACEHOLDER = LINKPLACEHOLDER

    def __init__(self, resolver: MediaResolver) -> None:
        self._resolver = resolver

    @abstractmethod
    def get_supported_extensions(self) -> Set[str]:
        raise NotImplementedError

    @abstractmethod
    def list_supported_urls(self, urls: Iterable[str], options: Options = None) -> List[str]:
        raise NotImplementedError

    @abstractmethod
    def embed(
        self,
        urls: Sequence[str],
        name: Optional[str],
        width: Optional[int],
        height: Optional[int],
        options: Options = None,
    ) -> str:
        raise NotImplementedError

    def get_rank(self) -> int:
        return 0

    def setup(self, page: PageLike) -> None:
        """Register client-side requirements; nothing by default."""

    def get_name(self, name: Optional[str], urls: Sequence[str]) -> str:
        if name:
            return name
        if not urls:
            return ""
        return self._resolver.get_filename(urls[0])
