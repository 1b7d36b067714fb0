from __future__ import annotations

"""Interfaces of the host services a player plugin calls into."""

from typing import Any, Iterable, Mapping, Optional, Protocol, Set, Union

from pydantic import BaseModel


class ConfigStore(Protocol):
    media_default_width: int

    def get_config(self, plugin: str, key: str) -> Optional[str]: ...


class MediaResolver(Protocol):
    def get_typegroup(self, kind: str, types: Union[str, Iterable[str]]) -> Set[str]: ...

    def get_mimetype(self, url: str) -> str: ...

    def get_extension(self, url: str) -> str: ...

    def get_filename(self, url: str) -> str: ...


class ClientCapabilities(Protocol):
    def supports_html5(self, extension: str) -> bool: ...

    def is_chrome(self) -> bool: ...

    def is_edge(self) -> bool: ...


class Renderer(Protocol):
    def render(self, name: str, context: Union[Mapping[str, Any], BaseModel]) -> str: ...


class AssetRequirements(Protocol):
    def jquery(self) -> None: ...

    def js(self, path: str, in_head: bool = False) -> None: ...

    def css(self, path: str) -> None: ...


class PageLike(Protocol):
    @property
    def requires(self) -> AssetRequirements: ...


__all__ = [
    "AssetRequirements",
    "ClientCapabilities",
    "ConfigStore",
    "MediaResolver",
    "PageLike",
    "Renderer",
]
