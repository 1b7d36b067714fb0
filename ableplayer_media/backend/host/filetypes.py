"""File type registry: extensions, MIME types and named type groups.

Groups are the aliases administrators use in the extension settings
(``html_video``, ``web_audio``...). A type list may mix group names, MIME
types (``video/mp4``) and dotted extensions (``.flv``); :meth:`get_typegroup`
flattens any such list into concrete extensions or MIME types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Dict, FrozenSet, Iterable, Optional, Set, Tuple, Union
from urllib.parse import parse_qs, unquote, urlsplit

from ableplayer_media.backend.common.logging import get_logger

log = get_logger(__name__)

UNKNOWN_MIMETYPE = "document/unknown"

_VIDEO = ("video", "web_video", "html_video")
_AUDIO = ("audio", "web_audio", "html_audio")


@dataclass(frozen=True)
class FileType:
    extension: str
    mimetype: str
    groups: FrozenSet[str] = field(default_factory=frozenset)


def _ft(extension: str, mimetype: str, *groups: str) -> FileType:
    return FileType(extension=extension, mimetype=mimetype, groups=frozenset(groups))


DEFAULT_FILETYPES: Tuple[FileType, ...] = (
    # HTML5 video containers
    _ft("mp4", "video/mp4", *_VIDEO),
    _ft("m4v", "video/mp4", *_VIDEO),
    _ft("fmp4", "video/mp4", *_VIDEO),
    _ft("ogv", "video/ogg", *_VIDEO),
    _ft("webm", "video/webm", *_VIDEO),
    _ft("mov", "video/quicktime", *_VIDEO),
    # Other video
    _ft("f4v", "video/mp4", "video", "web_video"),
    _ft("flv", "video/x-flv", "video", "web_video"),
    _ft("mpeg", "video/mpeg", "video", "web_video"),
    _ft("mpg", "video/mpeg", "video", "web_video"),
    _ft("avi", "video/x-ms-video", "video"),
    _ft("wmv", "video/x-ms-wmv", "video"),
    _ft("mkv", "video/x-matroska", "video"),
    _ft("3gp", "video/quicktime", "video"),
    # HTML5 audio
    _ft("aac", "audio/aac", *_AUDIO),
    _ft("flac", "audio/flac", *_AUDIO),
    _ft("m4a", "audio/mp4", *_AUDIO),
    _ft("mp3", "audio/mp3", *_AUDIO),
    _ft("oga", "audio/ogg", *_AUDIO),
    _ft("ogg", "audio/ogg", *_AUDIO),
    _ft("opus", "audio/ogg", *_AUDIO),
    _ft("wav", "audio/wav", *_AUDIO),
    # Other audio
    _ft("aif", "audio/x-aiff", "audio"),
    _ft("aiff", "audio/x-aiff", "audio"),
    _ft("wma", "audio/x-ms-wma", "audio"),
    _ft("ra", "audio/x-realaudio-plugin", "audio"),
    # Adaptive streaming manifests
    _ft("m3u8", "application/x-mpegURL", "media_source"),
    _ft("mpd", "application/dash+xml", "media_source"),
    # Caption tracks
    _ft("vtt", "text/vtt", "html_track"),
    _ft("srt", "application/x-subrip", "html_track"),
)


def _normalize_extension(value: str) -> str:
    return value.strip().lower().lstrip(".")


class FileTypeRegistry:
    """Lookup of extensions, MIME types and type groups."""

    def __init__(self, filetypes: Optional[Iterable[FileType]] = None) -> None:
        self._types: Dict[str, FileType] = {}
        for ft in filetypes if filetypes is not None else DEFAULT_FILETYPES:
            self.register(ft)

    def register(self, filetype: FileType) -> None:
        ext = _normalize_extension(filetype.extension)
        self._types[ext] = FileType(
            extension=ext,
            mimetype=filetype.mimetype,
            groups=frozenset(filetype.groups),
        )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def get(self, extension: str) -> Optional[FileType]:
        return self._types.get(_normalize_extension(extension))

    @property
    def groups(self) -> FrozenSet[str]:
        names: Set[str] = set()
        for ft in self._types.values():
            names.update(ft.groups)
        return frozenset(names)

    @property
    def mimetypes(self) -> FrozenSet[str]:
        return frozenset(ft.mimetype for ft in self._types.values())

    def is_known(self, token: str) -> bool:
        """Whether ``token`` names a registered extension, MIME type or group."""

        value = token.strip().lower()
        if not value:
            return False
        if value.startswith("."):
            return value[1:] in self._types
        if "/" in value:
            return value in {m.lower() for m in self.mimetypes}
        return value in self.groups

    def describe(self, token: str) -> Dict[str, object]:
        value = token.strip().lower()
        if value.startswith("."):
            ft = self.get(value)
            if ft is None:
                return {"token": token, "known": False}
            return {
                "token": token,
                "known": True,
                "mimetype": ft.mimetype,
                "groups": sorted(ft.groups),
            }
        extensions = sorted(self.get_typegroup("extension", value))
        return {"token": token, "known": bool(extensions), "extensions": extensions}

    def get_typegroup(self, kind: str, types: Union[str, Iterable[str]]) -> Set[str]:
        """Expand groups, MIME types and extensions into a flat set.

        ``kind`` is ``"extension"`` (dotted extensions are returned) or
        ``"type"`` (MIME types are returned). Unknown tokens contribute
        nothing.
        """

        if kind not in ("extension", "type"):
            raise ValueError(f"Unsupported type group kind '{kind}'")
        if isinstance(types, str):
            types = [types]

        result: Set[str] = set()
        for raw in types:
            token = (raw or "").strip().lower()
            if not token:
                continue
            for ft in self._match(token):
                result.add("." + ft.extension if kind == "extension" else ft.mimetype)
        return result

    def _match(self, token: str) -> Iterable[FileType]:
        if token.startswith("."):
            ft = self._types.get(token[1:])
            return [ft] if ft else []
        if "/" in token:
            return [ft for ft in self._types.values() if ft.mimetype.lower() == token]
        return [ft for ft in self._types.values() if token in ft.groups]

    # ------------------------------------------------------------------
    # URL helpers
    # ------------------------------------------------------------------
    def get_filename(self, url: str) -> str:
        """Decoded file name of a URL, honouring ``?file=`` slash arguments."""

        parts = urlsplit(url or "")
        path = parts.path
        if path.endswith(".php") and parts.query:
            file_arg = parse_qs(parts.query).get("file")
            if file_arg:
                path = file_arg[0]
        return unquote(PurePosixPath(path).name)

    def get_extension(self, url: str) -> str:
        suffix = PurePosixPath(self.get_filename(url)).suffix
        return suffix[1:].lower() if suffix else ""

    def get_mimetype(self, url: str) -> str:
        ft = self.get(self.get_extension(url))
        if ft is None:
            log.debug("mimetype_unknown", extra={"url": url})
            return UNKNOWN_MIMETYPE
        return ft.mimetype


_DEFAULT_REGISTRY: Optional[FileTypeRegistry] = None


def get_default_registry() -> FileTypeRegistry:
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = FileTypeRegistry()
    return _DEFAULT_REGISTRY


__all__ = [
    "DEFAULT_FILETYPES",
    "FileType",
    "FileTypeRegistry",
    "UNKNOWN_MIMETYPE",
    "get_default_registry",
]
