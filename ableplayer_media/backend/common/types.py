from __future__ import annotations

from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


MP4_MIMETYPE = "video/mp4"
QUICKTIME_MIMETYPE = "video/quicktime"


class MediaSource(BaseModel):
    """One ``{src, type}`` pair offered to the native media element."""

    model_config = ConfigDict(frozen=True)

    src: str
    type: str

    @property
    def is_mp4(self) -> bool:
        return self.type == MP4_MIMETYPE


class EmbedOptions(BaseModel):
    """Read-only rendering options passed along with an embed request.

    ``original_text`` holds the raw markup the URLs were taken from when the
    content already contained a media tag. Hosts usually hand the options over
    as a plain mapping keyed ``originaltext``; both spellings are accepted and
    other string keys are kept as extras.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    original_text: Optional[str] = Field(default=None, alias="originaltext")

    @classmethod
    def coerce(cls, value: Union["EmbedOptions", Mapping[Any, Any], None]) -> "EmbedOptions":
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        data = dict(value) if isinstance(value, Mapping) else {}
        text = data.pop("originaltext", data.pop("original_text", None))
        if not isinstance(text, str):
            text = None
        # Only plain string keys can become extra fields; anything else is dropped.
        extras = {
            k: v
            for k, v in data.items()
            if isinstance(k, str) and k.isidentifier() and not k.startswith(("_", "model_"))
        }
        return cls(originaltext=text, **extras)


class TemplateContext(BaseModel):
    """Flat data handed to the player template."""

    text: Optional[str] = None
    isaudio: Optional[bool] = None
    hasposter: bool = False
    poster: Optional[str] = None
    hastracks: bool = False
    title: str = ""
    size: str = ""
    width: int = 0
    height: Optional[int] = None
    sources: str = ""
    arrsources: List[MediaSource] = Field(default_factory=list)
    tracks: str = ""
    arrtracks: List[str] = Field(default_factory=list)
    fallback: str = ""

    def as_dict(self) -> dict[str, Any]:
        return self.model_dump()
