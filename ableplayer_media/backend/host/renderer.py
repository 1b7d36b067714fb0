"""Named template rendering for player markup.

Templates are plain callables taking the flattened context mapping and the
renderer (for per-render helpers such as unique element ids). Values that
are already markup (``sources``, ``tracks``, ``size``, ``title``,
``fallback``) are inserted as-is; everything else is escaped here.
"""

from __future__ import annotations

import itertools
from html import escape
from typing import Any, Callable, Dict, Iterable, Mapping, Union

from pydantic import BaseModel

from ableplayer_media.backend.common.errors import TemplateNotFoundError
from ableplayer_media.backend.common.logging import get_logger

log = get_logger(__name__)

PLAYER_TEMPLATE = "media_ableplayer/player"

Template = Callable[[Mapping[str, Any], "TemplateRenderer"], str]


def _source_types(arrsources: Iterable[Any]) -> list[str]:
    types = []
    for source in arrsources or []:
        if isinstance(source, Mapping):
            types.append(str(source.get("type") or ""))
        else:
            types.append(str(getattr(source, "type", "") or ""))
    return types


def _is_audio(context: Mapping[str, Any]) -> bool:
    isaudio = context.get("isaudio")
    if isaudio is not None:
        return bool(isaudio)
    types = _source_types(context.get("arrsources") or [])
    return bool(types) and all(t.startswith("audio/") for t in types)


def render_player(context: Mapping[str, Any], renderer: "TemplateRenderer") -> str:
    tag = "audio" if _is_audio(context) else "video"
    attributes = [
        f'id="{renderer.unique_id("ableplayer")}"',
        "data-able-player",
        'data-skin="2020"',
        'preload="auto"',
    ]
    if tag == "video":
        attributes.append("playsinline")
    if context.get("size"):
        attributes.append(str(context["size"]))
    if context.get("title"):
        attributes.append(f'title="{context["title"]}"')
    if context.get("hasposter") and context.get("poster"):
        attributes.append(f'poster="{escape(str(context["poster"]), quote=True)}"')

    body = [
        str(part)
        for part in (context.get("sources"), context.get("tracks"), context.get("fallback"))
        if part
    ]
    lines = [
        '<div class="mediaplugin mediaplugin_ableplayer">',
        f"<{tag} {' '.join(attributes)}>",
        *body,
        f"</{tag}>",
        "</div>",
    ]
    return "\n".join(lines)


class TemplateRenderer:
    """Registry of named templates."""

    def __init__(self, templates: Mapping[str, Template] | None = None) -> None:
        self._templates: Dict[str, Template] = {PLAYER_TEMPLATE: render_player}
        if templates:
            self._templates.update(templates)
        self._ids = itertools.count(1)

    def register(self, name: str, template: Template) -> None:
        self._templates[name] = template

    def has_template(self, name: str) -> bool:
        return name in self._templates

    def unique_id(self, prefix: str) -> str:
        return f"{prefix}_{next(self._ids)}"

    def render(self, name: str, context: Union[Mapping[str, Any], BaseModel]) -> str:
        template = self._templates.get(name)
        if template is None:
            raise TemplateNotFoundError(f"Template '{name}' is not registered")
        if isinstance(context, BaseModel):
            data: Mapping[str, Any] = context.model_dump()
        else:
            data = dict(context)
        html = template(data, self)
        log.debug("template_rendered", extra={"template": name, "length": len(html)})
        return html


__all__ = ["PLAYER_TEMPLATE", "Template", "TemplateRenderer", "render_player"]
