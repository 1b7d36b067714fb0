"""Command line access to the Able Player plugin and its settings."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Optional

from ableplayer_media.backend.common.errors import AblePlayerError
from ableplayer_media.backend.common.logging import init_logging
from ableplayer_media.backend.host.filetypes import get_default_registry
from ableplayer_media.backend.host.page import Page
from ableplayer_media.backend.player.ableplayer import AblePlayerPlugin
from ableplayer_media.backend.player.markup import fill_link_fallback
from ableplayer_media.config import settings

from ._utils import (
    build_subparser,
    exit_with_error,
    print_json,
    require_subcommand,
)


def _plugin(args: argparse.Namespace) -> AblePlayerPlugin:
    return AblePlayerPlugin.for_request(getattr(args, "user_agent", None), config=settings.get_settings())


def _handle_settings_show(args: argparse.Namespace) -> None:
    print_json(settings.get_settings(reload=args.reload))


def _handle_settings_update(args: argparse.Namespace) -> None:
    updated = settings.update_settings(
        app_name=args.app_name,
        env=args.env,
        log_level=args.log_level,
        wwwroot=args.wwwroot,
        media_default_width=args.default_width,
    )
    print_json(updated)


def _handle_settings_set(args: argparse.Namespace) -> None:
    updated = settings.update_plugin_config(args.key, args.value)
    print_json(updated.plugins.get(settings.PLUGIN_NAME, {}))


def _handle_filetypes(args: argparse.Namespace) -> None:
    registry = get_default_registry()
    print_json([registry.describe(token) for token in args.tokens])


def _handle_extensions(args: argparse.Namespace) -> None:
    plugin = _plugin(args)
    print_json({"extensions": plugin.get_supported_extensions()})


def _handle_urls(args: argparse.Namespace) -> None:
    plugin = _plugin(args)
    print_json({"supported": plugin.list_supported_urls(args.urls)})


def _original_text(args: argparse.Namespace) -> Optional[str]:
    if args.original_file:
        path = Path(args.original_file)
        if not path.exists():
            exit_with_error(f"Original markup file '{path}' does not exist")
        return path.read_text(encoding="utf-8")
    return args.original_text


def _handle_embed(args: argparse.Namespace) -> None:
    plugin = _plugin(args)
    urls = args.urls if args.all else plugin.list_supported_urls(args.urls)
    options = {"originaltext": _original_text(args)}
    if args.context:
        print_json(plugin.build_context(urls, args.name, args.width, args.height, options))
        return
    if not urls:
        exit_with_error("None of the given URLs can be played by this client")
    html = plugin.embed(urls, args.name, args.width, args.height, options)
    if not args.no_fallback:
        html = fill_link_fallback(html, urls, args.name or "")
    print(html)


def _handle_assets(args: argparse.Namespace) -> None:
    page = Page(wwwroot=args.wwwroot if args.wwwroot is not None else settings.get_settings().wwwroot)
    _plugin(args).setup(page)
    print_json({
        "head": page.requires.head_code(),
        "footer": page.requires.footer_code(),
        "scripts": [script.url for script in page.requires.scripts],
        "styles": page.requires.styles,
    })


def _add_user_agent(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--user-agent", help="User agent of the requesting client; empty means fully capable.")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ableplayer-admin",
        description="Inspect Able Player settings and render player markup.",
    )
    parser.add_argument("--log-level", dest="run_log_level", help="Override the configured log level for this run.")
    subparsers = parser.add_subparsers(dest="command")
    require_subcommand(subparsers)

    # Settings -----------------------------------------------------------
    settings_parser = build_subparser(subparsers, "settings", help="Inspect and update settings.")
    settings_sub = settings_parser.add_subparsers(dest="settings_command")
    require_subcommand(settings_sub)

    show_settings = build_subparser(settings_sub, "show", help="Display the effective settings.")
    show_settings.add_argument("--reload", action="store_true", help="Re-read the user settings file first.")
    show_settings.set_defaults(func=_handle_settings_show)

    update_settings = build_subparser(settings_sub, "update", help="Update site-level settings.")
    update_settings.add_argument("--app-name", help="Application display name.")
    update_settings.add_argument("--env", help="Runtime environment label.")
    update_settings.add_argument("--log-level", dest="log_level", help="Logging level (e.g. INFO, DEBUG).")
    update_settings.add_argument("--wwwroot", help="Base URL used to resolve player assets.")
    update_settings.add_argument("--default-width", type=int, help="Default player width in pixels.")
    update_settings.set_defaults(func=_handle_settings_update)

    set_setting = build_subparser(settings_sub, "set", help="Change a plugin setting (videoextensions, audioextensions).")
    set_setting.add_argument("key", choices=sorted(settings.ADMIN_SETTINGS), help="Setting name.")
    set_setting.add_argument("value", help="Comma separated extensions or type groups, e.g. 'html_video,.flv'.")
    set_setting.set_defaults(func=_handle_settings_set)

    # File types ---------------------------------------------------------
    filetypes = build_subparser(subparsers, "filetypes", help="Describe extensions and type groups.")
    filetypes.add_argument("tokens", nargs="+", help="Extensions ('.mp4'), MIME types or group names.")
    filetypes.set_defaults(func=_handle_filetypes)

    # Player -------------------------------------------------------------
    extensions = build_subparser(subparsers, "extensions", help="List extensions the player handles.")
    extensions.set_defaults(func=_handle_extensions)

    urls = build_subparser(subparsers, "urls", help="Filter URLs down to those this client can play.")
    urls.add_argument("urls", nargs="+", help="Candidate media URLs.")
    _add_user_agent(urls)
    urls.set_defaults(func=_handle_urls)

    embed = build_subparser(subparsers, "embed", help="Render player markup for media URLs.")
    embed.add_argument("urls", nargs="+", help="Media URLs, most preferred first.")
    embed.add_argument("--name", help="Display name used for the player title.")
    embed.add_argument("--width", type=int, default=0, help="Player width; 0 uses the configured default.")
    embed.add_argument("--height", type=int, default=0, help="Player height; 0 lets the player decide.")
    original = embed.add_mutually_exclusive_group()
    original.add_argument("--original-text", help="Existing <video>/<audio> markup the URLs came from.")
    original.add_argument("--original-file", help="File holding the existing media markup.")
    embed.add_argument("--all", action="store_true", help="Skip the per-client URL filter.")
    embed.add_argument("--context", action="store_true", help="Print the template context instead of markup.")
    embed.add_argument("--no-fallback", action="store_true", help="Keep the link placeholder in the output.")
    _add_user_agent(embed)
    embed.set_defaults(func=_handle_embed)

    assets = build_subparser(subparsers, "assets", help="Show the scripts and styles the player requires.")
    assets.add_argument("--wwwroot", help="Base URL for asset paths; defaults to the configured value.")
    assets.set_defaults(func=_handle_assets)

    return parser


def main(argv: Optional[Any] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    current = settings.get_settings()
    init_logging(args.run_log_level or current.log_level, stream=sys.stderr, app=current.app_name)
    handler = getattr(args, "func", None)
    if handler is None:
        parser.print_help()
        return
    try:
        handler(args)
    except AblePlayerError as exc:
        exit_with_error(str(exc))


if __name__ == "__main__":  # pragma: no cover
    main()
