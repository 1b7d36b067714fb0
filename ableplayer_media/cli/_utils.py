"""Shared helpers for the ableplayer-media CLI."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Mapping


def build_subparser(parent: argparse._SubParsersAction, name: str, **kwargs: Any) -> argparse.ArgumentParser:
    return parent.add_parser(name, **kwargs)


def require_subcommand(subparsers: argparse._SubParsersAction) -> None:
    """Force argparse to require that a sub-command is provided."""

    subparsers.required = True


def print_json(payload: Any) -> None:
    """Render a Python object as formatted JSON to stdout."""

    print(json.dumps(to_serializable(payload), indent=2, sort_keys=True, ensure_ascii=False))


def to_serializable(value: Any) -> Any:
    """Convert settings, pydantic models and containers into JSON-friendly values."""

    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Mapping):
        return {str(k): to_serializable(v) for k, v in value.items()}
    if isinstance(value, (set, frozenset)):
        return sorted(to_serializable(item) for item in value)
    if isinstance(value, (list, tuple)):
        return [to_serializable(item) for item in value]
    if hasattr(value, "model_dump"):
        return to_serializable(value.model_dump())
    if hasattr(value, "as_dict"):
        return to_serializable(value.as_dict())
    return str(value)


def exit_with_error(message: str, *, code: int = 1) -> None:
    """Emit a message to stderr and exit."""

    sys.stderr.write(f"Error: {message}\n")
    raise SystemExit(code)
