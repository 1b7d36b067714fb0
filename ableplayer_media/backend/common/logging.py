from __future__ import annotations

import json
import logging
import sys
from typing import IO, Any, MutableMapping, Optional


_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

# Attributes every LogRecord carries; only what callers pass via ``extra`` is emitted.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}

# Keys owned by the payload itself; ``extra`` cannot overwrite them.
PAYLOAD_FIELDS = ("ts", "level", "logger", "msg", "app", "exc_info")


class JsonFormatter(logging.Formatter):
    def __init__(self, app: str = "ableplayer-media") -> None:
        super().__init__()
        self.app = app

    def format(self, record: logging.LogRecord) -> str:
        payload: MutableMapping[str, Any] = {
            "ts": int(record.created * 1000),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "app": self.app,
        }

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        for k, v in record.__dict__.items():
            if k not in _RECORD_ATTRS and k not in PAYLOAD_FIELDS:
                payload[k] = v

        # Extensions come out of sets; anything else unserialisable is stringified.
        return json.dumps(payload, ensure_ascii=False, default=str)


def init_logging(level: str = "INFO", stream: Optional[IO[str]] = None, app: Optional[str] = None) -> None:
    root = logging.getLogger()

    # Idempotent: clear existing handlers to avoid duplication
    for h in list(root.handlers):
        root.removeHandler(h)

    root.setLevel(_LEVELS.get(level.upper(), logging.INFO))
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JsonFormatter(app) if app else JsonFormatter())
    root.addHandler(handler)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name if name else __name__)
