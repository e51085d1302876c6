from __future__ import annotations

import json
import logging
from pathlib import Path

from .ast import ProtoFile
from .decode import decode_file
from .emit import write_proto_file
from .errors import DecodeError

logger = logging.getLogger(__name__)


def load_source(src: str, *, file: str = "<memory>") -> ProtoFile:
    try:
        data = json.loads(src)
    except json.JSONDecodeError as e:
        raise DecodeError(
            path="",
            message=f"{file}:{e.lineno}:{e.colno}: invalid JSON: {e.msg}",
        ) from e
    return decode_file(data)


def load_file(path: str | Path) -> ProtoFile:
    p = Path(path).expanduser().resolve()
    logger.info("loading %s", p)
    src = p.read_text(encoding="utf-8")
    return load_source(src, file=str(p))


def emit_source(src: str, *, file: str = "<memory>") -> str:
    return write_proto_file(load_source(src, file=file))


def emit_file(path: str | Path) -> str:
    return write_proto_file(load_file(path))
