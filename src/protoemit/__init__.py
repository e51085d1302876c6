from __future__ import annotations

from .api import emit_file, emit_source, load_file, load_source
from .decode import decode_file, encode_file
from .emit import PROTO_HEADER, write_declaration, write_proto_file, write_type
from .errors import DecodeError, EmitError

__all__ = [
    "DecodeError",
    "EmitError",
    "PROTO_HEADER",
    "decode_file",
    "emit_file",
    "emit_source",
    "encode_file",
    "load_file",
    "load_source",
    "write_declaration",
    "write_proto_file",
    "write_type",
]
