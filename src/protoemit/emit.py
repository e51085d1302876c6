from __future__ import annotations

import logging
from collections.abc import Iterator

from . import ast as A
from .errors import EmitError
from .lines import collect, flat_map, indent, select_map

logger = logging.getLogger(__name__)

# Only proto3 output is supported.
PROTO_HEADER = """/* Generated by protoemit */

syntax = "proto3";
"""


def write_proto_file(pf: A.ProtoFile) -> str:
    result = PROTO_HEADER

    if pf.package:
        result += f"\npackage {pf.package};\n"

    for path in pf.imports:
        result += f'\nimport "{path}";'
    if pf.imports:
        result += "\n"

    for name, value in pf.options.items():
        result += f"\noption {name} = {_write_option_value(value)};"
    # Breathing room between options and the first declaration.
    if pf.options:
        result += "\n"

    logger.debug("writing %d top-level declaration(s)", len(pf.declarations))
    for decl in pf.declarations:
        result += "\n" + "\n".join(collect(write_declaration(decl))) + "\n"

    return result


def write_declaration(decl: A.Declaration) -> Iterator[str]:
    """Render any declaration as a stream of lines, without newlines."""
    if isinstance(decl, A.MessageDeclaration):
        yield from _write_message(decl)
    elif isinstance(decl, A.ServiceDeclaration):
        yield from _write_service(decl)
    elif isinstance(decl, A.FieldDeclaration):
        yield _write_field(decl)
    elif isinstance(decl, A.OneOfDeclaration):
        yield from _write_oneof(decl)
    elif isinstance(decl, A.EnumDeclaration):
        yield from _write_enum(decl)
    elif isinstance(decl, A.MethodDeclaration):
        yield _write_method(decl)
    else:
        raise EmitError(
            kind=type(decl).__name__,
            message="not a declaration",
            hint="declarations must be one of: " + ", ".join(sorted(A.DECLARATION_KINDS)),
        )


def _write_message(decl: A.MessageDeclaration) -> Iterator[str]:
    head = f"message {decl.name} {{"
    tail = "}"

    if decl.declarations or decl.reservations:
        yield head
        yield from indent(_write_reservations(decl))
        yield from indent(flat_map(decl.declarations, write_declaration))
        yield tail
    else:
        yield head + tail


def _write_reservations(decl: A.MessageDeclaration) -> Iterator[str]:
    buckets = select_map(
        decl.reservations,
        lambda v: "names" if isinstance(v, str) else "numbers",
        {
            "numbers": lambda v: str(v) if isinstance(v, int) else f"{v[0]} to {v[1]}",
            "names": lambda v: f'"{v}"',
        },
    )
    numbers, names = buckets["numbers"], buckets["names"]

    if numbers:
        yield f"reserved {', '.join(numbers)};"
    if names:
        yield f"reserved {', '.join(names)};"
    if numbers or names:
        yield ""


def _write_service(decl: A.ServiceDeclaration) -> Iterator[str]:
    head = f"service {decl.name} {{"
    tail = "}"

    if decl.operations:
        yield head
        yield from indent(flat_map(decl.operations, _write_method))
        yield tail
    else:
        yield head + tail


def _write_method(decl: A.MethodDeclaration) -> str:
    in_stream = "stream " if decl.stream & A.StreamingMode.IN else ""
    out_stream = "stream " if decl.stream & A.StreamingMode.OUT else ""
    return (
        f"rpc {decl.name}({in_stream}{write_type(decl.input)}) "
        f"returns ({out_stream}{write_type(decl.returns)});"
    )


def _write_oneof(decl: A.OneOfDeclaration) -> Iterator[str]:
    yield f"oneof {decl.name} {{"
    yield from indent(flat_map(decl.declarations, write_declaration))
    yield "}"


def _write_enum(decl: A.EnumDeclaration) -> Iterator[str]:
    yield f"enum {decl.name} {{"
    if decl.allow_alias:
        # Always the first statement of the body, so the depth is fixed.
        yield "  option allow_alias = true;"
        if decl.variants:
            yield ""
    yield from indent(flat_map(decl.variants, lambda v: f"{v[0]} = {v[1]};"))
    yield "}"


def _write_field(decl: A.FieldDeclaration) -> str:
    prefix = "repeated " if decl.repeated else ""
    return f"{prefix}{write_type(decl.type)} {decl.name} = {decl.index};"


def write_type(t: A.ProtoType) -> str:
    if isinstance(t, A.MapType):
        return f"map<{write_type(t.key)}, {write_type(t.value)}>"
    # Scalars and references both render their name verbatim.
    return t.name


def _write_option_value(value: A.OptionValue) -> str:
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
