"""Build a `ProtoFile` tree from plain JSON-compatible data.

The expected document shape mirrors the dataclasses in `protoemit.ast`:

    {
      "package": "foo.v1",
      "imports": ["google/protobuf/empty.proto"],
      "options": {"java_package": "com.foo"},
      "declarations": [
        {"kind": "message", "name": "A", "reservations": [1, [4, 6], "old"],
         "declarations": [{"kind": "field", "name": "id", "type": "int32", "index": 2}]},
        {"kind": "service", "name": "S", "operations": [
          {"kind": "method", "name": "Get", "input": "A", "returns": "A", "stream": "out"}]}
      ]
    }
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from . import ast as A
from .errors import DecodeError


_STREAM_NAMES: dict[str, A.StreamingMode] = {
    "none": A.StreamingMode.NONE,
    "in": A.StreamingMode.IN,
    "out": A.StreamingMode.OUT,
    "duplex": A.StreamingMode.DUPLEX,
}


def decode_file(data: object) -> A.ProtoFile:
    obj = _mapping(data, "")
    package = obj.get("package")
    if package is not None and not isinstance(package, str):
        raise DecodeError(path="package", message="expected a string")

    imports = tuple(_str(v, f"imports[{i}]") for i, v in enumerate(_list(obj.get("imports", []), "imports")))

    options: dict[str, A.OptionValue] = {}
    for name, value in _mapping(obj.get("options", {}), "options").items():
        if not isinstance(value, (str, int, float, bool)):
            raise DecodeError(
                path=f"options.{name}",
                message=f"unsupported option value: {type(value).__name__}",
                hint="option values must be strings, numbers or booleans",
            )
        options[name] = value

    decls = _list(obj.get("declarations", []), "declarations")
    return A.ProtoFile(
        package=package,
        imports=imports,
        options=options,
        declarations=tuple(decode_declaration(d, f"declarations[{i}]") for i, d in enumerate(decls)),
    )


def decode_declaration(data: object, path: str = "") -> A.Declaration:
    obj = _mapping(data, path)
    kind = obj.get("kind")
    if kind not in A.DECLARATION_KINDS:
        raise DecodeError(
            path=_join(path, "kind"),
            message=f"unknown declaration kind: {kind!r}",
            hint="kind must be one of: " + ", ".join(sorted(A.DECLARATION_KINDS)),
        )
    name = _str(obj.get("name"), _join(path, "name"))

    if kind == "message":
        return A.MessageDeclaration(
            name=name,
            declarations=tuple(
                decode_declaration(d, f"{_join(path, 'declarations')}[{i}]")
                for i, d in enumerate(_list(obj.get("declarations", []), _join(path, "declarations")))
            ),
            reservations=tuple(
                _reservation(r, f"{_join(path, 'reservations')}[{i}]")
                for i, r in enumerate(_list(obj.get("reservations", []), _join(path, "reservations")))
            ),
        )
    if kind == "field":
        return A.FieldDeclaration(
            name=name,
            type=decode_type(obj.get("type"), _join(path, "type")),
            index=_int(obj.get("index"), _join(path, "index")),
            repeated=_bool(obj.get("repeated", False), _join(path, "repeated")),
        )
    if kind == "oneof":
        members = _list(obj.get("declarations", []), _join(path, "declarations"))
        if not members:
            raise DecodeError(path=_join(path, "declarations"), message="oneof must have at least one field")
        fields: list[A.FieldDeclaration] = []
        for i, d in enumerate(members):
            sub = f"{_join(path, 'declarations')}[{i}]"
            decl = decode_declaration(d, sub)
            if not isinstance(decl, A.FieldDeclaration):
                raise DecodeError(path=sub, message=f"oneof members must be fields, got {decl.kind!r}")
            fields.append(decl)
        return A.OneOfDeclaration(name=name, declarations=tuple(fields))
    if kind == "enum":
        variants: list[tuple[str, int]] = []
        for i, v in enumerate(_list(obj.get("variants", []), _join(path, "variants"))):
            sub = f"{_join(path, 'variants')}[{i}]"
            if not isinstance(v, (list, tuple)) or len(v) != 2:
                raise DecodeError(path=sub, message="expected a [name, number] pair")
            variants.append((_str(v[0], sub), _int(v[1], sub)))
        return A.EnumDeclaration(
            name=name,
            variants=tuple(variants),
            allow_alias=_bool(obj.get("allow_alias", False), _join(path, "allow_alias")),
        )
    if kind == "method":
        return _method(obj, name, path)
    # service
    ops: list[A.MethodDeclaration] = []
    for i, d in enumerate(_list(obj.get("operations", []), _join(path, "operations"))):
        sub = f"{_join(path, 'operations')}[{i}]"
        decl = decode_declaration(d, sub)
        if not isinstance(decl, A.MethodDeclaration):
            raise DecodeError(path=sub, message=f"service operations must be methods, got {decl.kind!r}")
        ops.append(decl)
    return A.ServiceDeclaration(name=name, operations=tuple(ops))


def decode_type(data: object, path: str = "") -> A.ProtoType:
    if isinstance(data, str):
        if data in A.SCALAR_TYPES:
            return A.ScalarType(data)
        return A.RefType(data)
    if isinstance(data, Mapping) and set(data) == {"map"}:
        pair = data["map"]
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise DecodeError(path=_join(path, "map"), message="expected a [key, value] pair")
        key = decode_type(pair[0], _join(path, "map[0]"))
        if isinstance(key, A.MapType):
            raise DecodeError(path=_join(path, "map[0]"), message="map keys cannot be maps")
        return A.MapType(key=key, value=decode_type(pair[1], _join(path, "map[1]")))
    raise DecodeError(
        path=path,
        message="invalid type",
        hint='use a type name such as "string" or "foo.Bar", or {"map": [key, value]}',
    )


def encode_file(pf: A.ProtoFile) -> dict[str, Any]:
    """The inverse of `decode_file`: a tree as plain JSON-compatible data."""
    data: dict[str, Any] = {}
    if pf.package is not None:
        data["package"] = pf.package
    data["imports"] = list(pf.imports)
    data["options"] = dict(pf.options)
    data["declarations"] = [encode_declaration(d) for d in pf.declarations]
    return data


def encode_declaration(decl: A.Declaration) -> dict[str, Any]:
    out: dict[str, Any] = {"kind": decl.kind, "name": decl.name}
    if isinstance(decl, A.MessageDeclaration):
        out["declarations"] = [encode_declaration(d) for d in decl.declarations]
        out["reservations"] = [r if isinstance(r, (int, str)) else [r[0], r[1]] for r in decl.reservations]
    elif isinstance(decl, A.FieldDeclaration):
        out.update(type=encode_type(decl.type), index=decl.index, repeated=decl.repeated)
    elif isinstance(decl, A.OneOfDeclaration):
        out["declarations"] = [encode_declaration(d) for d in decl.declarations]
    elif isinstance(decl, A.EnumDeclaration):
        out.update(variants=[[n, v] for n, v in decl.variants], allow_alias=decl.allow_alias)
    elif isinstance(decl, A.MethodDeclaration):
        stream = next(k for k, v in _STREAM_NAMES.items() if v == decl.stream)
        out.update(input=encode_type(decl.input), returns=encode_type(decl.returns), stream=stream)
    elif isinstance(decl, A.ServiceDeclaration):
        out["operations"] = [encode_declaration(d) for d in decl.operations]
    return out


def encode_type(t: A.ProtoType) -> str | dict[str, Any]:
    if isinstance(t, A.MapType):
        return {"map": [encode_type(t.key), encode_type(t.value)]}
    return t.name


def _method(obj: Mapping[str, Any], name: str, path: str) -> A.MethodDeclaration:
    raw = obj.get("stream", "none")
    if isinstance(raw, str) and raw in _STREAM_NAMES:
        stream = _STREAM_NAMES[raw]
    elif isinstance(raw, int) and not isinstance(raw, bool) and 0 <= raw <= int(A.StreamingMode.DUPLEX):
        stream = A.StreamingMode(raw)
    else:
        raise DecodeError(
            path=_join(path, "stream"),
            message=f"invalid streaming mode: {raw!r}",
            hint='use "none", "in", "out", "duplex" or a bitmask from 0 to 3',
        )
    return A.MethodDeclaration(
        name=name,
        input=decode_type(obj.get("input"), _join(path, "input")),
        returns=decode_type(obj.get("returns"), _join(path, "returns")),
        stream=stream,
    )


def _reservation(data: object, path: str) -> A.Reservation:
    if isinstance(data, str):
        return data
    if isinstance(data, int) and not isinstance(data, bool):
        return data
    if isinstance(data, (list, tuple)) and len(data) == 2:
        return (_int(data[0], path), _int(data[1], path))
    raise DecodeError(
        path=path,
        message="invalid reservation",
        hint='use a number, a [start, end] range or a "name"',
    )


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _mapping(data: object, path: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise DecodeError(path=path, message=f"expected an object, got {type(data).__name__}")
    return data


def _list(data: object, path: str) -> list[Any]:
    if not isinstance(data, (list, tuple)):
        raise DecodeError(path=path, message=f"expected a list, got {type(data).__name__}")
    return list(data)


def _str(data: object, path: str) -> str:
    if not isinstance(data, str):
        raise DecodeError(path=path, message=f"expected a string, got {type(data).__name__}")
    return data


def _int(data: object, path: str) -> int:
    if not isinstance(data, int) or isinstance(data, bool):
        raise DecodeError(path=path, message=f"expected an integer, got {type(data).__name__}")
    return data


def _bool(data: object, path: str) -> bool:
    if not isinstance(data, bool):
        raise DecodeError(path=path, message=f"expected a boolean, got {type(data).__name__}")
    return data
