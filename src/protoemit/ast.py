from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import ClassVar, Union


SCALAR_TYPES: frozenset[str] = frozenset(
    {
        "double",
        "float",
        "int32",
        "int64",
        "uint32",
        "uint64",
        "sint32",
        "sint64",
        "fixed32",
        "fixed64",
        "sfixed32",
        "sfixed64",
        "bool",
        "string",
        "bytes",
    }
)


class StreamingMode(enum.IntFlag):
    """Which side(s) of an rpc carry a stream of values."""

    NONE = 0
    IN = 1
    OUT = 2
    DUPLEX = IN | OUT


@dataclass(frozen=True, slots=True)
class ScalarType:
    name: str


@dataclass(frozen=True, slots=True)
class RefType:
    """A reference to a message or enum, already resolved upstream."""

    name: str


@dataclass(frozen=True, slots=True)
class MapType:
    # Keys are never maps themselves.
    key: ScalarType | RefType
    value: "ProtoType"


ProtoType = Union[ScalarType, RefType, MapType]

# A single reserved number, an inclusive [start, end] pair (tuple or list), or a reserved name.
Reservation = Union[int, tuple[int, int], Sequence[int], str]


@dataclass(frozen=True, slots=True)
class FieldDeclaration:
    kind: ClassVar[str] = "field"

    name: str
    type: ProtoType
    index: int
    repeated: bool = False


@dataclass(frozen=True, slots=True)
class OneOfDeclaration:
    kind: ClassVar[str] = "oneof"

    name: str
    # Never empty; the emitter has no short form for oneofs.
    declarations: tuple[FieldDeclaration, ...]


@dataclass(frozen=True, slots=True)
class EnumDeclaration:
    kind: ClassVar[str] = "enum"

    name: str
    variants: tuple[tuple[str, int], ...] = ()
    allow_alias: bool = False


@dataclass(frozen=True, slots=True)
class MessageDeclaration:
    kind: ClassVar[str] = "message"

    name: str
    declarations: tuple["FieldDeclaration | OneOfDeclaration | EnumDeclaration | MessageDeclaration", ...] = ()
    reservations: tuple[Reservation, ...] = ()


@dataclass(frozen=True, slots=True)
class MethodDeclaration:
    kind: ClassVar[str] = "method"

    name: str
    input: ProtoType
    returns: ProtoType
    stream: StreamingMode = StreamingMode.NONE


@dataclass(frozen=True, slots=True)
class ServiceDeclaration:
    kind: ClassVar[str] = "service"

    name: str
    operations: tuple[MethodDeclaration, ...] = ()


Declaration = Union[
    MessageDeclaration,
    FieldDeclaration,
    OneOfDeclaration,
    EnumDeclaration,
    MethodDeclaration,
    ServiceDeclaration,
]

DECLARATION_KINDS: dict[str, type] = {
    cls.kind: cls
    for cls in (
        MessageDeclaration,
        FieldDeclaration,
        OneOfDeclaration,
        EnumDeclaration,
        MethodDeclaration,
        ServiceDeclaration,
    )
}

OptionValue = Union[str, int, float, bool]


@dataclass(frozen=True, slots=True)
class ProtoFile:
    package: str | None = None
    imports: tuple[str, ...] = ()
    # Insertion order is the emission order.
    options: Mapping[str, OptionValue] = field(default_factory=dict)
    declarations: tuple[Declaration, ...] = ()
