from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class EmitError(Exception):
    """A value that is not a declaration reached the emitter."""

    kind: str
    message: str
    hint: str | None = None

    def __str__(self) -> str:
        base = f"{self.kind}: {self.message}"
        if self.hint:
            return f"{base}\nhint: {self.hint}"
        return base


@dataclass(slots=True)
class DecodeError(Exception):
    path: str  # dotted location inside the input document, "" for the root
    message: str
    hint: str | None = None

    def __str__(self) -> str:
        base = f"{self.path or '<root>'}: {self.message}"
        if self.hint:
            return f"{base}\nhint: {self.hint}"
        return base
