"""Compile-time values: a type paired with optional constant data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from yal.types import Type

ValueData = Union[Type, bool, int, str, None]

_ESCAPES = {
    "\t": "\\t",
    "\n": "\\n",
    "\r": "\\r",
    '"': '\\"',
    "\\": "\\\\",
}


def _debug_quote(text: str) -> str:
    """Quote a string with escapes for control and unprintable characters."""
    parts = []
    for ch in text:
        if ch in _ESCAPES:
            parts.append(_ESCAPES[ch])
        elif not ch.isprintable():
            parts.append(f"\\u{{{ord(ch):x}}}")
        else:
            parts.append(ch)
    return '"' + "".join(parts) + '"'


@dataclass
class Value:
    """A typed value, possibly carrying a known constant.

    ``data`` is one of: a type, a bool, an unsigned integer, a string, or
    None when nothing is known about the value.
    """

    type: Type | None = None
    data: ValueData = None

    def __post_init__(self) -> None:
        if isinstance(self.data, int) and not isinstance(self.data, bool):
            if not 0 <= self.data < 1 << 64:
                raise ValueError(f"integer data out of range: {self.data}")

    def has_data(self) -> bool:
        return self.data is not None

    def to_json(self) -> dict[str, Any]:
        data: Any = None
        if isinstance(self.data, Type):
            data = str(self.data)
        elif isinstance(self.data, (bool, int, str)):
            data = self.data
        return {
            "type": str(self.type) if self.type is not None else None,
            "data": data,
        }

    def __str__(self) -> str:
        if self.type is None:
            raise ValueError("cannot format a value without a type")
        text = f"Value({self.type}"
        if isinstance(self.data, Type):
            text += f", {self.data}"
        elif isinstance(self.data, bool):
            text += ", true" if self.data else ", false"
        elif isinstance(self.data, int):
            text += f", {self.data}"
        elif isinstance(self.data, str):
            text += f", {_debug_quote(self.data)}"
        return text + ")"