"""A small JSON value type with auto-vivifying containers and its parser.

Strings keep their escape sequences as written in the source text, and
serialising writes them back between quotes unchanged, so a value that was
parsed round-trips to the same text. Object keys are serialised in sorted
order.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import Any, Iterator


class JsonError(ValueError):
    """Raised on malformed JSON text or on a value of the wrong type."""


class JsonType(enum.Enum):
    NULL = 0
    BOOL = 1
    INT = 2
    DOUBLE = 3
    STRING = 4
    ARRAY = 5
    OBJECT = 6


_EMPTY_VALUES = {
    JsonType.NULL: lambda: None,
    JsonType.BOOL: lambda: False,
    JsonType.INT: lambda: 0,
    JsonType.DOUBLE: lambda: 0.0,
    JsonType.STRING: lambda: "",
    JsonType.ARRAY: list,
    JsonType.OBJECT: dict,
}


class Json:
    """A JSON value: null, bool, int, double, string, array or object."""

    __slots__ = ("_type", "_value")

    def __init__(self, value: Any = None) -> None:
        self._type, self._value = self._convert(value)

    @staticmethod
    def _convert(value: Any) -> tuple[JsonType, Any]:
        if isinstance(value, Json):
            if value._type is JsonType.ARRAY:
                return JsonType.ARRAY, [Json(item) for item in value._value]
            if value._type is JsonType.OBJECT:
                return JsonType.OBJECT, {k: Json(v) for k, v in value._value.items()}
            return value._type, value._value
        if isinstance(value, JsonType):
            return value, _EMPTY_VALUES[value]()
        if value is None:
            return JsonType.NULL, None
        if isinstance(value, bool):
            return JsonType.BOOL, value
        if isinstance(value, int):
            return JsonType.INT, value
        if isinstance(value, float):
            return JsonType.DOUBLE, value
        if isinstance(value, str):
            return JsonType.STRING, value
        if isinstance(value, (list, tuple)):
            return JsonType.ARRAY, [Json(item) for item in value]
        if isinstance(value, Mapping):
            items = {}
            for key, item in value.items():
                if not isinstance(key, str):
                    raise JsonError(f"object key must be a string, not {type(key).__name__}")
                items[key] = Json(item)
            return JsonType.OBJECT, items
        raise TypeError(f"cannot make a JSON value from {type(value).__name__}")

    @classmethod
    def parse(cls, text: str) -> Json:
        """Parse JSON text into a value."""
        return Parser(text).parse()

    @property
    def type(self) -> JsonType:
        return self._type

    def to_python(self) -> Any:
        """Return the value as plain Python data."""
        if self._type is JsonType.ARRAY:
            return [item.to_python() for item in self._value]
        if self._type is JsonType.OBJECT:
            return {k: v.to_python() for k, v in self._value.items()}
        return self._value

    def dumps(self) -> str:
        """Serialise to compact JSON text with sorted object keys."""
        kind = self._type
        if kind is JsonType.NULL:
            return "null"
        if kind is JsonType.BOOL:
            return "true" if self._value else "false"
        if kind is JsonType.INT:
            return str(self._value)
        if kind is JsonType.DOUBLE:
            return "%g" % self._value
        if kind is JsonType.STRING:
            return f'"{self._value}"'
        if kind is JsonType.ARRAY:
            return "[" + ",".join(item.dumps() for item in self._value) + "]"
        members = (f'"{key}":{self._value[key].dumps()}' for key in sorted(self._value))
        return "{" + ",".join(members) + "}"

    def __str__(self) -> str:
        return self.dumps()

    def __repr__(self) -> str:
        return f"Json({self.dumps()})"

    def _become(self, kind: JsonType) -> None:
        if self._type is not kind:
            self._type = kind
            self._value = _EMPTY_VALUES[kind]()

    def __getitem__(self, key: int | str) -> Json:
        if isinstance(key, bool) or not isinstance(key, (int, str)):
            raise TypeError(f"JSON index must be int or str, not {type(key).__name__}")
        if isinstance(key, int):
            self._become(JsonType.ARRAY)
            if key < 0:
                raise JsonError("array index < 0")
            while len(self._value) <= key:
                self._value.append(Json())
            return self._value[key]
        self._become(JsonType.OBJECT)
        return self._value.setdefault(key, Json())

    def __setitem__(self, key: int | str, value: Any) -> None:
        replacement = Json(value)
        target = self[key]
        target._type, target._value = replacement._type, replacement._value

    def __contains__(self, key: object) -> bool:
        if isinstance(key, bool):
            return False
        if isinstance(key, int):
            return self._type is JsonType.ARRAY and 0 <= key < len(self._value)
        if isinstance(key, str):
            return self._type is JsonType.OBJECT and key in self._value
        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Json):
            try:
                other = Json(other)
            except (TypeError, JsonError):
                return NotImplemented
        return self._type is other._type and self._value == other._value

    __hash__ = None  # type: ignore[assignment]

    def __iter__(self) -> Iterator[Json]:
        if self._type is not JsonType.ARRAY:
            raise JsonError("type error, not array value")
        return iter(self._value)

    def __len__(self) -> int:
        if self._type not in (JsonType.ARRAY, JsonType.OBJECT):
            raise JsonError("type error, not array or object value")
        return len(self._value)

    def __bool__(self) -> bool:
        return self.as_bool()

    def __int__(self) -> int:
        return self.as_int()

    def __float__(self) -> float:
        return self.as_float()

    def append(self, value: Any) -> None:
        """Append to the array, turning this value into an array first if needed."""
        item = Json(value)
        self._become(JsonType.ARRAY)
        self._value.append(item)

    def remove(self, key: int | str) -> None:
        """Remove an array element or object member; a missing one is ignored."""
        if isinstance(key, bool):
            return
        if isinstance(key, int):
            if self._type is JsonType.ARRAY and 0 <= key < len(self._value):
                del self._value[key]
        elif isinstance(key, str) and self._type is JsonType.OBJECT:
            self._value.pop(key, None)

    def clear(self) -> None:
        """Reset to null."""
        self._type = JsonType.NULL
        self._value = None

    def _expect(self, kind: JsonType, name: str) -> Any:
        if self._type is not kind:
            raise JsonError(f"type error, not {name} value")
        return self._value

    def as_bool(self) -> bool:
        return self._expect(JsonType.BOOL, "bool")

    def as_int(self) -> int:
        return self._expect(JsonType.INT, "int")

    def as_float(self) -> float:
        return self._expect(JsonType.DOUBLE, "double")

    def as_str(self) -> str:
        return self._expect(JsonType.STRING, "string")

    def obj_to_map(self) -> dict[str, str]:
        """Map each member key to its serialised value; empty unless an object."""
        if self._type is not JsonType.OBJECT:
            return {}
        return {key: self._value[key].dumps() for key in sorted(self._value)}


_WHITESPACE = " \n\r\t"
_DIGITS = "0123456789"
_LITERAL_CONTROL = "\n\r\t\b\f"


class Parser:
    """Recursive-descent parser producing :class:`Json` values."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def _peek(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else ""

    def _is_digit(self) -> bool:
        ch = self._peek()
        return ch != "" and ch in _DIGITS

    def _skip_whitespace(self) -> None:
        while self._pos < len(self._text) and self._text[self._pos] in _WHITESPACE:
            self._pos += 1

    def _next_token(self) -> str:
        self._skip_whitespace()
        ch = self._peek()
        self._pos += 1
        return ch

    def parse(self) -> Json:
        """Parse one value starting at the current position."""
        ch = self._next_token()
        if ch == "n":
            self._pos -= 1
            return self._parse_literal("null", None)
        if ch in ("t", "f"):
            self._pos -= 1
            if ch == "t":
                return self._parse_literal("true", True)
            return self._parse_literal("false", False)
        if ch != "" and ch in "-" + _DIGITS:
            self._pos -= 1
            return self._parse_number()
        if ch == '"':
            return Json(self._parse_string())
        if ch == "[":
            return self._parse_array()
        if ch == "{":
            return self._parse_object()
        raise JsonError(f"unexpected char at position {self._pos - 1}")

    def _parse_literal(self, word: str, value: Any) -> Json:
        if self._text.startswith(word, self._pos):
            self._pos += len(word)
            return Json(value)
        kind = "null" if value is None else "bool"
        raise JsonError(f"parse {kind} error")

    def _consume_digits(self) -> None:
        if not self._is_digit():
            raise JsonError("parse number error")
        while self._is_digit():
            self._pos += 1

    def _parse_number(self) -> Json:
        start = self._pos
        if self._peek() == "-":
            self._pos += 1
        self._consume_digits()
        if self._peek() != ".":
            return Json(int(self._text[start:self._pos]))
        self._pos += 1
        self._consume_digits()
        return Json(float(self._text[start:self._pos]))

    def _take(self) -> str:
        if self._pos >= len(self._text):
            raise JsonError("unterminated string")
        ch = self._text[self._pos]
        self._pos += 1
        return ch

    def _parse_string(self) -> str:
        out: list[str] = []
        while True:
            ch = self._take()
            if ch == '"':
                return "".join(out)
            if ch != "\\":
                out.append(ch)
                continue
            escaped = self._take()
            if escaped in _LITERAL_CONTROL:
                out.append(escaped)
            elif escaped == "u":
                out.append("\\u" + "".join(self._take() for _ in range(4)))
            else:
                out.append("\\" + escaped)

    def _parse_array(self) -> Json:
        array = Json(JsonType.ARRAY)
        if self._next_token() == "]":
            return array
        self._pos -= 1
        while True:
            array._value.append(self.parse())
            ch = self._next_token()
            if ch == "]":
                return array
            if ch != ",":
                raise JsonError("parse array error")
            self._skip_whitespace()

    def _parse_object(self) -> Json:
        obj = Json(JsonType.OBJECT)
        if self._next_token() == "}":
            return obj
        self._pos -= 1
        while True:
            if self._next_token() != '"':
                raise JsonError("parse object error")
            key = self._parse_string()
            if self._next_token() != ":":
                raise JsonError("parse object error")
            obj._value[key] = self.parse()
            ch = self._next_token()
            if ch == "}":
                return obj
            if ch != ",":
                raise JsonError("parse object error")
            self._skip_whitespace()