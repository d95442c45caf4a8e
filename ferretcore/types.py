"""BSON value types used by command handlers: documents, arrays and scalars.

Value mapping:

* ``Document`` / ``Array``: composite values
* ``float``: 64-bit binary floating point
* ``str`` / ``CString``: UTF-8 string / zero-terminated string
* ``Binary``, ``ObjectID``, ``Regex``, ``Timestamp``: their BSON counterparts
* ``bool``: boolean
* ``datetime.datetime``: UTC datetime
* ``NullType`` (the ``Null`` singleton): null
* ``Int32`` / ``Int64``: 32- and 64-bit integers

Plain ``int`` is rejected, because its BSON width would be ambiguous.
"""

from __future__ import annotations

import datetime as _dt
import enum
import json
import re
from dataclasses import dataclass
from typing import Any, Iterator

MAX_DOCUMENT_LEN = 16777216

_INDEX_RE = re.compile(r"[+-]?[0-9]+")


class TypesError(ValueError):
    """Raised for unsupported values, invalid keys, bad indexes and bad paths."""


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _same(a: Any, b: Any) -> bool:
    """Compare two values, treating different BSON types as unequal."""
    return type(a) is type(b) and a == b


class BinarySubtype(enum.IntEnum):
    """Subtype of a BSON Binary value."""

    GENERIC = 0x00
    FUNCTION = 0x01
    GENERIC_OLD = 0x02
    UUID_OLD = 0x03
    UUID = 0x04
    MD5 = 0x05
    ENCRYPTED = 0x06
    USER = 0x80

    def __str__(self) -> str:
        return self.name.lower().replace("_", "-")


@dataclass(frozen=True)
class Binary:
    """BSON Binary value: a subtype byte and raw data."""

    subtype: BinarySubtype | int = BinarySubtype.GENERIC
    b: bytes = b""

    def __post_init__(self) -> None:
        subtype = int(self.subtype)
        if not 0 <= subtype <= 0xFF:
            raise TypesError(f"Binary: invalid subtype {subtype}")
        if subtype in BinarySubtype._value2member_map_:
            object.__setattr__(self, "subtype", BinarySubtype(subtype))
        object.__setattr__(self, "b", bytes(self.b))


class ObjectID(bytes):
    """BSON ObjectId: exactly 12 bytes."""

    def __new__(cls, value: bytes = bytes(12)) -> "ObjectID":
        obj = super().__new__(cls, value)
        if len(obj) != 12:
            raise TypesError(f"ObjectID: expected 12 bytes, got {len(obj)}")
        return obj

    def __repr__(self) -> str:
        return f"ObjectID({self.hex()!r})"


@dataclass(frozen=True)
class Regex:
    """BSON regular expression: pattern and option letters."""

    pattern: str
    options: str = ""


class _BoundedInt(int):
    _min = 0
    _max = 0

    def __new__(cls, value: int = 0):
        obj = super().__new__(cls, value)
        if not cls._min <= obj <= cls._max:
            raise TypesError(f"{cls.__name__}: value {int(obj)} is out of range")
        return obj

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int.__repr__(self)})"

    def __str__(self) -> str:
        return int.__repr__(self)


class Int32(_BoundedInt):
    """BSON 32-bit signed integer."""

    _min = -(2**31)
    _max = 2**31 - 1


class Int64(_BoundedInt):
    """BSON 64-bit signed integer."""

    _min = -(2**63)
    _max = 2**63 - 1


class Timestamp(_BoundedInt):
    """BSON Timestamp: an unsigned 64-bit value."""

    _min = 0
    _max = 2**64 - 1


class CString(str):
    """BSON zero-terminated string, as used for field names."""

    def __repr__(self) -> str:
        return f"CString({str.__repr__(self)})"


class NullType:
    """BSON Null; use the ``Null`` singleton."""

    _instance: "NullType | None" = None

    def __new__(cls) -> "NullType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Null"


Null = NullType()

_SCALARS = (
    float,
    str,
    Binary,
    ObjectID,
    bool,
    _dt.datetime,
    NullType,
    Regex,
    Int32,
    Timestamp,
    Int64,
)


def validate_value(value: Any) -> None:
    """Raise TypesError if value is not a supported BSON value."""
    if isinstance(value, Document):
        value.validate()
        return
    if isinstance(value, Array):
        # arrays are validated on every change, so they are always valid
        return
    if isinstance(value, _SCALARS):
        return
    raise TypesError(
        f"validate_value: unsupported type: {type(value).__name__} ({value!r})"
    )


def is_valid_key(key: str) -> bool:
    """Return False if key is not a valid document field name."""
    if not key:
        return False
    try:
        encoded = key.encode("utf-8")
    except UnicodeEncodeError:
        return False
    # forbid keys like $k, but allow $db and the like
    if key[0] == "$" and len(encoded) <= 2:
        return False
    return True


class Document:
    """Ordered BSON document; duplicate field names are not supported."""

    __slots__ = ("_keys", "_m")

    def __init__(self, *pairs: Any) -> None:
        if len(pairs) % 2:
            raise TypesError(f"Document: invalid number of arguments: {len(pairs)}")
        self._keys: list[str] = []
        self._m: dict[str, Any] = {}
        for key, value in zip(pairs[::2], pairs[1::2]):
            if not isinstance(key, str):
                raise TypesError(f"Document: invalid key type: {type(key).__name__}")
            try:
                self._add(key, value)
            except TypesError as exc:
                raise TypesError(f"Document: {exc}") from exc

    @classmethod
    def from_parts(cls, keys: Any, mapping: Any) -> "Document":
        """Build a document from a key order and a mapping, validating the result."""
        doc = cls.__new__(cls)
        doc._keys = list(keys)
        doc._m = dict(mapping)
        try:
            doc.validate()
        except TypesError as exc:
            raise TypesError(f"Document.from_parts: {exc}") from exc
        return doc

    def _add(self, key: str, value: Any) -> None:
        if key in self._m:
            raise TypesError(f"key already present: {_quote(key)}")
        if not is_valid_key(key):
            raise TypesError(f"invalid key: {_quote(key)}")
        validate_value(value)
        self._keys.append(key)
        self._m[key] = value

    def validate(self) -> None:
        """Raise TypesError if keys and values are inconsistent or invalid."""
        if len(self._m) != len(self._keys):
            raise TypesError(
                "Document.validate: keys and values count mismatch: "
                f"{len(self._m)} != {len(self._keys)}"
            )
        seen: set[str] = set()
        for key in self._keys:
            if not isinstance(key, str) or not is_valid_key(key):
                raise TypesError(f"Document.validate: invalid key: {_quote(str(key))}")
            if key not in self._m:
                raise TypesError(f"Document.validate: key not found: {_quote(key)}")
            if key in seen:
                raise TypesError(f"Document.validate: duplicate key: {_quote(key)}")
            seen.add(key)
            try:
                validate_value(self._m[key])
            except TypesError as exc:
                raise TypesError(f"Document.validate: {exc}") from exc

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._m

    def keys(self) -> list[str]:
        """Return field names in order."""
        return list(self._keys)

    def map(self) -> dict[str, Any]:
        """Return fields as a new dict."""
        return dict(self._m)

    def command(self) -> str:
        """Return the first field name in lower case, often a command name."""
        if not self._keys:
            raise TypesError("Document.command: document is empty")
        return self._keys[0].lower()

    def get(self, key: str) -> Any:
        """Return the value of key."""
        try:
            return self._m[key]
        except KeyError:
            raise TypesError(f"Document.get: key not found: {_quote(key)}") from None

    def get_by_path(self, *path: str) -> Any:
        """Return a value by a sequence of keys and indexes."""
        return get_by_path(self, *path)

    def set(self, key: str, value: Any) -> None:
        """Set the value of key, replacing any existing value."""
        if not is_valid_key(key):
            raise TypesError(f"Document.set: invalid key: {_quote(key)}")
        try:
            validate_value(value)
        except TypesError as exc:
            raise TypesError(f"Document.set: {exc}") from exc
        if key not in self._m:
            self._keys.append(key)
        self._m[key] = value

    def remove(self, key: str) -> None:
        """Remove key, doing nothing if it is absent."""
        if key not in self._m:
            return
        del self._m[key]
        self._keys.remove(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self._keys == other._keys and all(
            _same(self._m[k], other._m[k]) for k in self._keys
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        inner = ", ".join(f"{k!r}, {self._m[k]!r}" for k in self._keys)
        return f"Document({inner})"


class Array:
    """BSON array."""

    __slots__ = ("_items",)

    def __init__(self, *values: Any) -> None:
        for i, value in enumerate(values):
            try:
                validate_value(value)
            except TypesError as exc:
                raise TypesError(f"Array: index {i}: {exc}") from exc
        self._items: list[Any] = list(values)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def get(self, index: int) -> Any:
        """Return the value at index."""
        size = len(self._items)
        if not 0 <= index < size:
            raise TypesError(f"Array.get: index {index} is out of bounds [0-{size})")
        return self._items[index]

    def get_by_path(self, *path: str) -> Any:
        """Return a value by a sequence of indexes and keys."""
        return get_by_path(self, *path)

    def subslice(self, low: int, high: int) -> "Array":
        """Return a new array holding elements from low up to high."""
        size = len(self._items)
        if not 0 <= low <= size:
            raise TypesError(
                f"Array.subslice: low index {low} is out of bounds [0-{size})"
            )
        if not 0 <= high <= size:
            raise TypesError(
                f"Array.subslice: high index {high} is out of bounds [0-{size})"
            )
        if high < low:
            raise TypesError(
                f"Array.subslice: high index {high} is less than low index {low}"
            )
        result = Array()
        result._items = self._items[low:high]
        return result

    def set(self, index: int, value: Any) -> None:
        """Replace the value at index."""
        size = len(self._items)
        if not 0 <= index < size:
            raise TypesError(f"Array.set: index {index} is out of bounds [0-{size})")
        try:
            validate_value(value)
        except TypesError as exc:
            raise TypesError(f"Array.set: {exc}") from exc
        self._items[index] = value

    def append(self, *values: Any) -> None:
        """Append values; nothing is appended if any of them is invalid."""
        for value in values:
            try:
                validate_value(value)
            except TypesError as exc:
                raise TypesError(f"Array.append: {exc}") from exc
        self._items.extend(values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Array):
            return NotImplemented
        return len(self._items) == len(other._items) and all(
            _same(a, b) for a, b in zip(self._items, other._items)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Array({', '.join(repr(v) for v in self._items)})"


def get_by_path(comp: Any, *path: str) -> Any:
    """Return a value inside a document or array by a sequence of keys and indexes."""
    current = comp
    for part in path:
        if isinstance(current, Document):
            try:
                current = current.get(part)
            except TypesError as exc:
                raise TypesError(f"get_by_path: {exc}") from exc
        elif isinstance(current, Array):
            if not _INDEX_RE.fullmatch(part):
                raise TypesError(f"get_by_path: invalid index: {_quote(part)}")
            try:
                current = current.get(int(part))
            except TypesError as exc:
                raise TypesError(f"get_by_path: {exc}") from exc
        else:
            raise TypesError(
                f"get_by_path: can't access {type(current).__name__} by path {_quote(part)}"
            )
    return current