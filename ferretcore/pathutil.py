"""Setting and comparing values inside documents and arrays by path."""

from __future__ import annotations

import datetime as _dt
import math
import re
from typing import Any

from ferretcore.types import Array, Document, TypesError, get_by_path

_INDEX_RE = re.compile(r"[+-]?[0-9]+")


def set_by_path(comp: Document | Array, value: Any, *path: str) -> None:
    """Replace the value at an existing path - a sequence of keys and indexes."""
    if not path:
        raise TypesError("set_by_path: path is empty")
    try:
        parent = get_by_path(comp, *path[:-1])
    except TypesError as exc:
        raise TypesError(f"set_by_path: {exc}") from exc

    last = path[-1]
    try:
        if isinstance(parent, Document):
            parent.get(last)
            parent.set(last, value)
        elif isinstance(parent, Array):
            if not _INDEX_RE.fullmatch(last):
                raise TypesError(f"invalid index: {last!r}")
            index = int(last)
            parent.get(index)
            parent.set(index, value)
        else:
            raise TypesError(f"can't access {type(parent).__name__} by path {last!r}")
    except TypesError as exc:
        raise TypesError(f"set_by_path: {exc}") from exc


def _pair(expected: Any, actual: Any, path: tuple[str, ...]) -> tuple[Any, Any]:
    expected_value = get_by_path(expected, *path)
    actual_value = get_by_path(actual, *path)
    if type(expected_value) is not type(actual_value):
        raise AssertionError(
            f"types differ: {type(expected_value).__name__} and {type(actual_value).__name__}"
        )
    return expected_value, actual_value


def compare_and_set_by_path_num(
    expected: Document | Array, actual: Document | Array, delta: float, *path: str
) -> None:
    """Check that numbers at path are within delta, then copy the actual one into expected."""
    expected_value, actual_value = _pair(expected, actual, path)
    if isinstance(expected_value, bool) or not isinstance(expected_value, (int, float)):
        raise AssertionError(f"not a number: {type(expected_value).__name__}")
    difference = abs(float(expected_value) - float(actual_value))
    if math.isnan(difference) or difference > delta:
        raise AssertionError(
            f"{expected_value!r} and {actual_value!r} differ by {difference}, more than {delta}"
        )
    set_by_path(expected, actual_value, *path)


def compare_and_set_by_path_time(
    expected: Document | Array,
    actual: Document | Array,
    delta: _dt.timedelta | float,
    *path: str,
) -> None:
    """Check that datetimes at path are within delta, then copy the actual one into expected."""
    expected_value, actual_value = _pair(expected, actual, path)
    if not isinstance(actual_value, _dt.datetime):
        raise AssertionError(f"not a datetime: {type(actual_value).__name__}")
    if not isinstance(delta, _dt.timedelta):
        delta = _dt.timedelta(seconds=delta)
    try:
        difference = abs(expected_value - actual_value)
    except TypeError as exc:
        raise AssertionError(f"datetimes can't be compared: {exc}") from exc
    if difference > delta:
        raise AssertionError(
            f"{expected_value!r} and {actual_value!r} differ by {difference}, more than {delta}"
        )
    set_by_path(expected, actual_value, *path)