import datetime as dt

import pytest

from ferretcore.pathutil import (
    compare_and_set_by_path_num,
    compare_and_set_by_path_time,
    set_by_path,
)
from ferretcore.types import Array, Document, Int32, TypesError


def new_doc():
    return Document(
        "client", Document("driver", Document("name", "nodejs")),
        "compression", Array("none"),
    )


@pytest.mark.parametrize(
    "path, value, expected",
    [
        (
            ("compression", "0"),
            "zstd",
            Document(
                "client", Document("driver", Document("name", "nodejs")),
                "compression", Array("zstd"),
            ),
        ),
        (
            ("client",),
            "foo",
            Document("client", "foo", "compression", Array("none")),
        ),
    ],
)
def test_set_by_path(path, value, expected):
    doc = new_doc()
    set_by_path(doc, value, *path)
    assert doc == expected
    assert doc.get_by_path(*path) == value


def test_set_nested_key():
    doc = new_doc()
    set_by_path(doc, "python", "client", "driver", "name")
    assert doc.get_by_path("client", "driver", "name") == "python"


def test_set_empty_path():
    with pytest.raises(TypesError, match="path is empty"):
        set_by_path(new_doc(), "x")


def test_set_missing_key():
    with pytest.raises(TypesError, match="key not found"):
        set_by_path(new_doc(), "x", "client", "missing")


def test_set_out_of_bounds_index():
    with pytest.raises(TypesError, match="out of bounds"):
        set_by_path(new_doc(), "x", "compression", "1")


def test_set_invalid_index():
    with pytest.raises(TypesError, match="invalid index"):
        set_by_path(new_doc(), "x", "compression", "first")


def test_set_through_scalar():
    with pytest.raises(TypesError, match="can't access str"):
        set_by_path(new_doc(), "x", "compression", "0", "deeper")


def test_compare_num_updates_expected():
    expected = Document("ok", 1.0)
    actual = Document("ok", 1.05)
    compare_and_set_by_path_num(expected, actual, 0.1, "ok")
    assert expected == actual


def test_compare_num_outside_delta():
    expected = Document("ok", 1.0)
    actual = Document("ok", 1.5)
    with pytest.raises(AssertionError):
        compare_and_set_by_path_num(expected, actual, 0.1, "ok")
    assert expected.get("ok") == 1.0


def test_compare_num_type_mismatch():
    expected = Document("n", Int32(1))
    actual = Document("n", 1.0)
    with pytest.raises(AssertionError, match="types differ"):
        compare_and_set_by_path_num(expected, actual, 1, "n")
    assert expected.get("n") == Int32(1)


def test_compare_num_int32():
    expected = Document("n", Int32(10))
    actual = Document("n", Int32(11))
    compare_and_set_by_path_num(expected, actual, 2, "n")
    assert expected.get("n") == Int32(11)


def test_compare_time_updates_expected():
    base = dt.datetime(2021, 7, 24, 12, 54, 41, tzinfo=dt.timezone.utc)
    later = base + dt.timedelta(milliseconds=500)
    expected = Document("localTime", base)
    actual = Document("localTime", later)
    compare_and_set_by_path_time(expected, actual, dt.timedelta(seconds=1), "localTime")
    assert expected.get("localTime") == later


def test_compare_time_outside_delta():
    base = dt.datetime(2021, 7, 24, 12, 54, 41, tzinfo=dt.timezone.utc)
    expected = Document("t", base)
    actual = Document("t", base + dt.timedelta(seconds=5))
    with pytest.raises(AssertionError):
        compare_and_set_by_path_time(expected, actual, 1, "t")
    assert expected.get("t") == base


def test_compare_time_requires_datetime():
    expected = Document("t", "a")
    actual = Document("t", "b")
    with pytest.raises(AssertionError, match="not a datetime"):
        compare_and_set_by_path_time(expected, actual, 1, "t")
    assert expected.get("t") == "a"