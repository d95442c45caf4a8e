# ferretcore

Building blocks for a server that speaks the MongoDB wire protocol:

- `ferretcore.types`: the document model. It has `Document` (ordered, with
  validated keys), `Array`, and the scalar types `Binary` (with
  `BinarySubtype`), `ObjectID`, `Regex`, `Timestamp`, `NullType` (the `Null`
  singleton), `CString`, `Int32` and `Int64`. It also has `validate_value`,
  `is_valid_key` and `get_by_path` for walking nested values.
- `ferretcore.flags`: flag bits and flag sets for OP_MSG, OP_QUERY and
  OP_REPLY messages (`OpMsgFlagBit`/`OpMsgFlags`,
  `OpQueryFlagBit`/`OpQueryFlags`, `OpReplyFlagBit`/`OpReplyFlags`).
- `ferretcore.pathutil`: `set_by_path`, `compare_and_set_by_path_num` and
  `compare_and_set_by_path_time`.
- `ferretcore.ctxutil`: `with_delay`, for cancellation after a delay.
- `ferretcore.logsetup`: `setup`, which configures the root logger.

## Installation

```
pip install ferretcore
```

To install the test tools as well, add the `test` extra:
`pip install "ferretcore[test]"`.

## Documents and arrays

```python
from ferretcore.types import Array, Document, Int32, get_by_path

doc = Document(
    "insert", "actor",
    "ordered", True,
    "documents", Array(Document("actor_id", Int32(1))),
    "$db", "monila",
)

doc.command()                                       # "insert"
get_by_path(doc, "documents", "0", "actor_id")      # Int32(1)
doc.set("comment", "hello")
doc.remove("ordered")
doc.keys()                                          # ["insert", "documents", "$db", "comment"]
```

Supported values are `Document`, `Array`, `float`, `str`, `CString`, `bool`,
`datetime.datetime`, `Binary`, `ObjectID`, `Regex`, `Timestamp`, `Null`,
`Int32` and `Int64`. A plain `int` is rejected, because its BSON width would
be ambiguous. An unsupported value, or an invalid key such as `""` or `"$k"`,
raises `TypesError`. Keys such as `"$db"` are allowed. `Int32`, `Int64` and
`Timestamp` also raise `TypesError` when a value is out of range.

`Array` supports `get`, `set`, `append`, `subslice`, `len()` and iteration.
An index that is out of bounds raises `TypesError`.

## Setting values by path

```python
from ferretcore.pathutil import set_by_path
from ferretcore.types import Array, Document

doc = Document("compression", Array("none"))
set_by_path(doc, "zstd", "compression", "0")
doc.get_by_path("compression", "0")                 # "zstd"
```

The path must already exist. If it does not, `set_by_path` raises
`TypesError`.

`compare_and_set_by_path_num` and `compare_and_set_by_path_time` first check
that the values at the same path in two documents are within a delta. They
then copy the actual value into the expected document. If the check fails,
they raise `AssertionError`.

## Flags

```python
from ferretcore.flags import OpMsgFlagBit, OpMsgFlags

flags = OpMsgFlags(OpMsgFlagBit.CHECKSUM_PRESENT | OpMsgFlagBit.EXHAUST_ALLOWED)
str(flags)                                          # "[checksumPresent|exhaustAllowed]"
flags.names()                                       # ["checksumPresent", "exhaustAllowed"]
flags.flag_set(OpMsgFlagBit.MORE_TO_COME)           # False
```

A flag set must fit in 32 unsigned bits. Otherwise it raises `ValueError`.

## Helpers

- `ctxutil.with_delay(done, delay)` takes a `threading.Event` and a delay,
  given in seconds or as a `timedelta`. It returns an event and a cancel
  function. The event is set `delay` after `done` is set, or at once if the
  cancel function is called.
- `logsetup.setup(level)` makes the root logger write to stderr at the given
  level, passed as a number or as a name such as `"debug"` or `"warn"`. It
  routes `warnings` to logging and returns the root logger. Each call replaces
  the handler that the previous call installed.

## What this package does not do

This package does not cover the following:

- Reading or writing wire protocol messages: message headers, opcodes and
  message bodies.
- Encoding documents to BSON bytes, or decoding them from BSON bytes.
- Network serving.
- Storage.
- Command handling.