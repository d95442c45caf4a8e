"""Flag bits and flag sets of wire protocol messages."""

from __future__ import annotations

import enum


def _pascal(name: str) -> str:
    return "".join(word.capitalize() for word in name.split("_"))


def _camel(name: str) -> str:
    pascal = _pascal(name)
    return pascal[:1].lower() + pascal[1:]


def _bit_name(bit_type: type[enum.IntEnum], value: int) -> str:
    try:
        return str(bit_type(value))
    except ValueError:
        return f"{bit_type.__name__}({value})"


class OpMsgFlagBit(enum.IntEnum):
    """A single flag that modifies the format and behaviour of OP_MSG."""

    CHECKSUM_PRESENT = 1 << 0
    MORE_TO_COME = 1 << 1
    EXHAUST_ALLOWED = 1 << 16

    def __str__(self) -> str:
        return _camel(self.name)


class OpQueryFlagBit(enum.IntEnum):
    """A single OP_QUERY flag."""

    TAILABLE_CURSOR = 1 << 1
    SLAVE_OK = 1 << 2
    OPLOG_REPLAY = 1 << 3
    NO_CURSOR_TIMEOUT = 1 << 4
    AWAIT_DATA = 1 << 5
    EXHAUST = 1 << 6
    PARTIAL = 1 << 7

    def __str__(self) -> str:
        return _pascal(self.name)


class OpReplyFlagBit(enum.IntEnum):
    """A single OP_REPLY response flag."""

    CURSOR_NOT_FOUND = 1 << 0
    QUERY_FAILURE = 1 << 1
    SHARD_CONFIG_STALE = 1 << 2
    AWAIT_CAPABLE = 1 << 3

    def __str__(self) -> str:
        return _pascal(self.name)


class _Flags(int):
    """An unsigned 32-bit set of flag bits."""

    _bit_type: type[enum.IntEnum]

    def __new__(cls, value: int = 0):
        obj = super().__new__(cls, value)
        if not 0 <= obj <= 0xFFFFFFFF:
            raise ValueError(f"{cls.__name__}: value {int(obj)} does not fit in 32 bits")
        return obj

    def _has(self, bit: int) -> bool:
        return self & int(bit) != 0

    def names(self) -> list[str]:
        """Return names of the set bits, lowest first."""
        return [
            _bit_name(self._bit_type, 1 << shift)
            for shift in range(32)
            if (self >> shift) & 1
        ]

    def _render(self) -> str:
        return f"[{'|'.join(self.names())}]"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int.__repr__(self)})"


class OpMsgFlags(_Flags):
    """Flag bits of an OP_MSG message."""

    _bit_type = OpMsgFlagBit

    def flag_set(self, bit: OpMsgFlagBit) -> bool:
        """Return True if bit is set."""
        return self._has(bit)

    def __str__(self) -> str:
        return self._render()


class OpQueryFlags(_Flags):
    """Flag bits of an OP_QUERY message."""

    _bit_type = OpQueryFlagBit

    def flag_set(self, bit: OpQueryFlagBit) -> bool:
        """Return True if bit is set."""
        return self._has(bit)

    def __str__(self) -> str:
        return self._render()


class OpReplyFlags(_Flags):
    """Response flag bits of an OP_REPLY message."""

    _bit_type = OpReplyFlagBit

    def flag_set(self, bit: OpReplyFlagBit) -> bool:
        """Return True if bit is set."""
        return self._has(bit)

    def __str__(self) -> str:
        return self._render()