"""Document model, wire protocol flag types and small helpers for a MongoDB-compatible server."""

__version__ = "0.1.0"

__all__ = [
    "ctxutil",
    "flags",
    "logsetup",
    "pathutil",
    "types",
]