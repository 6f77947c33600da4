from .lottery import (
    AppendResult,
    DrawResult,
    NameEntry,
    NamePool,
    ResetResult,
    WinnerSnapshot,
)

__all__ = [
    "AppendResult",
    "DrawResult",
    "NameEntry",
    "NamePool",
    "ResetResult",
    "WinnerSnapshot",
]
