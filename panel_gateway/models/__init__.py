"""Model exports."""

from .identity import Identity, UserRecord
from .kv import KeyValueEntry

__all__ = [
    "Identity",
    "KeyValueEntry",
    "UserRecord",
]
