"""Tag storage backends."""

from .base import TagStorageConflictError
from .sqlite import SQLiteTagStorage

__all__ = ["SQLiteTagStorage", "TagStorageConflictError"]
