"""Persistence for snippets and folders."""

from .backend import (
    FileBackend,
    KeyValueBackend,
    MemoryBackend,
    RedisBackend,
    StorageError,
    create_backend,
)
from .result import StoreResult
from .store import SnippetStore

__all__ = [
    "FileBackend",
    "KeyValueBackend",
    "MemoryBackend",
    "RedisBackend",
    "SnippetStore",
    "StorageError",
    "StoreResult",
    "create_backend",
]
