"""Key-value handles the snippet store persists through."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol
from urllib.parse import unquote, urlparse

import redis

logger = logging.getLogger("codevault")

REDIS_SCHEMES = ("redis", "rediss", "unix")


class StorageError(RuntimeError):
    """Raised by a backend when the underlying medium cannot be read or written."""


class KeyValueBackend(Protocol):
    def get(self, key: str) -> str | bytes | None: ...

    def set(self, key: str, value: str) -> object: ...


class MemoryBackend:
    """Process-local dictionary; nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class FileBackend:
    """One ``<key>.json`` file per key inside ``directory``."""

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> bytes | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_bytes()
        except OSError as exc:
            raise StorageError(f"Failed to read {path}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            tmp_path.replace(path)
        except OSError as exc:
            raise StorageError(f"Failed to write {path}: {exc}") from exc


class RedisBackend:
    """Plain string keys on a Redis server."""

    def __init__(self, redis_client: redis.Redis, *, key_prefix: str = "") -> None:
        self.redis = redis_client
        self.key_prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def get(self, key: str) -> str | bytes | None:
        try:
            return self.redis.get(self._key(key))
        except redis.RedisError as exc:
            raise StorageError(f"Redis read failed for {key}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        try:
            self.redis.set(self._key(key), value)
        except redis.RedisError as exc:
            raise StorageError(f"Redis write failed for {key}: {exc}") from exc


def create_backend(url: str) -> KeyValueBackend:
    """Build a backend from a store URL.

    ``redis://``, ``rediss://`` and ``unix://`` go to Redis, ``memory://`` stays
    in process, and anything else is treated as a directory path (``file://``
    prefix optional).
    """
    parsed = urlparse(url)
    scheme = parsed.scheme.lower()
    if scheme in REDIS_SCHEMES:
        logger.debug("Using Redis store at %s", url)
        return RedisBackend(redis.Redis.from_url(url))
    if scheme == "memory":
        return MemoryBackend()
    if scheme == "file":
        path = unquote(parsed.path)
    else:
        path = url
    logger.debug("Using file store at %s", path)
    return FileBackend(Path(path).expanduser())


__all__ = [
    "FileBackend",
    "KeyValueBackend",
    "MemoryBackend",
    "RedisBackend",
    "StorageError",
    "create_backend",
]
