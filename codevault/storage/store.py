"""Snippet and folder tables persisted as JSON arrays in a key-value backend."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, List, TypeVar

from pydantic import BaseModel, ValidationError

from ..snippet.factory import generate_id, now_ms
from ..snippet.model import (
    DEFAULT_FOLDER_ID,
    ERROR_FOLDER_ID,
    Folder,
    Snippet,
    default_folder,
)
from .backend import KeyValueBackend, StorageError
from .result import StoreResult

logger = logging.getLogger("codevault")

RecordT = TypeVar("RecordT", bound=BaseModel)


class SnippetStore:
    """CRUD and lookup over the ``snippets`` and ``folders`` keys.

    Every table operation reads the whole array, changes it, and writes the
    whole array back. Nothing here raises to the caller: read problems give an
    empty table, write problems leave the stored table as it was. The
    ``*_result`` methods expose the error alongside the value.
    """

    SNIPPETS_KEY = "snippets"
    FOLDERS_KEY = "folders"

    def __init__(self, backend: KeyValueBackend) -> None:
        self.backend = backend

    # Snippets ----------------------------------------------------------------

    def list_snippets_result(self) -> StoreResult[List[Snippet]]:
        return self._safe_read(self.SNIPPETS_KEY, Snippet)

    def list_snippets(self) -> List[Snippet]:
        return self.list_snippets_result().value

    def save_snippet_result(self, snippet: Snippet) -> StoreResult[bool]:
        def upsert(snippets: List[Snippet]) -> List[Snippet]:
            for index, existing in enumerate(snippets):
                if existing.id == snippet.id:
                    snippets[index] = snippet
                    return snippets
            snippets.append(snippet)
            return snippets

        return self._update_table(self.SNIPPETS_KEY, Snippet, upsert, action="save snippet")

    def save_snippet(self, snippet: Snippet) -> bool:
        return self.save_snippet_result(snippet).value

    def delete_snippet_result(self, snippet_id: str) -> StoreResult[bool]:
        return self._update_table(
            self.SNIPPETS_KEY,
            Snippet,
            lambda snippets: [s for s in snippets if s.id != snippet_id],
            action="delete snippet",
        )

    def delete_snippet(self, snippet_id: str) -> bool:
        return self.delete_snippet_result(snippet_id).value

    def get_snippet_by_id(self, snippet_id: str) -> Snippet | None:
        return next((s for s in self.list_snippets() if s.id == snippet_id), None)

    def get_snippet_by_share_token(self, token: str) -> Snippet | None:
        if not token:
            return None
        return next((s for s in self.list_snippets() if s.share_token == token), None)

    def list_snippets_by_folder(self, folder_id: str) -> List[Snippet]:
        return [s for s in self.list_snippets() if s.folder == folder_id]

    def search(self, query: str) -> List[Snippet]:
        """Case-insensitive substring match on title or folder id.

        An empty query matches every snippet.
        """
        needle = (query or "").lower()
        return [
            s
            for s in self.list_snippets()
            if needle in s.title.lower() or needle in s.folder.lower()
        ]

    # Folders -----------------------------------------------------------------

    def list_folders_result(self) -> StoreResult[List[Folder]]:
        result = self._safe_read(self.FOLDERS_KEY, Folder)
        result.value = _with_default_folder(result.value)
        return result

    def list_folders(self) -> List[Folder]:
        return self.list_folders_result().value

    def create_folder_result(self, name: str) -> StoreResult[Folder]:
        folder = Folder(id=generate_id(), name=name, created_at=now_ms())

        def append(folders: List[Folder]) -> List[Folder]:
            folders = _with_default_folder(folders)
            folders.append(folder)
            return folders

        written = self._update_table(self.FOLDERS_KEY, Folder, append, action="create folder")
        if not written.ok:
            return StoreResult.degraded(
                Folder(id=ERROR_FOLDER_ID, name=name, created_at=0),
                written.error or "write failed",
            )
        return StoreResult.success(folder)

    def create_folder(self, name: str) -> Folder:
        return self.create_folder_result(name).value

    def delete_folder_result(self, folder_id: str) -> StoreResult[bool]:
        return self._update_table(
            self.FOLDERS_KEY,
            Folder,
            lambda folders: [f for f in _with_default_folder(folders) if f.id != folder_id],
            action="delete folder",
        )

    def delete_folder(self, folder_id: str) -> bool:
        return self.delete_folder_result(folder_id).value

    # Internals ---------------------------------------------------------------

    def _safe_read(self, key: str, model: type[RecordT]) -> StoreResult[List[RecordT]]:
        try:
            return self._read_table(key, model)
        except StorageError as exc:
            logger.warning("Failed to load %s: %s", key, exc)
            return StoreResult.degraded([], exc)
        except Exception as exc:
            logger.exception("Unexpected error loading %s", key)
            return StoreResult.degraded([], exc)

    def _read_table(self, key: str, model: type[RecordT]) -> StoreResult[List[RecordT]]:
        """Decode one table.

        Backend failures propagate as :class:`StorageError`; unparsable content
        is reported through the returned result.
        """
        raw = self.backend.get(key)
        if raw is None:
            return StoreResult.success([])
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8", errors="replace")
        try:
            data = json.loads(raw)
        except (TypeError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unparsable %s table: %s", key, exc)
            return StoreResult.degraded([], exc)
        if not isinstance(data, list):
            logger.warning("Ignoring %s table of type %s", key, type(data).__name__)
            return StoreResult.degraded([], f"{key} is not a JSON array")

        records: List[RecordT] = []
        for entry in data:
            try:
                records.append(model.model_validate(entry))
            except ValidationError:
                logger.warning("Skipping malformed %s entry: %r", key, entry)
        return StoreResult.success(records)

    def _write_table(self, key: str, records: List[Any]) -> None:
        try:
            payload = json.dumps([r.to_record() for r in records], separators=(",", ":"))
        except (TypeError, ValueError) as exc:
            raise StorageError(f"Failed to serialise {key}: {exc}") from exc
        self.backend.set(key, payload)

    def _update_table(
        self,
        key: str,
        model: type[RecordT],
        change: Callable[[List[RecordT]], List[RecordT]],
        *,
        action: str,
    ) -> StoreResult[bool]:
        # A corrupt table reads as empty and gets overwritten; an unreachable
        # backend aborts the write.
        try:
            records = self._read_table(key, model).value
            self._write_table(key, change(records))
        except StorageError as exc:
            logger.warning("Failed to %s: %s", action, exc)
            return StoreResult.degraded(False, exc)
        except Exception as exc:
            logger.exception("Unexpected error during %s", action)
            return StoreResult.degraded(False, exc)
        logger.debug("%s: %s updated", action, key)
        return StoreResult.success(True)


def _with_default_folder(folders: List[Folder]) -> List[Folder]:
    if any(folder.id == DEFAULT_FOLDER_ID for folder in folders):
        return list(folders)
    return [default_folder(), *folders]


__all__ = ["SnippetStore"]
