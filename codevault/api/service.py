"""Service-layer helpers for separating, previewing and filing snippets."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from fastapi import HTTPException

from ..preview import build_preview_document
from ..separator import separate
from ..share import build_share_link
from ..snippet import DEFAULT_FOLDER_ID, CodeTriple, Snippet, create_snippet
from ..storage import SnippetStore
from .model import (
    FolderCreateRequest,
    FolderResponse,
    PreviewRequest,
    SeparateRequest,
    SnippetCreateRequest,
    SnippetListResponse,
    SnippetResponse,
    SnippetUpdateRequest,
)

logger = logging.getLogger("codevault")


@dataclass(slots=True)
class ApiSettings:
    """Runtime configuration for the API server."""

    store_url: str
    share_base_url: str
    search_limit: int
    log_level: str

    @classmethod
    def from_env(cls) -> "ApiSettings":
        def _int_env(name: str, default: int) -> int:
            raw = os.getenv(name)
            if not raw:
                return default
            try:
                value = int(raw)
            except ValueError:
                logger.warning("Invalid integer for %s: %s", name, raw)
                return default
            if value <= 0:
                logger.warning("Non-positive value for %s: %s", name, raw)
                return default
            return value

        return cls(
            store_url=os.getenv("CODEVAULT_STORE_URL", "redis://127.0.0.1:6379/0"),
            share_base_url=os.getenv("CODEVAULT_SHARE_BASE_URL", "http://localhost:8000/"),
            search_limit=_int_env("CODEVAULT_SEARCH_LIMIT", 50),
            log_level=os.getenv("CODEVAULT_LOG_LEVEL", "INFO"),
        )


def snippet_to_response(snippet: Snippet, settings: ApiSettings) -> SnippetResponse:
    return SnippetResponse.from_snippet(
        snippet,
        share_link=build_share_link(settings.share_base_url, snippet.share_token),
    )


def _require_folder(store: SnippetStore, folder_id: str) -> None:
    if not any(folder.id == folder_id for folder in store.list_folders()):
        raise HTTPException(status_code=400, detail=f"Unknown folder: {folder_id}")


def _require_snippet(store: SnippetStore, snippet_id: str) -> Snippet:
    snippet = store.get_snippet_by_id(snippet_id)
    if snippet is None:
        raise HTTPException(status_code=404, detail="Snippet not found")
    return snippet


def separate_service(payload: SeparateRequest) -> CodeTriple:
    return separate(payload.code)


def preview_service(payload: PreviewRequest) -> str:
    return build_preview_document(payload, dark=payload.dark)


def list_snippets_service(
    store: SnippetStore,
    settings: ApiSettings,
    *,
    query: str | None = None,
    folder: str | None = None,
    limit: int | None = None,
) -> SnippetListResponse:
    # A non-empty query searches everything; otherwise list one folder.
    if query:
        snippets = store.search(query)
        folder = None
    else:
        folder = folder or DEFAULT_FOLDER_ID
        snippets = store.list_snippets_by_folder(folder)

    effective_limit = min(limit or settings.search_limit, settings.search_limit)
    results = [snippet_to_response(s, settings) for s in snippets[:effective_limit]]
    return SnippetListResponse(query=query or None, folder=folder, results=results)


def create_snippet_service(
    payload: SnippetCreateRequest,
    store: SnippetStore,
    settings: ApiSettings,
) -> SnippetResponse:
    if payload.is_blank():
        raise HTTPException(status_code=400, detail="Please paste some code first")
    _require_folder(store, payload.folder)

    snippet = create_snippet(payload, title=payload.title, folder_id=payload.folder)
    result = store.save_snippet_result(snippet)
    if not result.ok:
        logger.error("Failed to save snippet %s: %s", snippet.id, result.error)
        raise HTTPException(status_code=500, detail="Failed to save snippet")

    logger.info("Saved snippet %s (%s) in folder %s", snippet.id, snippet.title, snippet.folder)
    return snippet_to_response(snippet, settings)


def get_snippet_service(
    snippet_id: str,
    store: SnippetStore,
    settings: ApiSettings,
) -> SnippetResponse:
    return snippet_to_response(_require_snippet(store, snippet_id), settings)


def update_snippet_service(
    snippet_id: str,
    payload: SnippetUpdateRequest,
    store: SnippetStore,
    settings: ApiSettings,
) -> SnippetResponse:
    existing = _require_snippet(store, snippet_id)
    if payload.is_blank():
        raise HTTPException(status_code=400, detail="Please paste some code first")
    _require_folder(store, payload.folder)

    snippet = existing.model_copy(
        update={
            "html": payload.html,
            "css": payload.css,
            "js": payload.js,
            "title": payload.title,
            "folder": payload.folder,
        }
    )
    result = store.save_snippet_result(snippet)
    if not result.ok:
        logger.error("Failed to update snippet %s: %s", snippet_id, result.error)
        raise HTTPException(status_code=500, detail="Failed to update snippet")
    return snippet_to_response(snippet, settings)


def delete_snippet_service(snippet_id: str, store: SnippetStore) -> None:
    result = store.delete_snippet_result(snippet_id)
    if not result.ok:
        logger.error("Failed to delete snippet %s: %s", snippet_id, result.error)
        raise HTTPException(status_code=500, detail="Failed to delete snippet")


def get_shared_snippet_service(
    token: str,
    store: SnippetStore,
    settings: ApiSettings,
) -> SnippetResponse:
    snippet = store.get_snippet_by_share_token(token)
    if snippet is None:
        raise HTTPException(status_code=404, detail="Shared snippet not found")
    return snippet_to_response(snippet, settings)


def list_folders_service(store: SnippetStore) -> list[FolderResponse]:
    return [FolderResponse.from_folder(folder) for folder in store.list_folders()]


def create_folder_service(payload: FolderCreateRequest, store: SnippetStore) -> FolderResponse:
    name = payload.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Folder name is required")

    folder = store.create_folder(name)
    if folder.is_error:
        raise HTTPException(status_code=500, detail="Failed to create folder")

    logger.info("Created folder %s (%s)", folder.id, folder.name)
    return FolderResponse.from_folder(folder)


def delete_folder_service(folder_id: str, store: SnippetStore) -> None:
    if folder_id == DEFAULT_FOLDER_ID:
        raise HTTPException(status_code=400, detail="Cannot delete the default folder")

    result = store.delete_folder_result(folder_id)
    if not result.ok:
        logger.error("Failed to delete folder %s: %s", folder_id, result.error)
        raise HTTPException(status_code=500, detail="Failed to delete folder")


__all__ = [
    "ApiSettings",
    "create_folder_service",
    "create_snippet_service",
    "delete_folder_service",
    "delete_snippet_service",
    "get_shared_snippet_service",
    "get_snippet_service",
    "list_folders_service",
    "list_snippets_service",
    "preview_service",
    "separate_service",
    "snippet_to_response",
    "update_snippet_service",
]
