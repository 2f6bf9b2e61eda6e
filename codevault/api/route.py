"""FastAPI routes for code separation, previews, snippets and folders."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import HTMLResponse

from ..preview import PREVIEW_CSP
from ..snippet import CodeTriple
from ..storage import KeyValueBackend, SnippetStore, create_backend
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
from .service import (
    ApiSettings,
    create_folder_service,
    create_snippet_service,
    delete_folder_service,
    delete_snippet_service,
    get_shared_snippet_service,
    get_snippet_service,
    list_folders_service,
    list_snippets_service,
    preview_service,
    separate_service,
    update_snippet_service,
)


def get_settings(request: Request) -> ApiSettings:
    settings = getattr(request.app.state, "settings", None)
    if not isinstance(settings, ApiSettings):
        raise RuntimeError("API settings have not been initialised")
    return settings


def _get_backend(request: Request, settings: ApiSettings) -> KeyValueBackend:
    backend = getattr(request.app.state, "backend", None)
    if backend is None:
        backend = create_backend(settings.store_url)
        request.app.state.backend = backend
    return backend


def get_store(
    request: Request,
    settings: ApiSettings = Depends(get_settings),
) -> SnippetStore:
    return SnippetStore(_get_backend(request, settings))


router = APIRouter()


@router.post("/separate", response_model=CodeTriple)
async def separate_code(payload: SeparateRequest) -> CodeTriple:
    return separate_service(payload)


@router.post("/preview", response_class=HTMLResponse)
async def render_preview(payload: PreviewRequest) -> HTMLResponse:
    """Compose the preview document; the CSP header keeps it in an opaque origin."""

    return HTMLResponse(
        content=preview_service(payload),
        headers={"Content-Security-Policy": PREVIEW_CSP},
    )


@router.get("/snippets", response_model=SnippetListResponse)
async def list_snippets(
    query: str | None = Query(None, description="Case-insensitive match on title or folder id"),
    folder: str | None = Query(None, description="Folder id to list when no query is given"),
    limit: int | None = Query(None, ge=1, description="Maximum number of snippets to return"),
    store: SnippetStore = Depends(get_store),
    settings: ApiSettings = Depends(get_settings),
) -> SnippetListResponse:
    return list_snippets_service(store, settings, query=query, folder=folder, limit=limit)


@router.post("/snippets", response_model=SnippetResponse, status_code=status.HTTP_201_CREATED)
async def create_snippet(
    payload: SnippetCreateRequest,
    store: SnippetStore = Depends(get_store),
    settings: ApiSettings = Depends(get_settings),
) -> SnippetResponse:
    return create_snippet_service(payload, store, settings)


@router.get("/snippets/{snippet_id}", response_model=SnippetResponse)
async def get_snippet(
    snippet_id: str,
    store: SnippetStore = Depends(get_store),
    settings: ApiSettings = Depends(get_settings),
) -> SnippetResponse:
    return get_snippet_service(snippet_id, store, settings)


@router.put("/snippets/{snippet_id}", response_model=SnippetResponse)
async def update_snippet(
    snippet_id: str,
    payload: SnippetUpdateRequest,
    store: SnippetStore = Depends(get_store),
    settings: ApiSettings = Depends(get_settings),
) -> SnippetResponse:
    return update_snippet_service(snippet_id, payload, store, settings)


@router.delete("/snippets/{snippet_id}", response_class=Response)
async def delete_snippet(
    snippet_id: str,
    store: SnippetStore = Depends(get_store),
) -> Response:
    delete_snippet_service(snippet_id, store)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/share/{token}", response_model=SnippetResponse)
async def get_shared_snippet(
    token: str,
    store: SnippetStore = Depends(get_store),
    settings: ApiSettings = Depends(get_settings),
) -> SnippetResponse:
    return get_shared_snippet_service(token, store, settings)


@router.get("/folders", response_model=List[FolderResponse])
async def list_folders(store: SnippetStore = Depends(get_store)) -> List[FolderResponse]:
    return list_folders_service(store)


@router.post("/folders", response_model=FolderResponse, status_code=status.HTTP_201_CREATED)
async def create_folder(
    payload: FolderCreateRequest,
    store: SnippetStore = Depends(get_store),
) -> FolderResponse:
    return create_folder_service(payload, store)


@router.delete("/folders/{folder_id}", response_class=Response)
async def delete_folder(
    folder_id: str,
    store: SnippetStore = Depends(get_store),
) -> Response:
    """Delete a folder. Snippets filed under it keep their folder id."""

    delete_folder_service(folder_id, store)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router", "get_settings", "get_store"]
