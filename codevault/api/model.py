"""Pydantic models for the public API surface."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from ..snippet import DEFAULT_FOLDER_ID, DEFAULT_TITLE, CodeTriple, Folder, Snippet


class SeparateRequest(BaseModel):
    code: str = Field("", description="Mixed HTML/CSS/JS source text")


class PreviewRequest(CodeTriple):
    dark: bool = Field(False, description="Render with the dark body palette")


class SnippetCreateRequest(CodeTriple):
    title: str = Field(DEFAULT_TITLE, description="Display title for the snippet")
    folder: str = Field(DEFAULT_FOLDER_ID, description="Id of the folder to file it under")


class SnippetUpdateRequest(CodeTriple):
    title: str = Field(..., description="Display title for the snippet")
    folder: str = Field(..., description="Id of the folder to file it under")


class SnippetResponse(BaseModel):
    id: str
    title: str
    folder: str
    html: str
    css: str
    js: str
    created_at: int = Field(..., serialization_alias="createdAt")
    share_token: str = Field(..., serialization_alias="shareToken")
    share_link: str = Field(..., serialization_alias="shareLink")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_snippet(cls, snippet: Snippet, share_link: str) -> "SnippetResponse":
        return cls(
            id=snippet.id,
            title=snippet.title,
            folder=snippet.folder,
            html=snippet.html,
            css=snippet.css,
            js=snippet.js,
            created_at=snippet.created_at,
            share_token=snippet.share_token,
            share_link=share_link,
        )


class SnippetListResponse(BaseModel):
    query: str | None = None
    folder: str | None = None
    results: List[SnippetResponse]


class FolderCreateRequest(BaseModel):
    name: str = Field(..., description="Display name for the new folder")


class FolderResponse(BaseModel):
    id: str
    name: str
    created_at: int = Field(..., serialization_alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_folder(cls, folder: Folder) -> "FolderResponse":
        return cls(id=folder.id, name=folder.name, created_at=folder.created_at)


__all__ = [
    "FolderCreateRequest",
    "FolderResponse",
    "PreviewRequest",
    "SeparateRequest",
    "SnippetCreateRequest",
    "SnippetListResponse",
    "SnippetResponse",
    "SnippetUpdateRequest",
]
