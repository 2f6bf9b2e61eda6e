"""Core package for pasting, splitting and filing front-end code snippets."""

from .preview import build_preview_document
from .separator import separate
from .share import build_share_link, extract_share_token
from .snippet import CodeTriple, Folder, Snippet, create_snippet
from .storage import SnippetStore, create_backend

__all__ = [
    "CodeTriple",
    "Folder",
    "Snippet",
    "SnippetStore",
    "build_preview_document",
    "build_share_link",
    "create_backend",
    "create_snippet",
    "extract_share_token",
    "separate",
]
