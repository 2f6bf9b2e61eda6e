"""Snippet records and their construction helpers."""

from .factory import create_snippet, generate_id, generate_share_token
from .model import (
    DEFAULT_FOLDER_ID,
    DEFAULT_TITLE,
    ERROR_FOLDER_ID,
    CodeTriple,
    Folder,
    Snippet,
    default_folder,
)

__all__ = [
    "CodeTriple",
    "DEFAULT_FOLDER_ID",
    "DEFAULT_TITLE",
    "ERROR_FOLDER_ID",
    "Folder",
    "Snippet",
    "create_snippet",
    "default_folder",
    "generate_id",
    "generate_share_token",
]
