"""Identifier, share-token and snippet construction helpers."""

from __future__ import annotations

import random
import string
import time

from .model import DEFAULT_FOLDER_ID, DEFAULT_TITLE, CodeTriple, Snippet

_BASE36 = string.digits + string.ascii_lowercase
_ID_SUFFIX_LENGTH = 9
_SHARE_TOKEN_LENGTH = 26


def now_ms() -> int:
    return int(time.time() * 1000)


def _random_base36(length: int) -> str:
    return "".join(random.choices(_BASE36, k=length))


def generate_id() -> str:
    """Return a millisecond timestamp joined to a random base36 suffix.

    Uniqueness is probabilistic; two ids minted in the same millisecond only
    collide if their nine-character suffixes match.
    """
    return f"{now_ms()}-{_random_base36(_ID_SUFFIX_LENGTH)}"


def generate_share_token() -> str:
    """Return an opaque token for share links.

    Not suitable for access control: the generator is not cryptographically
    secure.
    """
    return _random_base36(_SHARE_TOKEN_LENGTH)


def create_snippet(
    code: CodeTriple,
    title: str = DEFAULT_TITLE,
    folder_id: str = DEFAULT_FOLDER_ID,
) -> Snippet:
    return Snippet(
        html=code.html,
        css=code.css,
        js=code.js,
        id=generate_id(),
        title=title,
        folder=folder_id,
        created_at=now_ms(),
        share_token=generate_share_token(),
    )


__all__ = ["create_snippet", "generate_id", "generate_share_token", "now_ms"]
