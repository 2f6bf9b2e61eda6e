from __future__ import annotations

from urllib.parse import parse_qs, quote, urlparse

SHARE_PARAM = "share"


def build_share_link(base_url: str, token: str) -> str:
    """Append ``share=<token>`` to ``base_url``."""
    separator = "&" if "?" in base_url else "?"
    return f"{base_url}{separator}{SHARE_PARAM}={quote(token, safe='')}"


def extract_share_token(link: str) -> str | None:
    values = parse_qs(urlparse(link).query).get(SHARE_PARAM)
    if not values or not values[0]:
        return None
    return values[0]


__all__ = ["SHARE_PARAM", "build_share_link", "extract_share_token"]
