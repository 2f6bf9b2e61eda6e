"""Lexical splitting of pasted front-end source into HTML, CSS and JS."""

from __future__ import annotations

import re

from .snippet.model import CodeTriple

STYLE_BLOCK = re.compile(r"<style[^>]*>(.*?)</style>", re.IGNORECASE | re.DOTALL)
SCRIPT_BLOCK = re.compile(r"<script[^>]*>(.*?)</script>", re.IGNORECASE | re.DOTALL)

CSS_LINE_PREFIXES = (".", "#", "@")
JS_LINE_PREFIXES = (
    "function ",
    "const ",
    "let ",
    "var ",
    "class ",
    "if ",
    "for ",
)


def separate(text: str) -> CodeTriple:
    """Split ``text`` into a :class:`CodeTriple`.

    ``<style>`` and ``<script>`` blocks are lifted out of the markup. Bare lines
    that look like CSS rules or JS statements are copied into the matching
    field as well, but they are left in the HTML output too, so a line can show
    up twice. Malformed markup is fine; nothing here raises.
    """
    if not text:
        return CodeTriple()

    css: list[str] = [match.strip() for match in STYLE_BLOCK.findall(text)]
    remaining = STYLE_BLOCK.sub("", text)

    js: list[str] = [match.strip() for match in SCRIPT_BLOCK.findall(remaining)]
    remaining = SCRIPT_BLOCK.sub("", remaining)

    lines = [line.strip() for line in text.split("\n")]
    css.extend(line for line in lines if _is_css_line(line))
    js.extend(line for line in lines if _is_js_line(line))

    return CodeTriple(
        html=remaining.strip(),
        css="\n".join(css).strip(),
        js="\n".join(js).strip(),
    )


def _is_css_line(line: str) -> bool:
    return line.startswith(CSS_LINE_PREFIXES) and not line.startswith("<")


def _is_js_line(line: str) -> bool:
    return line.startswith(JS_LINE_PREFIXES) and not line.startswith("<")


__all__ = ["separate"]
