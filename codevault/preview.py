"""Standalone preview documents for a code triple.

The document is meant to run in an isolated browsing context. Served over HTTP
it goes out with :data:`PREVIEW_CSP`, which puts it in a unique opaque origin
with scripts enabled: no cookies, no storage, no reach into the parent frame.
Embedders use :data:`IFRAME_SANDBOX` for the same effect.
"""

from __future__ import annotations

from .snippet.model import CodeTriple

IFRAME_SANDBOX = "allow-scripts"
PREVIEW_CSP = f"sandbox {IFRAME_SANDBOX}"

_LIGHT = ("#ffffff", "#000000")
_DARK = ("#1a1a1a", "#ffffff")

_FONT_STACK = (
    "-apple-system, BlinkMacSystemFont, 'Segoe UI', 'Roboto', 'Oxygen', "
    "'Ubuntu', 'Cantarell', 'Fira Sans', 'Droid Sans', 'Helvetica Neue', "
    "sans-serif"
)

_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Live Preview</title>
    <style>
{css}
      body {{
        margin: 0;
        padding: 20px;
        font-family: {font_stack};
        -webkit-font-smoothing: antialiased;
        -moz-osx-font-smoothing: grayscale;
        background-color: {background};
        color: {foreground};
      }}
    </style>
  </head>
  <body>
{html}
    <script>
{js}
    </script>
  </body>
</html>
"""


def build_preview_document(code: CodeTriple, *, dark: bool = False) -> str:
    background, foreground = _DARK if dark else _LIGHT
    return _TEMPLATE.format(
        css=code.css,
        html=code.html,
        js=code.js,
        font_stack=_FONT_STACK,
        background=background,
        foreground=foreground,
    )


__all__ = ["IFRAME_SANDBOX", "PREVIEW_CSP", "build_preview_document"]
