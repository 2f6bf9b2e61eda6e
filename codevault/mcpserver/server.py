"""FastMCP server exposing snippet helpers as MCP tools."""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import HTTPException
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from ..api.model import SeparateRequest, SnippetCreateRequest
from ..api.service import (
    ApiSettings,
    create_snippet_service,
    list_snippets_service,
    separate_service,
)
from ..snippet import DEFAULT_FOLDER_ID, DEFAULT_TITLE
from ..storage import SnippetStore, create_backend

logger = logging.getLogger("codevault")


class ServiceContext:
    """Lazy dependency container for MCP tool handlers."""

    def __init__(
        self,
        settings: ApiSettings | None = None,
        store: SnippetStore | None = None,
    ) -> None:
        self._settings = settings
        self._store = store

    @property
    def settings(self) -> ApiSettings:
        if self._settings is None:
            self._settings = ApiSettings.from_env()
        return self._settings

    def store(self) -> SnippetStore:
        if self._store is None:
            self._store = SnippetStore(create_backend(self.settings.store_url))
        return self._store


def _handle_http_exception(exc: HTTPException, *, default_message: str) -> ToolError:
    detail = exc.detail if isinstance(exc.detail, str) else None
    message = detail or default_message
    return ToolError(message)


def create_server(services: ServiceContext | None = None) -> FastMCP:
    """Create a FastMCP server wired to snippet services."""

    services = services or ServiceContext()
    server = FastMCP("CodeVault MCP Server")

    @server.tool(
        name="separate_code",
        description=(
            "Split pasted front-end source into html, css and js fields. Style and"
            " script blocks are lifted out of the markup; bare lines that look like"
            " CSS rules or JS statements are copied into css/js as well."
        ),
        tags={"snippets", "separate"},
    )
    def separate_code(code: str) -> Dict[str, Any]:
        return separate_service(SeparateRequest(code=code)).model_dump()

    @server.tool(
        name="search_snippets",
        description=(
            "Search saved snippets by title or folder id (case-insensitive substring)."
            " `limit` defaults to 10."
        ),
        tags={"snippets", "search"},
    )
    def search_snippets(query: str, limit: int = 10) -> Dict[str, Any]:
        """Query stored snippets and return structured search results."""
        if not query or not query.strip():
            raise ToolError("Query text is required.")
        if limit <= 0:
            raise ToolError("Limit must be a positive integer.")

        response = list_snippets_service(
            services.store(),
            services.settings,
            query=query.strip(),
            limit=limit,
        )
        return response.model_dump(by_alias=True)

    @server.tool(
        name="save_snippet",
        description=(
            "Separate mixed source text and save it as a snippet. `folder` must be an"
            " existing folder id and defaults to 'default'."
        ),
        tags={"snippets", "save"},
    )
    def save_snippet(
        code: str,
        title: str = DEFAULT_TITLE,
        folder: str = DEFAULT_FOLDER_ID,
    ) -> Dict[str, Any]:
        triple = separate_service(SeparateRequest(code=code))
        payload = SnippetCreateRequest(**triple.model_dump(), title=title, folder=folder)
        try:
            response = create_snippet_service(payload, services.store(), services.settings)
        except HTTPException as exc:
            raise _handle_http_exception(exc, default_message="Saving snippet failed")
        return response.model_dump(by_alias=True)

    return server


mcp = create_server()

__all__ = ["ServiceContext", "create_server", "mcp"]
