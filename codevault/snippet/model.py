from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

DEFAULT_FOLDER_ID = "default"
DEFAULT_FOLDER_NAME = "Default"
ERROR_FOLDER_ID = "error"
DEFAULT_TITLE = "Untitled Snippet"


class CodeTriple(BaseModel):
    """HTML, CSS and JavaScript fragments classified from pasted source."""

    html: str = ""
    css: str = ""
    js: str = ""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def is_blank(self) -> bool:
        return not (self.html.strip() or self.css.strip() or self.js.strip())


class Snippet(CodeTriple):
    """Titled, foldered code triple as persisted in the store."""

    id: str
    title: str = DEFAULT_TITLE
    folder: str = DEFAULT_FOLDER_ID
    created_at: int = Field(
        0,
        validation_alias=AliasChoices("createdAt", "created_at"),
        serialization_alias="createdAt",
    )
    share_token: str = Field(
        "",
        validation_alias=AliasChoices("shareToken", "shareLink", "share_token"),
        serialization_alias="shareToken",
    )

    def code(self) -> CodeTriple:
        return CodeTriple(html=self.html, css=self.css, js=self.js)

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True)


class Folder(BaseModel):
    """Named grouping of snippets."""

    id: str
    name: str
    created_at: int = Field(
        0,
        validation_alias=AliasChoices("createdAt", "created_at"),
        serialization_alias="createdAt",
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @property
    def is_error(self) -> bool:
        return self.id == ERROR_FOLDER_ID

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True)


def default_folder() -> Folder:
    return Folder(id=DEFAULT_FOLDER_ID, name=DEFAULT_FOLDER_NAME, created_at=0)


__all__ = [
    "CodeTriple",
    "DEFAULT_FOLDER_ID",
    "DEFAULT_FOLDER_NAME",
    "DEFAULT_TITLE",
    "ERROR_FOLDER_ID",
    "Folder",
    "Snippet",
    "default_folder",
]
