"""Request and response models for the HTTP API."""

from pydantic import BaseModel, Field

from novel_translator.models import FolderNode, HistoryItem


class TranslateRequest(BaseModel):
    """A single chunk to translate."""

    text: str = ""


class TranslateResponse(BaseModel):
    translated: str


class FullTranslateRequest(BaseModel):
    """A whole episode to chunk, translate, format and optionally save."""

    text: str = ""
    save: bool = False
    series_title: str = ""
    episode_no: int | None = None
    subtitle: str = ""
    url: str | None = None
    folder_id: str | None = None
    show_header: bool = False


class FullTranslateResponse(BaseModel):
    translated: str
    chunk_count: int
    episode_number: int | None = None
    item_id: str | None = None


class ExtractRequest(BaseModel):
    url: str = ""
    cookie: str | None = None


class ExtractResponse(BaseModel):
    title: str
    text: str


class HistoryPage(BaseModel):
    items: list[HistoryItem]
    page: int
    total_pages: int
    breadcrumb: list[str]


class ItemIds(BaseModel):
    ids: list[str] = Field(default_factory=list)


class MoveItems(ItemIds):
    folder_id: str | None = None


class CreateFolder(BaseModel):
    name: str
    parent_id: str | None = None


class RenameFolder(BaseModel):
    name: str


class FolderTree(BaseModel):
    folders: list[FolderNode]
