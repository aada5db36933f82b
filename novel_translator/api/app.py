"""FastAPI application for translation, extraction and history.

Run with:
    novel-translator serve
or:
    uvicorn --factory novel_translator.api.app:create_app
"""

import logging

from fastapi import FastAPI, HTTPException, status

from novel_translator.api.models import (
    CreateFolder,
    ExtractRequest,
    ExtractResponse,
    FolderTree,
    FullTranslateRequest,
    FullTranslateResponse,
    HistoryPage,
    ItemIds,
    MoveItems,
    RenameFolder,
    TranslateRequest,
    TranslateResponse,
)
from novel_translator.errors import (
    ChunkCountExceededError,
    ExtractError,
    InputEmptyError,
    NovelTranslatorError,
    TextTooLongError,
)
from novel_translator.models import HistoryFolder, HistoryItem, PipelineError
from novel_translator.orchestrator import TranslateFn, run_translation
from novel_translator.sources import fetch_article
from novel_translator.storage import HistoryDB
from novel_translator.translator import ChunkTranslator

logger = logging.getLogger(__name__)


def _error(status_code: int, e: Exception) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail=PipelineError.from_exception(e).model_dump(mode="json"),
    )


def _translate_status(e: NovelTranslatorError) -> int:
    if isinstance(e, (InputEmptyError, TextTooLongError)):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(e, ChunkCountExceededError):
        return 413
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def create_app(db: HistoryDB | None = None, translate: TranslateFn | None = None) -> FastAPI:
    """Create FastAPI app with optional database and translator injection.

    Args:
        db: History database. If None, opens the default SQLite file.
        translate: Async chunk translator. If None, a ChunkTranslator is
            created on first use.

    Returns:
        Configured FastAPI application.
    """
    if db is None:
        db = HistoryDB()

    app = FastAPI(title="Novel Translator API", version="0.1.0")
    app.state.db = db
    app.state.translate = translate

    def get_translate() -> TranslateFn:
        if app.state.translate is None:
            app.state.translate = ChunkTranslator()
        return app.state.translate

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    # --- Translation Routes ---

    @app.post("/translate", response_model=TranslateResponse)
    async def translate_chunk(body: TranslateRequest) -> TranslateResponse:
        """Translate one chunk (at most MAX_CHARS characters)."""
        try:
            translated = await get_translate()(body.text)
        except NovelTranslatorError as e:
            logger.warning(f"Translate request failed: {e}")
            raise _error(_translate_status(e), e) from e
        return TranslateResponse(translated=translated)

    @app.post("/translate/full", response_model=FullTranslateResponse)
    async def translate_full(body: FullTranslateRequest) -> FullTranslateResponse:
        """Translate a whole episode and apply formatting."""
        if not body.text.strip():
            raise _error(status.HTTP_400_BAD_REQUEST, InputEmptyError("No text to translate"))

        try:
            result = await run_translation(body.text, get_translate())
        except NovelTranslatorError as e:
            logger.warning(f"Full translation failed: {e}")
            raise _error(_translate_status(e), e) from e

        item_id = None
        if body.save:
            item = app.state.db.add_item(
                source_text=body.text.strip(),
                translated_text=result.text,
                series_title=body.series_title,
                episode_no=body.episode_no or result.episode_number or 1,
                subtitle=body.subtitle,
                url=body.url,
                folder_id=body.folder_id,
                show_header=body.show_header,
            )
            item_id = item.id

        return FullTranslateResponse(
            translated=result.text,
            chunk_count=result.chunk_count,
            episode_number=result.episode_number,
            item_id=item_id,
        )

    @app.post("/extract", response_model=ExtractResponse)
    def extract(body: ExtractRequest) -> ExtractResponse:
        """Fetch a URL and extract its title and body text."""
        try:
            article = fetch_article(body.url, cookie=body.cookie)
        except ExtractError as e:
            logger.warning(f"Extract failed ({e.code}): {e}")
            code = (
                status.HTTP_401_UNAUTHORIZED
                if e.code == ExtractError.PIXIV_COOKIE_REQUIRED
                else status.HTTP_400_BAD_REQUEST
            )
            raise _error(code, e) from e
        return ExtractResponse(title=article.title, text=article.text)

    # --- History Routes ---

    @app.get("/history", response_model=HistoryPage)
    def list_history(folder_id: str | None = None, page: int = 1) -> HistoryPage:
        """List saved translations, newest first."""
        total_pages = app.state.db.total_pages(folder_id)
        page = min(max(1, page), total_pages)
        return HistoryPage(
            items=app.state.db.list_items(folder_id=folder_id, page=page),
            page=page,
            total_pages=total_pages,
            breadcrumb=app.state.db.breadcrumb(folder_id),
        )

    @app.get("/history/{item_id}", response_model=HistoryItem)
    def get_history_item(item_id: str) -> HistoryItem:
        """Get a saved translation by ID."""
        item = app.state.db.get_item(item_id)
        if item is None:
            raise HTTPException(status_code=404, detail="History item not found")
        return item

    @app.post("/history/delete")
    def delete_history_items(body: ItemIds):
        """Delete saved translations."""
        return {"deleted": app.state.db.delete_items(body.ids)}

    @app.post("/history/move")
    def move_history_items(body: MoveItems):
        """Move saved translations into a folder (null = unfiled)."""
        try:
            moved = app.state.db.move_items(body.ids, body.folder_id)
        except KeyError as e:
            raise HTTPException(status_code=404, detail="Folder not found") from e
        return {"moved": moved}

    # --- Folder Routes ---

    @app.get("/folders", response_model=FolderTree)
    def list_folders() -> FolderTree:
        """Folder tree, depth-first."""
        return FolderTree(folders=app.state.db.folder_tree())

    @app.post("/folders", response_model=HistoryFolder, status_code=201)
    def create_folder(body: CreateFolder) -> HistoryFolder:
        """Create a folder."""
        try:
            return app.state.db.create_folder(body.name, parent_id=body.parent_id)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        except KeyError as e:
            raise HTTPException(status_code=404, detail="Parent folder not found") from e

    @app.patch("/folders/{folder_id}", response_model=HistoryFolder)
    def rename_folder(folder_id: str, body: RenameFolder) -> HistoryFolder:
        """Rename a folder."""
        try:
            return app.state.db.rename_folder(folder_id, body.name)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        except KeyError as e:
            raise HTTPException(status_code=404, detail="Folder not found") from e

    @app.delete("/folders/{folder_id}")
    def delete_folder(folder_id: str):
        """Delete a folder with its sub-folders and their items."""
        try:
            parent_id = app.state.db.delete_folder(folder_id)
        except KeyError as e:
            raise HTTPException(status_code=404, detail="Folder not found") from e
        return {"parent_id": parent_id}

    return app
