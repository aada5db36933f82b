"""SQLite storage for translation history and folders.

History items can be filed into nested folders. Deleting a folder removes
its sub-folders and every item filed in any of them.
"""

import logging
import math
import sqlite3
import uuid
from datetime import datetime
from pathlib import Path

from novel_translator.config import (
    DATABASE_PATH,
    DEFAULT_SERIES_TITLE,
    HISTORY_PAGE_SIZE,
    ROOT_FOLDER_LABEL,
)
from novel_translator.models import FolderNode, HistoryFolder, HistoryItem

logger = logging.getLogger(__name__)


def generate_id(prefix: str) -> str:
    """Generate a prefixed UUID."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


class HistoryDB:
    """SQLite wrapper for saved translations.

    Example:
        db = HistoryDB(":memory:")
        item = db.add_item(source_text="...", translated_text="...", episode_no=3)
    """

    def __init__(self, db_path: str | Path | None = None):
        """Open (and create if needed) the history database.

        Args:
            db_path: Path to SQLite file, or ":memory:" for in-memory.
                     Defaults to DATABASE_PATH (outputs/history.db)
        """
        if db_path is None:
            db_path = DATABASE_PATH
        if str(db_path) != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        self.db_path = str(db_path)
        self.conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self.init_schema()

    def init_schema(self) -> None:
        """Create tables if they don't exist."""
        self.conn.executescript("""
            CREATE TABLE IF NOT EXISTS folders (
                id TEXT PRIMARY KEY,
                created_at TEXT NOT NULL,
                name TEXT NOT NULL,
                parent_id TEXT
            );

            CREATE TABLE IF NOT EXISTS history_items (
                id TEXT PRIMARY KEY,
                created_at TEXT NOT NULL,
                series_title TEXT NOT NULL,
                episode_no INTEGER NOT NULL,
                subtitle TEXT NOT NULL DEFAULT '',
                source_text TEXT NOT NULL,
                translated_text TEXT NOT NULL,
                url TEXT,
                folder_id TEXT,
                show_header INTEGER NOT NULL DEFAULT 0
            );
            CREATE INDEX IF NOT EXISTS idx_history_folder
                ON history_items(folder_id, created_at);
        """)
        self.conn.commit()

    def close(self) -> None:
        """Close database connection."""
        self.conn.close()

    # =========================================================================
    # History items
    # =========================================================================

    @staticmethod
    def _row_to_item(row: sqlite3.Row) -> HistoryItem:
        return HistoryItem(
            id=row["id"],
            created_at=datetime.fromisoformat(row["created_at"]),
            series_title=row["series_title"],
            episode_no=row["episode_no"],
            subtitle=row["subtitle"],
            source_text=row["source_text"],
            translated_text=row["translated_text"],
            url=row["url"],
            folder_id=row["folder_id"],
            show_header=bool(row["show_header"]),
        )

    def add_item(
        self,
        source_text: str,
        translated_text: str,
        series_title: str = "",
        episode_no: float = 1,
        subtitle: str = "",
        url: str | None = None,
        folder_id: str | None = None,
        show_header: bool = False,
    ) -> HistoryItem:
        """Save a translation.

        Blank series titles fall back to DEFAULT_SERIES_TITLE and the
        episode number is floored to an integer of at least 1.
        """
        item = HistoryItem(
            id=generate_id("item"),
            created_at=datetime.now(),
            series_title=series_title.strip() or DEFAULT_SERIES_TITLE,
            episode_no=max(1, math.floor(episode_no or 1)),
            subtitle=subtitle.strip(),
            source_text=source_text,
            translated_text=translated_text,
            url=(url or "").strip() or None,
            folder_id=folder_id,
            show_header=show_header,
        )

        self.conn.execute(
            """INSERT INTO history_items
               (id, created_at, series_title, episode_no, subtitle, source_text,
                translated_text, url, folder_id, show_header)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                item.id,
                item.created_at.isoformat(),
                item.series_title,
                item.episode_no,
                item.subtitle,
                item.source_text,
                item.translated_text,
                item.url,
                item.folder_id,
                int(item.show_header),
            ),
        )
        self.conn.commit()

        logger.debug(f"Saved history item {item.id} ({item.series_title} {item.episode_no})")
        return item

    def get_item(self, item_id: str) -> HistoryItem | None:
        """Get a history item by ID."""
        row = self.conn.execute(
            "SELECT * FROM history_items WHERE id = ?", (item_id,)
        ).fetchone()
        return self._row_to_item(row) if row else None

    @staticmethod
    def _folder_filter(folder_id: str | None) -> tuple[str, tuple]:
        if folder_id is None:
            return "", ()
        return "WHERE folder_id = ?", (folder_id,)

    def _all_items(self) -> list[HistoryItem]:
        rows = self.conn.execute(
            "SELECT * FROM history_items ORDER BY created_at DESC, rowid DESC"
        ).fetchall()
        return [self._row_to_item(row) for row in rows]

    def count_items(self, folder_id: str | None = None) -> int:
        """Count items, all of them or those filed directly in a folder."""
        where, params = self._folder_filter(folder_id)
        row = self.conn.execute(
            f"SELECT COUNT(*) FROM history_items {where}", params
        ).fetchone()
        return row[0]

    def total_pages(
        self, folder_id: str | None = None, page_size: int = HISTORY_PAGE_SIZE
    ) -> int:
        return max(1, math.ceil(self.count_items(folder_id) / page_size))

    def list_items(
        self,
        folder_id: str | None = None,
        page: int = 1,
        page_size: int = HISTORY_PAGE_SIZE,
    ) -> list[HistoryItem]:
        """List items newest first, one page at a time.

        Args:
            folder_id: Only items filed directly in this folder (None = all)
            page: 1-based page number, clamped to the valid range
            page_size: Items per page

        Returns:
            Items on the requested page
        """
        page = min(max(1, page), self.total_pages(folder_id, page_size))
        where, params = self._folder_filter(folder_id)
        rows = self.conn.execute(
            f"""SELECT * FROM history_items {where}
                ORDER BY created_at DESC, rowid DESC
                LIMIT ? OFFSET ?""",
            (*params, page_size, (page - 1) * page_size),
        ).fetchall()
        return [self._row_to_item(row) for row in rows]

    def neighbors(self, item_id: str) -> tuple[HistoryItem | None, HistoryItem | None]:
        """Items around one in newest-first order.

        Returns:
            (previous, next) where previous is the next older item and next
            is the next newer item; either may be None
        """
        items = self._all_items()
        ids = [item.id for item in items]
        if item_id not in ids:
            return None, None
        index = ids.index(item_id)
        older = items[index + 1] if index + 1 < len(items) else None
        newer = items[index - 1] if index > 0 else None
        return older, newer

    def delete_items(self, item_ids: list[str]) -> int:
        """Delete items by ID.

        Returns:
            Number of items deleted
        """
        if not item_ids:
            return 0
        placeholders = ", ".join("?" for _ in item_ids)
        cursor = self.conn.execute(
            f"DELETE FROM history_items WHERE id IN ({placeholders})", tuple(item_ids)
        )
        self.conn.commit()
        return cursor.rowcount

    def move_items(self, item_ids: list[str], folder_id: str | None) -> int:
        """File items into a folder (None = unfiled).

        Returns:
            Number of items moved

        Raises:
            KeyError: If the target folder doesn't exist
        """
        if folder_id is not None and self.get_folder(folder_id) is None:
            raise KeyError(f"Folder not found: {folder_id}")
        if not item_ids:
            return 0
        placeholders = ", ".join("?" for _ in item_ids)
        cursor = self.conn.execute(
            f"UPDATE history_items SET folder_id = ? WHERE id IN ({placeholders})",
            (folder_id, *item_ids),
        )
        self.conn.commit()
        return cursor.rowcount

    # =========================================================================
    # Folders
    # =========================================================================

    @staticmethod
    def _row_to_folder(row: sqlite3.Row) -> HistoryFolder:
        return HistoryFolder(
            id=row["id"],
            created_at=datetime.fromisoformat(row["created_at"]),
            name=row["name"],
            parent_id=row["parent_id"],
        )

    def list_folders(self) -> list[HistoryFolder]:
        rows = self.conn.execute(
            "SELECT * FROM folders ORDER BY created_at, rowid"
        ).fetchall()
        return [self._row_to_folder(row) for row in rows]

    def get_folder(self, folder_id: str) -> HistoryFolder | None:
        row = self.conn.execute(
            "SELECT * FROM folders WHERE id = ?", (folder_id,)
        ).fetchone()
        return self._row_to_folder(row) if row else None

    def create_folder(self, name: str, parent_id: str | None = None) -> HistoryFolder:
        """Create a folder, nested under parent_id when given.

        Raises:
            ValueError: If the name is blank
            KeyError: If the parent folder doesn't exist
        """
        name = name.strip()
        if not name:
            raise ValueError("Folder name cannot be empty")
        if parent_id is not None and self.get_folder(parent_id) is None:
            raise KeyError(f"Folder not found: {parent_id}")

        folder = HistoryFolder(
            id=generate_id("folder"),
            created_at=datetime.now(),
            name=name,
            parent_id=parent_id,
        )
        self.conn.execute(
            "INSERT INTO folders (id, created_at, name, parent_id) VALUES (?, ?, ?, ?)",
            (folder.id, folder.created_at.isoformat(), folder.name, folder.parent_id),
        )
        self.conn.commit()
        return folder

    def rename_folder(self, folder_id: str, name: str) -> HistoryFolder:
        """Rename a folder.

        Raises:
            ValueError: If the name is blank
            KeyError: If the folder doesn't exist
        """
        name = name.strip()
        if not name:
            raise ValueError("Folder name cannot be empty")
        folder = self.get_folder(folder_id)
        if folder is None:
            raise KeyError(f"Folder not found: {folder_id}")

        self.conn.execute("UPDATE folders SET name = ? WHERE id = ?", (name, folder_id))
        self.conn.commit()
        return folder.model_copy(update={"name": name})

    def descendant_ids(self, folder_id: str) -> list[str]:
        """The folder's ID followed by the IDs of all folders below it."""
        folders = self.list_folders()
        result = [folder_id]
        stack = [folder_id]
        while stack:
            current = stack.pop()
            for child in folders:
                if child.parent_id == current:
                    result.append(child.id)
                    stack.append(child.id)
        return result

    def delete_folder(self, folder_id: str) -> str | None:
        """Delete a folder, its sub-folders and all items filed in them.

        Returns:
            The deleted folder's parent ID (where a browser should go next)

        Raises:
            KeyError: If the folder doesn't exist
        """
        folder = self.get_folder(folder_id)
        if folder is None:
            raise KeyError(f"Folder not found: {folder_id}")

        ids = self.descendant_ids(folder_id)
        placeholders = ", ".join("?" for _ in ids)
        self.conn.execute(
            f"DELETE FROM history_items WHERE folder_id IN ({placeholders})", tuple(ids)
        )
        self.conn.execute(f"DELETE FROM folders WHERE id IN ({placeholders})", tuple(ids))
        self.conn.commit()

        logger.info(f"🗑️ Deleted folder {folder.name!r} and {len(ids) - 1} sub-folder(s)")
        return folder.parent_id

    def folder_tree(self, parent_id: str | None = None) -> list[FolderNode]:
        """Folders depth-first, siblings sorted by name, with their depth."""
        folders = self.list_folders()

        def walk(pid: str | None, depth: int) -> list[FolderNode]:
            children = sorted(
                (f for f in folders if f.parent_id == pid), key=lambda f: f.name
            )
            nodes = []
            for child in children:
                nodes.append(FolderNode(folder=child, depth=depth))
                nodes.extend(walk(child.id, depth + 1))
            return nodes

        return walk(parent_id, 0)

    def breadcrumb(self, folder_id: str | None) -> list[str]:
        """Folder names from the root label down to folder_id."""
        path: list[str] = []
        current = folder_id
        while current:
            folder = self.get_folder(current)
            if folder is None:
                break
            path.insert(0, folder.name)
            current = folder.parent_id
        return [ROOT_FOLDER_LABEL, *path]
