"""Wardrobe storage abstractions with SQLite and in-memory implementations."""
from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Dict, List, Optional

from models.taxonomy import classify_category, normalise_role
from models.wardrobe_item import WardrobeItem


class WardrobeStore:
    """Persistence interface for wardrobe items."""

    def create_item(self, item: WardrobeItem) -> WardrobeItem:
        raise NotImplementedError

    def get_item(self, user_id: str, item_id: str) -> Optional[WardrobeItem]:
        raise NotImplementedError

    def list_items_for_user(self, user_id: str) -> List[WardrobeItem]:
        raise NotImplementedError

    def delete_item(self, user_id: str, item_id: str) -> bool:
        raise NotImplementedError

    def search_items(self, user_id: str, filters: Dict[str, object]) -> List[WardrobeItem]:
        """Filter a user's items by ``role`` and/or a ``category`` substring.

        An unknown role matches nothing.
        """

        items = self.list_items_for_user(user_id)
        filters = filters or {}
        role = None
        if filters.get("role"):
            role = normalise_role(str(filters["role"]))
            if role is None:
                return []
        category_text = str(filters.get("category") or "").strip().lower()

        def matches(item: WardrobeItem) -> bool:
            if role and classify_category(item.category) != role:
                return False
            if category_text and category_text not in item.category.lower():
                return False
            return True

        return [item for item in items if matches(item)]


class InMemoryWardrobeStore(WardrobeStore):
    """Dictionary-backed store for tests and local demos."""

    def __init__(self, items: Optional[List[WardrobeItem]] = None) -> None:
        self._items: Dict[tuple, WardrobeItem] = {}
        for item in items or []:
            self.create_item(item)

    def create_item(self, item: WardrobeItem) -> WardrobeItem:
        self._items[(item.user_id, item.item_id)] = item
        return item

    def get_item(self, user_id: str, item_id: str) -> Optional[WardrobeItem]:
        return self._items.get((user_id, item_id))

    def list_items_for_user(self, user_id: str) -> List[WardrobeItem]:
        return sorted(
            (item for (owner, _), item in self._items.items() if owner == user_id),
            key=lambda item: item.item_id,
        )

    def delete_item(self, user_id: str, item_id: str) -> bool:
        return self._items.pop((user_id, item_id), None) is not None


class SQLiteWardrobeStore(WardrobeStore):
    """Local SQLite-backed store for wardrobe items."""

    def __init__(self, database_path: str | Path = "data/wardrobe.db") -> None:
        self.database_path = Path(database_path)
        if self.database_path.parent and not self.database_path.parent.exists():
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_tables()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_tables(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS wardrobe_items (
                    user_id TEXT NOT NULL,
                    item_id TEXT NOT NULL,
                    name TEXT,
                    category TEXT,
                    image_url TEXT,
                    masked_url TEXT,
                    PRIMARY KEY (user_id, item_id)
                );
                """
            )

    def create_item(self, item: WardrobeItem) -> WardrobeItem:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO wardrobe_items (
                    user_id, item_id, name, category, image_url, masked_url
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    item.user_id,
                    item.item_id,
                    item.name,
                    item.category,
                    item.image_url,
                    item.masked_url,
                ),
            )
        return item

    @staticmethod
    def _row_to_item(row: sqlite3.Row) -> WardrobeItem:
        return WardrobeItem(
            item_id=row["item_id"],
            user_id=row["user_id"],
            name=row["name"] or "",
            category=row["category"] or "",
            image_url=row["image_url"] or "",
            masked_url=row["masked_url"],
        )

    def get_item(self, user_id: str, item_id: str) -> Optional[WardrobeItem]:
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM wardrobe_items WHERE user_id = ? AND item_id = ?",
                (user_id, item_id),
            )
            row = cursor.fetchone()
            return self._row_to_item(row) if row else None

    def list_items_for_user(self, user_id: str) -> List[WardrobeItem]:
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM wardrobe_items WHERE user_id = ? ORDER BY item_id",
                (user_id,),
            )
            return [self._row_to_item(row) for row in cursor.fetchall()]

    def delete_item(self, user_id: str, item_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute(
                "DELETE FROM wardrobe_items WHERE user_id = ? AND item_id = ?",
                (user_id, item_id),
            )
            return cursor.rowcount > 0


__all__ = ["WardrobeStore", "InMemoryWardrobeStore", "SQLiteWardrobeStore"]
