"""Persistence for saved style cards."""
from __future__ import annotations

import json
import sqlite3
import time
from pathlib import Path
from typing import List, Optional
from uuid import uuid4

from logic.validation import SaveStyleCardRequest
from models.board import StyleCard
from tools.observability import instrument_call


class StyleCardStore:
    """Persistence interface for style cards."""

    def save_card(self, request: SaveStyleCardRequest) -> StyleCard:
        raise NotImplementedError

    def get_card(self, user_id: str, card_id: str) -> Optional[StyleCard]:
        raise NotImplementedError

    def list_cards_for_user(self, user_id: str) -> List[StyleCard]:
        raise NotImplementedError

    def delete_card(self, user_id: str, card_id: str) -> bool:
        raise NotImplementedError


class SQLiteStyleCardStore(StyleCardStore):
    """SQLite-backed store for saved boards."""

    def __init__(self, database_path: str | Path = "data/style_cards.db") -> None:
        self.database_path = Path(database_path)
        self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS style_cards (
                    card_id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    name TEXT NOT NULL,
                    item_ids TEXT NOT NULL,
                    image_url TEXT NOT NULL,
                    created_at REAL
                );
                """
            )

    def save_card(self, request: SaveStyleCardRequest) -> StyleCard:
        card = StyleCard(
            card_id=str(uuid4()),
            user_id=request.user_id,
            name=request.name,
            item_ids=list(request.item_ids),
            image_url=request.image_url,
            created_at=time.time(),
        )
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO style_cards(card_id, user_id, name, item_ids, image_url, created_at) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (card.card_id, card.user_id, card.name, json.dumps(card.item_ids), card.image_url, card.created_at),
            )
        return card

    @staticmethod
    def _row_to_card(row: sqlite3.Row) -> StyleCard:
        return StyleCard(
            card_id=row["card_id"],
            user_id=row["user_id"],
            name=row["name"],
            item_ids=json.loads(row["item_ids"]) if row["item_ids"] else [],
            image_url=row["image_url"],
            created_at=row["created_at"] or 0.0,
        )

    def get_card(self, user_id: str, card_id: str) -> Optional[StyleCard]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM style_cards WHERE user_id = ? AND card_id = ?", (user_id, card_id)
            ).fetchone()
        return self._row_to_card(row) if row else None

    def list_cards_for_user(self, user_id: str) -> List[StyleCard]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM style_cards WHERE user_id = ? ORDER BY created_at DESC, card_id",
                (user_id,),
            ).fetchall()
        return [self._row_to_card(row) for row in rows]

    def delete_card(self, user_id: str, card_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute(
                "DELETE FROM style_cards WHERE user_id = ? AND card_id = ?", (user_id, card_id)
            )
            return cursor.rowcount > 0


@instrument_call("save_style_card", input_model=SaveStyleCardRequest)
def save_style_card(
    store: StyleCardStore, *, user_id: str, name: str, item_ids: List[str], image_url: str
) -> StyleCard:
    """Validate a save payload and persist it.

    Raises :class:`pydantic.ValidationError` for a blank name, an empty id
    list or a missing image reference.
    """

    request = SaveStyleCardRequest(user_id=user_id, name=name, item_ids=item_ids, image_url=image_url)
    return store.save_card(request)


__all__ = ["StyleCardStore", "SQLiteStyleCardStore", "save_style_card"]
