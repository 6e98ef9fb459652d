"""Instrumented wrappers around wardrobe storage."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

from models.wardrobe_item import from_raw_metadata
from tools.observability import instrument_call
from tools.wardrobe_store import SQLiteWardrobeStore, WardrobeStore


def _default_store() -> SQLiteWardrobeStore:
    return SQLiteWardrobeStore()


class WardrobeTools:
    """Thin wrapper exposing WardrobeStore operations as plain-dict calls."""

    def __init__(self, store: Optional[WardrobeStore] = None) -> None:
        self.store = store or _default_store()

    @instrument_call("add_wardrobe_item")
    def add_wardrobe_item(self, user_id: str, item_data: Dict[str, Any]) -> Dict[str, Any]:
        item = from_raw_metadata({**item_data, "user_id": user_id})
        stored = self.store.create_item(item)
        return asdict(stored)

    @instrument_call("get_wardrobe_item")
    def get_wardrobe_item(self, user_id: str, item_id: str) -> Optional[Dict[str, Any]]:
        item = self.store.get_item(user_id, item_id)
        return asdict(item) if item else None

    @instrument_call("list_wardrobe_items")
    def list_wardrobe_items(self, user_id: str) -> List[Dict[str, Any]]:
        return [asdict(item) for item in self.store.list_items_for_user(user_id)]

    @instrument_call("search_wardrobe_items")
    def search_wardrobe_items(self, user_id: str, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        return [asdict(item) for item in self.store.search_items(user_id, filters or {})]

    @instrument_call("remove_wardrobe_item")
    def remove_wardrobe_item(self, user_id: str, item_id: str) -> bool:
        return self.store.delete_item(user_id, item_id)


__all__ = ["WardrobeTools"]
