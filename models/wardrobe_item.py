"""Wardrobe item data model and helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from models.taxonomy import classify_category


@dataclass(frozen=True)
class WardrobeItem:
    """Represents an item in the user's wardrobe.

    Items are owned by the wardrobe store; the composer only reads them, so
    instances are immutable.
    """

    item_id: str
    user_id: str
    name: str
    category: str
    image_url: str
    masked_url: Optional[str] = None

    @property
    def role(self) -> str:
        return classify_category(self.category)

    @property
    def display_image(self) -> str:
        """Background-removed image when available, else the raw photo."""

        return self.masked_url or self.image_url


def _first_present(metadata: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = metadata.get(key)
        if value not in (None, ""):
            return value
    return None


def from_raw_metadata(metadata: Dict[str, Any]) -> WardrobeItem:
    """Factory to build a :class:`WardrobeItem` from a loose backend document.

    Backend documents carry their id as ``$id``; both that and ``item_id`` are
    accepted, as are ``image_ref`` and ``image_url`` for the photo.
    """

    item_id = _first_present(metadata, "item_id", "$id")
    user_id = _first_present(metadata, "user_id")
    missing = [name for name, value in (("item_id", item_id), ("user_id", user_id)) if value is None]
    if missing:
        raise ValueError(f"Missing required fields for WardrobeItem: {missing}")

    masked_url = _first_present(metadata, "masked_url")
    return WardrobeItem(
        item_id=str(item_id),
        user_id=str(user_id),
        name=str(metadata.get("name") or ""),
        category=str(metadata.get("category") or ""),
        image_url=str(_first_present(metadata, "image_url", "image_ref") or ""),
        masked_url=str(masked_url) if masked_url is not None else None,
    )


__all__ = ["WardrobeItem", "from_raw_metadata"]
