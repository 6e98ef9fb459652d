"""Board and style card schemas."""

from dataclasses import dataclass, field
from typing import List, Optional

from models.wardrobe_item import WardrobeItem


@dataclass(frozen=True)
class BoardLayout:
    """Visual slot assignment for a board: a centred main piece and two side columns."""

    main_piece: Optional[WardrobeItem]
    left: List[WardrobeItem] = field(default_factory=list)
    right: List[WardrobeItem] = field(default_factory=list)

    def item_ids(self) -> List[str]:
        ids = [self.main_piece.item_id] if self.main_piece else []
        return ids + [item.item_id for item in self.left] + [item.item_id for item in self.right]


@dataclass(frozen=True)
class CollageSlot:
    item_id: str
    role: str
    image_url: str


@dataclass(frozen=True)
class StyleCardCollage:
    left: List[CollageSlot] = field(default_factory=list)
    right: List[CollageSlot] = field(default_factory=list)


@dataclass
class StyleCard:
    """A saved board: its name, the item ids on it and the rendered image."""

    card_id: str
    user_id: str
    name: str
    item_ids: List[str]
    image_url: str
    created_at: float = 0.0


__all__ = ["BoardLayout", "CollageSlot", "StyleCardCollage", "StyleCard"]
