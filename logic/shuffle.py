"""Shuffle-with-locking for style boards."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import AbstractSet, Dict, FrozenSet, List, Optional, Protocol, Sequence, TypeVar

from logic.board_layout import assign_layout
from models.board import BoardLayout
from models.taxonomy import classify_category
from models.wardrobe_item import WardrobeItem

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything that can pick uniformly from a sequence; ``random.Random`` qualifies."""

    def choice(self, seq: Sequence[T]) -> T:
        ...


def _alternatives_by_role(wardrobe: Sequence[WardrobeItem]) -> Dict[str, List[WardrobeItem]]:
    grouped: Dict[str, List[WardrobeItem]] = {}
    for item in wardrobe:
        grouped.setdefault(classify_category(item.category), []).append(item)
    return grouped


def shuffle_board(
    board: Sequence[WardrobeItem],
    locked_ids: AbstractSet[str],
    wardrobe: Sequence[WardrobeItem],
    rng: Optional[RandomSource] = None,
) -> List[WardrobeItem]:
    """Replace every unlocked board item with a random same-role alternative.

    Positions are stable: locked items stay put, and an unlocked item with no
    other wardrobe item of its role is kept as is. Two positions may end up
    with the same replacement.
    """

    rng = rng or random.Random()
    by_role = _alternatives_by_role(wardrobe)
    shuffled: List[WardrobeItem] = []
    replaced = 0
    for current in board:
        if current.item_id in locked_ids:
            shuffled.append(current)
            continue
        role = classify_category(current.category)
        alternatives = [item for item in by_role.get(role, []) if item.item_id != current.item_id]
        if not alternatives:
            shuffled.append(current)
            continue
        shuffled.append(rng.choice(alternatives))
        replaced += 1
    logger.info("Shuffled board of %s items: %s replaced, %s locked", len(board), replaced, len(locked_ids))
    return shuffled


def toggle_lock(locked_ids: AbstractSet[str], item_id: str) -> FrozenSet[str]:
    """Return the lock set with ``item_id`` flipped."""

    if item_id in locked_ids:
        return frozenset(locked_ids - {item_id})
    return frozenset(locked_ids | {item_id})


@dataclass
class ShuffleState:
    """The items on an open board and the ids the user has pinned."""

    items: List[WardrobeItem] = field(default_factory=list)
    locked_ids: FrozenSet[str] = field(default_factory=frozenset)

    def item_ids(self) -> List[str]:
        return [item.item_id for item in self.items]

    def is_locked(self, item_id: str) -> bool:
        return item_id in self.locked_ids

    def toggle_lock(self, item_id: str) -> bool:
        """Flip the lock on ``item_id`` and report whether it is now locked."""

        self.locked_ids = toggle_lock(self.locked_ids, item_id)
        return item_id in self.locked_ids

    def shuffle(self, wardrobe: Sequence[WardrobeItem], rng: Optional[RandomSource] = None) -> List[WardrobeItem]:
        self.items = shuffle_board(self.items, self.locked_ids, wardrobe, rng)
        return self.items

    def layout(self) -> BoardLayout:
        return assign_layout(self.items)


__all__ = ["RandomSource", "shuffle_board", "toggle_lock", "ShuffleState"]
