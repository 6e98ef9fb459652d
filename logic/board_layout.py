"""Deterministic board layout: main piece selection and side column balancing."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from models.board import BoardLayout
from models.taxonomy import ACCESSORY, BOTTOM, FOOTWEAR, TOP, classify_category
from models.wardrobe_item import WardrobeItem

logger = logging.getLogger(__name__)


def resolve_selection(item_ids: Iterable[str], wardrobe: Sequence[WardrobeItem]) -> List[WardrobeItem]:
    """Resolve a board selection against the wardrobe snapshot.

    Selection order is kept. Ids missing from the wardrobe are dropped and a
    repeated id only appears once.
    """

    by_id: Dict[str, WardrobeItem] = {item.item_id: item for item in wardrobe}
    resolved: List[WardrobeItem] = []
    seen = set()
    dropped = 0
    for item_id in item_ids:
        item = by_id.get(item_id)
        if item is None:
            dropped += 1
            continue
        if item_id in seen:
            continue
        seen.add(item_id)
        resolved.append(item)
    if dropped:
        logger.info("Dropped %s unresolvable board ids", dropped)
    return resolved


def select_main_piece(items: Sequence[WardrobeItem]) -> Optional[WardrobeItem]:
    """First top in list order, else the first item, else nothing."""

    for item in items:
        if classify_category(item.category) == TOP:
            return item
    return items[0] if items else None


def _shorter(left: List[WardrobeItem], right: List[WardrobeItem]) -> List[WardrobeItem]:
    return left if len(left) <= len(right) else right


def assign_layout(items: Sequence[WardrobeItem]) -> BoardLayout:
    """Assign board items to the main piece and the left/right columns.

    Side items are balanced by role: the first bottom goes left, the first
    footwear goes right, accessories alternate starting on the left, and any
    remaining piece lands in whichever column is shorter (ties go left).
    """

    main_piece = select_main_piece(items)
    if main_piece is None:
        return BoardLayout(main_piece=None, left=[], right=[])

    main_index = items.index(main_piece)
    side_items = [item for index, item in enumerate(items) if index != main_index]

    left: List[WardrobeItem] = []
    right: List[WardrobeItem] = []
    bottom_piece: Optional[WardrobeItem] = None
    footwear_piece: Optional[WardrobeItem] = None
    accessories: List[WardrobeItem] = []
    leftovers: List[WardrobeItem] = []

    for item in side_items:
        role = classify_category(item.category)
        if role == BOTTOM and bottom_piece is None:
            bottom_piece = item
        elif role == FOOTWEAR and footwear_piece is None:
            footwear_piece = item
        elif role == ACCESSORY:
            accessories.append(item)
        else:
            leftovers.append(item)

    if bottom_piece is not None:
        left.append(bottom_piece)
    if footwear_piece is not None:
        right.append(footwear_piece)
    for index, accessory in enumerate(accessories):
        (left if index % 2 == 0 else right).append(accessory)
    for item in leftovers:
        _shorter(left, right).append(item)

    logger.debug(
        "Laid out board main=%s left=%s right=%s",
        main_piece.item_id,
        [item.item_id for item in left],
        [item.item_id for item in right],
    )
    return BoardLayout(main_piece=main_piece, left=left, right=right)


__all__ = ["resolve_selection", "select_main_piece", "assign_layout"]
