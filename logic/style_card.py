"""Style card collage composition with transparent diagnostics."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from models.board import CollageSlot, StyleCardCollage
from models.taxonomy import ACCESSORY, BOTTOM, FOOTWEAR, TOP, classify_category
from models.wardrobe_item import WardrobeItem

logger = logging.getLogger(__name__)

DEFAULT_BACKGROUND_COLOR = "#D9DBE0"
MAIN_SCALE = 0.8
SMALL_SCALE = 0.45


@dataclass(frozen=True)
class CollageSpecResult:
    collage: Dict[str, object]
    diagnostics: Dict[str, object]


def _slot(item: WardrobeItem, role: str) -> CollageSlot:
    return CollageSlot(item_id=item.item_id, role=role, image_url=item.display_image)


def _first_of_role(items: Sequence[WardrobeItem], role: str) -> Optional[WardrobeItem]:
    return next((item for item in items if classify_category(item.category) == role), None)


def compose_style_card(items: Sequence[WardrobeItem]) -> StyleCardCollage:
    """Arrange board items into the two-column style card.

    The left column stacks the first top over the first bottom; the right
    column lists every accessory and then the first footwear piece. Extra
    tops, bottoms and footwear are not drawn on the card.
    """

    left: List[CollageSlot] = []
    right: List[CollageSlot] = []
    for role in (TOP, BOTTOM):
        item = _first_of_role(items, role)
        if item is not None:
            left.append(_slot(item, role))
    for item in items:
        if classify_category(item.category) == ACCESSORY:
            right.append(_slot(item, ACCESSORY))
    footwear = _first_of_role(items, FOOTWEAR)
    if footwear is not None:
        right.append(_slot(footwear, FOOTWEAR))
    return StyleCardCollage(left=left, right=right)


def _column_stickers(slots: Sequence[CollageSlot], x_position: float, scale: float) -> List[Dict[str, object]]:
    if not slots:
        return []
    step = 1.0 / (len(slots) + 1)
    return [
        {
            "item_id": slot.item_id,
            "image_url": slot.image_url,
            "x": x_position,
            "y": round(step * (index + 1), 2),
            "scale": scale,
        }
        for index, slot in enumerate(slots)
    ]


def generate_collage_spec(
    collage: StyleCardCollage, background_color: str = DEFAULT_BACKGROUND_COLOR
) -> CollageSpecResult:
    """Create a deterministic sticker specification for rendering a style card."""

    right_scale = SMALL_SCALE if len(collage.right) > 2 else MAIN_SCALE / 1.5
    stickers = _column_stickers(collage.left, 0.3, MAIN_SCALE) + _column_stickers(
        collage.right, 0.75, round(right_scale, 2)
    )
    layout_trace = [{"item_id": s["item_id"], "x": s["x"], "y": s["y"]} for s in stickers]
    logger.info("Generated style card collage with %s stickers", len(stickers))
    return CollageSpecResult(
        collage={"background_color": background_color, "stickers": stickers},
        diagnostics={"layout": layout_trace, "background_color": background_color},
    )


__all__ = ["CollageSpecResult", "compose_style_card", "generate_collage_spec", "DEFAULT_BACKGROUND_COLOR"]
