"""Canonical layout roles for wardrobe categories.

Categories are free text written by users or assigned by the tagging model
("Tops", "shirt", "jeans", "sneaker" all occur), so they are never validated
against a closed list. Instead every category maps onto one of four layout
roles through keyword matching, recomputed whenever a board is laid out.
"""

from typing import Dict, Optional, Tuple

TOP = "top"
BOTTOM = "bottom"
FOOTWEAR = "footwear"
ACCESSORY = "accessory"

ROLES: Tuple[str, ...] = (TOP, BOTTOM, FOOTWEAR, ACCESSORY)

# Ordered: the first role whose keywords match wins.
ROLE_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    TOP: ("top", "shirt", "t-shirt", "blouse", "sweater", "hoodie", "jacket", "outer", "dress"),
    BOTTOM: ("bottom", "pant", "jeans", "skirt", "short", "trouser", "cargo"),
    FOOTWEAR: ("shoe", "sneaker", "heel", "boot", "sandal", "footwear", "flat"),
}


def classify_category(category: Optional[str]) -> str:
    """Map a free-text category onto a layout role.

    Matching is a case-insensitive substring test; anything unmatched,
    including an empty or missing category, is an accessory.
    """

    key = (category or "").lower()
    for role, keywords in ROLE_KEYWORDS.items():
        if any(keyword in key for keyword in keywords):
            return role
    return ACCESSORY


def normalise_role(value: str) -> Optional[str]:
    """Return the canonical role for a role name, or ``None`` if unknown."""

    key = value.strip().lower()
    return key if key in ROLES else None


__all__ = [
    "TOP",
    "BOTTOM",
    "FOOTWEAR",
    "ACCESSORY",
    "ROLES",
    "ROLE_KEYWORDS",
    "classify_category",
    "normalise_role",
]
