"""Helpers for turning navigation params and chat replies into board selections."""

from __future__ import annotations

import re
from typing import Iterable, List, Tuple, Union

_BOARD_TAG = re.compile(r"\[?STYLE_BOARD:\s*(.*?)(?:\]|\n|$)", re.IGNORECASE)
_BOARD_TAG_STRIP = re.compile(r"\[?STYLE_BOARD:.*?(?:\]|\n|$)", re.IGNORECASE)


def parse_board_ids(raw: Union[str, Iterable[str], None]) -> List[str]:
    """Split a comma separated id list, trimming blanks.

    A list is accepted too so callers can pass query params through as-is.
    """

    if raw is None:
        return []
    parts = raw.split(",") if isinstance(raw, str) else [part for value in raw for part in str(value).split(",")]
    return [part.strip() for part in parts if part.strip()]


def extract_board_tag(text: str) -> Tuple[str, List[str]]:
    """Pull a ``STYLE_BOARD: id, id`` tag out of an assistant reply.

    Returns the reply with every tag removed and the ids of the first tag.
    """

    match = _BOARD_TAG.search(text or "")
    if not match:
        return (text or "").strip(), []
    cleaned = _BOARD_TAG_STRIP.sub("", text).strip()
    return cleaned, parse_board_ids(match.group(1))


__all__ = ["parse_board_ids", "extract_board_tag"]
