"""In-memory bookkeeping for open style boards."""
from __future__ import annotations

import logging
import random
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional
from uuid import uuid4

from logic.board_layout import resolve_selection
from logic.shuffle import RandomSource, ShuffleState
from models.board import BoardLayout
from models.wardrobe_item import WardrobeItem, from_raw_metadata
from styleboard_app.config import DEFAULT_BOARD_IDLE_SECONDS, DEFAULT_MAX_OPEN_BOARDS
from tools.wardrobe_tools import WardrobeTools

logger = logging.getLogger(__name__)


class BoardNotFoundError(KeyError):
    """Raised when a board id does not refer to an open board."""


@dataclass
class BoardSession:
    """One open board: its owner, the wardrobe snapshot and the shuffle state."""

    board_id: str
    user_id: str
    wardrobe: List[WardrobeItem]
    state: ShuffleState = field(default_factory=ShuffleState)
    last_used: float = 0.0


def _coerce_items(raw_items: Iterable[Dict[str, Any]]) -> List[WardrobeItem]:
    items = []
    for raw in raw_items:
        try:
            items.append(from_raw_metadata(raw))
        except ValueError as exc:
            logger.warning("Skipping wardrobe entry due to validation error: %s", exc)
    return items


class BoardSessionManager:
    """Opens, mutates and discards boards.

    Boards are never persisted; closing one (or restarting the process) drops
    its lock set and shuffled items. At most ``max_open_boards`` are kept,
    the least recently used going first, and a board untouched for
    ``idle_seconds`` is dropped the next time the manager is used.
    """

    def __init__(
        self,
        wardrobe_tools: WardrobeTools,
        rng: Optional[RandomSource] = None,
        max_open_boards: int = DEFAULT_MAX_OPEN_BOARDS,
        idle_seconds: float = DEFAULT_BOARD_IDLE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_open_boards < 1:
            raise ValueError("max_open_boards must be at least 1")
        self.wardrobe_tools = wardrobe_tools
        self.rng = rng or random.Random()
        self.max_open_boards = max_open_boards
        self.idle_seconds = idle_seconds
        self._clock = clock
        self._boards: "OrderedDict[str, BoardSession]" = OrderedDict()

    def _expire_idle(self, now: float) -> None:
        if self.idle_seconds <= 0:
            return
        # Boards are ordered by last use, so the idle ones sit at the front.
        while self._boards:
            board_id, session = next(iter(self._boards.items()))
            if now - session.last_used < self.idle_seconds:
                break
            del self._boards[board_id]
            logger.info("Expired idle board %s", board_id)

    def open_board(self, user_id: str, item_ids: Iterable[str]) -> BoardSession:
        now = self._clock()
        self._expire_idle(now)
        wardrobe = _coerce_items(self.wardrobe_tools.list_wardrobe_items(user_id))
        selection = list(item_ids)
        items = resolve_selection(selection, wardrobe)
        session = BoardSession(
            board_id=str(uuid4()),
            user_id=user_id,
            wardrobe=wardrobe,
            state=ShuffleState(items=items),
            last_used=now,
        )
        self._boards[session.board_id] = session
        while len(self._boards) > self.max_open_boards:
            evicted, _ = self._boards.popitem(last=False)
            logger.info("Evicted least recently used board %s", evicted)
        logger.info(
            "Opened board %s with %s of %s requested items", session.board_id, len(items), len(selection)
        )
        return session

    def get_board(self, board_id: str) -> BoardSession:
        now = self._clock()
        self._expire_idle(now)
        try:
            session = self._boards[board_id]
        except KeyError:
            raise BoardNotFoundError(board_id) from None
        session.last_used = now
        self._boards.move_to_end(board_id)
        return session

    def shuffle(self, board_id: str) -> BoardSession:
        session = self.get_board(board_id)
        session.state.shuffle(session.wardrobe, self.rng)
        return session

    def toggle_lock(self, board_id: str, item_id: str) -> bool:
        return self.get_board(board_id).state.toggle_lock(item_id)

    def layout(self, board_id: str) -> BoardLayout:
        return self.get_board(board_id).state.layout()

    def close_board(self, board_id: str) -> None:
        self.get_board(board_id)
        del self._boards[board_id]
        logger.info("Closed board %s", board_id)

    def open_board_count(self) -> int:
        self._expire_idle(self._clock())
        return len(self._boards)


__all__ = ["BoardNotFoundError", "BoardSession", "BoardSessionManager"]
