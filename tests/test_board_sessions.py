"""Board session lifecycle tests."""

from __future__ import annotations

import random
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from memory.board_sessions import BoardNotFoundError, BoardSessionManager
from models.wardrobe_item import WardrobeItem
from tools.wardrobe_store import InMemoryWardrobeStore
from tools.wardrobe_tools import WardrobeTools


def _manager(seed: int = 0, **limits) -> BoardSessionManager:
    store = InMemoryWardrobeStore(
        [
            WardrobeItem(item_id=item_id, user_id="demo", name=item_id, category=category, image_url="")
            for item_id, category in [
                ("shirt1", "Shirt"),
                ("shirt2", "Sweater"),
                ("jeans1", "Jeans"),
                ("jeans2", "Trousers"),
                ("shoe1", "Sneakers"),
                ("acc1", "Watch"),
            ]
        ]
    )
    return BoardSessionManager(WardrobeTools(store), rng=random.Random(seed), **limits)


def test_open_board_resolves_ids_and_drops_unknown() -> None:
    manager = _manager()
    session = manager.open_board("demo", ["jeans1", "ghost", "shirt1", "shoe1"])
    assert session.state.item_ids() == ["jeans1", "shirt1", "shoe1"]
    assert session.state.locked_ids == frozenset()
    assert len(session.wardrobe) == 6
    assert manager.layout(session.board_id).main_piece.item_id == "shirt1"


def test_shuffle_respects_locks() -> None:
    manager = _manager(seed=11)
    board_id = manager.open_board("demo", ["shirt1", "jeans1", "shoe1"]).board_id

    assert manager.toggle_lock(board_id, "jeans1") is True
    session = manager.shuffle(board_id)
    assert session.state.item_ids() == ["shirt2", "jeans1", "shoe1"]

    assert manager.toggle_lock(board_id, "jeans1") is False
    session = manager.shuffle(board_id)
    assert session.state.item_ids() == ["shirt1", "jeans2", "shoe1"]


def test_boards_are_independent() -> None:
    manager = _manager()
    first = manager.open_board("demo", ["shirt1"]).board_id
    second = manager.open_board("demo", ["shirt1"]).board_id
    manager.toggle_lock(first, "shirt1")
    assert manager.get_board(second).state.locked_ids == frozenset()
    assert manager.open_board_count() == 2


def test_wardrobe_snapshot_is_taken_at_open_time() -> None:
    manager = _manager()
    board_id = manager.open_board("demo", ["shoe1"]).board_id
    manager.wardrobe_tools.add_wardrobe_item(
        "demo", {"item_id": "shoe2", "name": "Boots", "category": "Boots", "image_url": ""}
    )
    assert manager.shuffle(board_id).state.item_ids() == ["shoe1"]
    reopened = manager.open_board("demo", ["shoe1"]).board_id
    assert manager.shuffle(reopened).state.item_ids() == ["shoe2"]


def test_closed_and_unknown_boards_raise() -> None:
    manager = _manager()
    board_id = manager.open_board("demo", ["shirt1"]).board_id
    manager.close_board(board_id)
    assert manager.open_board_count() == 0
    with pytest.raises(BoardNotFoundError):
        manager.shuffle(board_id)
    with pytest.raises(BoardNotFoundError):
        manager.close_board("nope")
    with pytest.raises(KeyError):
        manager.toggle_lock("nope", "shirt1")


class _FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_open_boards_are_capped_least_recently_used_first() -> None:
    manager = _manager(max_open_boards=2)
    first = manager.open_board("demo", ["shirt1"]).board_id
    second = manager.open_board("demo", ["jeans1"]).board_id
    manager.get_board(first)
    third = manager.open_board("demo", ["shoe1"]).board_id

    assert manager.open_board_count() == 2
    with pytest.raises(BoardNotFoundError):
        manager.get_board(second)
    assert manager.get_board(first).state.item_ids() == ["shirt1"]
    assert manager.get_board(third).state.item_ids() == ["shoe1"]


def test_many_opens_never_exceed_the_cap() -> None:
    manager = _manager(max_open_boards=5)
    for _ in range(50):
        manager.open_board("demo", ["shirt1"])
    assert manager.open_board_count() == 5


def test_idle_boards_expire() -> None:
    clock = _FakeClock()
    manager = _manager(idle_seconds=60, clock=clock)
    stale = manager.open_board("demo", ["shirt1"]).board_id
    clock.now += 45
    fresh = manager.open_board("demo", ["jeans1"]).board_id
    clock.now += 30

    with pytest.raises(BoardNotFoundError):
        manager.shuffle(stale)
    assert manager.get_board(fresh).state.item_ids() == ["jeans1"]
    assert manager.open_board_count() == 1


def test_using_a_board_keeps_it_alive() -> None:
    clock = _FakeClock()
    manager = _manager(idle_seconds=60, clock=clock)
    board_id = manager.open_board("demo", ["shirt1"]).board_id
    for _ in range(5):
        clock.now += 50
        manager.toggle_lock(board_id, "shirt1")
    assert manager.open_board_count() == 1


def test_zero_capacity_is_rejected() -> None:
    with pytest.raises(ValueError):
        _manager(max_open_boards=0)
