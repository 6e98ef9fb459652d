"""Style card persistence and outfit naming tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
import requests
from pydantic import ValidationError

sys.path.append(str(Path(__file__).resolve().parents[1]))

from tools import outfit_namer
from tools.outfit_namer import HttpOutfitNamer, OutfitNamer, StaticOutfitNamer
from tools.style_card_store import SQLiteStyleCardStore, save_style_card


class _FakeResponse:
    def __init__(self, payload, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if not 200 <= self.status_code < 300:
            raise requests.HTTPError(f"HTTP {self.status_code}")

    def json(self):
        return self._payload


def test_save_and_list_style_cards(tmp_path: Path) -> None:
    store = SQLiteStyleCardStore(tmp_path / "cards.db")
    card = save_style_card(
        store,
        user_id="user-1",
        name="  Weekend Layers ",
        item_ids=["a", " b ", ""],
        image_url="https://cdn.example.com/board.jpg",
    )
    assert card.name == "Weekend Layers"
    assert card.item_ids == ["a", "b"]
    assert store.get_card("user-1", card.card_id) == card
    assert [c.card_id for c in store.list_cards_for_user("user-1")] == [card.card_id]
    assert store.list_cards_for_user("user-2") == []
    assert store.delete_card("user-1", card.card_id) is True
    assert store.get_card("user-1", card.card_id) is None


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "", "item_ids": ["a"], "image_url": "x"},
        {"name": "   ", "item_ids": ["a"], "image_url": "x"},
        {"name": "Look", "item_ids": [], "image_url": "x"},
        {"name": "Look", "item_ids": [" "], "image_url": "x"},
        {"name": "Look", "item_ids": ["a"], "image_url": ""},
    ],
)
def test_save_style_card_rejects_invalid_payloads(tmp_path: Path, payload: dict) -> None:
    store = SQLiteStyleCardStore(tmp_path / "cards.db")
    with pytest.raises(ValidationError):
        save_style_card(store, user_id="user-1", **payload)
    assert store.list_cards_for_user("user-1") == []


def test_http_namer_reads_suggested_name(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = {}

    def fake_post(url, json, timeout):
        calls.update(url=url, json=json, timeout=timeout)
        return _FakeResponse({"name": "Sunset Stroll"})

    monkeypatch.setattr(outfit_namer.requests, "post", fake_post)
    namer = HttpOutfitNamer(url="http://stylist.local/api/name-outfit", timeout_seconds=3)
    assert namer.name_outfit(["Linen Shirt", "Chinos"]) == "Sunset Stroll"
    assert calls["json"] == {"items": ["Linen Shirt", "Chinos"]}
    assert calls["timeout"] == 3


@pytest.mark.parametrize(
    "behaviour",
    ["network", "timeout", "http_error", "bad_payload", "empty_name"],
)
def test_http_namer_falls_back_to_default(monkeypatch: pytest.MonkeyPatch, behaviour: str) -> None:
    def fake_post(url, json, timeout):
        if behaviour == "network":
            raise requests.ConnectionError("offline")
        if behaviour == "timeout":
            raise requests.Timeout("slow stylist")
        if behaviour == "http_error":
            return _FakeResponse({}, status_code=502)
        if behaviour == "bad_payload":
            return _FakeResponse({"name": ["not", "a", "string"]})
        return _FakeResponse({"name": "  "})

    monkeypatch.setattr(outfit_namer.requests, "post", fake_post)
    namer = HttpOutfitNamer(url="http://stylist.local/api/name-outfit", default_name="Fallback Look")
    assert namer.name_outfit(["Shirt"]) == "Fallback Look"


def test_http_namer_without_url_skips_network(monkeypatch: pytest.MonkeyPatch) -> None:
    def fail_post(*_, **__):
        raise AssertionError("network should not be used")

    monkeypatch.setattr(outfit_namer.requests, "post", fail_post)
    assert HttpOutfitNamer().name_outfit(["Shirt"]) == "My Style Board"


def test_static_namer() -> None:
    namer = StaticOutfitNamer("Office Ready")
    assert isinstance(namer, OutfitNamer)
    assert namer.name_outfit([]) == "Office Ready"
