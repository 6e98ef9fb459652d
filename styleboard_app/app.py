"""Style Board service bootstrap."""

from __future__ import annotations

import logging
import random
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from styleboard_app.config import StyleBoardConfig
from styleboard_app.logging_config import configure_logging, correlation_context, get_logger, log_event
from logic.board_selection import extract_board_tag, parse_board_ids
from logic.style_card import compose_style_card, generate_collage_spec
from memory.board_sessions import BoardSession, BoardSessionManager
from models.board import BoardLayout
from models.taxonomy import classify_category
from models.wardrobe_item import WardrobeItem
from tools.outfit_namer import HttpOutfitNamer, OutfitNamer
from tools.style_card_store import SQLiteStyleCardStore, StyleCardStore, save_style_card
from tools.wardrobe_store import SQLiteWardrobeStore, WardrobeStore
from tools.wardrobe_tools import WardrobeTools


LOGGER = get_logger(__name__)


def _item_payload(item: WardrobeItem, locked: bool) -> Dict[str, Any]:
    payload = asdict(item)
    payload["role"] = classify_category(item.category)
    payload["locked"] = locked
    return payload


class StyleBoardApp:
    """Wires together the wardrobe store, board sessions, naming and saving."""

    def __init__(
        self,
        config: StyleBoardConfig | None = None,
        wardrobe_store: WardrobeStore | None = None,
        style_card_store: StyleCardStore | None = None,
        outfit_namer: OutfitNamer | None = None,
    ) -> None:
        self.config = config or StyleBoardConfig.from_env()
        configure_logging()

        self.wardrobe_store = wardrobe_store or SQLiteWardrobeStore(self.config.wardrobe_db_path)
        self.wardrobe_tools = WardrobeTools(self.wardrobe_store)
        self.style_card_store = style_card_store or SQLiteStyleCardStore(self.config.style_card_db_path)
        self.outfit_namer = outfit_namer or HttpOutfitNamer(
            url=self.config.outfit_namer_url,
            timeout_seconds=self.config.outfit_namer_timeout,
            default_name=self.config.default_board_name,
        )
        self.board_sessions = BoardSessionManager(
            wardrobe_tools=self.wardrobe_tools,
            rng=random.Random(self.config.shuffle_seed),
            max_open_boards=self.config.max_open_boards,
            idle_seconds=self.config.board_idle_seconds,
        )

    def board_payload(self, session: BoardSession) -> Dict[str, Any]:
        """Render a board session as a JSON-ready dict."""

        state = session.state
        layout: BoardLayout = state.layout()

        def render(item: WardrobeItem) -> Dict[str, Any]:
            return _item_payload(item, state.is_locked(item.item_id))

        return {
            "board_id": session.board_id,
            "item_ids": state.item_ids(),
            "locked_ids": sorted(state.locked_ids),
            "layout": {
                "main_piece": render(layout.main_piece) if layout.main_piece else None,
                "left": [render(item) for item in layout.left],
                "right": [render(item) for item in layout.right],
            },
        }

    def open_board(
        self, user_id: str, item_ids: List[str] | str | None = None, reply: str | None = None
    ) -> Dict[str, Any]:
        """Open a board from explicit ids or from an assistant reply carrying a board tag."""

        with correlation_context():
            message = None
            if reply is not None:
                message, tagged_ids = extract_board_tag(reply)
                selection = tagged_ids + parse_board_ids(item_ids)
            else:
                selection = parse_board_ids(item_ids)
            session = self.board_sessions.open_board(user_id, selection)
            log_event(
                LOGGER,
                logging.INFO,
                "board_opened",
                board_id=session.board_id,
                requested=len(selection),
                resolved=len(session.state.items),
            )
            payload = self.board_payload(session)
            if reply is not None:
                payload["message"] = message
            return payload

    def get_board(self, board_id: str) -> Dict[str, Any]:
        return self.board_payload(self.board_sessions.get_board(board_id))

    def shuffle_board(self, board_id: str) -> Dict[str, Any]:
        with correlation_context():
            session = self.board_sessions.shuffle(board_id)
            log_event(
                LOGGER,
                logging.INFO,
                "board_shuffled",
                board_id=board_id,
                locked=len(session.state.locked_ids),
            )
            return self.board_payload(session)

    def toggle_lock(self, board_id: str, item_id: str) -> Dict[str, Any]:
        self.board_sessions.toggle_lock(board_id, item_id)
        return self.get_board(board_id)

    def close_board(self, board_id: str) -> None:
        self.board_sessions.close_board(board_id)

    def preview_style_card(self, board_id: str, name: Optional[str] = None) -> Dict[str, Any]:
        """Compose the style card for a board and suggest a name for it."""

        session = self.board_sessions.get_board(board_id)
        items = session.state.items
        collage = compose_style_card(items)
        spec = generate_collage_spec(collage)
        card_name = name or self.outfit_namer.name_outfit([item.name for item in items])
        return {
            "board_id": board_id,
            "name": card_name,
            "item_ids": session.state.item_ids(),
            "collage": asdict(collage),
            "render_spec": spec.collage,
        }

    def save_style_card(self, user_id: str, name: str, item_ids: List[str], image_url: str) -> Dict[str, Any]:
        card = save_style_card(
            self.style_card_store, user_id=user_id, name=name, item_ids=item_ids, image_url=image_url
        )
        log_event(LOGGER, logging.INFO, "style_card_saved", card_id=card.card_id, items=len(card.item_ids))
        return asdict(card)

    def list_style_cards(self, user_id: str) -> List[Dict[str, Any]]:
        return [asdict(card) for card in self.style_card_store.list_cards_for_user(user_id)]


__all__ = ["StyleBoardApp"]
