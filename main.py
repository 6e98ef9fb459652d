"""Simple entrypoint to try a style board locally."""

import argparse
import json

from styleboard_app.app import StyleBoardApp
from styleboard_app.config import StyleBoardConfig
from tools.outfit_namer import StaticOutfitNamer
from tools.wardrobe_store import InMemoryWardrobeStore
from models.wardrobe_item import WardrobeItem

DEMO_USER = "demo"
DEMO_ITEMS = [
    ("shirt-1", "Linen Shirt", "Shirt"),
    ("hoodie-1", "Grey Hoodie", "Hoodie"),
    ("jeans-1", "Blue Jeans", "Jeans"),
    ("cargo-1", "Olive Cargo", "Cargo Pants"),
    ("sneaker-1", "White Sneakers", "Sneakers"),
    ("boot-1", "Chelsea Boots", "Boots"),
    ("watch-1", "Steel Watch", "Watch"),
    ("cap-1", "Black Cap", "Cap"),
]


def main() -> None:
    parser = argparse.ArgumentParser(description="Open a demo style board and shuffle it.")
    parser.add_argument("--ids", default="shirt-1,jeans-1,sneaker-1,watch-1", help="Comma separated item ids")
    parser.add_argument("--lock", action="append", default=[], help="Item id to lock before shuffling")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible shuffles")
    args = parser.parse_args()

    store = InMemoryWardrobeStore(
        [
            WardrobeItem(item_id=item_id, user_id=DEMO_USER, name=name, category=category,
                         image_url=f"https://example.com/{item_id}.jpg")
            for item_id, name, category in DEMO_ITEMS
        ]
    )
    config = StyleBoardConfig(shuffle_seed=args.seed)
    app = StyleBoardApp(config=config, wardrobe_store=store, outfit_namer=StaticOutfitNamer())

    board = app.open_board(DEMO_USER, item_ids=args.ids)
    for item_id in args.lock:
        app.toggle_lock(board["board_id"], item_id)
    print(json.dumps(app.shuffle_board(board["board_id"]), indent=2))


if __name__ == "__main__":
    main()
