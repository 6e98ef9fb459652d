"""FastAPI server exposing wardrobe, style board and style card endpoints."""

from typing import Any, List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, ValidationError, field_validator

from logic.validation import validation_failure
from memory.board_sessions import BoardNotFoundError
from styleboard_app.app import StyleBoardApp
from styleboard_app.logging_config import configure_logging


class WardrobeItemRequest(BaseModel):
    """Payload for adding an item to a user's wardrobe."""

    item_id: str = Field(..., min_length=1)
    name: str = ""
    category: str = ""
    image_url: str = ""
    masked_url: str | None = None


def _ids_as_strings(value: Any) -> Any:
    """Wardrobe ids are opaque strings; integer JSON ids are accepted as their text."""

    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if isinstance(value, list):
        return [_ids_as_strings(item) for item in value]
    return value


class OpenBoardRequest(BaseModel):
    """Open a board from explicit ids, an assistant reply with a board tag, or both."""

    user_id: str = Field(..., min_length=1)
    item_ids: List[str] | str | None = Field(None, description="Ids as a list or a comma separated string")
    reply: str | None = Field(None, description="Assistant reply that may carry a STYLE_BOARD tag")

    @field_validator("item_ids", mode="before")
    @classmethod
    def _coerce_item_ids(cls, value: Any) -> Any:
        return _ids_as_strings(value)


class StyleCardPreviewRequest(BaseModel):
    name: str | None = None


class SaveStyleCardBody(BaseModel):
    user_id: str
    name: str
    item_ids: List[str]
    image_url: str

    @field_validator("item_ids", mode="before")
    @classmethod
    def _coerce_item_ids(cls, value: Any) -> Any:
        return _ids_as_strings(value)


def create_app(styleboard_app: StyleBoardApp | None = None) -> FastAPI:
    """Build the FastAPI application around a :class:`StyleBoardApp`."""

    service = styleboard_app or StyleBoardApp()
    api = FastAPI(title="Style Board", version="0.1.0")
    api.state.styleboard = service

    def _board_or_404(func, *args):
        try:
            return func(*args)
        except BoardNotFoundError as exc:
            raise HTTPException(status_code=404, detail=f"Unknown board {exc.args[0]}") from exc

    @api.get("/healthz")
    async def healthcheck() -> dict:
        """Lightweight readiness probe."""

        return {
            "status": "ok",
            "service": "style-board",
            "environment": service.config.environment or "local",
            "open_boards": service.board_sessions.open_board_count(),
        }

    @api.get("/users/{user_id}/wardrobe")
    async def list_wardrobe(user_id: str, role: str | None = None, category: str | None = None) -> list:
        if role or category:
            return service.wardrobe_tools.search_wardrobe_items(user_id, {"role": role, "category": category})
        return service.wardrobe_tools.list_wardrobe_items(user_id)

    @api.post("/users/{user_id}/wardrobe", status_code=201)
    async def add_wardrobe_item(user_id: str, request: WardrobeItemRequest) -> dict:
        return service.wardrobe_tools.add_wardrobe_item(user_id, request.model_dump())

    @api.delete("/users/{user_id}/wardrobe/{item_id}", status_code=204)
    async def remove_wardrobe_item(user_id: str, item_id: str) -> None:
        if not service.wardrobe_tools.remove_wardrobe_item(user_id, item_id):
            raise HTTPException(status_code=404, detail=f"Unknown item {item_id}")

    @api.post("/boards", status_code=201)
    async def open_board(request: OpenBoardRequest) -> dict:
        return service.open_board(request.user_id, item_ids=request.item_ids, reply=request.reply)

    @api.get("/boards/{board_id}")
    async def get_board(board_id: str) -> dict:
        return _board_or_404(service.get_board, board_id)

    @api.post("/boards/{board_id}/shuffle")
    async def shuffle_board(board_id: str) -> dict:
        return _board_or_404(service.shuffle_board, board_id)

    @api.post("/boards/{board_id}/locks/{item_id}")
    async def toggle_lock(board_id: str, item_id: str) -> dict:
        return _board_or_404(service.toggle_lock, board_id, item_id)

    @api.delete("/boards/{board_id}", status_code=204)
    async def close_board(board_id: str) -> None:
        _board_or_404(service.close_board, board_id)

    @api.post("/boards/{board_id}/style-card")
    async def preview_style_card(board_id: str, request: StyleCardPreviewRequest | None = None) -> dict:
        name = request.name if request else None
        return _board_or_404(service.preview_style_card, board_id, name)

    @api.post("/style-cards", status_code=201)
    async def save_style_card(request: SaveStyleCardBody) -> dict:
        try:
            return service.save_style_card(
                user_id=request.user_id,
                name=request.name,
                item_ids=request.item_ids,
                image_url=request.image_url,
            )
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail=validation_failure("Invalid style card", exc)) from exc

    @api.get("/users/{user_id}/style-cards")
    async def list_style_cards(user_id: str) -> list:
        return service.list_style_cards(user_id)

    return api


def get_app() -> FastAPI:
    """Expose a configured FastAPI instance for ASGI servers."""

    configure_logging()
    return create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:get_app", factory=True, host="0.0.0.0", port=8080, reload=False)
