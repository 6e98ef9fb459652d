"""Outfit naming providers backed by the styling assistant's HTTP API."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

import requests
from pydantic import BaseModel, ValidationError

from styleboard_app.config import DEFAULT_BOARD_NAME
from tools.observability import instrument_call

LOGGER = logging.getLogger(__name__)


class _NameOutfitResponse(BaseModel):
    name: Optional[str] = None


class OutfitNamer(ABC):
    """Suggests a display name for a set of items."""

    @abstractmethod
    def name_outfit(self, item_names: Sequence[str]) -> str:
        """Return a short name for the outfit."""


class HttpOutfitNamer(OutfitNamer):
    """Calls the assistant's ``name-outfit`` endpoint, falling back to a default name."""

    def __init__(
        self,
        url: str | None = None,
        timeout_seconds: float = 10.0,
        default_name: str = DEFAULT_BOARD_NAME,
    ) -> None:
        self.url = url
        self.timeout_seconds = timeout_seconds
        self.default_name = default_name

    def _fallback(self, reason: str) -> str:
        LOGGER.warning("Using default outfit name", extra={"reason": reason})
        return self.default_name

    @instrument_call("name_outfit")
    def name_outfit(self, item_names: Sequence[str]) -> str:
        names: List[str] = [str(name) for name in item_names if name]
        if not self.url:
            return self._fallback("missing_url")
        if not names:
            return self._fallback("no_items")

        try:
            response = requests.post(self.url, json={"items": names}, timeout=self.timeout_seconds)
            response.raise_for_status()
            parsed = _NameOutfitResponse.model_validate(response.json())
        except requests.RequestException as exc:
            LOGGER.error("Outfit naming API unreachable", exc_info=exc)
            return self._fallback("request_error")
        except (ValidationError, ValueError) as exc:
            LOGGER.error("Outfit naming payload could not be parsed", exc_info=exc)
            return self._fallback("schema_validation")

        name = (parsed.name or "").strip()
        return name or self._fallback("empty_name")


class StaticOutfitNamer(OutfitNamer):
    """Offline namer returning a fixed name."""

    def __init__(self, name: str = DEFAULT_BOARD_NAME) -> None:
        self.name = name

    def name_outfit(self, item_names: Sequence[str]) -> str:
        LOGGER.info("Returning static outfit name", extra={"item_count": len(item_names)})
        return self.name


__all__ = ["OutfitNamer", "HttpOutfitNamer", "StaticOutfitNamer"]
