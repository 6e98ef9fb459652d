"""Pydantic schemas and helpers for validating save payloads and board requests."""

from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator


class SaveStyleCardRequest(BaseModel):
    """Input contract for persisting a style card."""

    user_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    item_ids: List[str] = Field(min_length=1)
    image_url: str = Field(min_length=1)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, name: str) -> str:
        stripped = name.strip()
        if not stripped:
            raise ValueError("name cannot be blank")
        return stripped

    @field_validator("item_ids")
    @classmethod
    def _clean_ids(cls, item_ids: List[str]) -> List[str]:
        cleaned = [item_id.strip() for item_id in item_ids if item_id and item_id.strip()]
        if not cleaned:
            raise ValueError("item_ids must contain at least one id")
        return cleaned


class ValidationResult(BaseModel):
    """Wrapper returned to callers when validation fails."""

    status: Literal["needs_review"] = "needs_review"
    message: str
    details: List[Dict[str, Any]]


def validation_failure(message: str, exc: ValidationError) -> Dict[str, Any]:
    """Translate Pydantic errors into a consistent review payload."""

    details = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]
    return ValidationResult(message=message, details=details).model_dump()


__all__ = ["SaveStyleCardRequest", "ValidationResult", "validation_failure"]
