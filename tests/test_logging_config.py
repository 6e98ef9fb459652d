"""Structured logging helper tests."""

import json
import logging
import sys
from pathlib import Path
from typing import List

import pytest
from pydantic import BaseModel, Field, ValidationError

sys.path.append(str(Path(__file__).resolve().parents[1]))

from styleboard_app.logging_config import (
    JsonFormatter,
    correlation_context,
    ensure_correlation_id,
    scrub,
)
from tools.observability import call_fields, instrument_call


def test_scrub_blanks_owner_and_image_fields() -> None:
    scrubbed = scrub({"user_id": "u-1", "image_url": "https://img/1.jpg", "board_id": "b-1", "item_count": 3})
    assert scrubbed == {"user_id": "[redacted]", "image_url": "[redacted]", "board_id": "b-1", "item_count": 3}


def test_json_formatter_includes_correlation_and_board_fields() -> None:
    record = logging.LogRecord("styleboard", logging.INFO, __file__, 1, "board_opened", None, None)
    record.board_id = "b-1"
    record.user_id = "u-1"
    with correlation_context("corr-123"):
        payload = json.loads(JsonFormatter().format(record))
    assert payload["event"] == "board_opened"
    assert payload["correlation_id"] == "corr-123"
    assert payload["board_id"] == "b-1"
    assert payload["user_id"] == "[redacted]"
    assert "msg" not in payload and "args" not in payload


def test_correlation_context_restores_previous_id() -> None:
    outer = ensure_correlation_id("outer-id")
    with correlation_context() as inner:
        assert inner != outer
    assert ensure_correlation_id() == "outer-id"


def test_call_fields_counts_items_and_reads_ids() -> None:
    class _Card:
        card_id = "card-9"

    fields = call_fields({"board_id": "b-1", "user_id": "u-1", "item_ids": ["a", "b"]}, _Card())
    assert fields == {"board_id": "b-1", "item_count": 2, "card_id": "card-9"}
    assert call_fields({"item_names": ("Shirt",)}, ["x", "y", "z"]) == {"item_count": 1, "result_count": 3}


def test_instrumented_call_logs_board_facts_not_arguments(caplog: pytest.LogCaptureFixture) -> None:
    @instrument_call("list_board_items")
    def list_board_items(board_id: str, item_ids: List[str], image_url: str) -> List[str]:
        return list(item_ids)

    caplog.set_level(logging.INFO, logger="tools.observability")
    assert list_board_items("b-7", ["a", "b", "c"], image_url="https://img/x.jpg") == ["a", "b", "c"]

    (record,) = [r for r in caplog.records if r.getMessage() == "call_completed"]
    assert record.operation == "list_board_items"
    assert record.board_id == "b-7"
    assert record.item_count == 3
    assert record.result_count == 3
    assert record.duration_ms >= 0
    assert not hasattr(record, "image_url")
    assert not hasattr(record, "kwargs")


def test_instrumented_call_rejects_invalid_payload(caplog: pytest.LogCaptureFixture) -> None:
    class _Payload(BaseModel):
        item_ids: List[str] = Field(min_length=1)

    @instrument_call("save_board", input_model=_Payload)
    def save_board(*, item_ids: List[str]) -> int:
        return len(item_ids)

    caplog.set_level(logging.INFO, logger="tools.observability")
    with pytest.raises(ValidationError):
        save_board(item_ids=[])
    (record,) = [r for r in caplog.records if r.getMessage() == "call_rejected"]
    assert record.operation == "save_board"
    assert record.invalid_fields == ["item_ids"]
    assert save_board(item_ids=["a"]) == 1


def test_instrumented_call_logs_failures(caplog: pytest.LogCaptureFixture) -> None:
    @instrument_call("broken")
    def broken(board_id: str) -> None:
        raise RuntimeError("boom")

    caplog.set_level(logging.INFO, logger="tools.observability")
    with pytest.raises(RuntimeError):
        broken(board_id="b-2")
    (record,) = [r for r in caplog.records if r.getMessage() == "call_failed"]
    assert record.board_id == "b-2"
    assert record.exc_info is not None
