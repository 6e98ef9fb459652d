"""Call logging for wardrobe, naming and style-card operations.

Each decorated call produces a single log line once it finishes: the
operation name, how long it took, and the board-level facts that can be read
off its arguments and result (board, item and card ids, how many items went
in, how many came back). Argument values themselves are never logged.
"""

from __future__ import annotations

import inspect
import logging
import time
from functools import wraps
from typing import Any, Callable, Dict, Mapping, ParamSpec, TypeVar

from pydantic import BaseModel, ValidationError

from styleboard_app.logging_config import get_logger, log_event

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")

_ID_ARGUMENTS = ("board_id", "item_id", "card_id")
_COUNTED_ARGUMENTS = ("item_ids", "item_names")


def _size(value: Any) -> int | None:
    if isinstance(value, (list, tuple, set, frozenset)):
        return len(value)
    return None


def call_fields(arguments: Mapping[str, Any], result: Any = None) -> Dict[str, Any]:
    """Pick the loggable board facts out of a call's bound arguments and result."""

    fields: Dict[str, Any] = {name: arguments[name] for name in _ID_ARGUMENTS if arguments.get(name)}
    for name in _COUNTED_ARGUMENTS:
        count = _size(arguments.get(name))
        if count is not None:
            fields["item_count"] = count
    result_count = _size(result)
    if result_count is not None:
        fields["result_count"] = result_count
    card_id = getattr(result, "card_id", None)
    if card_id:
        fields["card_id"] = card_id
    return fields


def instrument_call(
    operation: str,
    input_model: type[BaseModel] | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Log the outcome of every call to the wrapped function.

    With ``input_model`` the keyword arguments are validated and coerced
    through it first; a rejected payload is logged with the offending field
    names and the :class:`ValidationError` propagates.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        signature = inspect.signature(func)

        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            if input_model:
                try:
                    kwargs = input_model.model_validate(kwargs).model_dump()
                except ValidationError as exc:
                    log_event(
                        LOGGER,
                        logging.WARNING,
                        "call_rejected",
                        operation=operation,
                        invalid_fields=[".".join(str(part) for part in err["loc"]) for err in exc.errors()],
                    )
                    raise

            arguments = signature.bind_partial(*args, **kwargs).arguments
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception:
                log_event(
                    LOGGER,
                    logging.ERROR,
                    "call_failed",
                    operation=operation,
                    duration_ms=round((time.perf_counter() - start) * 1000, 2),
                    exc_info=True,
                    **call_fields(arguments),
                )
                raise
            log_event(
                LOGGER,
                logging.INFO,
                "call_completed",
                operation=operation,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
                **call_fields(arguments, result),
            )
            return result

        return wrapper

    return decorator


__all__ = ["call_fields", "instrument_call"]
