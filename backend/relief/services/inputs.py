from __future__ import annotations

import logging
from collections.abc import Sequence

from relief.core.exceptions import ValidationError
from relief.schemas.leave import MAX_PERIOD

logger = logging.getLogger(__name__)

DEFAULT_PERIOD = 1


def _coerce_period(value: int | str) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        return None


def _period_out_of_range(value: int | str) -> ValidationError:
    return ValidationError(
        f"Period must be between 1 and {MAX_PERIOD}, got {value!r}",
        details={"value": str(value), "max_period": MAX_PERIOD},
    )


def parse_period(value: int | str, *, strict: bool = True) -> int:
    """Turn user input into a period number.

    Strict mode raises ``ValidationError`` for anything that is not a positive whole
    number. Lenient mode falls back to period 1, which is what the mobile app did with
    unparseable text. Numbers above ``MAX_PERIOD`` are refused in both modes.
    """
    period = _coerce_period(value)
    if period is not None and period > MAX_PERIOD:
        raise _period_out_of_range(value)
    if period is not None and period >= 1:
        return period
    if strict:
        raise ValidationError(
            f"Period must be a positive whole number, got {value!r}",
            details={"value": str(value)},
        )
    logger.debug("Invalid period %r replaced with %s", value, DEFAULT_PERIOD)
    return DEFAULT_PERIOD


def parse_periods(value: str | Sequence[int | str], *, strict: bool = True) -> list[int]:
    if isinstance(value, str):
        tokens: list[int | str] = value.split(",")
    else:
        tokens = list(value)

    if strict:
        tokens = [token for token in tokens if not (isinstance(token, str) and not token.strip())]
        if not tokens:
            raise ValidationError("At least one period is required", details={"value": str(value)})
    elif not tokens:
        return [DEFAULT_PERIOD]

    return [parse_period(token, strict=strict) for token in tokens]


def validate_periods(periods: Sequence[int]) -> list[int]:
    """Check already parsed period numbers; raises ``ValidationError`` on the first bad one."""
    if not periods:
        raise ValidationError("At least one period is required", details={"value": "[]"})
    checked: list[int] = []
    for period in periods:
        if isinstance(period, bool) or not isinstance(period, int) or period < 1:
            raise ValidationError(
                f"Period must be a positive whole number, got {period!r}",
                details={"value": str(period)},
            )
        if period > MAX_PERIOD:
            raise _period_out_of_range(period)
        checked.append(period)
    return checked
