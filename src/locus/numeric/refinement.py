"""Refined (validated) numeric scalars for locus.

This module provides immutable Pydantic models for values that are known
to be non-negative. Construction is the only place the invariant is
checked: once a value exists it is safe to share and compare without
further validation.

Positive infinity is a legal non-negative real. Distance computations may
overflow to infinity, and callers must be able to detect that case rather
than have it surface as a construction failure. NaN is always rejected.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator


class RefinementError(ValueError):
    """Raised when a raw value cannot be refined to a constrained type.

    Attributes:
        raw: The rejected input value.
        reason: Why the value was rejected.
    """

    user_message = "invalid input point(s)"

    def __init__(self, raw: Any, reason: str) -> None:
        self.raw = raw
        self.reason = reason
        super().__init__(f"Cannot refine {raw!r} as non-negative: {reason}")


def _wrap_bare_value(data: Any, model: type[BaseModel]) -> Any:
    """Allow a bare number wherever a refined model is expected."""
    if isinstance(data, (dict, model)):
        return data
    return {"value": data}


def _is_number(raw: Any, types: tuple[type, ...] = (int, float)) -> bool:
    # bool is an int subclass but never a quantity
    return isinstance(raw, types) and not isinstance(raw, bool)


def _first_reason(error: ValidationError) -> str:
    return "; ".join(str(e["msg"]) for e in error.errors())


class NonnegativeReal(BaseModel, frozen=True):
    """A real number greater than or equal to zero.

    May be positive infinity; see ``is_finite``.

    Attributes:
        value: The wrapped float.
    """

    value: float = Field(..., ge=0, allow_inf_nan=True, strict=True)

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_value(cls, data: Any) -> Any:
        data = _wrap_bare_value(data, cls)
        if isinstance(data, dict) and "value" in data:
            raw = data["value"]
            if not _is_number(raw):
                raise ValueError("value must be a real number")
            try:
                data = {**data, "value": float(raw)}
            except OverflowError as e:
                raise ValueError("value is beyond the float range") from e
        return data

    @field_validator("value")
    @classmethod
    def _reject_nan(cls, value: float) -> float:
        if math.isnan(value):
            raise ValueError("value must not be NaN")
        return value

    @property
    def is_finite(self) -> bool:
        """Whether the value is a finite real."""
        return math.isfinite(self.value)

    @property
    def is_infinite(self) -> bool:
        """Whether the value is not finite."""
        return not self.is_finite

    def __float__(self) -> float:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def __lt__(self, other: object) -> bool:
        if isinstance(other, NonnegativeReal):
            return self.value < other.value
        if isinstance(other, (int, float)):
            return self.value < other
        return NotImplemented

    def __le__(self, other: object) -> bool:
        if isinstance(other, NonnegativeReal):
            return self.value <= other.value
        if isinstance(other, (int, float)):
            return self.value <= other
        return NotImplemented

    def __gt__(self, other: object) -> bool:
        if isinstance(other, NonnegativeReal):
            return self.value > other.value
        if isinstance(other, (int, float)):
            return self.value > other
        return NotImplemented

    def __ge__(self, other: object) -> bool:
        if isinstance(other, NonnegativeReal):
            return self.value >= other.value
        if isinstance(other, (int, float)):
            return self.value >= other
        return NotImplemented


class NonnegativeInt(BaseModel, frozen=True):
    """An integer greater than or equal to zero.

    Attributes:
        value: The wrapped int.
    """

    value: int = Field(..., ge=0, strict=True)

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_value(cls, data: Any) -> Any:
        data = _wrap_bare_value(data, cls)
        if isinstance(data, dict) and not _is_number(data.get("value", 0), (int,)):
            raise ValueError("value must be an integer")
        return data

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def __lt__(self, other: object) -> bool:
        if isinstance(other, NonnegativeInt):
            return self.value < other.value
        return NotImplemented

    def __le__(self, other: object) -> bool:
        if isinstance(other, NonnegativeInt):
            return self.value <= other.value
        return NotImplemented

    def __gt__(self, other: object) -> bool:
        if isinstance(other, NonnegativeInt):
            return self.value > other.value
        return NotImplemented

    def __ge__(self, other: object) -> bool:
        if isinstance(other, NonnegativeInt):
            return self.value >= other.value
        return NotImplemented


def nonnegative(raw: Any) -> NonnegativeReal:
    """Refine a raw number as a non-negative real.

    Args:
        raw: Value to refine. Must be an int or float; strings and
            bools are rejected.

    Returns:
        The validated value.

    Raises:
        RefinementError: If raw is negative, NaN, or not an int or float.
    """
    try:
        return NonnegativeReal(value=raw)
    except ValidationError as e:
        raise RefinementError(raw, _first_reason(e)) from e


def nonnegative_int(raw: Any) -> NonnegativeInt:
    """Refine a raw number as a non-negative integer.

    Raises:
        RefinementError: If raw is negative or not an integer.
    """
    try:
        return NonnegativeInt(value=raw)
    except ValidationError as e:
        raise RefinementError(raw, _first_reason(e)) from e


def _unsafe_nonnegative(raw: float) -> NonnegativeReal:
    """Wrap a value already proven non-negative, skipping validation.

    Only for call sites where the result is non-negative by construction,
    e.g. the norm of a difference vector. Never pass untrusted input.
    """
    return NonnegativeReal.model_construct(value=raw)
