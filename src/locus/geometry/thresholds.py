"""Distance thresholds for proximity decisions.

A threshold is one of exactly two variants, tagged by ``kind``:

- ``EuclideanThreshold``: points are proximal when the straight-line
  distance between them is strictly less than ``radius``.
- ``ConjunctiveThreshold``: points are proximal when the absolute
  difference along every axis is strictly less than ``bound``.

The tag makes ``DistanceThreshold`` a Pydantic discriminated union, so a
threshold can be validated from a plain mapping such as
``{"kind": "euclidean", "radius": 5.0}``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter

from locus.numeric import NonnegativeReal, nonnegative


class EuclideanThreshold(BaseModel, frozen=True):
    """Upper bound (exclusive) on the Euclidean distance between points."""

    kind: Literal["euclidean"] = "euclidean"
    radius: NonnegativeReal

    @property
    def value(self) -> NonnegativeReal:
        """Return the wrapped radius."""
        return self.radius

    def __str__(self) -> str:
        return f"EuclideanThreshold({self.radius})"


class ConjunctiveThreshold(BaseModel, frozen=True):
    """Upper bound (exclusive) applied to each axis difference separately."""

    kind: Literal["conjunctive"] = "conjunctive"
    bound: NonnegativeReal

    @property
    def value(self) -> NonnegativeReal:
        """Return the wrapped per-axis bound."""
        return self.bound

    def __str__(self) -> str:
        return f"ConjunctiveThreshold({self.bound})"


DistanceThreshold = Annotated[
    EuclideanThreshold | ConjunctiveThreshold,
    Field(discriminator="kind"),
]

_THRESHOLD_ADAPTER: TypeAdapter[EuclideanThreshold | ConjunctiveThreshold] = (
    TypeAdapter(DistanceThreshold)
)


def euclidean_threshold(radius: Any) -> EuclideanThreshold:
    """Create a Euclidean threshold.

    Raises:
        RefinementError: If radius is negative or not a number.
    """
    return EuclideanThreshold(radius=nonnegative(radius))


def conjunctive_threshold(bound: Any) -> ConjunctiveThreshold:
    """Create a conjunctive (per-axis) threshold.

    Raises:
        RefinementError: If bound is negative or not a number.
    """
    return ConjunctiveThreshold(bound=nonnegative(bound))


def parse_threshold(data: Mapping[str, Any]) -> EuclideanThreshold | ConjunctiveThreshold:
    """Validate a threshold from a tagged mapping.

    Args:
        data: Mapping with a ``kind`` of "euclidean" or "conjunctive" and
            the matching ``radius`` or ``bound``.

    Returns:
        The threshold variant selected by ``kind``.

    Raises:
        pydantic.ValidationError: If the tag is unknown or the value invalid.
    """
    return _THRESHOLD_ADAPTER.validate_python(data)
