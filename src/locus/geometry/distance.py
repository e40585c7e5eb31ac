"""Distance metrics between 3D points.

Two metrics are provided:

- ``euclidean``: a single non-negative straight-line distance. It cannot
  fail: an overflowing distance is returned as an infinite value and is
  only rejected when compared against a threshold.
- ``piecewise``: the absolute difference along each axis. Every axis is
  attempted and all failures are reported together in one
  ``AccumulatedError``.

Arithmetic is done in floating point regardless of the coordinate
representation.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import BaseModel

from locus.geometry.exceptions import AccumulatedError, AxisDifferenceError
from locus.geometry.primitives import Axis, C, Coordinate, Point3D
from locus.geometry.thresholds import ConjunctiveThreshold, EuclideanThreshold
from locus.numeric import NonnegativeReal, RefinementError, nonnegative
from locus.numeric.refinement import _unsafe_nonnegative
from locus.utils.logging import get_logger

logger = get_logger(__name__)

A = TypeVar("A")


class EuclideanDistance(BaseModel, frozen=True):
    """Straight-line distance between two points.

    Obtain instances from ``euclidean``; the value may be infinite if the
    computation overflowed.

    Attributes:
        value: The non-negative distance.
    """

    value: NonnegativeReal

    @property
    def is_finite(self) -> bool:
        """Whether the distance is a finite real."""
        return self.value.is_finite

    @property
    def is_infinite(self) -> bool:
        """Whether the distance overflowed."""
        return not self.is_finite

    def less_than(self, threshold: EuclideanThreshold) -> bool:
        return self.value < threshold.radius

    def greater_than(self, threshold: EuclideanThreshold) -> bool:
        return self.value > threshold.radius

    def equal_to(self, threshold: EuclideanThreshold) -> bool:
        return self.value.value == threshold.radius.value

    def lteq(self, threshold: EuclideanThreshold) -> bool:
        return self.value <= threshold.radius

    def gteq(self, threshold: EuclideanThreshold) -> bool:
        return self.value >= threshold.radius

    def __float__(self) -> float:
        return self.value.value

    def __lt__(self, other: object) -> bool:
        if isinstance(other, EuclideanDistance):
            return self.value < other.value
        return NotImplemented

    def __le__(self, other: object) -> bool:
        if isinstance(other, EuclideanDistance):
            return self.value <= other.value
        return NotImplemented

    def __gt__(self, other: object) -> bool:
        if isinstance(other, EuclideanDistance):
            return self.value > other.value
        return NotImplemented

    def __ge__(self, other: object) -> bool:
        if isinstance(other, EuclideanDistance):
            return self.value >= other.value
        return NotImplemented


class PiecewiseDistance(BaseModel, frozen=True):
    """Absolute difference between two points along each axis.

    Obtain instances from ``piecewise``.

    Attributes:
        x: Absolute x difference.
        y: Absolute y difference.
        z: Absolute z difference.
    """

    x: NonnegativeReal
    y: NonnegativeReal
    z: NonnegativeReal

    def to_tuple(self) -> tuple[float, float, float]:
        """Convert to raw (dx, dy, dz) tuple."""
        return (self.x.value, self.y.value, self.z.value)

    def within(self, threshold: ConjunctiveThreshold) -> bool:
        """Check that every axis difference is strictly below the bound."""
        bound = threshold.bound
        return self.x < bound and self.y < bound and self.z < bound


def _widen(difference: int | float) -> float:
    """Convert a coordinate difference to float, saturating at infinity.

    Only the magnitude matters to the norm, so the sign is dropped on
    overflow.
    """
    try:
        return float(difference)
    except OverflowError:
        return math.inf


def euclidean(a: Point3D[C], b: Point3D[C]) -> EuclideanDistance:
    """Compute the Euclidean distance between two points.

    The result is non-negative by construction. If the sum of squared
    differences or its root exceeds the finite float range, the result is
    infinite rather than an error; see ``EuclideanDistance.is_finite``.

    Args:
        a: One point.
        b: The other point.

    Returns:
        Distance between a and b; symmetric in its arguments.
    """
    deltas = [
        _widen(p.value - q.value) for p, q in zip(a.coordinates, b.coordinates)
    ]
    # d * d saturates to inf on overflow where d ** 2 would raise
    return EuclideanDistance.model_construct(
        value=_unsafe_nonnegative(math.sqrt(sum(d * d for d in deltas)))
    )


def euclidean_by(
    project: Callable[[A], Point3D[Any]],
) -> Callable[[A, A], EuclideanDistance]:
    """Lift ``euclidean`` onto any type from which a point can be extracted.

    Args:
        project: Extracts the point (e.g. a spot centroid) from a value.

    Returns:
        Function computing the distance between two such values.
    """

    def distance(a1: A, a2: A) -> EuclideanDistance:
        return euclidean(project(a1), project(a2))

    return distance


def _absolute_difference(p: Coordinate[C], q: Coordinate[C]) -> NonnegativeReal:
    try:
        raw = abs(float(p.value - q.value))
    except OverflowError as e:
        raise AxisDifferenceError(
            p.axis, p.value - q.value, "difference is not representable as a float"
        ) from e
    try:
        return nonnegative(raw)
    except RefinementError as e:
        raise AxisDifferenceError(p.axis, raw, e.reason) from e


def piecewise(a: Point3D[C], b: Point3D[C]) -> PiecewiseDistance:
    """Compute the per-axis absolute differences between two points.

    All three axes are attempted before any failure is raised.

    Args:
        a: One point.
        b: The other point.

    Returns:
        The validated (dx, dy, dz) differences.

    Raises:
        AccumulatedError: If any axis difference is invalid, listing every
            failed axis.
    """
    deltas: dict[Axis, NonnegativeReal] = {}
    errors: list[AxisDifferenceError] = []
    for p, q in zip(a.coordinates, b.coordinates):
        try:
            deltas[p.axis] = _absolute_difference(p, q)
        except AxisDifferenceError as e:
            errors.append(e)

    if errors:
        logger.warning(
            "Piecewise distance failed",
            a=str(a),
            b=str(b),
            axes=[e.axis.value for e in errors],
        )
        raise AccumulatedError(errors, a=a, b=b)

    return PiecewiseDistance(x=deltas[Axis.X], y=deltas[Axis.Y], z=deltas[Axis.Z])
