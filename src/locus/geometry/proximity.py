"""Proximity predicates built from distance thresholds.

A ``ProximityComparable`` decides whether two values are close enough to
each other. Comparators for points are defined once from a threshold with
``proximity_for``; downstream record types (spots, ROIs) reuse them via
``contramap`` with a function that extracts the record's point, without
re-deriving any distance logic.

Example:
    from locus.geometry import Point3D, euclidean_threshold, proximity_for

    near = proximity_for(euclidean_threshold(5.1))
    near.proximal(Point3D.from_tuple((0, 0, 0)), Point3D.from_tuple((3, 4, 0)))  # True

    spots_near = near.contramap(lambda spot: spot.centroid)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar, assert_never, overload

from structlog.contextvars import bound_contextvars

from locus.geometry.distance import euclidean, piecewise
from locus.geometry.exceptions import DistanceOverflowError
from locus.geometry.primitives import Point3D
from locus.geometry.thresholds import (
    ConjunctiveThreshold,
    EuclideanThreshold,
    conjunctive_threshold,
    euclidean_threshold,
)
from locus.utils.logging import get_logger

if TYPE_CHECKING:
    from locus.config import Settings

logger = get_logger(__name__)

A = TypeVar("A")
B = TypeVar("B")
T = TypeVar("T", EuclideanThreshold, ConjunctiveThreshold)


@dataclass(frozen=True)
class ProximityComparable(Generic[A]):
    """Decides whether two values of type A are proximal.

    Attributes:
        predicate: The underlying comparison; must be symmetric and pure.
    """

    predicate: Callable[[A, A], bool]

    def proximal(self, a1: A, a2: A) -> bool:
        """Are the two values within the configured threshold of each other?"""
        return self.predicate(a1, a2)

    def __call__(self, a1: A, a2: A) -> bool:
        return self.predicate(a1, a2)

    def contramap(self, project: Callable[[B], A]) -> ProximityComparable[B]:
        """Lift this comparator onto values from which an A can be extracted.

        Args:
            project: Maps the richer value onto what this comparator accepts.

        Returns:
            Comparator with ``proximal(b1, b2) == self.proximal(project(b1), project(b2))``.
        """
        predicate = self.predicate

        def lifted(b1: B, b2: B) -> bool:
            return predicate(project(b1), project(b2))

        return ProximityComparable(lifted)


def _within_radius(
    threshold: EuclideanThreshold, a: Point3D[Any], b: Point3D[Any]
) -> bool:
    distance = euclidean(a, b)
    if distance.is_infinite:
        logger.warning("Euclidean distance overflow", a=str(a), b=str(b))
        raise DistanceOverflowError(a, b)
    return distance.less_than(threshold)


def _within_bound(
    threshold: ConjunctiveThreshold, a: Point3D[Any], b: Point3D[Any]
) -> bool:
    return piecewise(a, b).within(threshold)


def _under(
    threshold: T, check: Callable[[T, Point3D[Any], Point3D[Any]], bool]
) -> Callable[[Point3D[Any], Point3D[Any]], bool]:
    """Bind threshold into the log context while each comparison runs."""

    def predicate(a: Point3D[Any], b: Point3D[Any]) -> bool:
        with bound_contextvars(metric=threshold.kind, threshold=str(threshold)):
            return check(threshold, a, b)

    return predicate


def proximity_for(
    threshold: EuclideanThreshold | ConjunctiveThreshold,
) -> ProximityComparable[Point3D[Any]]:
    """Define a proximity comparison for 3D points.

    - Euclidean: proximal iff the distance is strictly below the radius.
      A non-finite distance raises ``DistanceOverflowError``.
    - Conjunctive: proximal iff every axis difference is strictly below the
      bound. An invalid axis difference raises ``AccumulatedError``.

    Args:
        threshold: The decision boundary.

    Returns:
        Comparator for pairs of points.
    """
    logger.debug("Defined proximity comparator", threshold=str(threshold))
    match threshold:
        case EuclideanThreshold():
            return ProximityComparable(_under(threshold, _within_radius))
        case ConjunctiveThreshold():
            return ProximityComparable(_under(threshold, _within_bound))
        case _:
            assert_never(threshold)


@overload
def define_proximity_pointwise(
    threshold: EuclideanThreshold | ConjunctiveThreshold,
) -> ProximityComparable[Point3D[Any]]: ...


@overload
def define_proximity_pointwise(
    threshold: EuclideanThreshold | ConjunctiveThreshold,
    project: Callable[[A], Point3D[Any]],
) -> ProximityComparable[A]: ...


def define_proximity_pointwise(
    threshold: EuclideanThreshold | ConjunctiveThreshold,
    project: Callable[[Any], Point3D[Any]] | None = None,
) -> ProximityComparable[Any]:
    """Define a proximity comparison, optionally on a type containing a point.

    Args:
        threshold: The decision boundary.
        project: Extracts the point from each compared value. If None,
            values are compared as points directly.

    Returns:
        Comparator for pairs of points, or of projected values.
    """
    comparator = proximity_for(threshold)
    if project is None:
        return comparator
    return comparator.contramap(project)


def threshold_from_settings(
    settings: Settings,
) -> EuclideanThreshold | ConjunctiveThreshold:
    """Build the configured default threshold.

    Args:
        settings: Settings providing PROXIMITY_METRIC and PROXIMITY_THRESHOLD.

    Returns:
        The threshold variant named by PROXIMITY_METRIC.

    Raises:
        ConfigError: If PROXIMITY_THRESHOLD is not configured.
        RefinementError: If the configured threshold is negative or NaN.
    """
    raw = settings.require_proximity_threshold()
    if settings.PROXIMITY_METRIC == "conjunctive":
        return conjunctive_threshold(raw)
    return euclidean_threshold(raw)
