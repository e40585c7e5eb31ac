"""Geometry module for locus.

This package provides the 3D point model, distance metrics, and proximity
predicates used to decide whether two detected spots are close enough to
be linked or merged.

Key Components:
    - Primitives: Axis-tagged coordinates and Point3D
    - Distance: Euclidean and piecewise (per-axis) metrics
    - Thresholds: EuclideanThreshold and ConjunctiveThreshold
    - Proximity: ProximityComparable and its contravariant lifting

Example:
    from locus.geometry import (
        Point3D,
        conjunctive_threshold,
        piecewise,
        proximity_for,
    )

    a = Point3D.from_tuple((0, 0, 0))
    b = Point3D.from_tuple((1, 1, 5))
    piecewise(a, b).to_tuple()  # (1.0, 1.0, 5.0)

    proximity_for(conjunctive_threshold(2)).proximal(a, b)  # False, z fails
"""

from locus.geometry.distance import (
    EuclideanDistance,
    PiecewiseDistance,
    euclidean,
    euclidean_by,
    piecewise,
)
from locus.geometry.exceptions import (
    AccumulatedError,
    AxisDifferenceError,
    DistanceOverflowError,
)
from locus.geometry.primitives import (
    Axis,
    Point3D,
    XCoordinate,
    YCoordinate,
    ZCoordinate,
)
from locus.geometry.proximity import (
    ProximityComparable,
    define_proximity_pointwise,
    proximity_for,
    threshold_from_settings,
)
from locus.geometry.thresholds import (
    ConjunctiveThreshold,
    DistanceThreshold,
    EuclideanThreshold,
    conjunctive_threshold,
    euclidean_threshold,
    parse_threshold,
)

__all__ = [
    "AccumulatedError",
    "Axis",
    "AxisDifferenceError",
    "ConjunctiveThreshold",
    "DistanceOverflowError",
    "DistanceThreshold",
    "EuclideanDistance",
    "EuclideanThreshold",
    "Point3D",
    "PiecewiseDistance",
    "ProximityComparable",
    "XCoordinate",
    "YCoordinate",
    "ZCoordinate",
    "conjunctive_threshold",
    "define_proximity_pointwise",
    "euclidean",
    "euclidean_by",
    "euclidean_threshold",
    "parse_threshold",
    "piecewise",
    "proximity_for",
    "threshold_from_settings",
]
