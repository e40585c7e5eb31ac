"""Custom exceptions for distance computations.

Construction failures (a per-axis difference that cannot be refined) are
distinct from the comparison-time failure of a Euclidean distance that
overflowed. Each carries a ``user_message`` suitable for presenting to an
end user.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from locus.numeric import RefinementError

if TYPE_CHECKING:
    from locus.geometry.primitives import Axis, Point3D


class AxisDifferenceError(RefinementError):
    """Raised when the absolute difference along one axis is invalid.

    Attributes:
        axis: The axis whose difference could not be refined.
    """

    def __init__(self, axis: Axis, raw: Any, reason: str) -> None:
        self.axis = axis
        super().__init__(raw, reason)

    def __str__(self) -> str:
        return f"{self.axis.value}: {super().__str__()}"


class AccumulatedError(ValueError):
    """Raised when one or more axes of a piecewise distance are invalid.

    Every axis is attempted before raising, so ``errors`` lists all
    offending axes rather than only the first.

    Attributes:
        errors: One error per failed axis, in axis order.
        a: First point of the comparison.
        b: Second point of the comparison.
    """

    user_message = "invalid input point(s)"

    def __init__(
        self,
        errors: list[AxisDifferenceError],
        *,
        a: Point3D[Any],
        b: Point3D[Any],
    ) -> None:
        self.errors = errors
        self.a = a
        self.b = b
        details = "; ".join(str(e) for e in errors)
        super().__init__(
            f"Computing distance between point {a} and point {b} "
            f"yielded {len(errors)} error(s): {details}"
        )

    @property
    def axes(self) -> list[Axis]:
        """Return the axes that failed, in axis order."""
        return [e.axis for e in self.errors]


class DistanceOverflowError(ArithmeticError):
    """Raised when a Euclidean distance is not finite at comparison time.

    Treating such a distance as "not proximal" would hide a computation
    breakdown, e.g. points given in incompatible units.

    Attributes:
        a: First point of the comparison.
        b: Second point of the comparison.
    """

    user_message = "points too far apart to compare under this metric"

    def __init__(self, a: Point3D[Any], b: Point3D[Any]) -> None:
        self.a = a
        self.b = b
        super().__init__(f"Cannot compute finite distance between {a} and {b}")
