"""Geometry primitives for locus.

This module provides immutable value types for spot centroids in 3D
image space. A coordinate is a single numeric value tagged with its axis
so that, e.g., an x value cannot be compared with or passed as a z value.
Both coordinates and points are generic over the numeric representation,
serving integer pixel indices as well as floating-point physical positions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Generic, TypeVar

C = TypeVar("C", int, float)


class Axis(str, Enum):
    """Spatial axis of a coordinate."""

    X = "x"
    Y = "y"
    Z = "z"


@dataclass(frozen=True, order=True)
class Coordinate(Generic[C]):
    """A numeric value along a single axis.

    Equality, hashing, and ordering are structural on the wrapped value and
    only defined between coordinates of the same axis.

    Attributes:
        value: The raw coordinate value.
    """

    value: C
    axis: ClassVar[Axis]

    def __post_init__(self) -> None:
        if type(self) is Coordinate:
            raise TypeError("Coordinate has no axis; use an axis-specific subclass")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, order=True)
class XCoordinate(Coordinate[C]):
    """Coordinate along the x axis."""

    axis: ClassVar[Axis] = Axis.X


@dataclass(frozen=True, order=True)
class YCoordinate(Coordinate[C]):
    """Coordinate along the y axis."""

    axis: ClassVar[Axis] = Axis.Y


@dataclass(frozen=True, order=True)
class ZCoordinate(Coordinate[C]):
    """Coordinate along the z axis."""

    axis: ClassVar[Axis] = Axis.Z


@dataclass(frozen=True, order=True)
class Point3D(Generic[C]):
    """A point in 3D image space, e.g. the centroid of a detected spot.

    Attributes:
        x: Position along the x axis.
        y: Position along the y axis.
        z: Position along the z axis.
    """

    x: XCoordinate[C]
    y: YCoordinate[C]
    z: ZCoordinate[C]

    @property
    def coordinates(self) -> tuple[XCoordinate[C], YCoordinate[C], ZCoordinate[C]]:
        """Return the (x, y, z) coordinates in axis order."""
        return (self.x, self.y, self.z)

    def to_tuple(self) -> tuple[C, C, C]:
        """Convert to raw (x, y, z) tuple."""
        return (self.x.value, self.y.value, self.z.value)

    @classmethod
    def from_tuple(cls, coords: tuple[C, C, C]) -> Point3D[C]:
        """Create Point3D from raw (x, y, z) tuple."""
        x, y, z = coords
        return cls(x=XCoordinate(x), y=YCoordinate(y), z=ZCoordinate(z))

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"
