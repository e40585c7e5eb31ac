"""Unit tests for proximity comparators.

Tests proximity_for and ProximityComparable including:
- Euclidean radius semantics (strict boundary, overflow)
- Conjunctive per-axis semantics
- Contravariant lifting onto record types
- Construction from settings
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import pytest
from hypothesis import given
from hypothesis import strategies as st
from structlog.contextvars import get_contextvars
from structlog.testing import LogCapture

from locus.config import ConfigError, Settings
from locus.geometry import (
    AccumulatedError,
    ConjunctiveThreshold,
    DistanceOverflowError,
    EuclideanThreshold,
    Point3D,
    ProximityComparable,
    conjunctive_threshold,
    define_proximity_pointwise,
    euclidean,
    euclidean_threshold,
    proximity_for,
    threshold_from_settings,
)
from locus.numeric import RefinementError

coords = st.integers(min_value=-1000, max_value=1000)
points = st.tuples(coords, coords, coords).map(Point3D.from_tuple)
thresholds = st.one_of(
    st.integers(min_value=0, max_value=2000).map(euclidean_threshold),
    st.integers(min_value=0, max_value=2000).map(conjunctive_threshold),
)


@dataclass(frozen=True)
class DetectedSpot:
    """Minimal downstream record carrying a centroid."""

    label: str
    centroid: Point3D[float]


class TestEuclideanProximity:
    """Tests for comparators built from a EuclideanThreshold."""

    def test_exactly_at_radius_is_not_proximal(self, origin: Point3D[int]) -> None:
        b = Point3D.from_tuple((3, 4, 0))
        assert proximity_for(euclidean_threshold(5.0)).proximal(origin, b) is False

    def test_just_beyond_radius_is_proximal(self, origin: Point3D[int]) -> None:
        b = Point3D.from_tuple((3, 4, 0))
        assert proximity_for(euclidean_threshold(5.1)).proximal(origin, b) is True

    def test_next_representable_radius_is_proximal(self) -> None:
        a = Point3D.from_tuple((0.0, 0.0, 0.0))
        b = Point3D.from_tuple((0.0, 0.0, 2.5))
        radius = math.nextafter(2.5, math.inf)
        assert not proximity_for(euclidean_threshold(2.5)).proximal(a, b)
        assert proximity_for(euclidean_threshold(radius)).proximal(a, b)

    def test_zero_radius_never_proximal(self, origin: Point3D[int]) -> None:
        assert not proximity_for(euclidean_threshold(0)).proximal(origin, origin)

    def test_comparator_is_callable(self, origin: Point3D[int]) -> None:
        near = proximity_for(euclidean_threshold(1))
        assert near(origin, origin)

    def test_overflow_raises(self) -> None:
        a = Point3D.from_tuple((-1e308, 0.0, 0.0))
        b = Point3D.from_tuple((1e308, 0.0, 0.0))
        comparator = proximity_for(euclidean_threshold(math.inf))
        with pytest.raises(DistanceOverflowError) as exc_info:
            comparator.proximal(a, b)
        assert exc_info.value.a is a
        assert exc_info.value.b is b
        assert "Cannot compute finite distance" in str(exc_info.value)

    def test_large_finite_coordinates_raise_overflow(
        self, origin: Point3D[int]
    ) -> None:
        b = Point3D.from_tuple((1e200, 0.0, 0.0))
        with pytest.raises(DistanceOverflowError) as exc_info:
            proximity_for(euclidean_threshold(1.0)).proximal(origin, b)
        assert exc_info.value.b is b

    def test_overflow_user_message(self) -> None:
        a = Point3D.from_tuple((0, 0, 0))
        b = Point3D.from_tuple((10**400, 0, 0))
        with pytest.raises(DistanceOverflowError) as exc_info:
            proximity_for(euclidean_threshold(1)).proximal(a, b)
        assert exc_info.value.user_message == (
            "points too far apart to compare under this metric"
        )

    def test_overflow_is_logged_with_threshold(self, log_output: LogCapture) -> None:
        a = Point3D.from_tuple((-1e308, 0.0, 0.0))
        b = Point3D.from_tuple((1e308, 0.0, 0.0))
        comparator = proximity_for(euclidean_threshold(1))
        with pytest.raises(DistanceOverflowError):
            comparator.proximal(a, b)
        warnings = [e for e in log_output.entries if e["log_level"] == "warning"]
        assert len(warnings) == 1
        assert warnings[0]["metric"] == "euclidean"
        assert warnings[0]["threshold"] == "EuclideanThreshold(1.0)"
        assert get_contextvars() == {}

    @given(a=points, b=points, radius=st.integers(min_value=0, max_value=4000))
    def test_matches_distance_comparison(
        self, a: Point3D[int], b: Point3D[int], radius: int
    ) -> None:
        expected = float(euclidean(a, b)) < radius
        assert proximity_for(euclidean_threshold(radius)).proximal(a, b) is expected


class TestConjunctiveProximity:
    """Tests for comparators built from a ConjunctiveThreshold."""

    def test_single_axis_exceeding_disqualifies(self, origin: Point3D[int]) -> None:
        b = Point3D.from_tuple((1, 1, 5))
        assert proximity_for(conjunctive_threshold(2)).proximal(origin, b) is False

    def test_all_axes_within(self, origin: Point3D[int]) -> None:
        b = Point3D.from_tuple((1, 1, 5))
        assert proximity_for(conjunctive_threshold(6)).proximal(origin, b) is True

    @pytest.mark.parametrize(
        "offset",
        [(2, 0, 0), (0, 2, 0), (0, 0, 2), (0, 0, -2), (3, 0, 0)],
    )
    def test_axis_at_or_beyond_bound_disqualifies(
        self, origin: Point3D[int], offset: tuple[int, int, int]
    ) -> None:
        comparator = proximity_for(conjunctive_threshold(2))
        assert comparator.proximal(origin, Point3D.from_tuple((1, 1, 1)))
        assert not comparator.proximal(origin, Point3D.from_tuple(offset))

    def test_invalid_axis_propagates(self) -> None:
        a = Point3D.from_tuple((math.nan, 0.0, math.nan))
        b = Point3D.from_tuple((0.0, 0.0, 0.0))
        with pytest.raises(AccumulatedError) as exc_info:
            proximity_for(conjunctive_threshold(1)).proximal(a, b)
        assert len(exc_info.value.errors) == 2

    def test_invalid_axis_is_logged_with_threshold(
        self, log_output: LogCapture
    ) -> None:
        a = Point3D.from_tuple((0.0, math.nan, 0.0))
        with pytest.raises(AccumulatedError):
            proximity_for(conjunctive_threshold(2)).proximal(a, a)
        warnings = [e for e in log_output.entries if e["log_level"] == "warning"]
        assert warnings[0]["event"] == "Piecewise distance failed"
        assert warnings[0]["axes"] == ["y"]
        assert warnings[0]["metric"] == "conjunctive"
        assert warnings[0]["threshold"] == "ConjunctiveThreshold(2.0)"
        assert get_contextvars() == {}

    def test_overflowing_difference_is_not_proximal(self) -> None:
        a = Point3D.from_tuple((-1e308, 0.0, 0.0))
        b = Point3D.from_tuple((1e308, 0.0, 0.0))
        assert not proximity_for(conjunctive_threshold(math.inf)).proximal(a, b)

    @given(a=points, b=points, bound=st.integers(min_value=0, max_value=2000))
    def test_matches_per_axis_comparison(
        self, a: Point3D[int], b: Point3D[int], bound: int
    ) -> None:
        expected = all(
            abs(p - q) < bound for p, q in zip(a.to_tuple(), b.to_tuple())
        )
        assert proximity_for(conjunctive_threshold(bound)).proximal(a, b) is expected


class TestProximityProperties:
    """Properties shared by every comparator."""

    @given(threshold=thresholds, a=points, b=points)
    def test_symmetric(
        self,
        threshold: EuclideanThreshold | ConjunctiveThreshold,
        a: Point3D[int],
        b: Point3D[int],
    ) -> None:
        comparator = proximity_for(threshold)
        assert comparator.proximal(a, b) == comparator.proximal(b, a)

    @given(threshold=thresholds, a=points, b=points)
    def test_contramap_identity(
        self,
        threshold: EuclideanThreshold | ConjunctiveThreshold,
        a: Point3D[int],
        b: Point3D[int],
    ) -> None:
        comparator = proximity_for(threshold)
        lifted = comparator.contramap(lambda p: p)
        assert lifted.proximal(a, b) == comparator.proximal(a, b)


class TestContramap:
    """Tests for lifting comparators onto record types."""

    def test_lift_onto_record(self) -> None:
        near = proximity_for(euclidean_threshold(2)).contramap(
            lambda spot: spot.centroid
        )
        s1 = DetectedSpot("a", Point3D.from_tuple((0.0, 0.0, 0.0)))
        s2 = DetectedSpot("b", Point3D.from_tuple((0.0, 1.0, 0.0)))
        s3 = DetectedSpot("c", Point3D.from_tuple((0.0, 3.0, 0.0)))
        assert near.proximal(s1, s2)
        assert not near.proximal(s1, s3)

    def test_contramap_composes(self) -> None:
        near = proximity_for(conjunctive_threshold(1))
        by_spot = near.contramap(lambda spot: spot.centroid)
        by_pair = by_spot.contramap(lambda pair: pair[1])
        spot = DetectedSpot("a", Point3D.from_tuple((0.0, 0.0, 0.0)))
        assert by_pair.proximal(("x", spot), ("y", spot))

    def test_plain_predicate(self) -> None:
        same_parity = ProximityComparable(lambda a, b: a % 2 == b % 2)
        by_length = same_parity.contramap(len)
        assert by_length.proximal("ab", "abcd")
        assert not by_length.proximal("ab", "abc")


class TestDefineProximityPointwise:
    """Tests for define_proximity_pointwise."""

    def test_without_projection_compares_points(self, origin: Point3D[int]) -> None:
        comparator = define_proximity_pointwise(euclidean_threshold(1))
        assert comparator.proximal(origin, origin)

    def test_with_projection(self) -> None:
        comparator = define_proximity_pointwise(
            conjunctive_threshold(1), lambda spot: spot.centroid
        )
        s1 = DetectedSpot("a", Point3D.from_tuple((0.0, 0.0, 0.0)))
        s2 = DetectedSpot("b", Point3D.from_tuple((0.5, 0.5, 0.5)))
        s3 = DetectedSpot("c", Point3D.from_tuple((0.5, 0.5, 1.5)))
        assert comparator.proximal(s1, s2)
        assert not comparator.proximal(s1, s3)


class TestThresholdFromSettings:
    """Tests for threshold_from_settings."""

    def test_euclidean_default(self, test_settings: Settings) -> None:
        assert threshold_from_settings(test_settings) == euclidean_threshold(5.0)

    def test_conjunctive(self) -> None:
        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
            PROXIMITY_METRIC="conjunctive",
            PROXIMITY_THRESHOLD=1.5,
        )
        assert threshold_from_settings(settings) == conjunctive_threshold(1.5)

    def test_missing_threshold(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PROXIMITY_THRESHOLD", raising=False)
        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
        )
        with pytest.raises(ConfigError):
            threshold_from_settings(settings)

    def test_negative_threshold(self) -> None:
        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
            PROXIMITY_THRESHOLD=-1.0,
        )
        with pytest.raises(RefinementError):
            threshold_from_settings(settings)
