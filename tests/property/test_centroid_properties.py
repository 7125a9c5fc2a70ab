# tests/property/test_centroid_properties.py
"""Property tests for Centroid merging.

Integer-valued floats keep sums exact, so merge order can be compared with ==.
"""

from hypothesis import given
from hypothesis import strategies as st

from multikmeans.contracts.centroid import Centroid
from tests.property.settings import STANDARD_SETTINGS

exact_floats = st.integers(min_value=-10_000, max_value=10_000).map(float)
point_lists = st.lists(exact_floats, max_size=20)


def _fold(points: list[float]) -> Centroid:
    centroid = Centroid()
    for point in points:
        centroid.add_point(point)
    return centroid


def _state(centroid: Centroid) -> tuple[int, float | None]:
    return centroid.count, centroid.weighted_sum


@given(a=point_lists, b=point_lists)
@STANDARD_SETTINGS
def test_combine_is_commutative(a: list[float], b: list[float]) -> None:
    left = _fold(a).combine(_fold(b))
    right = _fold(b).combine(_fold(a))

    assert _state(left) == _state(right)


@given(a=point_lists, b=point_lists, c=point_lists)
@STANDARD_SETTINGS
def test_combine_is_associative(a: list[float], b: list[float], c: list[float]) -> None:
    grouped_left = _fold(a).combine(_fold(b)).combine(_fold(c))
    grouped_right = _fold(a).combine(_fold(b).combine(_fold(c)))

    assert _state(grouped_left) == _state(grouped_right)


@given(points=point_lists, split=st.integers(min_value=0, max_value=20))
@STANDARD_SETTINGS
def test_split_then_combine_equals_single_fold(points: list[float], split: int) -> None:
    merged = _fold(points[:split]).combine(_fold(points[split:]))

    assert _state(merged) == _state(_fold(points))


@given(a=point_lists, b=point_lists)
@STANDARD_SETTINGS
def test_combine_leaves_argument_untouched(a: list[float], b: list[float]) -> None:
    other = _fold(b)
    before = _state(other)

    _fold(a).combine(other)

    assert _state(other) == before
