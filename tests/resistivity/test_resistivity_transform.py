"""Tests for the resistivity transform and spacing groups."""

from __future__ import annotations

import math

import pytest

from geoviz.config import ArrayType, ResistivityOptions
from geoviz.core.errors import EmptyDatasetError
from geoviz.core.models import DerivedResistivityPoint, ResistivitySample
from geoviz.core.resistivity import (
    derive_point,
    effective_geometric_factor,
    group_by_spacing,
    rows_to_resistivity_samples,
    spacing_key,
    transform_resistivity,
)


def test_explicit_rho_is_used_as_is() -> None:
    """Column 6 wins over ``k * r``."""
    result = transform_resistivity([(0, 10, 20, 30, 62.8, 10, 628)], "wenner")

    assert result.series[0].label == "Spacing a=10.0m"
    assert result.series[0].points == ((15.0, 628.0),)
    assert result.warnings == ()


def test_wenner_geometric_factor_fallback() -> None:
    """Missing ``k`` with a Wenner array uses ``2 * pi * a``."""
    point = derive_point(ResistivitySample(0, 10, 20, 30, 0, 10), ArrayType.WENNER)

    assert point.spacing == 10
    assert point.midpoint == 15
    assert point.k_effective == pytest.approx(2 * math.pi * 10)
    assert point.apparent_resistivity == pytest.approx(628.3, abs=0.05)
    assert point.geometry_fallback is False


def test_missing_geometry_falls_back_to_unit_factor_with_warning() -> None:
    """``k == 0`` on a non-Wenner array uses ``k = 1`` and is reported."""
    result = transform_resistivity([(0, 10, 20, 30, 0, 7.5)], ArrayType.OTHER)

    assert result.series[0].points == ((15.0, 7.5),)
    assert len(result.warnings) == 1
    assert "geometric factor set to 1" in result.warnings[0]
    assert effective_geometric_factor(0.0, 10.0, "other") == (1.0, True)


def test_nonzero_k_takes_precedence_over_array_geometry() -> None:
    """A supplied ``k`` is used for any array type."""
    assert effective_geometric_factor(125.6, 20.0, "wenner") == (125.6, False)
    assert effective_geometric_factor(-3.0, 20.0, "other") == (-3.0, False)


def test_absent_rho_is_none_not_zero() -> None:
    """Six-column rows leave ``rho_raw`` as ``None``; short rows are skipped."""
    samples, warnings = rows_to_resistivity_samples(
        [(0, 10, 20, 30, 5, 2), (0, 10, 20, 30, 5, 2, 0.0), (1, 2, 3)]
    )

    assert samples[0].rho_raw is None
    assert samples[1].rho_raw == 0.0
    assert len(samples) == 2
    assert len(warnings) == 1


def test_spacing_is_absolute_and_midpoint_uses_outer_electrodes() -> None:
    """Reversed electrode order still gives a positive spacing."""
    point = derive_point(ResistivitySample(30, 20, 10, 0, 2, 3), "other")

    assert point.spacing == 10
    assert point.midpoint == 15
    assert point.apparent_resistivity == 6


def test_groups_are_ordered_by_numeric_spacing_not_string_or_discovery() -> None:
    """Spacing 5 sorts before 10 and 100 regardless of input order."""
    rows = [
        (0, 100, 200, 300, 1, 1),
        (0, 10, 20, 30, 1, 2),
        (0, 5, 10, 15, 1, 3),
        (10, 20, 30, 40, 1, 4),
    ]
    result = transform_resistivity(rows)

    labels = [series.label for series in result.series]
    assert labels == ["Spacing a=5.0m", "Spacing a=10.0m", "Spacing a=100.0m"]
    assert result.metrics == {"Layers": 3, "Total Pts": 4}


def test_points_within_group_sorted_by_midpoint() -> None:
    """Group members are ascending by midpoint."""
    rows = [(40, 50, 60, 70, 1, 1), (0, 10, 20, 30, 1, 2), (20, 30, 40, 50, 1, 3)]
    result = transform_resistivity(rows)

    assert result.series[0].xs == [15.0, 35.0, 55.0]
    assert result.series[0].ys == [2.0, 3.0, 1.0]


def test_near_equal_spacings_share_a_group() -> None:
    """Floating noise below the rounding step lands in one group."""
    rows = [(0, 10.0001, 20, 30, 1, 1), (5, 14.9999, 25, 35, 1, 1)]
    result = transform_resistivity(rows)

    assert len(result.series) == 1
    assert result.series[0].label == "Spacing a=10.0m"


@pytest.mark.parametrize(
    "spacing,expected",
    [(0.25, "0.3"), (1.25, "1.3"), (2.25, "2.3"), (0.3, "0.3"), (0.0, "0.0"), (10.04, "10.0")],
)
def test_spacing_key_rounds_ties_up(spacing: float, expected: str) -> None:
    """Exact half steps round up to the next tenth."""
    assert spacing_key(spacing) == expected


def test_half_step_spacing_joins_the_upper_group() -> None:
    """Spacings 0.25 and 0.3 share the ``a=0.3`` level."""
    rows = [(0, 0.25, 0.5, 0.75, 1, 1), (0, 0.3, 0.6, 0.9, 1, 2)]
    result = transform_resistivity(rows)

    assert [s.label for s in result.series] == ["Spacing a=0.3m"]
    assert result.metrics == {"Layers": 1, "Total Pts": 2}


def test_grouping_is_deterministic() -> None:
    """Identical input gives identical group and point order."""
    rows = [(x, x + a, x + 2 * a, x + 3 * a, 0, 1) for a in (20, 10) for x in (30, 0, 10)]
    first = transform_resistivity(rows)
    second = transform_resistivity(list(rows))

    assert first.series == second.series
    assert [s.style_hint["spacing"] for s in first.series] == [10.0, 20.0]


def test_group_by_spacing_empty_and_options_variant() -> None:
    """Empty grouping returns no groups; options object is accepted."""
    assert group_by_spacing([]) == []
    groups = group_by_spacing(
        [DerivedResistivityPoint(midpoint=1.0, apparent_resistivity=2.0, spacing=3.0)]
    )
    assert groups[0][0] == "3.0"
    result = transform_resistivity(
        [(0, 10, 20, 30, 0, 1)], ResistivityOptions(array_type=ArrayType.OTHER)
    )
    assert result.warnings


def test_empty_dataset_raises() -> None:
    """No row with six columns raises ``EmptyDatasetError``."""
    with pytest.raises(EmptyDatasetError):
        transform_resistivity([(0, 10, 20)])
    with pytest.raises(EmptyDatasetError):
        transform_resistivity([])


def test_unknown_array_type_raises_value_error() -> None:
    """Array type outside the enum is rejected."""
    with pytest.raises(ValueError):
        transform_resistivity([(0, 10, 20, 30, 0, 1)], "dipole")
