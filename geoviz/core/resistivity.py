"""Resistivity transform: apparent resistivity, midpoints and spacing groups.

Geometric factor resolution order:

1. an explicit apparent resistivity in column 6 is used as-is;
2. a nonzero ``k`` in column 4 gives ``rho = k * r``;
3. for a Wenner array, ``k = 2 * pi * a``;
4. otherwise ``k = 1``.

Step 4 is an approximation with no physical basis for a general array. It
keeps such rows plottable, and every affected row is reported as a
warning.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

import pandas as pd
from loguru import logger

from geoviz.config import ArrayType, ResistivityOptions
from geoviz.core.errors import EmptyDatasetError
from geoviz.core.models import (
    DerivedResistivityPoint,
    RawRow,
    ResistivitySample,
    Series,
    TransformResult,
)

MIN_COLUMNS = 6
RHO_COLUMN = 6
FALLBACK_K = 1.0


def rows_to_resistivity_samples(
    rows: Sequence[RawRow],
) -> tuple[list[ResistivitySample], list[str]]:
    """Map raw rows to resistivity samples using columns 0 to 6.

    Parameters
    ----------
    rows : Sequence[tuple[float, ...]]
        Parsed rows of ``p1, p2, p3, p4, k, r[, rho]``.

    Returns
    -------
    tuple[list[ResistivitySample], list[str]]
        ``(samples, warnings)``. Rows with fewer than six columns are
        skipped and reported.
    """
    samples: list[ResistivitySample] = []
    warnings: list[str] = []
    for index, row in enumerate(rows):
        if len(row) < MIN_COLUMNS:
            message = (
                f"row {index + 1}: expected at least {MIN_COLUMNS} columns "
                f"(p1, p2, p3, p4, k, r), got {len(row)}; skipped"
            )
            logger.warning(message)
            warnings.append(message)
            continue
        rho_raw = row[RHO_COLUMN] if len(row) > RHO_COLUMN else None
        samples.append(ResistivitySample(*row[:MIN_COLUMNS], rho_raw=rho_raw))
    return samples, warnings


def electrode_spacing(sample: ResistivitySample) -> float:
    """Return spacing ``a = |p2 - p1|``."""
    return abs(sample.p2 - sample.p1)


def effective_geometric_factor(
    k: float,
    spacing: float,
    array_type: ArrayType | str,
) -> tuple[float, bool]:
    """Resolve the geometric factor used when no resistivity is given.

    Parameters
    ----------
    k : float
        Geometric factor from the input, ``0`` when not supplied.
    spacing : float
        Electrode spacing ``a``.
    array_type : ArrayType | str
        Array geometry.

    Returns
    -------
    tuple[float, bool]
        ``(k_effective, fallback_used)``. ``fallback_used`` is ``True`` only
        when neither ``k`` nor Wenner geometry was available and the
        factor defaulted to ``1``.

    Examples
    --------
    >>> effective_geometric_factor(0.0, 10.0, "wenner")[0]
    62.83185307179586
    >>> effective_geometric_factor(0.0, 10.0, "other")
    (1.0, True)
    """
    if k != 0:
        return float(k), False
    if ArrayType(array_type) == ArrayType.WENNER:
        return 2.0 * math.pi * spacing, False
    return FALLBACK_K, True


def derive_point(
    sample: ResistivitySample,
    array_type: ArrayType | str,
) -> DerivedResistivityPoint:
    """Derive midpoint, spacing and apparent resistivity for one sample."""
    spacing = electrode_spacing(sample)
    midpoint = (sample.p1 + sample.p4) / 2.0
    if sample.rho_raw is not None:
        return DerivedResistivityPoint(
            midpoint=midpoint,
            apparent_resistivity=sample.rho_raw,
            spacing=spacing,
        )
    k_effective, fallback = effective_geometric_factor(sample.k, spacing, array_type)
    return DerivedResistivityPoint(
        midpoint=midpoint,
        apparent_resistivity=k_effective * sample.r,
        spacing=spacing,
        k_effective=k_effective,
        geometry_fallback=fallback,
    )


def spacing_key(spacing: float) -> str:
    """Group key for a spacing, rounded to one decimal place.

    Ties round up on the exact binary value, so ``0.25`` keys as ``"0.3"``.
    """
    key = Decimal(spacing).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return format(key, "f")


def group_by_spacing(
    points: Sequence[DerivedResistivityPoint],
) -> list[tuple[str, list[DerivedResistivityPoint]]]:
    """Group derived points by rounded spacing.

    Parameters
    ----------
    points : Sequence[DerivedResistivityPoint]
        Derived points in input order.

    Returns
    -------
    list[tuple[str, list[DerivedResistivityPoint]]]
        ``(key, members)`` ordered by ascending numeric spacing; members
        sorted ascending by midpoint, ties kept in input order.
    """
    if not points:
        return []
    frame = pd.DataFrame(
        {
            "key": [spacing_key(p.spacing) for p in points],
            "midpoint": [p.midpoint for p in points],
            "position": range(len(points)),
        }
    )
    frame["key_value"] = frame["key"].astype(float)
    frame = frame.sort_values(
        by=["key_value", "midpoint", "position"], kind="stable"
    )
    groups: list[tuple[str, list[DerivedResistivityPoint]]] = []
    for key, group_df in frame.groupby("key", sort=False):
        groups.append((str(key), [points[int(i)] for i in group_df["position"]]))
    return groups


def transform_resistivity(
    rows: Sequence[RawRow],
    array_type: ArrayType | str | ResistivityOptions = ArrayType.WENNER,
) -> TransformResult:
    """Build per-spacing resistivity series and metrics.

    Parameters
    ----------
    rows : Sequence[tuple[float, ...]]
        Parsed rows of ``p1, p2, p3, p4, k, r[, rho]``.
    array_type : ArrayType | str | ResistivityOptions, optional
        Array geometry used when both ``rho`` and ``k`` are missing.

    Returns
    -------
    TransformResult
        One series per spacing level labeled ``"Spacing a=<a>m"``, with
        ``Layers`` and ``Total Pts`` metrics.

    Raises
    ------
    EmptyDatasetError
        Raised when no row carries the six required columns.
    """
    if isinstance(array_type, ResistivityOptions):
        array_type = array_type.array_type
    array_type = ArrayType(array_type)
    samples, warnings = rows_to_resistivity_samples(rows)
    if not samples:
        raise EmptyDatasetError("resistivity")
    derived = [derive_point(sample, array_type) for sample in samples]

    fallback_count = sum(1 for p in derived if p.geometry_fallback)
    if fallback_count:
        message = (
            f"{fallback_count} row(s) have k=0 and no resistivity with a "
            f"'{array_type.value}' array; geometric factor set to 1"
        )
        logger.warning(message)
        warnings.append(message)

    series = []
    for key, members in group_by_spacing(derived):
        series.append(
            Series(
                label=f"Spacing a={key}m",
                points=tuple((p.midpoint, p.apparent_resistivity) for p in members),
                style_hint={"role": "level", "spacing": float(key)},
            )
        )
    metrics = {"Layers": len(series), "Total Pts": len(derived)}
    logger.debug(f"Resistivity transform built {len(series)} spacing level(s)")
    return TransformResult(
        series=tuple(series), metrics=metrics, warnings=tuple(warnings)
    )
