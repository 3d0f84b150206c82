"""VLF transform: station sorting and KH derivative filter."""

from __future__ import annotations

from typing import Sequence

import numpy as np
from loguru import logger

from geoviz.config import VLFOptions
from geoviz.core.errors import EmptyDatasetError
from geoviz.core.models import RawRow, Series, TransformResult, VLFSample

IN_PHASE_LABEL = "In-Phase (%)"
QUADRATURE_LABEL = "Quadrature (%)"
KH_FILTER_LABEL = "KH Filter"
VLF_COLUMNS = 3


def rows_to_vlf_samples(rows: Sequence[RawRow]) -> tuple[list[VLFSample], list[str]]:
    """Map raw rows to VLF samples using columns 0, 1 and 2.

    Parameters
    ----------
    rows : Sequence[tuple[float, ...]]
        Parsed rows in input order. Extra columns are ignored.

    Returns
    -------
    tuple[list[VLFSample], list[str]]
        ``(samples, warnings)``. Rows with fewer than three columns are
        skipped and reported in ``warnings``.
    """
    samples: list[VLFSample] = []
    warnings: list[str] = []
    for index, row in enumerate(rows):
        if len(row) < VLF_COLUMNS:
            message = (
                f"row {index + 1}: expected {VLF_COLUMNS} columns "
                f"(station, in-phase, quadrature), got {len(row)}; skipped"
            )
            logger.warning(message)
            warnings.append(message)
            continue
        samples.append(VLFSample(station=row[0], in_phase=row[1], quadrature=row[2]))
    return samples, warnings


def sort_samples_by_station(samples: Sequence[VLFSample]) -> list[VLFSample]:
    """Sort samples ascending by station, keeping input order on ties."""
    if not samples:
        return []
    stations = np.asarray([sample.station for sample in samples], dtype=np.float64)
    order = np.argsort(stations, kind="stable")
    return [samples[int(index)] for index in order]


def compute_kh_filter(
    stations: np.ndarray,
    in_phase: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """Compute the KH derivative of in-phase against station.

    For each adjacent pair the filter value is the finite-difference slope
    placed at the interval midpoint. Zero-width intervals are skipped.

    Parameters
    ----------
    stations : numpy.ndarray
        Sorted station positions, shape ``(N,)``.
    in_phase : numpy.ndarray
        In-phase values aligned with ``stations``, shape ``(N,)``.

    Returns
    -------
    tuple[numpy.ndarray, numpy.ndarray]
        ``(x_mid, slope)`` with shape ``(M,)`` where
        ``M = N - 1 - (number of zero-width intervals)``.

    Examples
    --------
    >>> compute_kh_filter(np.asarray([0.0, 10.0, 20.0]), np.asarray([45.0, 55.0, 40.0]))
    (array([ 5., 15.]), array([ 1. , -1.5]))
    """
    station_array = np.asarray(stations, dtype=np.float64)
    in_phase_array = np.asarray(in_phase, dtype=np.float64)
    if station_array.ndim != 1 or in_phase_array.ndim != 1:
        raise ValueError("stations and in_phase must be 1D")
    if station_array.size != in_phase_array.size:
        raise ValueError("stations and in_phase must match length")
    if station_array.size < 2:
        empty = np.asarray([], dtype=np.float64)
        return empty, empty.copy()
    dx = np.diff(station_array)
    dy = np.diff(in_phase_array)
    valid = dx != 0
    x_mid = 0.5 * (station_array[:-1] + station_array[1:])
    return x_mid[valid], dy[valid] / dx[valid]


def transform_vlf(
    rows: Sequence[RawRow],
    options: VLFOptions | None = None,
) -> TransformResult:
    """Build VLF series and metrics from parsed rows.

    Parameters
    ----------
    rows : Sequence[tuple[float, ...]]
        Parsed rows of ``station, in-phase, quadrature``.
    options : VLFOptions, optional
        KH filter toggle and annotation capability flag.

    Returns
    -------
    TransformResult
        In-phase and quadrature series sorted by station, the KH filter
        series when enabled, and ``Points`` / ``Max Amp`` metrics.

    Raises
    ------
    EmptyDatasetError
        Raised when no row carries the three VLF columns.
    """
    options = options or VLFOptions()
    samples, warnings = rows_to_vlf_samples(rows)
    if not samples:
        raise EmptyDatasetError("vlf")
    ordered = sort_samples_by_station(samples)
    stations = np.asarray([s.station for s in ordered], dtype=np.float64)
    in_phase = np.asarray([s.in_phase for s in ordered], dtype=np.float64)
    quadrature = np.asarray([s.quadrature for s in ordered], dtype=np.float64)

    series = [
        Series(
            label=IN_PHASE_LABEL,
            points=_pairs(stations, in_phase),
            style_hint={"role": "primary", "axis": "y"},
        ),
        Series(
            label=QUADRATURE_LABEL,
            points=_pairs(stations, quadrature),
            style_hint={"role": "primary", "axis": "y"},
        ),
    ]
    if options.derivative_enabled:
        x_mid, slope = compute_kh_filter(stations, in_phase)
        skipped = stations.size - 1 - x_mid.size
        if skipped:
            logger.debug(f"KH filter skipped {skipped} zero-width interval(s)")
        series.append(
            Series(
                label=KH_FILTER_LABEL,
                points=_pairs(x_mid, slope),
                style_hint={"role": "filter", "axis": "yKH"},
            )
        )

    metrics = {
        "Points": len(ordered),
        "Max Amp": float(np.max(in_phase)),
    }
    logger.debug(f"VLF transform built {len(series)} series from {len(ordered)} samples")
    return TransformResult(
        series=tuple(series), metrics=metrics, warnings=tuple(warnings)
    )


def _pairs(x_values: np.ndarray, y_values: np.ndarray) -> tuple[tuple[float, float], ...]:
    """Zip two arrays into a tuple of float pairs."""
    return tuple((float(x), float(y)) for x, y in zip(x_values, y_values))
