"""Record and series entities shared by the transform modules.

All entities are frozen. A new set is built for every plot request and
nothing survives past the next parse.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

RawRow = tuple[float, ...]
Point = tuple[float, float]
SummaryMetrics = dict[str, Any]


@dataclass(frozen=True)
class VLFSample:
    """Single VLF station reading.

    Parameters
    ----------
    station : float
        Station position along the survey line.
    in_phase : float
        In-phase response in percent.
    quadrature : float
        Quadrature response in percent.
    """

    station: float
    in_phase: float
    quadrature: float


@dataclass(frozen=True)
class ResistivitySample:
    """Single four-electrode resistivity reading.

    Parameters
    ----------
    p1, p2, p3, p4 : float
        Electrode positions.
    k : float
        Geometric factor, ``0`` when the operator did not supply one.
    r : float
        Measured resistance.
    rho_raw : float | None
        Apparent resistivity given in the input, ``None`` when the optional
        seventh column is absent.
    """

    p1: float
    p2: float
    p3: float
    p4: float
    k: float
    r: float
    rho_raw: float | None = None


@dataclass(frozen=True)
class DerivedResistivityPoint:
    """Plottable point derived from one resistivity sample."""

    midpoint: float
    apparent_resistivity: float
    spacing: float
    k_effective: float | None = None
    geometry_fallback: bool = False


@dataclass(frozen=True)
class Series:
    """Ordered, labeled point series.

    Parameters
    ----------
    label : str
        Legend label.
    points : tuple[tuple[float, float], ...]
        ``(x, y)`` pairs sorted ascending by ``x``.
    style_hint : dict[str, Any]
        Opaque rendering hints, filled in by the assembler.
    """

    label: str
    points: tuple[Point, ...]
    style_hint: dict[str, Any] = field(default_factory=dict)

    @property
    def xs(self) -> list[float]:
        return [point[0] for point in self.points]

    @property
    def ys(self) -> list[float]:
        return [point[1] for point in self.points]

    def __len__(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class TransformResult:
    """Output shared by both mode transforms.

    Parameters
    ----------
    series : tuple[Series, ...]
        Series in emission order; the order drives colour cycling.
    metrics : dict[str, Any]
        Summary metrics keyed by display name.
    warnings : tuple[str, ...]
        Non-fatal conditions met during the transform.
    """

    series: tuple[Series, ...]
    metrics: SummaryMetrics
    warnings: tuple[str, ...] = ()

    def get_series(self, label: str) -> Series | None:
        """Return the series with ``label`` or ``None``."""
        for item in self.series:
            if item.label == label:
                return item
        return None
