"""Synthetic survey text for demos and smoke checks."""

from __future__ import annotations

import numpy as np

from geoviz.config import Mode


def _rng(seed: int | np.random.Generator | None) -> np.random.Generator:
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def generate_vlf_sample(seed: int | np.random.Generator | None = None) -> str:
    """Generate a VLF line with a crossover anomaly at station 50.

    Parameters
    ----------
    seed : int | numpy.random.Generator | None, optional
        Seed or generator for the in-phase noise.

    Returns
    -------
    str
        Tab-separated ``station, in-phase, quadrature`` lines for stations
        ``0..100`` every 5 m.
    """
    rng = _rng(seed)
    lines = []
    for station in range(0, 101, 5):
        in_phase = 40 * np.sin((station - 50) / 20) + rng.random() * 2
        quadrature = 20 * np.cos((station - 50) / 20)
        lines.append(f"{station}\t{in_phase:.1f}\t{quadrature:.1f}")
    return "\n".join(lines) + "\n"


def generate_resistivity_sample(seed: int | np.random.Generator | None = None) -> str:
    """Generate a two-level Wenner profile.

    Level ``a=10`` has eleven readings and level ``a=20`` nine, each row as
    ``p1, p2, p3, p4, k, r`` with the Wenner geometric factor filled in.
    """
    rng = _rng(seed)
    lines = []
    for x in range(0, 101, 10):
        resistance = 10 + rng.random()
        lines.append(f"{x}\t{x + 10}\t{x + 20}\t{x + 30}\t62.8\t{resistance:.1f}")
    for x in range(0, 81, 10):
        resistance = 5 + rng.random()
        lines.append(f"{x}\t{x + 20}\t{x + 40}\t{x + 60}\t125.6\t{resistance:.1f}")
    return "\n".join(lines) + "\n"


def generate_sample(mode: Mode | str, seed: int | np.random.Generator | None = None) -> str:
    """Generate sample text for ``mode``."""
    if Mode(mode) == Mode.VLF:
        return generate_vlf_sample(seed)
    return generate_resistivity_sample(seed)
