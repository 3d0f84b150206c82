"""Dependency contract tests for the runtime stack.

This module locks expected runtime dependency behavior.
"""

from pathlib import Path
import tomllib

PYPROJECT = Path(__file__).resolve().parents[1] / "pyproject.toml"


def _load_pyproject() -> dict:
    return tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))


def test_runtime_dependencies_contract() -> None:
    """Ensure runtime dependencies include the numeric and logging stack.

    Returns
    -------
    None
    """
    deps = _load_pyproject()["project"]["dependencies"]
    for name in ("numpy", "pandas", "loguru"):
        assert any(dep.startswith(name) for dep in deps)


def test_no_gui_or_gis_runtime_dependencies() -> None:
    """Ensure the transform core does not pull GUI or GIS stacks.

    Returns
    -------
    None
    """
    deps = _load_pyproject()["project"]["dependencies"]
    for name in ("PySide6", "pyqtgraph", "geopandas", "torch"):
        assert not any(dep.startswith(name) for dep in deps)
