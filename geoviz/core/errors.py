"""Exception types raised by the transformation pipeline."""

from __future__ import annotations


class GeoVizError(Exception):
    """Root of the GeoViz exception hierarchy."""


class EmptyDatasetError(GeoVizError):
    """Raised when no usable rows remain after parsing and record mapping.

    Parameters
    ----------
    mode : str
        Survey mode being transformed when the dataset turned out empty.
    """

    def __init__(self, mode: str, message: str | None = None) -> None:
        self.mode = mode
        super().__init__(
            message or f"no valid {mode} rows found, check the input format"
        )


class ConfigError(GeoVizError, ValueError):
    """Raised when a configuration value is outside its allowed options."""
