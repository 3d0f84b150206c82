"""Plot session orchestration: parse, transform, assemble, render."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Sequence

from loguru import logger

from geoviz.config import Mode, PlotConfig, ResistivityOptions, TransformOptions, VLFOptions
from geoviz.core.assembler import RenderRequest, assemble
from geoviz.core.errors import EmptyDatasetError
from geoviz.core.models import RawRow, TransformResult
from geoviz.core.parser import parse_records
from geoviz.core.resistivity import transform_resistivity
from geoviz.core.vlf import transform_vlf


def run_transform(rows: Sequence[RawRow], options: TransformOptions) -> TransformResult:
    """Dispatch rows to the transform matching the options variant."""
    if isinstance(options, VLFOptions):
        return transform_vlf(rows, options)
    if isinstance(options, ResistivityOptions):
        return transform_resistivity(rows, options)
    raise TypeError(f"unsupported transform options: {type(options).__name__}")


@dataclass(frozen=True)
class CurrentSession:
    """Session state: selected mode and the last request produced."""

    mode: Mode
    last_request: RenderRequest | None = None


class PlotSession:
    """Own the mode selector and the last render request.

    Parameters
    ----------
    config : PlotConfig, optional
        Initial plot options; its ``mode`` becomes the session mode.
    renderer : Any, optional
        Renderer collaborator exposing ``render(request)`` and ``clear()``.
    annotation_available : bool, optional
        Whether the renderer supports the secondary KH filter axis.

    Examples
    --------
    >>> session = PlotSession()
    >>> request = session.plot("0 45 -10\\n10 55 -12")
    >>> request.stats["Points"]
    '2'
    """

    def __init__(
        self,
        config: PlotConfig | None = None,
        renderer: Any = None,
        annotation_available: bool = True,
    ) -> None:
        self._config = config or PlotConfig()
        self._renderer = renderer
        self._annotation_available = annotation_available
        self._state = CurrentSession(mode=self._config.mode)
        self._last_text: str | None = None

    @property
    def state(self) -> CurrentSession:
        return self._state

    @property
    def mode(self) -> Mode:
        return self._state.mode

    @property
    def config(self) -> PlotConfig:
        return self._config

    @property
    def last_request(self) -> RenderRequest | None:
        return self._state.last_request

    def set_mode(self, mode: Mode | str) -> None:
        """Switch survey mode and drop the current chart."""
        mode = Mode(mode)
        self._config = replace(self._config, mode=mode)
        self.clear()
        logger.info(f"Mode switched to: {mode.value}")

    def update_config(self, **changes: Any) -> PlotConfig:
        """Replace plot options; a mode change goes through ``set_mode``."""
        mode = changes.pop("mode", None)
        if changes:
            self._config = replace(self._config, **changes)
        if mode is not None and Mode(mode) != self.mode:
            self.set_mode(mode)
        return self._config

    def plot(self, text: str) -> RenderRequest | None:
        """Run one full transform for ``text``.

        Parameters
        ----------
        text : str
            Raw delimited survey text.

        Returns
        -------
        RenderRequest | None
            New request, or ``None`` when ``text`` is blank.

        Raises
        ------
        EmptyDatasetError
            Raised when no usable rows remain; the previous chart is
            dropped and no partial request is kept.
        """
        if not text.strip():
            return None
        options = self._config.transform_options(self._annotation_available)
        try:
            rows = parse_records(text)
            if not rows:
                raise EmptyDatasetError(self.mode.value)
            result = run_transform(rows, options)
        except EmptyDatasetError:
            self.clear()
            raise
        self._last_text = text
        request = assemble(
            result,
            self._config.palette,
            mode=self.mode,
            title=self._config.custom_title,
            dark_mode=self._config.dark_mode,
        )
        self._state = CurrentSession(mode=self.mode, last_request=request)
        if self._renderer is not None:
            self._renderer.render(request)
        logger.info(
            f"Plotted {len(request.series)} series in {self.mode.value} mode"
        )
        return request

    def refresh(self) -> RenderRequest | None:
        """Recompute the chart from the last text if one is shown."""
        if self._state.last_request is None or self._last_text is None:
            return None
        return self.plot(self._last_text)

    def toggle_dark_mode(self) -> RenderRequest | None:
        """Flip the dark mode flag and redraw the current chart."""
        self._config = replace(self._config, dark_mode=not self._config.dark_mode)
        return self.refresh()

    def clear(self) -> None:
        """Drop the current chart and notify the renderer."""
        self._state = CurrentSession(mode=self._config.mode)
        self._last_text = None
        if self._renderer is not None:
            self._renderer.clear()
