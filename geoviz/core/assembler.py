"""Series assembly into render requests for an external chart renderer.

The assembler does not draw anything. It attaches colours from a palette,
picks axis labels and scale intent per mode, and formats metrics for
display.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Sequence

from geoviz.config import Mode
from geoviz.core.models import Series, TransformResult

DEFAULT_TITLES = {
    Mode.VLF: "VLF In-Phase vs Quadrature",
    Mode.RESISTIVITY: "Resistivity Pseudosection Profile",
}
FILTER_COLOR = "#64748b"
PERCENT_METRICS = frozenset({"Max Amp"})

# (text colour, grid colour)
_LIGHT_COLORS = ("#1e293b", "#e2e8f0")
_DARK_COLORS = ("#94a3b8", "#334155")


@dataclass(frozen=True)
class AxisHint:
    """Axis labeling and scale intent.

    Parameters
    ----------
    axis_id : str
        Identifier series refer to through their ``axis`` style hint.
    label : str
        Axis title.
    scale : str
        ``"linear"`` or ``"logarithmic"``.
    position : str
        ``"bottom"``, ``"left"`` or ``"right"``.
    draw_grid : bool
        Whether grid lines for this axis are drawn over the chart area.
    """

    axis_id: str
    label: str
    scale: str = "linear"
    position: str = "left"
    draw_grid: bool = True


@dataclass(frozen=True)
class RenderRequest:
    """Everything a renderer needs for one chart."""

    mode: Mode
    title: str
    chart_type: str
    series: tuple[Series, ...]
    x_axis: AxisHint
    y_axis: AxisHint
    secondary_axes: tuple[AxisHint, ...] = ()
    stats: dict[str, str] = field(default_factory=dict)
    dark_mode: bool = False
    text_color: str = _LIGHT_COLORS[0]
    grid_color: str = _LIGHT_COLORS[1]
    warnings: tuple[str, ...] = ()


def resolve_title(mode: Mode | str, custom_title: str | None = None) -> str:
    """Return ``custom_title`` as typed when non-empty, else the mode default."""
    if custom_title:
        return custom_title
    return DEFAULT_TITLES[Mode(mode)]


def format_metric(name: str, value: Any) -> str:
    """Format one metric value for display.

    Examples
    --------
    >>> format_metric("Max Amp", 55.0)
    '55%'
    >>> format_metric("Points", 21)
    '21'
    """
    if isinstance(value, float):
        text = str(int(value)) if value.is_integer() else str(float(value))
    else:
        text = str(value)
    if name in PERCENT_METRICS:
        return f"{text}%"
    return text


def style_series(series: Sequence[Series], palette: Sequence[str]) -> tuple[Series, ...]:
    """Attach colours and line styles to series by position.

    Parameters
    ----------
    series : Sequence[Series]
        Transform output in emission order.
    palette : Sequence[str]
        Colour cycle; series ``i`` gets ``palette[i % len(palette)]``. The
        KH filter keeps a fixed neutral colour.

    Returns
    -------
    tuple[Series, ...]
        New series with the merged style hints.
    """
    if not palette:
        raise ValueError("palette must not be empty")
    styled: list[Series] = []
    for index, item in enumerate(series):
        hint = dict(item.style_hint)
        role = hint.get("role")
        if role == "filter":
            hint.update(
                color=FILTER_COLOR,
                border_dash=(5, 5),
                border_width=1.5,
                point_radius=0,
            )
        else:
            color = palette[index % len(palette)]
            hint["color"] = color
            if role == "level":
                hint.update(
                    background_color=color,
                    show_line=True,
                    border_width=2,
                    point_radius=4,
                    tension=0.2,
                )
            else:
                hint.update(
                    background_color=f"{color}10",
                    border_width=2.5,
                    tension=0.3,
                )
        styled.append(replace(item, style_hint=hint))
    return tuple(styled)


def assemble(
    result: TransformResult,
    palette: Sequence[str],
    *,
    mode: Mode | str,
    title: str | None = None,
    dark_mode: bool = False,
) -> RenderRequest:
    """Package a transform result into a render request.

    Parameters
    ----------
    result : TransformResult
        Output of ``transform_vlf`` or ``transform_resistivity``.
    palette : Sequence[str]
        Colour cycle for the selected theme.
    mode : Mode | str
        Survey mode, selects axis labels and the default title.
    title : str | None, optional
        User title overriding the mode default.
    dark_mode : bool, optional
        Environment flag used to pick text and grid colours.

    Returns
    -------
    RenderRequest
        Styled series with axis, title and stats hints.
    """
    mode = Mode(mode)
    text_color, grid_color = _DARK_COLORS if dark_mode else _LIGHT_COLORS
    styled = style_series(result.series, palette)
    x_label, y_label = (
        ("Station (m)", "Amplitude (%)")
        if mode == Mode.VLF
        else ("Profile Midpoint (m)", "Apparent Resistivity (Ωm)")
    )
    x_axis = AxisHint(axis_id="x", label=x_label, position="bottom")
    y_axis = AxisHint(
        axis_id="y",
        label=y_label,
        scale="logarithmic" if mode == Mode.RESISTIVITY else "linear",
    )
    secondary: tuple[AxisHint, ...] = ()
    if any(s.style_hint.get("axis") == "yKH" for s in styled):
        secondary = (
            AxisHint(axis_id="yKH", label="Filter", position="right", draw_grid=False),
        )
    return RenderRequest(
        mode=mode,
        title=resolve_title(mode, title),
        chart_type="line" if mode == Mode.VLF else "scatter",
        series=styled,
        x_axis=x_axis,
        y_axis=y_axis,
        secondary_axes=secondary,
        stats={name: format_metric(name, value) for name, value in result.metrics.items()},
        dark_mode=dark_mode,
        text_color=text_color,
        grid_color=grid_color,
        warnings=result.warnings,
    )
