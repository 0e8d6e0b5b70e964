from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np

from ...core.types import GroupPlot
from ..matplotlib.common import _format_title, _y_label

_MPL_SHORT_TO_HEX = {
    "k": "#000000",
    "r": "#ff0000",
    "g": "#008000",
    "b": "#0000ff",
    "c": "#00ffff",
    "m": "#ff00ff",
    "y": "#ffff00",
    "w": "#ffffff",
}


def _html_path_for_output_path(output_path: Path) -> Path:
    if output_path.suffix:
        return output_path.with_suffix(".html")
    return output_path.parent / f"{output_path.name}.html"


def _mpl_linestyle_to_plotly_dash(style: Any) -> str:
    if isinstance(style, str):
        s = style.strip()
        if s == "--":
            return "dash"
        if s == ":":
            return "dot"
        if s == "-.":
            return "dashdot"
    return "solid"


def _plotly_color(color: Any, alpha: Optional[float] = None) -> str:
    text = str(color or "").strip()
    hex_color = _MPL_SHORT_TO_HEX.get(text, text)
    if alpha is None or not hex_color.startswith("#") or len(hex_color) != 7:
        return hex_color
    r, g, b = (int(hex_color[i : i + 2], 16) for i in (1, 3, 5))
    return f"rgba({r},{g},{b},{float(alpha):.3f})"


def export_group_html(plot: GroupPlot, *, output_path: Path, style: Dict[str, Any]) -> Path:
    """
    Write an interactive Plotly version of a rendered group plot.

    `output_path` may be the PNG path; the HTML file is written next to it.
    """
    import plotly.graph_objects as go

    html_path = _html_path_for_output_path(Path(output_path))
    html_path.parent.mkdir(parents=True, exist_ok=True)

    x = np.asarray(plot.group.times, dtype=float)
    mean = np.atleast_2d(plot.mean)
    line_color = _plotly_color(style["line_color"])
    labels = plot.row_labels if len(plot.row_labels) == mean.shape[0] else [""] * mean.shape[0]

    fig = go.Figure()
    if plot.ci is not None:
        band_x = np.concatenate([x, x[::-1]])
        for row, half in zip(mean, np.atleast_2d(plot.ci)):
            fig.add_trace(
                go.Scatter(
                    x=band_x,
                    y=np.concatenate([row - half, (row + half)[::-1]]),
                    fill="toself",
                    mode="lines",
                    line=dict(width=0),
                    fillcolor=_plotly_color(style["ci_color"], style["ci_alpha"]),
                    hoverinfo="skip",
                    name="95% CI",
                    showlegend=False,
                )
            )
    for label, row in zip(labels, mean):
        fig.add_trace(
            go.Scatter(
                x=x,
                y=row,
                mode="lines",
                name=str(label),
                line=dict(color=line_color, width=float(style["line_width"])),
                showlegend=False,
            )
        )

    marker = style["stimulus_marker"]
    fig.add_vline(
        x=0.0,
        line_dash=_mpl_linestyle_to_plotly_dash(marker.get("linestyle")),
        line_color=_plotly_color(marker.get("color")),
        line_width=float(marker.get("linewidth", 1.0)),
    )

    options = plot.options
    fig.update_layout(
        title=_format_title(options, plot.group.n_participants),
        template="simple_white",
        xaxis_title=str(style["x_label"]),
        yaxis_title=_y_label(options, style),
    )
    fig.update_xaxes(range=list(options.xlim), ticks="outside")
    if options.ylim is not None:
        fig.update_yaxes(range=list(options.ylim), ticks="outside")
    else:
        fig.update_yaxes(ticks="outside")

    fig.write_html(html_path, include_plotlyjs="cdn")
    return html_path


__all__ = ["export_group_html"]
