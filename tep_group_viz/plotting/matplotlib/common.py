from __future__ import annotations

"""Matplotlib drawing helpers for the group TEP plot.

The figure-level entry point lives in tep_group_viz/plotting/matplotlib/line.py.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np

from ...core.types import PlotOptions


def _plot_init(font_family: Optional[str]) -> None:
    import matplotlib.pyplot as plt

    plt.rcParams["axes.unicode_minus"] = False
    if font_family:
        plt.rcParams["font.family"] = font_family


def _format_title(options: PlotOptions, n: int) -> str:
    suffix = f" - average of n = {n}"
    if options.tep_type == "ROI":
        return f"Region of interest ({options.tep_name}){suffix}"
    if options.tep_type == "GMFA":
        return f"Global mean field amplitude ({options.tep_name}){suffix}"
    if options.elec:
        return f"{options.elec}{suffix}"
    return f"All electrodes{suffix}"


def _y_label(options: PlotOptions, style: Dict[str, Any]) -> str:
    if options.tep_type == "GMFA":
        return str(style["y_label_gmfa"])
    return str(style["y_label"])


def _draw_mean_trace(ax: Any, time: np.ndarray, mean: np.ndarray, *, style: Dict[str, Any]) -> None:
    # One line per row; butterfly views draw every channel.
    ax.plot(
        time,
        np.atleast_2d(mean).T,
        color=style["line_color"],
        linewidth=style["line_width"],
    )


def _draw_ci_band(ax: Any, time: np.ndarray, mean: np.ndarray, ci: np.ndarray, *, style: Dict[str, Any]) -> None:
    # One band per plotted row.
    for m, half in zip(np.atleast_2d(mean), np.atleast_2d(ci)):
        ax.fill_between(
            time,
            m - half,
            m + half,
            color=style["ci_color"],
            alpha=style["ci_alpha"],
            linewidth=0,
            edgecolor="none",
        )


def _draw_stimulus_marker(ax: Any, *, style: Dict[str, Any]) -> None:
    zorder = max([artist.get_zorder() for artist in ax.get_children()] + [0]) + 1
    ax.axvline(0.0, label="_nolegend_", zorder=zorder, **style["stimulus_marker"])


def _style_axis(ax: Any, options: PlotOptions, *, title: str, style: Dict[str, Any]) -> None:
    ax.set_xlim(*options.xlim)
    if options.ylim is not None:
        ax.set_ylim(*options.ylim)

    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.tick_params(direction="out", labelsize=style["tick_labelsize"])

    ax.set_xlabel(style["x_label"], fontsize=style["label_fontsize"])
    ax.set_ylabel(_y_label(options, style), fontsize=style["label_fontsize"])
    ax.set_title(title, fontsize=style["title_fontsize"])


def _savefig(fig: Any, output_path: Path, style: Dict[str, Any]) -> None:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(
        output_path,
        bbox_inches=style["savefig_bbox_inches"],
        facecolor=style["savefig_facecolor"],
    )
