from __future__ import annotations

"""Group-average time-series plot (mean trace, CI band, stimulus marker)."""

from typing import Any, Dict, Optional, Tuple

import numpy as np

from ...core.aggregation import confidence_interval, group_mean
from ...core.types import GroupDataset, PlotOptions
from .common import (
    _draw_ci_band,
    _draw_mean_trace,
    _draw_stimulus_marker,
    _format_title,
    _plot_init,
    _style_axis,
)


def plot_group_average(
    group: GroupDataset,
    options: PlotOptions,
    *,
    style: Dict[str, Any],
) -> Tuple[Any, Any, np.ndarray, Optional[np.ndarray]]:
    """Render the group figure and return (figure, axes, mean, ci)."""
    import matplotlib.pyplot as plt

    _plot_init(style.get("font_family"))

    mean = group_mean(group.data)
    ci = confidence_interval(group.data) if options.ci else None

    fig, ax = plt.subplots(figsize=style["figure_size"], dpi=style["dpi"])
    _draw_mean_trace(ax, group.times, mean, style=style)
    _style_axis(ax, options, title=_format_title(options, group.n_participants), style=style)

    if ci is not None:
        _draw_ci_band(ax, group.times, mean, ci, style=style)

    _draw_stimulus_marker(ax, style=style)
    return fig, ax, mean, ci
