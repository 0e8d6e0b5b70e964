"""Group-average plots of TMS-evoked potentials from TESA-processed EEGLAB files.

The implementation lives in `tep_group_viz.core`; this module re-exports the
public API.
"""

from __future__ import annotations

from .core.recording import group_files, read_eeglab_set
from .core.types import GroupDataset, GroupPlot, PlotOptions, Recording, TepSeries
from .core.visualizer import GroupTepVisualizer, plot_group

__all__ = [
    "GroupDataset",
    "GroupPlot",
    "GroupTepVisualizer",
    "PlotOptions",
    "Recording",
    "TepSeries",
    "group_files",
    "plot_group",
    "read_eeglab_set",
]
