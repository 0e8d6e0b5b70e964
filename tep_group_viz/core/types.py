from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

TEP_TYPES: Tuple[str, ...] = ("data", "ROI", "GMFA")


@dataclass(frozen=True)
class TepSeries:
    """One named ROI or GMFA produced upstream by tesa_tepextract."""

    tseries: np.ndarray  # (n_rows, n_times)
    time: np.ndarray  # (n_times,) ms


@dataclass
class Recording:
    data: np.ndarray  # (n_channels, n_times, n_trials)
    times: np.ndarray  # (n_times,) ms
    chan_labels: List[str]
    roi: Optional[Dict[str, TepSeries]] = None
    gmfa: Optional[Dict[str, TepSeries]] = None
    filename: str = ""
    filepath: Optional[Path] = None

    def __post_init__(self) -> None:
        data = np.asarray(self.data, dtype=float)
        if data.ndim == 1:
            data = data[np.newaxis, :, np.newaxis]
        elif data.ndim == 2:
            data = data[:, :, np.newaxis]
        self.data = data
        self.times = np.asarray(self.times, dtype=float).reshape(-1)
        self.chan_labels = [str(label) for label in self.chan_labels]

    @property
    def nbchan(self) -> int:
        return int(self.data.shape[0])

    def analyses(self, tep_type: str) -> Optional[Dict[str, TepSeries]]:
        """Return the named ROI/GMFA instances, or None when the analysis is absent."""
        if tep_type == "ROI":
            found = self.roi
        elif tep_type == "GMFA":
            found = self.gmfa
        else:
            raise ValueError(f"tepType {tep_type!r} has no named analyses.")
        if not found:
            return None
        return found


@dataclass(frozen=True)
class PlotOptions:
    xlim: Tuple[float, float]
    ylim: Optional[Tuple[float, float]] = None
    elec: Optional[str] = None
    ci: bool = False
    tep_type: str = "data"
    tep_name: Optional[str] = None

    @property
    def butterfly(self) -> bool:
        return self.tep_type == "data" and not self.elec


@dataclass(frozen=True)
class GroupDataset:
    data: np.ndarray  # (n_rows, n_times, n_participants)
    times: np.ndarray  # (n_times,) ms
    files: List[str] = field(default_factory=list)

    @property
    def n_participants(self) -> int:
        return int(self.data.shape[2])


@dataclass
class GroupPlot:
    figure: Any
    ax: Any
    group: GroupDataset
    options: PlotOptions
    mean: np.ndarray  # (n_rows, n_times)
    ci: Optional[np.ndarray] = None  # (n_rows, n_times) half-width
    row_labels: List[str] = field(default_factory=list)
