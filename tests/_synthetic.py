"""In-memory recordings for tests (no files touched)."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Optional, Sequence

import numpy as np

from tep_group_viz.core.types import Recording, TepSeries

TIMES = np.arange(-500.0, 801.0, 100.0)  # -500 .. 800 ms, 14 samples
LABELS = ["Fz", "Cz", "Pz"]


def make_recording(
    filename: str = "sub01.set",
    data: Optional[np.ndarray] = None,
    times: Optional[np.ndarray] = None,
    labels: Optional[Sequence[str]] = None,
    roi: Optional[Dict[str, np.ndarray]] = None,
    gmfa: Optional[Dict[str, np.ndarray]] = None,
    offset: float = 0.0,
) -> Recording:
    times = TIMES if times is None else np.asarray(times, dtype=float)
    labels = list(LABELS if labels is None else labels)
    if data is None:
        base = np.arange(len(labels) * times.size, dtype=float).reshape(len(labels), times.size)
        data = np.stack([base + offset, base + offset + 2.0], axis=2)

    def _series(named: Optional[Dict[str, np.ndarray]]) -> Optional[Dict[str, TepSeries]]:
        if named is None:
            return None
        return {name: TepSeries(tseries=np.atleast_2d(values), time=times) for name, values in named.items()}

    return Recording(
        data=data,
        times=times,
        chan_labels=labels,
        roi=_series(roi),
        gmfa=_series(gmfa),
        filename=filename,
        filepath=None,
    )


def dict_reader(recordings: Sequence[Recording]) -> Callable[[Path], Recording]:
    by_name = {rec.filename: rec for rec in recordings}

    def _read(path: Path) -> Recording:
        return by_name[Path(path).name]

    return _read


def file_names(recordings: Sequence[Recording]) -> list:
    return [rec.filename for rec in recordings]
