from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .recording import read_eeglab_set
from .types import GroupDataset, PlotOptions, Recording

RecordingReader = Callable[[Path], Recording]


def find_electrode(chan_labels: Sequence[str], elec: str) -> Optional[int]:
    target = elec.strip().lower()
    for idx, label in enumerate(chan_labels):
        if str(label).strip().lower() == target:
            return idx
    return None


def _trial_mean(data: np.ndarray) -> np.ndarray:
    return np.asarray(data, dtype=float).mean(axis=2)


def extract_view(rec: Recording, options: PlotOptions, name: str) -> Tuple[np.ndarray, np.ndarray]:
    """Return (rows x time, time axis) for one participant."""
    if options.tep_type == "data":
        if options.elec is None:
            return _trial_mean(rec.data), rec.times
        idx = find_electrode(rec.chan_labels, options.elec)
        if idx is None:
            raise ValueError(f"The electrode {options.elec} is not present in the following data: {name}")
        return _trial_mean(rec.data[idx : idx + 1, :, :]), rec.times

    instances = rec.analyses(options.tep_type)
    if instances is None:
        raise ValueError(f"{options.tep_type} analysis is not present in the following data: {name}")
    if options.tep_name not in instances:
        raise ValueError(
            f"{options.tep_type} '{options.tep_name}' is not present in the following data: {name}"
        )
    entry = instances[options.tep_name]
    return np.atleast_2d(np.asarray(entry.tseries, dtype=float)), np.asarray(entry.time, dtype=float).reshape(-1)


def _same_axis(a: np.ndarray, b: np.ndarray) -> bool:
    if a.shape != b.shape:
        return False
    return bool(np.allclose(a, b, rtol=0.0, atol=1e-6))


def load_group_dataset(
    options: PlotOptions,
    files: Sequence[Path | str],
    reader: RecordingReader = read_eeglab_set,
) -> GroupDataset:
    """
    Load every participant file and stack the selected view.

    Files are read one at a time in the given order. The channel count (for
    `data` views) and the time axis of every participant must match the
    first participant loaded.
    """
    paths = [Path(f) for f in files]
    if not paths:
        raise ValueError("No participant files were found for the group plot.")

    slices: List[np.ndarray] = []
    names: List[str] = []
    base_chan: Optional[int] = None
    base_time: Optional[np.ndarray] = None
    time: Optional[np.ndarray] = None

    for path in paths:
        rec = reader(path)
        name = rec.filename or path.name
        print(f"[load] {name}")

        if options.butterfly:
            if base_chan is None:
                base_chan = rec.nbchan
            elif rec.nbchan != base_chan:
                raise ValueError(
                    f"The number of electrodes in the following data set is not equivalent with other data: {name}"
                )

        view, time = extract_view(rec, options, name)
        if view.shape[1] != time.size:
            raise ValueError(
                f"The time series and time axis lengths differ ({view.shape[1]} vs {time.size}) in: {name}"
            )
        if base_time is None:
            base_time = time
        elif not _same_axis(base_time, time):
            raise ValueError(f"The time axis in the following data set is not equivalent with other data: {name}")
        if slices and view.shape[0] != slices[0].shape[0]:
            raise ValueError(f"The number of rows in the following data set is not equivalent with other data: {name}")

        slices.append(view)
        names.append(name)

    return GroupDataset(data=np.stack(slices, axis=2), times=np.asarray(time, dtype=float), files=names)


__all__ = ["extract_view", "find_electrode", "load_group_dataset"]
