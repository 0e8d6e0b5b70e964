from __future__ import annotations

"""EEGLAB `.set` reader for recordings processed by the TESA pipeline.

Only the fields needed for group plots are read: `data`, `times`,
`chanlocs.labels` and the optional `ROI` / `GMFA` structures written by
tesa_tepextract. Both EEGLAB save layouts are handled: a single `EEG`
variable, or the struct fields stored as top-level variables. When `data`
holds a file name the samples are read from the sibling `.fdt` file.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
from scipy.io import loadmat

from .types import Recording, TepSeries


def _field(obj: Any, name: str, default: Any = None) -> Any:
    if obj is None:
        return default
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _field_names(obj: Any) -> List[str]:
    if obj is None:
        return []
    if isinstance(obj, dict):
        return [k for k in obj.keys() if not str(k).startswith("__")]
    names = getattr(obj, "_fieldnames", None)
    if names is None:
        return []
    return list(names)


def _has_field(obj: Any, name: str) -> bool:
    return name in _field_names(obj)


def _is_empty_value(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, np.ndarray):
        return value.size == 0
    return False


def _read_fdt(fdt_path: Path, eeg: Any) -> np.ndarray:
    if not fdt_path.suffix:
        fdt_path = fdt_path.with_suffix(".fdt")
    if not fdt_path.exists():
        raise FileNotFoundError(f"Data file not found: {fdt_path}")
    n_channels = int(_field(eeg, "nbchan"))
    n_times = int(_field(eeg, "pnts"))
    n_trials = int(_field(eeg, "trials", 1) or 1)
    raw = np.fromfile(str(fdt_path), dtype="<f4")
    expected = n_channels * n_times * n_trials
    if raw.size != expected:
        raise ValueError(
            f"Cannot reshape data in {fdt_path.name}: expected {n_channels}x{n_times}x{n_trials} "
            f"= {expected} values, found {raw.size}."
        )
    return raw.reshape((n_channels, n_times, n_trials), order="F").astype(float)


def _read_data(eeg: Any, set_path: Path) -> np.ndarray:
    data = _field(eeg, "data")
    if data is None:
        raise ValueError(f"EEG structure does not contain a 'data' field: {set_path.name}")
    if isinstance(data, str):
        data_path = Path(data)
        if not data_path.is_absolute():
            data_path = set_path.parent / data_path
        return _read_fdt(data_path, eeg)
    data = np.asarray(data, dtype=float)

    # squeeze_me drops singleton channel/trial axes; restore them from the header.
    n_channels = _field(eeg, "nbchan")
    n_times = _field(eeg, "pnts")
    n_trials = _field(eeg, "trials")
    if n_channels is not None and n_times is not None and n_trials is not None:
        shape = (int(n_channels), int(n_times), int(n_trials))
        if data.size == int(np.prod(shape)) and data.shape != shape:
            data = data.reshape(shape)
    return data


def _read_chan_labels(eeg: Any, n_channels: int) -> List[str]:
    chanlocs = _field(eeg, "chanlocs")
    if _is_empty_value(chanlocs):
        return [str(i + 1) for i in range(n_channels)]
    locs = list(chanlocs.ravel()) if isinstance(chanlocs, np.ndarray) else [chanlocs]
    labels: List[str] = []
    for loc in locs:
        label = _field(loc, "labels", "")
        labels.append(str(label).strip())
    return labels


def _read_tep_structs(obj: Any) -> Optional[Dict[str, TepSeries]]:
    if _is_empty_value(obj):
        return None
    out: Dict[str, TepSeries] = {}
    for name in _field_names(obj):
        entry = _field(obj, name)
        tseries = _field(entry, "tseries")
        time = _field(entry, "time")
        if tseries is None or time is None:
            continue
        out[str(name)] = TepSeries(
            tseries=np.atleast_2d(np.asarray(tseries, dtype=float)),
            time=np.asarray(time, dtype=float).reshape(-1),
        )
    return out or None


def read_eeglab_set(path: Path | str) -> Recording:
    """Load one participant's `.set` file into a Recording."""
    set_path = Path(path)
    if not set_path.exists():
        raise FileNotFoundError(f"Recording not found: {set_path}")

    mat = loadmat(str(set_path), squeeze_me=True, struct_as_record=False, appendmat=False)
    eeg: Any = mat.get("EEG")
    if eeg is None:
        eeg = {k: v for k, v in mat.items() if not k.startswith("__")}

    data = _read_data(eeg, set_path)
    raw_times = _field(eeg, "times")
    if _is_empty_value(raw_times):
        raise ValueError(f"EEG structure does not contain a 'times' field: {set_path.name}")
    times = np.asarray(raw_times, dtype=float).reshape(-1)
    n_channels = int(data.shape[0]) if data.ndim >= 2 else 1
    labels = _read_chan_labels(eeg, n_channels)

    roi = _read_tep_structs(_field(eeg, "ROI")) if _has_field(eeg, "ROI") else None
    gmfa = _read_tep_structs(_field(eeg, "GMFA")) if _has_field(eeg, "GMFA") else None

    return Recording(
        data=data,
        times=times,
        chan_labels=labels,
        roi=roi,
        gmfa=gmfa,
        filename=set_path.name,
        filepath=set_path.parent,
    )


def group_files(directory: Path | str, extension: str = ".set") -> List[Path]:
    """
    List every participant file in `directory`, sorted by name.

    The directory is treated as the whole group: it must hold only files
    produced by the same tesa_tepextract / tesa_peakanalysis runs.
    """
    directory = Path(directory)
    if not directory.exists():
        raise FileNotFoundError(f"Recording directory not found: {directory}")
    if not directory.is_dir():
        raise NotADirectoryError(f"Recording directory is not a directory: {directory}")
    suffix = extension.lower()
    return sorted(
        (p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == suffix),
        key=lambda p: p.name,
    )


__all__ = ["group_files", "read_eeglab_set"]
