from __future__ import annotations

"""Across-participant statistics for the group plot."""

from typing import List, Optional, Sequence

import numpy as np
import polars as pl

CI_Z = 1.96


def group_mean(data: np.ndarray) -> np.ndarray:
    """Mean over the participant axis of a (rows, times, participants) array."""
    arr = np.asarray(data, dtype=float)
    if arr.ndim != 3:
        raise ValueError(f"Expected a (rows, times, participants) array, got shape {arr.shape}.")
    # Shift by the first participant so identical inputs reproduce it exactly.
    ref = arr[:, :, :1]
    return ref[:, :, 0] + (arr - ref).mean(axis=2)


def confidence_interval(data: np.ndarray, z: float = CI_Z) -> np.ndarray:
    """
    Half-width of the normal-approximation CI of the mean across participants.

    Uses the sample standard deviation (ddof=1). A single participant has no
    spread and yields a zero half-width.
    """
    arr = np.asarray(data, dtype=float)
    if arr.ndim != 3:
        raise ValueError(f"Expected a (rows, times, participants) array, got shape {arr.shape}.")
    n = arr.shape[2]
    if n < 2:
        return np.zeros(arr.shape[:2], dtype=float)
    std = (arr - arr[:, :, :1]).std(axis=2, ddof=1)
    return z * (std / np.sqrt(n))


def summary_frame(
    times: np.ndarray,
    mean: np.ndarray,
    ci: Optional[np.ndarray] = None,
    row_labels: Optional[Sequence[str]] = None,
) -> pl.DataFrame:
    """
    Tabulate the group average per time sample.

    A single row gives `time_ms, mean` (+ `ci_low, ci_high`); several rows
    (butterfly views) give one column per row label.
    """
    mean = np.atleast_2d(np.asarray(mean, dtype=float))
    columns = {"time_ms": np.asarray(times, dtype=float).reshape(-1)}
    if mean.shape[0] == 1:
        columns["mean"] = mean[0]
        if ci is not None:
            half = np.atleast_2d(np.asarray(ci, dtype=float))[0]
            columns["ci_low"] = mean[0] - half
            columns["ci_high"] = mean[0] + half
        return pl.DataFrame(columns)

    labels: List[str] = list(row_labels or [])
    if len(labels) != mean.shape[0] or len(set(labels) | {"time_ms"}) != len(labels) + 1:
        labels = [f"row_{i + 1}" for i in range(mean.shape[0])]
    for label, row in zip(labels, mean):
        columns[str(label)] = row
    return pl.DataFrame(columns)


__all__ = ["CI_Z", "confidence_interval", "group_mean", "summary_frame"]
