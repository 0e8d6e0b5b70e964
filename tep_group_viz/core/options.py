from __future__ import annotations

"""Key/value option parsing and validation for group TEP plots.

Options arrive as a flat sequence of key/value pairs, e.g.::

    resolve_options(rec, "xlim", [-200, 600], "elec", "Cz", "CI", "on")

Keys are matched case-insensitively and underscores are ignored, so
`tepType` and `tep_type` name the same option. Every check runs against the
base recording before any participant file is opened.
"""

from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np

from .config import DEFAULT_OPTIONS, option_key
from .types import TEP_TYPES, PlotOptions, Recording

_OPTION_NAMES: Tuple[str, ...] = tuple(DEFAULT_OPTIONS.keys())
_CANONICAL_KEYS: Dict[str, str] = {option_key(name): name for name in _OPTION_NAMES}


def _as_optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return np.asarray(value).size == 0
    except Exception:
        return False


def _as_limits(value: Any, name: str, example: str) -> Tuple[float, float]:
    try:
        arr = np.asarray(value, dtype=float)
    except (TypeError, ValueError):
        arr = None
    if arr is not None and arr.shape == (1, 2):
        arr = arr[0]
    if arr is None or arr.shape != (2,) or not np.all(np.isfinite(arr)):
        raise ValueError(f"Input for '{name}' must be in the following format [min,max] e.g. {example}.")
    lo, hi = arr.tolist()
    return float(lo), float(hi)


def _fmt(value: float) -> str:
    return f"{float(value):g}"


def merge_option_pairs(args: Sequence[Any], defaults: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Apply key/value pairs over the defaults; keys are the canonical option names."""
    options = dict(DEFAULT_OPTIONS)
    if defaults:
        for key, value in defaults.items():
            canonical = _CANONICAL_KEYS.get(option_key(key))
            if canonical is None:
                raise KeyError(f"{key} is not a recognized parameter name")
            options[canonical] = value

    if len(args) % 2 != 0:
        raise ValueError("Options must be given as key/value pairs.")

    for key, value in zip(args[0::2], args[1::2]):
        canonical = _CANONICAL_KEYS.get(option_key(key))
        if canonical is None:
            raise KeyError(f"{key} is not a recognized parameter name")
        options[canonical] = value
    return options


def resolve_options(
    base: Recording,
    *args: Any,
    defaults: Optional[Dict[str, Any]] = None,
) -> PlotOptions:
    """
    Validate key/value overrides against the base recording.

    Raises ValueError or KeyError on the first invalid input. When `tepType`
    is ROI or GMFA and the base recording holds a single instance, that
    instance name is selected automatically.
    """
    raw = merge_option_pairs(args, defaults)

    times = np.asarray(base.times, dtype=float).reshape(-1)
    if times.size == 0:
        raise ValueError("The base recording has an empty time axis.")
    t_min, t_max = float(times[0]), float(times[-1])

    xlim = _as_limits(raw["xlim"], "xlim", "[-100,500]")
    if any(v < t_min or v > t_max for v in xlim):
        raise ValueError(
            f"Input for 'xlim' is outside of the range of the data ({_fmt(t_min)} to {_fmt(t_max)})."
        )

    ylim: Optional[Tuple[float, float]] = None
    if not _is_empty(raw["ylim"]):
        ylim = _as_limits(raw["ylim"], "ylim", "[-10,10]")

    ci_raw = raw["CI"]
    if not isinstance(ci_raw, str) or ci_raw not in ("on", "off"):
        raise ValueError("Input for 'CI' must be either 'on' or 'off'.")
    ci = ci_raw == "on"

    tep_type = raw["tepType"]
    elec = _as_optional_str(raw["elec"])
    tep_name = _as_optional_str(raw["tepName"])

    if isinstance(tep_type, str) and tep_type.lower() == "data" and ci and elec is None:
        raise ValueError(
            "Confidence intervals can not be plotted for butterfly plots. "
            "Please include a single channel, ROI or GMFA for analysis."
        )

    if tep_type not in TEP_TYPES:
        raise ValueError("Input for 'tepType' must be either 'data', 'ROI' or 'GMFA'.")

    instances = None
    if tep_type in ("ROI", "GMFA"):
        instances = base.analyses(tep_type)
        if instances is None:
            raise ValueError(
                f"There are no {tep_type} analyses present in the data. Please run tesa_tepextract."
            )
        if tep_name is None and len(instances) > 1:
            raise ValueError(
                f"There are multiple {tep_type}s present in the data. Please enter a specific "
                f"{tep_type} using 'tepName', 'str' where str is the name of the specific {tep_type}."
            )

    if tep_name is not None:
        if instances is None:
            raise ValueError(
                "Please indicate which type of TEP you would like to perform analysis on using "
                "'tepType', 'str', where str is either 'ROI' or 'GMFA'."
            )
        if tep_name not in instances:
            raise KeyError(f"'tepName' '{tep_name}' does not exist for tepType {tep_type}. Please revise.")

    if instances is not None and tep_name is None:
        tep_name = next(iter(instances))

    return PlotOptions(
        xlim=xlim,
        ylim=ylim,
        elec=elec,
        ci=ci,
        tep_type=tep_type,
        tep_name=tep_name,
    )


__all__ = ["merge_option_pairs", "resolve_options"]
