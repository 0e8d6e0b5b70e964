from __future__ import annotations

from typing import Any, Dict, Optional

# Plot style parameters are configured via config.yaml under `plot_style`;
# these values fill in keys the config leaves out.
_STYLE_DEFAULTS: Dict[str, Any] = {
    "figure_size": (8.0, 5.0),
    "dpi": 100,
    "font_family": None,
    "line_color": "b",
    "line_width": 1.0,
    "ci_color": "b",
    "ci_alpha": 0.3,
    "stimulus_color": "r",
    "stimulus_linestyle": "--",
    "stimulus_linewidth": 1.0,
    "title_fontsize": 12,
    "label_fontsize": 11,
    "tick_labelsize": 10,
    "x_label": "Time (ms)",
    "y_label": "Amplitude (µV)",
    "y_label_gmfa": "GMFA (µV)",
    "savefig_bbox_inches": "tight",
    "savefig_facecolor": "white",
}


def _as_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return float(default)


def build_plot_style(cfg: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if not isinstance(cfg, dict):
        cfg = {}
    out = dict(_STYLE_DEFAULTS)
    for key, value in cfg.items():
        if value is None and key != "font_family":
            continue
        out[key] = value

    size = out.get("figure_size")
    if not isinstance(size, (list, tuple)) or len(size) != 2:
        size = _STYLE_DEFAULTS["figure_size"]
    out["figure_size"] = (float(size[0]), float(size[1]))
    out["dpi"] = int(_as_float(out.get("dpi"), _STYLE_DEFAULTS["dpi"]))
    for key in ("line_width", "ci_alpha", "stimulus_linewidth"):
        out[key] = _as_float(out.get(key), _STYLE_DEFAULTS[key])

    out["stimulus_marker"] = {
        "color": out["stimulus_color"],
        "linestyle": out["stimulus_linestyle"],
        "linewidth": out["stimulus_linewidth"],
    }
    return out


__all__ = ["build_plot_style"]
