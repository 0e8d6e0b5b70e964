from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .aggregation import summary_frame
from .config import (
    get_file_extension,
    get_option_defaults,
    get_output_base_dir,
    load_config,
    load_default_config,
)
from .group_data import RecordingReader, load_group_dataset
from .options import resolve_options
from .recording import group_files, read_eeglab_set
from .style import build_plot_style
from .types import GroupPlot, PlotOptions, Recording
from ..plotting.matplotlib.common import _savefig
from ..plotting.matplotlib.line import plot_group_average


def _row_labels(base: Recording, options: PlotOptions, n_rows: int) -> List[str]:
    if options.tep_type == "data":
        if options.elec:
            return [options.elec]
        if len(base.chan_labels) == n_rows:
            return list(base.chan_labels)
        return [str(i + 1) for i in range(n_rows)]
    if n_rows == 1:
        return [str(options.tep_name)]
    return [f"{options.tep_name}_{i + 1}" for i in range(n_rows)]


def plot_group(
    recording: Recording,
    *args: Any,
    files: Optional[Sequence[Path | str]] = None,
    config: Optional[Dict[str, Any]] = None,
    reader: RecordingReader = read_eeglab_set,
) -> GroupPlot:
    """
    Plot TMS-evoked activity averaged over participants.

    `recording` is one participant of the group; by default every file in
    its directory with the configured extension is loaded as the group, so
    that directory must hold nothing else. `files` replaces the directory
    scan with an explicit list. `args` are key/value pairs:

    - 'xlim', [min, max]: x axis limits in ms (default [-100, 500]).
    - 'ylim', [min, max]: y axis limits; auto-scaled when omitted.
    - 'elec', 'Cz': plot a single electrode instead of a butterfly plot.
    - 'CI', 'on'|'off': shade the 95% confidence interval across participants.
    - 'tepType', 'data'|'ROI'|'GMFA': source of the plotted time series.
    - 'tepName', 'R1': which ROI/GMFA to plot when several exist.

    Example::

        plot_group(rec, "tepType", "ROI", "tepName", "parietal", "CI", "on")
    """
    cfg = load_default_config() if config is None else config
    options = resolve_options(recording, *args, defaults=get_option_defaults(cfg))

    if files is None:
        if recording.filepath is None:
            raise ValueError("The base recording has no source directory; pass `files` explicitly.")
        files = group_files(recording.filepath, get_file_extension(cfg))

    group = load_group_dataset(options, files, reader=reader)

    style = build_plot_style(cfg.get("plot_style"))
    fig, ax, mean, ci = plot_group_average(group, options, style=style)
    print("[plot_group] TEP plot generated.")

    return GroupPlot(
        figure=fig,
        ax=ax,
        group=group,
        options=options,
        mean=mean,
        ci=ci,
        row_labels=_row_labels(recording, options, mean.shape[0]),
    )


class GroupTepVisualizer:
    """Config-driven wrapper used by the command line: plot, then write the enabled outputs."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        if config_path is None:
            self.config = load_default_config()
            self.base_dir = Path.cwd()
        else:
            self.config_path = Path(config_path)
            self.config = load_config(self.config_path)
            self.base_dir = self.config_path.parent

        output_cfg = self.config.get("output", {})
        if not isinstance(output_cfg, dict):
            output_cfg = {}
        self.plotly_html_enabled = bool(output_cfg.get("plotly_html", False))
        self.summary_csv_enabled = bool(output_cfg.get("summary_csv", False))
        self.style = build_plot_style(self.config.get("plot_style"))

    def default_output_path(self, plot: GroupPlot) -> Path:
        options = plot.options
        parts = [options.tep_type]
        if options.tep_name:
            parts.append(options.tep_name)
        elif options.elec:
            parts.append(options.elec)
        else:
            parts.append("all")
        name = "group_" + "_".join(str(p) for p in parts) + ".png"
        return get_output_base_dir(self.base_dir, self.config) / name

    def run(
        self,
        base_path: Path,
        option_args: Sequence[Any] = (),
        output_path: Optional[Path] = None,
        show: bool = False,
    ) -> GroupPlot:
        import matplotlib.pyplot as plt

        base_path = Path(base_path).resolve()
        recording = read_eeglab_set(base_path)
        plot = plot_group(recording, *option_args, config=self.config)

        out_path = Path(output_path) if output_path else self.default_output_path(plot)
        written: List[Path] = []

        _savefig(plot.figure, out_path, self.style)
        written.append(out_path)

        if self.plotly_html_enabled:
            from ..plotting.plotly.html_export import export_group_html

            written.append(export_group_html(plot, output_path=out_path, style=self.style))

        if self.summary_csv_enabled:
            table = summary_frame(plot.group.times, plot.mean, plot.ci, plot.row_labels)
            csv_path = out_path.with_suffix(".csv")
            table.write_csv(csv_path)
            written.append(csv_path)

        for path in written:
            print(f"[export] wrote: {path}")

        if show:
            plt.show()
        plt.close(plot.figure)
        return plot


__all__ = ["GroupTepVisualizer", "plot_group"]
