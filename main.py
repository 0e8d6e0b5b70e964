from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, List, Optional, Sequence

_REPO_ROOT = Path(__file__).resolve().parent

_LIMIT_KEYS = {"xlim", "ylim"}


def parse_cli_value(key: str, text: str) -> Any:
    """Convert a `--opt KEY VALUE` string; xlim/ylim accept "a,b" or "[a, b]"."""
    norm = key.strip().replace("_", "").lower()
    if norm not in _LIMIT_KEYS:
        return text
    stripped = text.strip().strip("[]()").strip()
    if not stripped:
        return None
    parts = [p for p in stripped.replace(";", ",").split(",") if p.strip()]
    try:
        return [float(p) for p in parts]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid value for {key!r}: {text!r}") from exc


def build_option_args(pairs: Optional[Sequence[Sequence[str]]]) -> List[Any]:
    out: List[Any] = []
    for key, value in pairs or []:
        out.extend([key, parse_cli_value(key, value)])
    return out


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Plot TMS-evoked activity averaged over participants")
    parser.add_argument("recording", type=str, help="Any one participant .set file; its folder is the group.")
    default_config = _REPO_ROOT / "config.yaml"
    parser.add_argument("--config", type=str, default=str(default_config), help="Path to YAML config.")
    parser.add_argument(
        "--opt",
        nargs=2,
        action="append",
        metavar=("KEY", "VALUE"),
        default=None,
        help='Plot option pair, e.g. --opt tepType ROI --opt xlim "[-200,600]" (repeatable).',
    )
    parser.add_argument("--output", type=str, default=None, help="Image path (default: output/group_<type>_<name>.png).")
    parser.add_argument("--show", action="store_true", help="Open an interactive window after saving.")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)

    if not args.show:
        import matplotlib

        matplotlib.use("Agg", force=True)

    from tep_group_viz import GroupTepVisualizer

    visualizer = GroupTepVisualizer(Path(args.config))
    visualizer.run(
        Path(args.recording),
        option_args=build_option_args(args.opt),
        output_path=Path(args.output) if args.output else None,
        show=args.show,
    )


if __name__ == "__main__":
    main()
