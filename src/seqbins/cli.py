from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import List, Sequence, Tuple

import pandas as pd
from tqdm.auto import tqdm

from .bins import Histogram
from .config import BinningConfig, load_config
from .discovery import discover_fasta_files
from .engine import classify
from .errors import SeqbinsError
from .report import plot_histogram, render_text, write_json, write_table
from .stats import run_scan

TABLE_FORMATS = ("csv", "tsv", "parquet")


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] - %(message)s",
        stream=sys.stderr,
    )


def _resolve_config(args: argparse.Namespace) -> BinningConfig:
    config = load_config(args.config) if args.config else BinningConfig()
    overrides = {
        "target_bin_divisor": args.divisor,
        "min_length": args.min_length,
        "max_length": args.max_length,
        "strict": args.strict,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    return dataclasses.replace(config, **overrides)


def _histogram_paths(path: Path) -> List[Path]:
    if path.is_dir():
        return discover_fasta_files(path)
    return [path]


def _plot_path(base: Path, fasta_path: Path, root: Path | None) -> Path:
    """
    One PNG per input. For a directory run the name carries the file's path
    relative to the directory, suffix included, so x.fa and sub/x.fasta do
    not collide.
    """
    if root is None:
        return base
    tag = "_".join(fasta_path.relative_to(root).parts)
    return base.with_name(f"{base.stem}_{tag}{base.suffix}")


def _emit(text: str, output: Path | None) -> None:
    if output is None:
        print(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_histogram(args: argparse.Namespace) -> int:
    config = _resolve_config(args)
    paths = _histogram_paths(args.path)
    if not paths:
        logging.info("No FASTA files found in directory.")
        return 0

    results: List[Tuple[Path, Histogram]] = []
    for path in tqdm(paths, desc="histogram", unit="file", disable=args.quiet or len(paths) == 1):
        with open(path, "r", encoding="utf-8") as handle:
            histogram = classify(handle, config)
        logging.info(
            f"{path}: {histogram.total} records in {histogram.layout.num_bins} bins "
            f"of width {histogram.layout.bin_size}"
        )
        results.append((path, histogram))

    if args.format == "text":
        blocks = [render_text(h, title=str(path)) for path, h in results]
        _emit("\n\n".join(blocks), args.output)
    elif args.format == "json":
        payload = {
            "config": dataclasses.asdict(config),
            "files": [{"path": str(path), "histogram": h.to_dict()} for path, h in results],
        }
        if args.output is None:
            print(json.dumps(payload, indent=2))
        else:
            write_json(args.output, payload)
    else:
        df = pd.concat(
            [h.to_frame().assign(file=str(path)) for path, h in results],
            ignore_index=True,
        )
        df = df[["file", "bin", "lower", "upper", "label", "count"]]
        if args.output is None:
            print(df.to_csv(sep="\t" if args.format == "tsv" else ",", index=False), end="")
        else:
            write_table(args.output, df, fmt=args.format)

    if args.plot:
        for path, h in results:
            plot_path = _plot_path(args.plot, path, args.path if args.path.is_dir() else None)
            plot_histogram(h, plot_path, title=str(path))
            logging.info(f"Plot -> {plot_path}")
    return 0


def cmd_scan(args: argparse.Namespace) -> int:
    summary = run_scan(args.directory, strict=args.strict, show_progress=not args.quiet)
    if args.output is None:
        print(json.dumps(summary, indent=2))
    else:
        write_json(args.output, summary)
        logging.info(f"{summary['processed_sequences']} sequences -> {args.output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seqbins",
        description="Bin FASTA sequence lengths into a length-distribution histogram.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # histogram
    p_hist = subparsers.add_parser(
        "histogram",
        help="Compute a length histogram for a FASTA file or every FASTA file in a directory.",
    )
    p_hist.add_argument("path", type=Path, help="FASTA file or directory to search.")
    p_hist.add_argument("--config", type=Path, help="JSON file with binning settings.")
    p_hist.add_argument("--divisor", type=int, help="Target bin divisor (default 10).")
    p_hist.add_argument("--min-length", type=int, help="Ignore sequences shorter than this.")
    p_hist.add_argument("--max-length", type=int, help="Ignore sequences longer than this.")
    p_hist.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail on content before the first FASTA header instead of skipping it.",
    )
    p_hist.add_argument(
        "--format",
        choices=("text", "json") + TABLE_FORMATS,
        default="text",
    )
    p_hist.add_argument("--output", type=Path, help="Write results here instead of stdout.")
    p_hist.add_argument("--plot", type=Path, help="Save a bar chart PNG of each histogram.")
    p_hist.add_argument("--quiet", action="store_true", help="Disable progress bars.")
    p_hist.set_defaults(func=cmd_histogram)

    # scan
    p_scan = subparsers.add_parser(
        "scan",
        help="Summarise sequence lengths for every FASTA file in a directory.",
    )
    p_scan.add_argument("directory", type=Path)
    p_scan.add_argument("--output", type=Path, help="Where to store the JSON summary.")
    p_scan.add_argument("--strict", action="store_true")
    p_scan.add_argument("--quiet", action="store_true", help="Disable progress bars.")
    p_scan.set_defaults(func=cmd_scan)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "histogram" and args.format == "parquet" and args.output is None:
        parser.error("--format parquet requires --output")
    setup_logging(args.verbose)
    try:
        return args.func(args)
    except (SeqbinsError, ValueError, OSError) as exc:
        logging.error(f"[{args.command}] {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
