from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional

import matplotlib.pyplot as plt
import pandas as pd

from .bins import Histogram

BAR_WIDTH = 50


def render_text(histogram: Histogram, *, title: Optional[str] = None, width: int = BAR_WIDTH) -> str:
    """
    Render a histogram as a fixed-width table with bars scaled to the
    fullest bin.
    """
    layout = histogram.layout
    bins = histogram.bins()
    label_width = max(len(b.label) for b in bins)
    count_width = max(len(str(b.count)) for b in bins)
    max_count = max(max(histogram.counts), 1)

    lines = []
    if title:
        lines.append(title)
    lines.append(
        f"max_len={layout.max_len} bin_size={layout.bin_size} "
        f"num_bins={layout.num_bins} total={histogram.total}"
    )
    for b in bins:
        bar = "#" * (b.count * width // max_count)
        lines.append(f"{b.label:>{label_width}} | {b.count:>{count_width}} {bar}".rstrip())
    return "\n".join(lines)


def write_json(path: Path, payload: Dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2))


def write_table(path: Path, df: pd.DataFrame, fmt: Optional[str] = None) -> None:
    fmt = fmt or path.suffix.lstrip(".")
    path.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "parquet":
        df.to_parquet(path, index=False)
    elif fmt == "tsv":
        df.to_csv(path, sep="\t", index=False)
    else:
        df.to_csv(path, index=False)


def plot_histogram(histogram: Histogram, output_path: Path, *, title: Optional[str] = None) -> None:
    labels = histogram.labels()
    fig, ax = plt.subplots(figsize=(max(6, len(labels) * 0.6), 4))
    ax.bar(range(len(labels)), histogram.counts, color="tab:green")
    ax.set_xticks(range(len(labels)))
    ax.set_xticklabels(labels, rotation=45, ha="right")
    ax.set_xlabel("Sequence length")
    ax.set_ylabel("Records")
    ax.set_title(title or "Length bins")
    ax.grid(axis="y", linestyle="--", alpha=0.4)
    fig.tight_layout()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
