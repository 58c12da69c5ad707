from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Sequence

import numpy as np

from .discovery import collect_fasta_files, discover_fasta_files


@dataclass
class ScanReport:
    total_sequences: int
    elapsed_seconds: float
    throughput: float


def summarize_lengths(lengths: Sequence[int]) -> Dict[str, float]:
    """Basic length statistics; empty input gives an empty dict."""
    if len(lengths) == 0:
        return {}
    arr = np.asarray(lengths)
    return {
        "count": int(arr.size),
        "total": int(arr.sum()),
        "min": int(arr.min()),
        "max": int(arr.max()),
        "mean": float(arr.mean()),
        "median": float(np.median(arr)),
        "p95": float(np.percentile(arr, 95)),
    }


def run_scan(
    directory: Path,
    *,
    strict: bool = False,
    show_progress: bool = True,
) -> dict:
    """
    Read every FASTA file under ``directory`` and summarise its lengths.
    Timing covers parsing only so the throughput can be used to estimate
    larger runs.
    """
    paths = discover_fasta_files(directory)

    start = time.perf_counter()
    files = collect_fasta_files(paths, strict=strict, show_progress=show_progress)
    elapsed = time.perf_counter() - start

    processed = sum(len(f) for f in files)
    report = ScanReport(
        total_sequences=processed,
        elapsed_seconds=elapsed,
        throughput=processed / elapsed if elapsed and processed else 0.0,
    )
    return {
        "directory": str(directory),
        "processed_sequences": report.total_sequences,
        "elapsed_seconds": report.elapsed_seconds,
        "throughput_per_second": report.throughput,
        "files": [
            {
                "path": str(f.path),
                "records": len(f),
                "length_stats": summarize_lengths(f.lengths),
            }
            for f in files
        ],
    }
