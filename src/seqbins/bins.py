from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class BinLayout:
    """
    Fixed-width bin layout derived from the longest observed sequence.
    Bin ``i`` covers ``[i * bin_size, (i + 1) * bin_size)`` except the last
    one, which is open-ended.
    """

    max_len: int
    bin_size: int
    num_bins: int

    def __post_init__(self) -> None:
        if self.max_len < 0:
            raise ValueError(f"max_len must be >= 0, got {self.max_len}")
        if self.bin_size < 1:
            raise ValueError(f"bin_size must be >= 1, got {self.bin_size}")
        if self.num_bins < 1:
            raise ValueError(f"num_bins must be >= 1, got {self.num_bins}")

    def lower_bound(self, index: int) -> int:
        return index * self.bin_size

    def upper_bound(self, index: int) -> Optional[int]:
        """Exclusive upper bound, or None for the final catch-all bin."""
        if index >= self.num_bins - 1:
            return None
        return (index + 1) * self.bin_size


class HistogramBin(NamedTuple):
    index: int
    lower: int
    upper: Optional[int]
    count: int

    @property
    def label(self) -> str:
        if self.upper is None:
            return f"{self.lower}+"
        return f"{self.lower}-{self.upper - 1}"


@dataclass(frozen=True)
class Histogram:
    layout: BinLayout
    counts: Tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.counts) != self.layout.num_bins:
            raise ValueError(
                f"expected {self.layout.num_bins} counts, got {len(self.counts)}"
            )

    @property
    def total(self) -> int:
        return sum(self.counts)

    def bins(self) -> List[HistogramBin]:
        return [
            HistogramBin(
                index=idx,
                lower=self.layout.lower_bound(idx),
                upper=self.layout.upper_bound(idx),
                count=count,
            )
            for idx, count in enumerate(self.counts)
        ]

    def labels(self) -> List[str]:
        return [b.label for b in self.bins()]

    def to_frame(self) -> pd.DataFrame:
        bins = self.bins()
        return pd.DataFrame(
            {
                "bin": [b.index for b in bins],
                "lower": [b.lower for b in bins],
                "upper": pd.array([b.upper for b in bins], dtype="Int64"),
                "label": [b.label for b in bins],
                "count": [b.count for b in bins],
            }
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "max_len": self.layout.max_len,
            "bin_size": self.layout.bin_size,
            "num_bins": self.layout.num_bins,
            "total": self.total,
            "bins": [
                {
                    "index": b.index,
                    "lower": b.lower,
                    "upper": b.upper,
                    "label": b.label,
                    "count": b.count,
                }
                for b in self.bins()
            ],
        }


def _as_length_array(lengths: Iterable[int]) -> np.ndarray:
    if isinstance(lengths, np.ndarray):
        arr = lengths.astype(np.int64, copy=False)
    else:
        arr = np.fromiter((int(length) for length in lengths), dtype=np.int64)
    if arr.size and int(arr.min()) < 0:
        raise ValueError("sequence lengths must be non-negative")
    return arr


def compute_bin_layout(
    lengths: Iterable[int],
    *,
    target_bin_divisor: int = 10,
) -> BinLayout:
    """
    Derive the bin layout from the complete set of lengths.

    bin_size = max(1, trunc(max_len / target_bin_divisor)), computed in float
    arithmetic; num_bins = ceil(max_len / bin_size) + 1. An empty input gives a
    single bin of width 1.
    """
    if target_bin_divisor < 1:
        raise ValueError(f"target_bin_divisor must be >= 1, got {target_bin_divisor}")
    arr = _as_length_array(lengths)
    max_len = int(arr.max()) if arr.size else 0
    bin_size = int(max(max_len / float(target_bin_divisor), 1.0))
    num_bins = (max_len + bin_size - 1) // bin_size + 1
    return BinLayout(max_len=max_len, bin_size=bin_size, num_bins=num_bins)


def assign_length_bin(length: int, layout: BinLayout) -> int:
    """
    Map a length to its bin index. Lengths at or past the last boundary are
    clamped into the final bin.
    """
    if length < 0:
        raise ValueError(f"sequence length must be non-negative, got {length}")
    return min(length // layout.bin_size, layout.num_bins - 1)


def assign_length_bins(lengths: Sequence[int], layout: BinLayout) -> np.ndarray:
    arr = _as_length_array(lengths)
    return np.minimum(arr // layout.bin_size, layout.num_bins - 1)


def build_histogram(lengths: Sequence[int], layout: BinLayout) -> Histogram:
    """
    Count lengths per bin. The sum of the counts always equals the number of
    lengths supplied.
    """
    indices = assign_length_bins(lengths, layout)
    counts = np.bincount(indices, minlength=layout.num_bins)
    return Histogram(layout=layout, counts=tuple(int(c) for c in counts))


def filter_lengths(
    lengths: Iterable[int],
    *,
    min_length: int = 0,
    max_length: Optional[int] = None,
) -> List[int]:
    """Keep lengths inside the inclusive ``[min_length, max_length]`` window."""
    return [
        length
        for length in lengths
        if length >= min_length and (max_length is None or length <= max_length)
    ]
