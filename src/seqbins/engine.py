from __future__ import annotations

import logging
import numbers
from enum import Enum
from typing import Iterable, List, Optional, Union

from .bins import BinLayout, Histogram, build_histogram, compute_bin_layout, filter_lengths
from .config import BinningConfig
from .errors import EngineStateError
from .fasta import SequenceRecord, iter_sequence_lengths, sequence_length


class EngineState(str, Enum):
    COLLECTING = "collecting"
    LAYOUT_COMPUTED = "layout_computed"
    CLASSIFIED = "classified"


class LengthBinningEngine:
    """
    Two-pass length binner for a single input.

    The layout depends on the longest sequence, which is only known once the
    input is exhausted, so every collected length is buffered in memory (one
    int per record; sequences themselves are dropped as soon as they are
    measured). States advance strictly Collecting -> LayoutComputed ->
    Classified; ``reset`` returns to Collecting with an empty buffer.
    """

    def __init__(self, config: Optional[BinningConfig] = None) -> None:
        self.config = config or BinningConfig()
        self._lengths: List[int] = []
        self._state = EngineState.COLLECTING
        self._layout: Optional[BinLayout] = None
        self._binned: List[int] = []
        self.filtered_out = 0

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def layout(self) -> Optional[BinLayout]:
        return self._layout

    @property
    def collected(self) -> int:
        return len(self._lengths)

    def _require(self, state: EngineState, action: str) -> None:
        if self._state is not state:
            raise EngineStateError(
                f"cannot {action} in state '{self._state.value}' (expected '{state.value}')"
            )

    def add_length(self, length: int) -> None:
        self._require(EngineState.COLLECTING, "add lengths")
        if isinstance(length, bool) or not isinstance(length, numbers.Integral):
            raise TypeError(f"length must be an integer, got {type(length).__name__}")
        if length < 0:
            raise ValueError(f"sequence length must be non-negative, got {length}")
        self._lengths.append(int(length))

    def add_record(self, record: SequenceRecord) -> None:
        self.add_length(sequence_length(record))

    def consume(self, items: Iterable[Union[int, SequenceRecord]]) -> int:
        """
        Buffer lengths from integers and/or SequenceRecords. Returns how many
        were added. If any item fails, nothing from this call is kept.
        """
        start = len(self._lengths)
        try:
            for item in items:
                if isinstance(item, SequenceRecord):
                    self.add_record(item)
                else:
                    self.add_length(item)
        except Exception:
            del self._lengths[start:]
            raise
        return len(self._lengths) - start

    def consume_fasta(self, lines: Iterable[Union[str, bytes]]) -> int:
        self._require(EngineState.COLLECTING, "consume FASTA input")
        return self.consume(iter_sequence_lengths(lines, strict=self.config.strict))

    def compute_layout(self) -> BinLayout:
        self._require(EngineState.COLLECTING, "compute the layout")
        lengths = self._lengths
        if self.config.filters_lengths:
            lengths = filter_lengths(
                lengths,
                min_length=self.config.min_length,
                max_length=self.config.max_length,
            )
            self.filtered_out = len(self._lengths) - len(lengths)
        self._layout = compute_bin_layout(
            lengths, target_bin_divisor=self.config.target_bin_divisor
        )
        self._binned = lengths
        self._state = EngineState.LAYOUT_COMPUTED
        logging.debug(
            f"Layout computed from {len(lengths)} lengths "
            f"({self.filtered_out} filtered out): {self._layout}"
        )
        return self._layout

    def classify(self) -> Histogram:
        self._require(EngineState.LAYOUT_COMPUTED, "classify")
        histogram = build_histogram(self._binned, self._layout)
        if histogram.total != len(self._binned):
            raise EngineStateError(
                f"histogram total {histogram.total} does not match {len(self._binned)} lengths"
            )
        self._lengths = []
        self._binned = []
        self._state = EngineState.CLASSIFIED
        return histogram

    def reset(self) -> None:
        self._lengths = []
        self._binned = []
        self._layout = None
        self.filtered_out = 0
        self._state = EngineState.COLLECTING


def classify(
    source: Union[Iterable[int], Iterable[SequenceRecord], Iterable[str]],
    config: Optional[BinningConfig] = None,
) -> Histogram:
    """
    Run the whole pipeline on one input and return its Histogram.

    ``source`` is either a materialised iterable of lengths / SequenceRecords
    or a FASTA text stream (anything with ``read``, e.g. an open file). Files
    are never opened here. Any failure propagates and no partial histogram is
    returned.
    """
    if isinstance(source, (str, bytes)):
        raise TypeError("pass a stream or an iterable of lengths, not raw text")
    engine = LengthBinningEngine(config)
    if hasattr(source, "read"):
        engine.consume_fasta(source)
    else:
        engine.consume(source)
    engine.compute_layout()
    return engine.classify()
