from .bins import (
    BinLayout,
    Histogram,
    HistogramBin,
    assign_length_bin,
    assign_length_bins,
    build_histogram,
    compute_bin_layout,
    filter_lengths,
)
from .config import BinningConfig, load_config
from .discovery import FastaFile, collect_fasta_files, discover_fasta_files
from .engine import EngineState, LengthBinningEngine, classify
from .errors import EngineStateError, MalformedInputError, SeqbinsError
from .fasta import SequenceRecord, iter_fasta_records, iter_sequence_lengths, load_fasta, sequence_length
from .stats import ScanReport, run_scan, summarize_lengths

__all__ = [
    "BinLayout",
    "BinningConfig",
    "EngineState",
    "EngineStateError",
    "FastaFile",
    "Histogram",
    "HistogramBin",
    "LengthBinningEngine",
    "MalformedInputError",
    "ScanReport",
    "SeqbinsError",
    "SequenceRecord",
    "assign_length_bin",
    "assign_length_bins",
    "build_histogram",
    "classify",
    "collect_fasta_files",
    "compute_bin_layout",
    "discover_fasta_files",
    "filter_lengths",
    "iter_fasta_records",
    "iter_sequence_lengths",
    "load_config",
    "load_fasta",
    "run_scan",
    "sequence_length",
    "summarize_lengths",
]
