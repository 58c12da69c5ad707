from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Set, Tuple

from tqdm.auto import tqdm

from .fasta import iter_sequence_lengths

FASTA_SUFFIXES = (".fasta", ".fa", ".fna")


@dataclass
class FastaFile:
    path: Path
    lengths: List[int]

    @property
    def name(self) -> str:
        return self.path.name

    def __len__(self) -> int:
        return len(self.lengths)


def is_fasta_path(path: Path) -> bool:
    return path.suffix in FASTA_SUFFIXES


def discover_fasta_files(directory: Path) -> List[Path]:
    """
    Walk ``directory`` (following symlinks) and return every FASTA file,
    sorted by path.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise NotADirectoryError(f"{directory} is not a directory")
    found: List[Path] = []
    visited: Set[Tuple[int, int]] = set()
    for root, dirs, files in os.walk(directory, followlinks=True):
        st = os.stat(root)
        key = (st.st_dev, st.st_ino)
        if key in visited:
            # symlink loop back into an already walked directory
            dirs[:] = []
            continue
        visited.add(key)
        for name in files:
            path = Path(root) / name
            if is_fasta_path(path):
                found.append(path)
    found.sort()
    logging.info(f"Found {len(found)} FASTA file(s) under {directory}")
    return found


def read_lengths(path: Path, *, strict: bool = False) -> List[int]:
    with open(path, "r", encoding="utf-8") as handle:
        return list(iter_sequence_lengths(handle, strict=strict))


def collect_fasta_files(
    paths: Iterable[Path],
    *,
    strict: bool = False,
    show_progress: bool = True,
) -> List[FastaFile]:
    """Read each file independently into a FastaFile with its record lengths."""
    paths = list(paths)
    files: List[FastaFile] = []
    for path in tqdm(paths, desc="read-fasta", unit="file", disable=not show_progress):
        lengths = read_lengths(path, strict=strict)
        logging.debug(f"{path}: {len(lengths)} records")
        files.append(FastaFile(path=Path(path), lengths=lengths))
    return files
