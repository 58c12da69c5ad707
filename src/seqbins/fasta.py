from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Union

import pandas as pd

from .errors import MalformedInputError


@dataclass(frozen=True)
class SequenceRecord:
    identifier: str
    sequence: str

    @property
    def accession(self) -> str:
        parts = self.identifier.split(maxsplit=1)
        return parts[0] if parts else ""

    @property
    def description(self) -> str:
        parts = self.identifier.split(maxsplit=1)
        return parts[1] if len(parts) == 2 else ""

    @property
    def length(self) -> int:
        return sequence_length(self)


def sequence_length(record: SequenceRecord) -> int:
    """
    Number of residue characters in the record body. Gaps, ambiguity codes and
    lowercase letters all count; only line separators are excluded.
    """
    return len(record.sequence)


def iter_fasta_records(
    lines: Iterable[Union[str, bytes]],
    *,
    strict: bool = False,
) -> Iterator[SequenceRecord]:
    """
    Lazily parse FASTA text into SequenceRecords.

    ``lines`` is anything yielding lines, typically an open text handle.
    Bytes are decoded as UTF-8 so lengths count characters, not bytes. The
    identifier is the raw header text after ``>``; body lines are concatenated
    with trailing whitespace removed and blank lines skipped.

    Non-blank content before the first header raises MalformedInputError in
    strict mode. Otherwise it is skipped and reported once as a warning.
    Read errors from the underlying handle propagate unchanged.
    """
    identifier: Optional[str] = None
    chunks: List[str] = []
    skipped = 0
    first_skipped: Optional[int] = None

    for line_number, raw_line in enumerate(lines, start=1):
        if isinstance(raw_line, bytes):
            raw_line = raw_line.decode("utf-8")
        if raw_line.startswith(">"):
            if identifier is not None:
                yield SequenceRecord(identifier=identifier, sequence="".join(chunks))
            elif skipped:
                _warn_skipped(skipped, first_skipped)
            identifier = raw_line[1:].rstrip("\r\n")
            chunks = []
            continue

        line = raw_line.rstrip()
        if not line:
            continue
        if identifier is None:
            if strict:
                raise MalformedInputError(
                    "sequence content before the first '>' header",
                    line_number=line_number,
                )
            skipped += 1
            if first_skipped is None:
                first_skipped = line_number
            continue
        chunks.append(line)

    if identifier is not None:
        yield SequenceRecord(identifier=identifier, sequence="".join(chunks))
    elif skipped:
        _warn_skipped(skipped, first_skipped)


def iter_sequence_lengths(
    lines: Iterable[Union[str, bytes]],
    *,
    strict: bool = False,
) -> Iterator[int]:
    for record in iter_fasta_records(lines, strict=strict):
        yield sequence_length(record)


def load_fasta(path: Path, *, strict: bool = False) -> pd.DataFrame:
    """
    Read a FASTA file and return a DataFrame with columns:
      - identifier: full header text without '>'
      - accession: first word of the header
      - description: remainder of the header line
      - length: number of residues in the sequence
    """
    rows: List[Dict[str, object]] = []
    with open(path, "r", encoding="utf-8") as handle:
        for record in iter_fasta_records(handle, strict=strict):
            rows.append(
                {
                    "identifier": record.identifier,
                    "accession": record.accession,
                    "description": record.description,
                    "length": record.length,
                }
            )
    return pd.DataFrame.from_records(
        rows, columns=["identifier", "accession", "description", "length"]
    )


def _warn_skipped(count: int, first_line: Optional[int]) -> None:
    logging.warning(
        f"Skipped {count} line(s) before the first FASTA header (first at line {first_line})."
    )
