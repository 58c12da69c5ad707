from __future__ import annotations

from typing import Optional


class SeqbinsError(Exception):
    """Base class for errors raised by seqbins."""


class MalformedInputError(SeqbinsError, ValueError):
    """
    Raised in strict mode when content appears before the first FASTA header.
    """

    def __init__(self, message: str, *, line_number: Optional[int] = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class EngineStateError(SeqbinsError, RuntimeError):
    """Raised when the binning engine is driven out of order."""
