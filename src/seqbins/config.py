from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class BinningConfig:
    """
    Knobs for a single binning run.

    ``target_bin_divisor`` sets the granularity: the bin width is the maximum
    observed length divided by it (truncated, never below 1). ``min_length`` and
    ``max_length`` form an inclusive filter window applied before the layout is
    derived. ``strict`` turns content before the first FASTA header into an
    error instead of a logged warning.
    """

    target_bin_divisor: int = 10
    strict: bool = False
    min_length: int = 0
    max_length: Optional[int] = None

    def __post_init__(self) -> None:
        if not _is_int(self.target_bin_divisor) or self.target_bin_divisor < 1:
            raise ValueError(
                f"target_bin_divisor must be a positive integer, got {self.target_bin_divisor!r}"
            )
        if not _is_int(self.min_length) or self.min_length < 0:
            raise ValueError(f"min_length must be a non-negative integer, got {self.min_length!r}")
        if self.max_length is not None:
            if not _is_int(self.max_length) or self.max_length < 0:
                raise ValueError(
                    f"max_length must be a non-negative integer, got {self.max_length!r}"
                )
            if self.min_length > self.max_length:
                raise ValueError(
                    f"min_length ({self.min_length}) exceeds max_length ({self.max_length})"
                )
        if not isinstance(self.strict, bool):
            raise ValueError(f"strict must be a boolean, got {self.strict!r}")

    @property
    def filters_lengths(self) -> bool:
        return self.min_length > 0 or self.max_length is not None

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "BinningConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(payload) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**payload)


def load_config(path: Path) -> BinningConfig:
    payload = json.loads(Path(path).read_text())
    if not isinstance(payload, dict):
        raise ValueError(f"Config at {path} must be a JSON object")
    return BinningConfig.from_dict(payload)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
