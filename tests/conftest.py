from pathlib import Path
from typing import List

import pytest


def fasta_text(lengths: List[int], prefix: str = "seq") -> str:
    lines = []
    for idx, length in enumerate(lengths):
        lines.append(f">{prefix}{idx} test record")
        body = "A" * length
        # wrap at 60 columns like most FASTA writers
        for start in range(0, length, 60):
            lines.append(body[start : start + 60])
    return "\n".join(lines) + "\n"


@pytest.fixture
def write_fasta(tmp_path: Path):
    def _write(name: str, lengths: List[int]) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(fasta_text(lengths))
        return path

    return _write


@pytest.fixture
def decade_lengths() -> List[int]:
    return [10, 20, 30, 40, 50, 60, 70, 80, 90, 100]
