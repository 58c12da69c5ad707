import pytest

from seqbins.discovery import FastaFile, collect_fasta_files, discover_fasta_files, read_lengths


def test_discovers_fasta_extensions_sorted(tmp_path, write_fasta):
    write_fasta("c.fna", [1])
    write_fasta("a.fa", [1])
    write_fasta("sub/b.fasta", [1])
    write_fasta("notes.txt", [1])
    write_fasta("reads.fastq", [1])

    found = discover_fasta_files(tmp_path)
    assert found == [tmp_path / "a.fa", tmp_path / "c.fna", tmp_path / "sub" / "b.fasta"]


def test_missing_directory_raises(tmp_path):
    with pytest.raises(NotADirectoryError):
        discover_fasta_files(tmp_path / "nope")


def test_empty_directory(tmp_path):
    assert discover_fasta_files(tmp_path) == []


def test_collect_keeps_files_independent(write_fasta):
    first = write_fasta("one.fa", [10, 20])
    second = write_fasta("two.fa", [])
    files = collect_fasta_files([first, second], show_progress=False)
    assert files == [FastaFile(path=first, lengths=[10, 20]), FastaFile(path=second, lengths=[])]
    assert len(files[0]) == 2
    assert files[0].name == "one.fa"


def test_read_lengths_wrapped_records(write_fasta):
    path = write_fasta("wrapped.fasta", [0, 61, 120, 7])
    assert read_lengths(path) == [0, 61, 120, 7]


def test_follows_symlinked_directories(tmp_path, write_fasta):
    write_fasta("elsewhere/b.fa", [3])
    data = tmp_path / "data"
    data.mkdir()
    (data / "linked").symlink_to(tmp_path / "elsewhere", target_is_directory=True)
    assert discover_fasta_files(data) == [data / "linked" / "b.fa"]


def test_symlink_loop_is_walked_once(tmp_path, write_fasta):
    write_fasta("data/a.fa", [1])
    data = tmp_path / "data"
    (data / "loop").symlink_to(data, target_is_directory=True)
    assert discover_fasta_files(data) == [data / "a.fa"]
