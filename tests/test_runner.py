"""
Tests for the runner and CLI.

Verifies:
  - solve() answers and receipt sections
  - Double-run determinism check
  - Decode failures keep the receipts gathered so far
  - CLI exit codes: 0 ok, 1 parse/file error, 2 decode failure
"""

import json

import pytest

import sevenseg.runner as runner
from sevenseg.runner import DecodeFailed, main, solve, solve_with_determinism_check
from sevenseg.core import DeterminismError
from sevenseg.kernel import MissingAnchor

# Entry 0 has no size-2 input ("ab" -> "abg")
BROKEN = (
    "acedgfb cdfbe gcdfa fbcad dab cefabd cdfgeb eafb cagedb abg | cdfeb fcadb cdfeb cdbaf"
)


def test_solve_sample(sample_text):
    answers, receipts = solve(sample_text)

    assert answers == {"direct_count": 26, "decoded_sum": 61229}
    assert list(receipts) == ["rule_table", "parse", "direct_count", "decode"]
    assert receipts["parse"]["payload"]["num_entries"] == 10


def test_solve_part_one_only(sample_text):
    answers, receipts = solve(sample_text, ("direct_count",))
    assert answers == {"direct_count": 26}
    assert "decode" not in receipts


def test_solve_unknown_part(sample_text):
    with pytest.raises(ValueError):
        solve(sample_text, ("part3",))


def test_solve_receipts_stable(sample_text):
    _, a = solve(sample_text)
    _, b = solve(sample_text)
    for section in a:
        assert a[section]["section_hash"] == b[section]["section_hash"]


def test_determinism_check(sample_text):
    answers, receipts = solve_with_determinism_check(sample_text)
    assert answers["decoded_sum"] == 61229
    assert receipts["determinism.double_run_ok"] is True
    assert receipts["determinism.sections_checked"] == 4


def test_decode_failure_keeps_receipts():
    with pytest.raises(DecodeFailed) as exc_info:
        solve(BROKEN)

    err = exc_info.value
    assert isinstance(err.error, MissingAnchor)
    assert err.error.entry_index == 0
    assert "entry 0" in str(err)
    assert set(err.receipts) == {"rule_table", "parse", "direct_count"}


def test_part_one_survives_undecodable_entry():
    answers, _ = solve(BROKEN, ("direct_count",))
    # outputs: cdfeb fcadb cdfeb cdbaf, all size 5
    assert answers == {"direct_count": 0}


def test_cli_stdout(sample_path, capsys):
    assert main([str(sample_path)]) == 0

    result = json.loads(capsys.readouterr().out)
    assert result["answers"] == {"direct_count": 26, "decoded_sum": 61229}


def test_cli_part_and_output(sample_path, tmp_path):
    out = tmp_path / "result.json"
    assert main([str(sample_path), "--part", "2", "--determinism-check", "--output", str(out)]) == 0

    result = json.loads(out.read_text(encoding="utf-8"))
    assert result["answers"] == {"decoded_sum": 61229}


def test_cli_missing_file(tmp_path):
    assert main([str(tmp_path / "nope.txt")]) == 1


def test_cli_directory_path(tmp_path):
    """A directory is unreadable as input: exit 1, no traceback."""
    assert main([str(tmp_path)]) == 1


def test_cli_binary_file(tmp_path):
    """Bytes that are not UTF-8 exit 1."""
    path = tmp_path / "binary.txt"
    path.write_bytes(b"\xff\xfe\x00\x81 | \xc3")
    assert main([str(path)]) == 1


def test_cli_determinism_failure(sample_path, monkeypatch):
    """A decode section drifting between runs exits 1."""

    def drift(build):
        raise DeterminismError(
            section="decode",
            first_differing_key="decoded_sum",
            value_a=61229,
            value_b=61230,
            hash_a="a" * 64,
            hash_b="b" * 64,
        )

    monkeypatch.setattr(runner, "assert_double_run_equal", drift)
    assert main([str(sample_path), "--determinism-check"]) == 1


def test_cli_parse_error(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_text("no separator\n", encoding="utf-8")
    assert main([str(path)]) == 1


def test_cli_decode_failure(tmp_path):
    path = tmp_path / "broken.txt"
    path.write_text(BROKEN + "\n", encoding="utf-8")
    out = tmp_path / "error.json"

    assert main([str(path), "--output", str(out)]) == 2

    dumped = json.loads(out.read_text(encoding="utf-8"))
    assert "entry 0" in dumped["error"]
    assert "decode" not in dumped["receipts"]
