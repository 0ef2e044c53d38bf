"""Test class BatchRunner."""
from multiprocessing import Pipe, Process
from pathlib import Path

from pydantic import ValidationError
import pytest

from price_entry.batch.runner import BatchRunner


@pytest.fixture
def tmp_output_file(tmp_path: Path) -> Path:
    """Create a temporary output file path."""
    return tmp_path / "results.txt"


def _noop() -> None:
    pass


def test_runner_rejects_zero_workers(tmp_output_file: Path) -> None:
    """At least one worker is required."""
    with pytest.raises(ValidationError):
        BatchRunner(output_file=tmp_output_file, max_workers=0)


@pytest.mark.parametrize(
    "payload,expected",
    [
        ({"line_number": 1, "line": "tea 5", "name": "tea", "price": 5}, "tea 5 = tea: 5"),
        (
            {"line_number": 2, "line": "tea", "error": "bad", "kind": "invalid_entry_format"},
            "tea -> ERROR[invalid_entry_format]: bad",
        ),
    ],
)
def test_format_result(payload: dict, expected: str) -> None:
    """format_result renders successes and failures on one line."""
    assert BatchRunner.format_result(payload) == expected


def test_spawn_worker_returns_process_and_pipe(tmp_output_file: Path) -> None:
    """_spawn_worker returns a started Process and the parent end of a Pipe."""
    runner = BatchRunner(output_file=tmp_output_file)
    proc, parent_pipe = runner._spawn_worker("tea 1+1", 1)
    payload = parent_pipe.recv()
    proc.join()
    parent_pipe.close()

    assert payload["name"] == "tea"
    assert payload["price"] == 2


def test_collect_finished_workers_writes_results(tmp_output_file: Path) -> None:
    """_collect_finished_workers writes results and counts failures."""
    runner = BatchRunner(output_file=tmp_output_file)

    active_workers = []
    payloads = [
        {"line_number": 1, "line": "tea 2+3", "name": "tea", "price": 5},
        {"line_number": 2, "line": "tea", "error": "bad", "kind": "invalid_entry_format"},
    ]
    for payload in payloads:
        parent_conn, child_conn = Pipe()
        child_conn.send(payload)
        child_conn.close()

        proc = Process(target=_noop)
        proc.start()
        proc.join()
        active_workers.append((proc, parent_conn))

    with tmp_output_file.open("w") as f_out:
        failures = runner._collect_finished_workers(active_workers, f_out)

    assert failures == 1
    assert active_workers == []
    content = tmp_output_file.read_text()
    assert "tea 2+3 = tea: 5" in content
    assert "tea -> ERROR[invalid_entry_format]: bad" in content


def test_run_writes_every_entry(tmp_output_file: Path) -> None:
    """run parses all lines with a bounded pool and reports the failure count."""
    lines = ["tea 75+25", "(10+10)*3 rent", "coffee 10/0", "бублик 15"]
    runner = BatchRunner(output_file=tmp_output_file, max_workers=2, language="en")

    failures = runner.run(lines)

    assert failures == 1
    content = tmp_output_file.read_text(encoding="utf-8").splitlines()
    assert len(content) == 4
    assert "tea 75+25 = tea: 100" in content
    assert "(10+10)*3 rent = rent: 60" in content
    assert "бублик 15 = бублик: 15" in content
    assert "coffee 10/0 -> ERROR[division_by_zero]: Division by zero in price" in content


def test_run_without_lines(tmp_output_file: Path) -> None:
    """An empty batch produces an empty results file."""
    runner = BatchRunner(output_file=tmp_output_file)
    assert runner.run([]) == 0
    assert tmp_output_file.read_text() == ""
