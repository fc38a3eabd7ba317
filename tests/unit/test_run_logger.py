"""Unit tests for RunLogger."""

from pathlib import Path

import pytest

from fsynth.models import ExecutionModel, OperationType, Phase, Results, Severity
from fsynth.operations import factories as op
from fsynth.orchestration import RunLogger


@pytest.fixture
def failed_results() -> Results:
    results = Results(model=ExecutionModel.TRANSACTIONAL, executed_count=1, rollback_count=1, duration=75.0)
    results.add_error(1, OperationType.DELETE, "Path does not exist: ghost", phase=Phase.VALIDATION)
    results.add_error(0, OperationType.CREATE_FILE, "checksum drift", severity=Severity.WARNING)
    results.add_log("Rolled back 1 operations")
    return results


@pytest.mark.unit
class TestRunLogger:
    def test_writes_all_sections(self, temp_dir: Path, failed_results: Results):
        log_path = temp_dir / "run.log"
        operations = [op.create_file(temp_dir / "a.txt", "x"), op.delete(temp_dir / "ghost")]

        with RunLogger(log_path, dry_run=False, model=ExecutionModel.TRANSACTIONAL) as run_log:
            run_log.log_header()
            run_log.log_plan(operations)
            run_log.log_results(failed_results)
            run_log.log_summary(failed_results)

        text = log_path.read_text()
        assert "Mode: LIVE" in text
        assert "Model: transactional" in text
        assert "Operations queued: 2" in text
        assert "[1] delete:" in text
        assert "- #1 delete [validation]: Path does not exist: ghost" in text
        assert "! #0 create_file: checksum drift" in text
        assert "Rolled back: 1" in text
        assert "Result: FAILED" in text
        assert "Duration: 1m 15s" in text

    def test_dry_run_header(self, temp_dir: Path):
        log_path = temp_dir / "dry.log"

        with RunLogger(log_path, dry_run=True) as run_log:
            run_log.log_header()

        assert "Mode: DRY RUN" in log_path.read_text()

    def test_default_path_is_timestamped(self, temp_dir: Path, monkeypatch):
        monkeypatch.chdir(temp_dir)

        run_log = RunLogger()

        assert run_log.get_log_path().parent == Path.cwd()
        assert run_log.get_log_path().name.startswith("fsynth_run_")

    def test_missing_parent_directory(self, temp_dir: Path):
        with pytest.raises(OSError, match="does not exist"):
            RunLogger(temp_dir / "nope" / "run.log")

    def test_write_after_close_is_ignored(self, temp_dir: Path):
        log_path = temp_dir / "run.log"
        run_log = RunLogger(log_path)
        with run_log:
            run_log.log_header()

        run_log.log_header()

        assert log_path.read_text().count("fsynth - Execution Log") == 1

    @pytest.mark.parametrize(
        "seconds, expected",
        [(0, "0s"), (45.9, "45s"), (323, "5m 23s"), (3930, "1h 5m 30s")],
    )
    def test_format_duration(self, temp_dir: Path, seconds, expected):
        assert RunLogger(temp_dir / "x.log")._format_duration(seconds) == expected
