# ============================================================================
# FundDiagnostics - CLI Tests
#
# Purpose: Test argument parsing, sink routing and exit codes
# Inputs: Parsed CLI arguments, stub model hooks
# Outputs: Test pass/fail
# Dependencies: pytest, sqlite3, FundDiagnostics
# Usage: pytest tests/test_cli.py -v
#
# Changelog:
#   2026-09-02: Initial CLI tests
#   2026-09-09: schedule command
# ============================================================================

import sqlite3

import pytest

from FundDiagnostics import cli
from FundDiagnostics.cli import create_parser, run_command, schedule_command


@pytest.fixture
def stub_hooks(monkeypatch, stub_evaluator, stub_loader):
    """Route "stub:evaluate" / the default loader target to in-process stubs."""
    hooks = {
        "stub:evaluate": stub_evaluator,
        "FundDiagnostics.computation:load_parameter_file": stub_loader,
    }

    def resolve(target):
        return hooks[target]

    monkeypatch.setattr(cli, "resolve_callable", resolve)
    return hooks


def _run(*argv):
    return run_command(create_parser().parse_args(["run", *argv]))


class TestParser:
    def test_run_defaults(self):
        args = create_parser().parse_args(["run"])
        assert args.level is None
        assert args.sink is None
        assert args.echo is False
        assert args.cache_parameters is False

    def test_run_options(self):
        args = create_parser().parse_args(
            ["run", "--level", "2", "--sink", "sqlite", "--echo", "--evaluator", "m:f", "--parameters", "p.yaml"]
        )
        assert args.level == 2
        assert args.sink == "sqlite"
        assert args.echo is True
        assert args.evaluator == "m:f"
        assert args.parameters == "p.yaml"

    def test_rejects_unknown_sink(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["run", "--sink", "datadog"])


class TestRunCommand:
    def test_file_sink(self, tmp_path, stub_hooks):
        out = tmp_path / "runs" / "diag.csv"
        rc = _run("--evaluator", "stub:evaluate", "--out", str(out), "--date", "2026-09-02T12:30:00")

        assert rc == 0
        lines = out.read_text(encoding="utf-8").splitlines()
        assert lines[0] == '"Date";"Variable";"Value"'
        assert len(lines) == 13
        assert lines[1].startswith('"2026-09-02T12:30:00";"SCC-2010-0prtp";')
        assert lines[-1].split(";")[1] == '"SCSF6-2010-1prtp-AvgEw"'

    def test_file_sink_echo(self, tmp_path, stub_hooks, capsys):
        rc = _run("--evaluator", "stub:evaluate", "--out", str(tmp_path / "d.csv"), "--echo")

        assert rc == 0
        out = capsys.readouterr().out
        assert "SCC-2010-0prtp" in out
        assert "SCSF6-2010-1prtp-AvgEw" in out

    def test_sqlite_sink(self, tmp_path, stub_hooks):
        db = tmp_path / "diag.db"
        rc = _run("--evaluator", "stub:evaluate", "--sink", "sqlite", "--out", str(db), "--date", "2026-09-02")

        assert rc == 0
        conn = sqlite3.connect(db)
        rows = conn.execute("SELECT date, variableName FROM FundLongtermDiagnosticOutput ORDER BY rowid").fetchall()
        conn.close()
        assert len(rows) == 12
        assert rows[0] == ("2026-09-02T00:00:00", "SCC-2010-0prtp")

    def test_sqlite_custom_table(self, tmp_path, stub_hooks):
        db = tmp_path / "diag.db"
        rc = _run("--evaluator", "stub:evaluate", "--sink", "sqlite", "--out", str(db), "--table", "Diag")

        assert rc == 0
        conn = sqlite3.connect(db)
        assert conn.execute("SELECT COUNT(*) FROM Diag").fetchone()[0] == 12
        conn.close()

    def test_empty_level_writes_header_only(self, tmp_path, stub_hooks):
        out = tmp_path / "d.csv"
        rc = _run("--evaluator", "stub:evaluate", "--out", str(out), "--level", "2")

        assert rc == 0
        assert out.read_text(encoding="utf-8").splitlines() == ['"Date";"Variable";"Value"']

    def test_parameter_source_passed_to_loader(self, tmp_path, stub_hooks, stub_loader):
        rc = _run(
            "--evaluator", "stub:evaluate", "--out", str(tmp_path / "d.csv"),
            "--parameters", "data/custom.yaml", "--cache-parameters",
        )

        assert rc == 0
        assert stub_loader.calls == ["data/custom.yaml"]

    def test_missing_evaluator(self, tmp_path, stub_hooks, capsys):
        rc = _run("--out", str(tmp_path / "d.csv"))

        assert rc == 1
        assert "No evaluator configured" in capsys.readouterr().err

    def test_invalid_date(self, tmp_path, stub_hooks):
        rc = _run("--evaluator", "stub:evaluate", "--out", str(tmp_path / "d.csv"), "--date", "yesterday")

        assert rc == 1

    def test_unopenable_output(self, tmp_path, stub_hooks, capsys):
        """A directory in place of the output file is reported as a sink error."""
        target = tmp_path / "is_a_dir"
        target.mkdir()
        rc = _run("--evaluator", "stub:evaluate", "--out", str(target))

        assert rc == 1
        assert "Cannot open output file" in capsys.readouterr().err

    def test_model_failure_is_unexpected_error(self, tmp_path, monkeypatch, stub_loader):
        def broken(*args):
            raise RuntimeError("model diverged")

        hooks = {"stub:broken": broken, "FundDiagnostics.computation:load_parameter_file": stub_loader}
        monkeypatch.setattr(cli, "resolve_callable", hooks.__getitem__)
        out = tmp_path / "d.csv"
        rc = _run("--evaluator", "stub:broken", "--out", str(out))

        assert rc == 2
        assert out.read_text(encoding="utf-8").splitlines() == ['"Date";"Variable";"Value"']


class TestScheduleCommand:
    def test_level_1(self, capsys):
        rc = schedule_command(create_parser().parse_args(["schedule", "--level", "1"]))

        assert rc == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 13
        assert "SCC-2010-0prtp " in lines[1]
        assert "SCC-2010-0prtp-AvgEw" in lines[4]

    def test_empty_level(self, capsys):
        rc = schedule_command(create_parser().parse_args(["schedule", "--level", "5"]))

        assert rc == 0
        assert "no scheduled data points" in capsys.readouterr().out
