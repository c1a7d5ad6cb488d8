from __future__ import annotations

from typer.testing import CliRunner

from cli.adaptknn import app
from cli.adaptknn.support import benchmark_utils
from cli.adaptknn.support.benchmark_utils import QueryBenchmarkResult


def test_query_command_invokes_runner(monkeypatch) -> None:
    runner = CliRunner()
    recorded = {}

    def fake_execute(**kwargs) -> QueryBenchmarkResult:
        recorded.update(kwargs)
        return QueryBenchmarkResult(
            elapsed_seconds=0.1,
            queries=kwargs["queries"],
            k=kwargs["k"],
            latency_ms=1.0,
            queries_per_second=1000.0,
            build_seconds=0.05,
        )

    monkeypatch.setattr("cli.adaptknn.query_cli.execute_query_benchmark", fake_execute)

    result = runner.invoke(
        app,
        ["query", "--dimension", "2", "--tree-points", "8", "--queries", "4", "--k", "1", "--weights", "2,0.5"],
    )
    assert result.exit_code == 0, result.output
    assert recorded["dimension"] == 2
    assert recorded["weights"] == [2.0, 0.5]
    assert recorded["compare_baseline"] is False
    assert "qps=1000.0" in result.stdout


def test_query_command_checks_against_baseline() -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["query", "--dimension", "3", "--tree-points", "64", "--queries", "8", "--k", "3", "--baseline"],
    )
    assert result.exit_code == 0, result.output
    assert "baseline mismatches: 0" in result.stdout


def test_query_command_rejects_wrong_weight_count() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["query", "--dimension", "3", "--weights", "1,2"])
    assert result.exit_code != 0


def test_classify_command_reports_weights() -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["classify", "--mode", "adaptive", "--train-points", "60", "--test-points", "20", "--k", "3"],
    )
    assert result.exit_code == 0, result.output
    assert "[adaptive]" in result.stdout
    assert "Sex:" in result.stdout


def test_classify_command_rejects_unknown_mode() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["classify", "--mode", "bogus"])
    assert result.exit_code != 0


def test_classify_command_refuses_empty_training_set() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["classify", "--train-points", "0"])
    assert result.exit_code == 2


def test_static_classify_defaults_to_titanic_weights() -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["classify", "--mode", "static", "--train-points", "40", "--test-points", "10"],
    )
    assert result.exit_code == 0, result.output
    assert "[static]" in result.stdout
    assert "Sex: 3.00" in result.stdout
    assert "Embarked: 0.50" in result.stdout


def test_query_command_takes_default_k_from_environment(monkeypatch) -> None:
    runner = CliRunner()
    recorded = {}

    def fake_execute(**kwargs) -> QueryBenchmarkResult:
        recorded.update(kwargs)
        return QueryBenchmarkResult(
            elapsed_seconds=0.1,
            queries=kwargs["queries"],
            k=kwargs["k"],
            latency_ms=1.0,
            queries_per_second=1000.0,
            build_seconds=0.05,
        )

    monkeypatch.setattr("cli.adaptknn.query_cli.execute_query_benchmark", fake_execute)
    monkeypatch.setenv("ADAPTKNN_DEFAULT_K", "9")

    result = runner.invoke(app, ["query", "--dimension", "2", "--tree-points", "8", "--queries", "4"])
    assert result.exit_code == 0, result.output
    assert recorded["k"] == 9
    assert "k=9" in result.stdout


def test_classify_command_takes_default_k_from_environment(monkeypatch) -> None:
    runner = CliRunner()
    recorded = {}
    real_run = benchmark_utils.execute_classification_run

    def spy_run(**kwargs):
        recorded.update(kwargs)
        return real_run(**kwargs)

    monkeypatch.setattr("cli.adaptknn.classify_cli.execute_classification_run", spy_run)
    monkeypatch.setenv("ADAPTKNN_DEFAULT_K", "3")

    result = runner.invoke(
        app, ["classify", "--mode", "static", "--train-points", "30", "--test-points", "5"]
    )
    assert result.exit_code == 0, result.output
    assert recorded["k"] == 3
