from __future__ import annotations

from typing import Optional

import typer

from adaptknn.weights.presets import TITANIC_FEATURES, default_titanic_weights, describe_weights

from .query_cli import parse_weights, resolve_k
from .support.benchmark_utils import execute_classification_run

classify_app = typer.Typer(
    add_completion=False,
    invoke_without_command=True,
    help="Classify a synthetic labelled split with static and/or adaptive weights.",
)

_MODES = ("static", "adaptive", "both")


@classify_app.callback()
def classify(
    mode: str = typer.Option("both", "--mode", help="static, adaptive or both."),
    dimension: int = typer.Option(len(TITANIC_FEATURES), "--dimension", "-d", min=1),
    train_points: int = typer.Option(600, "--train-points", min=0),
    test_points: int = typer.Option(200, "--test-points", min=0),
    k: Optional[int] = typer.Option(None, "--k", min=1, help="Defaults to ADAPTKNN_DEFAULT_K."),
    seed: int = typer.Option(0, "--seed"),
    weights: Optional[str] = typer.Option(None, "--weights", help="Static weight vector."),
) -> None:
    mode = mode.strip().lower()
    if mode not in _MODES:
        raise typer.BadParameter(f"Unknown mode '{mode}'. Expected one of {_MODES}.")
    if train_points == 0:
        typer.echo("training set is empty; nothing to vote with", err=True)
        raise typer.Exit(code=2)
    k = resolve_k(k)
    weight_vector = parse_weights(weights, dimension)
    if dimension == len(TITANIC_FEATURES):
        names = TITANIC_FEATURES
        if weight_vector is None:
            weight_vector = default_titanic_weights().tolist()
    else:
        names = tuple(f"f{idx}" for idx in range(dimension))

    modes = ("static", "adaptive") if mode == "both" else (mode,)
    for run_mode in modes:
        result = execute_classification_run(
            mode=run_mode,
            dimension=dimension,
            train_points=train_points,
            test_points=test_points,
            k=k,
            seed=seed,
            weights=weight_vector,
        )
        typer.echo(
            f"[{result.mode}] accuracy={result.accuracy:.4f} "
            f"elapsed={result.elapsed_seconds:.4f}s"
        )
        typer.echo(describe_weights(result.final_weights, names))


__all__ = ["classify_app"]
