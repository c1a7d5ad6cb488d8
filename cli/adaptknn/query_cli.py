from __future__ import annotations

from typing import List, Optional

import typer

from adaptknn import config as ak_config
from adaptknn.logging import get_logger

from .support.benchmark_utils import execute_query_benchmark

LOGGER = get_logger("cli.query")

query_app = typer.Typer(
    add_completion=False,
    invoke_without_command=True,
    help="Time weighted k-NN queries against a tree over synthetic points.",
)


def parse_weights(raw: Optional[str], dimension: int) -> Optional[List[float]]:
    if raw is None or raw.strip() == "":
        return None
    try:
        values = [float(part) for part in raw.split(",") if part.strip()]
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid weight list '{raw}'.") from exc
    if len(values) != dimension:
        raise typer.BadParameter(
            f"Expected {dimension} comma-separated weights, received {len(values)}."
        )
    return values


def resolve_k(k: Optional[int]) -> int:
    if k is None:
        return ak_config.runtime_config().default_k
    return k


@query_app.callback()
def query(
    dimension: int = typer.Option(7, "--dimension", "-d", min=1, help="Feature count D."),
    tree_points: int = typer.Option(2048, "--tree-points", min=0, help="Points indexed."),
    queries: int = typer.Option(256, "--queries", min=0, help="Queries to run."),
    k: Optional[int] = typer.Option(
        None, "--k", min=1, help="Neighbours per query (defaults to ADAPTKNN_DEFAULT_K)."
    ),
    seed: int = typer.Option(0, "--seed", help="Random seed for point generation."),
    weights: Optional[str] = typer.Option(None, "--weights", help="Comma-separated weight vector."),
    baseline: bool = typer.Option(
        False, "--baseline/--no-baseline", help="Check results against the dense jax baseline."
    ),
) -> None:
    k = resolve_k(k)
    weight_vector = parse_weights(weights, dimension)
    result = execute_query_benchmark(
        dimension=dimension,
        tree_points=tree_points,
        queries=queries,
        k=k,
        seed=seed,
        weights=weight_vector,
        compare_baseline=baseline,
    )
    LOGGER.debug("Query benchmark finished: %s", result)
    typer.echo(
        f"build={result.build_seconds:.4f}s queries={result.queries} k={result.k} "
        f"latency={result.latency_ms:.4f}ms qps={result.queries_per_second:.1f}"
    )
    if result.baseline_mismatches is not None:
        typer.echo(f"baseline mismatches: {result.baseline_mismatches}")
        if result.baseline_mismatches:
            raise typer.Exit(code=1)


__all__ = ["query_app", "parse_weights", "resolve_k"]
