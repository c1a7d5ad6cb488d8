from __future__ import annotations

import typer

from .classify_cli import classify_app
from .query_cli import query_app


_HELP = """Weighted k-nearest-neighbour command line interface.

Subcommands time tree queries and run static or adaptive classification on
synthetic data."""

app = typer.Typer(
    add_completion=False,
    pretty_exceptions_enable=False,
    context_settings={"help_option_names": ["-h", "--help"]},
    help=_HELP,
)


@app.callback()
def adaptknn_callback() -> None:
    """Root callback reserved for shared options (none yet)."""
    pass


app.add_typer(query_app, name="query", help="Time weighted k-NN queries.")
app.add_typer(classify_app, name="classify", help="Run static/adaptive classification.")


def main() -> None:
    app()


__all__ = ["app", "main"]
