from __future__ import annotations

import typer

from src.cli.session import CommandSession
from src.observability import setup_logging


app = typer.Typer(add_completion=False, help="Best exchange rate across exchanges")


@app.command()
def run(
    log_level: str = typer.Option("WARNING", "--log-level", "-l", help="Logging level (DEBUG, INFO, WARNING, ...)"),
    json_logs: bool = typer.Option(False, "--json-logs/--console-logs", help="Emit logs as JSON"),
    json_output: bool = typer.Option(False, "--json-output", help="Print best rates as JSON payloads"),
):
    """Start the interactive price-update / best-rate command loop."""

    setup_logging(level=log_level, json_logs=json_logs)
    CommandSession(json_output=json_output).run()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
