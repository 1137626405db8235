"""modresolve CLI - Main entry point."""
from typing import Optional

import typer

from modresolve_common import ResolverError, configure_logging, load_settings

from . import check_cmd, graph_cmd, info_cmd, resolve_cmd, validate_cmd
from .utils import error

app = typer.Typer(
    name="modresolve",
    help="modresolve CLI - Resolve and inspect module load order",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def setup(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Override MODRESOLVE_LOG_LEVEL (debug, info, warning, error)"
    ),
    log_json: bool = typer.Option(False, "--log-json", help="Emit log lines as JSON"),
):
    """Configure logging from the environment before running a command."""
    try:
        settings = load_settings()
    except ResolverError as e:
        error(e.message)
        raise typer.Exit(1)

    try:
        configure_logging(
            log_level or settings.log_level,
            json_format=log_json or settings.log_json,
        )
    except ValueError as e:
        error(str(e))
        raise typer.Exit(1)


# Register all commands
app.command()(resolve_cmd.resolve)
app.command()(graph_cmd.graph)
app.command()(validate_cmd.validate)
app.command()(check_cmd.check)
app.command()(info_cmd.version)


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
