"""Resolve command - Print the module load order."""
import json

import typer
from rich.table import Table

from modresolve_sdk import DependencyResolver

from .utils import console, error, handle_error, info, load_modules, print_messages, success


def resolve(
    path: str = typer.Argument(..., help="Manifest file or modules directory"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    enabled_only: bool = typer.Option(
        False, "--enabled-only", "-e", help="Treat disabled modules as not installed"
    ),
    groups: bool = typer.Option(
        False, "--groups", "-g", help="Also show groups of modules that can load together"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
):
    """
    Resolve the order in which modules must load.

    Every module is placed after the modules it requires and after any
    optional dependencies that are present.

    Examples:
        modresolve resolve modules.yaml
        modresolve resolve ./modules --enabled-only
        modresolve resolve modules.yaml --json
    """
    try:
        descriptors = load_modules(path, verbose=verbose and not as_json)
        if enabled_only:
            descriptors = [d for d in descriptors if d.enabled]

        resolver = DependencyResolver()
        result = resolver.resolve(descriptors)

        if as_json:
            payload = result.to_dict()
            if result.ok and groups:
                payload["groups"] = [
                    [str(key) for key in group] for group in resolver.load_groups(descriptors)
                ]
            typer.echo(json.dumps(payload, indent=2))
            if not result.ok:
                raise typer.Exit(1)
            return

        if not result.ok:
            error(f"Resolution failed ({result.error.code})")
            print_messages(result.messages)
            raise typer.Exit(1)

        by_key = {d.key: d for d in descriptors}
        table = Table(title="Load Order", show_header=True, header_style="bold cyan")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Module", style="cyan", no_wrap=True)
        table.add_column("Version", style="green")
        if verbose:
            table.add_column("Depends on")

        for position, key in enumerate(result.order, 1):
            descriptor = by_key[key]
            row = [str(position), str(key), descriptor.version]
            if verbose:
                row.append(", ".join(str(k) for k in descriptor.all_dependencies()) or "-")
            table.add_row(*row)

        console.print(table)

        if groups:
            console.print()
            for index, group in enumerate(resolver.load_groups(descriptors), 1):
                info(f"Group {index}: {', '.join(str(k) for k in group)}")

        success(f"Resolved {len(result.order)} module(s)")

    except typer.Exit:
        raise
    except Exception as e:
        handle_error(e, verbose)
        raise typer.Exit(1)
