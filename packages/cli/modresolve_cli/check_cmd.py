"""Check command - Test versions against a constraint expression."""
from typing import List

import typer
from rich.markup import escape

from modresolve_common import ParseError
from modresolve_sdk import VersionConstraint

from .utils import console, error


def check(
    constraint: str = typer.Argument(..., help="Constraint expression, e.g. '^1.2'"),
    versions: List[str] = typer.Argument(..., help="One or more versions to test"),
):
    """
    Show which versions satisfy a constraint.

    Exits with code 1 if the constraint is invalid or any version fails.

    Examples:
        modresolve check "^1.2.0" 1.5.0 2.0.0
        modresolve check ">=1.0 <2.0 || ^3.0" 1.4.2 3.1.0
    """
    try:
        parsed = VersionConstraint.parse(constraint)
    except ParseError as e:
        error(e.message)
        raise typer.Exit(1)

    failed = 0
    for version in versions:
        if parsed.satisfied_by(version):
            console.print(f"[green]✅ {escape(version)} satisfies {parsed}[/green]", highlight=False)
        else:
            failed += 1
            console.print(f"[red]❌ {escape(version)} does not satisfy {parsed}[/red]", highlight=False)

    if failed:
        raise typer.Exit(1)
