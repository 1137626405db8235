"""Validate command - Report every dependency problem without ordering."""
import typer

from modresolve_sdk import GraphBuilder, VersionValidator

from .utils import error, handle_error, info, load_modules, print_messages, success


def validate(
    path: str = typer.Argument(..., help="Manifest file or modules directory"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
):
    """
    Check that every dependency is present, in range and not in conflict.

    Unlike resolve, which stops at the first kind of failure, validate lists
    every missing dependency, version violation and conflict it finds.

    Examples:
        modresolve validate modules.yaml
        modresolve validate ./modules --verbose
    """
    try:
        descriptors = load_modules(path, verbose=verbose)
        built, missing = GraphBuilder().build(descriptors)
        result = VersionValidator().validate_constraints(built)

        if verbose:
            info(f"{built.node_count} module(s), {built.edge_count} dependency edge(s)")

        problems = len(missing) + len(result.violations) + len(result.conflicts)
        if not problems:
            success(f"All {built.node_count} module(s) are consistent")
            return

        if missing:
            error(f"{len(missing)} missing dependenc{'y' if len(missing) == 1 else 'ies'}")
            print_messages(missing)
        if result.violations:
            error(f"{len(result.violations)} version constraint violation(s)")
            print_messages(str(v) for v in result.violations)
        if result.conflicts:
            error(f"{len(result.conflicts)} conflict(s)")
            print_messages(str(c) for c in result.conflicts)
        raise typer.Exit(1)

    except typer.Exit:
        raise
    except Exception as e:
        handle_error(e, verbose)
        raise typer.Exit(1)
