"""Graph command - Inspect the module dependency graph."""
import json
from typing import List, Set

import typer
from rich.tree import Tree

from modresolve_sdk import DependencyGraph, GraphBuilder

from .utils import console, error, handle_error, load_modules, print_messages, success, warning

FORMATS = ["tree", "mermaid", "dot", "json"]


def render_tree(graph: DependencyGraph) -> Tree:
    """
    Rich tree rooted at modules nothing depends on.

    Each module is expanded once; later occurrences are marked "(see above)".
    """
    tree = Tree("[bold]Modules[/bold]")
    starts: List[str] = []
    reached: Set[str] = set()
    # Modules inside a cycle may have no root above them
    for key in graph.roots() + graph.keys():
        if key in reached:
            continue
        starts.append(key)
        reached.add(key)
        reached.update(graph.transitive_dependencies(key))

    expanded: Set[str] = set()
    for key in starts:
        branch = tree.add(f"[cyan]{key}[/cyan] [green]{graph.node(key).version}[/green]")
        expanded.add(key)
        on_path = {key}
        stack = [(branch, key, iter(graph.node(key).dependencies))]
        while stack:
            parent, current, pending = stack[-1]
            dependency = next(pending, None)
            if dependency is None:
                stack.pop()
                on_path.discard(current)
                continue

            node = graph.node(current)
            marker = "" if dependency in node.requires else " [dim](optional)[/dim]"
            label = f"{dependency} [green]{graph.node(dependency).version}[/green]{marker}"
            if dependency in on_path:
                parent.add(f"{label} [red](cycle)[/red]")
            elif dependency in expanded:
                parent.add(f"{label} [dim](see above)[/dim]")
            else:
                expanded.add(dependency)
                on_path.add(dependency)
                child = parent.add(label)
                stack.append((child, dependency, iter(graph.node(dependency).dependencies)))
    return tree


def graph(
    path: str = typer.Argument(..., help="Manifest file or modules directory"),
    output_format: str = typer.Option(
        "tree", "--format", "-f", help=f"Output format: {', '.join(FORMATS)}"
    ),
    cycles: bool = typer.Option(
        False, "--cycles", "-c", help="List dependency cycles and fail if any exist"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
):
    """
    Show the dependency graph of a set of modules.

    Missing required dependencies are reported but do not stop rendering.

    Examples:
        modresolve graph modules.yaml
        modresolve graph ./modules --format mermaid
        modresolve graph modules.yaml --cycles
    """
    if output_format not in FORMATS:
        error(f"Unknown format '{output_format}'. Choose from: {', '.join(FORMATS)}")
        raise typer.Exit(1)

    try:
        descriptors = load_modules(path, verbose=verbose)
        built, missing = GraphBuilder().build(descriptors)

        if output_format == "mermaid":
            typer.echo(built.to_mermaid())
        elif output_format == "dot":
            typer.echo(built.to_dot())
        elif output_format == "json":
            typer.echo(json.dumps(built.to_dict(), indent=2))
        else:
            console.print(render_tree(built))
            if missing:
                warning(f"{len(missing)} missing required dependenc{'y' if len(missing) == 1 else 'ies'}")
                print_messages(missing, style="yellow")

        if cycles:
            found = built.find_cycles()
            if found:
                error(f"Found {len(found)} dependency cycle(s)")
                print_messages(" -> ".join(cycle) for cycle in found)
                raise typer.Exit(1)
            success("No dependency cycles")

    except typer.Exit:
        raise
    except Exception as e:
        handle_error(e, verbose)
        raise typer.Exit(1)
