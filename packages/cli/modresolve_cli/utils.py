"""Shared console helpers for CLI commands."""
from pathlib import Path
from typing import Iterable, List

import typer
from rich.console import Console
from rich.markup import escape

from modresolve_common import ResolverError, load_settings
from modresolve_sdk import ModuleDescriptor, load_descriptors

console = Console()


def success(message: str) -> None:
    console.print(f"[bold green]✅ {escape(message)}[/bold green]", soft_wrap=True)


def error(message: str) -> None:
    console.print(f"[bold red]❌ {escape(message)}[/bold red]", soft_wrap=True)


def warning(message: str) -> None:
    console.print(f"[yellow]⚠️  {escape(message)}[/yellow]", soft_wrap=True)


def info(message: str) -> None:
    console.print(f"[cyan]ℹ️  {escape(message)}[/cyan]", soft_wrap=True)


def print_messages(messages: Iterable[str], style: str = "red") -> None:
    """Print one bullet per diagnostic message."""
    for message in messages:
        console.print(f"  [{style}]•[/{style}] {escape(message)}", highlight=False, soft_wrap=True)


def handle_error(e: Exception, verbose: bool = False) -> None:
    """Report an unexpected exception; the traceback only with --verbose."""
    if isinstance(e, ResolverError):
        error(e.message)
        messages = getattr(e, "messages", [])
        if len(messages) > 1:
            print_messages(messages)
    else:
        error(f"Unexpected error: {e}")
    if verbose:
        console.print_exception()


def load_modules(path: str, verbose: bool = False) -> List[ModuleDescriptor]:
    """
    Load descriptors from a manifest file or modules directory.

    Exits with code 1 after printing the reason if loading fails.
    """
    if not Path(path).exists():
        error(f"Path not found: {path}")
        raise typer.Exit(1)

    try:
        settings = load_settings()
        descriptors = load_descriptors(path, manifest_name=settings.manifest_name)
    except ResolverError as e:
        error(e.message)
        raise typer.Exit(1)

    if verbose:
        info(f"Loaded {len(descriptors)} module(s) from {path}")
    return descriptors
