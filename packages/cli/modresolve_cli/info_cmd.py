"""Info commands - Version information."""
import sys

from rich.table import Table

import modresolve_common
import modresolve_schema
import modresolve_sdk

from . import __version__
from .utils import console


def version():
    """
    Show modresolve version information.

    Examples:
        modresolve version
    """
    python_version = f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"

    table = Table(title="modresolve Version Information", show_header=True, header_style="bold cyan")
    table.add_column("Component", style="cyan", no_wrap=True)
    table.add_column("Version", style="green")

    table.add_row("CLI", __version__)
    table.add_row("SDK", modresolve_sdk.__version__)
    table.add_row("Schema", modresolve_schema.__version__)
    table.add_row("Common", modresolve_common.__version__)
    table.add_row("Manifest formats", ", ".join(modresolve_common.SUPPORTED_MANIFEST_VERSIONS))
    table.add_row("Python", python_version)

    console.print(table)
