"""modresolve CLI - diagnostics for module dependency resolution."""

__version__ = "0.1.0"
