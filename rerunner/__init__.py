"""Rerunner package: poll a file and rerun it whenever it changes.

Exports:
- app, main: Typer CLI entrypoints (from rerunner.cli)
- ChangeDetector, Trigger, FileAccessError, fingerprint: change detection (from rerunner.detector)
- Runner, RunConfig, ConfigurationError, resolve_command: the run loop (from rerunner.runner)
"""

from .cli import app, main  # noqa: F401
from .detector import ChangeDetector, FileAccessError, Trigger, fingerprint  # noqa: F401
from .runner import ConfigurationError, RunConfig, Runner, resolve_command  # noqa: F401

__all__ = [
    "app",
    "main",
    "ChangeDetector",
    "FileAccessError",
    "Trigger",
    "fingerprint",
    "ConfigurationError",
    "RunConfig",
    "Runner",
    "resolve_command",
]
