import time
import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

import typer

from .detector import ChangeDetector, Trigger
from .utils import is_executable, qualify_command


# Exit code reported when the command could not be started at all
EXIT_NOT_STARTED = 127


class ConfigurationError(RuntimeError):
    pass


def resolve_command(
    path: Path, interpreter: Optional[str] = None, extra_args: Sequence[str] = ()
) -> Tuple[str, Tuple[str, ...]]:
    """Return (command, args) for running ``path``.

    - Without an interpreter the file itself is run and must be executable;
      a bare file name is run as ./name.
    - With an interpreter the file path becomes its first argument.
    - ``extra_args`` follow, in the order given.
    """
    path = Path(path)
    if not interpreter:
        if not is_executable(path):
            raise ConfigurationError(f"{path} is not executable")
        return qualify_command(str(path)), tuple(extra_args)
    return interpreter, (str(path), *extra_args)


@dataclass(frozen=True)
class RunConfig:
    path: Path
    command: str
    args: Tuple[str, ...] = ()
    interval: int = 1
    trigger: Trigger = Trigger.mtime
    status: bool = False
    color: bool = False

    @classmethod
    def build(
        cls,
        path: Path,
        trigger: Trigger = Trigger.mtime,
        interval: int = 1,
        interpreter: Optional[str] = None,
        extra_args: Sequence[str] = (),
        status: bool = False,
        color: bool = False,
    ) -> "RunConfig":
        if interval < 1:
            raise ConfigurationError(f"Interval must be a positive number of seconds, got {interval}")
        command, args = resolve_command(path, interpreter, extra_args)
        return cls(
            path=Path(path),
            command=command,
            args=args,
            interval=interval,
            trigger=Trigger(trigger),
            status=status,
            color=color,
        )

    @property
    def argv(self) -> List[str]:
        return [self.command, *self.args]

    @property
    def display(self) -> str:
        return " ".join(self.argv)


def execute(argv: Sequence[str]) -> int:
    # stdio is inherited; blocks until the child exits
    return subprocess.run(list(argv)).returncode


class Runner:
    """Runs a command, then reruns it every time the watched file changes.

    The loop is strictly sequential: a run always finishes before the
    next poll starts. It never returns on its own; it stops on a signal
    or when the watched file becomes unreadable (FileAccessError).
    """

    def __init__(
        self,
        config: RunConfig,
        detector: Optional[ChangeDetector] = None,
        sleep: Callable[[float], None] = time.sleep,
        execute: Callable[[Sequence[str]], int] = execute,
        echo: Callable[..., None] = typer.secho,
    ) -> None:
        self.config = config
        self.detector = detector or ChangeDetector(config.path, config.trigger)
        self.sleep = sleep
        self.execute = execute
        self.echo = echo
        self.runs = 0

    def start(self) -> None:
        # Baseline before the first run, so edits made during it are picked up
        self.detector.initialize()
        logging.info(
            f"Watching {self.config.path} ({self.config.trigger.value}, every {self.config.interval}s)"
        )
        if self.config.status:
            self.echo(f"Starting runner for command `{self.config.display}`", color=self.config.color)

    def run_once(self) -> int:
        self.runs += 1
        logging.debug(f"Run #{self.runs}: {self.config.argv}")
        try:
            exit_code = self.execute(self.config.argv)
        except OSError as e:
            logging.error(f"Failed to start `{self.config.display}`: {e}")
            exit_code = EXIT_NOT_STARTED
        self.echo("", color=self.config.color)
        self.report(exit_code)
        return exit_code

    def report(self, exit_code: int) -> None:
        if not self.config.status:
            return
        if exit_code == 0:
            self.echo(
                f"Command `{self.config.display}` completed successfully",
                fg=typer.colors.GREEN,
                bold=True,
                color=self.config.color,
            )
        else:
            self.echo(
                f"Command `{self.config.display}` finished with a non-zero exit code: {exit_code}",
                fg=typer.colors.RED,
                bold=True,
                color=self.config.color,
            )

    def wait_for_change(self) -> None:
        while True:
            self.sleep(self.config.interval)
            if self.detector.has_changed():
                return

    def run_forever(self) -> None:
        self.start()
        # No exit in normal operation: Ctrl-C or a FileAccessError ends it
        while True:
            self.run_once()
            self.wait_for_change()
