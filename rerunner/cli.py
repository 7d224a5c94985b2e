import logging
from pathlib import Path
from typing import List, Optional

import typer

from .detector import FileAccessError, Trigger
from .runner import ConfigurationError, RunConfig, Runner


app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.command()
def main(
    path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        help="File to watch and rerun",
    ),
    args: Optional[List[str]] = typer.Argument(
        None,
        help="Arguments passed to the command on every run (put them after --)",
    ),
    trigger: Trigger = typer.Option(
        Trigger.mtime,
        "--trigger",
        "-t",
        help="Rerun condition: 'mtime' reruns whenever the modification time is updated, "
        "'content' only when the file contents change",
        envvar="DYNAMIC_RUNNER_TRIGGER",
    ),
    interval: int = typer.Option(
        1,
        "--interval",
        "-i",
        min=1,
        help="Seconds between checks of the rerun condition",
        envvar="DYNAMIC_RUNNER_INTERVAL",
    ),
    exec_: Optional[str] = typer.Option(
        None,
        "--exec",
        "-e",
        help="Interpreter to run the file with, e.g. --exec=python script.py",
        envvar="DYNAMIC_RUNNER_EXEC",
    ),
    status: bool = typer.Option(
        False,
        "--status",
        "-s",
        help="Show the command on startup and report the exit status after every run",
    ),
    color: bool = typer.Option(False, "--color", "-c", help="Color the status messages"),
    loglevel: str = typer.Option(
        "WARNING", "--loglevel", help="Logging level: DEBUG, INFO, WARNING, ERROR"
    ),
):
    """Run a program every time it changes.

    The file is run once at startup, then the rerun condition is checked
    every --interval seconds and the file is run again whenever it holds.

    - Without --exec the file must be executable and is run directly.
    - With --exec the interpreter is run with the file as its first argument.
    - Arguments after -- are passed along on every run.
    """
    # Logging
    logging.basicConfig(
        level=getattr(logging, loglevel.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    # Resolve the command once; it is reused unchanged on every run
    try:
        config = RunConfig.build(
            path,
            trigger=trigger,
            interval=interval,
            interpreter=exec_,
            extra_args=args or (),
            status=status,
            color=color,
        )
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    logging.info(f"Command: {config.display}")
    runner = Runner(config)
    try:
        runner.run_forever()
    except FileAccessError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        logging.warning("Stopping runner...")
        raise typer.Exit(code=130)


if __name__ == "__main__":
    app()
