"""CLI entry point for lighttimer.

Uses Click to expose the ``lighttimer`` command group: ``run`` opens the
timer window, ``countdown`` runs the same controller headless in the
terminal.
"""

from __future__ import annotations

import logging
import sys
import time

import click

import lighttimer
from lighttimer.core.controller import MAX_MINUTES, MAX_SECONDS, Controller
from lighttimer.ui.app import TimerApp

logger = logging.getLogger(__name__)

_MINUTES = click.IntRange(0, MAX_MINUTES)
_SECONDS = click.IntRange(0, MAX_SECONDS)


def _configure_logging(log_file: str | None, verbose: bool) -> None:
    """Route log records to *log_file*, or warnings to stderr without one."""
    if verbose:
        level = logging.DEBUG
    elif log_file is not None:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        filename=log_file,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _controller_for(minutes: int, seconds: int) -> Controller:
    controller = Controller()
    controller.edit_minutes(minutes)
    controller.edit_seconds(seconds)
    controller.apply()
    return controller


@click.group()
@click.version_option(version=lighttimer.__version__, prog_name="lighttimer")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Write logs to this file.")
@click.option("-v", "--verbose", is_flag=True, help="Log debug messages.")
def cli(log_file: str | None, verbose: bool) -> None:
    """lighttimer: a single-window countdown timer."""
    _configure_logging(log_file, verbose)


@cli.command()
@click.option("--minutes", "-m", type=_MINUTES, default=5, show_default=True)
@click.option("--seconds", "-s", type=_SECONDS, default=0, show_default=True)
def run(minutes: int, seconds: int) -> None:
    """Open the timer window with MINUTES:SECONDS applied."""
    TimerApp(controller=_controller_for(minutes, seconds)).run()


@cli.command()
@click.argument("minutes", type=_MINUTES)
@click.argument("seconds", type=_SECONDS, default=0)
def countdown(minutes: int, seconds: int) -> None:
    """Count down MINUTES (and SECONDS) in the terminal."""
    controller = _controller_for(minutes, seconds)
    controller.start()
    logger.info("countdown started: %d min %d sec", minutes, seconds)

    frame = controller.frame(time.monotonic())
    shown = None
    try:
        while frame.running:
            if frame.time_text != shown:
                click.echo(f"\r{frame.time_text}", nl=False)
                shown = frame.time_text
            time.sleep(frame.next_frame_in)
            frame = controller.frame(time.monotonic())
    except KeyboardInterrupt:
        controller.pause()
        click.echo(f"\rStopped with {frame.time_text} remaining")
        sys.exit(1)

    click.echo(f"\r{frame.time_text}")
    click.echo("Time's up")
    controller.acknowledge()
