"""Line commands for a running clock.

A line holding an integer restarts the clock from that value. Any other
non-blank line switches between the clock and stats screens.
"""
import threading
from typing import Iterable, TextIO

import structlog

from prime_clock.clock import SequenceClock
from prime_clock.ui import ScreenSelector

log = structlog.get_logger()


def interpret_command(line: str, clock: SequenceClock, selector: ScreenSelector) -> None:
    command = line.strip()
    if not command:
        return

    try:
        start = int(command)
    except ValueError:
        screen = selector.toggle()
        log.info("command.screen_switched", screen=screen.value)
        return

    try:
        clock.restart_from(start)
    except ValueError as e:
        log.warning("command.rejected", command=command, error=str(e))


def read_commands(lines: Iterable[str], clock: SequenceClock, selector: ScreenSelector) -> None:
    """Apply each line until the input runs out."""
    for line in lines:
        interpret_command(line, clock, selector)
    log.debug("command.input_closed")


def start_command_reader(stream: TextIO, clock: SequenceClock, selector: ScreenSelector) -> threading.Thread:
    # Daemon: a blocked readline must not keep the process alive after the run ends.
    reader = threading.Thread(
        target=read_commands,
        args=(stream, clock, selector),
        name="prime-clock-commands",
        daemon=True,
    )
    reader.start()
    return reader
