from concurrent.futures import ThreadPoolExecutor
import threading

import click
from rich.console import Console

from prime_clock.algorithm.trial_division import PrimalityTester
from prime_clock.clock import DEFAULT_START, SequenceClock
from prime_clock.commands import start_command_reader
from prime_clock.digits import IntegerWidth
from prime_clock.logs import configure_logging
from prime_clock.runner import run_clock
from prime_clock.state_queue import SnapshotChannel
from prime_clock.ui import DEFAULT_REFRESH_HZ, Screen, ScreenSelector, UILogHandler, render_stats, ui_loop

WIDTH_CHOICES = [str(width.bits) for width in IntegerWidth]


def make_clock(start: int, width: IntegerWidth) -> SequenceClock:
    try:
        return SequenceClock(start, width=width)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--start")


def width_option(f):
    return click.option(
        "--width",
        "-w",
        type=click.Choice(WIDTH_CHOICES),
        default="32",
        show_default=True,
        help="Candidate integer width in bits.",
    )(f)


@click.group()
def cli():
    pass


@cli.command()
@click.option("--start", "-s", type=int, default=DEFAULT_START, show_default=True, help="Restart the clock from this value.")
@width_option
@click.option("--screen", type=click.Choice([s.value for s in Screen]), default=Screen.CLOCK.value, show_default=True)
@click.option("--ticks", "-n", type=click.IntRange(min=0), default=0, help="Stop after this many candidates (0 runs forever).")
@click.option("--interval", type=click.FloatRange(min=0.0), default=0.0, help="Seconds to pause between candidates.")
@click.option("--refresh-hz", type=click.FloatRange(min=1.0), default=DEFAULT_REFRESH_HZ, show_default=True)
@click.option(
    "--commands/--no-commands",
    default=True,
    show_default=True,
    help="Read commands from stdin: a number restarts the clock there, any other line switches screens.",
)
@click.option("--verbose", "-v", is_flag=True, help="Log every prime found.")
def run(
    start: int,
    width: str,
    screen: str,
    ticks: int,
    interval: float,
    refresh_hz: float,
    commands: bool,
    verbose: bool,
):
    """Run the prime clock with a live display."""
    clock = make_clock(start, IntegerWidth.from_bits(int(width)))
    log_handler = UILogHandler()
    configure_logging(verbose, log_handler)

    channel: SnapshotChannel = SnapshotChannel()
    stop = threading.Event()
    selector = ScreenSelector(Screen(screen))
    if commands:
        start_command_reader(click.get_text_stream("stdin"), clock, selector)

    with ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(run_clock, clock, channel, ticks=ticks or None, interval=interval, stop=stop)

        try:
            ui_loop(channel, clock, selector, refresh_hz=refresh_hz, log_handler=log_handler)
        except KeyboardInterrupt:
            stop.set()
            clock.cancel()
            channel.close()

        snapshot = future.result()

    Console().print(render_stats(snapshot))


@cli.command()
@click.option("--start", "-s", type=int, default=DEFAULT_START, show_default=True)
@click.option("--ticks", "-n", type=click.IntRange(min=1), default=1000, show_default=True)
@width_option
@click.option("--verbose", "-v", is_flag=True)
def count(start: int, ticks: int, width: str, verbose: bool):
    """Advance the clock without a display and print the statistics."""
    clock = make_clock(start, IntegerWidth.from_bits(int(width)))
    configure_logging(verbose)
    snapshot = run_clock(clock, SnapshotChannel(), ticks=ticks)
    Console().print(render_stats(snapshot))


@cli.command()
@click.argument("number", type=int)
@width_option
def check(number: int, width: str):
    """Test a single NUMBER for primality."""
    integer_width = IntegerWidth.from_bits(int(width))
    if not 0 <= number <= integer_width.max_value:
        raise click.BadParameter(
            f"{number} out of range for {integer_width.name} (0..{integer_width.max_value})",
            param_hint="NUMBER",
        )

    tester = PrimalityTester()
    verdict = "prime" if tester.test(number) else "not prime"
    click.echo(f"{number} is {verdict} ({tester.trials_done}/{tester.trials_required} trials)")


if __name__ == "__main__":
    cli()
