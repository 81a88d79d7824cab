import logging
import threading
from collections import deque
from enum import Enum
from typing import Deque, Optional, Sequence, Tuple, Union

from rich.console import Group
from rich.live import Live
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.text import Text

from prime_clock.algorithm.trial_division import TestProgress
from prime_clock.clock import SequenceClock
from prime_clock.clock_snapshot import ClockSnapshot, PrimeKind
from prime_clock.digits import digit_distribution
from prime_clock.state_queue import SnapshotChannel

DEFAULT_REFRESH_HZ = 10
LOG_LINES = 6
HIST_BAR_WIDTH = 20

# Radial chart colors from the original clock face.
KIND_STYLE = {
    PrimeKind.COMPOSITE: "green",
    PrimeKind.PRIME: "red",
    PrimeKind.PRIME | PrimeKind.TWIN: "blue",
    PrimeKind.PRIME | PrimeKind.PALINDROMIC: "cyan",
    PrimeKind.PRIME | PrimeKind.TWIN | PrimeKind.PALINDROMIC: "bold white",
}

# Debug lines are mostly clock.prime_found, so they borrow the prime color.
LEVEL_STYLE = {
    logging.DEBUG: "dim red",
    logging.INFO: "cyan",
    logging.WARNING: "bold yellow",
    logging.ERROR: "bold red",
    logging.CRITICAL: "reverse red",
}


class Screen(str, Enum):
    CLOCK = "clock"
    STATS = "stats"


class ScreenSelector:
    """The screen on show. Toggled by the command reader, read by ui_loop."""

    def __init__(self, screen: Screen = Screen.CLOCK) -> None:
        self._screen = screen
        self._lock = threading.Lock()

    @property
    def current(self) -> Screen:
        return self._screen

    def toggle(self) -> Screen:
        with self._lock:
            self._screen = Screen.STATS if self._screen == Screen.CLOCK else Screen.CLOCK
            return self._screen


class UILogHandler(logging.Handler):
    """Keeps formatted log lines around for the log panel."""

    def __init__(self, maxlen: int = 5000) -> None:
        super().__init__()
        self.buffer: Deque[Tuple[int, str]] = deque(maxlen=maxlen)

    def emit(self, record):
        msg = self.format(record)
        self.buffer.append((record.levelno, msg))


def kind_label(kind: PrimeKind) -> str:
    if kind == PrimeKind.COMPOSITE:
        return "composite"
    parts = []
    if PrimeKind.TWIN in kind:
        parts.append("twin")
    if PrimeKind.PALINDROMIC in kind:
        parts.append("palindromic")
    parts.append("prime")
    return " ".join(parts)


def get_progress() -> Tuple[Progress, int]:
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(bar_width=30),
        TextColumn("{task.completed}/{task.total}"),
        expand=True,
    )
    task_id = progress.add_task("Trial divisors", total=1, completed=0)
    return progress, task_id


def render_log_panel(handler: Optional[UILogHandler], max_lines: int = LOG_LINES) -> Panel:
    """The last max_lines clock events, newest at the bottom, one row each."""
    items = list(handler.buffer)[-max_lines:] if handler is not None else []
    if len(items) < max_lines:
        items = [(logging.NOTSET, "")] * (max_lines - len(items)) + items

    events = Table.grid()
    events.add_column(no_wrap=True, overflow="ellipsis")
    for level, msg in items:
        events.add_row(Text(msg), style=LEVEL_STYLE.get(level))
    return Panel(events, title="Events", title_align="left", border_style="dim", padding=(0, 2))


def render_clock(
    state: ClockSnapshot,
    progress: Progress,
    task_id: int,
    test_progress: TestProgress,
    candidate_under_test: int,
) -> Panel:
    """The clock face: what is being tested now and what was found last."""
    progress.update(
        task_id,
        total=test_progress.trials_required,
        completed=max(test_progress.trials_done - 1, 0),
    )

    style = KIND_STYLE[state.kind]
    table = Table.grid(padding=(0, 2))
    table.add_column(justify="right", style="dim")
    table.add_column()
    table.add_row("Testing", f"[bold]{candidate_under_test}[/bold]")
    table.add_row("Last tested", f"[{style}]{state.candidate}  {kind_label(state.kind)}[/{style}]")
    table.add_row("Last prime", f"[red]{state.last_prime_decimal}[/red]")
    if state.cancelled:
        table.add_row("", "[yellow]test cancelled[/yellow]")
    if state.saturated:
        table.add_row("", f"[yellow]saturated at {state.width.name} maximum[/yellow]")

    return Panel(Group(table, progress), title=f"Prime Clock  |  v{state.version}", padding=(1, 1))


def histogram_table(title: str, hist: Sequence[int]) -> Table:
    t = Table(title=title, show_header=False, show_edge=False, padding=(0, 1))
    t.add_column("Digit", style="cyan", justify="right")
    t.add_column("Bar", style="yellow", width=HIST_BAR_WIDTH, no_wrap=True, overflow="crop")
    t.add_column("Count", justify="right")
    for digit, (count, fraction) in enumerate(zip(hist, digit_distribution(hist)), start=1):
        t.add_row(str(digit), "█" * round(fraction * HIST_BAR_WIDTH), str(count))
    return t


def render_stats(state: ClockSnapshot) -> Panel:
    """Counters plus first/last digit histograms."""
    counters = Table(show_header=False, show_edge=False, padding=(0, 2))
    counters.add_column(style="dim", justify="right")
    counters.add_column(justify="right")
    counters.add_row("Candidate", str(state.candidate))
    counters.add_row("Last prime", state.last_prime_decimal)
    counters.add_row("Primes", f"[red]{state.primes_found}[/red]")
    counters.add_row("Twin primes", f"[blue]{state.twin_primes_found}[/blue]")
    counters.add_row("Palindromic primes", f"[cyan]{state.palindromic_primes_found}[/cyan]")

    hists = Table.grid(padding=(0, 4))
    hists.add_row(
        histogram_table("First digit", state.first_digit_hist),
        histogram_table("Last digit", state.last_digit_hist),
    )
    return Panel(Group(counters, hists), title="Prime Statistics", padding=(1, 1))


def render(
    screen: Screen,
    state: Optional[ClockSnapshot],
    clock: SequenceClock,
    progress: Progress,
    task_id: int,
    log_handler: Optional[UILogHandler] = None,
):
    if state is None:
        body = Panel("Waiting for first update…", title="Prime Clock", border_style="dim")
    elif screen == Screen.STATS:
        body = render_stats(state)
    else:
        body = render_clock(state, progress, task_id, clock.progress(), clock.candidate)
    return Group(body, render_log_panel(log_handler))


def ui_loop(
    channel: SnapshotChannel[ClockSnapshot],
    clock: SequenceClock,
    screen: Union[Screen, ScreenSelector] = Screen.CLOCK,
    *,
    refresh_hz: float = DEFAULT_REFRESH_HZ,
    log_handler: Optional[UILogHandler] = None,
) -> None:
    """Redraw on every snapshot, and on a timer while a long test is running.

    Pass a ScreenSelector to let another thread switch screens; the switch
    shows up on the next redraw.
    """
    selector = screen if isinstance(screen, ScreenSelector) else ScreenSelector(screen)
    progress, task_id = get_progress()
    state: Optional[ClockSnapshot] = None
    with Live(render(selector.current, None, clock, progress, task_id, log_handler), refresh_per_second=refresh_hz, screen=False) as live:
        while True:
            try:
                next_state = channel.get(timeout=1 / refresh_hz)
            except TimeoutError:
                # Nothing committed lately; just move the progress bar.
                live.update(render(selector.current, state, clock, progress, task_id, log_handler))
                continue
            if next_state is None:
                break
            state = next_state
            live.update(render(selector.current, state, clock, progress, task_id, log_handler))
