from typing import Optional
import threading

import structlog

from prime_clock.clock import SequenceClock
from prime_clock.clock_snapshot import ClockSnapshot
from prime_clock.state_queue import SnapshotChannel

log = structlog.get_logger()


def run_clock(
    clock: SequenceClock,
    channel: SnapshotChannel[ClockSnapshot],
    *,
    ticks: Optional[int] = None,
    interval: float = 0.0,
    stop: Optional[threading.Event] = None,
) -> ClockSnapshot:
    """
    Drive the clock from a worker thread.
    - ticks: number of advances, or None to run until stopped or saturated.
    - interval: pause between ticks, in seconds.
    - stop: set from another thread to finish after the current tick.
    Returns the last published snapshot. The channel is always closed on exit
    so the renderer can finish.
    """
    stop = stop or threading.Event()
    snapshot = clock.snapshot()
    channel.publish(snapshot)
    log.info("runner.started", start=snapshot.candidate, ticks=ticks, interval=interval)

    try:
        tick = 0
        while not stop.is_set() and (ticks is None or tick < ticks):
            snapshot = clock.advance()
            tick += 1
            channel.publish(snapshot)
            if snapshot.saturated and ticks is None:
                break
            if interval > 0 and stop.wait(interval):
                break
    except Exception:
        log.exception("runner.failed", candidate=clock.candidate)
        raise
    finally:
        # Always close the channel so the UI can exit.
        channel.close()

    log.info("runner.stopped", ticks=tick, candidate=snapshot.candidate, primes_found=snapshot.primes_found)
    return snapshot
