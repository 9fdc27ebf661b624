"""Deadline-bounded boolean polling of page scripts.

The only waiting primitive the readiness stages use. It never mutates the
page and never raises for script failures; only the deadline ends a poll.
"""
import logging
import time
from dataclasses import dataclass

log = logging.getLogger(__name__)

POLL_INTERVAL = 0.5  # seconds between ticks


@dataclass
class PollResult:
    """Result from poll_js(). Truthy when the condition was met."""
    timed_out: bool = False
    ticks: int = 0
    elapsed: float = 0.0

    def __bool__(self) -> bool:
        return not self.timed_out


def evaluate_bool(tab, script: str) -> bool | None:
    """Evaluate *script* and return its value if it is a real boolean, else None."""
    try:
        value = tab.evaluate(script)
    except Exception as e:
        log.debug(f"poll script failed: {e}")
        return None
    return value if isinstance(value, bool) else None


def poll_js(tab, script: str, expect: bool, deadline: float, *,
            interval: float = POLL_INTERVAL) -> PollResult:
    """Evaluate *script* every *interval* seconds until it returns *expect*.

    *deadline* is an absolute ``time.monotonic()`` value shared by the caller
    across stages. Each tick evaluates first and only then checks the clock,
    so a predicate that already holds returns without sleeping, and a
    predicate that never holds returns no later than one interval past the
    deadline. Script errors and non-boolean results count as a mismatch.
    """
    start = time.monotonic()
    ticks = 0
    while True:
        ticks += 1
        if evaluate_bool(tab, script) is expect:
            return PollResult(timed_out=False, ticks=ticks, elapsed=time.monotonic() - start)
        now = time.monotonic()
        if now >= deadline:
            return PollResult(timed_out=True, ticks=ticks, elapsed=now - start)
        time.sleep(min(interval, deadline - now))
