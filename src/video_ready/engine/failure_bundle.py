"""Diagnostic capture when a preparation run fails.

Captures page URL, the playback snapshot and per-stage timings so a failed
run can be inspected after the tab is gone. Disabled unless the caller
passes a failure directory.
"""
import json
import logging
import os
import time
from dataclasses import dataclass, field, asdict

log = logging.getLogger(__name__)


@dataclass
class FailureBundle:
    stage: str
    signal: str
    message: str
    target_url: str = ""
    page_url: str = ""
    diagnostic: str = ""
    stage_timings: dict[str, float] = field(default_factory=dict)
    total_elapsed: float = 0.0
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> dict:
        return asdict(self)


def capture_snapshot(tab, script: str) -> str:
    """Evaluate a string-valued diagnostic *script*. Returns ``"unknown"`` if it can't be read."""
    try:
        value = tab.evaluate(script)
    except Exception as e:
        log.debug(f"Diagnostic script failed: {e}")
        return "unknown"
    return value if isinstance(value, str) else "unknown"


def capture_failure_bundle(
    tab,
    error,
    stage: str,
    target_url: str = "",
    stage_timings: dict | None = None,
    total_elapsed: float = 0.0,
    diagnostic_script: str = "",
) -> FailureBundle:
    """Best-effort capture of failure diagnostics. Never raises.

    The error's own diagnostic is reused when present; otherwise
    *diagnostic_script* (if given) is evaluated for a fresh one.
    """
    signal = getattr(error, "signal", None)
    bundle = FailureBundle(
        stage=stage,
        signal=getattr(signal, "value", "unknown"),
        message=str(error),
        target_url=target_url,
        stage_timings=dict(stage_timings or {}),
        total_elapsed=total_elapsed,
    )

    try:
        bundle.page_url = tab.current_url() or ""
    except Exception:
        pass

    diagnostic = getattr(error, "diagnostic", None)
    if diagnostic:
        bundle.diagnostic = diagnostic
    elif diagnostic_script:
        bundle.diagnostic = capture_snapshot(tab, diagnostic_script)
    return bundle


def save_failure_bundle(bundle: FailureBundle, base_dir: str = "data/logs/failures") -> str:
    """Save bundle to JSON. Returns file path, or '' on failure."""
    try:
        out_dir = os.path.join(base_dir, bundle.stage or "unknown")
        os.makedirs(out_dir, exist_ok=True)

        ts = time.strftime("%Y%m%d_%H%M%S") + f"_{int(time.time() * 1000) % 1000:03d}"
        path = os.path.join(out_dir, f"{ts}_{bundle.signal}.json")

        with open(path, "w", encoding="utf-8") as f:
            json.dump(bundle.to_dict(), f, ensure_ascii=False, indent=2, default=str)
        return path
    except Exception as e:
        log.debug(f"Failed to save failure bundle: {e}")
        return ""
