"""Readiness sequencer — drive a YouTube watch page to steady playback.

Stages run in a fixed order against one shared deadline:

    consent → ad_wait → media_wait → playback_kick → playback_confirm → settle

Gating stages (consent, ad_wait, media_wait, playback_confirm) raise
PrepareError and end the run. Improving stages (playback_kick, settle) are
fire-and-forget: their script failures are logged and dropped, since an
error there is indistinguishable from a feature missing on this page version.

Requires an already-navigated tab. Never opens a browser.
"""
import logging
import time
from contextlib import contextmanager
from enum import Enum

from ..engine.errors import PrepareError, PrepareSignal
from ..engine.failure_bundle import capture_failure_bundle, capture_snapshot, save_failure_bundle
from ..engine.poll import poll_js
from .consent import dismiss_consent
from .scripts import (
    AD_SHOWING_JS,
    HAS_VIDEO_JS,
    HIDE_CONTROLS_JS,
    KICK_PLAYBACK_JS,
    PLAYBACK_DIAGNOSTIC_JS,
    PLAYING_JS,
    THEATER_MODE_JS,
)

log = logging.getLogger(__name__)

# Settle pauses, seconds
FRAME_SETTLE = 0.5
THEATER_SETTLE = 0.5
CONTROLS_FADE = 3.0


class Stage(Enum):
    """Preparation stages in execution order."""
    CONSENT = "consent"
    AD_WAIT = "ad_wait"
    MEDIA_WAIT = "media_wait"
    PLAYBACK_KICK = "playback_kick"
    PLAYBACK_CONFIRM = "playback_confirm"
    SETTLE = "settle"


# ── Fire-and-forget ─────────────────────────────────────────────────────────

def _fire_and_forget(tab, script: str, label: str) -> None:
    """Run an action script. Its result and any failure are discarded."""
    try:
        tab.evaluate(script)
    except Exception as e:
        log.debug(f"{label} skipped: {e}")


# ── Stages ──────────────────────────────────────────────────────────────────

def _resolve_consent(tab, target_url: str, deadline: float, event_logger) -> None:
    reinjected = dismiss_consent(tab, target_url, deadline)
    if event_logger:
        event_logger.log_consent(reinjected)


def _wait_for_ads(tab, deadline: float, timeout_secs) -> None:
    if not poll_js(tab, AD_SHOWING_JS, False, deadline):
        raise PrepareError(
            PrepareSignal.ADS_TIMED_OUT,
            f"Timed out waiting for YouTube ads to finish ({timeout_secs}s)",
        )


def _wait_for_video(tab, deadline: float, timeout_secs) -> None:
    if not poll_js(tab, HAS_VIDEO_JS, True, deadline):
        raise PrepareError(
            PrepareSignal.MEDIA_ELEMENT_TIMED_OUT,
            f"Timed out after {timeout_secs}s waiting for a <video> element",
        )


def _kick_playback(tab) -> None:
    _fire_and_forget(tab, KICK_PLAYBACK_JS, "playback kick")


def _confirm_playback(tab, deadline: float, timeout_secs) -> None:
    if poll_js(tab, PLAYING_JS, True, deadline):
        return
    state = capture_snapshot(tab, PLAYBACK_DIAGNOSTIC_JS)
    raise PrepareError(
        PrepareSignal.PLAYBACK_TIMED_OUT,
        f"Timed out after {timeout_secs}s waiting for video to play. State: {state}",
        diagnostic=state,
    )


def _settle(tab) -> None:
    time.sleep(FRAME_SETTLE)
    _fire_and_forget(tab, THEATER_MODE_JS, "theater mode")
    time.sleep(THEATER_SETTLE)
    # mouseleave on the player + mousemove at the origin lets the overlay fade
    _fire_and_forget(tab, HIDE_CONTROLS_JS, "control overlay fade")
    time.sleep(CONTROLS_FADE)


@contextmanager
def _track(stage: Stage, deadline: float, timings: dict, event_logger):
    t0 = time.monotonic()
    if event_logger:
        event_logger.log_stage_start(stage.value, max(0.0, deadline - t0))
    ok = False
    try:
        yield
        ok = True
    finally:
        duration = time.monotonic() - t0
        timings[stage.value] = round(duration, 3)
        if event_logger:
            event_logger.log_stage_end(stage.value, ok, duration)


# ── Entry points ────────────────────────────────────────────────────────────

def prepare(tab, deadline: float, timeout_secs, target_url: str, *,
            event_logger=None,
            failure_dir: str = "") -> None:
    """Bring an already-navigated watch page to a recording-ready state.

    Args:
        tab: Tab implementation for the page showing *target_url*.
        deadline: Absolute ``time.monotonic()`` value shared by every
            waiting stage. Never extended; a slow ad leaves less time for
            the media and playback waits.
        timeout_secs: The budget *deadline* was computed from. Used only in
            error messages.
        target_url: The watch URL, reloaded if consent cookies are injected.
        event_logger: Optional PrepareEventLogger for telemetry.
        failure_dir: When set, a FailureBundle is saved here on failure.

    Raises:
        PrepareError: a gating stage timed out or consent handling failed.
    """
    start = time.monotonic()
    timings: dict[str, float] = {}
    steps = (
        (Stage.CONSENT, lambda: _resolve_consent(tab, target_url, deadline, event_logger)),
        (Stage.AD_WAIT, lambda: _wait_for_ads(tab, deadline, timeout_secs)),
        (Stage.MEDIA_WAIT, lambda: _wait_for_video(tab, deadline, timeout_secs)),
        (Stage.PLAYBACK_KICK, lambda: _kick_playback(tab)),
        (Stage.PLAYBACK_CONFIRM, lambda: _confirm_playback(tab, deadline, timeout_secs)),
        (Stage.SETTLE, lambda: _settle(tab)),
    )

    stage = Stage.CONSENT
    try:
        for stage, step in steps:
            log.info(f"Stage {stage.value}")
            with _track(stage, deadline, timings, event_logger):
                step()
    except PrepareError as e:
        elapsed = time.monotonic() - start
        log.warning(f"Preparation failed at {stage.value}: {e}")
        bundle_path = ""
        if failure_dir:
            bundle = capture_failure_bundle(
                tab, e, stage.value,
                target_url=target_url,
                stage_timings=timings,
                total_elapsed=elapsed,
                diagnostic_script=PLAYBACK_DIAGNOSTIC_JS if stage is Stage.PLAYBACK_CONFIRM else "",
            )
            bundle_path = save_failure_bundle(bundle, base_dir=failure_dir)
        if event_logger:
            event_logger.log_prepare_end("failed", e.signal.value, elapsed, timings,
                                         failure_bundle=bundle_path)
        raise

    elapsed = time.monotonic() - start
    log.info(f"Playback ready in {elapsed:.1f}s")
    if event_logger:
        event_logger.log_prepare_end("ready", None, elapsed, timings)


def prepare_within(tab, timeout_secs, target_url: str, **kwargs) -> None:
    """Run prepare() with a deadline of *timeout_secs* from now."""
    deadline = time.monotonic() + timeout_secs
    prepare(tab, deadline, timeout_secs, target_url, **kwargs)
