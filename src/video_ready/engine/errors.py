"""Normalized error signals for playback preparation.

Every terminal failure of ``prepare`` / ``set_consent_cookie`` is raised as a
PrepareError carrying one of these signals, so callers can decide whether to
retry the whole call without parsing messages.
"""
from enum import Enum


class PrepareSignal(Enum):
    """Terminal failure kinds of a preparation run."""
    CONSENT_COOKIE_INJECTION_FAILED = "consent_cookie_injection_failed"
    CONSENT_RENAVIGATION_FAILED = "consent_renavigation_failed"
    ADS_TIMED_OUT = "ads_timed_out"
    MEDIA_ELEMENT_TIMED_OUT = "media_element_timed_out"
    PLAYBACK_TIMED_OUT = "playback_timed_out"


class PrepareError(Exception):
    """Exception carrying a PrepareSignal and, for playback timeouts, a diagnostic snapshot."""

    def __init__(self, signal: PrepareSignal, message: str = "", *, diagnostic: str | None = None):
        self.signal = signal
        self.diagnostic = diagnostic
        super().__init__(message or signal.value)
