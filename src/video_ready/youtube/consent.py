"""Consent interstitial detection and cookie re-injection.

Consent is handled through the site's own cookie contract rather than by
clicking dialog buttons: when an interstitial is detected, the consent
cookies are written into the page and the target is loaded again, since the
site only reads consent state at load time.
"""
import logging
import time
from urllib.parse import urlparse

from ..browser.cookies import build_consent_cookie_js
from ..engine.errors import PrepareError, PrepareSignal
from ..engine.poll import evaluate_bool

log = logging.getLogger(__name__)

SITE_DOMAIN = "youtube.com"
YOUTUBE_HOME = "https://www.youtube.com/"

# Independent signals, OR-ed in order. Each is a JS boolean expression.
CONSENT_CHECKS = (
    "location.href.indexOf('consent') !== -1",
    "document.querySelector('ytd-consent-bump-v2-lightbox') !== null",
    "Array.prototype.some.call(document.querySelectorAll('button'), function(b){"
    " var t=(b.textContent||'').trim(); return t==='Reject all' || t==='Accept all'; })",
)


def build_consent_detection_js(checks=CONSENT_CHECKS) -> str:
    """Combine *checks* into one script returning true if any check holds.

    A check that throws is treated as false so the remaining checks still run.
    """
    fns = ",\n".join(f"    function(){{ return {check}; }}" for check in checks)
    return (
        "(function(){\n"
        f"  var checks=[\n{fns}\n  ];\n"
        "  for(var i=0;i<checks.length;i++){\n"
        "    try { if(checks[i]()) return true; } catch(e) {}\n"
        "  }\n"
        "  return false;\n"
        "})()"
    )


CONSENT_DETECTION_JS = build_consent_detection_js()


def is_on_site(url: str) -> bool:
    """True if *url* is on youtube.com or one of its subdomains."""
    try:
        host = (urlparse(url).hostname or "").lower()
    except ValueError:
        return False
    return host == SITE_DOMAIN or host.endswith("." + SITE_DOMAIN)


def _navigate(tab, url: str, deadline: float | None) -> None:
    """Navigate within what is left of *deadline* (no limit when None)."""
    timeout = None
    if deadline is not None:
        timeout = deadline - time.monotonic()
        if timeout <= 0:
            raise PrepareError(
                PrepareSignal.CONSENT_RENAVIGATION_FAILED,
                f"No time left to navigate to {url} for consent",
            )
    try:
        tab.navigate(url, timeout=timeout)
    except Exception as e:
        raise PrepareError(
            PrepareSignal.CONSENT_RENAVIGATION_FAILED,
            f"Navigation to {url} failed during consent handling: {e}",
        ) from e
    if deadline is not None and time.monotonic() >= deadline:
        raise PrepareError(
            PrepareSignal.CONSENT_RENAVIGATION_FAILED,
            f"Navigation to {url} finished past the deadline",
        )


def dismiss_consent(tab, target_url: str, deadline: float | None = None) -> bool:
    """Eliminate a consent interstitial if one is showing.

    Returns False without touching the tab when no interstitial is detected.
    Otherwise writes the consent cookies, reloads *target_url* and returns
    True. When the tab was redirected off-site (e.g. consent.google.com), it
    first goes to the YouTube home page so the cookies land on the right
    domain.

    With a *deadline* (``time.monotonic()`` value), each navigation gets only
    the remaining time, and a navigation that ends past the deadline raises.
    """
    if not evaluate_bool(tab, CONSENT_DETECTION_JS):
        return False

    current = tab.current_url()
    log.info(f"Consent interstitial detected at {current}")
    if not is_on_site(current):
        log.info("Off-site consent redirect, returning to YouTube home first")
        _navigate(tab, YOUTUBE_HOME, deadline)

    try:
        tab.evaluate(build_consent_cookie_js("." + SITE_DOMAIN))
    except Exception as e:
        raise PrepareError(
            PrepareSignal.CONSENT_COOKIE_INJECTION_FAILED,
            f"Failed to write consent cookies: {e}",
        ) from e

    _navigate(tab, target_url, deadline)
    log.info(f"Consent cookies injected, reloaded {target_url}")
    return True
