"""YouTube consent cookies: record construction and pre-navigation seeding.

The token values are fixed literals accepted by the site's consent check;
they are not derived per session.
"""
import logging
import time

from ..engine.errors import PrepareError, PrepareSignal

log = logging.getLogger(__name__)

SOCS_VALUE = "CAISNQgDEitib3FfaWRlbnRpdHlmcm9udGVuZHVpc2VydmVyXzIwMjMwODI5LjA3X3AxGgJlbiACGgYIgJnPpwY"
CONSENT_VALUE = "YES+cb"
CONSENT_MAX_AGE = 365 * 24 * 60 * 60  # seconds

CONSENT_DOMAINS = (".youtube.com", ".google.com")


def build_consent_cookies(now: float | None = None) -> list[dict]:
    """Build the ``SOCS`` cookie records for every consent domain."""
    if now is None:
        now = time.time()
    return [
        {
            "name": "SOCS",
            "value": SOCS_VALUE,
            "domain": domain,
            "path": "/",
            "secure": True,
            "expires": int(now + CONSENT_MAX_AGE),
        }
        for domain in CONSENT_DOMAINS
    ]


def build_consent_cookie_js(domain: str = ".youtube.com") -> str:
    """Build a script that writes ``SOCS`` and ``CONSENT`` through ``document.cookie``."""
    attrs = f"; domain={domain}; path=/; max-age={CONSENT_MAX_AGE}; secure"
    return (
        "(function(){"
        f"document.cookie='SOCS={SOCS_VALUE}{attrs}';"
        f"document.cookie='CONSENT={CONSENT_VALUE}{attrs}';"
        "return true;"
        "})()"
    )


def set_consent_cookie(tab) -> None:
    """Seed consent cookies on *tab*. Call before navigating to the target page.

    The site reads consent state at page load, so cookies set afterwards only
    take effect on the next navigation. Raises PrepareError if the tab
    rejects the cookies.
    """
    records = build_consent_cookies()
    try:
        tab.set_cookies(records)
    except Exception as e:
        raise PrepareError(
            PrepareSignal.CONSENT_COOKIE_INJECTION_FAILED,
            f"Failed to set consent cookies: {e}",
        ) from e
    log.info("Consent cookies seeded for %s", ", ".join(CONSENT_DOMAINS))
