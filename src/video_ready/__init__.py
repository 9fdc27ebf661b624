"""video-ready — drive a headless browser tab to steady, full-screen YouTube playback.

Seeds or re-injects cookie consent, waits out pre-roll ads, forces playback,
confirms it is sustained and settles the player chrome for recording. The
caller owns the browser and hands in a Tab.
"""
from .tab import Tab, PlaywrightTab  # noqa: F401
from .browser.cookies import set_consent_cookie  # noqa: F401
from .engine.errors import PrepareSignal, PrepareError  # noqa: F401
from .youtube.readiness import prepare, prepare_within, Stage  # noqa: F401
