"""youtube — consent handling and the readiness sequencer for YouTube watch pages."""
from .consent import dismiss_consent, is_on_site, CONSENT_CHECKS  # noqa: F401
from .readiness import prepare, prepare_within, Stage  # noqa: F401
