"""browser — cookie primitives for Tab implementations."""
from .cookies import build_consent_cookies, build_consent_cookie_js, set_consent_cookie  # noqa: F401
