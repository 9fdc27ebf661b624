"""engine — polling, error signals, and failure diagnostics."""
from .errors import PrepareSignal, PrepareError  # noqa: F401
from .poll import poll_js, PollResult, POLL_INTERVAL  # noqa: F401
from .failure_bundle import FailureBundle, capture_failure_bundle, save_failure_bundle  # noqa: F401
