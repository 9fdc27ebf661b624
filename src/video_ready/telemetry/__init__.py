"""telemetry — structured JSONL event logging."""
from .logger import PrepareEventLogger  # noqa: F401
