"""Structured JSONL event logging for preparation runs."""
import json
import logging
import os
import time
from urllib.parse import parse_qs, urlparse

log = logging.getLogger(__name__)


class PrepareEventLogger:
    """Writes one JSON line per event to a per-run JSONL file.

    All logging is best-effort: methods never raise exceptions.
    Supports context-manager protocol for automatic close.

    An optional ``site`` field is included in every event when provided.
    """

    def __init__(self, run_id: str, target_url: str, log_dir: str = "data/logs/prepare_events",
                 site: str | None = None):
        self._run_id = run_id
        self._target_url = target_url
        self._site = site
        self._f = None
        try:
            os.makedirs(log_dir, exist_ok=True)
            video = _video_id(target_url) or "page"
            path = os.path.join(log_dir, f"{video}_{run_id}.jsonl")
            self._f = open(path, "a", encoding="utf-8")
        except Exception as e:
            log.warning(f"PrepareEventLogger: failed to open log file: {e}")

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def _write(self, event: dict):
        if self._f is None:
            return
        try:
            event["ts"] = time.time()
            event["run_id"] = self._run_id
            event["target_url"] = self._target_url
            if self._site is not None:
                event["site"] = self._site
            self._f.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._f.flush()
        except Exception as e:
            log.warning(f"PrepareEventLogger: write failed: {e}")

    def log_stage_start(self, stage: str, remaining: float):
        self._write({
            "event": "stage_start",
            "stage": stage,
            "remaining": remaining,
        })

    def log_stage_end(self, stage: str, ok: bool, duration: float):
        self._write({
            "event": "stage_end",
            "stage": stage,
            "ok": ok,
            "duration": duration,
        })

    def log_consent(self, reinjected: bool):
        self._write({
            "event": "consent",
            "reinjected": reinjected,
        })

    def log_prepare_end(self, status: str, signal: str | None, duration: float,
                        stage_timings: dict, failure_bundle: str = ""):
        self._write({
            "event": "prepare_end",
            "status": status,
            "signal": signal,
            "duration": duration,
            "stage_timings": stage_timings,
            "failure_bundle": failure_bundle,
        })

    def close(self):
        if self._f is not None:
            try:
                self._f.flush()
                self._f.close()
            except Exception:
                pass
            self._f = None


def _video_id(url: str) -> str:
    """Extract a filename-safe ``v=`` id from a watch URL, or ''."""
    try:
        params = parse_qs(urlparse(url).query)
    except Exception:
        return ""
    for v in params.get("v", []):
        if v:
            return v.replace("/", "_").replace("\\", "_")[:50]
    return ""
