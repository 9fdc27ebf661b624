import pytest

import video_ready.engine.poll as poll_module
import video_ready.youtube.consent as consent_module
import video_ready.youtube.readiness as readiness_module
from fakes import FakeClock


@pytest.fixture
def clock(monkeypatch):
    """Fake clock shared by the poll loop, consent navigations and the settle pauses."""
    fake = FakeClock()
    monkeypatch.setattr(poll_module, "time", fake)
    monkeypatch.setattr(readiness_module, "time", fake)
    monkeypatch.setattr(consent_module, "time", fake)
    return fake
