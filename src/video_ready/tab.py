"""Tab Protocol — the narrow capability interface preparation drives.

The package never launches a browser or opens a tab. The caller owns the
browser lifecycle and hands in an object implementing this interface;
PlaywrightTab wraps a Playwright sync ``Page`` for the common case.
"""
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from playwright.sync_api import Page


@runtime_checkable
class Tab(Protocol):
    """Capabilities required from a browser tab.

    Failures are raised as exceptions; callers decide which ones are fatal.
    """

    def evaluate(self, script: str) -> Any:
        """Evaluate a JS expression and return its value by value."""
        ...

    def navigate(self, url: str, timeout: float | None = None) -> None:
        """Navigate to *url* and return once the navigation has completed.

        *timeout* is in seconds; None means the implementation's default.
        """
        ...

    def current_url(self) -> str:
        """Return the URL currently loaded in the tab."""
        ...

    def set_cookies(self, records: list[dict]) -> None:
        """Install cookie records at the protocol level.

        Each record has ``name`` and ``value`` plus any of ``url``,
        ``domain``, ``path``, ``secure`` and ``expires`` (unix seconds).
        """
        ...


class PlaywrightTab:
    """Tab implementation over a Playwright sync ``Page``."""

    def __init__(self, page: "Page", *, navigation_timeout: float = 30.0):
        self._page = page
        self._navigation_timeout_ms = navigation_timeout * 1000

    @property
    def page(self) -> "Page":
        return self._page

    def evaluate(self, script: str) -> Any:
        return self._page.evaluate(script)

    def navigate(self, url: str, timeout: float | None = None) -> None:
        timeout_ms = self._navigation_timeout_ms if timeout is None else timeout * 1000
        self._page.goto(url, wait_until="load", timeout=timeout_ms)

    def current_url(self) -> str:
        return self._page.url or ""

    def set_cookies(self, records: list[dict]) -> None:
        self._page.context.add_cookies(records)
