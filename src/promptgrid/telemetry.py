"""Opt-out usage telemetry.

Events are queued in memory and flushed by send(). Nothing leaves the
process unless PROMPTGRID_TELEMETRY_URL is set; PROMPTGRID_DISABLE_TELEMETRY
turns recording off entirely. Send failures are logged, never raised.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx
from rich.console import Console

from promptgrid import __version__

logger = logging.getLogger(__name__)

_TRUTHY = ("1", "true", "yes")

NOTICE = (
    "Anonymous usage events are recorded for this run. "
    "Set PROMPTGRID_DISABLE_TELEMETRY=1 to turn this off."
)


class Telemetry:
    """Queue of usage events with a one-time notice and best-effort flush."""

    def __init__(
        self,
        endpoint: str | None = None,
        disabled: bool | None = None,
        console: Console | None = None,
        timeout: float = 2.0,
    ) -> None:
        if disabled is None:
            disabled = os.environ.get("PROMPTGRID_DISABLE_TELEMETRY", "").lower() in _TRUTHY
        self.disabled = disabled
        self.endpoint = endpoint if endpoint is not None else os.environ.get("PROMPTGRID_TELEMETRY_URL")
        self.timeout = timeout
        self._console = console or Console(stderr=True)
        self._events: list[dict[str, Any]] = []
        self._notice_shown = False

    @property
    def pending(self) -> list[dict[str, Any]]:
        return list(self._events)

    def record(self, event: str, properties: dict[str, Any] | None = None) -> None:
        if self.disabled:
            return
        self._events.append(
            {"event": event, "version": __version__, "properties": properties or {}}
        )

    def maybe_show_notice(self) -> None:
        """Print the telemetry notice once per process, unless disabled."""
        if self.disabled or self._notice_shown:
            return
        self._notice_shown = True
        self._console.print(f"[dim]{NOTICE}[/dim]")

    async def send(self) -> None:
        """Flush queued events to the configured endpoint."""
        if self.disabled or not self._events:
            self._events.clear()
            return

        events, self._events = self._events, []
        if not self.endpoint:
            logger.debug("Discarding %d telemetry events (no endpoint)", len(events))
            return

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.endpoint, json={"events": events})
                response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.debug("Telemetry send failed: %s", exc)


telemetry = Telemetry()
