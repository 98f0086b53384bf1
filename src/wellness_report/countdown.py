"""Cuenta regresiva hasta la próxima lectura del sensor."""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Callable
from datetime import datetime

from dateutil import tz


def calculate_reading_countdown(
    last_connection: datetime | None,
    reading_interval_minutes: int,
    now: datetime | None = None,
) -> int:
    """Seconds left until the next expected reading.

    Args:
        last_connection: When the sensor last connected; None if never.
        reading_interval_minutes: Expected interval between readings.
        now: Current time (defaults to the UTC clock).

    Returns:
        ``interval * 60 - elapsed`` in whole seconds (negative when overdue),
        or 0 when there has never been a connection.
    """
    if last_connection is None:
        return 0
    current = now or datetime.now(tz=tz.UTC)
    elapsed = (current - last_connection).total_seconds()
    return reading_interval_minutes * 60 - int(elapsed)


class CountdownTask:
    """Repeating asyncio task that republishes a derived countdown value."""

    def __init__(
        self,
        compute: Callable[[], int],
        on_update: Callable[[int], None],
        period: float = 1.0,
    ) -> None:
        """Create a stopped task.

        Args:
            compute: Recomputes the countdown from current inputs.
            on_update: Receives each recomputed value.
            period: Seconds between recomputations.
        """
        self._compute = compute
        self._on_update = on_update
        self._period = period
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def refresh(self) -> None:
        """Publish a fresh value now (e.g. when the last connection changed)."""
        self._on_update(self._compute())

    def start(self) -> None:
        """Start (or restart) the loop; must be called from a running loop."""
        if self._task is not None:
            self._task.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        """Cancel the loop and wait until it has finished."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _run(self) -> None:
        self.refresh()
        while True:
            await asyncio.sleep(self._period)
            self.refresh()
