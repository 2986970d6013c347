"""Daily farm degradation and the periodic timers that drive it."""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Callable
from typing import Protocol

from rooster_ranch.farms import FarmRegistry
from rooster_ranch.models import FarmIsland

WEED_GROWTH_MIN = 1
WEED_GROWTH_MAX = 3


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int:
        """Return an integer in [a, b]."""


class DegradationScheduler:
    """Applies one day of wear to every farm.

    Each farm grows 1-3 weeds, then upkeep and crop/animal health drop by a base
    amount plus a per-weed penalty. Farms do not affect each other.
    """

    def __init__(
        self,
        farms: FarmRegistry,
        *,
        rng: RandomSource | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._farms = farms
        self._rng = rng or random.Random()
        self._logger = logger or logging.getLogger("rooster_ranch.scheduler")
        self.days_elapsed = 0

    def degrade(self, farm: FarmIsland) -> None:
        farm.tick_day(self._rng.randint(WEED_GROWTH_MIN, WEED_GROWTH_MAX))

    def run_day(self) -> int:
        """Advance every farm by one day and return how many were updated."""
        count = 0
        for farm in self._farms.farms():
            self.degrade(farm)
            count += 1
        self.days_elapsed += 1
        self._logger.info("farm_day_advanced", extra={"farms": count, "day": self.days_elapsed})
        return count


class RanchScheduler:
    """Runs the day tick and the display-refresh tick on one event loop.

    Both timers are independent tasks; ``stop`` must be awaited before the
    components they touch are torn down.
    """

    def __init__(
        self,
        *,
        day_action: Callable[[], object],
        refresh_action: Callable[[], object] | None = None,
        day_interval_seconds: float = 1200.0,
        refresh_interval_seconds: float = 1.0,
        logger: logging.Logger | None = None,
    ) -> None:
        self._day_action = day_action
        self._refresh_action = refresh_action
        self._day_interval_seconds = day_interval_seconds
        self._refresh_interval_seconds = refresh_interval_seconds
        self._logger = logger or logging.getLogger("rooster_ranch.scheduler")
        self._tasks: list[asyncio.Task[None]] = []

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._tasks)

    async def start(self) -> None:
        """Start both timers once; repeated calls are ignored while running."""
        if self.running:
            return

        self._tasks = [
            asyncio.create_task(
                self._repeat("day", self._day_action, self._day_interval_seconds), name="ranch-day-timer"
            )
        ]
        if self._refresh_action is not None:
            self._tasks.append(
                asyncio.create_task(
                    self._repeat("refresh", self._refresh_action, self._refresh_interval_seconds),
                    name="ranch-refresh-timer",
                )
            )
        self._logger.info(
            "scheduler_started",
            extra={"day_interval": self._day_interval_seconds, "refresh_interval": self._refresh_interval_seconds},
        )

    async def stop(self) -> None:
        """Cancel both timers and wait for them to finish."""
        if not self._tasks:
            return

        for task in self._tasks:
            task.cancel()
        for task in self._tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._tasks = []
        self._logger.info("scheduler_stopped")

    async def _repeat(self, label: str, action: Callable[[], object], interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            try:
                action()
            except Exception:  # noqa: BLE001 - a failing tick must not kill the timer.
                self._logger.exception("scheduled_action_failed", extra={"timer": label})
