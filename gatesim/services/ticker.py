"""Fixed-period ticker that drives a SimulationDriver."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from .simulation_service import DriverState, SimulationDriver, TickReport

logger = logging.getLogger(__name__)


class Ticker:
    """Call ``driver.tick()`` once per period while the driver is running.

    Ticks run to completion one after another on the calling thread.
    ``pause`` only stops future ticks; the loop exits after the tick in
    progress.
    """

    def __init__(
        self,
        driver: SimulationDriver,
        period_s: float | None = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
        on_tick: Callable[[TickReport], None] | None = None,
    ) -> None:
        self.driver = driver
        self.period_s = driver.config.tick_period_s if period_s is None else float(period_s)
        if self.period_s < 0.0:
            raise ValueError(f"period_s must be >= 0, got {self.period_s}.")
        self._sleep = sleep
        self._on_tick = on_tick

    def start(self) -> None:
        if self.driver.state is not DriverState.RUNNING:
            self.driver.start()

    def pause(self) -> None:
        if self.driver.state is DriverState.RUNNING:
            self.driver.pause()

    def run(self, max_ticks: int | None = None) -> int:
        """Tick until paused or ``max_ticks`` is reached; return ticks done."""
        self.start()
        done = 0
        while self.driver.is_running and (max_ticks is None or done < max_ticks):
            report = self.driver.tick()
            done += 1
            if self._on_tick is not None:
                self._on_tick(report)
            if self.driver.is_running and (max_ticks is None or done < max_ticks):
                self._sleep(self.period_s)
        logger.debug("Ticker stopped after %d ticks at VT %d", done, self.driver.virtual_time)
        return done
