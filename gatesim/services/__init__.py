"""Service-layer entry points for gatesim."""

from .simulation_service import (
    DriverState,
    Selection,
    SimulationClock,
    SimulationDriver,
    TickReport,
    build_simulation_driver,
)
from .ticker import Ticker

__all__ = [
    "DriverState",
    "Selection",
    "SimulationClock",
    "SimulationDriver",
    "TickReport",
    "Ticker",
    "build_simulation_driver",
]
