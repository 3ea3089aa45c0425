from nixbrew.core.time.abc import Time
from nixbrew.core.time.real import RealTime

__all__ = ["RealTime", "Time"]
