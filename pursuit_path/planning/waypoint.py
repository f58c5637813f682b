"""
Waypoint - operator-specified anchor for path construction
"""

from dataclasses import dataclass
from typing import Optional

from ..geometry import Translation2d


@dataclass(frozen=True)
class Waypoint:
    """
    A point the path passes near, with blend radius and target speed.

    radius is the distance trimmed off each adjoining leg to make room
    for a tangent arc; 0 gives a sharp corner (or a path endpoint).
    marker is an opaque label surfaced when the vehicle passes the
    segment this waypoint starts.
    """
    x: float
    y: float
    radius: float = 0.0
    speed: float = 0.0
    marker: Optional[str] = None

    @classmethod
    def at(cls, position: Translation2d, radius: float = 0.0, speed: float = 0.0,
           marker: Optional[str] = None) -> 'Waypoint':
        return cls(position.x, position.y, radius, speed, marker)

    @property
    def position(self) -> Translation2d:
        return Translation2d(self.x, self.y)

    def __str__(self) -> str:
        return f'W: {self.position}, R: {self.radius:.0f}, S: {self.speed:.0f}'
