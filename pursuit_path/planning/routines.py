"""
Predefined Routines - named waypoint lists for demos and bench tests

Each routine is a list of (x, y, radius) tuples in inches. Speeds are
applied when the routine is turned into Waypoints.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from .waypoint import Waypoint

RoutinePoint = Tuple[float, float, float]


def create_waypoints(points: Sequence[RoutinePoint], speed: float = 60.0,
                     markers: Optional[Dict[int, str]] = None) -> List[Waypoint]:
    """
    Create Waypoints from (x, y, radius) tuples.

    Args:
        points: (x, y, radius) tuples in inches
        speed: Target speed for every waypoint (in/s)
        markers: Optional {index: marker} labels
    """
    markers = markers or {}
    return [Waypoint(x, y, radius, speed, markers.get(i)) for i, (x, y, radius) in enumerate(points)]


def create_scaled_waypoints(points: Sequence[RoutinePoint], scale: float = 1.0,
                            offset_x: float = 0.0, offset_y: float = 0.0,
                            speed: float = 60.0) -> List[Waypoint]:
    """
    Create scaled and offset Waypoints. Radii scale with the routine.

    Args:
        points: (x, y, radius) tuples
        scale: Scale factor to apply
        offset_x: X offset to add after scaling
        offset_y: Y offset to add after scaling
        speed: Target speed for every waypoint (in/s)
    """
    scaled = [(x * scale + offset_x, y * scale + offset_y, r * scale) for x, y, r in points]
    return create_waypoints(scaled, speed)


STRAIGHT_ROUTINE = [
    (0.0, 0.0, 0.0),
    (120.0, 0.0, 0.0),
]

SQUARE_ROUTINE = [
    (0.0, 0.0, 0.0),
    (60.0, 0.0, 15.0),
    (60.0, 60.0, 15.0),
    (0.0, 60.0, 15.0),
    (0.0, 15.0, 0.0),
]

S_CURVE_ROUTINE = [
    (0.0, 0.0, 0.0),
    (48.0, 0.0, 24.0),
    (96.0, 48.0, 24.0),
    (144.0, 48.0, 0.0),
]

SLALOM_ROUTINE = [
    (0.0, 0.0, 0.0),
    (36.0, 0.0, 12.0),
    (60.0, 24.0, 12.0),
    (84.0, 0.0, 12.0),
    (108.0, 24.0, 12.0),
    (132.0, 0.0, 12.0),
    (168.0, 0.0, 0.0),
]

ROUTINES = {
    'straight': STRAIGHT_ROUTINE,
    'square': SQUARE_ROUTINE,
    's_curve': S_CURVE_ROUTINE,
    'slalom': SLALOM_ROUTINE,
}


def get_routine(name: str, scale: float = 1.0, speed: float = 60.0) -> List[Waypoint]:
    """
    Get a predefined routine by name.

    Args:
        name: One of 'straight', 'square', 's_curve', 'slalom'
        scale: Scale factor to apply
        speed: Target speed for every waypoint (in/s)

    Raises:
        ValueError: If the routine name is unknown
    """
    if name not in ROUTINES:
        raise ValueError(f"Unknown routine '{name}'. Available: {sorted(ROUTINES)}")
    return create_scaled_waypoints(ROUTINES[name], scale=scale, speed=speed)
