"""
Path construction for pursuit following.

Modules:
    waypoint     - Waypoint input record
    path_segment - Line/arc segment with speed profile
    path         - Immutable ordered segment container
    path_builder - Waypoints -> Path compiler
    routines     - Predefined waypoint lists
"""

from .waypoint import Waypoint
from .path_segment import PathSegment
from .path import Path
from .path_builder import (
    Arc,
    BuildResult,
    BuildStatus,
    Line,
    PathBuilder,
    PathBuilderConfig,
    build_path_from_waypoints,
)
from .routines import (
    create_waypoints,
    create_scaled_waypoints,
    get_routine,
    STRAIGHT_ROUTINE,
    SQUARE_ROUTINE,
    S_CURVE_ROUTINE,
    SLALOM_ROUTINE,
)

__all__ = [
    'Waypoint',
    'PathSegment',
    'Path',
    'Arc',
    'BuildResult',
    'BuildStatus',
    'Line',
    'PathBuilder',
    'PathBuilderConfig',
    'build_path_from_waypoints',
    'create_waypoints',
    'create_scaled_waypoints',
    'get_routine',
    'STRAIGHT_ROUTINE',
    'SQUARE_ROUTINE',
    'S_CURVE_ROUTINE',
    'SLALOM_ROUTINE',
]
