"""
Path Tracker - progress and lookahead along a compiled Path

Finds where the vehicle is on the path and which point a pursuit
controller should steer toward. Steering and throttle are left to the
caller; the tracker only reads the Path and keeps its own progress.

Algorithm:
    1. Find the closest point on the current segment
    2. Pick a lookahead distance from the scheduled speed there
    3. Walk forward through segments to place the lookahead point,
       extrapolating past the end of the final segment
    4. Advance to the next segment once the current one is done

Author: pursuit_path maintainers
Date: October 2026
"""

import math
from dataclasses import dataclass
from typing import Optional, Set

from ..geometry import Translation2d
from ..planning.path import Path


@dataclass
class LookaheadConfig:
    """Configuration for speed-dependent lookahead."""
    min_distance: float = 12.0            # Lookahead at or below min_speed (in)
    max_distance: float = 24.0            # Lookahead at or above max_speed (in)
    min_speed: float = 9.0                # (in/s)
    max_speed: float = 120.0              # (in/s)

    # Remaining distance below which a segment counts as driven (in)
    segment_completion_tolerance: float = 0.1

    def distance_for_speed(self, speed: float) -> float:
        """Lookahead distance interpolated linearly between the limits."""
        delta_speed = self.max_speed - self.min_speed
        if delta_speed == 0.0:
            return self.min_distance
        delta_distance = self.max_distance - self.min_distance
        lookahead = delta_distance * (speed - self.min_speed) / delta_speed + self.min_distance
        if math.isnan(lookahead):
            return self.min_distance
        return max(self.min_distance, min(self.max_distance, lookahead))


@dataclass
class TargetPointReport:
    """Where the vehicle is on the path and where to aim."""
    segment_index: int
    closest_point: Translation2d
    closest_point_distance: float
    closest_point_speed: float
    remaining_segment_distance: float
    remaining_path_distance: float
    lookahead_point: Translation2d
    lookahead_point_speed: float
    max_speed: float


class PathTracker:
    """
    Tracks progress of a vehicle along an immutable Path.

    Several trackers may share one Path; each keeps its own segment
    index and set of crossed markers.
    """

    def __init__(self, path: Optional[Path] = None, config: Optional[LookaheadConfig] = None):
        self.config = config or LookaheadConfig()
        self._path: Optional[Path] = None
        self._segment_index = 0
        self._markers_crossed: Set[str] = set()
        self._finished = True
        if path is not None:
            self.set_path(path)

    def set_path(self, path: Path):
        """Set a new path to track from its first segment."""
        self._path = path
        self.reset()

    def reset(self):
        """Restart from the beginning of the current path."""
        self._segment_index = 0
        self._markers_crossed = set()
        self._finished = self._path is None or self._path.is_empty()

    @property
    def path(self) -> Optional[Path]:
        return self._path

    @property
    def segment_index(self) -> int:
        return self._segment_index

    def is_finished(self) -> bool:
        return self._finished

    def has_passed_marker(self, marker: str) -> bool:
        return marker in self._markers_crossed

    def markers_crossed(self) -> Set[str]:
        return set(self._markers_crossed)

    def remaining_path_distance(self, position: Translation2d) -> float:
        if self._path is None or self._path.is_empty():
            return 0.0
        segment = self._path[self._segment_index]
        remaining = segment.remaining_distance(segment.closest_point(position))
        for later in self._path.segments[self._segment_index + 1:]:
            remaining += later.length()
        return remaining

    def update(self, position: Translation2d) -> Optional[TargetPointReport]:
        """
        Locate the vehicle on the path and compute the lookahead target.

        Args:
            position: Vehicle position in path coordinates

        Returns:
            TargetPointReport, or None if there is no path
        """
        if self._path is None or self._path.is_empty():
            return None

        path = self._path
        current = path[self._segment_index]
        closest = current.closest_point(position)
        closest_distance = position.distance(closest)
        remaining_segment = current.remaining_distance(closest)
        remaining_path = remaining_segment + math.fsum(
            s.length() for s in path.segments[self._segment_index + 1:])
        closest_speed = current.speed_by_distance(current.length() - remaining_segment)

        lookahead = self.config.distance_for_speed(closest_speed) + closest_distance
        target_index = self._segment_index
        last_index = len(path) - 1
        if remaining_segment < lookahead and target_index < last_index:
            lookahead -= remaining_segment
            target_index += 1
            while target_index < last_index and path[target_index].length() < lookahead:
                lookahead -= path[target_index].length()
                target_index += 1
        else:
            lookahead += current.length() - remaining_segment

        target = path[target_index]
        report = TargetPointReport(
            segment_index=self._segment_index,
            closest_point=closest,
            closest_point_distance=closest_distance,
            closest_point_speed=closest_speed,
            remaining_segment_distance=remaining_segment,
            remaining_path_distance=remaining_path,
            lookahead_point=target.point_by_distance(lookahead),
            lookahead_point_speed=target.speed_by_distance(lookahead),
            max_speed=target.max_speed,
        )

        if remaining_segment < self.config.segment_completion_tolerance:
            self._complete_current_segment()

        return report

    def _complete_current_segment(self):
        segment = self._path[self._segment_index]
        self._markers_crossed.update(segment.markers)
        if self._segment_index < len(self._path) - 1:
            self._segment_index += 1
        else:
            self._finished = True
