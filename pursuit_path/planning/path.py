"""
Path - ordered, read-only sequence of PathSegments

Produced by the PathBuilder. After construction nothing mutates it, so
a control loop may query it repeatedly without locking.
"""

import math
from typing import Iterator, List, Sequence, Tuple

import numpy as np

from ..geometry import Translation2d
from ..motion import MotionState, ZERO_STATE
from .path_segment import PathSegment


class Path:
    """A multi-segment path in traversal order."""

    def __init__(self, segments: Sequence[PathSegment]):
        self._segments: Tuple[PathSegment, ...] = tuple(segments)

    @property
    def segments(self) -> Tuple[PathSegment, ...]:
        return self._segments

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[PathSegment]:
        return iter(self._segments)

    def __getitem__(self, index: int) -> PathSegment:
        return self._segments[index]

    def is_empty(self) -> bool:
        return len(self._segments) == 0

    def length(self) -> float:
        """Total length of all segments (in)."""
        return math.fsum(segment.length() for segment in self._segments)

    def start(self) -> Translation2d:
        return self._segments[0].start

    def end_position(self) -> Translation2d:
        return self._segments[-1].end

    def markers(self) -> List[str]:
        """Markers in the order they will be passed."""
        return [marker for s in self._segments for marker in s.markers]

    def last_motion_state(self) -> MotionState:
        """End state of the final segment (zero state for an empty path)."""
        if not self._segments:
            return ZERO_STATE
        return self._segments[-1].end_state()

    def duration(self) -> float:
        """Scheduled time to drive the path (s)."""
        if not self._segments:
            return 0.0
        return self._segments[-1].end_state().t - self._segments[0].start_state().t

    # ------------------------------------------------------------------
    # Follower queries
    # ------------------------------------------------------------------

    def closest_segment_index(self, position: Translation2d) -> int:
        """Index of the segment whose closest point is nearest to position."""
        best_index = 0
        best_dist = float('inf')
        for i, segment in enumerate(self._segments):
            dist = position.distance(segment.closest_point(position))
            if dist < best_dist:
                best_dist = dist
                best_index = i
        return best_index

    def closest_point(self, position: Translation2d) -> Translation2d:
        """Point on the whole path nearest to position."""
        segment = self._segments[self.closest_segment_index(position)]
        return segment.closest_point(position)

    def speed_by_closest_point(self, position: Translation2d) -> float:
        """Scheduled speed at the path point nearest to position."""
        segment = self._segments[self.closest_segment_index(position)]
        return segment.speed_by_closest_point(position)

    def point_by_distance(self, index: int, dist: float) -> Translation2d:
        """Point dist inches along segment index."""
        return self._segments[index].point_by_distance(dist)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def sample(self, spacing: float = 1.0) -> np.ndarray:
        """
        Resample the path at roughly uniform arc-length spacing.

        Args:
            spacing: Distance between samples (in)

        Returns:
            (N, 2) array of x, y points including both path endpoints
        """
        return self._sample(spacing)[0]

    def speed_samples(self, spacing: float = 1.0) -> np.ndarray:
        """
        Scheduled speeds at the points returned by sample().

        Returns:
            (N,) array of speeds (in/s)
        """
        return self._sample(spacing)[1]

    def _sample(self, spacing: float) -> Tuple[np.ndarray, np.ndarray]:
        if spacing <= 0.0:
            raise ValueError(f'Sample spacing must be positive, got {spacing}')
        points: List[Tuple[float, float]] = []
        speeds: List[float] = []
        for segment in self._segments:
            length = segment.length()
            count = max(1, int(math.ceil(length / spacing)))
            for dist in np.linspace(0.0, length, count, endpoint=False):
                points.append(segment.point_by_distance(float(dist)).as_tuple())
                speeds.append(segment.speed_by_distance(float(dist)))
        if self._segments:
            last = self._segments[-1]
            points.append(last.end.as_tuple())
            speeds.append(last.speed_by_distance(last.length()))
        return np.array(points, dtype=float).reshape(-1, 2), np.array(speeds, dtype=float)

    def __str__(self) -> str:
        return '\n'.join(str(segment) for segment in self._segments)
