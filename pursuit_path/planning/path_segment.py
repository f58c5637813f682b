"""
Path Segment

One line or circular arc of a compiled path, with the motion profile
that schedules speed along it. This is the unit a pursuit follower
queries: closest point, point at distance, remaining distance, and
scheduled speed.

Author: pursuit_path maintainers
Date: October 2026
"""

import logging
import math
from typing import Optional, Tuple

from ..geometry import Translation2d
from ..motion import (
    CompletionBehavior,
    MotionProfile,
    MotionProfileConstraints,
    MotionProfileGoal,
    MotionState,
    ZERO_STATE,
    generate_profile,
)

_logger = logging.getLogger(__name__)


class PathSegment:
    """
    A line or arc segment in absolute coordinates.

    Use PathSegment.line() / PathSegment.arc() to construct. Geometry is
    fixed at construction; the motion profile and lookahead flag are
    assigned by the path builder before the segment is handed out.
    """

    def __init__(self, start: Translation2d, end: Translation2d,
                 max_speed: float, center: Optional[Translation2d] = None,
                 marker: Optional[str] = None):
        self._start = start
        self._end = end
        self._center = center
        self._max_speed = max_speed
        self._markers: Tuple[str, ...] = (marker,) if marker is not None else ()
        self._extrapolate_lookahead = False
        self._end_speed = 0.0
        self._seed_state = ZERO_STATE

        if center is None:
            self._delta_start = Translation2d.between(start, end)
            self._delta_end = self._delta_start
            self._total_angle = 0.0
            self._length = self._delta_start.norm()
        else:
            self._delta_start = Translation2d.between(center, start)
            self._delta_end = Translation2d.between(center, end)
            self._total_angle = Translation2d.angle_between(self._delta_start, self._delta_end)
            self._length = self._delta_start.norm() * self._total_angle

        self._profile = MotionProfile(ZERO_STATE)

    @classmethod
    def line(cls, start: Translation2d, end: Translation2d, max_speed: float,
             marker: Optional[str] = None) -> 'PathSegment':
        return cls(start, end, max_speed, marker=marker)

    @classmethod
    def arc(cls, start: Translation2d, end: Translation2d, center: Translation2d,
            max_speed: float, marker: Optional[str] = None) -> 'PathSegment':
        return cls(start, end, max_speed, center=center, marker=marker)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def start(self) -> Translation2d:
        return self._start

    @property
    def end(self) -> Translation2d:
        return self._end

    @property
    def center(self) -> Optional[Translation2d]:
        return self._center

    @property
    def is_line(self) -> bool:
        return self._center is None

    @property
    def radius(self) -> float:
        """Arc radius; infinite for a line."""
        if self.is_line:
            return math.inf
        return self._delta_start.norm()

    @property
    def max_speed(self) -> float:
        return self._max_speed

    @property
    def end_speed(self) -> float:
        """Speed the profile was asked to finish at."""
        return self._end_speed

    @property
    def marker(self) -> Optional[str]:
        """First marker carried by this segment, or None."""
        return self._markers[0] if self._markers else None

    @property
    def markers(self) -> Tuple[str, ...]:
        return self._markers

    @property
    def extrapolate_lookahead(self) -> bool:
        return self._extrapolate_lookahead

    @property
    def motion_profile(self) -> MotionProfile:
        return self._profile

    def length(self) -> float:
        return self._length

    def start_state(self) -> MotionState:
        return self._profile.start_state()

    def end_state(self) -> MotionState:
        return self._profile.end_state()

    def seed_state(self) -> MotionState:
        """State the motion profile was generated from."""
        return self._seed_state

    # ------------------------------------------------------------------
    # Construction-time setup
    # ------------------------------------------------------------------

    def set_extrapolate_lookahead(self, enabled: bool):
        """Allow point_by_distance() past the end. Only for the last segment."""
        self._extrapolate_lookahead = enabled

    def add_marker(self, marker: str):
        self._markers = self._markers + (marker,)

    def create_motion_profile(self, start_state: MotionState, end_speed: float,
                              max_accel: float):
        """
        (Re)build the speed schedule for this segment.

        The profile runs over [start_state.pos, start_state.pos + length]
        and keeps the start state's time, so consecutive segments form a
        continuous timeline.

        Args:
            start_state: End state of the previous segment (or initial state)
            end_speed: Speed to finish the segment at
            max_accel: Acceleration limit (in/s^2)
        """
        constraints = MotionProfileConstraints(self._max_speed, max_accel)
        goal = MotionProfileGoal(
            pos=start_state.pos + self._length,
            max_abs_vel=end_speed,
            completion_behavior=CompletionBehavior.VIOLATE_MAX_ABS_VEL,
        )
        self._end_speed = end_speed
        self._seed_state = start_state
        self._profile = generate_profile(constraints, goal, start_state)

    # ------------------------------------------------------------------
    # Geometric queries
    # ------------------------------------------------------------------

    def closest_point(self, position: Translation2d) -> Translation2d:
        """
        Point on the segment nearest to position.

        Args:
            position: Current position of the vehicle

        Returns:
            Projection onto the segment, or the nearer endpoint when the
            projection falls outside it
        """
        if self.is_line:
            delta = self._delta_start
            u = Translation2d.between(self._start, position).dot(delta) / delta.dot(delta)
            if 0.0 <= u <= 1.0:
                return self._start + delta.scale(u)
            return self._start if u < 0.0 else self._end

        delta_position = Translation2d.between(self._center, position)
        distance = delta_position.norm()
        if distance > 0.0:
            delta_position = delta_position.scale(self._delta_start.norm() / distance)
            between = (delta_position.cross(self._delta_start)
                       * delta_position.cross(self._delta_end) < 0.0)
            facing = delta_position.dot(self._delta_start + self._delta_end) > 0.0
            if between and facing:
                return self._center + delta_position
        start_dist = position.distance(self._start)
        end_dist = position.distance(self._end)
        return self._end if end_dist < start_dist else self._start

    def point_by_distance(self, dist: float) -> Translation2d:
        """
        Point dist inches along the segment from its start.

        Distances are clamped to [0, length()] unless lookahead
        extrapolation is enabled, in which case they may run past the end.
        """
        length = self._length
        dist = max(0.0, dist)
        if not self._extrapolate_lookahead and dist > length:
            dist = length
        if self.is_line:
            return self._start + self._delta_start.scale(dist / length)

        direction = 1.0 if self._delta_start.cross(self._delta_end) >= 0.0 else -1.0
        delta_angle = self._total_angle * direction * dist / length
        return self._center + self._delta_start.rotate_by(delta_angle)

    def remaining_distance(self, position: Translation2d) -> float:
        """
        Distance left to the end of the segment.

        Args:
            position: A point on the segment, normally closest_point()
        """
        if self.is_line:
            return position.distance(self._end)
        delta_position = Translation2d.between(self._center, position)
        angle = Translation2d.angle_between(self._delta_end, delta_position)
        return angle / self._total_angle * self._length

    def distance_travelled(self, position: Translation2d) -> float:
        path_position = self.closest_point(position)
        return self._length - self.remaining_distance(path_position)

    # ------------------------------------------------------------------
    # Speed queries
    # ------------------------------------------------------------------

    def speed_by_distance(self, dist: float) -> float:
        """Scheduled speed dist inches along the segment (0.0 if unscheduled)."""
        offset = self._profile.start_pos()
        pos = dist + offset
        if pos < self._profile.start_pos():
            pos = self._profile.start_pos()
        elif pos > self._profile.end_pos():
            pos = self._profile.end_pos()

        state = self._profile.first_state_by_pos(pos)
        if state is None:
            _logger.warning(f'Velocity does not exist at position {dist:.3f} on {self}')
            return 0.0
        return state.vel

    def speed_by_closest_point(self, position: Translation2d) -> float:
        return self.speed_by_distance(self.distance_travelled(position))

    def __str__(self) -> str:
        if self.is_line:
            return f'(start: {self._start}, end: {self._end}, speed: {self._max_speed})'
        return (f'(start: {self._start}, end: {self._end}, center: {self._center}, '
                f'speed: {self._max_speed})')

    def __repr__(self) -> str:
        kind = 'line' if self.is_line else 'arc'
        return f'PathSegment.{kind}{self}'
