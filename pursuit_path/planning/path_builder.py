"""
Path Builder

Compiles a list of Waypoints into a Path of line and arc segments with
continuous speed profiles.

Algorithm:
    1. Slide a window of three waypoints along the list
    2. Trim both legs of each window by the middle waypoint's radius
    3. Blend the legs with an arc tangent to both trimmed ends
    4. Finish with a line into the last waypoint; the last segment ends at rest
    5. Plan, profile and validate the segment speeds

Author: pursuit_path maintainers
Date: October 2026
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from ..geometry import Translation2d, intersect_rays
from ..motion import MotionState, ZERO_STATE
from ..navigation.speed_validator import SpeedValidator, ValidationResult, plan_speeds
from .path import Path
from .path_segment import PathSegment
from .waypoint import Waypoint


@dataclass
class PathBuilderConfig:
    """Configuration for path construction (inches, seconds)."""
    # Degeneracy thresholds
    epsilon: float = 1e-9                # Shortest segment / smallest arc radius kept (in)
    really_big_number: float = 1e9       # Arc radii at or above this are treated as straight (in)
    overlap_tolerance: float = 1e-6      # Slack before overlapping radius trims are an error (in)

    # Motion limits
    max_accel: float = 120.0             # Path following acceleration limit (in/s^2)

    # Validation
    speed_tolerance: float = 1e-3        # Velocity mismatch tolerated by the validator (in/s)


class BuildStatus(Enum):
    """Outcome of a build request."""
    SUCCEEDED = 0
    TOO_FEW_WAYPOINTS = 1
    INVALID_GEOMETRY = 2
    INFEASIBLE_SPEEDS = 3


@dataclass
class BuildResult:
    """Result of a build request."""
    status: BuildStatus
    path: Optional[Path] = None
    error_message: str = ""
    validation: Optional[ValidationResult] = None

    @property
    def succeeded(self) -> bool:
        return self.status == BuildStatus.SUCCEEDED


class Line:
    """
    Leg between two waypoints, trimmed to leave room for blending arcs.

    Endpoints of the whole path are not trimmed; pass trim_start /
    trim_end = False for them.
    """

    def __init__(self, a: Waypoint, b: Waypoint, trim_start: bool = True,
                 trim_end: bool = True, epsilon: float = 1e-9):
        self.a = a
        self.b = b
        self.direction = Translation2d.between(a.position, b.position)
        self.speed = b.speed

        norm = self.direction.norm()
        self.is_degenerate = norm <= epsilon
        if self.is_degenerate:
            self.start = a.position
            self.end = b.position
            return

        start_trim = a.radius if trim_start else 0.0
        end_trim = b.radius if trim_end else 0.0
        self.start = a.position + self.direction.scale(start_trim / norm)
        self.end = b.position - self.direction.scale(end_trim / norm)

    def trimmed_length(self) -> float:
        """Signed length along direction; negative when the trims overlap."""
        norm = self.direction.norm()
        if norm == 0.0:
            return 0.0
        return Translation2d.between(self.start, self.end).dot(self.direction) / norm


class Arc:
    """Circular blend tangent to two lines that share a waypoint."""

    def __init__(self, a: Line, b: Line, epsilon: float = 1e-9):
        self.a = a
        self.b = b
        self.speed = (a.speed + b.speed) / 2.0

        self.center: Optional[Translation2d] = None
        if not (a.is_degenerate or b.is_degenerate):
            self.center = intersect_rays(a.end, a.direction.normal(),
                                         b.start, b.direction.normal(), epsilon)
        if self.center is None:
            self.radius = math.inf
        else:
            self.radius = self.center.distance(a.end)


class _PathDraft:
    """Segments collected during a build, before profiling."""

    def __init__(self, epsilon: float, logger):
        self._epsilon = epsilon
        self._logger = logger
        self.segments: List[PathSegment] = []
        self.requested_end_speeds: List[float] = []
        self._pending_markers: List[str] = []

    def add_line(self, line: Line, end_speed: float):
        if line.is_degenerate or line.trimmed_length() <= self._epsilon:
            self._logger.debug(f'Skipping zero-length line {line.a} -> {line.b}')
            self._defer_marker(line.a.marker)
            return
        segment = PathSegment.line(line.start, line.end, line.speed)
        self._append(segment, end_speed, line.a.marker)

    def add_arc(self, arc: Arc, really_big_number: float):
        self.add_line(arc.a, arc.speed)
        if not (self._epsilon < arc.radius < really_big_number):
            self._logger.debug(f'Omitting arc at {arc.a.b} (radius {arc.radius:.3g})')
            self._add_bridge(arc)
            return
        segment = PathSegment.arc(arc.a.end, arc.b.start, arc.center, arc.speed)
        if segment.length() <= self._epsilon:
            self._logger.debug(f'Omitting zero-length arc at {arc.a.b}')
            return
        self._append(segment, arc.b.speed)

    def _add_bridge(self, arc: Arc):
        # Straight legs trimmed for an omitted arc leave a gap at the vertex
        if Translation2d.between(arc.a.end, arc.b.start).norm() <= self._epsilon:
            return
        segment = PathSegment.line(arc.a.end, arc.b.start, arc.speed)
        self._append(segment, arc.b.speed)

    def _append(self, segment: PathSegment, end_speed: float,
                marker: Optional[str] = None):
        # Markers from skipped segments come first, in waypoint order
        self._defer_marker(marker)
        for pending in self._pending_markers:
            segment.add_marker(pending)
        self._pending_markers = []
        self.segments.append(segment)
        self.requested_end_speeds.append(end_speed)

    def _defer_marker(self, marker: Optional[str]):
        """Hold a marker until the next segment is emitted."""
        if marker is not None:
            self._pending_markers.append(marker)

    def finish(self, final_marker: Optional[str]):
        """
        Close the draft at the last waypoint.

        The last emitted segment, line or arc, is asked to end at rest and
        picks up any markers still pending, the last waypoint's included.
        """
        if not self.segments:
            return
        self.requested_end_speeds[-1] = 0.0
        self._defer_marker(final_marker)
        for pending in self._pending_markers:
            self.segments[-1].add_marker(pending)
        self._pending_markers = []


class PathBuilder:
    """
    Converts a list of Waypoints into a Path of arc and line segments.

    The returned Path shares nothing with the builder; every call builds
    fresh segments.
    """

    def __init__(self, config: Optional[PathBuilderConfig] = None, logger=None):
        """
        Initialize the path builder.

        Args:
            config: PathBuilderConfig, uses defaults if not provided
            logger: Logger to report to (e.g. a node logger); module logger if None
        """
        self.config = config or PathBuilderConfig()
        self._logger = logger or logging.getLogger(__name__)
        self._validator = SpeedValidator(self.config.speed_tolerance, self._logger)

    def build(self, waypoints: Sequence[Waypoint],
              initial_state: Optional[MotionState] = None) -> BuildResult:
        """
        Build a path through the waypoints.

        Args:
            waypoints: At least two waypoints, in driving order
            initial_state: Motion state to start from; at rest if None

        Returns:
            BuildResult with the path or the reason it could not be built
        """
        waypoints = list(waypoints)
        if len(waypoints) < 2:
            message = f'Path must contain at least 2 waypoints, got {len(waypoints)}'
            self._logger.error(message)
            return BuildResult(status=BuildStatus.TOO_FEW_WAYPOINTS, error_message=message)

        geometry_error = self._check_waypoints(waypoints)
        if geometry_error:
            self._logger.error(geometry_error)
            return BuildResult(status=BuildStatus.INVALID_GEOMETRY, error_message=geometry_error)

        self._logger.info(f'Building path through {len(waypoints)} waypoints')

        draft = _PathDraft(self.config.epsilon, self._logger)
        last = len(waypoints) - 1
        for i in range(len(waypoints) - 2):
            line_a = Line(waypoints[i], waypoints[i + 1],
                          trim_start=i > 0, trim_end=True, epsilon=self.config.epsilon)
            line_b = Line(waypoints[i + 1], waypoints[i + 2],
                          trim_start=True, trim_end=i + 2 < last, epsilon=self.config.epsilon)
            overlap = self._check_overlap(line_a) or self._check_overlap(line_b)
            if overlap:
                self._logger.error(overlap)
                return BuildResult(status=BuildStatus.INVALID_GEOMETRY, error_message=overlap)
            draft.add_arc(Arc(line_a, line_b, self.config.epsilon), self.config.really_big_number)

        final_line = Line(waypoints[-2], waypoints[-1], trim_start=len(waypoints) > 2,
                          trim_end=False, epsilon=self.config.epsilon)
        overlap = self._check_overlap(final_line)
        if overlap:
            self._logger.error(overlap)
            return BuildResult(status=BuildStatus.INVALID_GEOMETRY, error_message=overlap)
        draft.add_line(final_line, 0.0)
        draft.finish(waypoints[-1].marker)

        if not draft.segments:
            message = 'All waypoints coincide; path has no length'
            self._logger.error(message)
            return BuildResult(status=BuildStatus.INVALID_GEOMETRY, error_message=message)

        segments = draft.segments
        segments[-1].set_extrapolate_lookahead(True)

        return self._profile(segments, draft.requested_end_speeds, initial_state or ZERO_STATE)

    def _profile(self, segments: List[PathSegment], requested_end_speeds: List[float],
                 initial_state: MotionState) -> BuildResult:
        max_speeds = [segment.max_speed for segment in segments]
        limits = self._validator.check_limits(max_speeds)
        if not limits.is_valid:
            return BuildResult(status=BuildStatus.INFEASIBLE_SPEEDS,
                               error_message=limits.violation, validation=limits)

        plan = plan_speeds([segment.length() for segment in segments], max_speeds,
                           requested_end_speeds, self.config.max_accel)

        state = initial_state.with_pos(0.0)
        for segment, end_speed in zip(segments, plan.end_speeds):
            segment.create_motion_profile(state, float(end_speed), self.config.max_accel)
            state = segment.end_state().with_pos(0.0)

        validation = self._validator.validate(segments, plan, initial_state.with_pos(0.0))
        if not validation.is_valid:
            return BuildResult(status=BuildStatus.INFEASIBLE_SPEEDS,
                               error_message=validation.violation, validation=validation)

        path = Path(segments)
        self._logger.info(
            f'Built path: {len(path)} segments, {path.length():.1f} in, '
            f'{path.duration():.2f} s')
        return BuildResult(status=BuildStatus.SUCCEEDED, path=path, validation=validation)

    def _check_waypoints(self, waypoints: List[Waypoint]) -> str:
        for i, waypoint in enumerate(waypoints):
            values = (waypoint.x, waypoint.y, waypoint.radius, waypoint.speed)
            if not all(math.isfinite(v) for v in values):
                return f'Waypoint {i} has a non-finite value: {waypoint}'
            if waypoint.radius < 0.0:
                return f'Waypoint {i} has negative radius {waypoint.radius}'
        return ""

    def _check_overlap(self, line: Line) -> str:
        if line.is_degenerate:
            return ""
        if line.trimmed_length() < -self.config.overlap_tolerance:
            return (f'Radii of {line.a} and {line.b} overlap on a leg of length '
                    f'{line.direction.norm():.3f}')
        return ""


def build_path_from_waypoints(waypoints: Sequence[Waypoint],
                              config: Optional[PathBuilderConfig] = None,
                              initial_state: Optional[MotionState] = None,
                              logger=None) -> BuildResult:
    """Build a path with a one-off PathBuilder."""
    return PathBuilder(config, logger).build(waypoints, initial_state)
