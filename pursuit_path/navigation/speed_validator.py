"""
Speed Validator - Plans and checks segment speeds along a path

Before profiling, a backward pass caps each segment's end speed at what
the following segments can still brake from. After profiling, the
validator checks every schedule against its limits and verifies that
velocity is continuous across segment boundaries.

Author: pursuit_path maintainers
Date: October 2026
"""

import math
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from ..motion import MotionState, ZERO_STATE


@dataclass
class SpeedPlan:
    """Per-segment speed targets from the backward pass."""
    end_speeds: np.ndarray          # Speed each segment finishes at (in/s)
    start_speed_limits: np.ndarray  # Fastest entry that can still meet end_speeds (in/s)


@dataclass
class ValidationResult:
    """Result of speed validation."""
    is_valid: bool
    violation_index: int = -1  # Index of first offending segment (-1 if valid)
    violation: str = ""
    max_velocity_error: float = 0.0    # Worst overshoot of a segment max speed
    max_continuity_error: float = 0.0  # Worst velocity jump at a boundary


def plan_speeds(lengths: Sequence[float], max_speeds: Sequence[float],
                requested_end_speeds: Sequence[float], max_accel: float) -> SpeedPlan:
    """
    Cap end speeds so every segment can be entered and left within limits.

    Args:
        lengths: Segment lengths (in)
        max_speeds: Segment speed limits (in/s)
        requested_end_speeds: Desired speed at the end of each segment (in/s)
        max_accel: Acceleration limit (in/s^2)

    Returns:
        SpeedPlan with the capped end speeds and entry speed limits
    """
    lengths = np.asarray(lengths, dtype=float)
    max_speeds = np.asarray(max_speeds, dtype=float)
    end_speeds = np.minimum(np.asarray(requested_end_speeds, dtype=float), max_speeds)
    end_speeds = np.maximum(end_speeds, 0.0)
    start_limits = np.zeros_like(lengths)

    for i in range(len(lengths) - 1, -1, -1):
        if i < len(lengths) - 1:
            end_speeds[i] = min(end_speeds[i], start_limits[i + 1])
        start_limits[i] = min(max_speeds[i],
                              math.sqrt(end_speeds[i] ** 2 + 2.0 * max_accel * lengths[i]))

    return SpeedPlan(end_speeds=end_speeds, start_speed_limits=start_limits)


class SpeedValidator:
    """
    Validates the speed schedule of a compiled path.

    Works on any sequence of objects exposing max_speed, end_speed,
    length(), start_state(), end_state() and motion_profile, i.e.
    PathSegments.
    """

    def __init__(self, tolerance: float = 1e-3, logger=None):
        """
        Initialize speed validator.

        Args:
            tolerance: Velocity slack (in/s) before a mismatch is a fault
            logger: Optional logger for reporting faults
        """
        self._tolerance = tolerance
        self._logger = logger

    def check_limits(self, max_speeds: Sequence[float]) -> ValidationResult:
        """Reject segments that have no positive speed to drive at."""
        speeds = np.asarray(max_speeds, dtype=float)
        bad = np.flatnonzero(~(speeds > 0.0))
        if bad.size:
            index = int(bad[0])
            return self._fail(index, f'segment {index} has non-positive max speed {speeds[index]:.3f}')
        return ValidationResult(is_valid=True)

    def validate(self, segments: Sequence, plan: SpeedPlan,
                 initial_state: Optional[MotionState] = None) -> ValidationResult:
        """
        Validate profiled segments against their limits and the speed plan.

        Args:
            segments: Profiled segments in path order
            plan: Speed plan the segments were profiled against
            initial_state: State the first segment was seeded with

        Returns:
            ValidationResult with validity and details
        """
        if len(segments) == 0:
            return self._fail(0, 'path has no segments')

        initial_state = initial_state or ZERO_STATE
        tol = self._tolerance
        max_velocity_error = 0.0
        max_continuity_error = 0.0
        first_failure: Optional[ValidationResult] = None

        def record(index: int, message: str):
            nonlocal first_failure
            if first_failure is None:
                first_failure = ValidationResult(is_valid=False, violation_index=index,
                                                 violation=message)

        if initial_state.vel > plan.start_speed_limits[0] + tol:
            record(0, f'initial velocity {initial_state.vel:.3f} exceeds entry limit '
                      f'{plan.start_speed_limits[0]:.3f}')

        previous_end: MotionState = initial_state
        for i, segment in enumerate(segments):
            peak = max((max(abs(s.start.vel), abs(s.end.vel)) for s in segment.motion_profile),
                       default=abs(segment.start_state().vel))
            velocity_error = max(0.0, peak - segment.max_speed)
            max_velocity_error = max(max_velocity_error, velocity_error)
            if velocity_error > tol:
                record(i, f'segment {i} peaks at {peak:.3f}, above max speed {segment.max_speed:.3f}')

            continuity_error = abs(segment.start_state().vel - previous_end.vel)
            max_continuity_error = max(max_continuity_error, continuity_error)
            if continuity_error > tol:
                record(i, f'segment {i} starts at {segment.start_state().vel:.3f}, '
                          f'previous segment ends at {previous_end.vel:.3f}')

            end_vel = segment.end_state().vel
            if end_vel > plan.end_speeds[i] + tol:
                record(i, f'segment {i} ends at {end_vel:.3f}, planned {plan.end_speeds[i]:.3f}')

            travelled = segment.end_state().pos - segment.start_state().pos
            if abs(travelled - segment.length()) > max(tol, 1e-6 * segment.length()):
                record(i, f'segment {i} profile covers {travelled:.3f} of {segment.length():.3f}')

            previous_end = segment.end_state()

        if abs(previous_end.vel) > tol:
            record(len(segments) - 1, f'path ends moving at {previous_end.vel:.3f}')

        if first_failure is not None:
            first_failure.max_velocity_error = max_velocity_error
            first_failure.max_continuity_error = max_continuity_error
            if self._logger is not None:
                self._logger.warning(f'Speed validation failed: {first_failure.violation}')
            return first_failure

        return ValidationResult(
            is_valid=True,
            max_velocity_error=max_velocity_error,
            max_continuity_error=max_continuity_error,
        )

    def _fail(self, index: int, message: str) -> ValidationResult:
        if self._logger is not None:
            self._logger.warning(f'Speed validation failed: {message}')
        return ValidationResult(is_valid=False, violation_index=index, violation=message)
