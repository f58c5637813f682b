"""
Motion Profile

A piecewise constant-acceleration schedule built from MotionSegments.
Queried by position to look up the scheduled velocity along a path
segment, and by time for playback/visualization.

Author: pursuit_path maintainers
Date: October 2026
"""

import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .motion_state import MotionState, ZERO_STATE, epsilon_equals


@dataclass(frozen=True)
class MotionSegment:
    """Constant-acceleration span between two states."""
    start: MotionState
    end: MotionState

    def contains_pos(self, pos: float) -> bool:
        return (self.start.pos <= pos <= self.end.pos
                or self.end.pos <= pos <= self.start.pos)

    def contains_time(self, t: float) -> bool:
        return self.start.t <= t <= self.end.t

    def duration(self) -> float:
        return self.end.t - self.start.t


class MotionProfile:
    """
    Ordered list of contiguous MotionSegments.

    An empty profile still reports its seed state as both start and end
    state, so a zero-length schedule can seed the next one.
    """

    def __init__(self, initial_state: MotionState = ZERO_STATE):
        self._initial = initial_state
        self._segments: List[MotionSegment] = []

    def reset(self, initial_state: MotionState):
        self._initial = initial_state
        self._segments = []

    @property
    def segments(self) -> Tuple[MotionSegment, ...]:
        return tuple(self._segments)

    def is_empty(self) -> bool:
        return len(self._segments) == 0

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[MotionSegment]:
        return iter(self._segments)

    def start_state(self) -> MotionState:
        if self._segments:
            return self._segments[0].start
        return self._initial

    def end_state(self) -> MotionState:
        if self._segments:
            return self._segments[-1].end
        return self._initial

    def start_pos(self) -> float:
        return self.start_state().pos

    def end_pos(self) -> float:
        return self.end_state().pos

    def start_time(self) -> float:
        return self.start_state().t

    def end_time(self) -> float:
        return self.end_state().t

    def duration(self) -> float:
        return self.end_time() - self.start_time()

    def append_control(self, acc: float, dt: float):
        """Extend the profile by holding acceleration acc for dt seconds."""
        last_end = self.end_state()
        new_start = MotionState(last_end.t, last_end.pos, last_end.vel, acc)
        self.append_segment(MotionSegment(new_start, new_start.extrapolate(new_start.t + dt)))

    def append_segment(self, segment: MotionSegment):
        self._segments.append(segment)

    def append_profile(self, profile: 'MotionProfile'):
        for segment in profile:
            self.append_segment(segment)

    def consolidate(self):
        """Drop segments of (near) zero duration."""
        self._segments = [s for s in self._segments
                          if not epsilon_equals(s.start.t, s.end.t)]

    def first_state_by_pos(self, pos: float) -> Optional[MotionState]:
        """
        First scheduled state reaching pos.

        Returns:
            MotionState, or None when no segment covers pos
        """
        for segment in self._segments:
            if not segment.contains_pos(pos):
                continue
            if epsilon_equals(segment.end.pos, pos):
                return segment.end
            t = min(segment.start.next_time_at_pos(pos), segment.end.t)
            if math.isnan(t):
                return None
            return segment.start.extrapolate(t)
        if not self._segments and epsilon_equals(self._initial.pos, pos):
            return self._initial
        return None

    def state_by_time(self, t: float) -> Optional[MotionState]:
        if not self._segments:
            return None
        if t < self.start_time() and epsilon_equals(t, self.start_time()):
            return self.start_state()
        if t > self.end_time() and epsilon_equals(t, self.end_time()):
            return self.end_state()
        for segment in self._segments:
            if segment.contains_time(t):
                return segment.start.extrapolate(t)
        return None

    def state_by_time_clamped(self, t: float) -> MotionState:
        if t < self.start_time():
            return self.start_state()
        if t > self.end_time():
            return self.end_state()
        state = self.state_by_time(t)
        return state if state is not None else self.end_state()

    def sample(self, dt: float) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Sample the profile at a fixed time step.

        Args:
            dt: Time step in seconds

        Returns:
            (times, positions, velocities) arrays
        """
        if dt <= 0.0:
            raise ValueError(f'Sample period must be positive, got {dt}')
        times = np.append(np.arange(self.start_time(), self.end_time(), dt), self.end_time())
        states = [self.state_by_time_clamped(float(t)) for t in times]
        positions = np.array([s.pos for s in states])
        velocities = np.array([s.vel for s in states])
        return times, positions, velocities

    def flipped(self) -> 'MotionProfile':
        result = MotionProfile(self._initial.flipped())
        for segment in self._segments:
            result.append_segment(MotionSegment(segment.start.flipped(), segment.end.flipped()))
        return result

    def __str__(self) -> str:
        body = ', '.join(f'[{s.start} -> {s.end}]' for s in self._segments)
        return f'MotionProfile({body})'
