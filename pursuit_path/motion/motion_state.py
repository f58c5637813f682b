"""
Motion State

Kinematic snapshot (time, position, velocity, acceleration) of a
one-dimensional motion along a path segment. Profiles are stitched
together from these states at segment boundaries.
"""

import math
from dataclasses import dataclass, replace
from typing import Optional

STATE_EPSILON = 1e-6


def epsilon_equals(a: float, b: float, epsilon: float = STATE_EPSILON) -> bool:
    return abs(a - b) <= epsilon


@dataclass(frozen=True)
class MotionState:
    """Position (in), velocity (in/s), acceleration (in/s^2) at time t (s)."""
    t: float = 0.0
    pos: float = 0.0
    vel: float = 0.0
    acc: float = 0.0

    def extrapolate(self, t: float, acc: Optional[float] = None) -> 'MotionState':
        """State at time t assuming constant acceleration from this state."""
        if acc is None:
            acc = self.acc
        dt = t - self.t
        return MotionState(
            t=t,
            pos=self.pos + self.vel * dt + 0.5 * acc * dt * dt,
            vel=self.vel + acc * dt,
            acc=acc,
        )

    def next_time_at_pos(self, pos: float) -> float:
        """
        Earliest time at or after self.t when pos is reached.

        Returns:
            Time in seconds, or NaN if the position is never reached
        """
        if epsilon_equals(pos, self.pos):
            return self.t
        if epsilon_equals(self.acc, 0.0):
            delta_pos = pos - self.pos
            if delta_pos * math.copysign(1.0, self.vel) >= 0.0 and self.vel != 0.0:
                return delta_pos / self.vel + self.t
            return math.nan

        disc = self.vel * self.vel - 2.0 * self.acc * (self.pos - pos)
        if disc < 0.0:
            return math.nan
        sqrt_disc = math.sqrt(disc)
        max_dt = (-self.vel + sqrt_disc) / self.acc
        min_dt = (-self.vel - sqrt_disc) / self.acc
        if min_dt >= 0.0 and (max_dt < 0.0 or min_dt < max_dt):
            return self.t + min_dt
        if max_dt >= 0.0:
            return self.t + max_dt
        return math.nan

    def with_pos(self, pos: float) -> 'MotionState':
        return replace(self, pos=pos)

    def flipped(self) -> 'MotionState':
        return MotionState(self.t, -self.pos, -self.vel, -self.acc)

    def coincident(self, other: 'MotionState', epsilon: float = STATE_EPSILON) -> bool:
        return (epsilon_equals(self.t, other.t, epsilon)
                and epsilon_equals(self.pos, other.pos, epsilon)
                and epsilon_equals(self.vel, other.vel, epsilon))

    def __str__(self) -> str:
        return (f'(t={self.t:.3f}, pos={self.pos:.3f}, '
                f'vel={self.vel:.3f}, acc={self.acc:.3f})')


ZERO_STATE = MotionState()
