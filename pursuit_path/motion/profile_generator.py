"""
Motion Profile Generator

Synthesizes a trapezoidal velocity schedule from a start state to a
goal position/speed under velocity and acceleration limits.

Algorithm:
    1. Flip the problem if the goal lies behind the start
    2. Stop first if currently moving away from the goal
    3. Resolve goals that cannot be reached without breaking a limit
    4. Accelerate, cruise, decelerate

Author: pursuit_path maintainers
Date: October 2026
"""

import math
from dataclasses import dataclass, replace
from enum import Enum

from .motion_profile import MotionProfile, MotionSegment
from .motion_state import MotionState


class CompletionBehavior(Enum):
    """What to give up when the goal speed cannot be met in time."""
    OVERSHOOT = 0              # Pass the goal, stop, come back
    VIOLATE_MAX_ACCEL = 1      # Brake harder than the constraint allows
    VIOLATE_MAX_ABS_VEL = 2    # Arrive faster than the goal speed


@dataclass(frozen=True)
class MotionProfileConstraints:
    """Velocity (in/s) and acceleration (in/s^2) bounds."""
    max_abs_vel: float
    max_abs_acc: float

    def __post_init__(self):
        if not self.max_abs_vel > 0.0:
            raise ValueError(f'max_abs_vel must be positive, got {self.max_abs_vel}')
        if not self.max_abs_acc > 0.0:
            raise ValueError(f'max_abs_acc must be positive, got {self.max_abs_acc}')


@dataclass(frozen=True)
class MotionProfileGoal:
    """Target position and the speed allowed on arrival."""
    pos: float
    max_abs_vel: float = 0.0
    completion_behavior: CompletionBehavior = CompletionBehavior.OVERSHOOT
    pos_tolerance: float = 1e-3
    vel_tolerance: float = 1e-2

    def flipped(self) -> 'MotionProfileGoal':
        return replace(self, pos=-self.pos)

    def at_goal_pos(self, pos: float) -> bool:
        return abs(pos - self.pos) <= self.pos_tolerance

    def at_goal_state(self, state: MotionState) -> bool:
        return self.at_goal_pos(state.pos) and (
            abs(state.vel) <= self.max_abs_vel + self.vel_tolerance
            or self.completion_behavior == CompletionBehavior.VIOLATE_MAX_ABS_VEL)


def _generate_flipped_profile(constraints: MotionProfileConstraints,
                              goal: MotionProfileGoal,
                              prev_state: MotionState) -> MotionProfile:
    profile = generate_profile(constraints, goal.flipped(), prev_state.flipped())
    return profile.flipped()


def generate_profile(constraints: MotionProfileConstraints,
                     goal: MotionProfileGoal,
                     prev_state: MotionState) -> MotionProfile:
    """
    Generate a profile from prev_state to goal.

    The start state is clamped to the constraints before planning, so a
    start velocity above max_abs_vel is not carried into the schedule.

    Args:
        constraints: Velocity/acceleration limits
        goal: Goal position and arrival speed
        prev_state: State to start from (time and position are kept)

    Returns:
        MotionProfile starting at the clamped prev_state
    """
    delta_pos = goal.pos - prev_state.pos
    if delta_pos < 0.0 or (delta_pos == 0.0 and prev_state.vel < 0.0):
        return _generate_flipped_profile(constraints, goal, prev_state)

    start_state = MotionState(
        t=prev_state.t,
        pos=prev_state.pos,
        vel=math.copysign(min(abs(prev_state.vel), constraints.max_abs_vel), prev_state.vel),
        acc=math.copysign(min(abs(prev_state.acc), constraints.max_abs_acc), prev_state.acc),
    )
    profile = MotionProfile(start_state)

    # Moving away from the goal: stop before anything else
    if start_state.vel < 0.0 and delta_pos > 0.0:
        stopping_time = abs(start_state.vel / constraints.max_abs_acc)
        profile.append_control(constraints.max_abs_acc, stopping_time)
        start_state = profile.end_state()
        delta_pos = goal.pos - start_state.pos

    min_abs_vel_at_goal_sqr = start_state.vel ** 2 - 2.0 * constraints.max_abs_acc * delta_pos
    min_abs_vel_at_goal = math.sqrt(abs(min_abs_vel_at_goal_sqr))
    max_abs_vel_at_goal = math.sqrt(start_state.vel ** 2 + 2.0 * constraints.max_abs_acc * delta_pos)
    goal_vel = goal.max_abs_vel
    max_acc = constraints.max_abs_acc

    if (min_abs_vel_at_goal_sqr > 0.0
            and min_abs_vel_at_goal > goal.max_abs_vel + goal.vel_tolerance):
        if goal.completion_behavior == CompletionBehavior.VIOLATE_MAX_ABS_VEL:
            goal_vel = min_abs_vel_at_goal
        elif goal.completion_behavior == CompletionBehavior.VIOLATE_MAX_ACCEL:
            if abs(delta_pos) < goal.pos_tolerance:
                # Velocity step at the goal
                profile.append_segment(MotionSegment(
                    replace(start_state, acc=0.0),
                    MotionState(start_state.t, start_state.pos, goal_vel, 0.0)))
                return profile
            max_acc = abs(goal_vel ** 2 - start_state.vel ** 2) / (2.0 * delta_pos)
        else:
            stopping_time = abs(start_state.vel / constraints.max_abs_acc)
            profile.append_control(-constraints.max_abs_acc, stopping_time)
            profile.append_profile(
                _generate_flipped_profile(constraints, goal, profile.end_state()))
            profile.consolidate()
            return profile

    goal_vel = min(goal_vel, max_abs_vel_at_goal)

    # Peak of the trapezoid (or triangle when the cruise limit is not reached)
    v_max = min(constraints.max_abs_vel,
                math.sqrt((start_state.vel ** 2 + goal_vel ** 2) / 2.0 + delta_pos * max_acc))

    if start_state.vel < v_max:
        accel_time = (v_max - start_state.vel) / max_acc
        profile.append_control(max_acc, accel_time)
        start_state = profile.end_state()

    distance_decel = max(0.0, (start_state.vel ** 2 - goal_vel ** 2) / (2.0 * max_acc))
    distance_cruise = max(0.0, goal.pos - start_state.pos - distance_decel)
    if distance_cruise > 0.0 and start_state.vel > 0.0:
        cruise_time = distance_cruise / start_state.vel
        profile.append_control(0.0, cruise_time)
        start_state = profile.end_state()

    if distance_decel > 0.0:
        decel_time = (start_state.vel - goal_vel) / max_acc
        profile.append_control(-max_acc, decel_time)

    profile.consolidate()
    return profile
