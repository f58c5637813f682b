"""
Motion profiles along a single path segment.

Components:
    motion_state      - MotionState kinematic snapshot
    motion_profile    - MotionProfile / MotionSegment schedules
    profile_generator - Trapezoidal profile synthesis under limits
"""

from .motion_state import MotionState, ZERO_STATE, epsilon_equals
from .motion_profile import MotionProfile, MotionSegment
from .profile_generator import (
    CompletionBehavior,
    MotionProfileConstraints,
    MotionProfileGoal,
    generate_profile,
)

__all__ = [
    'MotionState',
    'ZERO_STATE',
    'epsilon_equals',
    'MotionProfile',
    'MotionSegment',
    'CompletionBehavior',
    'MotionProfileConstraints',
    'MotionProfileGoal',
    'generate_profile',
]
