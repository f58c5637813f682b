"""
Pursuit Path - Navigation Module

Checks compiled paths and tracks progress along them.

Components:
    speed_validator - Plans segment speeds and validates profiles
    path_tracker    - Closest point / lookahead target and marker tracking
"""

from .speed_validator import SpeedPlan, SpeedValidator, ValidationResult, plan_speeds
from .path_tracker import LookaheadConfig, PathTracker, TargetPointReport

__all__ = [
    'SpeedPlan',
    'SpeedValidator',
    'ValidationResult',
    'plan_speeds',
    'LookaheadConfig',
    'PathTracker',
    'TargetPointReport',
]
