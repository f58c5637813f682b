"""
Pursuit Path - waypoint-to-path compiler for pure pursuit following

Submodules:
    geometry   - Planar points/vectors and line intersection
    motion     - Motion states, profiles and trapezoidal profile generation
    planning   - Waypoints, line/arc segments, paths and the path builder
    navigation - Speed validation and progress/lookahead tracking
"""

__version__ = '1.0.0'
