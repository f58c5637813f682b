"""
Planar geometry used by path construction.

Components:
    translation - Translation2d point/vector and line intersection
"""

from .translation import Translation2d, intersect_rays

__all__ = [
    'Translation2d',
    'intersect_rays',
]
