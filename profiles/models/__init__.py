"""
Profile Models
"""

from .profile_type import ProfileType, BUNDLE_MAX_LENGTH, PROFILE_OPERATIONS
from .profile_field_config import ProfileFieldConfig
from .profile import Profile

__all__ = [
    'ProfileType',
    'ProfileFieldConfig',
    'Profile',
    'BUNDLE_MAX_LENGTH',
    'PROFILE_OPERATIONS',
]
