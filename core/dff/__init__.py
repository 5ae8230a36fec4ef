"""
DFF (Descriptive Flexfield) - Core Infrastructure

Reusable pattern for business-configurable custom fields.

Exports:
    - DFFMixin: Adds the physical DFF columns
    - DFFConfigBase: Abstract base for DFF configuration models
    - DFFService: Generic service for DFF read/write with validation

Usage:
    from core.dff import DFFMixin, DFFConfigBase, DFFService

    class Profile(DFFMixin, models.Model):
        profile_type = models.ForeignKey(ProfileType, on_delete=models.PROTECT)

    class ProfileFieldConfig(DFFConfigBase):
        profile_type = models.ForeignKey(ProfileType, on_delete=models.CASCADE)

    DFFService.set_dff_data(profile, ProfileFieldConfig, {'secret': 'x'},
                            'profile_type', profile.profile_type)
"""

from .models import DFFMixin, DFFConfigBase, dff_columns
from .services import DFFService

__all__ = ['DFFMixin', 'DFFConfigBase', 'DFFService', 'dff_columns']
