"""
Custom field configuration per profile type.

Maps a logical field (e.g. 'secret') onto one of the physical DFF columns of
Profile. The same physical column can hold different fields for different
profile types.
"""

from django.db import models

from core.dff import DFFConfigBase


class ProfileFieldConfig(DFFConfigBase):
    """DFF configuration for ProfileType, with field privacy."""

    profile_type = models.ForeignKey(
        'ProfileType',
        on_delete=models.CASCADE,
        related_name='fields',
        help_text="Which profile type this field applies to"
    )
    is_private = models.BooleanField(
        default=False,
        help_text="Only the profile owner and users bypassing profile access see the value"
    )

    class Meta(DFFConfigBase.Meta):
        db_table = 'profile_field_config'
        unique_together = [
            ('profile_type', 'field_name'),
            ('profile_type', 'column_name'),
        ]
        indexes = [
            models.Index(fields=['profile_type', 'is_active']),
        ]

    def __str__(self):
        return f"{self.profile_type.code}: {self.field_label}"

    @classmethod
    def get_active_fields_for_type(cls, profile_type):
        return cls.objects.filter(
            profile_type=profile_type,
            is_active=True
        ).order_by('sequence', 'field_name')
