"""
Field management for profile types.

Adds, changes and removes the custom fields (ProfileFieldConfig) of a profile
type. Removing a field also clears its column on every profile of the type, so
a later field reusing the column starts out empty.
"""
import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from core.dff import DFFService
from profiles.dtos import ProfileFieldCreateDTO, ProfileFieldUpdateDTO
from profiles.models import Profile, ProfileFieldConfig

logger = logging.getLogger(__name__)


class ProfileFieldService:
    """Service for ProfileFieldConfig business logic"""

    @staticmethod
    def list_fields(profile_type, include_inactive=False):
        queryset = ProfileFieldConfig.objects.filter(profile_type=profile_type)
        if not include_inactive:
            queryset = queryset.filter(is_active=True)
        return queryset.order_by('sequence', 'field_name')

    @staticmethod
    def get_field(profile_type, field_name):
        return ProfileFieldConfig.objects.get(profile_type=profile_type, field_name=field_name)

    @staticmethod
    @transaction.atomic
    def add_field(profile_type, dto: ProfileFieldCreateDTO) -> ProfileFieldConfig:
        """
        Add a custom field to a profile type.

        When no column is given the first free column of the data type is used.

        Raises:
            ValidationError: duplicate field name, no free column, bad settings
        """
        if ProfileFieldConfig.objects.filter(profile_type=profile_type, field_name=dto.field_name).exists():
            raise ValidationError({'field_name': f"A field named '{dto.field_name}' already exists on this profile type."})

        column_name = dto.column_name or DFFService.next_free_column(
            ProfileFieldConfig, 'profile_type', profile_type, dto.data_type
        )

        config = ProfileFieldConfig(
            profile_type=profile_type,
            field_name=dto.field_name,
            field_label=dto.field_label,
            data_type=dto.data_type,
            column_name=column_name,
            help_text=dto.help_text or '',
            sequence=dto.sequence,
            required=dto.required,
            is_private=dto.is_private,
            default_value=dto.default_value or '',
            max_length=dto.max_length,
            min_value=dto.min_value,
            max_value=dto.max_value,
        )
        config.full_clean()
        config.save()

        # A reused column may still hold values of a removed field
        ProfileFieldService._clear_column(profile_type, config)

        logger.info(f"Field {config.field_name} ({config.column_name}) added to profile type {profile_type.code}")
        return config

    @staticmethod
    @transaction.atomic
    def update_field(config: ProfileFieldConfig, dto: ProfileFieldUpdateDTO) -> ProfileFieldConfig:
        """Change field settings. Name, type and column are fixed once created."""
        for attr in (
            'field_label', 'help_text', 'sequence', 'required', 'is_private',
            'is_active', 'default_value', 'max_length', 'min_value', 'max_value',
        ):
            value = getattr(dto, attr)
            if value is not None:
                setattr(config, attr, value)

        config.full_clean()
        config.save()
        logger.info(f"Field {config.field_name} of profile type {config.profile_type.code} updated")
        return config

    @staticmethod
    @transaction.atomic
    def delete_field(config: ProfileFieldConfig) -> None:
        profile_type = config.profile_type
        ProfileFieldService._clear_column(profile_type, config)
        field_name = config.field_name
        config.delete()
        logger.info(f"Field {field_name} removed from profile type {profile_type.code}")

    @staticmethod
    def _clear_column(profile_type, config):
        Profile.objects.filter(profile_type=profile_type).update(
            **{config.column_name: config.empty_value()}
        )
