"""
Profile Service - Business Logic Layer

Creating, editing, listing and rendering profiles. Custom field values are
read and written through DFFService so type, length and required checks
apply the same way everywhere.
"""
import logging
from typing import Iterable, List, Optional

from django.core.exceptions import ValidationError
from django.db import transaction

from core.dff import DFFService
from core.user_accounts.models import CustomUser
from profiles.dtos import ProfileFilterDTO, ProfileSaveDTO, RegistrationDTO
from profiles.models import Profile, ProfileFieldConfig, ProfileType
from profiles.services.access_service import ProfileAccessService

logger = logging.getLogger(__name__)


class ProfileStorage:
    """Loading and deleting profiles by id, as used by bulk operations."""

    @staticmethod
    def load_multiple(ids: Iterable[int]) -> List[Profile]:
        """Profiles for ``ids`` in the given order; ids without a profile are dropped."""
        ids = list(ids)
        by_id = Profile.objects.select_related('profile_type', 'owner').in_bulk(ids)
        return [by_id[pk] for pk in ids if pk in by_id]

    @staticmethod
    @transaction.atomic
    def delete(profiles: Iterable[Profile]) -> int:
        """Delete all ``profiles`` or none of them. Returns the number of profiles removed."""
        ids = [profile.pk for profile in profiles]
        _, per_model = Profile.objects.filter(pk__in=ids).delete()
        return per_model.get(Profile._meta.label, 0)


class ProfileService:
    """Service for Profile business logic"""

    @staticmethod
    def list_profiles(filters: Optional[ProfileFilterDTO] = None):
        """Profiles for the administration overview."""
        queryset = Profile.objects.select_related('profile_type', 'owner')

        if filters:
            if filters.profile_type:
                queryset = queryset.filter(profile_type__code=filters.profile_type)
            if filters.owner_id:
                queryset = queryset.filter(owner_id=filters.owner_id)
            if filters.ids:
                queryset = queryset.filter(pk__in=filters.ids)

        return queryset.order_by('profile_type__weight', 'profile_type__label', 'id')

    @staticmethod
    def list_user_profiles(viewer, owner):
        """Profiles of ``owner`` that ``viewer`` may view."""
        profiles = Profile.objects.filter(owner=owner).select_related('profile_type', 'owner')
        return [
            profile for profile in profiles
            if ProfileAccessService.check_access(viewer, 'view', profile)
        ]

    @staticmethod
    def get_field_configs(profile_type):
        return DFFService.get_field_configs(ProfileFieldConfig, 'profile_type', profile_type)

    @staticmethod
    def get_profile_for_edit(owner, profile_type, profile_id=None) -> Profile:
        """
        Profile to show on an edit form.

        With ``profile_id`` the owner's profile of that type is returned. Without
        it, a type that allows a single profile returns the existing one if
        there is one; otherwise an unsaved profile prefilled with defaults.

        Raises:
            Profile.DoesNotExist: ``profile_id`` is not a profile of this owner and type
        """
        queryset = Profile.objects.filter(owner=owner, profile_type=profile_type)

        if profile_id is not None:
            return queryset.get(pk=profile_id)

        if not profile_type.multiple:
            existing = queryset.order_by('id').first()
            if existing is not None:
                return existing

        profile = Profile(owner=owner, profile_type=profile_type)
        DFFService.apply_defaults(profile, ProfileFieldConfig, 'profile_type', profile_type)
        return profile

    @staticmethod
    @transaction.atomic
    def create_profile(user, owner, profile_type: ProfileType, dto: ProfileSaveDTO) -> Profile:
        """
        Create a profile of ``profile_type`` for ``owner``.

        Configured defaults fill fields missing from ``dto.fields``. The first
        profile an owner gets of a type becomes the default one.

        Raises:
            ValidationError: single-profile type already used, or invalid field values
        """
        profile = Profile(owner=owner, profile_type=profile_type)
        ProfileService._check_field_access(user, profile, dto.fields)

        data = {
            config.field_name: config.default_value
            for config in ProfileService.get_field_configs(profile_type)
            if config.default_value
        }
        data.update(dto.fields)
        DFFService.set_dff_data(profile, ProfileFieldConfig, data, 'profile_type', profile_type)

        has_default = Profile.objects.filter(owner=owner, profile_type=profile_type, is_default=True).exists()
        profile.is_default = bool(dto.is_default) or not has_default

        profile.stamp(user)
        profile.full_clean()
        profile.save()

        if profile.is_default:
            ProfileService._unset_other_defaults(profile)

        logger.info(f"Profile {profile.pk} ({profile_type.code}) created for user {owner.pk}")
        return profile

    @staticmethod
    @transaction.atomic
    def update_profile(user, profile: Profile, dto: ProfileSaveDTO) -> Profile:
        """Update the submitted field values only."""
        ProfileService._check_field_access(user, profile, dto.fields)
        DFFService.set_dff_data(
            profile, ProfileFieldConfig, dto.fields, 'profile_type', profile.profile_type, partial=True
        )

        if dto.is_default:
            profile.is_default = True

        profile.stamp(user)
        profile.full_clean()
        profile.save()

        if profile.is_default:
            ProfileService._unset_other_defaults(profile)

        logger.info(f"Profile {profile.pk} ({profile.profile_type.code}) updated")
        return profile

    @staticmethod
    def render_profile(viewer, profile: Profile) -> dict:
        """
        Profile as ``viewer`` sees it.

        Private fields the viewer may not see are left out entirely.
        """
        configs = list(ProfileService.get_field_configs(profile.profile_type))
        visible = ProfileAccessService.visible_fields(viewer, profile, configs)
        values = DFFService.get_dff_data(profile, ProfileFieldConfig, configs=visible)

        return {
            'id': profile.pk,
            'label': profile.label(),
            'type': profile.profile_type.code,
            'type_label': profile.profile_type.label,
            'owner_id': profile.owner_id,
            'is_default': profile.is_default,
            'fields': [
                {
                    'name': config.field_name,
                    'label': config.field_label,
                    'data_type': config.data_type,
                    'value': values[config.field_name],
                }
                for config in visible
            ],
        }

    @staticmethod
    def _check_field_access(user, profile, values):
        """Private fields can only be written by those who may see them."""
        configs = ProfileService.get_field_configs(profile.profile_type).filter(field_name__in=list(values))
        denied = {
            config.field_name: "You do not have access to this field."
            for config in configs
            if not ProfileAccessService.can_view_field(user, profile, config)
        }
        if denied:
            raise ValidationError(denied)

    @staticmethod
    def _unset_other_defaults(profile):
        Profile.objects.filter(
            owner_id=profile.owner_id,
            profile_type_id=profile.profile_type_id,
            is_default=True
        ).exclude(pk=profile.pk).update(is_default=False)


class RegistrationService:
    """Profiles filled in as part of user registration."""

    @staticmethod
    def registration_types():
        return ProfileType.objects.for_registration().prefetch_related('fields').order_by('weight', 'label')

    @staticmethod
    @transaction.atomic
    def register(user_data: dict, dto: RegistrationDTO):
        """
        Create the account and one profile per registration type.

        A registration type is skipped when nothing was submitted for it and
        none of its fields is required.

        Args:
            user_data: validated email, name, phone_number, password

        Returns:
            (user, [profiles])

        Raises:
            ValidationError: unknown or non-registration types, invalid field
                values (keys are '<type>.<field>')
        """
        types = {profile_type.code: profile_type for profile_type in RegistrationService.registration_types()}

        unknown = sorted(set(dto.profiles) - set(types))
        if unknown:
            raise ValidationError({
                'profiles': f"Not available on registration: {', '.join(unknown)}"
            })

        user = CustomUser.objects.create_user(
            email=user_data['email'],
            name=user_data['name'],
            phone_number=user_data.get('phone_number', ''),
            password=user_data['password'],
            user_type_name='user'
        )

        profiles = []
        errors = {}
        for code, profile_type in types.items():
            submitted = dto.profiles.get(code)
            if submitted is None:
                requires_input = any(
                    config.required and not config.default_value
                    for config in ProfileService.get_field_configs(profile_type)
                )
                if not requires_input:
                    continue
                submitted = {}

            try:
                profiles.append(
                    ProfileService.create_profile(user, user, profile_type, ProfileSaveDTO(fields=submitted))
                )
            except ValidationError as e:
                for field_name, messages in e.message_dict.items():
                    errors[f"{code}.{field_name}"] = messages

        if errors:
            raise ValidationError(errors)

        logger.info(f"User {user.pk} registered with {len(profiles)} profile(s)")
        return user, profiles
