import logging
from dataclasses import dataclass, field
from typing import Optional

from django.core.exceptions import ValidationError
from django.db import transaction
from django.urls import reverse

from core.permissions.services import ensure_permissions, remove_permissions
from profiles.dtos import ProfileTypeSaveDTO
from profiles.models import BUNDLE_MAX_LENGTH, ProfileType

logger = logging.getLogger(__name__)

SUBMIT_ACTION = 'submit'
SAVE_CONTINUE_ACTION = 'save_continue'


@dataclass
class Redirect:
    """Where the client should go next: a URL name plus its kwargs."""
    route: str
    kwargs: dict = field(default_factory=dict)

    @property
    def url(self):
        return reverse(self.route, kwargs=self.kwargs or None)

    def as_dict(self):
        return {'route': self.route, 'parameters': self.kwargs, 'url': self.url}


@dataclass
class SaveResult:
    profile_type: ProfileType
    created: bool
    message: str
    redirect: Redirect


class ProfileTypeService:
    """Service for ProfileType business logic"""

    @staticmethod
    def list_profile_types(filters=None):
        """
        List profile types.

        Args:
            filters (dict, optional):
                - registration: only types shown on registration (bool)
                - multiple: filter by multiplicity (bool)
                - code / label / search: standard search params

        Returns:
            QuerySet ordered by weight, label
        """
        queryset = ProfileType.objects.all()

        if filters:
            queryset = queryset.filter_by_search_params(filters)
            if filters.get('registration') is not None:
                queryset = queryset.filter(registration=filters['registration'])
            if filters.get('multiple') is not None:
                queryset = queryset.filter(multiple=filters['multiple'])

        return queryset.order_by('weight', 'label')

    @staticmethod
    def get_profile_type(code):
        """
        Raises:
            ProfileType.DoesNotExist
        """
        return ProfileType.objects.get(code=code)

    @staticmethod
    def build_form(profile_type: Optional[ProfileType] = None, field_ui_enabled: bool = False):
        """
        Form descriptor for adding (profile_type=None) or editing a type.

        The "Save and manage fields" action is offered only for new types and
        only when the field management UI is available.
        """
        is_new = profile_type is None or profile_type.pk is None
        type_ = profile_type or ProfileType()

        form = {
            'form_id': 'profile_type_add_form' if is_new else 'profile_type_edit_form',
            'fields': {
                'label': {
                    'type': 'textfield',
                    'title': 'Label',
                    'default_value': type_.label,
                    'description': 'The human-readable name of this profile type.',
                    'required': True,
                    'size': 30,
                },
                'code': {
                    'type': 'machine_name',
                    'default_value': type_.code,
                    'maxlength': BUNDLE_MAX_LENGTH,
                    'machine_name': {
                        'source': 'label',
                        'exists_url': f"{reverse('profiles:overview_types')}?code=",
                    },
                    'disabled': not is_new,
                },
                'registration': {
                    'type': 'checkbox',
                    'title': 'Include in user registration form',
                    'default_value': type_.registration,
                },
                'multiple': {
                    'type': 'checkbox',
                    'title': 'Allow multiple profiles',
                    'default_value': type_.multiple,
                },
            },
            'actions': {
                SUBMIT_ACTION: {'type': 'submit', 'value': 'Save'},
            },
        }

        if field_ui_enabled and is_new:
            form['actions'][SAVE_CONTINUE_ACTION] = {
                'type': 'submit',
                'value': 'Save and manage fields',
            }

        if not is_new:
            form['actions']['delete'] = {
                'type': 'link',
                'title': 'Delete',
                'url': ProfileTypeService.delete_redirect(type_).url,
            }

        return form

    @staticmethod
    def code_exists(code):
        return ProfileType.objects.filter(code=code).exists()

    @staticmethod
    @transaction.atomic
    def save(user, dto: ProfileTypeSaveDTO, instance: Optional[ProfileType] = None,
             action: str = SUBMIT_ACTION, field_ui_enabled: bool = False) -> SaveResult:
        """
        Create (instance=None) or update a profile type.

        Returns:
            SaveResult with the user-facing message and where to go next:
            the types overview, or the field management page when a new type
            was saved with "Save and manage fields".
        """
        created = instance is None

        if created:
            if ProfileTypeService.code_exists(dto.code):
                raise ValidationError({'code': "The machine-readable name is already in use. It must be unique."})
            profile_type = ProfileType(code=dto.code)
        else:
            profile_type = instance
            if dto.code and dto.code != instance.code:
                raise ValidationError({'code': "The machine-readable name cannot be changed."})

        profile_type.label = dto.label
        profile_type.weight = dto.weight
        profile_type.registration = dto.registration
        profile_type.multiple = dto.multiple
        profile_type.stamp(user)
        profile_type.full_clean()
        profile_type.save()

        if created:
            ensure_permissions(profile_type.permission_codes(), module='profiles')
            message = f"{profile_type.label} profile type has been created."
            logger.info(f"Profile type {profile_type.code} created")
        else:
            message = f"{profile_type.label} profile type has been updated."
            logger.info(f"Profile type {profile_type.code} updated")

        if created and field_ui_enabled and action == SAVE_CONTINUE_ACTION:
            redirect = ProfileTypeService.field_ui_redirect(profile_type)
        else:
            redirect = Redirect('profiles:overview_types')

        return SaveResult(profile_type=profile_type, created=created, message=message, redirect=redirect)

    @staticmethod
    def field_ui_redirect(profile_type):
        return Redirect('profiles:field_overview', {'code': profile_type.code})

    @staticmethod
    def delete_redirect(profile_type):
        """The delete action of the edit form leads to the delete confirmation."""
        return Redirect('profiles:type_delete', {'code': profile_type.code})

    @staticmethod
    def delete_info(profile_type):
        count = profile_type.profiles.count()
        return {
            'question': f"Are you sure you want to delete the profile type {profile_type.label}?",
            'profile_count': count,
            'can_delete': count == 0,
            'cancel_url': reverse('profiles:overview_types'),
        }

    @staticmethod
    @transaction.atomic
    def delete_profile_type(user, profile_type):
        """
        Delete a profile type with its field configuration and permissions.

        Raises:
            ValidationError: while profiles of this type exist
        """
        count = profile_type.profiles.count()
        if count:
            raise ValidationError(
                f"{profile_type.label} is used by {count} profile(s) on your site. "
                f"You can not remove this profile type until you have removed all of the {profile_type.label} profiles."
            )

        label = profile_type.label
        codes = list(profile_type.permission_codes())
        profile_type.delete()
        remove_permissions(codes)
        logger.info(f"Profile type {label} deleted by user {getattr(user, 'pk', None)}")
        return f"The profile type {label} has been deleted."
