"""
Profile Services
"""

from .access_service import ProfileAccessService
from .profile_type_service import ProfileTypeService, Redirect, SaveResult
from .profile_field_service import ProfileFieldService
from .profile_service import ProfileService, ProfileStorage, RegistrationService
from .delete_multiple_service import (
    DeleteConfirmation,
    DeleteMultipleWorkflow,
    DeleteOutcome,
    ProfileDeletionError,
    stage_for_deletion,
)
from .local_task_service import derive_edit_tab, get_derivative_definitions, tokenize_path

__all__ = [
    'ProfileAccessService',
    'ProfileTypeService',
    'Redirect',
    'SaveResult',
    'ProfileFieldService',
    'ProfileService',
    'ProfileStorage',
    'RegistrationService',
    'DeleteConfirmation',
    'DeleteMultipleWorkflow',
    'DeleteOutcome',
    'ProfileDeletionError',
    'stage_for_deletion',
    'derive_edit_tab',
    'get_derivative_definitions',
    'tokenize_path',
]
