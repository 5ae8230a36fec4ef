"""
Profile Serializers
"""

from .profile_type_serializers import ProfileTypeSerializer, ProfileTypeSaveSerializer
from .profile_field_serializers import (
    ProfileFieldSerializer,
    ProfileFieldCreateSerializer,
    ProfileFieldUpdateSerializer,
)
from .profile_serializers import (
    ProfileOverviewSerializer,
    ProfileSaveSerializer,
    StageDeleteSerializer,
    DeleteConfirmSerializer,
)
from .registration_serializers import RegistrationTypeSerializer, ProfileRegistrationSerializer

__all__ = [
    'ProfileTypeSerializer',
    'ProfileTypeSaveSerializer',
    'ProfileFieldSerializer',
    'ProfileFieldCreateSerializer',
    'ProfileFieldUpdateSerializer',
    'ProfileOverviewSerializer',
    'ProfileSaveSerializer',
    'StageDeleteSerializer',
    'DeleteConfirmSerializer',
    'RegistrationTypeSerializer',
    'ProfileRegistrationSerializer',
]
