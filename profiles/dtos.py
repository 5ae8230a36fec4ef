"""
Data Transfer Objects for the Profiles domain.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional


@dataclass
class ProfileTypeSaveDTO:
    """DTO for creating or updating a profile type"""
    code: str
    label: str
    weight: int = 0
    registration: bool = False
    multiple: bool = False


@dataclass
class ProfileFieldCreateDTO:
    """DTO for adding a custom field to a profile type"""
    field_name: str
    field_label: str
    data_type: str = 'char'
    column_name: Optional[str] = None
    help_text: str = ''
    sequence: int = 0
    required: bool = False
    is_private: bool = False
    default_value: str = ''
    max_length: Optional[int] = None
    min_value: Optional[Decimal] = None
    max_value: Optional[Decimal] = None


@dataclass
class ProfileFieldUpdateDTO:
    """DTO for changing field settings; None means unchanged"""
    field_label: Optional[str] = None
    help_text: Optional[str] = None
    sequence: Optional[int] = None
    required: Optional[bool] = None
    is_private: Optional[bool] = None
    is_active: Optional[bool] = None
    default_value: Optional[str] = None
    max_length: Optional[int] = None
    min_value: Optional[Decimal] = None
    max_value: Optional[Decimal] = None


@dataclass
class ProfileSaveDTO:
    """DTO for creating or updating a profile's field values"""
    fields: Dict[str, Any] = field(default_factory=dict)
    is_default: Optional[bool] = None


@dataclass
class RegistrationDTO:
    """DTO for registering a user together with their registration profiles"""
    profiles: Dict[str, Dict[str, Any]] = field(default_factory=dict)


@dataclass
class ProfileFilterDTO:
    """Filters for the profile overview"""
    profile_type: Optional[str] = None
    owner_id: Optional[int] = None
    ids: List[int] = field(default_factory=list)
