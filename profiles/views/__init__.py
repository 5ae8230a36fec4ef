"""
Profile Views
"""

from .profile_type_views import (
    profile_type_list,
    profile_type_add_form,
    profile_type_detail,
    profile_type_delete,
)
from .field_views import field_list, field_detail
from .profile_views import (
    profile_overview,
    profile_stage_delete,
    user_profiles,
    user_profile_type,
    user_profile_detail,
    local_tasks,
)
from .delete_multiple_views import profile_multiple_delete_confirm
from .registration_views import registration_form, register
