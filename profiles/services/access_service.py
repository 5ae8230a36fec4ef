"""
Access rules for profiles and their fields.

Entity access:
    - 'bypass profile access' allows every operation
    - '<op> any <type> profile' allows the operation on anyone's profile
    - '<op> own <type> profile' allows it on the account's own profiles

Field access:
    - fields that are not private are visible whenever the profile is
    - private fields are visible to the owner and to 'bypass profile access'
"""

from core.permissions.services import user_has_permission

BYPASS_PERMISSION = 'bypass profile access'
ACCESS_USER_PROFILES = 'access user profiles'


class ProfileAccessService:
    """Answers 'may this account do X' questions for profiles."""

    @staticmethod
    def check_type_access(user, operation, profile_type, owner):
        """
        Access check for an operation on ``owner``'s profiles of ``profile_type``.

        Used both for existing profiles and for creating a new one.
        """
        if user is None or not user.is_authenticated:
            return False
        if user_has_permission(user, BYPASS_PERMISSION):
            return True
        if user_has_permission(user, profile_type.permission_code(operation, 'any')):
            return True
        is_own = owner is not None and owner.pk == user.pk
        return is_own and user_has_permission(user, profile_type.permission_code(operation, 'own'))

    @staticmethod
    def check_access(user, operation, profile):
        return ProfileAccessService.check_type_access(
            user, operation, profile.profile_type, profile.owner
        )

    @staticmethod
    def can_view_user_profiles(user, owner):
        """The per-user profiles page: own page, or 'access user profiles'."""
        if user is None or not user.is_authenticated:
            return False
        if owner.pk == user.pk:
            return True
        return (
            user_has_permission(user, ACCESS_USER_PROFILES) or
            user_has_permission(user, BYPASS_PERMISSION)
        )

    @staticmethod
    def can_view_field(user, profile, field_config):
        if not field_config.is_private:
            return True
        if profile.is_owned_by(user):
            return True
        return user_has_permission(user, BYPASS_PERMISSION)

    @staticmethod
    def visible_fields(user, profile, field_configs):
        """Subset of ``field_configs`` whose values ``user`` may see on ``profile``."""
        return [
            config for config in field_configs
            if ProfileAccessService.can_view_field(user, profile, config)
        ]
