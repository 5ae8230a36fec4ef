"""
Service layer for permission checking.
Contains business logic for role-based access control.
"""
from typing import Dict, Iterable, List, Set, Tuple

from django.db import transaction

from .models import Permission, Role, RolePermission, UserRole


def get_user_roles(user) -> List[Role]:
    """All roles assigned to an authenticated user."""
    if not user or not user.is_authenticated:
        return []
    return list(Role.objects.filter(user_roles__user=user).distinct())


def get_user_permission_codes(user) -> Set[str]:
    """
    Set of permission codes granted to the user through their roles.

    Cached on the user instance for the duration of the request.
    """
    if not user or not user.is_authenticated:
        return set()

    cached = getattr(user, '_permission_codes_cache', None)
    if cached is not None:
        return cached

    codes = set(
        Permission.objects.filter(role_permissions__role__user_roles__user=user)
        .values_list('code', flat=True)
    )
    user._permission_codes_cache = codes
    return codes


def clear_permission_cache(user):
    if hasattr(user, '_permission_codes_cache'):
        del user._permission_codes_cache


def user_can_perform(user, permission_code: str) -> Tuple[bool, str]:
    """
    Check if a user holds a permission.

    Returns:
        Tuple of (allowed: bool, reason: str)

    Permission Logic (priority order):
    1. Anonymous users are denied
    2. Admin bypass (admin and super_admin user types)
    3. Role grants (UserRole -> Role -> RolePermission -> Permission)
    4. Default: denied
    """
    if not user or not user.is_authenticated:
        return False, "Authentication required"

    if hasattr(user, 'is_admin') and user.is_admin():
        return True, "Permission granted (Admin)"

    if permission_code in get_user_permission_codes(user):
        return True, "Permission granted"

    roles = get_user_roles(user)
    if not roles:
        return False, "User has no roles assigned"

    role_names = ', '.join(r.name for r in roles)
    return False, f"Your roles ({role_names}) do not grant '{permission_code}'"


def user_has_permission(user, permission_code: str) -> bool:
    allowed, _ = user_can_perform(user, permission_code)
    return allowed


def ensure_permissions(permissions: Dict[str, str], module: str = '') -> List[Permission]:
    """
    Register permission codes, creating the ones that do not exist yet.

    Args:
        permissions: {code: description}
        module: owning module name

    Returns:
        List of Permission objects in the order given
    """
    result = []
    for code, description in permissions.items():
        permission, created = Permission.objects.get_or_create(
            code=code,
            defaults={'description': description, 'module': module}
        )
        result.append(permission)
    return result


def remove_permissions(codes: Iterable[str]) -> int:
    """Delete permission codes (and their role grants). Returns rows removed."""
    deleted, _ = Permission.objects.filter(code__in=list(codes)).delete()
    return deleted


@transaction.atomic
def grant_permissions(role: Role, codes: Iterable[str]) -> Role:
    """Grant permission codes to a role, registering unknown codes on the fly."""
    for code in codes:
        permission, _ = Permission.objects.get_or_create(code=code)
        RolePermission.objects.get_or_create(role=role, permission=permission)
    return role


@transaction.atomic
def create_role_with_permissions(name: str, codes: Iterable[str], description: str = '') -> Role:
    role, _ = Role.objects.get_or_create(name=name, defaults={'description': description})
    return grant_permissions(role, codes)


def assign_role(user, role: Role) -> UserRole:
    user_role, _ = UserRole.objects.get_or_create(user=user, role=role)
    clear_permission_cache(user)
    return user_role


def sync_app_permissions(app_configs=None) -> int:
    """
    Register the static permission codes declared by installed apps.

    An AppConfig declares them as a ``permissions`` dict of {code: description}.

    Returns:
        Number of codes declared
    """
    from django.apps import apps

    total = 0
    for config in app_configs or apps.get_app_configs():
        declared = getattr(config, 'permissions', None)
        if declared:
            ensure_permissions(declared, module=config.label)
            total += len(declared)
    return total
