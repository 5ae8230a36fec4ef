"""
Permission decorators for function-based views.
"""
from functools import wraps

from rest_framework import status
from rest_framework.response import Response

from core.permissions.services import user_can_perform


def _authentication_required():
    return Response(
        {'error': 'Authentication required'},
        status=status.HTTP_401_UNAUTHORIZED
    )


def require_permission(permission_code):
    """
    Decorator to check a permission code for function-based views.

    Place it below @api_view so request.user is already authenticated:

        @api_view(['GET', 'POST'])
        @require_permission('administer profile types')
        def profile_type_list(request):
            ...
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return _authentication_required()

            allowed, reason = user_can_perform(request.user, permission_code)
            if not allowed:
                return Response(
                    {
                        'error': 'Permission denied',
                        'detail': reason,
                        'required_permission': permission_code
                    },
                    status=status.HTTP_403_FORBIDDEN
                )

            return view_func(request, *args, **kwargs)

        wrapper.permission_code = permission_code
        return wrapper
    return decorator


def require_any_permission(*permission_codes):
    """
    Decorator that passes when the user holds ANY of the codes (OR logic).

        @api_view(['GET'])
        @require_any_permission('administer profiles', 'bypass profile access')
        def profile_overview(request):
            ...
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return _authentication_required()

            reasons = []
            for code in permission_codes:
                allowed, reason = user_can_perform(request.user, code)
                if allowed:
                    return view_func(request, *args, **kwargs)
                reasons.append(f"{code}: {reason}")

            return Response(
                {
                    'error': 'Permission denied',
                    'detail': 'You need at least one of the following permissions',
                    'required_permissions': list(permission_codes),
                    'reasons': reasons
                },
                status=status.HTTP_403_FORBIDDEN
            )
        return wrapper
    return decorator
