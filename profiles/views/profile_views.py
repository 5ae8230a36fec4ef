from django.core.exceptions import ValidationError
from django.http import HttpResponseRedirect
from django.shortcuts import get_object_or_404
from django.urls import reverse
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.permissions.decorators import require_permission
from core.user_accounts.models import CustomUser
from profile_project.pagination import auto_paginate
from profile_project.response_formatter import error_response, success_response, validation_error_response
from profiles.dtos import ProfileFilterDTO
from profiles.models import Profile, ProfileType
from profiles.serializers import (
    ProfileFieldSerializer,
    ProfileOverviewSerializer,
    ProfileSaveSerializer,
    StageDeleteSerializer,
)
from profiles.services.access_service import ProfileAccessService
from profiles.services.delete_multiple_service import CONFIRM_ROUTE, stage_for_deletion
from profiles.services.local_task_service import get_derivative_definitions
from profiles.services.profile_service import ProfileService, ProfileStorage

ADMINISTER_PROFILES = 'administer profiles'


def _forbidden(message="You are not allowed to access this profile."):
    return error_response(message, status_code=status.HTTP_403_FORBIDDEN)


def _edit_payload(request, profile):
    visible = ProfileAccessService.visible_fields(
        request.user, profile, ProfileService.get_field_configs(profile.profile_type)
    )
    return {
        'profile': ProfileService.render_profile(request.user, profile),
        'form_fields': ProfileFieldSerializer(visible, many=True).data,
    }


@api_view(['GET'])
@require_permission(ADMINISTER_PROFILES)
@auto_paginate
def profile_overview(request):
    """
    GET /admin/config/people/profiles/
    - Filters: type, owner
    """
    owner = request.query_params.get('owner')
    filters = ProfileFilterDTO(
        profile_type=request.query_params.get('type') or None,
        owner_id=int(owner) if owner and owner.isdigit() else None,
    )
    profiles = ProfileService.list_profiles(filters)
    return Response(ProfileOverviewSerializer(profiles, many=True).data, status=status.HTTP_200_OK)


@api_view(['POST'])
@require_permission(ADMINISTER_PROFILES)
def profile_stage_delete(request):
    """
    POST /admin/config/people/profiles/actions/delete/
    - ids: profiles selected on the overview

    Stages the selection and sends the user to the confirmation page.
    """
    serializer = StageDeleteSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    profiles = ProfileStorage.load_multiple(serializer.validated_data['ids'])
    stage_for_deletion(request.user.pk, profiles)
    return HttpResponseRedirect(reverse(CONFIRM_ROUTE))


@api_view(['GET'])
def user_profiles(request, uid):
    """GET /user/<uid>/ - the profiles of a user the viewer may see"""
    owner = get_object_or_404(CustomUser, pk=uid)
    if not ProfileAccessService.can_view_user_profiles(request.user, owner):
        if not request.user.is_authenticated:
            return error_response("Authentication required", status_code=status.HTTP_401_UNAUTHORIZED)
        return _forbidden("You are not allowed to view the profiles of this user.")

    profiles = ProfileService.list_user_profiles(request.user, owner)
    return success_response(data={
        'user': {'id': owner.pk, 'name': owner.get_display_name()},
        'profiles': [ProfileService.render_profile(request.user, profile) for profile in profiles],
    })


@api_view(['GET', 'PUT', 'POST'])
def user_profile_type(request, uid, code):
    """
    Profiles of one type for a user.

    GET  - edit form: the single profile (or a prefilled new one), plus the
           list of existing profiles for types allowing several
    PUT  - save the single profile, creating it when missing
    POST - add another profile
    """
    owner = get_object_or_404(CustomUser, pk=uid)
    profile_type = get_object_or_404(ProfileType, code=code)

    if not ProfileAccessService.check_type_access(request.user, 'edit', profile_type, owner):
        return _forbidden()

    if request.method == 'GET':
        profile = ProfileService.get_profile_for_edit(owner, profile_type)
        payload = _edit_payload(request, profile)
        if profile_type.multiple:
            payload['profiles'] = [
                ProfileService.render_profile(request.user, existing)
                for existing in Profile.objects.filter(owner=owner, profile_type=profile_type)
            ]
        return success_response(data=payload)

    serializer = ProfileSaveSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    dto = serializer.to_dto()

    try:
        if request.method == 'PUT':
            profile = ProfileService.get_profile_for_edit(owner, profile_type)
            if profile.pk is not None:
                profile = ProfileService.update_profile(request.user, profile, dto)
                return success_response(
                    data=ProfileService.render_profile(request.user, profile),
                    message="The profile has been saved."
                )
        profile = ProfileService.create_profile(request.user, owner, profile_type, dto)
    except ValidationError as e:
        return validation_error_response(e)

    return success_response(
        data=ProfileService.render_profile(request.user, profile),
        message="The profile has been saved.",
        status_code=status.HTTP_201_CREATED
    )


@api_view(['GET', 'PUT'])
def user_profile_detail(request, uid, code, profile_id):
    """
    One profile of a user.

    GET also returns the local tasks (tabs) for the current path.
    """
    owner = get_object_or_404(CustomUser, pk=uid)
    profile_type = get_object_or_404(ProfileType, code=code)
    try:
        profile = ProfileService.get_profile_for_edit(owner, profile_type, profile_id)
    except Profile.DoesNotExist:
        return error_response("Profile not found.", status_code=status.HTTP_404_NOT_FOUND)

    if not ProfileAccessService.check_access(request.user, 'edit', profile):
        return _forbidden()

    if request.method == 'GET':
        payload = _edit_payload(request, profile)
        payload['local_tasks'] = get_derivative_definitions(request.path)
        return success_response(data=payload)

    serializer = ProfileSaveSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        profile = ProfileService.update_profile(request.user, profile, serializer.to_dto())
    except ValidationError as e:
        return validation_error_response(e)

    return success_response(
        data=ProfileService.render_profile(request.user, profile),
        message="The profile has been saved."
    )


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def local_tasks(request):
    """GET /local-tasks/?path=/user/1/edit/personal/3 - tabs derived for a path"""
    path = request.query_params.get('path', '')
    return success_response(data={'path': path, 'tabs': get_derivative_definitions(path)})
