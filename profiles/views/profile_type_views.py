from django.conf import settings
from django.contrib import messages
from django.core.exceptions import ValidationError
from django.http import HttpResponseRedirect
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.permissions.decorators import require_permission
from profile_project.pagination import auto_paginate
from profile_project.response_formatter import success_response, validation_error_response
from profiles.models import ProfileType
from profiles.serializers import ProfileTypeSaveSerializer, ProfileTypeSerializer
from profiles.services.profile_type_service import ProfileTypeService, Redirect

ADMINISTER_TYPES = 'administer profile types'


def _field_ui_enabled():
    return getattr(settings, 'PROFILE_FIELD_UI_ENABLED', False)


def _save_response(request, serializer, instance=None):
    try:
        result = ProfileTypeService.save(
            request.user,
            serializer.to_dto(instance),
            instance=instance,
            action=serializer.validated_data.get('action'),
            field_ui_enabled=_field_ui_enabled()
        )
    except ValidationError as e:
        return validation_error_response(e)

    messages.success(request, result.message)
    return success_response(
        data={
            'profile_type': ProfileTypeSerializer(result.profile_type).data,
            'redirect': result.redirect.as_dict(),
        },
        message=result.message,
        status_code=status.HTTP_201_CREATED if result.created else status.HTTP_200_OK
    )


@api_view(['GET', 'POST'])
@require_permission(ADMINISTER_TYPES)
@auto_paginate
def profile_type_list(request):
    """
    List profile types or create one.

    GET /admin/config/people/profiles/types/
    - Filters: label, search, registration, multiple
    - ?code=<machine name> answers whether the machine name is taken

    POST /admin/config/people/profiles/types/
    - label, code, registration, multiple, action ('submit' | 'save_continue')
    """
    if request.method == 'GET':
        code = request.query_params.get('code')
        if code is not None:
            return Response({'code': code, 'exists': ProfileTypeService.code_exists(code)})

        filters = {
            'label': request.query_params.get('label'),
            'search': request.query_params.get('search'),
        }
        for flag in ('registration', 'multiple'):
            value = request.query_params.get(flag)
            if value is not None:
                filters[flag] = value.lower() in ('1', 'true', 'yes')

        profile_types = ProfileTypeService.list_profile_types(filters)
        serializer = ProfileTypeSerializer(profile_types, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    serializer = ProfileTypeSaveSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    return _save_response(request, serializer)


@api_view(['GET'])
@require_permission(ADMINISTER_TYPES)
def profile_type_add_form(request):
    """GET /admin/config/people/profiles/types/add/ - form descriptor for a new type"""
    return success_response(data=ProfileTypeService.build_form(None, field_ui_enabled=_field_ui_enabled()))


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@require_permission(ADMINISTER_TYPES)
def profile_type_detail(request, code):
    """
    Edit form of a profile type.

    GET returns the form descriptor with the current values, PUT/PATCH saves.
    DELETE is the form's delete action and redirects to the delete confirmation.
    """
    profile_type = get_object_or_404(ProfileType, code=code)

    if request.method == 'GET':
        return success_response(data={
            'profile_type': ProfileTypeSerializer(profile_type).data,
            'form': ProfileTypeService.build_form(profile_type, field_ui_enabled=_field_ui_enabled()),
        })

    if request.method == 'DELETE':
        return HttpResponseRedirect(ProfileTypeService.delete_redirect(profile_type).url)

    serializer = ProfileTypeSaveSerializer(
        profile_type,
        data=request.data,
        partial=request.method == 'PATCH'
    )
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    return _save_response(request, serializer, instance=profile_type)


@api_view(['GET', 'POST'])
@require_permission(ADMINISTER_TYPES)
def profile_type_delete(request, code):
    """
    GET  - what deleting the type would affect
    POST - delete it (refused while profiles of the type exist)
    """
    profile_type = get_object_or_404(ProfileType, code=code)

    if request.method == 'GET':
        return success_response(data=ProfileTypeService.delete_info(profile_type))

    try:
        message = ProfileTypeService.delete_profile_type(request.user, profile_type)
    except ValidationError as e:
        return validation_error_response(e)

    messages.success(request, message)
    return HttpResponseRedirect(Redirect('profiles:overview_types').url)
