from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import Http404
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.permissions.decorators import require_permission
from profile_project.pagination import auto_paginate
from profile_project.response_formatter import success_response, validation_error_response
from profiles.models import ProfileFieldConfig, ProfileType
from profiles.serializers import (
    ProfileFieldCreateSerializer,
    ProfileFieldSerializer,
    ProfileFieldUpdateSerializer,
)
from profiles.services.profile_field_service import ProfileFieldService

ADMINISTER_FIELDS = 'administer profile fields'


def _get_profile_type(code):
    # Field management only exists while the field UI is enabled
    if not getattr(settings, 'PROFILE_FIELD_UI_ENABLED', False):
        raise Http404("Field management is not available")
    return get_object_or_404(ProfileType, code=code)


@api_view(['GET', 'POST'])
@require_permission(ADMINISTER_FIELDS)
@auto_paginate
def field_list(request, code):
    """
    Fields of a profile type.

    GET  /admin/config/people/profiles/types/manage/<code>/fields/
    - ?include_inactive=true also lists disabled fields

    POST /admin/config/people/profiles/types/manage/<code>/fields/
    - field_name, field_label, data_type, is_private, ... (column picked automatically)
    """
    profile_type = _get_profile_type(code)

    if request.method == 'GET':
        include_inactive = request.query_params.get('include_inactive', '').lower() in ('1', 'true', 'yes')
        configs = ProfileFieldService.list_fields(profile_type, include_inactive=include_inactive)
        return Response(ProfileFieldSerializer(configs, many=True).data, status=status.HTTP_200_OK)

    serializer = ProfileFieldCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        config = ProfileFieldService.add_field(profile_type, serializer.to_dto())
    except ValidationError as e:
        return validation_error_response(e)

    return success_response(
        data=ProfileFieldSerializer(config).data,
        message=f"Field {config.field_label} has been added.",
        status_code=status.HTTP_201_CREATED
    )


@api_view(['GET', 'PATCH', 'DELETE'])
@require_permission(ADMINISTER_FIELDS)
def field_detail(request, code, field_name):
    """Retrieve, change or remove one field of a profile type."""
    profile_type = _get_profile_type(code)
    config = get_object_or_404(ProfileFieldConfig, profile_type=profile_type, field_name=field_name)

    if request.method == 'GET':
        return Response(ProfileFieldSerializer(config).data, status=status.HTTP_200_OK)

    if request.method == 'DELETE':
        label = config.field_label
        ProfileFieldService.delete_field(config)
        return success_response(message=f"Field {label} has been removed.")

    serializer = ProfileFieldUpdateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        config = ProfileFieldService.update_field(config, serializer.to_dto())
    except ValidationError as e:
        return validation_error_response(e)

    return success_response(
        data=ProfileFieldSerializer(config).data,
        message=f"Field {config.field_label} has been updated."
    )
