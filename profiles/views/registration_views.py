from django.core.exceptions import ValidationError
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from core.user_accounts.views import issue_tokens, user_summary
from profile_project.response_formatter import success_response, validation_error_response
from profiles.serializers import ProfileRegistrationSerializer, RegistrationTypeSerializer
from profiles.services.profile_service import ProfileService, RegistrationService


@api_view(['GET'])
@permission_classes([AllowAny])
def registration_form(request):
    """GET /user/register/form/ - profile types filled in on registration"""
    types = RegistrationService.registration_types()
    return success_response(data={'profile_types': RegistrationTypeSerializer(types, many=True).data})


@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """
    POST /user/register/
    - email, name, password, confirm_password, phone_number
    - profiles: {<type code>: {<field name>: value}}
    """
    serializer = ProfileRegistrationSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        user, profiles = RegistrationService.register(serializer.user_data(), serializer.to_dto())
    except ValidationError as e:
        return validation_error_response(e)

    return success_response(
        data={
            'user': user_summary(user),
            'tokens': issue_tokens(user),
            'profiles': [ProfileService.render_profile(user, profile) for profile in profiles],
        },
        message="Registration successful.",
        status_code=status.HTTP_201_CREATED
    )
