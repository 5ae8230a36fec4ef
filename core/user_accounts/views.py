"""
API views for authentication.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework_simplejwt.tokens import RefreshToken
from django.contrib.auth import authenticate


def issue_tokens(user):
    """JWT pair for ``user`` as returned by login and registration."""
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token)
    }


def user_summary(user):
    return {
        'id': user.id,
        'email': user.email,
        'name': user.name,
        'user_type': user.user_type.type_name
    }


@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """
    Authenticate with email and password and return JWT tokens.

    POST /auth/login/
    - Request body: { "email": "...", "password": "..." }
    """
    email = request.data.get('email')
    password = request.data.get('password')

    if not email or not password:
        return Response(
            {'error': 'Please provide both email and password'},
            status=status.HTTP_400_BAD_REQUEST
        )

    user = authenticate(request, username=email, password=password)

    if user is None:
        return Response(
            {'error': 'Invalid credentials'},
            status=status.HTTP_401_UNAUTHORIZED
        )

    return Response({
        'message': 'Login successful',
        'user': user_summary(user),
        'tokens': issue_tokens(user)
    }, status=status.HTTP_200_OK)
