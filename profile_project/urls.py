"""
URL configuration for profile_project.

Profile administration lives under admin/config/people/profiles/ and the
per-user pages under user/, both served by the profiles app.
"""
from django.urls import path, include

urlpatterns = [
    # Authentication endpoints (login, token refresh)
    path('auth/', include('core.user_accounts.auth_urls')),

    # Profiles, profile types and their fields
    path('', include('profiles.urls')),
]
