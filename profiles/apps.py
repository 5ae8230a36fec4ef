"""
Profiles App Configuration
"""

from django.apps import AppConfig


class ProfilesConfig(AppConfig):
    """Configuration for the Profiles app"""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'profiles'
    label = 'profiles'
    verbose_name = 'User Profiles'

    # Static permission codes; per-type codes are registered with each type
    permissions = {
        'administer profile types': 'Create, edit and delete profile types',
        'administer profile fields': 'Manage the custom fields of profile types',
        'administer profile display': 'Manage how profile fields are displayed',
        'administer profiles': 'View the profile overview and delete profiles in bulk',
        'access user profiles': "View other users' profile pages",
        'bypass profile access': 'View and edit every profile, including private fields',
    }
