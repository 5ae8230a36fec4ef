"""
Tests for role-based permission checks.
"""
from django.test import TestCase
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response
from rest_framework.test import APIRequestFactory, force_authenticate

from core.permissions.decorators import require_permission, require_any_permission
from core.permissions.models import Permission, Role
from core.permissions.services import (
    assign_role,
    create_role_with_permissions,
    ensure_permissions,
    sync_app_permissions,
    user_can_perform,
    user_has_permission,
)

User = get_user_model()


@api_view(['GET'])
@require_permission('administer profile types')
def guarded_view(request):
    return Response({'ok': True})


@api_view(['GET'])
@require_any_permission('administer profiles', 'bypass profile access')
def any_guarded_view(request):
    return Response({'ok': True})


class PermissionServiceTests(TestCase):

    def setUp(self):
        self.user = User.objects.create_user(email='u@test.com', name='U', password='TestPass123')

    def test_anonymous_is_denied(self):
        allowed, reason = user_can_perform(AnonymousUser(), 'administer profiles')
        self.assertFalse(allowed)
        self.assertEqual(reason, 'Authentication required')

    def test_user_without_roles_is_denied(self):
        allowed, reason = user_can_perform(self.user, 'administer profiles')
        self.assertFalse(allowed)
        self.assertIn('no roles', reason)

    def test_role_grants_permission(self):
        role = create_role_with_permissions('editor', ['edit own personal profile'])
        assign_role(self.user, role)
        self.assertTrue(user_has_permission(self.user, 'edit own personal profile'))
        self.assertFalse(user_has_permission(self.user, 'edit any personal profile'))

    def test_admin_user_type_bypasses(self):
        admin = User.objects.create_user(
            email='a@test.com', name='A', password='TestPass123', user_type_name='admin'
        )
        self.assertTrue(user_has_permission(admin, 'anything at all'))

    def test_ensure_permissions_is_idempotent(self):
        ensure_permissions({'view own x profile': 'View own'}, module='profiles')
        ensure_permissions({'view own x profile': 'Changed'}, module='profiles')
        self.assertEqual(Permission.objects.filter(code='view own x profile').count(), 1)

    def test_role_in_use_cannot_be_deleted(self):
        from django.core.exceptions import ValidationError
        role = create_role_with_permissions('editor', [])
        assign_role(self.user, role)
        with self.assertRaises(ValidationError):
            role.delete()
        self.assertTrue(Role.objects.filter(pk=role.pk).exists())

    def test_sync_registers_app_declared_codes(self):
        sync_app_permissions()
        self.assertTrue(Permission.objects.filter(code='administer profile types').exists())
        self.assertTrue(Permission.objects.filter(code='bypass profile access').exists())


class PermissionDecoratorTests(TestCase):

    def setUp(self):
        self.factory = APIRequestFactory()
        self.user = User.objects.create_user(email='u@test.com', name='U', password='TestPass123')

    def test_unauthenticated_gets_401(self):
        response = guarded_view(self.factory.get('/'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_missing_permission_gets_403(self):
        request = self.factory.get('/')
        force_authenticate(request, user=self.user)
        response = guarded_view(request)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['required_permission'], 'administer profile types')

    def test_granted_permission_passes(self):
        assign_role(self.user, create_role_with_permissions('types', ['administer profile types']))
        request = self.factory.get('/')
        force_authenticate(request, user=self.user)
        response = guarded_view(request)
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_any_permission(self):
        request = self.factory.get('/')
        force_authenticate(request, user=self.user)
        self.assertEqual(any_guarded_view(request).status_code, status.HTTP_403_FORBIDDEN)

        assign_role(self.user, create_role_with_permissions('bypass', ['bypass profile access']))
        request = self.factory.get('/')
        force_authenticate(request, user=self.user)
        self.assertEqual(any_guarded_view(request).status_code, status.HTTP_200_OK)
