"""
End-to-end tests for private profile fields.

A private field is visible to the profile owner and to accounts with
'bypass profile access'; everyone else sees the profile without it.
"""
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from core.base.test_utils import create_user, grant_user_permissions, setup_core_data
from profiles.dtos import ProfileSaveDTO, ProfileTypeSaveDTO
from profiles.models import ProfileFieldConfig
from profiles.services.access_service import ProfileAccessService
from profiles.services.profile_service import ProfileService
from profiles.services.profile_type_service import ProfileTypeService


class PrivateFieldAccessTests(TestCase):

    def setUp(self):
        setup_core_data()
        self.client = APIClient()

        self.owner = create_user(name='Alice')
        self.admin = create_user(name='Admin')
        self.other = create_user(name='Bob')

        self.profile_type = ProfileTypeService.save(
            self.admin, ProfileTypeSaveDTO(code='personal', label='Personal data')
        ).profile_type
        ProfileFieldConfig.objects.create(
            profile_type=self.profile_type, field_name='nickname', field_label='Nickname',
            data_type='char', column_name='dff_char1'
        )
        ProfileFieldConfig.objects.create(
            profile_type=self.profile_type, field_name='secret', field_label='Secret',
            data_type='char', column_name='dff_char2', is_private=True
        )

        view_any = self.profile_type.permission_code('view', 'any')
        grant_user_permissions(self.owner, [
            self.profile_type.permission_code('view', 'own'),
            self.profile_type.permission_code('edit', 'own'),
        ])
        grant_user_permissions(self.admin, ['bypass profile access', 'access user profiles'])
        grant_user_permissions(self.other, [view_any, 'access user profiles'])

        self.url = reverse('profiles:user_view', kwargs={'uid': self.owner.pk})

    def create_profile_as_owner(self):
        self.client.force_authenticate(user=self.owner)
        response = self.client.put(
            reverse('profiles:user_edit_type', kwargs={'uid': self.owner.pk, 'code': 'personal'}),
            {'values': {'nickname': 'Ali', 'secret': 'top secret'}},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        return response

    def visible_values(self, response):
        profile = response.data['data']['profiles'][0]
        return {field['name']: field['value'] for field in profile['fields']}

    def test_owner_sees_private_field(self):
        self.create_profile_as_owner()

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(self.visible_values(response), {'nickname': 'Ali', 'secret': 'top secret'})

    def test_admin_with_bypass_sees_private_field(self):
        self.create_profile_as_owner()
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(self.url)

        self.assertEqual(self.visible_values(response), {'nickname': 'Ali', 'secret': 'top secret'})

    def test_other_user_does_not_see_private_field(self):
        self.create_profile_as_owner()
        self.client.force_authenticate(user=self.other)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(self.visible_values(response), {'nickname': 'Ali'})
        self.assertNotIn('top secret', response.content.decode())

    def test_user_without_view_permission_sees_no_profiles(self):
        self.create_profile_as_owner()
        stranger = create_user(name='Carol')
        grant_user_permissions(stranger, ['access user profiles'])
        self.client.force_authenticate(user=stranger)

        response = self.client.get(self.url)

        self.assertEqual(response.data['data']['profiles'], [])

    def test_profiles_page_of_someone_else_needs_permission(self):
        self.create_profile_as_owner()
        self.client.force_authenticate(user=create_user(name='Dave'))

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_anonymous_is_rejected(self):
        self.client.force_authenticate(user=None)
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_private_field_cannot_be_written_by_others(self):
        profile = ProfileService.create_profile(
            self.owner, self.owner, self.profile_type, ProfileSaveDTO(fields={'secret': 'mine'})
        )
        editor = create_user(name='Editor')
        grant_user_permissions(editor, [self.profile_type.permission_code('edit', 'any')])
        self.client.force_authenticate(user=editor)

        response = self.client.put(
            reverse('profiles:user_edit_profile', kwargs={
                'uid': self.owner.pk, 'code': 'personal', 'profile_id': profile.pk
            }),
            {'values': {'secret': 'overwritten'}},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        profile.refresh_from_db()
        self.assertEqual(profile.dff_char2, 'mine')

    def test_edit_form_hides_private_fields_from_editors(self):
        profile = ProfileService.create_profile(
            self.owner, self.owner, self.profile_type, ProfileSaveDTO(fields={'nickname': 'Ali'})
        )
        editor = create_user(name='Editor')
        grant_user_permissions(editor, [self.profile_type.permission_code('edit', 'any')])
        self.client.force_authenticate(user=editor)

        response = self.client.get(reverse('profiles:user_edit_profile', kwargs={
            'uid': self.owner.pk, 'code': 'personal', 'profile_id': profile.pk
        }))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        names = [field['field_name'] for field in response.data['data']['form_fields']]
        self.assertEqual(names, ['nickname'])


class FieldAccessRuleTests(TestCase):

    def setUp(self):
        setup_core_data()
        self.owner = create_user(name='Alice')
        self.profile_type = ProfileTypeService.save(
            self.owner, ProfileTypeSaveDTO(code='personal', label='Personal data')
        ).profile_type
        self.public = ProfileFieldConfig.objects.create(
            profile_type=self.profile_type, field_name='nickname', field_label='Nickname',
            data_type='char', column_name='dff_char1'
        )
        self.private = ProfileFieldConfig.objects.create(
            profile_type=self.profile_type, field_name='secret', field_label='Secret',
            data_type='char', column_name='dff_char2', is_private=True
        )
        self.profile = ProfileService.create_profile(self.owner, self.owner, self.profile_type, ProfileSaveDTO())

    def test_public_field_visible_to_anyone(self):
        stranger = create_user(name='Bob')
        self.assertTrue(ProfileAccessService.can_view_field(stranger, self.profile, self.public))

    def test_private_field_rules(self):
        stranger = create_user(name='Bob')
        admin = create_user(name='Admin')
        grant_user_permissions(admin, ['bypass profile access'])

        self.assertTrue(ProfileAccessService.can_view_field(self.owner, self.profile, self.private))
        self.assertTrue(ProfileAccessService.can_view_field(admin, self.profile, self.private))
        self.assertFalse(ProfileAccessService.can_view_field(stranger, self.profile, self.private))

    def test_entity_access_own_and_any(self):
        stranger = create_user(name='Bob')
        self.assertFalse(ProfileAccessService.check_access(self.owner, 'view', self.profile))

        grant_user_permissions(self.owner, [self.profile_type.permission_code('view', 'own')])
        self.assertTrue(ProfileAccessService.check_access(self.owner, 'view', self.profile))
        self.assertFalse(ProfileAccessService.check_access(stranger, 'view', self.profile))

        grant_user_permissions(stranger, [self.profile_type.permission_code('view', 'any')])
        self.assertTrue(ProfileAccessService.check_access(stranger, 'view', self.profile))
