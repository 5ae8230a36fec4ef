"""
API tests for profile type administration.
"""
from django.contrib.messages import get_messages
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from core.base.test_utils import create_user, create_user_with_permissions, setup_core_data
from profiles.models import Profile, ProfileType


class ProfileTypeAPITests(TestCase):

    def setUp(self):
        setup_core_data()
        self.client = APIClient()
        self.admin = create_user_with_permissions(['administer profile types'], name='Type Admin')
        self.client.force_authenticate(user=self.admin)
        self.list_url = reverse('profiles:overview_types')

    def test_list_types(self):
        ProfileType.objects.create(code='work', label='Work', weight=5)
        ProfileType.objects.create(code='personal', label='Personal data')

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        codes = [item['code'] for item in response.data['data']['results']]
        self.assertEqual(codes, ['personal', 'work'])

    def test_machine_name_exists_check(self):
        ProfileType.objects.create(code='personal', label='Personal data')

        taken = self.client.get(self.list_url, {'code': 'personal'})
        free = self.client.get(self.list_url, {'code': 'work'})

        self.assertTrue(taken.data['exists'])
        self.assertFalse(free.data['exists'])

    def test_create_type(self):
        response = self.client.post(self.list_url, {
            'label': 'Personal data',
            'code': 'personal',
            'registration': True,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['message'], 'Personal data profile type has been created.')
        self.assertEqual(response.data['data']['redirect']['url'], self.list_url)
        self.assertTrue(ProfileType.objects.get(code='personal').registration)
        notices = [str(message) for message in get_messages(response.wsgi_request)]
        self.assertEqual(notices, ['Personal data profile type has been created.'])

    @override_settings(PROFILE_FIELD_UI_ENABLED=True)
    def test_create_with_save_and_manage_fields(self):
        response = self.client.post(self.list_url, {
            'label': 'Personal data',
            'code': 'personal',
            'action': 'save_continue',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(
            response.data['data']['redirect']['url'],
            reverse('profiles:field_overview', kwargs={'code': 'personal'})
        )

    @override_settings(PROFILE_FIELD_UI_ENABLED=False)
    def test_save_and_manage_fields_without_field_ui(self):
        response = self.client.post(self.list_url, {
            'label': 'Personal data',
            'code': 'personal',
            'action': 'save_continue',
        }, format='json')

        self.assertEqual(response.data['data']['redirect']['url'], self.list_url)

    def test_create_requires_code(self):
        response = self.client.post(self.list_url, {'label': 'Personal data'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_create_rejects_bad_code(self):
        response = self.client.post(self.list_url, {'label': 'X', 'code': 'Not-Valid'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_create_rejects_duplicate(self):
        ProfileType.objects.create(code='personal', label='Personal data')
        response = self.client.post(self.list_url, {'label': 'Again', 'code': 'personal'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('code', response.data['data'])

    @override_settings(PROFILE_FIELD_UI_ENABLED=True)
    def test_add_form(self):
        response = self.client.get(reverse('profiles:type_add_form'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('save_continue', response.data['data']['actions'])

    def test_edit_form_and_patch(self):
        ProfileType.objects.create(code='personal', label='Personal data', multiple=True)
        url = reverse('profiles:type_edit', kwargs={'code': 'personal'})

        form = self.client.get(url)
        self.assertEqual(form.status_code, status.HTTP_200_OK)
        self.assertIn('delete', form.data['data']['form']['actions'])
        self.assertNotIn('save_continue', form.data['data']['form']['actions'])

        response = self.client.patch(url, {'label': 'Personal info'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Personal info profile type has been updated.')
        profile_type = ProfileType.objects.get(code='personal')
        self.assertEqual(profile_type.label, 'Personal info')
        self.assertTrue(profile_type.multiple)

    def test_delete_action_redirects_to_confirmation(self):
        ProfileType.objects.create(code='personal', label='Personal data')

        response = self.client.delete(reverse('profiles:type_edit', kwargs={'code': 'personal'}))

        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        self.assertEqual(response['Location'], reverse('profiles:type_delete', kwargs={'code': 'personal'}))
        self.assertTrue(ProfileType.objects.filter(code='personal').exists())

    def test_delete_confirmation_and_delete(self):
        ProfileType.objects.create(code='personal', label='Personal data')
        url = reverse('profiles:type_delete', kwargs={'code': 'personal'})

        info = self.client.get(url)
        self.assertTrue(info.data['data']['can_delete'])

        response = self.client.post(url)
        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        self.assertEqual(response['Location'], self.list_url)
        self.assertFalse(ProfileType.objects.exists())

    def test_delete_refused_while_in_use(self):
        profile_type = ProfileType.objects.create(code='personal', label='Personal data')
        Profile.objects.create(profile_type=profile_type, owner=create_user(name='Alice'))

        response = self.client.post(reverse('profiles:type_delete', kwargs={'code': 'personal'}))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(ProfileType.objects.exists())

    def test_unknown_type_is_404(self):
        response = self.client.get(reverse('profiles:type_edit', kwargs={'code': 'missing'}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_requires_permission(self):
        self.client.force_authenticate(user=create_user(name='Nobody'))
        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
