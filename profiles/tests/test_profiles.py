"""
Tests for creating, editing and listing profiles.
"""
from datetime import date
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from core.base.test_utils import create_user, create_user_with_permissions, grant_user_permissions, setup_core_data
from profiles.dtos import ProfileSaveDTO
from profiles.models import Profile, ProfileFieldConfig, ProfileType
from profiles.services.profile_service import ProfileService


class ProfileServiceTests(TestCase):

    def setUp(self):
        self.owner = create_user(name='Alice')
        self.single = ProfileType.objects.create(code='personal', label='Personal data')
        self.many = ProfileType.objects.create(code='address', label='Address', multiple=True)

        ProfileFieldConfig.objects.create(
            profile_type=self.single, field_name='nickname', field_label='Nickname',
            data_type='char', column_name='dff_char1', max_length=10
        )
        ProfileFieldConfig.objects.create(
            profile_type=self.single, field_name='birthday', field_label='Birthday',
            data_type='date', column_name='dff_date1'
        )
        ProfileFieldConfig.objects.create(
            profile_type=self.single, field_name='height', field_label='Height',
            data_type='number', column_name='dff_number1', min_value=Decimal('0')
        )
        ProfileFieldConfig.objects.create(
            profile_type=self.single, field_name='language', field_label='Language',
            data_type='char', column_name='dff_char2', default_value='en'
        )
        ProfileFieldConfig.objects.create(
            profile_type=self.many, field_name='city', field_label='City',
            data_type='char', column_name='dff_char1', required=True
        )

    def test_label(self):
        profile = ProfileService.create_profile(self.owner, self.owner, self.single, ProfileSaveDTO())
        self.assertEqual(profile.label(), 'Personal data profile of Alice')

    def test_values_are_stored_in_mapped_columns(self):
        profile = ProfileService.create_profile(self.owner, self.owner, self.single, ProfileSaveDTO(fields={
            'nickname': 'Ali', 'birthday': '1990-05-01', 'height': '1.70',
        }))

        profile.refresh_from_db()
        self.assertEqual(profile.dff_char1, 'Ali')
        self.assertEqual(profile.dff_date1, date(1990, 5, 1))
        self.assertEqual(profile.dff_number1, Decimal('1.70'))

    def test_defaults_fill_missing_fields(self):
        profile = ProfileService.create_profile(self.owner, self.owner, self.single, ProfileSaveDTO())
        self.assertEqual(profile.dff_char2, 'en')

    def test_invalid_values_are_reported_by_field(self):
        with self.assertRaises(ValidationError) as ctx:
            ProfileService.create_profile(self.owner, self.owner, self.single, ProfileSaveDTO(fields={
                'nickname': 'far too long a nickname', 'birthday': 'yesterday', 'height': '-1', 'unknown': 'x',
            }))
        self.assertEqual(
            set(ctx.exception.message_dict),
            {'nickname', 'birthday', 'height', 'unknown'}
        )
        self.assertFalse(Profile.objects.exists())

    def test_required_field(self):
        with self.assertRaises(ValidationError) as ctx:
            ProfileService.create_profile(self.owner, self.owner, self.many, ProfileSaveDTO())
        self.assertIn('city', ctx.exception.message_dict)

    def test_single_profile_type_allows_one_per_owner(self):
        ProfileService.create_profile(self.owner, self.owner, self.single, ProfileSaveDTO())
        with self.assertRaises(ValidationError):
            ProfileService.create_profile(self.owner, self.owner, self.single, ProfileSaveDTO())
        self.assertEqual(Profile.objects.filter(profile_type=self.single).count(), 1)

    def test_multiple_profile_type_and_default_flag(self):
        first = ProfileService.create_profile(self.owner, self.owner, self.many, ProfileSaveDTO(fields={'city': 'Oslo'}))
        second = ProfileService.create_profile(self.owner, self.owner, self.many, ProfileSaveDTO(fields={'city': 'Rome'}))
        self.assertTrue(first.is_default)
        self.assertFalse(second.is_default)

        ProfileService.update_profile(self.owner, second, ProfileSaveDTO(is_default=True))

        first.refresh_from_db()
        second.refresh_from_db()
        self.assertFalse(first.is_default)
        self.assertTrue(second.is_default)

    def test_update_is_partial(self):
        profile = ProfileService.create_profile(self.owner, self.owner, self.single, ProfileSaveDTO(fields={
            'nickname': 'Ali', 'height': '1.70',
        }))

        ProfileService.update_profile(self.owner, profile, ProfileSaveDTO(fields={'nickname': 'Al'}))

        profile.refresh_from_db()
        self.assertEqual(profile.dff_char1, 'Al')
        self.assertEqual(profile.dff_number1, Decimal('1.70'))

    def test_get_profile_for_edit(self):
        fresh = ProfileService.get_profile_for_edit(self.owner, self.single)
        self.assertIsNone(fresh.pk)
        self.assertEqual(fresh.dff_char2, 'en')

        saved = ProfileService.create_profile(self.owner, self.owner, self.single, ProfileSaveDTO())
        self.assertEqual(ProfileService.get_profile_for_edit(self.owner, self.single).pk, saved.pk)

        with self.assertRaises(Profile.DoesNotExist):
            ProfileService.get_profile_for_edit(self.owner, self.many, saved.pk)

    def test_inactive_fields_are_not_rendered(self):
        ProfileFieldConfig.objects.filter(field_name='birthday').update(is_active=False)
        profile = ProfileService.create_profile(self.owner, self.owner, self.single, ProfileSaveDTO())

        rendered = ProfileService.render_profile(self.owner, profile)

        self.assertEqual([field['name'] for field in rendered['fields']], ['height', 'language', 'nickname'])


class ProfileAPITests(TestCase):

    def setUp(self):
        setup_core_data()
        self.client = APIClient()
        self.owner = create_user(name='Alice')
        self.addresses = ProfileType.objects.create(code='address', label='Address', multiple=True)
        ProfileFieldConfig.objects.create(
            profile_type=self.addresses, field_name='city', field_label='City',
            data_type='char', column_name='dff_char1'
        )
        grant_user_permissions(self.owner, [
            self.addresses.permission_code('view', 'own'),
            self.addresses.permission_code('edit', 'own'),
        ])
        self.client.force_authenticate(user=self.owner)
        self.type_url = reverse('profiles:user_edit_type', kwargs={'uid': self.owner.pk, 'code': 'address'})

    def test_post_adds_profiles_to_multiple_type(self):
        first = self.client.post(self.type_url, {'values': {'city': 'Oslo'}}, format='json')
        second = self.client.post(self.type_url, {'values': {'city': 'Rome'}}, format='json')

        self.assertEqual(first.status_code, status.HTTP_201_CREATED)
        self.assertEqual(second.status_code, status.HTTP_201_CREATED)
        listing = self.client.get(self.type_url)
        cities = [profile['fields'][0]['value'] for profile in listing.data['data']['profiles']]
        self.assertEqual(cities, ['Oslo', 'Rome'])

    def test_invalid_values_give_400(self):
        response = self.client.post(self.type_url, {'values': {'unknown': 'x'}}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('unknown', response.data['data'])

    def test_update_single_profile(self):
        profile = ProfileService.create_profile(
            self.owner, self.owner, self.addresses, ProfileSaveDTO(fields={'city': 'Oslo'})
        )
        url = reverse('profiles:user_edit_profile', kwargs={
            'uid': self.owner.pk, 'code': 'address', 'profile_id': profile.pk
        })

        response = self.client.put(url, {'values': {'city': 'Bergen'}}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        profile.refresh_from_db()
        self.assertEqual(profile.dff_char1, 'Bergen')

    def test_profile_of_other_user_is_forbidden(self):
        other = create_user(name='Bob')
        url = reverse('profiles:user_edit_type', kwargs={'uid': other.pk, 'code': 'address'})

        response = self.client.post(url, {'values': {'city': 'Oslo'}}, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Profile.objects.exists())

    def test_profile_id_of_other_type_is_404(self):
        ProfileType.objects.create(code='personal', label='Personal data')
        profile = ProfileService.create_profile(self.owner, self.owner, self.addresses, ProfileSaveDTO())

        response = self.client.get(reverse('profiles:user_edit_profile', kwargs={
            'uid': self.owner.pk, 'code': 'personal', 'profile_id': profile.pk
        }))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_admin_overview_filters_by_type(self):
        ProfileService.create_profile(self.owner, self.owner, self.addresses, ProfileSaveDTO())
        personal = ProfileType.objects.create(code='personal', label='Personal data')
        ProfileService.create_profile(self.owner, self.owner, personal, ProfileSaveDTO())
        admin = create_user_with_permissions(['administer profiles'], name='Admin')
        self.client.force_authenticate(user=admin)

        response = self.client.get(reverse('profiles:overview_profiles'), {'type': 'personal'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        results = response.data['data']['results']
        self.assertEqual([row['label'] for row in results], ['Personal data profile of Alice'])

    def test_overview_requires_permission(self):
        response = self.client.get(reverse('profiles:overview_profiles'))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
