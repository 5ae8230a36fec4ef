"""
Serializers for user registration with profiles
"""
from rest_framework import serializers

from core.user_accounts.serializers import UserRegistrationSerializer
from profiles.dtos import RegistrationDTO
from profiles.models import ProfileType
from profiles.serializers.profile_field_serializers import ProfileFieldSerializer


class RegistrationTypeSerializer(serializers.ModelSerializer):
    """A registration-enabled profile type with the fields to fill in"""
    profile_fields = serializers.SerializerMethodField()

    class Meta:
        model = ProfileType
        fields = ['code', 'label', 'multiple', 'profile_fields']

    def get_profile_fields(self, obj):
        active = [config for config in obj.fields.all() if config.is_active]
        active.sort(key=lambda config: (config.sequence, config.field_name))
        return ProfileFieldSerializer(active, many=True).data


class ProfileRegistrationSerializer(UserRegistrationSerializer):
    """Account details plus {type code: {field name: value}}"""
    profiles = serializers.DictField(child=serializers.DictField(), required=False, default=dict)

    class Meta(UserRegistrationSerializer.Meta):
        fields = UserRegistrationSerializer.Meta.fields + ['profiles']

    def user_data(self):
        data = self.validated_data
        return {
            'email': data['email'],
            'name': data['name'],
            'phone_number': data.get('phone_number', ''),
            'password': data['password'],
        }

    def to_dto(self):
        return RegistrationDTO(profiles=dict(self.validated_data.get('profiles') or {}))
