"""
Serializers for ProfileType model
"""
from rest_framework import serializers

from profiles.dtos import ProfileTypeSaveDTO
from profiles.models import BUNDLE_MAX_LENGTH, ProfileType
from profiles.models.profile_type import machine_name_validator
from profiles.services.profile_type_service import SAVE_CONTINUE_ACTION, SUBMIT_ACTION


class ProfileTypeSerializer(serializers.ModelSerializer):
    """Read serializer for ProfileType"""
    field_count = serializers.SerializerMethodField()
    profile_count = serializers.SerializerMethodField()

    class Meta:
        model = ProfileType
        fields = [
            'id', 'code', 'label', 'weight', 'registration', 'multiple',
            'field_count', 'profile_count', 'created_at', 'updated_at'
        ]
        read_only_fields = fields

    def get_field_count(self, obj):
        return obj.fields.filter(is_active=True).count()

    def get_profile_count(self, obj):
        return obj.profiles.count()


class ProfileTypeSaveSerializer(serializers.Serializer):
    """Write serializer for the profile type form"""
    label = serializers.CharField(max_length=128)
    code = serializers.CharField(
        max_length=BUNDLE_MAX_LENGTH,
        validators=[machine_name_validator],
        required=False
    )
    weight = serializers.IntegerField(required=False, default=0)
    registration = serializers.BooleanField(required=False, default=False)
    multiple = serializers.BooleanField(required=False, default=False)
    action = serializers.ChoiceField(
        choices=[SUBMIT_ACTION, SAVE_CONTINUE_ACTION],
        required=False,
        default=SUBMIT_ACTION
    )

    def validate(self, attrs):
        # The machine name is only entered when the type is created
        if self.instance is None and not attrs.get('code'):
            raise serializers.ValidationError({'code': "This field is required."})
        return attrs

    def to_dto(self, instance=None):
        data = self.validated_data
        current = instance or self.instance
        return ProfileTypeSaveDTO(
            code=data.get('code') or (current.code if current else ''),
            label=data.get('label', current.label if current else ''),
            weight=data.get('weight', current.weight if current else 0),
            registration=data.get('registration', current.registration if current else False),
            multiple=data.get('multiple', current.multiple if current else False),
        )
