"""
Serializers for Profile model
"""
from rest_framework import serializers

from profiles.dtos import ProfileSaveDTO
from profiles.models import Profile


class ProfileOverviewSerializer(serializers.ModelSerializer):
    """Row of the administration overview; field values are not included"""
    label = serializers.CharField(read_only=True)
    type = serializers.CharField(source='profile_type.code', read_only=True)
    type_label = serializers.CharField(source='profile_type.label', read_only=True)
    owner_name = serializers.CharField(source='owner.name', read_only=True)
    owner_email = serializers.EmailField(source='owner.email', read_only=True)

    class Meta:
        model = Profile
        fields = [
            'id', 'label', 'type', 'type_label', 'owner', 'owner_name',
            'owner_email', 'is_default', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class ProfileSaveSerializer(serializers.Serializer):
    """Write serializer for a profile's field values, keyed by field name"""
    values = serializers.DictField(required=False, default=dict)
    is_default = serializers.BooleanField(required=False, allow_null=True, default=None)

    def to_dto(self):
        data = self.validated_data
        return ProfileSaveDTO(
            fields=dict(data.get('values') or {}),
            is_default=data.get('is_default'),
        )


class StageDeleteSerializer(serializers.Serializer):
    """Profiles selected on the overview for bulk deletion"""
    ids = serializers.ListField(child=serializers.IntegerField(min_value=1), min_length=1)


class DeleteConfirmSerializer(serializers.Serializer):
    confirm = serializers.BooleanField(required=False, default=False)
