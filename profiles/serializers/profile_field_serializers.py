"""
Serializers for ProfileFieldConfig model
"""
from rest_framework import serializers

from core.dff.models import DFFConfigBase
from profiles.dtos import ProfileFieldCreateDTO, ProfileFieldUpdateDTO
from profiles.models import ProfileFieldConfig


class ProfileFieldSerializer(serializers.ModelSerializer):
    """Read serializer for ProfileFieldConfig"""
    profile_type = serializers.CharField(source='profile_type.code', read_only=True)

    class Meta:
        model = ProfileFieldConfig
        fields = [
            'id', 'profile_type', 'field_name', 'field_label', 'help_text',
            'data_type', 'column_name', 'sequence', 'required', 'is_private',
            'default_value', 'max_length', 'min_value', 'max_value', 'is_active'
        ]
        read_only_fields = fields


class ProfileFieldCreateSerializer(serializers.Serializer):
    """Write serializer for adding a field to a profile type"""
    field_name = serializers.RegexField(
        regex=r'^[a-z][a-z0-9_]*$',
        max_length=100,
        error_messages={'invalid': "Use lowercase letters, digits and underscores, starting with a letter."}
    )
    field_label = serializers.CharField(max_length=200)
    data_type = serializers.ChoiceField(choices=DFFConfigBase.DATA_TYPE_CHOICES, default='char')
    column_name = serializers.ChoiceField(choices=DFFConfigBase.COLUMN_CHOICES, required=False)
    help_text = serializers.CharField(required=False, allow_blank=True, default='')
    sequence = serializers.IntegerField(required=False, default=0)
    required = serializers.BooleanField(required=False, default=False)
    is_private = serializers.BooleanField(required=False, default=False)
    default_value = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    max_length = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    min_value = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, allow_null=True)
    max_value = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, allow_null=True)

    def to_dto(self):
        data = self.validated_data
        return ProfileFieldCreateDTO(
            field_name=data['field_name'],
            field_label=data['field_label'],
            data_type=data['data_type'],
            column_name=data.get('column_name'),
            help_text=data.get('help_text', ''),
            sequence=data.get('sequence', 0),
            required=data.get('required', False),
            is_private=data.get('is_private', False),
            default_value=data.get('default_value', ''),
            max_length=data.get('max_length'),
            min_value=data.get('min_value'),
            max_value=data.get('max_value'),
        )


class ProfileFieldUpdateSerializer(serializers.Serializer):
    """Write serializer for changing field settings"""
    field_label = serializers.CharField(max_length=200, required=False)
    help_text = serializers.CharField(required=False, allow_blank=True)
    sequence = serializers.IntegerField(required=False)
    required = serializers.BooleanField(required=False)
    is_private = serializers.BooleanField(required=False)
    is_active = serializers.BooleanField(required=False)
    default_value = serializers.CharField(max_length=255, required=False, allow_blank=True)
    max_length = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    min_value = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, allow_null=True)
    max_value = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, allow_null=True)

    def to_dto(self):
        return ProfileFieldUpdateDTO(**self.validated_data)
