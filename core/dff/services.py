"""
DFF (Descriptive Flexfield) Service - Core Infrastructure

Generic service for reading and writing DFF values on any model that uses
DFFMixin, keyed by logical field name.

Usage:
    from core.dff.services import DFFService

    data = DFFService.get_dff_data(
        instance=profile,
        config_model=ProfileFieldConfig,
        context_field='profile_type',
        context_value=profile.profile_type
    )

    DFFService.set_dff_data(
        instance=profile,
        config_model=ProfileFieldConfig,
        dff_data={'secret': 'value'},
        context_field='profile_type',
        context_value=profile.profile_type
    )
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from django.core.exceptions import ValidationError

from core.dff.models import dff_columns


class DFFService:
    """Generic service for managing DFF fields on any model with DFFMixin"""

    @staticmethod
    def get_dff_data(instance, config_model, context_field='code', context_value=None, configs=None):
        """
        Get DFF field values as a dictionary keyed by logical field name.

        Args:
            instance: Model instance with DFFMixin
            config_model: DFF config model class (e.g., ProfileFieldConfig)
            context_field: Field to filter configs on (can include __)
            context_value: Value to match (if None, read from instance)
            configs: Optional pre-filtered iterable of configs to report

        Returns:
            dict: {field_name: value}
        """
        if configs is None:
            if context_value is None:
                context_value = getattr(instance, context_field)
            configs = DFFService._get_active_configs(config_model, context_field, context_value)

        return {
            config.field_name: getattr(instance, config.column_name, None)
            for config in configs
        }

    @staticmethod
    def set_dff_data(instance, config_model, dff_data, context_field='code', context_value=None, partial=False):
        """
        Validate and write DFF values from a dictionary keyed by logical name.

        Does not save the instance.

        Args:
            instance: Model instance with DFFMixin
            config_model: DFF config model class
            dff_data: dict of {field_name: value}
            context_field: Field to filter configs on
            context_value: Value to match (if None, read from instance)
            partial: When True, required fields missing from dff_data are
                     not reported (used for updates)

        Raises:
            ValidationError: keyed by field name
        """
        errors = {}
        if context_value is None:
            context_value = getattr(instance, context_field)

        configs = {
            config.field_name: config
            for config in DFFService._get_active_configs(config_model, context_field, context_value)
        }

        if not partial:
            for config in configs.values():
                if config.required and config.field_name not in dff_data:
                    errors[config.field_name] = f"{config.field_label} is required"

        for field_name, value in dff_data.items():
            config = configs.get(field_name)
            if config is None:
                errors[field_name] = f"Unknown field: {field_name}"
                continue

            try:
                setattr(instance, config.column_name, DFFService._validate_and_convert(value, config))
            except ValidationError as e:
                errors[field_name] = "; ".join(e.messages)

        if errors:
            raise ValidationError(errors)

    @staticmethod
    def apply_defaults(instance, config_model, context_field='code', context_value=None):
        """Write configured default values into empty columns of a new instance."""
        if context_value is None:
            context_value = getattr(instance, context_field)

        for config in DFFService._get_active_configs(config_model, context_field, context_value):
            if not config.default_value:
                continue
            current = getattr(instance, config.column_name, None)
            if current in (None, ''):
                setattr(instance, config.column_name, DFFService._validate_and_convert(config.default_value, config))

    @staticmethod
    def get_field_configs(config_model, context_field, context_value):
        """Active DFF field configurations for a context, in display order."""
        return DFFService._get_active_configs(config_model, context_field, context_value)

    @staticmethod
    def next_free_column(config_model, context_field, context_value, data_type):
        """
        First physical column of ``data_type`` not yet mapped in this context.

        Inactive configs still hold their column.

        Raises:
            ValidationError: when every column of that type is in use
        """
        used = set(
            config_model.objects.filter(**{context_field: context_value})
            .values_list('column_name', flat=True)
        )
        for column in dff_columns(data_type):
            if column not in used:
                return column
        raise ValidationError({
            'data_type': f"No free {data_type} columns left for this context"
        })

    # ===== Private helper methods =====

    @staticmethod
    def _get_active_configs(config_model, context_field, context_value):
        filter_kwargs = {
            context_field: context_value,
            'is_active': True
        }
        return config_model.objects.filter(**filter_kwargs).order_by('sequence', 'field_name')

    @staticmethod
    def _validate_and_convert(value, config):
        """
        Validate and convert value based on DFF configuration.

        Raises:
            ValidationError: If validation fails
        """
        if value is None or value == '':
            if config.required:
                raise ValidationError(f"{config.field_label} is required")
            return config.empty_value()

        if config.data_type in ('char', 'text'):
            return DFFService._validate_char(value, config)
        elif config.data_type == 'date':
            return DFFService._validate_date(value, config)
        elif config.data_type == 'number':
            return DFFService._validate_number(value, config)
        elif config.data_type == 'boolean':
            return DFFService._validate_boolean(value, config)

        return value

    @staticmethod
    def _validate_char(value, config):
        if not isinstance(value, str):
            value = str(value)

        limit = config.max_length
        if config.data_type == 'char':
            limit = min(limit or 255, 255)

        if limit and len(value) > limit:
            raise ValidationError(
                f"{config.field_label} cannot exceed {limit} characters"
            )

        return value

    @staticmethod
    def _validate_date(value, config):
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value

        if isinstance(value, str):
            try:
                return datetime.strptime(value, '%Y-%m-%d').date()
            except ValueError:
                raise ValidationError(
                    f"{config.field_label} must be a valid date (YYYY-MM-DD)"
                )

        raise ValidationError(f"{config.field_label} must be a date")

    @staticmethod
    def _validate_number(value, config):
        if isinstance(value, bool):
            raise ValidationError(f"{config.field_label} must be a number")
        try:
            if isinstance(value, str):
                value = Decimal(value)
            elif isinstance(value, (int, float)):
                value = Decimal(str(value))
            elif not isinstance(value, Decimal):
                raise ValidationError(f"{config.field_label} must be a number")
        except (InvalidOperation, ValueError):
            raise ValidationError(f"{config.field_label} must be a valid number")

        if config.min_value is not None and value < config.min_value:
            raise ValidationError(
                f"{config.field_label} must be at least {config.min_value}"
            )
        if config.max_value is not None and value > config.max_value:
            raise ValidationError(
                f"{config.field_label} must be at most {config.max_value}"
            )

        return value

    @staticmethod
    def _validate_boolean(value, config):
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in ('1', 'true', 'yes', 'on'):
                return True
            if lowered in ('0', 'false', 'no', 'off'):
                return False
        raise ValidationError(f"{config.field_label} must be true or false")
