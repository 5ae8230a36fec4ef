"""
DFF (Descriptive Flexfield) Models - Core Infrastructure

Any model that needs business-configurable custom fields mixes in DFFMixin
for the physical columns and pairs with a DFFConfigBase subclass that maps
logical field names onto those columns per context (e.g. per profile type).

Usage:
    class Profile(DFFMixin, models.Model):
        profile_type = models.ForeignKey(ProfileType, ...)

    class ProfileFieldConfig(DFFConfigBase):
        profile_type = models.ForeignKey(ProfileType, ...)
"""

from django.db import models
from django.core.exceptions import ValidationError


# Physical column counts per data type
DFF_COLUMN_COUNTS = {
    'char': 10,
    'text': 3,
    'date': 3,
    'number': 3,
    'boolean': 3,
}


def dff_columns(data_type):
    """Physical column names available for ``data_type``, in allocation order."""
    return [f'dff_{data_type}{i}' for i in range(1, DFF_COLUMN_COUNTS[data_type] + 1)]


class DFFMixin(models.Model):
    """
    Mixin that adds the DFF columns to a model.

    10 short text, 3 long text, 3 date, 3 number and 3 boolean columns.
    Which logical field lives in which column is decided per context by the
    DFFConfigBase subclass, so no migration is needed to add a field.
    """

    # Short text fields (10)
    dff_char1 = models.CharField(max_length=255, blank=True)
    dff_char2 = models.CharField(max_length=255, blank=True)
    dff_char3 = models.CharField(max_length=255, blank=True)
    dff_char4 = models.CharField(max_length=255, blank=True)
    dff_char5 = models.CharField(max_length=255, blank=True)
    dff_char6 = models.CharField(max_length=255, blank=True)
    dff_char7 = models.CharField(max_length=255, blank=True)
    dff_char8 = models.CharField(max_length=255, blank=True)
    dff_char9 = models.CharField(max_length=255, blank=True)
    dff_char10 = models.CharField(max_length=255, blank=True)

    # Long text fields (3)
    dff_text1 = models.TextField(blank=True)
    dff_text2 = models.TextField(blank=True)
    dff_text3 = models.TextField(blank=True)

    # Date fields (3)
    dff_date1 = models.DateField(null=True, blank=True)
    dff_date2 = models.DateField(null=True, blank=True)
    dff_date3 = models.DateField(null=True, blank=True)

    # Number fields (3)
    dff_number1 = models.DecimalField(max_digits=15, decimal_places=2, null=True, blank=True)
    dff_number2 = models.DecimalField(max_digits=15, decimal_places=2, null=True, blank=True)
    dff_number3 = models.DecimalField(max_digits=15, decimal_places=2, null=True, blank=True)

    # Boolean fields (3)
    dff_boolean1 = models.BooleanField(null=True, blank=True)
    dff_boolean2 = models.BooleanField(null=True, blank=True)
    dff_boolean3 = models.BooleanField(null=True, blank=True)

    class Meta:
        abstract = True


class DFFConfigBase(models.Model):
    """
    Abstract base model for DFF configuration.

    Maps a logical field (field_name/field_label) to a physical DFF column.
    Subclasses define the FK to their context model and the unique_together
    constraints, e.g.:

        class ProfileFieldConfig(DFFConfigBase):
            profile_type = models.ForeignKey('ProfileType', ...)

            class Meta(DFFConfigBase.Meta):
                unique_together = [
                    ('profile_type', 'field_name'),
                    ('profile_type', 'column_name'),
                ]
    """

    COLUMN_CHOICES = tuple(
        (column, f"{label} {index}")
        for data_type, label in (
            ('char', 'Text Field'),
            ('text', 'Long Text Field'),
            ('date', 'Date Field'),
            ('number', 'Number Field'),
            ('boolean', 'Boolean Field'),
        )
        for index, column in enumerate(dff_columns(data_type), start=1)
    )

    DATA_TYPE_CHOICES = (
        ('char', 'Text'),
        ('text', 'Long text'),
        ('date', 'Date'),
        ('number', 'Number'),
        ('boolean', 'Boolean'),
    )

    # Logical field definition
    field_name = models.CharField(
        max_length=100,
        help_text="Internal name (e.g., 'secret')"
    )
    field_label = models.CharField(
        max_length=200,
        help_text="Display label (e.g., 'Secret')"
    )
    help_text = models.TextField(
        blank=True,
        help_text="Help text shown to users"
    )

    # Physical column mapping
    column_name = models.CharField(
        max_length=20,
        choices=COLUMN_CHOICES,
        help_text="Physical column (e.g., 'dff_char1')"
    )
    data_type = models.CharField(
        max_length=20,
        choices=DATA_TYPE_CHOICES,
        help_text="Data type of the field"
    )

    # Display & validation
    sequence = models.IntegerField(
        default=0,
        help_text="Display order"
    )
    required = models.BooleanField(
        default=False,
        help_text="Is this field required?"
    )
    default_value = models.CharField(
        max_length=255,
        blank=True,
        help_text="Default value for new records"
    )
    max_length = models.IntegerField(
        null=True,
        blank=True,
        help_text="Max length for text fields"
    )
    min_value = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Min value for number fields"
    )
    max_value = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Max value for number fields"
    )

    is_active = models.BooleanField(
        default=True,
        help_text="Inactive fields are hidden"
    )

    class Meta:
        abstract = True
        ordering = ['sequence', 'field_name']

    def clean(self):
        """Validate DFF configuration"""
        super().clean()

        if self.data_type and self.column_name:
            if self.column_name not in dff_columns(self.data_type):
                raise ValidationError({
                    'column_name': f"{self.get_data_type_display()} fields must use dff_{self.data_type} columns"
                })

        if self.field_name and not self.field_name.replace('_', '').isalnum():
            raise ValidationError({
                'field_name': "Field name must be alphanumeric with underscores only"
            })

        if self.max_length is not None and self.data_type not in ('char', 'text'):
            raise ValidationError({
                'max_length': "max_length only applies to text fields"
            })

        if (self.min_value is not None or self.max_value is not None) and self.data_type != 'number':
            raise ValidationError({
                'min_value': "min_value/max_value only apply to number fields"
            })

        if self.min_value is not None and self.max_value is not None:
            if self.min_value >= self.max_value:
                raise ValidationError({
                    'min_value': "min_value must be less than max_value"
                })

    def empty_value(self):
        """Value written to the physical column when the field is cleared."""
        return '' if self.data_type in ('char', 'text') else None
