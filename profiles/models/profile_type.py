from django.core.validators import RegexValidator
from django.db import models

from core.base.models import AuditMixin
from core.base.managers import BaseQuerySet

# Longest machine name a profile type may have
BUNDLE_MAX_LENGTH = 32

PROFILE_OPERATIONS = ('view', 'edit', 'delete')

machine_name_validator = RegexValidator(
    regex=r'^[a-z0-9_]+$',
    message="The machine-readable name must contain only lowercase letters, numbers, and underscores."
)


class ProfileTypeQuerySet(BaseQuerySet):

    def for_registration(self):
        return self.filter(registration=True)


class ProfileType(AuditMixin, models.Model):
    """
    Administrator-defined class of profiles (e.g. 'personal' / "Personal data").

    - registration: profiles of this type are filled in on the user
      registration form
    - multiple: a user may own more than one profile of this type

    Custom fields are configured per type through ProfileFieldConfig.
    """
    code = models.CharField(
        max_length=BUNDLE_MAX_LENGTH,
        unique=True,
        validators=[machine_name_validator],
        help_text="Machine name (e.g., 'personal')"
    )
    label = models.CharField(
        max_length=128,
        help_text="The human-readable name of this profile type."
    )
    weight = models.IntegerField(default=0)
    registration = models.BooleanField(
        default=False,
        help_text="Include in user registration form"
    )
    multiple = models.BooleanField(
        default=False,
        help_text="Allow multiple profiles"
    )

    objects = ProfileTypeQuerySet.as_manager()

    class Meta:
        db_table = 'profile_type'
        ordering = ['weight', 'label']

    def __str__(self):
        return self.label

    @classmethod
    def load(cls, code):
        """Profile type with machine name ``code``, or None."""
        if not code:
            return None
        return cls.objects.filter(code=code).first()

    def permission_code(self, operation, scope):
        """e.g. permission_code('edit', 'own') -> 'edit own personal profile'"""
        return f"{operation} {scope} {self.code} profile"

    def permission_codes(self):
        """{code: description} for every per-type permission."""
        codes = {}
        for operation in PROFILE_OPERATIONS:
            codes[self.permission_code(operation, 'own')] = f"{operation.capitalize()} own {self.label} profile"
            codes[self.permission_code(operation, 'any')] = f"{operation.capitalize()} any {self.label} profile"
        return codes
