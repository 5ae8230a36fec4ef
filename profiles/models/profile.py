from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from core.base.models import AuditMixin
from core.dff import DFFMixin


class Profile(DFFMixin, AuditMixin, models.Model):
    """
    A profile record owned by a user.

    Custom field values live in the DFF columns; ProfileFieldConfig of the
    profile's type says which column holds which field.
    """
    profile_type = models.ForeignKey(
        'ProfileType',
        on_delete=models.PROTECT,
        related_name='profiles'
    )
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='profiles'
    )
    is_default = models.BooleanField(
        default=False,
        help_text="Default profile of this type for the owner"
    )

    class Meta:
        db_table = 'profile'
        ordering = ['profile_type__weight', 'id']
        indexes = [
            models.Index(fields=['owner', 'profile_type']),
        ]

    def __str__(self):
        return self.label()

    def label(self):
        return f"{self.profile_type.label} profile of {self.owner.get_display_name()}"

    def is_owned_by(self, user):
        return user is not None and user.is_authenticated and self.owner_id == user.pk

    def clean(self):
        """A type that does not allow multiple profiles allows one per owner."""
        super().clean()
        if self.profile_type_id is None or self.owner_id is None:
            return
        if not self.profile_type.multiple:
            others = Profile.objects.filter(
                owner_id=self.owner_id,
                profile_type_id=self.profile_type_id
            ).exclude(pk=self.pk)
            if others.exists():
                raise ValidationError({
                    'profile_type': f"{self.profile_type.label} allows only one profile per user."
                })
