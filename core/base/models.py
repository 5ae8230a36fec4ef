from django.db import models
from django.conf import settings


class AuditMixin(models.Model):
    """
    Adds audit fields to track creation and modification metadata.

    Fields:
        - created_at: Timestamp when record was created
        - updated_at: Timestamp when record was last modified
        - created_by: User who created the record (optional)
        - updated_by: User who last modified the record (optional)

    Usage:
        class ProfileType(AuditMixin):
            label = models.CharField(max_length=128)

    Note: created_by and updated_by are set by the service layer, which
    receives the acting user explicitly.
    """
    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="Timestamp when record was created"
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="Timestamp when record was last modified"
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='%(app_label)s_%(class)s_created',
        help_text="User who created this record"
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='%(app_label)s_%(class)s_updated',
        help_text="User who last updated this record"
    )

    class Meta:
        abstract = True

    def stamp(self, user):
        """
        Record ``user`` as the last editor (and creator for unsaved rows).

        Anonymous or missing users leave the audit columns untouched.
        """
        if user is None or not getattr(user, 'is_authenticated', False):
            return self
        if self.pk is None and self.created_by_id is None:
            self.created_by = user
        self.updated_by = user
        return self
