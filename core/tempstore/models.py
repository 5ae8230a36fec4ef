"""
Temporary key/value storage scoped per owner.

Rows expire; an expired row reads as absent and is purged lazily or by the
purge_tempstore management command.
"""
from django.db import models
from django.utils import timezone


class TempStoreEntryQuerySet(models.QuerySet):

    def expired(self, now=None):
        return self.filter(expires_at__lte=now or timezone.now())


class TempStoreEntry(models.Model):
    """
    One stored value.

    collection groups entries by purpose (e.g. 'profile_multiple_delete_confirm'),
    owner is the user id that owns the entry and key names the value within
    the owner's part of the collection.
    """
    collection = models.CharField(max_length=128, db_index=True)
    owner = models.CharField(max_length=128)
    key = models.CharField(max_length=128)
    value = models.JSONField(default=None, null=True)
    updated_at = models.DateTimeField(auto_now=True)
    expires_at = models.DateTimeField(db_index=True)

    objects = TempStoreEntryQuerySet.as_manager()

    class Meta:
        db_table = 'tempstore_entries'
        unique_together = [('collection', 'owner', 'key')]

    def __str__(self):
        return f"{self.collection}:{self.owner}:{self.key}"

    def is_expired(self, now=None):
        return self.expires_at <= (now or timezone.now())
