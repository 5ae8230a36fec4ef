"""
Per-owner temporary storage.

Usage:
    store = PrivateTempStore('profile_multiple_delete_confirm', owner=user.pk)
    store.set(user.pk, [3, 5, 8])
    store.get(user.pk)      # [3, 5, 8]
    store.delete(user.pk)   # idempotent

Entries written by one owner are invisible to every other owner.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Optional

from django.conf import settings
from django.utils import timezone

from core.tempstore.models import TempStoreEntry

logger = logging.getLogger(__name__)


@dataclass
class TempStoreMetadata:
    owner: str
    updated_at: datetime
    expires_at: datetime


class PrivateTempStore:
    """Expirable key/value store private to one owner within a collection."""

    def __init__(self, collection: str, owner, expire: Optional[int] = None):
        if owner is None or owner == '':
            raise ValueError("A private temp store needs an owner")
        self.collection = collection
        self.owner = str(owner)
        self.expire = expire if expire is not None else settings.TEMPSTORE_EXPIRE

    def _entries(self):
        return TempStoreEntry.objects.filter(collection=self.collection, owner=self.owner)

    def _load(self, key):
        entry = self._entries().filter(key=str(key)).first()
        if entry is None:
            return None
        if entry.is_expired():
            logger.debug(f"Temp store entry {entry} expired; removing")
            entry.delete()
            return None
        return entry

    def get(self, key, default: Any = None):
        """Stored value for ``key``, or ``default`` when absent or expired."""
        entry = self._load(key)
        if entry is None:
            return default
        return entry.value

    def set(self, key, value) -> None:
        """Store ``value`` (JSON-serialisable) and restart its expiry window."""
        TempStoreEntry.objects.update_or_create(
            collection=self.collection,
            owner=self.owner,
            key=str(key),
            defaults={
                'value': value,
                'expires_at': timezone.now() + timedelta(seconds=self.expire),
            }
        )

    def set_if_not_exists(self, key, value) -> bool:
        """Store ``value`` only when no live entry exists. Returns True if stored."""
        if self._load(key) is not None:
            return False
        self.set(key, value)
        return True

    def get_metadata(self, key) -> Optional[TempStoreMetadata]:
        entry = self._load(key)
        if entry is None:
            return None
        return TempStoreMetadata(owner=entry.owner, updated_at=entry.updated_at, expires_at=entry.expires_at)

    def delete(self, key) -> bool:
        """Remove ``key``. Deleting a missing key is not an error."""
        deleted, _ = self._entries().filter(key=str(key)).delete()
        return deleted > 0


class PrivateTempStoreFactory:
    """Hands out stores bound to a collection and an explicit owner."""

    def __init__(self, expire: Optional[int] = None):
        self.expire = expire

    def get(self, collection: str, owner) -> PrivateTempStore:
        return PrivateTempStore(collection, owner, expire=self.expire)


def purge_expired(now=None) -> int:
    """Delete every expired entry. Returns the number of rows removed."""
    deleted, _ = TempStoreEntry.objects.expired(now).delete()
    if deleted:
        logger.info(f"Purged {deleted} expired temp store entries")
    return deleted
