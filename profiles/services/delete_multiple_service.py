"""
Deferred bulk deletion of profiles.

An overview action stages the selected profiles in the acting user's private
temp store; the confirmation page reads the staged set back, asks for
confirmation and deletes on submit.

    Idle -> Confirming -> Deleted | Cancelled

Cancelling leaves the staged set in place. It is cleared only once the delete
has gone through, so a failed delete can be retried from the same prompt.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from django.utils.html import escape
from django.utils.translation import ngettext

from core.tempstore.services import PrivateTempStore

logger = logging.getLogger(__name__)
content_logger = logging.getLogger('profiles.content')

COLLECTION = 'profile_multiple_delete_confirm'
OVERVIEW_ROUTE = 'profiles:overview_profiles'
CONFIRM_ROUTE = 'profiles:multiple_delete_confirm'


class ProfileDeletionError(Exception):
    """Deleting the staged profiles failed; nothing was deleted."""

    def __init__(self, message, count=0):
        super().__init__(message)
        self.count = count


@dataclass
class DeleteConfirmation:
    question: str
    items: List[str]
    count: int
    confirm_text: str = 'Delete'
    cancel_route: str = OVERVIEW_ROUTE

    def as_dict(self):
        return {
            'question': self.question,
            'items': self.items,
            'count': self.count,
            'confirm_text': self.confirm_text,
            'cancel_route': self.cancel_route,
        }


@dataclass
class DeleteOutcome:
    deleted: int = 0
    messages: List[str] = field(default_factory=list)
    redirect_route: str = OVERVIEW_ROUTE


def temp_store_for(user_id) -> PrivateTempStore:
    return PrivateTempStore(COLLECTION, owner=user_id)


def stage_for_deletion(user_id, profiles) -> List[int]:
    """Remember ``profiles`` (in order) as the user's pending deletion set."""
    ids = []
    for profile in profiles:
        pk = getattr(profile, 'pk', profile)
        if pk not in ids:
            ids.append(pk)
    temp_store_for(user_id).set(user_id, ids)
    logger.debug(f"User {user_id} staged {len(ids)} profile(s) for deletion")
    return ids


class DeleteMultipleWorkflow:
    """
    Confirmation and submission of a staged bulk delete.

    Args:
        temp_store: store holding the staged id list under the user id
        storage: object with load_multiple(ids) and delete(profiles), the latter
            returning how many profiles it removed
        notify: called with each user-facing status message
    """

    def __init__(self, temp_store, storage, notify: Optional[Callable[[str], None]] = None):
        self.temp_store = temp_store
        self.storage = storage
        self.notify = notify

    def staged_profiles(self, user_id):
        ids = self.temp_store.get(user_id) or []
        if not ids:
            return []
        return self.storage.load_multiple(ids)

    def build_confirmation(self, user_id) -> Optional[DeleteConfirmation]:
        """Prompt for the staged set, or None when there is nothing to confirm."""
        profiles = self.staged_profiles(user_id)
        if not profiles:
            return None

        count = len(profiles)
        return DeleteConfirmation(
            question=ngettext(
                'Are you sure you want to delete this profile?',
                'Are you sure you want to delete these profiles?',
                count
            ),
            items=[escape(profile.label()) for profile in profiles],
            count=count,
        )

    def submit(self, user_id, confirm) -> DeleteOutcome:
        """
        Delete the staged set when ``confirm`` is set.

        Raises:
            ProfileDeletionError: storage failed; the staged set is kept
        """
        outcome = DeleteOutcome()
        if not confirm:
            return outcome

        profiles = self.staged_profiles(user_id)
        if not profiles:
            return outcome

        count = len(profiles)
        try:
            deleted = self.storage.delete(profiles)
        except Exception as e:
            logger.exception(f"Deleting {count} staged profile(s) for user {user_id} failed")
            raise ProfileDeletionError(
                ngettext(
                    'The profile could not be deleted.',
                    'The %(count)d profiles could not be deleted.',
                    count
                ) % {'count': count},
                count=count
            ) from e

        self.temp_store.delete(user_id)
        content_logger.info(f"Deleted {deleted} profiles.", extra={'count': deleted, 'user_id': user_id})

        message = ngettext('Deleted 1 profile.', 'Deleted %(count)d profiles.', deleted) % {'count': deleted}
        if self.notify is not None:
            self.notify(message)

        outcome.deleted = deleted
        outcome.messages.append(message)
        return outcome
