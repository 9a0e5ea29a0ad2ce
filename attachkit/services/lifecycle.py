"""
Lifecycle Coordinator - store-on-commit, destroy-on-commit, destroy-on-release.

The only sequencing guarantee in the system lives here: new content is
stored before superseded content is destroyed, so a failure between the two
leaves an orphaned old blob rather than losing the new one.
"""

from collections.abc import Iterable
from typing import TYPE_CHECKING

from attachkit.models.content import ContentKey
from attachkit.utils.exceptions import DataNotFound

if TYPE_CHECKING:
    from attachkit.services.app import AttachmentApp
    from attachkit.services.attachment import Attachment


class LifecycleCoordinator:
    """
    Drives attachments through commit (host save) and release (host delete).

    Destroy failures of kind DataNotFound are logged once as a warning and
    swallowed; every other store error propagates to the caller.
    """

    def __init__(self, app: "AttachmentApp"):
        self.app = app

    def commit(self, attachment: "Attachment") -> ContentKey | None:
        """
        Persist an attachment's pending change.

        - pending content: stored, new key recorded, old key destroyed
        - cleared: host key cleared, old key destroyed
        - key reassigned: host key updated, magic attributes refreshed, old key destroyed
        - no change: nothing happens

        Args:
            attachment: Attachment to commit

        Returns:
            The attachment's key after commit (None when empty)

        Raises:
            StorageError: If storing fails (nothing is destroyed in that case)
        """
        self._check_owner(attachment)
        if not attachment.has_changes:
            return attachment.key

        superseded = attachment.superseded_key
        pending = attachment.pending_content

        if pending is not None:
            new_key = self.app.store.store(pending)
            self.app.log.info(f"Stored {attachment.field} content ({pending.size} bytes) as {new_key}")
        else:
            new_key = attachment.key

        attachment.mark_committed(new_key)
        if attachment.needs_magic_refresh:
            attachment.refresh_magic_attributes()

        if superseded is not None and superseded != new_key:
            self._destroy(superseded, attachment.field)

        return new_key

    def release(self, attachment: "Attachment") -> None:
        """
        Destroy the content an attachment owns, e.g. when its host is deleted.

        The committed key is destroyed even if a reassignment is in flight;
        uncommitted pending content was never stored and needs no cleanup.

        Args:
            attachment: Attachment to release
        """
        self._check_owner(attachment)
        key = attachment.committed_key
        if key is not None:
            self._destroy(key, attachment.field)
        attachment.mark_released()

    def commit_all(self, attachments: Iterable["Attachment"]) -> dict[str, ContentKey | None]:
        """Commit attachments one after another. Returns field -> key."""
        return {attachment.field: self.commit(attachment) for attachment in attachments}

    def release_all(self, attachments: Iterable["Attachment"]) -> None:
        for attachment in attachments:
            self.release(attachment)

    def _check_owner(self, attachment: "Attachment") -> None:
        if attachment.app is not self.app:
            raise ValueError(
                f"Attachment {attachment.field!r} belongs to app {attachment.app.name!r}, "
                f"not {self.app.name!r}"
            )

    def _destroy(self, key: ContentKey, field: str) -> bool:
        try:
            self.app.store.destroy(key)
        except DataNotFound:
            self.app.log.warning(f"Content {key} for {field} was not found when destroying it")
            return False

        self.app.log.info(f"Destroyed {field} content {key}")
        return True
