"""Device-wide registry of the one active activity."""
import logging

from shared.enums import ConflictResolution
from shared.errors import OrphanedDraft, PersistenceFailure
from shared.schemas import ActiveActivityInfo, SessionContext

from . import progress


class ActiveActivityRegistry:
    """Tracks which session is active through an explicit pointer key.

    The pointer is written by DraftRepository.save_draft in the same transaction
    as the draft. Reads resolve the pointed-at draft through its metadata record;
    a pointer whose draft cannot be resolved is reported as no active activity.
    """

    def __init__(self, repository, template_store, directory=None):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.repository = repository
        self.template_store = template_store
        self.directory = directory

    def get_active_activity(self):
        try:
            session_key = self.repository.get_active_pointer()
            if not session_key:
                return None
            return self.describe(session_key)
        except OrphanedDraft as e:
            self.logger.warning(str(e))
            return None
        except PersistenceFailure as e:
            self.logger.error(f"Could not read active activity: {e}")
            return None

    def describe(self, session_key):
        """Build ActiveActivityInfo for a stored draft.

        Returns None when no draft is stored; raises OrphanedDraft when the draft
        exists but its metadata, home or template cannot be resolved.
        """
        draft = self.repository.load_draft(session_key)
        if draft is None:
            self.logger.debug(f"Active pointer {session_key} has no draft")
            return None
        metadata = self.repository.load_metadata(session_key)
        if metadata is None:
            raise OrphanedDraft(session_key, 'metadata record missing')
        home = self.directory.find_home_by_id(metadata.home_id) if self.directory else None
        if home is None:
            raise OrphanedDraft(session_key, f"home {metadata.home_id} not found")

        template = self.template_store.get_template(
            metadata.activity_type, metadata.property_code or home.code
        )
        counts = progress.activity_counts(template, draft.task_states, metadata.context or SessionContext())
        return ActiveActivityInfo(
            session_key=session_key,
            home_id=home.id,
            home_code=home.code,
            home_name=home.name or metadata.home_name,
            activity_type=metadata.activity_type,
            completed_tasks=counts.completed,
            total_tasks=counts.total,
        )

    def check_conflict(self, session_key):
        """Active activity info if some other session is active, else None."""
        active = self.get_active_activity()
        if active is None or active.session_key == session_key:
            return None
        return active

    def resolve_conflict(self, resolution, conflicting):
        """Apply the user's choice for a conflicting active activity; True means proceed."""
        resolution = ConflictResolution(resolution)
        if resolution == ConflictResolution.CANCEL:
            self.logger.info(f"Switch away from {conflicting.session_key} cancelled")
            return False

        if resolution == ConflictResolution.SAVE_AND_SWITCH:
            self.repository.set_closed(conflicting.session_key)
            self.repository.clear_active_pointer()
            self.logger.info(f"Paused {conflicting.session_key}; draft kept")
        elif resolution == ConflictResolution.DISCARD_AND_SWITCH:
            self.repository.delete_activity(conflicting.session_key)
            self.repository.clear_active_pointer()
            self.logger.info(f"Discarded {conflicting.session_key}")
        return True

    def mark_active(self, session_key):
        self.repository.set_active_pointer(session_key)

    def clear_active(self, session_key=None):
        return self.repository.clear_active_pointer(only_if=session_key)

    def list_paused_drafts(self):
        """Metadata of every stored draft, most recently saved first."""
        entries = []
        for metadata in self.repository.list_metadata():
            draft = self.repository.load_draft(metadata.session_key)
            if draft is None:
                continue
            entries.append((draft.saved_at, metadata))
        entries.sort(key=lambda e: e[0].timestamp() if e[0] else 0.0, reverse=True)
        return [metadata for _saved_at, metadata in entries]
