"""Repository for activity drafts and their companion records in the local store."""
import logging

from pydantic import ValidationError

from shared.enums import ActivityType
from shared.schemas import ActivityDraft, ActivityMetadata, GuestReportSubmission

ACTIVE_POINTER_KEY = 'active-activity'
SESSION_KEY_PREFIX = 'activity-'
DRAFT_KEY_PREFIX = 'activity-tracker-draft-'
CLOSED_KEY_PREFIX = 'activity-closed-'
META_KEY_PREFIX = 'activity-meta-'
REPORT_KEY_PREFIX = 'activity-report-'


def session_key_for(home_id, activity_type, activity_id=None):
    """Session key for an activity.

    Editing an existing activity keys by its id; a new activity is keyed by home
    and type, so there is at most one fresh draft per (home, type).
    """
    if activity_id:
        return f"{SESSION_KEY_PREFIX}{activity_id}"
    return f"{DRAFT_KEY_PREFIX}{home_id}-{ActivityType(activity_type).value}"


def closed_key(session_key):
    return f"{CLOSED_KEY_PREFIX}{session_key}"


def meta_key(session_key):
    return f"{META_KEY_PREFIX}{session_key}"


def report_key(session_key):
    return f"{REPORT_KEY_PREFIX}{session_key}"


class DraftRepository:
    """Reads and writes drafts, metadata, flags and the active pointer.

    Malformed values are logged and treated as absent. PersistenceFailure from
    the store propagates; callers decide whether it is fatal.
    """

    def __init__(self, store):
        self.store = store
        self.logger = logging.getLogger(self.__class__.__name__)

    def _load_model(self, key, model):
        raw = self.store.get(key)
        if raw is None:
            return None
        try:
            return model.model_validate_json(raw)
        except ValidationError as e:
            self.logger.warning(f"Ignoring malformed {model.__name__} at {key}: {e.error_count()} error(s)")
            return None

    # Drafts
    def load_draft(self, session_key):
        return self._load_model(session_key, ActivityDraft)

    def has_draft(self, session_key):
        return self.store.get(session_key) is not None

    def save_draft(self, session_key, draft, mark_active=True):
        """Persist a draft; with mark_active the pointer is written in the same transaction."""
        writes = {session_key: draft.model_dump_json()}
        if mark_active:
            writes[ACTIVE_POINTER_KEY] = session_key
        self.store.set_many(writes)

    def delete_activity(self, session_key):
        """Delete a draft with its metadata, closed flag and report flag.

        The active pointer is cleared too when it points at this session.
        Returns True if a draft existed.
        """
        keys = [session_key, meta_key(session_key), closed_key(session_key), report_key(session_key)]
        existed = self.has_draft(session_key)
        if self.get_active_pointer() == session_key:
            keys.append(ACTIVE_POINTER_KEY)
        self.store.delete_many(keys)
        self.logger.info(f"Deleted stored activity {session_key}")
        return existed

    # Metadata
    def load_metadata(self, session_key):
        return self._load_model(meta_key(session_key), ActivityMetadata)

    def save_metadata(self, metadata):
        self.store.set(meta_key(metadata.session_key), metadata.model_dump_json())

    def list_metadata(self):
        records = []
        for key in self.store.keys(META_KEY_PREFIX):
            metadata = self._load_model(key, ActivityMetadata)
            if metadata is not None:
                records.append(metadata)
        return records

    # Closed flag
    def is_closed(self, session_key):
        return self.store.get(closed_key(session_key)) is not None

    def set_closed(self, session_key):
        self.store.set(closed_key(session_key), b'true')

    def clear_closed(self, session_key):
        self.store.delete(closed_key(session_key))

    # Guest report flag
    def report_submitted(self, session_key):
        return self.load_report(session_key) is not None

    def load_report(self, session_key):
        return self._load_model(report_key(session_key), GuestReportSubmission)

    def set_report_submitted(self, submission):
        self.store.set(report_key(submission.session_key), submission.model_dump_json())

    # Active pointer
    def get_active_pointer(self):
        raw = self.store.get(ACTIVE_POINTER_KEY)
        if not raw:
            return None
        try:
            return raw.decode('utf-8').strip() or None
        except UnicodeDecodeError:
            self.logger.warning("Ignoring malformed active-activity pointer")
            return None

    def set_active_pointer(self, session_key):
        self.store.set(ACTIVE_POINTER_KEY, session_key)

    def clear_active_pointer(self, only_if=None):
        """Clear the pointer; with only_if, only when it points at that session."""
        if only_if is not None and self.get_active_pointer() != only_if:
            return False
        return self.store.delete(ACTIVE_POINTER_KEY)
