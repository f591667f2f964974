"""Activity handlers for the Field Ops app: opening, switching and resuming activities."""
import logging
from dataclasses import dataclass
from typing import Optional

from shared.enums import ActivityType, ConflictResolution
from shared.errors import ValidationFailure, OrphanedDraft
from shared.schemas import ActivityMetadata, ActiveActivityInfo, GuestReportSubmission, SessionContext
from shared.utils import now

from ..repositories.draft_repository import session_key_for
from .activity_session import ActivitySessionController


@dataclass
class PendingActivity:
    """An activity the user asked to open while another one was active."""
    session_key: str
    home_id: str
    activity_type: ActivityType
    booking_id: Optional[str] = None
    activity_id: Optional[str] = None
    context: Optional[SessionContext] = None


@dataclass
class OpenActivityResult:
    session: Optional[ActivitySessionController] = None
    conflict: Optional[ActiveActivityInfo] = None
    pending: Optional[PendingActivity] = None


class ActivityHandler:
    """Handles activity-related operations."""

    def __init__(self, app):
        self.app = app
        self.logger = logging.getLogger(self.__class__.__name__)
        self.current_session = None

    def open_activity(self, home_id, activity_type, booking_id=None, activity_id=None, context=None):
        """Open (or resume) an activity for a home.

        If a different activity is active, nothing is started: the result carries
        the conflict and the pending request for resolve_conflict().
        """
        activity_type = ActivityType(activity_type)
        home = self.app.directory.find_home_by_id(home_id)
        if home is None:
            raise ValidationFailure(f"Home {home_id} not found")

        session_key = session_key_for(home.id, activity_type, activity_id)
        if self._is_live(session_key):
            return OpenActivityResult(session=self.current_session)

        pending = PendingActivity(
            session_key=session_key,
            home_id=home.id,
            activity_type=activity_type,
            booking_id=booking_id,
            activity_id=activity_id,
            context=context,
        )
        conflict = self.app.registry.check_conflict(session_key)
        if conflict is not None:
            self.logger.info(f"Opening {session_key} conflicts with active {conflict.session_key}")
            return OpenActivityResult(conflict=conflict, pending=pending)

        return OpenActivityResult(session=self._start(pending))

    def resolve_conflict(self, result, resolution):
        """Apply the user's choice for a conflict reported by open_activity()."""
        resolution = ConflictResolution(resolution)
        conflict, pending = result.conflict, result.pending
        if conflict is None or pending is None:
            raise ValueError("No conflict to resolve")

        # A live controller for the other activity must stop writing before it is switched away
        if resolution != ConflictResolution.CANCEL and self._is_live(conflict.session_key):
            if resolution == ConflictResolution.SAVE_AND_SWITCH:
                self.current_session.save_and_exit()
            else:
                self.current_session.discard()
            self.current_session = None

        if not self.app.registry.resolve_conflict(resolution, conflict):
            return OpenActivityResult()
        return OpenActivityResult(session=self._start(pending))

    def resume_activity(self, session_key, context=None):
        """Re-open a paused draft from its stored metadata."""
        metadata = self.app.repository.load_metadata(session_key)
        if metadata is None:
            raise OrphanedDraft(session_key, 'metadata record missing')
        return self.open_activity(
            metadata.home_id,
            metadata.activity_type,
            booking_id=metadata.booking_id,
            activity_id=metadata.activity_id,
            context=context or metadata.context,
        )

    def submit_guest_report(self, session_key, answers=None):
        """Store the guest report and mark it complete so completion can go ahead."""
        submission = GuestReportSubmission(
            session_key=session_key,
            submitted_at=now(),
            answers=answers or {},
        )
        self.app.repository.set_report_submitted(submission)
        self.logger.info(f"Guest report submitted for {session_key}")
        return submission

    def close_current(self):
        if self.current_session is not None:
            self.current_session.close()
            self.current_session = None

    def _is_live(self, session_key):
        session = self.current_session
        return session is not None and session.session_key == session_key and session.state.is_open

    def _start(self, pending):
        home = self.app.directory.find_home_by_id(pending.home_id)
        template = self.app.template_store.get_template(pending.activity_type, home.code)
        metadata = ActivityMetadata(
            session_key=pending.session_key,
            home_id=home.id,
            home_code=home.code,
            home_name=home.name,
            activity_type=pending.activity_type,
            property_code=template.property_code,
            booking_id=pending.booking_id,
            activity_id=pending.activity_id,
        )
        previous = self.app.repository.load_metadata(pending.session_key)
        context = pending.context
        if previous is not None:
            metadata = metadata.model_copy(update={'started_at': previous.started_at})
            context = context or previous.context

        # Only one live controller at a time
        self.close_current()

        config = self.app.config
        session = ActivitySessionController(
            metadata,
            template,
            self.app.repository,
            upload_queue=self.app.upload_queue,
            exporter=self.app.exporter,
            directory=self.app.directory,
            context=context,
            autosave_interval=config.autosave_interval,
            report_handoff=self.app.report_handoff,
            on_warning=self.app.on_warning,
            completed_by=config.completed_by,
            max_notes_length=config.max_notes_length,
        )
        session.start()
        self.current_session = session
        return session
