"""Session state owned by the activity session controller."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Dict

from shared.enums import SessionStatus
from shared.schemas import TaskState, ActivityDraft
from shared.utils import now


@dataclass
class SessionState:
    """Mutable state of one activity session.

    task_states is never mutated in place: the controller swaps in a new dict
    on every change, so a reference taken under the lock is a consistent snapshot.
    """
    session_key: str
    status: SessionStatus = SessionStatus.NOT_STARTED

    # Runtime task state, keyed by task id
    task_states: Dict[str, TaskState] = field(default_factory=dict)
    activity_notes: str = ''

    # UI focus: the task auto-advance moved to
    expanded_task_id: Optional[str] = None

    # Transient warnings from rejected mutations, newest last
    warnings: List[str] = field(default_factory=list)

    # Persistence bookkeeping
    started_at: Optional[datetime] = None
    last_saved_at: Optional[datetime] = None
    last_save_error: Optional[str] = None

    @property
    def is_open(self):
        return self.status in (SessionStatus.IN_PROGRESS, SessionStatus.READY_TO_COMPLETE)

    def to_draft(self):
        """Snapshot the current map and notes as a draft ready to persist."""
        return ActivityDraft(
            task_states=dict(self.task_states),
            activity_notes=self.activity_notes,
            saved_at=now(),
        )

    def clear_warnings(self):
        self.warnings = []
