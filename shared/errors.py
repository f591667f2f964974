"""Error taxonomy for the activity engine.

Every failure degrades to a locally recoverable state or a user-visible notice;
none of these are meant to terminate the process.
"""


class FieldOpsError(Exception):
    """Base exception for the activity engine."""
    pass


class ValidationFailure(FieldOpsError):
    """A mutation's precondition did not hold (e.g. photo-required task with no uploaded photo).

    Recovered locally: the state is left unchanged and a transient warning surfaced.
    """

    def __init__(self, message, task_id=None):
        super().__init__(message)
        self.task_id = task_id


class IncompleteRequiredTasks(FieldOpsError):
    """Activity completion attempted before every visible required task is done."""

    def __init__(self, missing_task_ids):
        self.missing_task_ids = list(missing_task_ids)
        super().__init__(
            f"{len(self.missing_task_ids)} required task(s) still incomplete: "
            f"{', '.join(self.missing_task_ids)}"
        )


class PersistenceFailure(FieldOpsError):
    """Durable store read or write failed.

    Logged by callers; in-memory state stays authoritative and the next autosave retries.
    """
    pass


class ExportFailure(FieldOpsError):
    """Completion record export failed after the activity itself completed."""
    pass


class OrphanedDraft(FieldOpsError):
    """A stored draft references a home or template that no longer resolves."""

    def __init__(self, session_key, reason):
        self.session_key = session_key
        self.reason = reason
        super().__init__(f"Orphaned draft {session_key}: {reason}")


class SessionStateError(FieldOpsError):
    """Operation not allowed in the session's current lifecycle state."""
    pass


class TemplateValidationError(FieldOpsError):
    """Activity template is malformed (duplicate ids, dangling or cyclic dependencies)."""
    pass
