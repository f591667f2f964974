"""Activity session controller: the single point of mutation for an in-progress activity."""
import logging
import threading
from dataclasses import dataclass
from typing import Optional

from shared.enums import SessionStatus, CompletionOutcome, PhotoStatus
from shared.errors import (
    ValidationFailure, IncompleteRequiredTasks, PersistenceFailure, ExportFailure, SessionStateError,
)
from shared.schemas import (
    TaskState, Photo, PhotoAnnotation, IssueReport, SessionContext, TaskView, QueuedPhotoView,
    CompletionRecord,
)
from shared.utils import now, generate_photo_id, describe_photo_file
from shared.validation import Validator

from ..services import progress
from ..services.autosave import AutosaveTimer
from ..services.report_exporter import build_completion_record
from ..services.template_store import TemplateStore
from ..state import SessionState


@dataclass
class CompletionResult:
    outcome: CompletionOutcome
    record: Optional[CompletionRecord] = None
    export_path: Optional[str] = None
    export_error: Optional[ExportFailure] = None


class ActivitySessionController:
    """Drives one activity from start to completion.

    Every mutation validates, swaps in a new task-state map and flushes the draft.
    Upload workers and the autosave timer never write the map: finished uploads
    are applied by process_upload_results() on the caller's thread, ahead of every
    mutation, completion check and read view, and the timer only calls flush().
    """

    def __init__(self, metadata, template, repository, upload_queue=None, exporter=None,
                 directory=None, context=None, autosave_interval=30.0, report_handoff=None,
                 on_warning=None, completed_by=None, max_notes_length=Validator.MAX_NOTES_LENGTH):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.metadata = metadata
        self.session_key = metadata.session_key
        self.template = template
        self.repository = repository
        self.upload_queue = upload_queue
        self.exporter = exporter
        self.directory = directory
        self.context = context or SessionContext()
        self.report_handoff = report_handoff
        self.on_warning = on_warning
        self.completed_by = completed_by
        self.max_notes_length = max_notes_length

        self.state = SessionState(session_key=self.session_key)
        self._lock = threading.RLock()
        self._autosave = AutosaveTimer(autosave_interval, self.flush, name=f"autosave-{self.session_key}")
        self._tasks = TemplateStore.get_all_tasks(template)
        self._tasks_by_id = {t.id: t for t in self._tasks}

    # ------------------------------------------------------------------ lifecycle

    def start(self):
        """Load or seed task state, register as the active activity and arm autosave."""
        if self.state.status != SessionStatus.NOT_STARTED:
            raise SessionStateError(f"Session {self.session_key} already started")

        draft = None
        try:
            draft = self.repository.load_draft(self.session_key)
        except PersistenceFailure as e:
            self.logger.error(f"Could not load draft {self.session_key}, starting fresh: {e}")

        task_states = dict(draft.task_states) if draft else {}
        for task in self._tasks:
            if task.id not in task_states:
                task_states[task.id] = TaskState(id=task.id)

        with self._lock:
            self.state.task_states = task_states
            self.state.activity_notes = draft.activity_notes if draft else ''
            self.state.started_at = self.metadata.started_at or now()
            self._refresh_status()
            self.state.expanded_task_id = progress.next_incomplete_task(
                self.template, task_states, self.context
            )

        # The registry counts tasks against the stored context
        self.metadata = self.metadata.model_copy(update={
            'started_at': self.state.started_at,
            'context': self.context,
        })
        try:
            self.repository.clear_closed(self.session_key)
            self.repository.save_metadata(self.metadata)
        except PersistenceFailure as e:
            self.logger.error(f"Could not write session records for {self.session_key}: {e}")

        # Writes the draft and the active pointer together
        self.flush()
        self._autosave.start()
        self._requeue_pending_photos()

        self.logger.info(
            f"{'Resumed' if draft else 'Started'} {self.template.type.value} session {self.session_key}"
        )
        return self

    def close(self):
        """Apply finished uploads, final flush and stop autosave. Safe to call more than once."""
        self._autosave.stop()
        with self._lock:
            if self.state.is_open:
                self.process_upload_results()
                self.flush()

    def __enter__(self):
        if self.state.status == SessionStatus.NOT_STARTED:
            self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def save_and_exit(self):
        """Persist, mark the draft closed and leave it for a later resume."""
        self._require_open()
        self._autosave.stop()
        with self._lock:
            self.process_upload_results()
            self.flush()
            self.state.status = SessionStatus.ABANDONED
        try:
            self.repository.set_closed(self.session_key)
        except PersistenceFailure as e:
            self.logger.error(f"Could not mark {self.session_key} closed: {e}")
        self.logger.info(f"Saved and exited {self.session_key}")

    def discard(self):
        """Delete the draft and its records; the session cannot be used afterwards."""
        self._require_open()
        self._autosave.stop()
        # Closed before the delete so a flush already waiting on the lock writes nothing
        with self._lock:
            self.state.status = SessionStatus.ABANDONED
            self._cancel_uploads()
        try:
            self.repository.delete_activity(self.session_key)
        except PersistenceFailure as e:
            self.logger.error(f"Could not delete draft {self.session_key}: {e}")
        self.logger.info(f"Discarded {self.session_key}")

    # ---------------------------------------------------------------- persistence

    def flush(self):
        """Persist a snapshot of the current state.

        Returns False if the store failed or the session is no longer open; a
        closed session never writes its draft or the active pointer again.
        """
        with self._lock:
            if not self.state.is_open:
                return False
            draft = self.state.to_draft()
            try:
                self.repository.save_draft(self.session_key, draft, mark_active=True)
            except PersistenceFailure as e:
                self.state.last_save_error = str(e)
                self.logger.warning(f"Autosave of {self.session_key} failed, keeping state in memory: {e}")
                return False
            self.state.last_saved_at = draft.saved_at
            self.state.last_save_error = None
        return True

    # ------------------------------------------------------------------ mutations

    def toggle_task(self, task_id, completed):
        """Check or uncheck a task. Returns False (with a warning) when rejected."""
        self._require_open()
        with self._lock:
            self.process_upload_results()
            try:
                current = self._state_for(task_id)
                if completed:
                    if current.completed:
                        # Already done: keep completed_at, still persist
                        new_state = current
                    else:
                        self._check_completable(task_id)
                        new_state = current.model_copy(update={'completed': True, 'completed_at': now()})
                else:
                    new_state = current.model_copy(update={'completed': False, 'completed_at': None})
            except ValidationFailure as e:
                self._warn(e)
                return False

            self._commit(task_id, new_state, flush=False)
            if new_state is not current and new_state.completed:
                self.state.expanded_task_id = progress.next_incomplete_task(
                    self.template, self.state.task_states, self.context, after=task_id
                )
        self.flush()
        return True

    def add_photo(self, task_id, local_path):
        """Attach a photo to a task and queue its upload. Returns the Photo, or None if rejected."""
        self._require_open()
        with self._lock:
            self.process_upload_results()
            try:
                current = self._state_for(task_id)
            except ValidationFailure as e:
                self._warn(e)
                return None
            file_name, size = describe_photo_file(local_path)
            photo = Photo(
                id=generate_photo_id(task_id),
                local_path=str(local_path),
                status=PhotoStatus.IN_QUEUE,
                file_name=file_name,
                size=size,
            )
            self._commit(task_id, current.model_copy(update={'photos': current.photos + (photo,)}))
        self._enqueue(photo, task_id)
        return photo

    def remove_photo(self, task_id, photo_id):
        self._require_open()
        with self._lock:
            self.process_upload_results()
            try:
                current = self._state_for(task_id)
                photo = self._photo_for(current, photo_id)
            except ValidationFailure as e:
                self._warn(e)
                return False
            if photo.status == PhotoStatus.IN_QUEUE and self.upload_queue is not None:
                self.upload_queue.cancel(photo_id)
            photos = tuple(p for p in current.photos if p.id != photo_id)
            self._commit(task_id, current.model_copy(update={'photos': photos}))
        return True

    def retry_photo(self, task_id, photo_id):
        """Re-queue a failed upload."""
        self._require_open()
        with self._lock:
            self.process_upload_results()
            try:
                current = self._state_for(task_id)
                photo = self._photo_for(current, photo_id)
                if photo.status != PhotoStatus.FAILED:
                    raise ValidationFailure(f"Photo {photo_id} has not failed; nothing to retry", task_id)
            except ValidationFailure as e:
                self._warn(e)
                return False
            retried = photo.model_copy(update={
                'status': PhotoStatus.IN_QUEUE,
                'error': None,
                'retry_count': photo.retry_count + 1,
            })
            self._commit(task_id, self._replace_photo(current, retried))
        self._enqueue(retried, task_id)
        return True

    def annotate_photo(self, task_id, photo_id, annotations):
        """Replace a photo's annotations."""
        self._require_open()
        with self._lock:
            self.process_upload_results()
            try:
                current = self._state_for(task_id)
                photo = self._photo_for(current, photo_id)
            except ValidationFailure as e:
                self._warn(e)
                return False
            parsed = tuple(
                a if isinstance(a, PhotoAnnotation) else PhotoAnnotation.model_validate(a)
                for a in annotations
            )
            self._commit(task_id, self._replace_photo(current, photo.model_copy(update={'annotations': parsed})))
        return True

    def update_notes(self, task_id, notes):
        self._require_open()
        with self._lock:
            self.process_upload_results()
            try:
                current = self._state_for(task_id)
                clean = Validator.validate_notes(notes, 'Task notes', self.max_notes_length)
            except ValidationFailure as e:
                self._warn(e)
                return False
            self._commit(task_id, current.model_copy(update={'notes': clean}))
        return True

    def toggle_report_issue(self, task_id, enabled):
        """Turning the flag on keeps any existing report; turning it off drops it."""
        self._require_open()
        with self._lock:
            self.process_upload_results()
            try:
                current = self._state_for(task_id)
            except ValidationFailure as e:
                self._warn(e)
                return False
            if enabled:
                update = {'report_issue': True, 'issue_report': current.issue_report or IssueReport()}
            else:
                update = {'report_issue': False, 'issue_report': None}
            self._commit(task_id, current.model_copy(update=update))
        return True

    def update_issue_report(self, task_id, **fields):
        """Merge issue_type/location/item_affected/priority into the task's issue report."""
        self._require_open()
        with self._lock:
            self.process_upload_results()
            try:
                current = self._state_for(task_id)
                validated = Validator.validate_issue_report_data(fields)
            except ValidationFailure as e:
                self._warn(e)
                return False
            existing = current.issue_report.model_dump() if current.issue_report else {}
            report = IssueReport.model_validate({**existing, **validated})
            self._commit(task_id, current.model_copy(update={'report_issue': True, 'issue_report': report}))
        return True

    def update_activity_notes(self, notes):
        self._require_open()
        try:
            clean = Validator.validate_notes(notes, 'Activity notes', self.max_notes_length)
        except ValidationFailure as e:
            self._warn(e)
            return False
        with self._lock:
            self.process_upload_results()
            self.state.activity_notes = clean
        self.flush()
        return True

    # -------------------------------------------------------------------- uploads

    def process_upload_results(self):
        """Apply finished uploads, in the order they completed. Returns how many applied."""
        if self.upload_queue is None:
            return 0
        applied = 0
        with self._lock:
            for result in self.upload_queue.drain_results():
                current = self.state.task_states.get(result.task_id)
                photo = current.find_photo(result.photo_id) if current else None
                if photo is None or photo.status != PhotoStatus.IN_QUEUE:
                    self.logger.debug(f"Ignoring upload result for {result.photo_id}; photo no longer queued")
                    continue
                if result.status == PhotoStatus.UPLOADED:
                    updated = photo.model_copy(update={
                        'status': PhotoStatus.UPLOADED,
                        'url': result.url,
                        'uploaded_at': result.uploaded_at or now(),
                        'error': None,
                    })
                else:
                    updated = photo.model_copy(update={'status': PhotoStatus.FAILED, 'error': result.error})
                self._commit(result.task_id, self._replace_photo(current, updated), flush=False)
                applied += 1
            if applied:
                self.flush()
        return applied

    # ----------------------------------------------------------------- completion

    def complete_activity(self):
        """Finish the activity if every visible required task is done.

        Raises IncompleteRequiredTasks otherwise. Guest-facing activities first
        hand off to the guest report and return REPORT_REQUIRED until it is in.
        """
        self._require_open()
        with self._lock:
            self.process_upload_results()
            task_states = self.state.task_states
            missing = progress.missing_required(self.template, task_states, self.context)
        if missing:
            raise IncompleteRequiredTasks(missing)

        if TemplateStore.is_guest_facing(self.template.type) and not self._report_submitted():
            self.flush()
            if self.report_handoff is not None:
                self.report_handoff(self.metadata.home_id, self.metadata.activity_id, self.metadata.booking_id)
            self.logger.info(f"{self.session_key} needs the guest report before completing")
            return CompletionResult(outcome=CompletionOutcome.REPORT_REQUIRED)

        self._autosave.stop()
        with self._lock:
            self.state.status = SessionStatus.COMPLETING
            task_states = self.state.task_states

        home = self.directory.find_home_by_id(self.metadata.home_id) if self.directory else None
        booking = self.directory.find_booking_by_id(self.metadata.booking_id) if self.directory else None
        record = build_completion_record(
            session_key=self.session_key,
            template=self.template,
            task_states=task_states,
            activity_notes=self.state.activity_notes,
            metadata=self.metadata,
            context=self.context,
            home=home,
            booking=booking,
            completed_by=self.completed_by,
            started_at=self.state.started_at,
        )

        result = CompletionResult(outcome=CompletionOutcome.COMPLETED, record=record)
        if self.exporter is not None:
            try:
                result.export_path = self.exporter.export(record)
            except Exception as e:
                result.export_error = ExportFailure(
                    f"Activity completed, but there was an error generating the report: {e}"
                )
                self.logger.error(str(result.export_error))

        try:
            self.repository.delete_activity(self.session_key)
        except PersistenceFailure as e:
            self.logger.error(f"Completed {self.session_key} but could not clear its draft: {e}")

        self.state.status = SessionStatus.COMPLETED
        self.logger.info(
            f"Completed {self.session_key}: {record.completed_tasks}/{record.total_tasks} tasks"
        )
        return result

    # ----------------------------------------------------------------- read views

    def counts(self):
        self.process_upload_results()
        return progress.activity_counts(self.template, self.state.task_states, self.context)

    def required_counts(self):
        self.process_upload_results()
        return progress.required_counts(self._tasks, self.state.task_states, self.context)

    def phase_progress(self):
        self.process_upload_results()
        return progress.phase_progress(self.template, self.state.task_states, self.context)

    def photo_counts(self):
        self.process_upload_results()
        return progress.photo_counts(self.state.task_states)

    def task_view(self, task_id):
        task = self._tasks_by_id.get(task_id)
        if task is None:
            return None
        self.process_upload_results()
        task_states = self.state.task_states
        phase, _previous, room = TemplateStore.locate_task(self.template, task_id)
        return TaskView(
            task=task,
            state=task_states.get(task_id) or TaskState(id=task_id),
            visible=progress.is_visible(task, self.context),
            locked=progress.is_task_locked(self.template, task_id, task_states, self.context),
            can_complete=progress.can_complete(task, task_states),
            phase_id=phase.id if phase else None,
            room_id=room.id if room else None,
        )

    def upload_queue_view(self):
        """Photos still queued or failed, in task display order."""
        self.process_upload_results()
        views = []
        task_states = self.state.task_states
        for task in self._tasks:
            state = task_states.get(task.id)
            if state is None:
                continue
            for photo in state.photos:
                if photo.status in (PhotoStatus.IN_QUEUE, PhotoStatus.FAILED):
                    views.append(QueuedPhotoView(
                        photo_id=photo.id,
                        task_id=task.id,
                        task_name=task.name,
                        file_name=photo.file_name or photo.id,
                        size=photo.size or 0,
                        status=photo.status,
                    ))
        return views

    # ------------------------------------------------------------------ internals

    def _require_open(self):
        if not self.state.is_open:
            raise SessionStateError(
                f"Session {self.session_key} is {self.state.status.value}; it cannot be changed"
            )

    def _state_for(self, task_id):
        if task_id not in self._tasks_by_id:
            raise ValidationFailure(f"Unknown task {task_id}", task_id)
        return self.state.task_states.get(task_id) or TaskState(id=task_id)

    @staticmethod
    def _photo_for(task_state, photo_id):
        photo = task_state.find_photo(photo_id)
        if photo is None:
            raise ValidationFailure(f"Photo {photo_id} not found on task {task_state.id}", task_state.id)
        return photo

    @staticmethod
    def _replace_photo(task_state, photo):
        photos = tuple(photo if p.id == photo.id else p for p in task_state.photos)
        return task_state.model_copy(update={'photos': photos})

    def _check_completable(self, task_id):
        task = self._tasks_by_id[task_id]
        task_states = self.state.task_states
        if not progress.is_visible(task, self.context):
            raise ValidationFailure(f"'{task.name}' does not apply to this activity", task_id)
        if progress.is_task_locked(self.template, task_id, task_states, self.context):
            raise ValidationFailure(f"Finish the previous phase before '{task.name}'", task_id)
        blocked_by = progress.incomplete_dependencies(task, task_states)
        if blocked_by:
            names = ', '.join(self._tasks_by_id[d].name for d in blocked_by)
            raise ValidationFailure(f"Complete prerequisite tasks first: {names}", task_id)
        state = task_states.get(task_id)
        if task.photo_required and not (state and state.uploaded_photo_count):
            raise ValidationFailure(f"Upload at least one photo before completing '{task.name}'", task_id)

    def _commit(self, task_id, new_state, flush=True):
        """Swap in a new map with one task state replaced."""
        with self._lock:
            task_states = dict(self.state.task_states)
            task_states[task_id] = new_state
            self.state.task_states = task_states
            self._refresh_status()
        if flush:
            self.flush()

    def _refresh_status(self):
        if not self.state.is_open and self.state.status != SessionStatus.NOT_STARTED:
            return
        ready = progress.all_required_completed(self.template, self.state.task_states, self.context)
        self.state.status = SessionStatus.READY_TO_COMPLETE if ready else SessionStatus.IN_PROGRESS

    def _warn(self, error):
        message = str(error)
        self.state.warnings.append(message)
        self.logger.warning(f"{self.session_key}: {message}")
        if self.on_warning is not None:
            self.on_warning(message)

    def _report_submitted(self):
        try:
            return self.repository.report_submitted(self.session_key)
        except PersistenceFailure as e:
            self.logger.error(f"Could not read guest report flag for {self.session_key}: {e}")
            return False

    def _enqueue(self, photo, task_id):
        if self.upload_queue is not None:
            self.upload_queue.enqueue(photo, task_id)

    def _requeue_pending_photos(self):
        """Photos left in-queue by a previous process get a fresh upload attempt."""
        if self.upload_queue is None:
            return
        for task_id, state in self.state.task_states.items():
            for photo in state.photos:
                if photo.status == PhotoStatus.IN_QUEUE:
                    self.upload_queue.enqueue(photo, task_id)

    def _cancel_uploads(self):
        if self.upload_queue is None:
            return
        for state in self.state.task_states.values():
            for photo in state.photos:
                if photo.status == PhotoStatus.IN_QUEUE:
                    self.upload_queue.cancel(photo.id)
