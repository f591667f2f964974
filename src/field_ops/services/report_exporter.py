"""Completion records and where they go once an activity is finished."""
import logging
import os
import re
from pathlib import Path

from shared.enums import PhotoStatus
from shared.schemas import CompletionRecord, CompletedTask, CompletedPhoto, TaskState
from shared.utils import now

from . import progress
from .template_store import TemplateStore


def build_completion_record(session_key, template, task_states, activity_notes, metadata, context,
                            home=None, booking=None, completed_by=None, started_at=None,
                            completed_at=None):
    """Assemble the CompletionRecord for a finished activity.

    Only tasks visible in the session context are listed and counted.
    """
    tasks = []
    total_photos = uploaded_photos = 0
    for task in progress.visible_tasks(TemplateStore.get_all_tasks(template), context):
        state = task_states.get(task.id) or TaskState(id=task.id)
        photos = tuple(
            CompletedPhoto(
                id=p.id,
                file_name=p.file_name,
                status=p.status,
                uploaded_at=p.uploaded_at,
                url=p.url,
                annotations=p.annotations,
            )
            for p in state.photos
        )
        total_photos += len(photos)
        uploaded_photos += sum(1 for p in photos if p.status == PhotoStatus.UPLOADED)
        tasks.append(CompletedTask(
            id=task.id,
            name=task.name,
            required=task.required,
            completed=state.completed,
            completed_at=state.completed_at,
            notes=state.notes or None,
            report_issue=state.report_issue,
            issue_report=state.issue_report,
            photos=photos,
        ))

    counts = progress.activity_counts(template, task_states, context)
    return CompletionRecord(
        session_key=session_key,
        activity_type=template.type,
        activity_name=template.name,
        activity_id=metadata.activity_id,
        home_id=metadata.home_id,
        home_code=home.code if home else metadata.home_code,
        home_name=(home.name if home else None) or metadata.home_name,
        home_address=home.address if home else None,
        home_coordinates=home.coordinates if home else None,
        booking_id=booking.booking_id if booking else metadata.booking_id,
        guest_name=booking.guest_name if booking else None,
        completed_by=completed_by,
        tasks=tuple(tasks),
        activity_notes=activity_notes,
        property_metadata=template.metadata,
        started_at=started_at or metadata.started_at,
        completed_at=completed_at or now(),
        completed_tasks=counts.completed,
        total_tasks=counts.total,
        total_photos=total_photos,
        uploaded_photos=uploaded_photos,
    )


class JsonReportExporter:
    """Writes each completion record as a JSON file under reports_dir."""

    UNSAFE_CHARS = re.compile(r'[^A-Za-z0-9._-]+')

    def __init__(self, reports_dir):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.reports_dir = Path(reports_dir)

    def filename_for(self, record):
        stamp = record.completed_at.strftime('%Y%m%dT%H%M%S')
        base = f"{record.home_code}-{record.activity_type.value}-{stamp}"
        return self.UNSAFE_CHARS.sub('_', base) + '.json'

    def export(self, record):
        """Write the record and return the file path."""
        self.reports_dir.mkdir(parents=True, exist_ok=True)
        path = self.reports_dir / self.filename_for(record)
        path.write_text(record.model_dump_json(indent=2), encoding='utf-8')
        self.logger.info(f"Exported completion record to {path}")
        return os.fspath(path)
