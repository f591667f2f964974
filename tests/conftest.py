"""Shared fixtures for the activity engine tests."""
import threading
from datetime import datetime

import pytest

from shared.enums import ActivityType, Season, Occupancy, PhaseName
from shared.schemas import SessionContext, ActivityMetadata
from shared.templates import build_template, GENERIC_TEMPLATE_TABLE
from shared.utils import APP_TIMEZONE

from field_ops.local_db import LocalStore
from field_ops.repositories.draft_repository import DraftRepository, session_key_for
from field_ops.services.template_store import TemplateStore
from field_ops.services.directory_service import HomeDirectory
from field_ops.services.upload_queue import PhotoUploadQueue
from field_ops.services.activity_registry import ActiveActivityRegistry
from field_ops.handlers.activity_session import ActivitySessionController


# Flat checklist: two required tasks (the second gated on the first) and an optional photo task
CHECKLIST_TEMPLATE = build_template({
    'type': ActivityType.ADHOC.value,
    'name': 'Test Checklist',
    'tasks': [
        {'id': 'check-1', 'name': 'Open up', 'required': True, 'order': 1},
        {'id': 'check-2', 'name': 'Inspect', 'required': True, 'order': 2, 'dependencies': ['check-1']},
        {'id': 'check-3', 'name': 'Photograph hall', 'required': False, 'photo_required': True, 'order': 3},
    ],
})

# Three phases; season-dependent tasks in the first two
PHASED_TEMPLATE = build_template({
    'type': ActivityType.PROVISIONING.value,
    'name': 'Test Provisioning',
    'metadata': {'property_code': 'TEST1', 'property_name': 'Test Home One', 'version': '1'},
    'phases': [
        {'id': 'arrive', 'name': PhaseName.ARRIVE.value, 'order': 1, 'tasks': [
            {'id': 'a-1', 'name': 'Unlock', 'required': True, 'order': 1},
            {'id': 'a-2', 'name': 'Open windows', 'required': True, 'order': 2,
             'conditional': {'season': Season.SUMMER.value}},
        ]},
        {'id': 'during', 'name': PhaseName.DURING.value, 'order': 2, 'rooms': [
            {'id': 'lounge', 'code': 'L', 'name': 'Lounge', 'tasks': [
                {'id': 'l-1', 'name': 'Vacuum', 'required': True, 'order': 1},
                {'id': 'l-2', 'name': 'Light fire', 'required': True, 'order': 2,
                 'conditional': {'season': Season.WINTER.value}},
            ]},
        ]},
        {'id': 'depart', 'name': PhaseName.DEPART.value, 'order': 3, 'tasks': [
            {'id': 'd-1', 'name': 'Lock up', 'required': True, 'order': 1},
        ]},
    ],
})

GUEST_TEMPLATE = build_template({
    'type': ActivityType.MEET_GREET.value,
    'name': 'Test Meet & Greet',
    'tasks': [
        {'id': 'g-1', 'name': 'Welcome guest', 'required': True, 'order': 1},
    ],
})


class ImmediateUploader:
    """Uploader that succeeds at once and records what it was given."""

    def __init__(self):
        self.calls = []
        self._lock = threading.Lock()

    def __call__(self, photo, task_id, timeout=None):
        with self._lock:
            self.calls.append((photo.id, task_id))
        return f"https://cdn.test/{task_id}/{photo.id}"


class FailingUploader:
    def __init__(self, error=None):
        self.error = error or ConnectionError('network unreachable')
        self.calls = 0

    def __call__(self, photo, task_id, timeout=None):
        self.calls += 1
        raise self.error


class RecordingExporter:
    def __init__(self, fail_with=None):
        self.records = []
        self.fail_with = fail_with

    def export(self, record):
        if self.fail_with is not None:
            raise self.fail_with
        self.records.append(record)
        return f"memory://{record.session_key}"


def settle_uploads(session, timeout=5.0):
    """Wait for queued uploads, then apply their results."""
    assert session.upload_queue.wait_idle(timeout)
    return session.process_upload_results()


@pytest.fixture
def store(tmp_path):
    local_store = LocalStore(str(tmp_path / 'field_ops_test.db'))
    yield local_store
    local_store.close()


@pytest.fixture
def repository(store):
    return DraftRepository(store)


@pytest.fixture
def template_store():
    generic = dict(GENERIC_TEMPLATE_TABLE)
    generic[ActivityType.ADHOC] = CHECKLIST_TEMPLATE
    generic[ActivityType.MEET_GREET] = GUEST_TEMPLATE
    return TemplateStore(
        generic_templates=generic,
        property_templates={(ActivityType.PROVISIONING, 'TEST1'): PHASED_TEMPLATE},
    )


@pytest.fixture
def directory():
    return HomeDirectory(
        homes=[
            {'id': 'home1', 'code': 'TEST1', 'name': 'Test Home One', 'address': '1 Test Street', 'city': 'London'},
            {'id': 'home2', 'code': 'GEN2', 'name': 'Test Home Two', 'address': '2 Test Street', 'city': 'London'},
        ],
        bookings=[
            {
                'id': 'b-1', 'booking_id': 'BK-1001', 'guest_name': 'Sam Guest',
                'home_id': 'home2', 'home_code': 'GEN2',
                'check_in': datetime(2024, 7, 1, 15, 0, tzinfo=APP_TIMEZONE),
                'check_out': datetime(2024, 7, 5, 11, 0, tzinfo=APP_TIMEZONE),
            },
        ],
    )


@pytest.fixture
def summer_context():
    return SessionContext(season=Season.SUMMER, occupancy=Occupancy.BOOKING)


@pytest.fixture
def winter_context():
    return SessionContext(season=Season.WINTER, occupancy=Occupancy.BOOKING)


@pytest.fixture
def uploader():
    return ImmediateUploader()


@pytest.fixture
def upload_queue(uploader):
    queue = PhotoUploadQueue(uploader, max_workers=2, timeout=5.0, max_retries=2, retry_delay=0)
    yield queue
    queue.shutdown(wait=True)


@pytest.fixture
def exporter():
    return RecordingExporter()


@pytest.fixture
def registry(repository, template_store, directory):
    return ActiveActivityRegistry(repository, template_store, directory)


@pytest.fixture
def photo_file(tmp_path):
    path = tmp_path / 'hall.jpg'
    path.write_bytes(b'\xff\xd8\xff\xe0' + b'0' * 128)
    return path


@pytest.fixture
def make_session(repository, template_store, directory, upload_queue, exporter, summer_context):
    """Factory for started controllers; every controller is closed at teardown."""
    sessions = []

    def factory(activity_type=ActivityType.ADHOC, home_id='home2', context=None, booking_id=None,
                activity_id=None, start=True, **kwargs):
        home = directory.find_home_by_id(home_id)
        template = template_store.get_template(activity_type, home.code)
        metadata = ActivityMetadata(
            session_key=session_key_for(home_id, activity_type, activity_id),
            home_id=home.id,
            home_code=home.code,
            home_name=home.name,
            activity_type=activity_type,
            property_code=template.property_code,
            booking_id=booking_id,
            activity_id=activity_id,
        )
        options = dict(
            upload_queue=upload_queue,
            exporter=exporter,
            directory=directory,
            context=context or summer_context,
            autosave_interval=3600,
        )
        options.update(kwargs)
        session = ActivitySessionController(metadata, template, repository, **options)
        sessions.append(session)
        if start:
            session.start()
        return session

    yield factory
    for session in sessions:
        session.close()
