"""Tests for completion records, the JSON exporter and the home directory."""
import json
from datetime import datetime

import pytest

from shared.enums import ActivityType, PhotoStatus
from shared.schemas import ActivityMetadata, TaskState, Photo, IssueReport
from shared.utils import APP_TIMEZONE

from field_ops.services.directory_service import HomeDirectory
from field_ops.services.report_exporter import build_completion_record, JsonReportExporter

from conftest import CHECKLIST_TEMPLATE

COMPLETED_AT = datetime(2024, 7, 3, 14, 5, 9, tzinfo=APP_TIMEZONE)


@pytest.fixture
def metadata():
    return ActivityMetadata(
        session_key='activity-tracker-draft-home2-adhoc',
        home_id='home2',
        home_code='GEN2',
        home_name='Test Home Two',
        activity_type=ActivityType.ADHOC,
        booking_id='BK-1001',
    )


@pytest.fixture
def task_states():
    return {
        'check-1': TaskState(id='check-1', completed=True, completed_at=COMPLETED_AT, notes='Opened'),
        'check-2': TaskState(
            id='check-2', completed=True, completed_at=COMPLETED_AT,
            report_issue=True, issue_report=IssueReport(location='Hall'),
        ),
        'check-3': TaskState(id='check-3', photos=(
            Photo(id='p1', local_path='/tmp/1.jpg', file_name='1.jpg', status=PhotoStatus.UPLOADED, url='https://cdn/p1'),
            Photo(id='p2', local_path='/tmp/2.jpg', file_name='2.jpg', status=PhotoStatus.FAILED, error='timeout'),
        )),
    }


def test_build_completion_record(metadata, task_states, directory, summer_context):
    record = build_completion_record(
        session_key=metadata.session_key,
        template=CHECKLIST_TEMPLATE,
        task_states=task_states,
        activity_notes='All fine',
        metadata=metadata,
        context=summer_context,
        home=directory.find_home_by_id('home2'),
        booking=directory.find_booking_by_id('BK-1001'),
        completed_by='Alex',
        completed_at=COMPLETED_AT,
    )
    assert record.activity_type == ActivityType.ADHOC
    assert record.activity_name == 'Test Checklist'
    assert record.home_address == '2 Test Street'
    assert record.guest_name == 'Sam Guest'
    assert record.completed_by == 'Alex'
    assert (record.completed_tasks, record.total_tasks) == (2, 3)
    assert (record.total_photos, record.uploaded_photos) == (2, 1)
    assert [t.id for t in record.tasks] == ['check-1', 'check-2', 'check-3']
    assert record.tasks[0].notes == 'Opened'
    assert record.tasks[1].issue_report.location == 'Hall'
    assert record.tasks[2].notes is None
    assert record.tasks[2].photos[0].url == 'https://cdn/p1'


def test_record_without_directory(metadata, summer_context):
    record = build_completion_record(
        session_key=metadata.session_key,
        template=CHECKLIST_TEMPLATE,
        task_states={},
        activity_notes='',
        metadata=metadata,
        context=summer_context,
    )
    assert record.home_code == 'GEN2'
    assert record.home_name == 'Test Home Two'
    assert record.booking_id == 'BK-1001'
    assert record.guest_name is None
    assert record.completed_tasks == 0


def test_json_exporter_writes_file(tmp_path, metadata, task_states, summer_context):
    record = build_completion_record(
        session_key=metadata.session_key,
        template=CHECKLIST_TEMPLATE,
        task_states=task_states,
        activity_notes='All fine',
        metadata=metadata,
        context=summer_context,
        completed_at=COMPLETED_AT,
    )
    exporter = JsonReportExporter(tmp_path / 'reports')
    path = exporter.export(record)
    assert path.endswith('GEN2-adhoc-20240703T140509.json')

    with open(path, encoding='utf-8') as f:
        data = json.load(f)
    assert data['activity_type'] == 'adhoc'
    assert data['activity_notes'] == 'All fine'
    assert data['tasks'][2]['photos'][1]['status'] == 'failed'


def test_exporter_filename_is_filesystem_safe(tmp_path, metadata, summer_context):
    metadata = metadata.model_copy(update={'home_code': 'FLAT 3/B'})
    record = build_completion_record(
        session_key=metadata.session_key,
        template=CHECKLIST_TEMPLATE,
        task_states={},
        activity_notes='',
        metadata=metadata,
        context=summer_context,
        completed_at=COMPLETED_AT,
    )
    assert JsonReportExporter(tmp_path).filename_for(record) == 'FLAT_3_B-adhoc-20240703T140509.json'


class TestHomeDirectory:

    def test_lookups(self, directory):
        assert directory.find_home_by_id('home1').code == 'TEST1'
        assert directory.find_home_by_code('test1').id == 'home1'
        assert directory.find_home_by_code(None) is None
        assert directory.find_booking_by_id('b-1').guest_name == 'Sam Guest'
        assert directory.find_booking_by_id('BK-1001').id == 'b-1'
        assert directory.find_booking_by_id('nope') is None
        assert [h.code for h in directory.list_homes()] == ['GEN2', 'TEST1']
        assert [b.id for b in directory.bookings_for_home('home2')] == ['b-1']

    def test_from_json_file(self, tmp_path):
        path = tmp_path / 'directory.json'
        path.write_text(json.dumps({
            'homes': [{'id': 'h1', 'code': 'COS285', 'name': 'Cockspur Street',
                       'coordinates': {'lat': 51.507, 'lng': -0.129}}],
            'bookings': [{
                'id': 'b1', 'booking_id': 'BK-1', 'guest_name': 'Ada', 'home_id': 'h1', 'home_code': 'COS285',
                'check_in': '2024-07-01T15:00:00+01:00', 'check_out': '2024-07-04T11:00:00+01:00',
            }],
        }))
        directory = HomeDirectory.from_json_file(str(path))
        assert directory.find_home_by_id('h1').coordinates.lat == 51.507
        assert directory.find_booking_by_id('BK-1').home_code == 'COS285'
