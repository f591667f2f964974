"""Tests for domain models and shared utilities."""
from datetime import datetime

import pytest
from pydantic import ValidationError

from shared.enums import ActivityType, PhotoStatus, Season, AnnotationKind
from shared.schemas import (
    ActivityTemplate, PhaseTemplate, TaskState, Photo, PhotoAnnotation, ProgressCounts,
    ActivityDraft, SessionContext,
)
from shared.utils import APP_TIMEZONE, season_for, generate_photo_id, compute_photo_hash, describe_photo_file


def test_template_needs_exactly_one_layout():
    with pytest.raises(ValidationError):
        ActivityTemplate(type=ActivityType.ADHOC, name='Neither')

    with pytest.raises(ValidationError):
        ActivityTemplate.model_validate({
            'type': 'adhoc',
            'name': 'Both',
            'tasks': [{'id': 't', 'name': 'T'}],
            'phases': [{'id': 'p', 'name': 'arrive', 'order': 1, 'tasks': [{'id': 'u', 'name': 'U'}]}],
        })


def test_phase_needs_tasks():
    with pytest.raises(ValidationError):
        PhaseTemplate(id='p', name='arrive', order=1)


def test_task_state_photo_helpers():
    state = TaskState(id='t', photos=(
        Photo(id='p1', local_path='/tmp/a.jpg', status=PhotoStatus.UPLOADED),
        Photo(id='p2', local_path='/tmp/b.jpg'),
    ))
    assert state.uploaded_photo_count == 1
    assert state.find_photo('p2').status == PhotoStatus.IN_QUEUE
    assert state.find_photo('missing') is None


def test_task_state_is_immutable():
    state = TaskState(id='t')
    with pytest.raises(ValidationError):
        state.completed = True


def test_annotation_position_is_relative():
    PhotoAnnotation(id='a', kind=AnnotationKind.ARROW, x=0.0, y=1.0)
    with pytest.raises(ValidationError):
        PhotoAnnotation(id='a', kind=AnnotationKind.CIRCLE, x=1.5, y=0.2)


def test_progress_counts_percent():
    assert ProgressCounts.of(0, 0).percent == 0
    assert ProgressCounts.of(1, 3).percent == 33
    assert ProgressCounts.of(2, 3).percent == 67
    assert ProgressCounts.of(4, 4).percent == 100


def test_draft_json_round_trip():
    states = {
        't-1': TaskState(id='t-1'),
        't-2': TaskState(
            id='t-2',
            completed=True,
            completed_at=datetime(2024, 6, 1, 10, 30, tzinfo=APP_TIMEZONE),
            notes='Window sticks',
            photos=(Photo(id='p', local_path='/tmp/p.jpg', status=PhotoStatus.FAILED, error='timeout'),),
        ),
    }
    draft = ActivityDraft(task_states=states, activity_notes='All good')
    loaded = ActivityDraft.model_validate_json(draft.model_dump_json())
    assert loaded.task_states == states
    assert loaded.activity_notes == 'All good'


def test_season_for():
    assert season_for(datetime(2024, 5, 1)) == Season.SUMMER
    assert season_for(datetime(2024, 10, 31)) == Season.SUMMER
    assert season_for(datetime(2024, 11, 1)) == Season.WINTER
    assert season_for(datetime(2024, 1, 15)) == Season.WINTER
    assert SessionContext().season == season_for()


def test_generate_photo_id_is_unique():
    ids = {generate_photo_id('hall-1') for _ in range(50)}
    assert len(ids) == 50
    assert all(i.startswith('hall-1-') for i in ids)


def test_compute_photo_hash(tmp_path):
    path = tmp_path / 'p.jpg'
    path.write_bytes(b'abc')
    expected = 'ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad'
    assert compute_photo_hash(b'abc') == expected
    assert compute_photo_hash(str(path)) == expected
    with pytest.raises(TypeError):
        compute_photo_hash(123)


def test_describe_photo_file(tmp_path):
    path = tmp_path / 'kitchen.jpg'
    path.write_bytes(b'12345')
    assert describe_photo_file(str(path)) == ('kitchen.jpg', 5)
    assert describe_photo_file(str(tmp_path / 'gone.jpg')) == ('gone.jpg', None)
