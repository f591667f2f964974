"""Tests for the active-activity registry."""
from datetime import timedelta

from shared.enums import ActivityType, ConflictResolution, Season, Occupancy
from shared.schemas import ActivityDraft, ActivityMetadata, TaskState, SessionContext
from shared.utils import now

from field_ops.repositories.draft_repository import session_key_for, closed_key, meta_key

KEY_A = session_key_for('home1', ActivityType.PROVISIONING)
KEY_B = session_key_for('home2', ActivityType.MEET_GREET)


def _store_activity(repository, session_key, home_id, home_code, activity_type, completed=(),
                    saved_at=None, mark_active=True, context=None):
    repository.save_metadata(ActivityMetadata(
        session_key=session_key,
        home_id=home_id,
        home_code=home_code,
        activity_type=activity_type,
        context=context,
    ))
    states = {task_id: TaskState(id=task_id, completed=True) for task_id in completed}
    repository.save_draft(
        session_key,
        ActivityDraft(task_states=states, saved_at=saved_at or now()),
        mark_active=mark_active,
    )


def test_no_pointer_means_no_active_activity(registry):
    assert registry.get_active_activity() is None


def test_active_activity_info(registry, repository):
    _store_activity(repository, KEY_A, 'home1', 'TEST1', ActivityType.PROVISIONING, completed=('a-1',))
    info = registry.get_active_activity()
    assert info.session_key == KEY_A
    assert info.home_code == 'TEST1'
    assert info.home_name == 'Test Home One'
    assert info.activity_type == ActivityType.PROVISIONING
    # Property template for TEST1 has four visible tasks in either season
    assert (info.completed_tasks, info.total_tasks) == (1, 4)


def test_pointer_without_draft(registry, repository):
    repository.set_active_pointer(KEY_A)
    assert registry.get_active_activity() is None


def test_orphaned_drafts_are_not_active(registry, repository, store):
    _store_activity(repository, KEY_A, 'gone-home', 'GONE', ActivityType.PROVISIONING)
    assert registry.get_active_activity() is None

    _store_activity(repository, KEY_B, 'home2', 'GEN2', ActivityType.MEET_GREET)
    store.delete(meta_key(KEY_B))
    assert registry.get_active_activity() is None


def test_check_conflict(registry, repository):
    _store_activity(repository, KEY_A, 'home1', 'TEST1', ActivityType.PROVISIONING)
    assert registry.check_conflict(KEY_A) is None
    conflict = registry.check_conflict(KEY_B)
    assert conflict.session_key == KEY_A


def test_cancel_changes_nothing(registry, repository):
    _store_activity(repository, KEY_A, 'home1', 'TEST1', ActivityType.PROVISIONING)
    conflict = registry.check_conflict(KEY_B)
    assert registry.resolve_conflict(ConflictResolution.CANCEL, conflict) is False
    assert registry.get_active_activity().session_key == KEY_A
    assert repository.has_draft(KEY_A)


def test_save_and_switch_keeps_draft(registry, repository):
    _store_activity(repository, KEY_A, 'home1', 'TEST1', ActivityType.PROVISIONING, completed=('a-1',))
    conflict = registry.check_conflict(KEY_B)
    assert registry.resolve_conflict(ConflictResolution.SAVE_AND_SWITCH, conflict) is True
    assert registry.get_active_activity() is None
    assert repository.load_draft(KEY_A).task_states['a-1'].completed
    assert repository.is_closed(KEY_A)


def test_discard_and_switch_deletes_draft(registry, repository, store):
    _store_activity(repository, KEY_A, 'home1', 'TEST1', ActivityType.PROVISIONING)
    repository.set_closed(KEY_A)
    conflict = registry.check_conflict(KEY_B)
    assert registry.resolve_conflict('discard_and_switch', conflict) is True
    assert registry.get_active_activity() is None
    assert not repository.has_draft(KEY_A)
    assert store.get(meta_key(KEY_A)) is None
    assert store.get(closed_key(KEY_A)) is None

    # B autosaves and becomes the active activity
    _store_activity(repository, KEY_B, 'home2', 'GEN2', ActivityType.MEET_GREET)
    assert registry.get_active_activity().session_key == KEY_B


def test_mark_and_clear_active(registry, repository):
    _store_activity(repository, KEY_A, 'home1', 'TEST1', ActivityType.PROVISIONING, mark_active=False)
    assert registry.get_active_activity() is None
    registry.mark_active(KEY_A)
    assert registry.get_active_activity().session_key == KEY_A
    assert registry.clear_active(KEY_B) is False
    assert registry.clear_active(KEY_A) is True
    assert registry.get_active_activity() is None


def test_list_paused_drafts_newest_first(registry, repository):
    earlier = now() - timedelta(hours=2)
    _store_activity(repository, KEY_A, 'home1', 'TEST1', ActivityType.PROVISIONING, saved_at=earlier)
    _store_activity(repository, KEY_B, 'home2', 'GEN2', ActivityType.MEET_GREET)
    # Metadata left behind without a draft is not listed
    repository.save_metadata(ActivityMetadata(
        session_key='activity-stale', home_id='home2', home_code='GEN2', activity_type=ActivityType.TURN,
    ))
    assert [m.session_key for m in registry.list_paused_drafts()] == [KEY_B, KEY_A]


def test_counts_use_stored_session_context(registry, repository):
    winter = SessionContext(season=Season.WINTER, occupancy=Occupancy.BOOKING)
    # l-2 only applies in winter
    _store_activity(repository, KEY_A, 'home1', 'TEST1', ActivityType.PROVISIONING,
                    completed=('a-1', 'l-2'), context=winter)
    info = registry.get_active_activity()
    assert (info.completed_tasks, info.total_tasks) == (2, 4)

    summer = SessionContext(season=Season.SUMMER, occupancy=Occupancy.BOOKING)
    _store_activity(repository, KEY_A, 'home1', 'TEST1', ActivityType.PROVISIONING,
                    completed=('a-1', 'l-2'), context=summer)
    info = registry.get_active_activity()
    assert (info.completed_tasks, info.total_tasks) == (1, 4)


def test_active_info_matches_winter_session(registry, make_session, winter_context):
    session = make_session(ActivityType.PROVISIONING, home_id='home1', context=winter_context)
    assert session.toggle_task('a-1', True)
    assert session.toggle_task('l-2', True)

    info = registry.get_active_activity()
    counts = session.counts()
    assert (info.completed_tasks, info.total_tasks) == (counts.completed, counts.total) == (2, 4)
