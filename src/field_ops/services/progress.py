"""Progress aggregation over a template and its task states.

Everything here is a pure function of (template or tasks, task_states, context).
Only visible tasks count; a missing TaskState counts as incomplete.
"""
from shared.enums import PhotoStatus
from shared.schemas import ProgressCounts, PhotoCounts, PhaseProgress

from .template_store import TemplateStore


def _is_completed(task_id, task_states):
    state = task_states.get(task_id)
    return bool(state and state.completed)


def is_visible(task, context):
    """True when the task has no conditional or every predicate it sets matches."""
    conditional = task.conditional
    if conditional is None:
        return True
    if conditional.season is not None and conditional.season != context.season:
        return False
    if conditional.occupancy is not None and conditional.occupancy != context.occupancy:
        return False
    return True


def visible_tasks(tasks, context):
    return [t for t in tasks if is_visible(t, context)]


def can_complete(task, task_states):
    """True when every dependency maps to a completed task state."""
    return all(_is_completed(dep, task_states) for dep in task.dependencies)


def incomplete_dependencies(task, task_states):
    return [dep for dep in task.dependencies if not _is_completed(dep, task_states)]


def phase_locked(phase, previous_phase, task_states, context):
    """A phase is locked while any visible task of the previous phase is incomplete."""
    if previous_phase is None:
        return False
    return any(
        not _is_completed(t.id, task_states)
        for t in visible_tasks(TemplateStore.phase_tasks(previous_phase), context)
    )


def is_task_locked(template, task_id, task_states, context):
    phase, previous, _room = TemplateStore.locate_task(template, task_id)
    if phase is None:
        return False
    return phase_locked(phase, previous, task_states, context)


def counts(tasks, task_states, context):
    shown = visible_tasks(tasks, context)
    completed = sum(1 for t in shown if _is_completed(t.id, task_states))
    return ProgressCounts.of(completed, len(shown))


def required_counts(tasks, task_states, context):
    return counts([t for t in tasks if t.required], task_states, context)


def room_counts(room, task_states, context):
    return counts(room.tasks, task_states, context)


def phase_counts(phase, task_states, context):
    return counts(TemplateStore.phase_tasks(phase), task_states, context)


def activity_counts(template, task_states, context):
    return counts(TemplateStore.get_all_tasks(template), task_states, context)


def missing_required(template, task_states, context):
    """Ids of visible required tasks that are not completed, in display order.

    Phase locks are irrelevant here: this is the completion gate.
    """
    return [
        t.id for t in visible_tasks(TemplateStore.get_all_tasks(template), context)
        if t.required and not _is_completed(t.id, task_states)
    ]


def all_required_completed(template, task_states, context):
    return not missing_required(template, task_states, context)


def photo_counts(task_states):
    total = uploaded = queued = failed = 0
    for state in task_states.values():
        for photo in state.photos:
            total += 1
            if photo.status == PhotoStatus.UPLOADED:
                uploaded += 1
            elif photo.status == PhotoStatus.IN_QUEUE:
                queued += 1
            elif photo.status == PhotoStatus.FAILED:
                failed += 1
    return PhotoCounts(total=total, uploaded=uploaded, queued=queued, failed=failed)


def phase_progress(template, task_states, context):
    """Per-phase lock state and counts, in phase order. Empty for flat templates."""
    result = []
    previous = None
    for phase in TemplateStore.get_phases(template):
        result.append(PhaseProgress(
            phase_id=phase.id,
            name=phase.name,
            order=phase.order,
            locked=phase_locked(phase, previous, task_states, context),
            counts=phase_counts(phase, task_states, context),
        ))
        previous = phase
    return result


def next_incomplete_task(template, task_states, context, after=None):
    """Id of the next incomplete visible task.

    Searches forward from `after`, then wraps to the start; None when everything
    visible is complete.
    """
    shown = visible_tasks(TemplateStore.get_all_tasks(template), context)
    ids = [t.id for t in shown]
    start = ids.index(after) + 1 if after in ids else 0
    for task_id in ids[start:] + ids[:start]:
        if task_id != after and not _is_completed(task_id, task_states):
            return task_id
    return None
