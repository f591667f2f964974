"""Template lookup and flattening."""
import logging

from shared.enums import ActivityType, GUEST_FACING_ACTIVITY_TYPES
from shared.templates import GENERIC_TEMPLATE_TABLE, PROPERTY_TEMPLATE_TABLE


class TemplateStore:
    """Resolves activity templates from the static tables.

    A property-specific template wins for (type, property code); otherwise the
    generic template for the type is returned, so get_template never fails for
    a valid ActivityType.
    """

    def __init__(self, generic_templates=None, property_templates=None):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.generic_templates = dict(generic_templates or GENERIC_TEMPLATE_TABLE)
        self.property_templates = dict(property_templates or PROPERTY_TEMPLATE_TABLE)

    def get_template(self, activity_type, property_code=None):
        activity_type = ActivityType(activity_type)
        if property_code:
            template = self.property_templates.get((activity_type, property_code.upper()))
            if template is not None:
                return template
            self.logger.debug(f"No {activity_type.value} template for {property_code}, using generic")
        return self.generic_templates[activity_type]

    def list_activity_types(self):
        return [t for t in ActivityType if t in self.generic_templates]

    def list_property_codes(self, activity_type=None):
        codes = {
            code for (t, code) in self.property_templates
            if activity_type is None or t == ActivityType(activity_type)
        }
        return sorted(codes)

    @staticmethod
    def is_guest_facing(activity_type):
        return ActivityType(activity_type) in GUEST_FACING_ACTIVITY_TYPES

    @staticmethod
    def get_phases(template):
        return sorted(template.phases, key=lambda p: p.order)

    @staticmethod
    def phase_tasks(phase):
        """Tasks of a phase: direct tasks by order, then each room's tasks by order."""
        tasks = sorted(phase.tasks, key=lambda t: t.order)
        for room in phase.rooms:
            tasks.extend(sorted(room.tasks, key=lambda t: t.order))
        return tasks

    @staticmethod
    def get_all_tasks(template):
        """Flatten a template into its task list, in display order."""
        if not template.is_phased:
            return sorted(template.tasks, key=lambda t: t.order)
        tasks = []
        for phase in TemplateStore.get_phases(template):
            tasks.extend(TemplateStore.phase_tasks(phase))
        return tasks

    @staticmethod
    def find_task(template, task_id):
        for task in TemplateStore.get_all_tasks(template):
            if task.id == task_id:
                return task
        return None

    @staticmethod
    def locate_task(template, task_id):
        """Return (phase, previous_phase, room) for a task; all None for flat templates.

        Raises KeyError when the task is not in the template.
        """
        if not template.is_phased:
            if any(t.id == task_id for t in template.tasks):
                return None, None, None
            raise KeyError(task_id)
        previous = None
        for phase in TemplateStore.get_phases(template):
            if any(t.id == task_id for t in phase.tasks):
                return phase, previous, None
            for room in phase.rooms:
                if any(t.id == task_id for t in room.tasks):
                    return phase, previous, room
            previous = phase
        raise KeyError(task_id)
