"""Input validation utilities and authoring-time template checks."""
import bleach

from shared.enums import IssueType, PriorityLevel
from shared.errors import ValidationFailure, TemplateValidationError


class Validator:
    """Input validation utilities."""

    MAX_NOTES_LENGTH = 10000

    @staticmethod
    def validate_required(value, field_name):
        """Validate that a required field is not empty."""
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationFailure(f"{field_name} is required")
        return value

    @staticmethod
    def validate_string_length(value, field_name, min_length=0, max_length=None):
        """Validate string length constraints."""
        if not isinstance(value, str):
            raise ValidationFailure(f"{field_name} must be a string")

        if len(value) < min_length:
            raise ValidationFailure(f"{field_name} must be at least {min_length} characters")

        if max_length and len(value) > max_length:
            raise ValidationFailure(f"{field_name} must be no more than {max_length} characters")

        return value

    @staticmethod
    def validate_choice(value, field_name, valid_choices):
        """Validate that value is in list of valid choices."""
        if value not in valid_choices:
            raise ValidationFailure(f"{field_name} must be one of: {', '.join(str(c) for c in valid_choices)}")
        return value

    @staticmethod
    def sanitize_html(text):
        """Strip markup from free text using bleach.

        Plain text (no '<', '>' or '&') is returned untouched so ordinary notes
        round-trip byte for byte.
        """
        if not text:
            return text

        if '<' not in text and '>' not in text and '&' not in text:
            return text

        allowed_tags = ['p', 'br', 'strong', 'em', 'u', 'ul', 'ol', 'li']
        return bleach.clean(text, tags=allowed_tags, attributes={}, strip=True)

    @staticmethod
    def validate_notes(text, field_name='Notes', max_length=None):
        """Length-check and sanitise a notes field. None is treated as empty."""
        text = '' if text is None else text
        Validator.validate_string_length(text, field_name, 0, max_length or Validator.MAX_NOTES_LENGTH)
        return Validator.sanitize_html(text)

    @staticmethod
    def validate_issue_report_data(data):
        """Validate an issue report payload; returns a cleaned dict."""
        validated = {}

        if data.get('issue_type') is not None:
            validated['issue_type'] = Validator.validate_choice(
                _enum_value(data['issue_type']), 'Issue type', [t.value for t in IssueType]
            )
        if data.get('priority') is not None:
            validated['priority'] = Validator.validate_choice(
                _enum_value(data['priority']), 'Issue priority', [p.value for p in PriorityLevel]
            )
        for field, label in (('location', 'Issue location'), ('item_affected', 'Item affected')):
            if data.get(field) is not None:
                validated[field] = Validator.sanitize_html(
                    Validator.validate_string_length(data[field], label, 0, 500)
                )

        return validated


def _enum_value(value):
    return getattr(value, 'value', value)


class TemplateValidator:
    """Structural checks run once over each template when the static table is built."""

    @staticmethod
    def collect_tasks(template):
        tasks = list(template.tasks)
        for phase in template.phases:
            tasks.extend(phase.tasks)
            for room in phase.rooms:
                tasks.extend(room.tasks)
        return tasks

    @staticmethod
    def validate_unique_ids(template):
        seen = set()
        duplicates = []
        for task in TemplateValidator.collect_tasks(template):
            if task.id in seen:
                duplicates.append(task.id)
            seen.add(task.id)
        if duplicates:
            raise TemplateValidationError(
                f"Template '{template.name}' has duplicate task ids: {', '.join(sorted(set(duplicates)))}"
            )

    @staticmethod
    def validate_dependencies_exist(template):
        ids = {task.id for task in TemplateValidator.collect_tasks(template)}
        for task in TemplateValidator.collect_tasks(template):
            missing = [dep for dep in task.dependencies if dep not in ids]
            if missing:
                raise TemplateValidationError(
                    f"Task {task.id} in '{template.name}' depends on unknown task(s): {', '.join(missing)}"
                )

    @staticmethod
    def validate_acyclic(template):
        """Depth-first search over the dependency graph; raises on the first cycle found."""
        graph = {task.id: task.dependencies for task in TemplateValidator.collect_tasks(template)}
        visiting, done = set(), set()

        def visit(task_id, path):
            if task_id in done:
                return
            if task_id in visiting:
                cycle = path[path.index(task_id):] + [task_id]
                raise TemplateValidationError(
                    f"Dependency cycle in '{template.name}': {' -> '.join(cycle)}"
                )
            visiting.add(task_id)
            for dep in graph.get(task_id, ()):
                visit(dep, path + [task_id])
            visiting.discard(task_id)
            done.add(task_id)

        for task_id in graph:
            visit(task_id, [])

    @classmethod
    def validate(cls, template):
        cls.validate_unique_ids(template)
        cls.validate_dependencies_exist(template)
        cls.validate_acyclic(template)
        return template
