"""Static activity template table.

Templates are authored as plain dicts and validated once, at import time, into
ActivityTemplate models. A defect in any template (schema error, duplicate task id,
dangling or cyclic dependency) raises TemplateValidationError here rather than
surfacing mid-activity.
"""
from pydantic import ValidationError

from shared.enums import ActivityType
from shared.errors import TemplateValidationError
from shared.schemas import ActivityTemplate
from shared.validation import TemplateValidator
from shared.templates.generic import GENERIC_TEMPLATES
from shared.templates.cos285 import COS285_PROVISIONING_TEMPLATE
from shared.templates.alb134 import ALB134_MEET_GREET_TEMPLATE


def build_template(data):
    """Validate one authored template dict into an ActivityTemplate."""
    try:
        template = ActivityTemplate.model_validate(data)
    except ValidationError as e:
        raise TemplateValidationError(
            f"Template '{data.get('name', '?')}' failed schema validation: {e}"
        ) from e
    return TemplateValidator.validate(template)


def _build_generic_table(sources):
    table = {}
    for data in sources:
        template = build_template(data)
        if template.type in table:
            raise TemplateValidationError(f"Duplicate generic template for {template.type.value}")
        table[template.type] = template
    missing = [t.value for t in ActivityType if t not in table]
    if missing:
        raise TemplateValidationError(f"No generic template for: {', '.join(missing)}")
    return table


def _build_property_table(entries):
    table = {}
    for activity_type, codes, data in entries:
        template = build_template(data)
        if template.type != activity_type:
            raise TemplateValidationError(
                f"Template '{template.name}' registered as {activity_type.value} but declares {template.type.value}"
            )
        for code in codes:
            table[(activity_type, code.upper())] = template
    return table


GENERIC_TEMPLATE_TABLE = _build_generic_table(GENERIC_TEMPLATES)

# (activity type, property codes, template); SAMPLE is the demo alias for ALB134
PROPERTY_TEMPLATE_TABLE = _build_property_table([
    (ActivityType.PROVISIONING, ('COS285',), COS285_PROVISIONING_TEMPLATE),
    (ActivityType.MEET_GREET, ('ALB134', 'SAMPLE'), ALB134_MEET_GREET_TEMPLATE),
])
