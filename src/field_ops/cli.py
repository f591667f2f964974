import logging

import click

from shared.enums import ActivityType

from .app import FieldOpsApp
from .config_manager import ConfigManager
from .logging_config import setup_logging
from .services.template_store import TemplateStore

logger = logging.getLogger(__name__)


def _open_app(ctx):
    overrides = {}
    if ctx.obj.get('data_dir'):
        overrides['data_dir'] = ctx.obj['data_dir']
    return FieldOpsApp(config=ConfigManager(**overrides))


@click.group()
@click.option('--data-dir', type=click.Path(file_okay=False), default=None,
              help='Directory holding the local store (defaults to the user data dir).')
@click.option('--log-level', default=None, help='Logging level, e.g. DEBUG.')
@click.option('--log-file', type=click.Path(dir_okay=False), default=None,
              help='Also write JSON log lines to this file.')
@click.pass_context
def cli(ctx, data_dir, log_level, log_file):
    """Field Ops activity engine."""
    setup_logging(log_level, log_file)
    ctx.ensure_object(dict)
    ctx.obj['data_dir'] = data_dir


@cli.command('templates')
def list_templates_command():
    """List activity types and their property-specific templates."""
    store = TemplateStore()
    for activity_type in store.list_activity_types():
        codes = store.list_property_codes(activity_type)
        suffix = f" (properties: {', '.join(codes)})" if codes else ''
        click.echo(f"{activity_type.value}{suffix}")


@cli.command('show-template')
@click.argument('activity_type', type=click.Choice([t.value for t in ActivityType]))
@click.option('--property', 'property_code', default=None, help='Property code, e.g. COS285.')
def show_template_command(activity_type, property_code):
    """Print a template's tasks in display order."""
    store = TemplateStore()
    template = store.get_template(ActivityType(activity_type), property_code)

    click.echo(f"{template.name} [{template.property_code or 'generic'}]")
    for phase in store.get_phases(template):
        click.echo(f"\n{phase.name.value}")
        for task in store.phase_tasks(phase):
            click.echo(_task_line(task, indent='  '))
    if not template.is_phased:
        for task in store.get_all_tasks(template):
            click.echo(_task_line(task))


def _task_line(task, indent=''):
    flags = []
    if task.required:
        flags.append('required')
    if task.photo_required:
        flags.append('photo')
    if task.conditional is not None:
        conditions = task.conditional.model_dump(exclude_none=True, mode='json')
        flags.extend(f"{k}={v}" for k, v in conditions.items())
    if task.dependencies:
        flags.append(f"after {','.join(task.dependencies)}")
    suffix = f" ({'; '.join(flags)})" if flags else ''
    return f"{indent}{task.id}: {task.name}{suffix}"


@cli.command('drafts')
@click.pass_context
def list_drafts_command(ctx):
    """List stored drafts, most recent first."""
    with _open_app(ctx) as app:
        drafts = app.registry.list_paused_drafts()
        if not drafts:
            click.echo('No drafts stored.')
            return
        for metadata in drafts:
            closed = ' (paused)' if app.repository.is_closed(metadata.session_key) else ''
            click.echo(f"{metadata.session_key}: {metadata.home_code} {metadata.activity_type.value}{closed}")


@cli.command('active')
@click.pass_context
def active_command(ctx):
    """Show the device's active activity."""
    with _open_app(ctx) as app:
        info = app.registry.get_active_activity()
        if info is None:
            click.echo('No active activity.')
            return
        click.echo(
            f"{info.session_key}: {info.home_code} {info.activity_type.value} "
            f"{info.completed_tasks}/{info.total_tasks} tasks"
        )


@cli.command('discard')
@click.argument('session_key')
@click.pass_context
def discard_command(ctx, session_key):
    """Delete a stored draft and its companion records."""
    with _open_app(ctx) as app:
        if not app.repository.delete_activity(session_key):
            click.echo(f"No draft stored under {session_key}.", err=True)
            ctx.exit(1)
        logger.info(f"Discarded draft {session_key}")
        click.echo(f"Discarded {session_key}.")


def main():
    cli(obj={})


if __name__ == '__main__':
    main()
