"""Status command."""

import click

from ...core.reporter import StatusReporter
from ...services.exceptions import RuntimeUnavailableError
from ..helpers import get_context, handle_errors, warn


@click.command()
@click.argument('target', default='all')
@handle_errors
def status(target):
    """Show container status and health for each service"""
    context = get_context()
    definitions = context.select(target)

    snapshot = context.config_manager.load_config()
    if snapshot and snapshot.created_at:
        click.echo(f"Workshop installed at {snapshot.install_path} "
                   f"({snapshot.created_at:%Y-%m-%d %H:%M})")

    try:
        lifecycle = context.lifecycle(launch=False)
    except RuntimeUnavailableError as e:
        warn(f"Docker is not available: {e}")
        lifecycle = None

    reporter = StatusReporter(lifecycle, context.health())
    states = reporter.collect(definitions)
    click.echo(reporter.render(states, definitions))
