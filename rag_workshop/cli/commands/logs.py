"""Logs command."""

import click

from ...core.constants import DEFAULT_LOG_LINES
from ...services.exceptions import ServiceNotFoundError
from ..helpers import get_context, handle_errors, info, warn


@click.command()
@click.argument('target')
@click.option('--lines', '-n', type=int, default=DEFAULT_LOG_LINES, show_default=True,
              help='Number of lines to show')
@click.option('--follow', '-f', is_flag=True, help='Follow log output')
@handle_errors
def logs(target, lines, follow):
    """Show container logs for a service (or all services)"""
    context = get_context()
    definitions = context.select(target)
    lifecycle = context.lifecycle()

    if follow and len(definitions) > 1:
        raise click.UsageError("--follow needs a single service")

    for definition in definitions:
        if len(definitions) > 1:
            info(f"{'=' * 20} {definition.name} {'=' * 20}")
        try:
            output = lifecycle.logs(definition, lines=lines, follow=follow)
        except ServiceNotFoundError as e:
            if len(definitions) == 1:
                raise
            warn(str(e))
            continue
        if follow:
            try:
                for chunk in output:
                    click.echo(chunk.decode('utf-8', errors='replace'), nl=False)
            except KeyboardInterrupt:
                click.echo("\nStopped following logs.")
        else:
            click.echo(output.decode('utf-8', errors='replace'))
