"""Compose export command."""

from pathlib import Path

import click

from ...core.compose import write_compose
from ..helpers import get_context, handle_errors, success


@click.command()
@click.option('--output', '-o', type=click.Path(path_type=Path),
              help='Output file (default: <install-path>/docker-compose.yml)')
@handle_errors
def compose(output):
    """Write the service table as a docker-compose.yml"""
    context = get_context()
    output = output or context.config.install_path / "docker-compose.yml"
    output.parent.mkdir(parents=True, exist_ok=True)
    write_compose(context.services.values(), output)
    success(f"Wrote {output}")
