"""Configuration commands."""

import json

import click

from ..helpers import get_context


@click.group()
def config():
    """Inspect workshop configuration"""
    pass


@config.command()
def show():
    """Display the configuration snapshot written by setup"""
    context = get_context()
    snapshot = context.config_manager.load_config()
    if not snapshot:
        click.echo(f"No workshop configuration found in {context.config.install_path}")
        click.echo("Run 'rag-workshop setup' first.")
        return

    click.echo("Workshop Configuration:")
    click.echo(json.dumps(snapshot.model_dump(mode='json'), indent=2))


@config.command()
def path():
    """Print the path of the configuration snapshot"""
    click.echo(get_context().config_manager.config_file)
