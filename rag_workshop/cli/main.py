"""Main CLI entry point for RAG Workshop."""

import logging
from pathlib import Path

import click

from ..core.constants import DEFAULT_INSTALL_PATH
from ..models.config import WorkshopConfig
from .helpers import WorkshopContext
from .commands.setup import setup
from .commands.lifecycle import start, stop, restart, reset
from .commands.status import status
from .commands.logs import logs
from .commands.backup import backup, backups
from .commands.models import models
from .commands.config import config
from .commands.compose import compose
from .commands.ask import ask


@click.group()
@click.option('--install-path', envvar='RAG_WORKSHOP_HOME', type=click.Path(path_type=Path),
              default=DEFAULT_INSTALL_PATH, show_default=True, help='Workshop install directory')
@click.option('--vector-store', envvar='RAG_WORKSHOP_VECTOR_STORE',
              type=click.Choice(['chroma', 'qdrant']), default='chroma', show_default=True,
              help='Vector store to run')
@click.option('--llm-port', envvar='RAG_WORKSHOP_LLM_PORT', type=int, help='Host port for Ollama')
@click.option('--vector-store-port', envvar='RAG_WORKSHOP_VECTOR_STORE_PORT', type=int,
              help='Host port for the vector store')
@click.option('--workflow-port', envvar='RAG_WORKSHOP_WORKFLOW_PORT', type=int,
              help='Host port for N8N')
@click.option('--llm-origins', envvar='RAG_WORKSHOP_LLM_ORIGINS', default='*', show_default=True,
              help='Origins allowed to call the Ollama API')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, install_path, vector_store, llm_port, vector_store_port, workflow_port,
        llm_origins, verbose):
    """RAG Workshop - Run a local Ollama + vector store + N8N stack"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    config = WorkshopConfig.for_vector_store(
        vector_store,
        install_path=install_path.expanduser(),
        llm_origins=llm_origins,
    )
    overrides = {
        'llm': llm_port,
        'vector_store': vector_store_port,
        'workflow': workflow_port,
    }
    ports = config.ports.model_copy(update={k: v for k, v in overrides.items() if v is not None})
    ctx.obj = WorkshopContext(config.model_copy(update={'ports': ports}))


# Register commands
cli.add_command(setup)
cli.add_command(start)
cli.add_command(stop)
cli.add_command(restart)
cli.add_command(reset)
cli.add_command(status)
cli.add_command(logs)
cli.add_command(backup)
cli.add_command(backups)
cli.add_command(models)
cli.add_command(config)
cli.add_command(compose)
cli.add_command(ask)


if __name__ == '__main__':
    cli()
