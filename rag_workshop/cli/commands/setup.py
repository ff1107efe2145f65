"""Setup command: provision, start, verify and seed the workshop stack."""

from pathlib import Path

import click

from ...core.constants import LLM_SERVICE
from ...core.model_fetcher import ModelFetcher
from ...core.provisioner import Provisioner, workshop_layout
from ...core.reporter import StatusReporter
from ...services.exceptions import WorkshopError
from ...services.vector_store import VectorStoreClient
from ..helpers import get_context, handle_errors, info, success, warn
from .lifecycle import finish, run_for_each, wait_for_health
from .models import pull_models


@click.command()
@click.option('--skip-models', is_flag=True, help='Do not pull Ollama models')
@click.option('--model', 'models', multiple=True, help='Model to pull (repeatable; replaces defaults)')
@click.option('--webhook-url', envvar='RAG_WORKSHOP_WEBHOOK_URL', help='N8N webhook URL for the RAG workflow')
@click.option('--local-drive', type=click.Path(path_type=Path, file_okay=False),
              help='Host folder shared with N8N at /data/shared')
@handle_errors
def setup(skip_models, models, webhook_url, local_drive):
    """Create directories, start all services and pull models"""
    context = get_context()
    previous = context.config_manager.load_config()
    changes = {'webhook_url': webhook_url or (previous.webhook_url if previous else None)}
    if models:
        changes['models'] = list(models)
    if local_drive:
        changes['local_drive_path'] = local_drive.expanduser().resolve()
    config = context.update_config(**changes)

    info(f"Setting up RAG Workshop in {config.install_path}")

    # Directories
    report = Provisioner(config.install_path).provision(workshop_layout(config))
    for path in report.created:
        success(f"Created {path}")
    for path in report.existing:
        info(f"Exists  {path}")

    # Docker
    info("Checking Docker...")
    docker_service = context.docker()
    success("Docker is running")

    # Containers
    definitions = list(context.services.values())
    lifecycle = context.lifecycle()
    failed = run_for_each(definitions, lifecycle.ensure_running)
    wait_for_health([d for d in definitions if d.name not in failed])

    # Models
    if skip_models:
        info("Skipping model downloads")
    elif LLM_SERVICE in failed:
        warn("Ollama is not running; skipping model downloads")
    else:
        fetcher = ModelFetcher(docker_service, context.services[LLM_SERVICE])
        pulled_failed = pull_models(fetcher, config.models)
        if pulled_failed:
            warn(f"Re-run 'rag-workshop models pull {' '.join(pulled_failed)}' later")

    # Vector store collection
    if config.vector_store not in failed:
        try:
            store = VectorStoreClient(config.vector_store, config.ports.vector_store)
            if store.ensure_collection(config.collection_name):
                success(f"Created collection '{config.collection_name}'")
            else:
                info(f"Collection '{config.collection_name}' already exists")
        except WorkshopError as e:
            warn(f"Could not prepare collection '{config.collection_name}': {e}")

    saved = context.config_manager.save_config(config)
    success(f"Saved configuration to {context.config_manager.config_file}")

    reporter = StatusReporter(lifecycle, context.health())
    click.echo("")
    click.echo(reporter.render(reporter.collect(definitions), definitions))
    click.echo("")
    click.echo("Access your services:")
    click.echo(f"  - N8N:          http://localhost:{saved.ports.workflow}")
    click.echo(f"  - Ollama API:   http://localhost:{saved.ports.llm}")
    click.echo(f"  - Vector store: http://localhost:{saved.ports.vector_store}")
    if saved.webhook_url:
        click.echo(f"  - RAG webhook:  {saved.webhook_url}")

    finish(failed)
