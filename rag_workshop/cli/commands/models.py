"""Model management commands."""

import sys

import click
import questionary
from rich.table import Table

from ...core.model_fetcher import ModelFetcher
from ...core.constants import LLM_SERVICE
from ...models.service import ModelPullResult
from ..helpers import console, error, get_context, handle_errors, info, success, warn


def get_fetcher() -> ModelFetcher:
    context = get_context()
    return ModelFetcher(context.docker(), context.services[LLM_SERVICE])


def report_pull(result: ModelPullResult) -> None:
    if result.success:
        success(f"Pulled {result.model}")
    else:
        warn(f"Could not pull {result.model} after {result.attempts} attempts: {result.error}")


def pull_models(fetcher: ModelFetcher, models) -> list:
    """Pull models, reporting each; returns names that failed."""
    models = list(models)
    info(f"Pulling {len(models)} model(s): {', '.join(models)} (this can take a while)...")
    results = fetcher.pull_all(models, on_result=report_pull)
    return [r.model for r in results if not r.success]


@click.group()
def models():
    """Manage Ollama models"""
    pass


@models.command()
@click.argument('names', nargs=-1)
@click.option('--select', '-s', is_flag=True, help='Choose models interactively')
@handle_errors
def pull(names, select):
    """Pull models into Ollama (defaults to the workshop models)"""
    context = get_context()
    requested = list(names) or list(context.config.models)

    if select and sys.stdin.isatty():
        chosen = questionary.checkbox(
            "Models to pull:",
            choices=requested,
        ).ask()
        if not chosen:
            console.print("[yellow]No models selected[/yellow]")
            return
        requested = chosen

    failed = pull_models(get_fetcher(), requested)
    if failed:
        warn(f"Re-run 'rag-workshop models pull {' '.join(failed)}' to retry")
    else:
        success("All models pulled")


@models.command(name='list')
@handle_errors
def list_models():
    """List models available in Ollama"""
    names = get_fetcher().list_models()

    if not names:
        console.print("[yellow]No models installed.[/yellow]")
        console.print("Use 'rag-workshop models pull' to download the workshop models.")
        return

    expected = set(get_context().config.models)
    table = Table(title="Ollama Models")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Workshop model", style="green")
    for name in names:
        table.add_row(name, "yes" if name in expected or name.split(":")[0] in expected else "")
    console.print(table)

    missing = [m for m in expected if m not in names and f"{m}:latest" not in names]
    if missing:
        error(f"Missing workshop models: {', '.join(sorted(missing))}")
