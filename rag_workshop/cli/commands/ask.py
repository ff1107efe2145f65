"""Ask command: query the RAG workflow through its webhook."""

import click
from rich.markup import escape
from rich.table import Table

from ...services.webhook import WebhookClient
from ..helpers import console, fatal, get_context, handle_errors


@click.command()
@click.argument('question')
@click.option('--webhook-url', envvar='RAG_WORKSHOP_WEBHOOK_URL',
              help='N8N webhook URL (defaults to the one saved by setup)')
@handle_errors
def ask(question, webhook_url):
    """Ask the workshop's RAG workflow a question"""
    context = get_context()
    if not webhook_url:
        snapshot = context.config_manager.load_config()
        webhook_url = snapshot.webhook_url if snapshot else None
    if not webhook_url:
        fatal("No webhook URL configured. Pass --webhook-url or run setup with --webhook-url.")

    answer = WebhookClient(webhook_url).ask(question)

    console.print(f"[bold cyan]Q:[/bold cyan] {escape(answer.question)}")
    console.print(f"[bold green]A:[/bold green] {escape(answer.answer)}")

    if answer.sources:
        table = Table(title="Sources")
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Document", style="white")
        table.add_column("Relevance", style="green", justify="right")
        for i, source in enumerate(answer.sources, 1):
            table.add_row(str(i), escape(source.document), f"{source.relevance_score:.3f}")
        console.print(table)
