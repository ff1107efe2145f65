"""Start, stop, restart and reset commands."""

import sys
from typing import Callable, List

import click

from ...models.service import LifecycleOutcome, LifecycleResult, ServiceDefinition
from ...services.exceptions import DockerServiceError, HealthCheckError, ServiceNotFoundError
from ..helpers import error, get_context, handle_errors, info, success, warn

OUTCOME_MESSAGES = {
    LifecycleOutcome.CREATED: "created and started",
    LifecycleOutcome.EXISTS: "container already exists",
    LifecycleOutcome.STARTED: "started",
    LifecycleOutcome.ALREADY_RUNNING: "already running",
    LifecycleOutcome.STOPPED: "stopped",
    LifecycleOutcome.NOT_RUNNING: "not running",
    LifecycleOutcome.RESTARTED: "restarted",
    LifecycleOutcome.REMOVED: "removed",
    LifecycleOutcome.ABSENT: "no container",
}


def report_result(result: LifecycleResult) -> None:
    message = f"{result.service_name}: {OUTCOME_MESSAGES[result.outcome]} ({result.status.value})"
    if result.outcome in (LifecycleOutcome.ALREADY_RUNNING, LifecycleOutcome.EXISTS,
                          LifecycleOutcome.NOT_RUNNING, LifecycleOutcome.ABSENT):
        info(message)
    else:
        success(message)


def run_for_each(definitions: List[ServiceDefinition],
                 operation: Callable[[ServiceDefinition], LifecycleResult]) -> List[str]:
    """Apply ``operation`` to each service, isolating failures.

    Returns:
        Names of services whose operation failed
    """
    failed = []
    for definition in definitions:
        try:
            report_result(operation(definition))
        except ServiceNotFoundError:
            warn(f"{definition.name}: no container found. Run 'rag-workshop start {definition.name}' first.")
            failed.append(definition.name)
        except DockerServiceError as e:
            error(f"{definition.name}: {e}")
            failed.append(definition.name)
    return failed


def wait_for_health(definitions: List[ServiceDefinition]) -> None:
    """Wait for each service to report healthy, one at a time."""
    verifier = get_context().health()
    for definition in definitions:
        info(f"Waiting for {definition.name} at {definition.health_url}...")
        try:
            verifier.ensure_healthy(definition)
            success(f"{definition.name} is healthy")
        except HealthCheckError as e:
            warn(str(e))


def finish(failed: List[str]) -> None:
    if failed:
        error(f"Failed for: {', '.join(failed)}")
        sys.exit(1)


target_argument = click.argument('target', default='all')


@click.command()
@target_argument
@click.option('--no-wait', is_flag=True, help='Do not wait for health checks')
@handle_errors
def start(target, no_wait):
    """Start services, creating containers that do not exist yet"""
    context = get_context()
    definitions = context.select(target)
    lifecycle = context.lifecycle()

    failed = run_for_each(definitions, lifecycle.ensure_running)
    if not no_wait:
        wait_for_health([d for d in definitions if d.name not in failed])
    finish(failed)


@click.command()
@target_argument
@handle_errors
def stop(target):
    """Stop running services"""
    context = get_context()
    definitions = context.select(target)
    finish(run_for_each(definitions, context.lifecycle().stop))


@click.command()
@target_argument
@click.option('--no-wait', is_flag=True, help='Do not wait for health checks')
@handle_errors
def restart(target, no_wait):
    """Restart services"""
    context = get_context()
    definitions = context.select(target)

    failed = run_for_each(definitions, context.lifecycle().restart)
    if not no_wait:
        wait_for_health([d for d in definitions if d.name not in failed])
    finish(failed)


@click.command()
@target_argument
@click.option('--yes', '-y', is_flag=True, help='Skip confirmation prompt')
@click.option('--no-wait', is_flag=True, help='Do not wait for health checks')
@handle_errors
def reset(target, yes, no_wait):
    """Recreate containers to pick up configuration changes (data is kept)"""
    context = get_context()
    definitions = context.select(target)

    if not yes:
        names = ', '.join(d.name for d in definitions)
        if not click.confirm(f"Recreate containers for {names}?"):
            info("Cancelled")
            return

    failed = run_for_each(definitions, context.lifecycle().reset)
    if not no_wait:
        wait_for_health([d for d in definitions if d.name not in failed])
    finish(failed)
