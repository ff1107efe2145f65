"""CLI Helper Functions for RAG Workshop.

This module provides reusable helper functions for CLI commands to reduce
code duplication and standardize behavior across all commands.

The helpers provide:
- The per-invocation workshop context (config, service table, Docker)
- Categorized, colored console messages
- Target resolution for ``all`` or a single service
- Consistent table formatting for output
"""

import functools
import logging
import sys
from typing import Any, Dict, List, Optional

import click
from rich.console import Console
from rich.markup import escape
from tabulate import tabulate

from rag_workshop.core.health import HealthVerifier
from rag_workshop.core.lifecycle import LifecycleManager
from rag_workshop.core.runtime_checker import RuntimeChecker
from rag_workshop.core.service_table import build_service_table, select_services
from rag_workshop.models.config import WorkshopConfig
from rag_workshop.models.service import ServiceDefinition
from rag_workshop.services.docker_service import DockerService
from rag_workshop.services.exceptions import RuntimeUnavailableError, WorkshopError
from rag_workshop.utils.config_manager import ConfigManager

logger = logging.getLogger(__name__)

console = Console(highlight=False, soft_wrap=True)


def info(message: str) -> None:
    console.print(f"[cyan]{escape(message)}[/cyan]")


def success(message: str) -> None:
    console.print(f"[green]✓ {escape(message)}[/green]")


def warn(message: str) -> None:
    console.print(f"[yellow]⚠ {escape(message)}[/yellow]")


def error(message: str) -> None:
    console.print(f"[red]✗ {escape(message)}[/red]")


def fatal(message: str) -> None:
    """Print a fatal message and exit non-zero."""
    console.print(f"[bold red]✗ Fatal: {escape(message)}[/bold red]")
    sys.exit(1)


class WorkshopContext:
    """Everything a command needs, built once per CLI invocation.

    Docker is only contacted when a command asks for it, so pure file
    operations work without a running daemon.
    """

    def __init__(self, config: WorkshopConfig, runtime_checker: Optional[RuntimeChecker] = None):
        self.config = config
        self.runtime_checker = runtime_checker or RuntimeChecker()
        self.config_manager = ConfigManager(config.install_path)
        self._services: Optional[Dict[str, ServiceDefinition]] = None
        self._docker: Optional[DockerService] = None

    @property
    def services(self) -> Dict[str, ServiceDefinition]:
        if self._services is None:
            self._services = build_service_table(self.config)
        return self._services

    def update_config(self, **changes) -> WorkshopConfig:
        """Replace config fields and rebuild the service table on next use."""
        self.config = self.config.model_copy(update=changes)
        self._services = None
        return self.config

    def select(self, target: str) -> List[ServiceDefinition]:
        return select_services(self.services, target)

    def docker(self, launch: bool = True) -> DockerService:
        """Connected Docker service.

        Args:
            launch: Start the daemon and wait for it if it is not running.
                With False the daemon is only probed once.

        Raises:
            RuntimeUnavailableError: If Docker cannot be reached
        """
        if self._docker is None:
            if launch:
                self._docker = self.runtime_checker.ensure_available()
            else:
                self._docker = self.runtime_checker.try_connect()
                if self._docker is None:
                    raise RuntimeUnavailableError("Docker is not running")
        return self._docker

    def lifecycle(self, launch: bool = True) -> LifecycleManager:
        return LifecycleManager(self.docker(launch=launch))

    def health(self) -> HealthVerifier:
        return HealthVerifier()


def get_context() -> WorkshopContext:
    """Return the WorkshopContext stored on the current click context."""
    return click.get_current_context().find_object(WorkshopContext)


def handle_errors(func):
    """Turn WorkshopErrors escaping a command into categorized output.

    Fatal categories print as fatal; anything else prints as an error. Both
    exit non-zero because the command could not finish.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except WorkshopError as e:
            logger.debug("Command failed", exc_info=True)
            if e.fatal:
                fatal(str(e))
            error(str(e))
            sys.exit(1)
    return wrapper


def print_table(headers: list[str], rows: list[list[Any]],
                tablefmt: str = "simple") -> None:
    """Print a table with project-wide defaults.

    Args:
        headers: Table headers
        rows: Table rows
        tablefmt: Table format (default: "simple")
    """
    table_str = tabulate(rows, headers=headers, tablefmt=tablefmt)
    click.echo(table_str)


__all__ = [
    'console',
    'info',
    'success',
    'warn',
    'error',
    'fatal',
    'WorkshopContext',
    'get_context',
    'handle_errors',
    'print_table',
]
