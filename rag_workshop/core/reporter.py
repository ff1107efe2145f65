"""Read-only status aggregation."""

import logging
from typing import Iterable, List, Optional

from tabulate import tabulate

from ..models.service import ContainerState, RuntimeStatus, ServiceDefinition
from ..services.exceptions import DockerServiceError
from .health import HealthVerifier
from .lifecycle import LifecycleManager

logger = logging.getLogger(__name__)


class StatusReporter:
    """Combines container state and health into one report per service."""

    def __init__(self, lifecycle: Optional[LifecycleManager], health: HealthVerifier):
        self.lifecycle = lifecycle
        self.health = health

    def collect_one(self, definition: ServiceDefinition) -> ContainerState:
        if self.lifecycle is None:
            return ContainerState(service_name=definition.name)
        try:
            state = self.lifecycle.state(definition)
        except DockerServiceError as e:
            logger.warning(f"Could not inspect {definition.name}: {e}")
            return ContainerState(service_name=definition.name)

        if state.runtime_status == RuntimeStatus.RUNNING:
            health = self.health.check(definition).status
            state = state.model_copy(update={"health": health})
        return state

    def collect(self, definitions: Iterable[ServiceDefinition]) -> List[ContainerState]:
        """Observe every service. Absent containers report as absent/unknown."""
        return [self.collect_one(d) for d in definitions]

    @staticmethod
    def render(states: List[ContainerState], definitions: Iterable[ServiceDefinition] = ()) -> str:
        """Format states as a table."""
        urls = {d.name: d.health_url for d in definitions}
        rows = [
            [
                state.service_name,
                state.runtime_status.value,
                state.health.value,
                ", ".join(state.observed_ports) or "-",
                urls.get(state.service_name, ""),
            ]
            for state in states
        ]
        return tabulate(rows, headers=["Service", "Status", "Health", "Ports", "Health URL"],
                        tablefmt="simple")
