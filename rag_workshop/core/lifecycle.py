"""Idempotent container lifecycle operations keyed on service name."""

import logging
from typing import List, Optional, Union

from docker.models.containers import Container

from ..models.service import (
    ContainerState,
    LifecycleOutcome,
    LifecycleResult,
    RuntimeStatus,
    ServiceDefinition,
)
from ..services.docker_service import DockerService
from ..services.exceptions import DockerServiceError, ServiceNotFoundError
from .constants import RESTART_POLICY, SERVICE_LABEL, WORKSHOP_LABEL

logger = logging.getLogger(__name__)

# Docker inspect State.Status -> RuntimeStatus
_STATUS_MAP = {
    "created": RuntimeStatus.CREATED,
    "running": RuntimeStatus.RUNNING,
    "restarting": RuntimeStatus.RUNNING,
    "paused": RuntimeStatus.UNKNOWN,
    "exited": RuntimeStatus.STOPPED,
    "dead": RuntimeStatus.STOPPED,
}


def runtime_status(container: Optional[Container]) -> RuntimeStatus:
    """Map a container's inspected status onto RuntimeStatus."""
    if container is None:
        return RuntimeStatus.ABSENT
    state = container.attrs.get("State") or {}
    status = state.get("Status") or container.status
    return _STATUS_MAP.get(status, RuntimeStatus.UNKNOWN)


def observed_ports(container: Optional[Container]) -> List[str]:
    """Published ports as ``host->container/proto`` strings."""
    if container is None:
        return []
    ports = container.attrs.get("NetworkSettings", {}).get("Ports") or {}
    observed = []
    for container_port, bindings in sorted(ports.items()):
        for binding in bindings or []:
            observed.append(f"{binding.get('HostPort')}->{container_port}")
    return observed


class LifecycleManager:
    """Create/start/stop/restart/remove/reset for workshop services."""

    def __init__(self, docker_service: DockerService):
        self.docker = docker_service

    def _container(self, definition: ServiceDefinition) -> Optional[Container]:
        return self.docker.find_container(definition.container_name)

    def _result(self, definition, action, outcome, status) -> LifecycleResult:
        logger.info(f"{definition.name}: {action} -> {outcome.value} ({status.value})")
        return LifecycleResult(
            service_name=definition.name, action=action, outcome=outcome, status=status
        )

    def status(self, definition: ServiceDefinition) -> RuntimeStatus:
        return runtime_status(self._container(definition))

    def state(self, definition: ServiceDefinition) -> ContainerState:
        """Observe the container state; health is left unknown."""
        container = self._container(definition)
        return ContainerState(
            service_name=definition.name,
            runtime_status=runtime_status(container),
            observed_ports=observed_ports(container),
        )

    def create(self, definition: ServiceDefinition) -> LifecycleResult:
        """Run the service's container unless one already exists under its name."""
        container = self._container(definition)
        if container is not None:
            return self._result(definition, "create", LifecycleOutcome.EXISTS, runtime_status(container))

        container = self.docker.run_container(
            image=definition.image,
            name=definition.container_name,
            ports=definition.port_bindings(),
            volumes=definition.volume_bindings(),
            environment=dict(definition.environment),
            labels={WORKSHOP_LABEL: "true", SERVICE_LABEL: definition.name},
            restart_policy=dict(RESTART_POLICY),
            extra_hosts={"host.docker.internal": "host-gateway"},
        )
        container.reload()
        return self._result(definition, "create", LifecycleOutcome.CREATED, runtime_status(container))

    def start(self, definition: ServiceDefinition) -> LifecycleResult:
        """Start a stopped or created container.

        Raises:
            ServiceNotFoundError: If no container exists; call create instead
            DockerServiceError: If the container is paused or in an unknown state
        """
        container = self._container(definition)
        status = runtime_status(container)
        if status == RuntimeStatus.ABSENT:
            raise ServiceNotFoundError(definition.name)
        if status == RuntimeStatus.RUNNING:
            return self._result(definition, "start", LifecycleOutcome.ALREADY_RUNNING, status)
        if status == RuntimeStatus.UNKNOWN:
            raise DockerServiceError(
                f"Cannot start {definition.container_name} from state '{container.status}'"
            )

        self.docker.start_container(container)
        container.reload()
        return self._result(definition, "start", LifecycleOutcome.STARTED, runtime_status(container))

    def ensure_running(self, definition: ServiceDefinition) -> LifecycleResult:
        """Start the service, creating its container first if it is absent."""
        try:
            return self.start(definition)
        except ServiceNotFoundError:
            return self.create(definition)

    def stop(self, definition: ServiceDefinition) -> LifecycleResult:
        container = self._container(definition)
        status = runtime_status(container)
        if status == RuntimeStatus.ABSENT:
            return self._result(definition, "stop", LifecycleOutcome.ABSENT, status)
        if status != RuntimeStatus.RUNNING:
            return self._result(definition, "stop", LifecycleOutcome.NOT_RUNNING, status)

        self.docker.stop_container(container)
        container.reload()
        return self._result(definition, "stop", LifecycleOutcome.STOPPED, runtime_status(container))

    def restart(self, definition: ServiceDefinition) -> LifecycleResult:
        """Restart the container via the runtime's restart primitive.

        Raises:
            ServiceNotFoundError: If no container exists
        """
        container = self._container(definition)
        if container is None:
            raise ServiceNotFoundError(definition.name)

        self.docker.restart_container(container)
        container.reload()
        return self._result(definition, "restart", LifecycleOutcome.RESTARTED, runtime_status(container))

    def remove(self, definition: ServiceDefinition) -> LifecycleResult:
        """Stop and delete the container. Bind-mounted data is untouched."""
        container = self._container(definition)
        if container is None:
            return self._result(definition, "remove", LifecycleOutcome.ABSENT, RuntimeStatus.ABSENT)

        status = runtime_status(container)
        if status == RuntimeStatus.RUNNING:
            self.docker.stop_container(container)
        self.docker.remove_container(container, force=status == RuntimeStatus.UNKNOWN)
        return self._result(definition, "remove", LifecycleOutcome.REMOVED, RuntimeStatus.ABSENT)

    def reset(self, definition: ServiceDefinition) -> LifecycleResult:
        """Recreate the container to pick up definition changes."""
        self.remove(definition)
        result = self.create(definition)
        return result.model_copy(update={"action": "reset"})

    def logs(
        self, definition: ServiceDefinition, lines: Union[int, str] = "all", follow: bool = False
    ):
        """Container logs as bytes, or a chunk generator when following.

        Raises:
            ServiceNotFoundError: If no container exists
        """
        container = self._container(definition)
        if container is None:
            raise ServiceNotFoundError(definition.name)
        return self.docker.container_logs(container, tail=lines, follow=follow)
