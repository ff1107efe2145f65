"""Service definition and container state models."""

from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core.constants import CONTAINER_PREFIX, HEALTH_CHECK_TIMEOUT


class VolumeMount(BaseModel):
    """A host directory bind-mounted into a container."""
    model_config = ConfigDict(frozen=True)

    host_path: Path
    container_path: str
    read_only: bool = False

    def to_docker(self) -> Dict[str, str]:
        """Convert to the docker SDK volume binding format."""
        return {"bind": self.container_path, "mode": "ro" if self.read_only else "rw"}


class HealthCheckSpec(BaseModel):
    """How to probe a service over HTTP."""
    model_config = ConfigDict(frozen=True)

    path: str = "/"
    expected_status: Optional[int] = Field(None, description="Exact status required; None accepts any 2xx")
    required_field: Optional[str] = Field(None, description="Top-level JSON field the body must contain")
    timeout: float = HEALTH_CHECK_TIMEOUT

    def url(self, host_port: int) -> str:
        return f"http://localhost:{host_port}{self.path}"


class ServiceDefinition(BaseModel):
    """Static description of one workshop service."""
    model_config = ConfigDict(frozen=True)

    name: str
    image: str
    host_port: int
    container_port: int
    volume_mounts: List[VolumeMount] = Field(default_factory=list)
    environment: Dict[str, str] = Field(default_factory=dict)
    health_check: HealthCheckSpec = Field(default_factory=HealthCheckSpec)

    @property
    def container_name(self) -> str:
        return f"{CONTAINER_PREFIX}-{self.name}"

    @property
    def health_url(self) -> str:
        return self.health_check.url(self.host_port)

    def port_bindings(self) -> Dict[str, int]:
        return {f"{self.container_port}/tcp": self.host_port}

    def volume_bindings(self) -> Dict[str, Dict[str, str]]:
        return {str(m.host_path): m.to_docker() for m in self.volume_mounts}


class RuntimeStatus(Enum):
    """Container status as reported by the runtime."""
    ABSENT = "absent"
    CREATED = "created"
    RUNNING = "running"
    STOPPED = "stopped"
    UNKNOWN = "unknown"


class HealthStatus(Enum):
    """Result of probing a service's health endpoint."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    UNREACHABLE = "unreachable"
    UNKNOWN = "unknown"


class ContainerState(BaseModel):
    """Observed state of a service's container. Never persisted."""
    service_name: str
    runtime_status: RuntimeStatus = RuntimeStatus.UNKNOWN
    observed_ports: List[str] = Field(default_factory=list)
    health: HealthStatus = HealthStatus.UNKNOWN


class HealthResult(BaseModel):
    """Outcome of a single health probe."""
    service_name: str
    status: HealthStatus
    status_code: Optional[int] = None
    detail: str = ""
    elapsed: float = 0.0

    @property
    def healthy(self) -> bool:
        return self.status == HealthStatus.HEALTHY


class LifecycleOutcome(Enum):
    """What a lifecycle operation actually did."""
    CREATED = "created"
    EXISTS = "exists"
    STARTED = "started"
    ALREADY_RUNNING = "already_running"
    STOPPED = "stopped"
    NOT_RUNNING = "not_running"
    RESTARTED = "restarted"
    REMOVED = "removed"
    ABSENT = "absent"


class LifecycleResult(BaseModel):
    """Result of a lifecycle operation on one service."""
    service_name: str
    action: str
    outcome: LifecycleOutcome
    status: RuntimeStatus


class ModelPullResult(BaseModel):
    """Result of pulling one model into the LLM runtime."""
    model: str
    success: bool
    attempts: int
    error: Optional[str] = None
