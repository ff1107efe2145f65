"""Service layer for abstracting Docker and HTTP operations."""

from .docker_service import DockerService
from .vector_store import VectorStoreClient
from .webhook import WebhookClient
from .exceptions import (
    WorkshopError,
    PermissionDeniedError,
    RuntimeUnavailableError,
    ConfigurationError,
    DockerServiceError,
    ServiceNotFoundError,
    ImageNotFoundError,
    ContainerNotFoundError,
    HealthCheckError,
    HealthCheckTimeoutError,
    HealthCheckUnhealthyError,
    ModelPullFailedError,
    BackupStepFailedError,
    WebhookError,
)

__all__ = [
    "DockerService",
    "VectorStoreClient",
    "WebhookClient",
    "WorkshopError",
    "PermissionDeniedError",
    "RuntimeUnavailableError",
    "ConfigurationError",
    "DockerServiceError",
    "ServiceNotFoundError",
    "ImageNotFoundError",
    "ContainerNotFoundError",
    "HealthCheckError",
    "HealthCheckTimeoutError",
    "HealthCheckUnhealthyError",
    "ModelPullFailedError",
    "BackupStepFailedError",
    "WebhookError",
]
