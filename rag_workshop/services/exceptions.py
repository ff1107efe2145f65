"""Custom exceptions for the workshop service layer."""


class WorkshopError(Exception):
    """Base exception for all workshop errors."""

    fatal = False


class PermissionDeniedError(WorkshopError):
    """Exception raised when a workshop directory cannot be created."""

    fatal = True


class RuntimeUnavailableError(WorkshopError):
    """Exception raised when the container runtime cannot be reached."""

    fatal = True


class ConfigurationError(WorkshopError):
    """Exception raised for an invalid workshop configuration."""

    fatal = True


class DockerServiceError(WorkshopError):
    """Exception raised for Docker service operations."""

    pass


class ServiceNotFoundError(DockerServiceError):
    """Exception raised when a service has no container yet."""

    def __init__(self, service_name: str):
        super().__init__(f"No container found for service '{service_name}'")
        self.service_name = service_name


class ImageNotFoundError(DockerServiceError):
    """Exception raised when a Docker image is not found."""

    pass


class ContainerNotFoundError(DockerServiceError):
    """Exception raised when a Docker container is not found."""

    pass


class HealthCheckError(WorkshopError):
    """Base exception for health check failures."""

    pass


class HealthCheckTimeoutError(HealthCheckError):
    """Exception raised when a service never answers its health check."""

    pass


class HealthCheckUnhealthyError(HealthCheckError):
    """Exception raised when a service answers but reports unhealthy."""

    pass


class ModelPullFailedError(WorkshopError):
    """Exception raised when a model pull fails after its retry."""

    def __init__(self, model: str, reason: str):
        super().__init__(f"Failed to pull model '{model}': {reason}")
        self.model = model
        self.reason = reason


class BackupStepFailedError(WorkshopError):
    """Exception raised when a backup step fails.

    Services stopped by the backup have already been restarted by the time
    this is raised.
    """

    fatal = True

    def __init__(self, phase, cause: Exception):
        super().__init__(f"Backup failed during {phase.value}: {cause}")
        self.phase = phase
        self.cause = cause


class WebhookError(WorkshopError):
    """Exception raised when the workflow webhook call fails."""

    pass
