"""Docker service for abstracting Docker operations."""

import logging
from typing import Any, Optional, Union

import docker
import docker.errors
from docker.models.containers import Container

from .exceptions import (
    ContainerNotFoundError,
    DockerServiceError,
    ImageNotFoundError,
)

logger = logging.getLogger(__name__)


class DockerService:
    """Service for Docker operations with clean abstractions."""

    def __init__(self, client: Optional[docker.DockerClient] = None):
        """Initialize Docker service and test connection.

        Args:
            client: Pre-built Docker client. When omitted one is created from
                the environment and pinged.

        Raises:
            DockerServiceError: If the daemon cannot be reached
        """
        if client is not None:
            self.client = client
            return
        try:
            self.client = docker.from_env()
            self.client.ping()
        except docker.errors.DockerException as e:
            if "connection refused" in str(e).lower() or "cannot connect" in str(e).lower():
                raise DockerServiceError(
                    "Docker daemon is not running. Please start Docker Desktop or the Docker service."
                ) from e
            else:
                raise DockerServiceError(f"Failed to connect to Docker: {e}") from e

    def find_container(self, name: str) -> Optional[Container]:
        """Get a container by name, or None if it does not exist.

        Raises:
            DockerServiceError: If the lookup itself fails
        """
        try:
            return self.get_container(name)
        except ContainerNotFoundError:
            return None

    def get_container(self, name: str) -> Container:
        """Get a container by ID or name.

        Args:
            name: Container ID or name

        Returns:
            Container object

        Raises:
            ContainerNotFoundError: If container not found
            DockerServiceError: If retrieval fails
        """
        try:
            return self.client.containers.get(name)
        except docker.errors.NotFound as e:
            raise ContainerNotFoundError(f"Container '{name}' not found") from e
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to get container: {e}") from e
        except Exception as e:
            raise DockerServiceError(f"Unexpected error getting container: {e}") from e

    def run_container(
        self,
        image: str,
        name: str,
        ports: Optional[dict[str, int]] = None,
        volumes: Optional[dict[str, dict[str, str]]] = None,
        environment: Optional[dict[str, str]] = None,
        labels: Optional[dict[str, str]] = None,
        restart_policy: Optional[dict[str, str]] = None,
        **kwargs,
    ) -> Container:
        """Create and start a detached container.

        Args:
            image: Image name; pulled by the daemon if missing locally
            name: Container name
            ports: Port bindings, ``{"8000/tcp": 8000}``
            volumes: Bind mounts, ``{host: {"bind": path, "mode": "rw"}}``
            environment: Environment variables
            labels: Container labels
            restart_policy: Docker restart policy
            **kwargs: Additional Docker run parameters

        Returns:
            The running container

        Raises:
            ImageNotFoundError: If image cannot be found or pulled
            DockerServiceError: If run fails
        """
        try:
            return self.client.containers.run(
                image=image,
                name=name,
                detach=True,
                ports=ports or {},
                volumes=volumes or {},
                environment=environment or {},
                labels=labels or {},
                restart_policy=restart_policy,
                **kwargs,
            )
        except docker.errors.ImageNotFound as e:
            raise ImageNotFoundError(f"Image '{image}' not found") from e
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to run container: {e}") from e
        except Exception as e:
            raise DockerServiceError(f"Unexpected error running container: {e}") from e

    def start_container(self, container: Container) -> None:
        """Start a stopped or created container."""
        self._call(container, "start")

    def stop_container(self, container: Container, timeout: int = 10) -> None:
        """Stop a running container."""
        self._call(container, "stop", timeout=timeout)

    def restart_container(self, container: Container, timeout: int = 10) -> None:
        """Restart a container."""
        self._call(container, "restart", timeout=timeout)

    def remove_container(self, container: Container, force: bool = False) -> None:
        """Remove a container.

        Args:
            container: Container object
            force: Force remove even if running

        Raises:
            ContainerNotFoundError: If container not found
            DockerServiceError: If removal fails
        """
        self._call(container, "remove", force=force)

    def container_logs(
        self, container: Container, tail: Union[int, str] = "all", follow: bool = False
    ) -> Any:
        """Fetch container logs.

        Returns:
            Log bytes, or a generator of byte chunks when ``follow`` is set
        """
        return self._call(container, "logs", tail=tail, follow=follow, stream=follow)

    def exec_in_container(self, container: Container, command: list[str]) -> tuple[int, str]:
        """Execute a command in a running container.

        Returns:
            Tuple of (exit code, decoded output)

        Raises:
            ContainerNotFoundError: If container not found
            DockerServiceError: If execution fails
        """
        result = self._call(container, "exec_run", command)
        output = result.output or b""
        if isinstance(output, bytes):
            output = output.decode("utf-8", errors="replace")
        return result.exit_code, output

    def _call(self, container: Container, method: str, *args, **kwargs) -> Any:
        try:
            return getattr(container, method)(*args, **kwargs)
        except docker.errors.NotFound as e:
            raise ContainerNotFoundError(f"Container '{container.name}' not found") from e
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to {method} container {container.name}: {e}") from e
        except Exception as e:
            raise DockerServiceError(
                f"Unexpected error during {method} of container {container.name}: {e}"
            ) from e
