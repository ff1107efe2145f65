"""The static table of workshop services."""

from collections import Counter
from typing import Dict, List

from ..models.config import WorkshopConfig
from ..models.service import HealthCheckSpec, ServiceDefinition, VolumeMount
from ..services.exceptions import ConfigurationError
from .constants import (
    CHROMA_IMAGE,
    LLM_SERVICE,
    N8N_IMAGE,
    OLLAMA_IMAGE,
    QDRANT_IMAGE,
    WORKFLOW_SERVICE,
)


def _llm_service(config: WorkshopConfig) -> ServiceDefinition:
    data_dir = config.install_path / "data" / LLM_SERVICE
    return ServiceDefinition(
        name=LLM_SERVICE,
        image=OLLAMA_IMAGE,
        host_port=config.ports.llm,
        container_port=11434,
        volume_mounts=[VolumeMount(host_path=data_dir, container_path="/root/.ollama")],
        environment={
            "OLLAMA_HOST": "0.0.0.0",
            "OLLAMA_ORIGINS": config.llm_origins,
        },
        health_check=HealthCheckSpec(path="/api/tags", required_field="models"),
    )


def _vector_store_service(config: WorkshopConfig) -> ServiceDefinition:
    data_dir = config.install_path / "data" / config.vector_store
    if config.vector_store == "qdrant":
        return ServiceDefinition(
            name="qdrant",
            image=QDRANT_IMAGE,
            host_port=config.ports.vector_store,
            container_port=6333,
            volume_mounts=[VolumeMount(host_path=data_dir, container_path="/qdrant/storage")],
            health_check=HealthCheckSpec(path="/healthz"),
        )
    return ServiceDefinition(
        name="chroma",
        image=CHROMA_IMAGE,
        host_port=config.ports.vector_store,
        container_port=8000,
        volume_mounts=[VolumeMount(host_path=data_dir, container_path="/data")],
        environment={
            "IS_PERSISTENT": "TRUE",
            "ANONYMIZED_TELEMETRY": "FALSE",
            "CHROMA_SERVER_CORS_ALLOW_ORIGINS": '["*"]',
        },
        health_check=HealthCheckSpec(path="/api/v2/heartbeat", required_field="nanosecond heartbeat"),
    )


def _workflow_service(config: WorkshopConfig) -> ServiceDefinition:
    data_dir = config.install_path / "data" / WORKFLOW_SERVICE
    environment = {
        "N8N_HOST": "localhost",
        "N8N_PORT": "5678",
        "N8N_PROTOCOL": "http",
        "WEBHOOK_URL": f"http://localhost:{config.ports.workflow}/",
        "N8N_SECURE_COOKIE": "false",
        "GENERIC_TIMEZONE": "UTC",
        "OLLAMA_BASE_URL": f"http://host.docker.internal:{config.ports.llm}",
        "VECTOR_STORE_URL": f"http://host.docker.internal:{config.ports.vector_store}",
    }
    return ServiceDefinition(
        name=WORKFLOW_SERVICE,
        image=N8N_IMAGE,
        host_port=config.ports.workflow,
        container_port=5678,
        volume_mounts=[
            VolumeMount(host_path=data_dir, container_path="/home/node/.n8n"),
            VolumeMount(host_path=config.shared_files_path, container_path="/data/shared"),
        ],
        environment=environment,
        health_check=HealthCheckSpec(path="/healthz", required_field="status"),
    )


def build_service_table(config: WorkshopConfig) -> Dict[str, ServiceDefinition]:
    """Build the service table in start order.

    Raises:
        ConfigurationError: If two services would publish the same host port
    """
    definitions = [
        _llm_service(config),
        _vector_store_service(config),
        _workflow_service(config),
    ]

    port_counts = Counter(d.host_port for d in definitions)
    clashes = sorted(port for port, count in port_counts.items() if count > 1)
    if clashes:
        raise ConfigurationError(
            f"Host port(s) {', '.join(map(str, clashes))} assigned to more than one service"
        )

    return {d.name: d for d in definitions}


def select_services(
    table: Dict[str, ServiceDefinition], target: str
) -> List[ServiceDefinition]:
    """Resolve a CLI target ("all" or a service name) to definitions.

    Raises:
        ConfigurationError: If the target names no known service
    """
    if target == "all":
        return list(table.values())
    if target not in table:
        raise ConfigurationError(
            f"Unknown service '{target}'. Choose from: all, {', '.join(table)}"
        )
    return [table[target]]
