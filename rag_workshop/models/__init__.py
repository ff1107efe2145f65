"""Models for RAG Workshop."""

from .config import PortsConfig, WorkshopConfig
from .service import (
    ContainerState,
    HealthCheckSpec,
    HealthResult,
    HealthStatus,
    LifecycleOutcome,
    LifecycleResult,
    ModelPullResult,
    RuntimeStatus,
    ServiceDefinition,
    VolumeMount,
)
from .backup import BackupArchive, BackupPhase

__all__ = [
    'PortsConfig',
    'WorkshopConfig',
    'ContainerState',
    'HealthCheckSpec',
    'HealthResult',
    'HealthStatus',
    'LifecycleOutcome',
    'LifecycleResult',
    'ModelPullResult',
    'RuntimeStatus',
    'ServiceDefinition',
    'VolumeMount',
    'BackupArchive',
    'BackupPhase',
]
