"""Export the service table as a docker-compose file."""

from pathlib import Path
from typing import Any, Dict, Iterable

import yaml

from ..models.service import ServiceDefinition
from .constants import SERVICE_LABEL, WORKSHOP_LABEL


def compose_service(definition: ServiceDefinition) -> Dict[str, Any]:
    """One docker-compose service entry."""
    entry: Dict[str, Any] = {
        "image": definition.image,
        "container_name": definition.container_name,
        "restart": "always",
        "ports": [f"{definition.host_port}:{definition.container_port}"],
        "labels": {WORKSHOP_LABEL: "true", SERVICE_LABEL: definition.name},
        "extra_hosts": ["host.docker.internal:host-gateway"],
    }
    if definition.volume_mounts:
        entry["volumes"] = [
            f"{m.host_path}:{m.container_path}" + (":ro" if m.read_only else "")
            for m in definition.volume_mounts
        ]
    if definition.environment:
        entry["environment"] = dict(definition.environment)
    return entry


def build_compose(definitions: Iterable[ServiceDefinition]) -> Dict[str, Any]:
    return {"services": {d.name: compose_service(d) for d in definitions}}


def write_compose(definitions: Iterable[ServiceDefinition], output: Path) -> Path:
    output = Path(output)
    with open(output, "w") as f:
        yaml.safe_dump(build_compose(definitions), f, sort_keys=False)
    return output
