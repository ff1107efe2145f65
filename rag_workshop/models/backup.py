"""Backup models."""

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List

from pydantic import BaseModel, ConfigDict


class BackupPhase(Enum):
    """States of the backup state machine."""
    IDLE = "idle"
    STOPPING_SERVICES = "stopping_services"
    COPYING_VOLUMES = "copying_volumes"
    ARCHIVING = "archiving"
    RESTARTING_SERVICES = "restarting_services"
    DONE = "done"
    FAILED = "failed"


class BackupArchive(BaseModel):
    """A compressed snapshot of the workshop's bind-mounted data."""
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    included_volumes: List[Path]
    output_path: Path
