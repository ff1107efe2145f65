"""Configuration snapshot management."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..core.constants import CONFIG_FILE_NAME
from ..models.config import WorkshopConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """Reads and writes the workshop's configuration snapshot."""

    def __init__(self, install_path: Path):
        """Initialize config manager."""
        self.install_path = Path(install_path)
        self.config_file = self.install_path / CONFIG_FILE_NAME

    def save_config(self, config: WorkshopConfig) -> WorkshopConfig:
        """Write the snapshot, stamping created/updated times."""
        now = datetime.now()
        previous = self.load_config()
        created_at = config.created_at or (previous.created_at if previous else None) or now
        config = config.model_copy(update={"created_at": created_at, "updated_at": now})

        self.install_path.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(config.model_dump_json(indent=2))
        return config

    def load_config(self) -> Optional[WorkshopConfig]:
        """Load the snapshot, or None if missing or unreadable."""
        if not self.config_file.exists():
            return None
        try:
            data = json.loads(self.config_file.read_text())
            return WorkshopConfig(**data)
        except (json.JSONDecodeError, ValidationError, OSError) as e:
            logger.warning(f"Ignoring unreadable config {self.config_file}: {e}")
            return None
