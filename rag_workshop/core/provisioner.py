"""Directory layout provisioning for a workshop install."""

import errno
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List

from ..models.config import WorkshopConfig
from ..services.exceptions import ConfigurationError, PermissionDeniedError
from .constants import BACKUPS_DIR_NAME, LLM_SERVICE, WORKFLOW_SERVICE

logger = logging.getLogger(__name__)


@dataclass
class ProvisionReport:
    """Which directories were created and which already existed."""
    created: List[Path] = field(default_factory=list)
    existing: List[Path] = field(default_factory=list)


def workshop_layout(config: WorkshopConfig) -> List[Path]:
    """Directories a workshop install needs, relative to the install path.

    An absolute entry (an external shared drive) is used as-is.
    """
    return [
        Path("data") / config.vector_store,
        Path("data") / WORKFLOW_SERVICE,
        Path("data") / LLM_SERVICE,
        config.shared_files_path,
        Path(BACKUPS_DIR_NAME),
    ]


class Provisioner:
    """Creates the on-disk layout before any container starts."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def provision(self, subpaths: Iterable[Path]) -> ProvisionReport:
        """Create every missing directory under the root.

        Raises:
            PermissionDeniedError: If a directory cannot be created
            ConfigurationError: If a file is in the way of a directory
        """
        report = ProvisionReport()
        for target in [self.root] + [self.root / p for p in subpaths]:
            if target.is_dir():
                report.existing.append(target)
                continue
            if target.exists():
                raise ConfigurationError(f"{target} exists and is not a directory")
            try:
                target.mkdir(parents=True, exist_ok=True)
            except PermissionError as e:
                raise PermissionDeniedError(f"Cannot create directory {target}: {e}") from e
            except (FileExistsError, NotADirectoryError) as e:
                raise ConfigurationError(f"Cannot create directory {target}: {e}") from e
            except OSError as e:
                if e.errno in (errno.EACCES, errno.EPERM, errno.EROFS):
                    raise PermissionDeniedError(f"Cannot create directory {target}: {e}") from e
                raise
            logger.info(f"Created directory {target}")
            report.created.append(target)
        return report
