"""Snapshots of the workshop's bind-mounted data."""

import logging
import shutil
import tarfile
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from ..models.backup import BackupArchive, BackupPhase
from ..models.service import LifecycleOutcome, ServiceDefinition, VolumeMount
from ..services.exceptions import BackupStepFailedError, WorkshopError
from .constants import BACKUPS_DIR_NAME
from .lifecycle import LifecycleManager

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIX = ".tar.gz"
PARTIAL_SUFFIX = ".partial"


def volume_dirname(mount: VolumeMount) -> str:
    """Directory name for a mount inside a backup, unique per service."""
    return mount.container_path.strip("/").replace("/", "_") or "root"


class BackupManager:
    """Stops services, copies their volumes, archives them, restarts them.

    Phases run Idle -> StoppingServices -> CopyingVolumes -> Archiving ->
    RestartingServices -> Done. Any failure moves to Failed, but only after
    every service the backup stopped has been started again.
    """

    def __init__(
        self,
        lifecycle: LifecycleManager,
        install_path: Path,
        clock: Callable[[], datetime] = datetime.now,
        on_phase: Optional[Callable[[BackupPhase], None]] = None,
    ):
        self.lifecycle = lifecycle
        self.install_path = Path(install_path)
        self.backups_dir = self.install_path / BACKUPS_DIR_NAME
        self.clock = clock
        self.on_phase = on_phase
        self.phase = BackupPhase.IDLE

    def _enter(self, phase: BackupPhase) -> None:
        logger.info(f"Backup phase: {self.phase.value} -> {phase.value}")
        self.phase = phase
        if self.on_phase:
            self.on_phase(phase)

    def _stop_services(self, definitions: List[ServiceDefinition], stopped: List[ServiceDefinition]) -> None:
        for definition in definitions:
            result = self.lifecycle.stop(definition)
            if result.outcome == LifecycleOutcome.STOPPED:
                stopped.append(definition)

    def _copy_volumes(self, definitions: List[ServiceDefinition], staging: Path) -> List[Path]:
        included = []
        for definition in definitions:
            for mount in definition.volume_mounts:
                source = Path(mount.host_path)
                if not source.is_dir():
                    logger.warning(f"Skipping missing volume {source}")
                    continue
                destination = staging / definition.name / volume_dirname(mount)
                shutil.copytree(source, destination)
                included.append(source)
        return included

    def _archive(self, staging: Path) -> Path:
        """Write the archive under a partial name, renaming it once complete."""
        output = staging.with_name(staging.name + ARCHIVE_SUFFIX)
        partial = output.with_name(output.name + PARTIAL_SUFFIX)
        with tarfile.open(partial, "w:gz") as tar:
            tar.add(str(staging), arcname=staging.name)
        partial.replace(output)
        shutil.rmtree(staging)
        return output

    def _discard(self, staging: Path) -> None:
        """Remove the staging folder and any partial archive of a failed run."""
        partial = staging.with_name(staging.name + ARCHIVE_SUFFIX + PARTIAL_SUFFIX)
        try:
            if partial.exists():
                partial.unlink()
            if staging.is_dir():
                shutil.rmtree(staging)
        except OSError as e:
            logger.error(f"Could not clean up failed backup {staging}: {e}")

    def _restart_services(self, stopped: List[ServiceDefinition]) -> List[str]:
        """Start each stopped service; return names that failed to start."""
        failed = []
        for definition in stopped:
            try:
                self.lifecycle.ensure_running(definition)
            except WorkshopError as e:
                logger.error(f"Could not restart {definition.name} after backup: {e}")
                failed.append(definition.name)
        return failed

    def run(self, definitions: List[ServiceDefinition]) -> BackupArchive:
        """Back up every bind-mounted directory of ``definitions``.

        Raises:
            BackupStepFailedError: If any step fails. Services have already
                been restarted when this is raised.
        """
        timestamp = self.clock()
        staging = self.backups_dir / f"backup-{timestamp.strftime('%Y%m%d-%H%M%S')}"
        stopped: List[ServiceDefinition] = []
        owns_staging = False

        try:
            self._enter(BackupPhase.STOPPING_SERVICES)
            self._stop_services(definitions, stopped)

            self._enter(BackupPhase.COPYING_VOLUMES)
            staging.mkdir(parents=True, exist_ok=False)
            owns_staging = True
            included = self._copy_volumes(definitions, staging)

            self._enter(BackupPhase.ARCHIVING)
            output = self._archive(staging)
        except Exception as e:
            failed_phase = self.phase
            if owns_staging:
                self._discard(staging)
            self._enter(BackupPhase.RESTARTING_SERVICES)
            self._restart_services(stopped)
            self._enter(BackupPhase.FAILED)
            raise BackupStepFailedError(failed_phase, e) from e

        self._enter(BackupPhase.RESTARTING_SERVICES)
        failed = self._restart_services(stopped)
        if failed:
            self._enter(BackupPhase.FAILED)
            raise BackupStepFailedError(
                BackupPhase.RESTARTING_SERVICES,
                WorkshopError(f"services not restarted: {', '.join(failed)}"),
            )

        self._enter(BackupPhase.DONE)
        return BackupArchive(timestamp=timestamp, included_volumes=included, output_path=output)

    def list_backups(self) -> List[Path]:
        """Existing archives, newest first."""
        if not self.backups_dir.exists():
            return []
        return sorted(self.backups_dir.glob(f"backup-*{ARCHIVE_SUFFIX}"), reverse=True)
