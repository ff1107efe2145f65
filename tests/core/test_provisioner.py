import errno
from pathlib import Path
from unittest.mock import patch

import pytest

from rag_workshop.core.provisioner import Provisioner, workshop_layout
from rag_workshop.models.config import WorkshopConfig
from rag_workshop.services.exceptions import ConfigurationError, PermissionDeniedError


class TestProvisioner:
    """Tests for directory provisioning."""

    def test_creates_missing_directories(self, tmp_path):
        root = tmp_path / "workshop"
        report = Provisioner(root).provision([Path("data/n8n"), Path("backups")])

        assert (root / "data" / "n8n").is_dir()
        assert (root / "backups").is_dir()
        assert root in report.created
        assert root / "data" / "n8n" in report.created
        assert report.existing == []

    def test_is_idempotent(self, tmp_path):
        root = tmp_path / "workshop"
        Provisioner(root).provision([Path("data/n8n")])
        report = Provisioner(root).provision([Path("data/n8n")])

        assert report.created == []
        assert root / "data" / "n8n" in report.existing

    def test_permission_error_is_fatal(self, tmp_path):
        with patch.object(Path, "mkdir", side_effect=PermissionError("denied")):
            with pytest.raises(PermissionDeniedError, match="Cannot create directory"):
                Provisioner(tmp_path / "workshop").provision([Path("data")])

    def test_read_only_filesystem_is_permission_denied(self, tmp_path):
        with patch.object(Path, "mkdir", side_effect=OSError(errno.EROFS, "read-only")):
            with pytest.raises(PermissionDeniedError):
                Provisioner(tmp_path / "workshop").provision([])

    def test_other_os_errors_propagate(self, tmp_path):
        with patch.object(Path, "mkdir", side_effect=OSError(errno.ENOSPC, "no space")):
            with pytest.raises(OSError):
                Provisioner(tmp_path / "workshop").provision([])


    def test_file_in_place_of_directory(self, tmp_path):
        root = tmp_path / "workshop"
        root.mkdir()
        (root / "backups").write_text("not a folder")

        with pytest.raises(ConfigurationError, match="exists and is not a directory"):
            Provisioner(root).provision([Path("backups")])

    def test_file_in_place_of_parent_directory(self, tmp_path):
        root = tmp_path / "workshop"
        root.mkdir()
        (root / "data").write_text("not a folder")

        with pytest.raises(ConfigurationError, match="Cannot create directory"):
            Provisioner(root).provision([Path("data/n8n")])

class TestWorkshopLayout:
    """Tests for the default directory layout."""

    def test_layout_for_chroma(self, tmp_path):
        config = WorkshopConfig(install_path=tmp_path)
        layout = workshop_layout(config)
        assert Path("data/chroma") in layout
        assert Path("data/n8n") in layout
        assert Path("data/ollama") in layout
        assert Path("backups") in layout
        assert tmp_path / "files" in layout

    def test_layout_for_qdrant_with_external_drive(self, tmp_path):
        drive = tmp_path / "drive"
        config = WorkshopConfig(install_path=tmp_path / "w", vector_store="qdrant",
                                local_drive_path=drive)
        layout = workshop_layout(config)
        assert Path("data/qdrant") in layout
        assert drive in layout

        Provisioner(config.install_path).provision(layout)
        assert drive.is_dir()
