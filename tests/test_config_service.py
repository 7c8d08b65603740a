"""Tests for ConfigService."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from taskboard.models import BoardConfig, StoreConfig, TaskboardConfig
from taskboard.services import ConfigService


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create a temporary project directory."""
    root = tmp_path / "project"
    root.mkdir()
    return root


class TestConfigServiceLoading:
    """Tests for ConfigService file loading."""

    def test_default_on_missing_file(self, project_dir: Path):
        """Missing taskboard.yml returns default config."""
        service = ConfigService(project_dir)
        config = service.get_config()

        assert config.board.column_ids == ["todo", "in_progress", "done"]
        assert config.store.backend == "file"
        assert config.server.port == 3001
        assert not service.has_config_error

    def test_load_full_config(self, project_dir: Path):
        (project_dir / "taskboard.yml").write_text(
            """
version: 1
store:
  backend: http
  url: http://tasks.internal:8080
  timeout: 2.5
  cache: .cache/board.json
board:
  columns:
    - id: backlog
      title: "Backlog"
    - id: shipped
      title: "Shipped"
  default_priority: high
  default_division: Ops
server:
  port: 9000
  database: data/board.db
"""
        )

        service = ConfigService(project_dir)
        config = service.get_config()

        assert config.store.backend == "http"
        assert config.store.url == "http://tasks.internal:8080"
        assert config.store.timeout == 2.5
        assert config.store.cache == ".cache/board.json"
        assert config.board.column_ids == ["backlog", "shipped"]
        assert config.board.default_priority == "high"
        assert config.board.default_division == "Ops"
        assert config.server.port == 9000
        assert not service.has_config_error

    def test_partial_config_keeps_other_defaults(self, project_dir: Path):
        (project_dir / "taskboard.yml").write_text("store:\n  path: boards/main.json\n")

        config = ConfigService(project_dir).get_config()

        assert config.store.path == "boards/main.json"
        assert config.board.column_ids == ["todo", "in_progress", "done"]

    def test_invalid_yaml_falls_back(self, project_dir: Path):
        (project_dir / "taskboard.yml").write_text("board: [unclosed")

        service = ConfigService(project_dir)
        config = service.get_config()

        assert config == TaskboardConfig.default()
        assert service.has_config_error
        assert "Invalid YAML" in (service.config_error or "")

    def test_empty_file_falls_back(self, project_dir: Path):
        (project_dir / "taskboard.yml").write_text("")

        service = ConfigService(project_dir)
        service.get_config()

        assert service.config_error == "taskboard.yml is empty"

    def test_non_mapping_falls_back(self, project_dir: Path):
        (project_dir / "taskboard.yml").write_text("- just\n- a list\n")

        service = ConfigService(project_dir)
        service.get_config()

        assert "must contain a mapping" in (service.config_error or "")

    def test_invalid_values_fall_back(self, project_dir: Path):
        (project_dir / "taskboard.yml").write_text("store:\n  backend: ftp\n")

        service = ConfigService(project_dir)
        config = service.get_config()

        assert config.store.backend == "file"
        assert "Invalid taskboard.yml" in (service.config_error or "")

    def test_config_is_cached_until_reload(self, project_dir: Path):
        config_file = project_dir / "taskboard.yml"
        config_file.write_text("server:\n  port: 4000\n")
        service = ConfigService(project_dir)
        assert service.get_config().server.port == 4000

        config_file.write_text("server:\n  port: 5000\n")
        assert service.get_config().server.port == 4000

        service.reload()
        assert service.get_config().server.port == 5000

    def test_resolve(self, project_dir: Path):
        service = ConfigService(project_dir)
        assert service.resolve(".taskboard/board.db") == project_dir / ".taskboard" / "board.db"


class TestConfigModels:
    """Validation rules of the config models."""

    def test_duplicate_column_ids_rejected(self):
        with pytest.raises(ValidationError, match="unique"):
            BoardConfig(columns=[{"id": "a", "title": "A"}, {"id": "a", "title": "B"}])

    def test_column_id_must_be_lowercase_identifier(self):
        with pytest.raises(ValidationError):
            BoardConfig(columns=[{"id": "In-Progress", "title": "In Progress"}])

    def test_at_least_one_column(self):
        with pytest.raises(ValidationError):
            BoardConfig(columns=[])

    def test_absolute_store_path_rejected(self):
        with pytest.raises(ValidationError, match="relative"):
            StoreConfig(path="/etc/board.json")

    def test_escaping_store_path_rejected(self):
        with pytest.raises(ValidationError, match="within the project"):
            StoreConfig(path="../../board.json")

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            StoreConfig(timeout=0)

    def test_to_board_seeds_columns(self):
        board = BoardConfig.default().to_board()

        assert board.column_order == ("todo", "in_progress", "done")
        assert board.columns["in_progress"].title == "In Progress"
        assert board.tasks == {}
