"""Tests for generate command."""

from pathlib import Path

import yaml

from taskboard.cli.generate import CONFIG_FILE, generate_config_yaml, run_generate
from taskboard.models import TaskboardConfig
from taskboard.services import ConfigService


class TestGenerateConfigYaml:
    """Tests for generate_config_yaml function."""

    def test_generates_valid_yaml(self):
        """Generated YAML is valid and parseable."""
        parsed = yaml.safe_load(generate_config_yaml())

        assert parsed["version"] == 1
        assert parsed["store"]["backend"] == "file"
        assert "columns" in parsed["board"]
        assert parsed["server"]["port"] == 3001

    def test_includes_header_comments(self):
        """Generated content includes helpful comments."""
        content = generate_config_yaml()

        assert content.startswith("# taskboard Configuration")
        assert "# store:" in content

    def test_matches_default_config(self):
        """Generated config parses back to TaskboardConfig.default()."""
        parsed = yaml.safe_load(generate_config_yaml())
        assert TaskboardConfig(**parsed) == TaskboardConfig.default()


class TestRunGenerate:
    """Tests for run_generate function."""

    def test_creates_config(self, tmp_path: Path):
        project_root = tmp_path / "project"
        project_root.mkdir()

        exit_code = run_generate(project_root)

        assert exit_code == 0
        assert (project_root / CONFIG_FILE).exists()

    def test_creates_project_root_if_needed(self, tmp_path: Path):
        """Generate creates project_root if it doesn't exist."""
        project_root = tmp_path / "new-project"

        exit_code = run_generate(project_root)

        assert exit_code == 0
        assert (project_root / CONFIG_FILE).exists()

    def test_skips_existing_config(self, tmp_path: Path):
        """Generate returns 1 and leaves an existing config alone."""
        config_file = tmp_path / CONFIG_FILE
        config_file.write_text("server:\n  port: 4000\n")

        exit_code = run_generate(tmp_path)

        assert exit_code == 1
        assert config_file.read_text() == "server:\n  port: 4000\n"

    def test_generated_config_loads_cleanly(self, tmp_path: Path):
        run_generate(tmp_path)

        service = ConfigService(tmp_path)
        service.get_config()

        assert not service.has_config_error
