"""Generate command for creating default config."""

import logging
from pathlib import Path

import yaml

from ..models import TaskboardConfig
from .output import info, success

logger = logging.getLogger(__name__)

CONFIG_FILE = "taskboard.yml"

# Header comments for generated file
CONFIG_HEADER = """\
# taskboard Configuration
#
# store:
#   backend: "file" keeps the board in a local JSON file (store.path)
#            "http" talks to the companion service at store.url
#   cache:   local snapshot written on every change (http backend only);
#            used at startup when the service has no valid board
#
# board:
#   columns seed a fresh board; once saved, columns are edited on the board
#   default_priority: one of low, medium, high, urgent
#
# server:
#   settings for `taskboard --serve` (SQLite database path, host, port)

"""


def generate_config_yaml() -> str:
    """Generate YAML config from the default TaskboardConfig model.

    Uses TaskboardConfig.default() as the single source of truth,
    ensuring generated config always matches internal defaults.
    """
    config_dict = TaskboardConfig.default().model_dump()
    yaml_content = yaml.dump(config_dict, default_flow_style=False, sort_keys=False)
    return CONFIG_HEADER + yaml_content


def run_generate(project_root: Path) -> int:
    """
    Generate default configuration.

    Args:
        project_root: Path to project root where taskboard.yml will be created

    Returns:
        Exit code (0 = success, 1 = nothing to do)
    """
    config_path = project_root / CONFIG_FILE

    if config_path.exists():
        info(f"Config exists: {config_path}")
        print("Nothing to generate.")
        return 1

    project_root.mkdir(parents=True, exist_ok=True)
    config_path.write_text(generate_config_yaml())
    logger.info("Generated %s", config_path)
    success(f"Generated config: {config_path}")
    return 0
