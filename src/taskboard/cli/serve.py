"""Serve command: run the companion board service."""

from ..server import BoardDatabase, run_server
from ..services import ConfigService
from .output import error, info


def run_serve(
    config_service: ConfigService,
    host: str | None = None,
    port: int | None = None,
) -> int:
    """Run the service using the [server] section of taskboard.yml.

    Returns:
        Exit code (0 after a clean shutdown)
    """
    if config_service.has_config_error:
        error(f"{config_service.config_error} (using defaults)")

    server_config = config_service.get_config().server
    db_path = config_service.resolve(server_config.database)
    host = host or server_config.host
    port = port or server_config.port

    info(f"Board database: {db_path}")
    info(f"server on {host}:{port}")
    run_server(BoardDatabase(db_path), host=host, port=port)
    return 0
