"""Build repositories from the [store] section of taskboard.yml."""

from pathlib import Path

from ..models import StoreConfig
from .filesystem import JsonFileRepository
from .http import HttpBoardRepository
from .protocol import BoardRepositoryProtocol


def build_repositories(
    store: StoreConfig, project_root: Path
) -> tuple[BoardRepositoryProtocol, JsonFileRepository | None]:
    """Create the board repository and the optional local snapshot cache.

    Returns:
        (repository, cache). The cache is only used with the http backend;
        the file backend already is the local copy.
    """
    if store.backend == "http":
        cache = JsonFileRepository(project_root / store.cache) if store.cache else None
        return HttpBoardRepository(store.url, timeout=store.timeout), cache
    return JsonFileRepository(project_root / store.path), None
