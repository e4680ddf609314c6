"""Locates a newsglot project and the files it keeps under `.newsglot/`."""
# src/newsglot/paths.py

from functools import lru_cache
from pathlib import Path
from typing import Final

PROJECT_SUBDIR: Final[Path] = Path(".newsglot")
CONFIG_FILE_NAMES: Final[tuple[str, ...]] = ("main.yaml", "main.yml")
LOG_FILE_NAME: Final[str] = "debug.log"
CACHE_FILE_NAME: Final[str] = "translations.json"


def config_dir(project_root: Path) -> Path:
    """Return the directory that holds a project's configuration."""
    return project_root / PROJECT_SUBDIR / "configs"


def default_config_file(project_root: Path) -> Path:
    """Return where `newsglot init` writes the configuration of a project."""
    return config_dir(project_root) / CONFIG_FILE_NAMES[0]


def _config_in(directory: Path) -> Path | None:
    for name in CONFIG_FILE_NAMES:
        candidate = config_dir(directory) / name
        if candidate.is_file():
            return candidate
    return None


@lru_cache(maxsize=1)
def find_config_file(start_path: Path | None = None) -> Path:
    """
    Find the configuration of the nearest enclosing newsglot project.

    The search starts at `start_path` (or the CWD) and walks up through its
    parents. `main.yaml` wins over `main.yml` when a project has both.

    Args:
        start_path: The path to start searching from. Defaults to CWD.

    Raises:
        FileNotFoundError: If no directory on the way up has a project configuration.

    """
    current = (start_path or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        found = _config_in(directory)
        if found is not None:
            return found

    msg = f"Could not find a configuration file ({' or '.join(CONFIG_FILE_NAMES)}) in a '{PROJECT_SUBDIR / 'configs'}' directory from the current location upwards. Run 'newsglot init' first or pass --config."
    raise FileNotFoundError(msg)


def find_project_root(start_path: Path | None = None) -> Path:
    """Return the directory that contains the project's `.newsglot` folder."""
    # <root>/.newsglot/configs/<file>
    return find_config_file(start_path).parents[2]


def get_log_file(start_path: Path | None = None) -> Path:
    """Return the project's debug log file. The file and its directory may not exist yet."""
    return find_project_root(start_path) / PROJECT_SUBDIR / "logs" / LOG_FILE_NAME


def get_cache_file(start_path: Path | None = None) -> Path | None:
    """Return the project's translation cache file, or None when run outside a project."""
    try:
        root = find_project_root(start_path)
    except FileNotFoundError:
        return None
    return root / PROJECT_SUBDIR / "caches" / CACHE_FILE_NAME
