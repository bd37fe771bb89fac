"""
Bootstrap service for stackrepo.

Prepares the home directory on first run: the home and repository
directories, a repository file seeded with the default hub, and an
empty config file.
"""

from pathlib import Path
from typing import Any, Dict, List
import logging

from ..config import (
    get_home,
    get_repo_dir,
    get_repo_file_path,
    get_default_config_file,
    get_default_config,
)
from ..domain import RepositoryEntry, RepositoryFile
from ..exit_codes import ConfigError, StorageError
from ..infra import RepositoryFileStore

logger = logging.getLogger(__name__)


class BootstrapService:
    """
    Create whatever is missing under the stackrepo home.

    In dry-run mode nothing is created; each step is only logged.

    Example:
        created = BootstrapService(load_config()).ensure_config()
    """

    def __init__(self, config: Dict[str, Any], dry_run: bool = False):
        self.config = config
        self.dry_run = dry_run

    def ensure_config(self) -> List[str]:
        """
        Create missing directories and files.

        Returns:
            Paths created (or that would be created in dry-run mode)

        Raises:
            ConfigError: a path exists with the wrong type
            StorageError: a directory or file cannot be created
        """
        created = []

        for directory in (get_home(self.config), get_repo_dir(self.config)):
            if self._ensure_directory(directory):
                created.append(str(directory))

        repo_file = get_repo_file_path(self.config)
        if self._ensure_repo_file(repo_file):
            created.append(str(repo_file))

        config_file = get_default_config_file(self.config)
        if self._ensure_config_file(config_file):
            created.append(str(config_file))

        return created

    def _ensure_directory(self, path: Path) -> bool:
        if path.exists():
            if not path.is_dir():
                raise ConfigError(f"{path} must be a directory")
            return False

        if self.dry_run:
            logger.info(f"Dry Run - Skipping create of directory {path}")
            return True

        logger.debug(f"Creating {path}")
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Could not create {path}: {e}", str(path))
        return True

    def _ensure_repo_file(self, path: Path) -> bool:
        if path.exists():
            if path.is_dir():
                raise ConfigError(f"{path} must be a file, not a directory")
            return False

        default = self.default_repository()
        if self.dry_run:
            logger.info(f"Dry Run - Skipping creation of {default['name']} repo: {default['url']}")
            return True

        repos = RepositoryFile.new()
        repos.add(RepositoryEntry(name=default["name"], url=default["url"]))
        logger.debug(f"Creating {path}")
        RepositoryFileStore(path).write(repos)
        return True

    def default_repository(self) -> Dict[str, str]:
        """Configured seed repository, falling back to the built-in hub per key."""
        fallback = get_default_config()["default_repository"]
        configured = self.config.get("default_repository")
        if not isinstance(configured, dict):
            configured = {}
        return {
            "name": str(configured.get("name") or fallback["name"]),
            "url": str(configured.get("url") or fallback["url"]),
        }

    def _ensure_config_file(self, path: Path) -> bool:
        if path.exists():
            return False

        if self.dry_run:
            logger.info(f"Dry Run - Skip creation of default config file {path}")
            return True

        logger.debug(f"Creating {path}")
        try:
            path.write_text("")
        except OSError as e:
            raise StorageError(f"Error creating default config file {path}: {e}", str(path))
        return True
