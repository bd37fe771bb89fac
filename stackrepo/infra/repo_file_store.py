"""
Repository file persistence for stackrepo.

Reads and writes <home>/repository/repository.yaml:
- Whole-file rewrites (write to temp, then rename)
- Block-style YAML with keys in schema order
- Typed errors instead of exiting, so the CLI picks the exit code
"""

import os
import tempfile
from pathlib import Path
import logging

import yaml

from ..domain import RepositoryFile
from ..exit_codes import ConfigError, RepositoryFileNotFoundError, StorageError
from .codec import load_document

logger = logging.getLogger(__name__)


class RepositoryFileStore:
    """
    Load and save the repository file.

    Example:
        store = RepositoryFileStore(Path("~/.stackrepo/repository/repository.yaml"))
        repos = store.load()
        repos.add(RepositoryEntry("incubator", "https://example.com/index.yaml"))
        store.write(repos)
    """

    def __init__(self, path: Path):
        self.path = Path(path).expanduser()

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> RepositoryFile:
        """
        Read and decode the repository file.

        Raises:
            RepositoryFileNotFoundError: the file has not been created yet
            StorageError: the file exists but cannot be read
            ConfigError: the file is not a valid repository file
        """
        try:
            with open(self.path, 'rb') as f:
                content = f.read()
        except FileNotFoundError:
            raise RepositoryFileNotFoundError(str(self.path))
        except OSError as e:
            raise StorageError(f"Failed reading repository file {self.path}: {e}", str(self.path))

        try:
            data = load_document(content) or {}
            if not isinstance(data, dict):
                raise ValueError("top level must be a mapping")
            repo_file = RepositoryFile.from_dict(data)
        except (yaml.YAMLError, UnicodeDecodeError, ValueError) as e:
            raise ConfigError(f"Failed to parse repository file {self.path}: {e}")

        logger.debug(f"Loaded {len(repo_file)} repositories from {self.path}")
        return repo_file

    def write(self, repo_file: RepositoryFile) -> None:
        """
        Encode and overwrite the repository file.

        Raises:
            StorageError: the file cannot be written
        """
        data = yaml.safe_dump(repo_file.to_dict(), default_flow_style=False, sort_keys=False)

        try:
            fd, temp_path = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp"
            )
        except OSError as e:
            raise StorageError(f"Error writing {self.path} file: {e}", str(self.path))

        try:
            with os.fdopen(fd, 'w') as f:
                f.write(data)
            os.replace(temp_path, self.path)
        except OSError as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise StorageError(f"Error writing {self.path} file: {e}", str(self.path))

        logger.debug(f"Wrote {len(repo_file)} repositories to {self.path}")
