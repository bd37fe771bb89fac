"""
Index service for stackrepo.

Builds the stack catalog by downloading the index of every configured
repository and merging them in repository-file order.
"""

from typing import Optional
import logging

from ..domain import RepoIndex
from ..infra import RepositoryFileStore, IndexDownloader

logger = logging.getLogger(__name__)


class IndexService:
    """
    Service for aggregating repository indexes into one catalog.

    Example:
        service = IndexService(RepositoryFileStore(path))
        catalog = service.build_catalog()
        print(render_projects(catalog))
    """

    def __init__(
        self,
        store: RepositoryFileStore,
        downloader: Optional[IndexDownloader] = None
    ):
        """
        Initialize IndexService.

        Args:
            store: Repository file store listing the sources
            downloader: Index downloader (creates default if None)
        """
        self.store = store
        self.downloader = downloader or IndexDownloader()

    def build_catalog(self) -> RepoIndex:
        """
        Download every configured index and merge them.

        Sources are processed in the order they appear in the repository
        file. When two sources publish the same project name, the later
        source's version list replaces the earlier one.

        Raises:
            RepositoryFileNotFoundError, ConfigError: repository file problems
            TransportError, IndexFormatError: any single source failing;
                no partial catalog is returned
        """
        repos = self.store.load()
        catalog = RepoIndex()

        for entry in repos.repositories:
            logger.debug(f"Reading index of repository {entry.name}")
            index = self.downloader.download_index(entry.url)
            for name in index.projects:
                if name in catalog.projects:
                    logger.debug(f"Project {name} from {entry.name} replaces an earlier definition")
            catalog.merge(index)
            logger.debug(f"Merged {len(index.projects)} projects from {entry.name}")

        return catalog
