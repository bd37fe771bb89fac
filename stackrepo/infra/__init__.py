"""
Infrastructure layer for stackrepo.

Contains abstractions for external systems:
- RepositoryFileStore: repository.yaml persistence
- IndexDownloader: HTTP(S) and file:// index retrieval

These provide clean interfaces that can be mocked for testing.
"""

from .repo_file_store import RepositoryFileStore
from .downloader import IndexDownloader, FileAdapter, create_session

__all__ = [
    'RepositoryFileStore',
    'IndexDownloader',
    'FileAdapter',
    'create_session',
]
