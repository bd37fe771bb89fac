"""
Domain layer for stackrepo.

Contains pure domain objects with no I/O or side effects:
- RepositoryEntry / RepositoryFile: the configured index sources
- ProjectVersion / RepoIndex: stacks published by one source, or the
  catalog merged from all of them
"""

from .repository import RepositoryEntry, RepositoryFile, API_VERSION_V1
from .index import ProjectVersion, ProjectVersions, RepoIndex

__all__ = [
    'RepositoryEntry',
    'RepositoryFile',
    'API_VERSION_V1',
    'ProjectVersion',
    'ProjectVersions',
    'RepoIndex',
]
