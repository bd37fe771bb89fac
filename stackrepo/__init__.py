"""
stackrepo - Manage stack repositories and browse the stacks they publish.

A stack repository is a named URL serving an index document that lists
project templates ("stacks") and their versions. stackrepo keeps the
list of repositories in <home>/repository/repository.yaml and merges
their indexes into one catalog.

Quick Start:
    from stackrepo import RepositoryFileStore, IndexService, render_projects

    store = RepositoryFileStore("~/.stackrepo/repository/repository.yaml")
    catalog = IndexService(store).build_catalog()
    print(render_projects(catalog))

Domain Objects:
    RepositoryEntry / RepositoryFile - configured repositories
    ProjectVersion / RepoIndex - stacks and their versions

Services:
    IndexService - Catalog aggregation
    BootstrapService - First-run home directory setup
"""

__version__ = "0.1.0"

# Domain objects
from .domain import (
    RepositoryEntry,
    RepositoryFile,
    ProjectVersion,
    RepoIndex,
)

# Infrastructure
from .infra import RepositoryFileStore, IndexDownloader

# Services
from .services import IndexService, BootstrapService

# Rendering
from .render import render_projects, render_repositories

# Configuration
from .config import load_config, save_config

__all__ = [
    "__version__",
    "RepositoryEntry",
    "RepositoryFile",
    "ProjectVersion",
    "RepoIndex",
    "RepositoryFileStore",
    "IndexDownloader",
    "IndexService",
    "BootstrapService",
    "render_projects",
    "render_repositories",
    "load_config",
    "save_config",
]
