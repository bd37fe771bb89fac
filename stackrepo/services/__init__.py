"""
Service layer for stackrepo.

Contains the logic that orchestrates domain objects and infrastructure:
- IndexService: catalog aggregation across repositories
- BootstrapService: first-run home directory preparation

Services are the primary API for commands to use.
"""

from .index_service import IndexService
from .bootstrap_service import BootstrapService

__all__ = [
    'IndexService',
    'BootstrapService',
]
