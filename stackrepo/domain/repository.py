"""
Repository file domain objects for stackrepo.

RepositoryFile is the list of named index sources persisted in
<home>/repository/repository.yaml. The objects here do no I/O;
RepositoryFileStore reads and writes them.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional, Dict, Any, List

API_VERSION_V1 = "v1"


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Decode a YAML timestamp or date (already decoded) or an ISO-8601 string."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError:
            return None
    return None


@dataclass(frozen=True)
class RepositoryEntry:
    """A named repository source pointing at an index document."""
    name: str
    url: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RepositoryEntry':
        return cls(name=str(data.get('name') or ''), url=str(data.get('url') or ''))

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'url': self.url}


@dataclass
class RepositoryFile:
    """
    The persisted list of repository sources.

    Entries keep the order they were added in. Names are expected to be
    unique, but add() does not enforce it; callers check has()/has_url()
    first.

    Example:
        repos = RepositoryFile.new()
        repos.add(RepositoryEntry("appsodyhub", "https://example.com/index.yaml"))
        repos.has("appsodyhub")  # True
    """
    api_version: str = API_VERSION_V1
    generated: Optional[datetime] = None
    repositories: List[RepositoryEntry] = field(default_factory=list)

    @classmethod
    def new(cls) -> 'RepositoryFile':
        """Create an empty repository file stamped with the current time."""
        return cls(
            api_version=API_VERSION_V1,
            generated=datetime.now(timezone.utc),
            repositories=[],
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RepositoryFile':
        """
        Build from a decoded YAML mapping.

        Raises:
            ValueError: if 'repositories' is not a list of mappings
        """
        entries = data.get('repositories') or []
        if not isinstance(entries, list):
            raise ValueError("'repositories' must be a list")
        repositories = []
        for entry in entries:
            if not isinstance(entry, dict):
                raise ValueError(f"repository entry must be a mapping, got {entry!r}")
            repositories.append(RepositoryEntry.from_dict(entry))

        return cls(
            api_version=str(data.get('apiVersion') or ''),
            generated=parse_timestamp(data.get('generated')),
            repositories=repositories,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the mapping written to disk."""
        return {
            'apiVersion': self.api_version,
            'generated': self.generated,
            'repositories': [entry.to_dict() for entry in self.repositories],
        }

    def add(self, *entries: RepositoryEntry) -> None:
        self.repositories.extend(entries)

    def has(self, name: str) -> bool:
        return any(entry.name == name for entry in self.repositories)

    def has_url(self, url: str) -> bool:
        return any(entry.url == url for entry in self.repositories)

    def get(self, name: str) -> Optional[RepositoryEntry]:
        for entry in self.repositories:
            if entry.name == name:
                return entry
        return None

    def remove(self, name: str) -> bool:
        """
        Remove the first entry called `name`.

        The remaining entries keep their relative order.

        Returns:
            True if an entry was removed, False if none matched
        """
        for index, entry in enumerate(self.repositories):
            if entry.name == name:
                del self.repositories[index]
                return True
        return False

    def __len__(self) -> int:
        return len(self.repositories)
