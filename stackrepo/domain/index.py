"""
Index domain objects for stackrepo.

A RepoIndex describes the stacks (projects) one repository source
publishes, each with its list of versions. The same type holds the
catalog aggregated across every configured source.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Dict, Any, List

from .repository import parse_timestamp


def _string_tuple(value: Any) -> tuple:
    if not value:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(str(item) for item in value)
    return (str(value),)


@dataclass(frozen=True)
class ProjectVersion:
    """One published version of a stack."""
    api_version: str = ""
    created: Optional[datetime] = None
    name: str = ""
    home: str = ""
    version: str = ""
    description: str = ""
    keywords: tuple = ()
    maintainers: tuple = ()
    icon: str = ""
    digest: str = ""
    urls: tuple = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProjectVersion':
        def text(key):
            value = data.get(key)
            return '' if value is None else str(value)

        return cls(
            api_version=text('apiVersion'),
            created=parse_timestamp(data.get('created')),
            name=text('name'),
            home=text('home'),
            version=text('version'),
            description=text('description'),
            keywords=_string_tuple(data.get('keywords')),
            maintainers=_string_tuple(data.get('maintainers')),
            icon=text('icon'),
            digest=text('digest'),
            urls=_string_tuple(data.get('urls')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'apiVersion': self.api_version,
            'created': self.created.isoformat() if self.created else None,
            'name': self.name,
            'home': self.home,
            'version': self.version,
            'description': self.description,
            'keywords': list(self.keywords),
            'maintainers': list(self.maintainers),
            'icon': self.icon,
            'digest': self.digest,
            'urls': list(self.urls),
        }


# Version history of one project, in the order the source lists it.
ProjectVersions = List[ProjectVersion]


@dataclass
class RepoIndex:
    """
    Projects published by one source, or the merged catalog of all sources.

    Attributes:
        api_version: Schema version of the (first merged) index
        generated: Generation time of the (first merged) index
        projects: Project name -> version list, in insertion order
    """
    api_version: str = ""
    generated: Optional[datetime] = None
    projects: Dict[str, ProjectVersions] = field(default_factory=dict)
    _seeded: bool = field(default=False, init=False, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RepoIndex':
        """
        Build from a decoded index document.

        Raises:
            ValueError: if 'projects' is not a mapping of version lists
        """
        raw_projects = data.get('projects') or {}
        if not isinstance(raw_projects, dict):
            raise ValueError("'projects' must be a mapping")

        projects: Dict[str, ProjectVersions] = {}
        for name, versions in raw_projects.items():
            versions = versions or []
            if not isinstance(versions, list):
                raise ValueError(f"versions of project {name!r} must be a list")
            for version in versions:
                if not isinstance(version, dict):
                    raise ValueError(f"version entry of project {name!r} must be a mapping")
            projects[str(name)] = [ProjectVersion.from_dict(v) for v in versions]

        return cls(
            api_version=str(data.get('apiVersion') or ''),
            generated=parse_timestamp(data.get('generated')),
            projects=projects,
        )

    def merge(self, other: 'RepoIndex') -> None:
        """
        Merge another index into this one.

        The first merged index supplies api_version and generated. A
        project name already present is replaced by the incoming list.
        """
        if not self._seeded:
            self.api_version = other.api_version
            self.generated = other.generated
            self._seeded = True
        for name, versions in other.projects.items():
            self.projects[name] = versions

    def first_version(self, name: str) -> Optional[ProjectVersion]:
        """First listed version of a project (source order, not semver)."""
        versions = self.projects.get(name)
        return versions[0] if versions else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'apiVersion': self.api_version,
            'generated': self.generated.isoformat() if self.generated else None,
            'projects': {
                name: [v.to_dict() for v in versions]
                for name, versions in self.projects.items()
            },
        }
