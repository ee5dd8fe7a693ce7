"""Core data models shared across nuspecgen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AssemblyMetadata:
    """Descriptive attributes read once from the compiled artifact."""

    title: Optional[str] = None
    description: Optional[str] = None
    company: Optional[str] = None
    copyright: Optional[str] = None
    target_framework: str = "net40"
    informational_version: Optional[str] = None
    assembly_version: Optional[str] = None

    @property
    def published_version(self) -> Optional[str]:
        """Version written to the manifest and reported back to the caller."""
        if self.informational_version:
            return self.informational_version
        return self.assembly_version

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "company": self.company,
            "copyright": self.copyright,
            "target_framework": self.target_framework,
            "informational_version": self.informational_version,
            "assembly_version": self.assembly_version,
            "published_version": self.published_version,
        }


@dataclass(frozen=True)
class DependencyRecord:
    """Package dependency; two records are equal when their ids match."""

    id: str
    version: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Dependency id must be a non-empty string")


@dataclass(frozen=True)
class ProjectReference:
    """Reference from the project definition to a sibling project."""

    name: str
    include: str
    path: Path


@dataclass(frozen=True)
class FileEntry:
    """A `file` element of the manifest."""

    src: str
    target: str
