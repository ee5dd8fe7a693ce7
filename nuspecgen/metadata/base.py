"""Base classes for assembly metadata readers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional


@dataclass
class RawAssemblyInfo:
    """Attribute values exactly as stored in the artifact, before derivation."""

    name: str
    version: str
    attributes: Dict[str, Optional[str]] = field(default_factory=dict)
    # Attribute type name -> name of the external assembly that defines it.
    attribute_scopes: Dict[str, str] = field(default_factory=dict)

    def attribute(self, type_name: str) -> Optional[str]:
        return self.attributes.get(type_name)


class MetadataReader(ABC):
    """Contract for readers that inspect an artifact without executing it."""

    @abstractmethod
    def read(self, artifact_path: Path) -> RawAssemblyInfo:
        """Return the assembly-level attributes declared by the artifact."""
