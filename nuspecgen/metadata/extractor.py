"""Derive publishable assembly metadata from raw attribute values."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Optional, Sequence

from ..config import DEFAULT_FRAMEWORK, DEFAULT_FRAMEWORK_ASSEMBLIES
from ..errors import AssemblyNotFoundError, FatalInputError
from ..logging import get_logger
from ..models import AssemblyMetadata
from .base import MetadataReader, RawAssemblyInfo
from .clr import ClrMetadataReader

TITLE_ATTRIBUTE = "System.Reflection.AssemblyTitleAttribute"
DESCRIPTION_ATTRIBUTE = "System.Reflection.AssemblyDescriptionAttribute"
COMPANY_ATTRIBUTE = "System.Reflection.AssemblyCompanyAttribute"
COPYRIGHT_ATTRIBUTE = "System.Reflection.AssemblyCopyrightAttribute"
INFORMATIONAL_VERSION_ATTRIBUTE = "System.Reflection.AssemblyInformationalVersionAttribute"
TARGET_FRAMEWORK_ATTRIBUTE = "System.Runtime.Versioning.TargetFrameworkAttribute"

_VERSION_MARKER = "=v"
_VERSION_PATTERN = re.compile(r"^\d+(\.\d+)*$")


def framework_moniker(token: Optional[str], default: str = DEFAULT_FRAMEWORK) -> str:
    """Translate a TargetFrameworkAttribute value into a NuGet folder name.

    ``.NETFramework,Version=v4.5.2`` becomes ``net452``; .NET Standard and
    .NET Core keep their dotted versions (``netstandard2.0``,
    ``netcoreapp3.1``, ``net6.0``). Missing or unrecognised tokens yield
    ``default``.
    """
    if not token:
        return default
    identifier, marker, version = token.rpartition(_VERSION_MARKER)
    version = version.strip()
    if not marker or not _VERSION_PATTERN.match(version):
        return default

    identifier = identifier.split(",", 1)[0].strip().lower()
    if identifier == ".netstandard":
        return f"netstandard{version}"
    if identifier == ".netcoreapp":
        major = int(version.split(".", 1)[0])
        return f"net{version}" if major >= 5 else f"netcoreapp{version}"
    return f"net{version.replace('.', '')}"


class MetadataExtractor:
    """Reads an artifact's descriptive attributes and derives manifest values."""

    def __init__(
        self,
        reader: MetadataReader | None = None,
        *,
        default_framework: str = DEFAULT_FRAMEWORK,
        framework_assemblies: Sequence[str] = DEFAULT_FRAMEWORK_ASSEMBLIES,
    ) -> None:
        self.reader = reader or ClrMetadataReader()
        self.default_framework = default_framework
        self.framework_assemblies = tuple(framework_assemblies)
        self.logger = get_logger("metadata")

    def extract(self, artifact_path: Path) -> AssemblyMetadata:
        artifact_path = Path(artifact_path)
        if not artifact_path.is_file():
            raise FatalInputError(f"Artifact not found: {artifact_path}", path=artifact_path)

        raw = self.reader.read(artifact_path)
        self._resolve_references(artifact_path, raw.attribute_scopes.values())

        metadata = AssemblyMetadata(
            title=_non_empty(raw.attribute(TITLE_ATTRIBUTE)),
            description=_non_empty(raw.attribute(DESCRIPTION_ATTRIBUTE)),
            company=_non_empty(raw.attribute(COMPANY_ATTRIBUTE)),
            copyright=_non_empty(raw.attribute(COPYRIGHT_ATTRIBUTE)),
            target_framework=framework_moniker(
                raw.attribute(TARGET_FRAMEWORK_ATTRIBUTE), self.default_framework
            ),
            informational_version=_non_empty(raw.attribute(INFORMATIONAL_VERSION_ATTRIBUTE)),
            assembly_version=_non_empty(raw.version),
        )
        self.logger.debug(
            "Extracted %s version %s for %s",
            raw.name or artifact_path.stem,
            metadata.published_version,
            metadata.target_framework,
        )
        return metadata

    def _resolve_references(self, artifact_path: Path, assemblies: Iterable[str]) -> None:
        """Ensure each assembly defining an attribute type can be located.

        Framework assemblies are provided by the runtime; anything else must
        sit next to the artifact as ``<name>.dll``.
        """
        for name in sorted(set(assemblies)):
            if self._is_framework_assembly(name):
                continue
            candidate = artifact_path.parent / f"{name}.dll"
            if not candidate.is_file():
                raise AssemblyNotFoundError(name, candidate)
            self.logger.debug("Resolved %s to %s", name, candidate)

    def _is_framework_assembly(self, name: str) -> bool:
        return any(
            name == prefix or name.startswith(f"{prefix}.")
            for prefix in self.framework_assemblies
        )


def _non_empty(value: Optional[str]) -> Optional[str]:
    return value if value else None


__all__ = [
    "COMPANY_ATTRIBUTE",
    "COPYRIGHT_ATTRIBUTE",
    "DESCRIPTION_ATTRIBUTE",
    "INFORMATIONAL_VERSION_ATTRIBUTE",
    "MetadataExtractor",
    "RawAssemblyInfo",
    "TARGET_FRAMEWORK_ATTRIBUTE",
    "TITLE_ATTRIBUTE",
    "framework_moniker",
]
