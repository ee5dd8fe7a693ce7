"""Helper utilities for constructing throwaway solutions in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from nuspecgen.metadata import MetadataReader, RawAssemblyInfo


class ProjectBuilder:
    """Writes project files, templates and build outputs under a temp solution root."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "solution"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries relative to the solution root."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def touch(self, *relatives: str) -> None:
        """Create placeholder binaries; their contents are never parsed in tests."""
        for relative in relatives:
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"MZ")

    def path(self, relative: str = "") -> Path:
        return self.root / relative if relative else self.root


class StaticMetadataReader(MetadataReader):
    """Returns a fixed attribute set and records which artifacts were read."""

    def __init__(
        self,
        attributes: Optional[Dict[str, Optional[str]]] = None,
        *,
        version: str = "1.0.0.0",
        name: str = "Foo",
        attribute_scopes: Optional[Dict[str, str]] = None,
    ) -> None:
        self.info = RawAssemblyInfo(
            name=name,
            version=version,
            attributes=dict(attributes or {}),
            attribute_scopes=dict(attribute_scopes or {}),
        )
        self.calls: List[Path] = []

    def read(self, artifact_path: Path) -> RawAssemblyInfo:
        self.calls.append(artifact_path)
        return self.info


__all__ = ["ProjectBuilder", "StaticMetadataReader"]
