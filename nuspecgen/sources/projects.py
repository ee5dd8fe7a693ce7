"""Resolve package dependencies implied by sibling project references."""

from __future__ import annotations

from pathlib import Path, PureWindowsPath
from typing import Callable, List, Optional

from ..logging import get_logger
from ..models import DependencyRecord, ProjectReference
from ..xmlutils import child_elements, child_text, local_name, parse_xml
from .published import read_published_record, sibling_manifest_path

ManifestReader = Callable[[Path], Optional[DependencyRecord]]


class TransitiveDependencyResolver:
    """Turns `ProjectReference` items into dependencies on their published packages."""

    def __init__(self, manifest_reader: ManifestReader | None = None) -> None:
        self.manifest_reader = manifest_reader or read_published_record
        self.logger = get_logger("sources.projects")

    def references(self, project_path: Path, project_dir: Path) -> List[ProjectReference]:
        """Return the sibling project references declared by the project definition."""
        root = parse_xml(Path(project_path), description="project definition").getroot()
        references: List[ProjectReference] = []
        if local_name(root.tag) != "Project":
            self.logger.debug("%s has no Project root; no references", project_path)
            return references

        for item_group in child_elements(root, "ItemGroup"):
            for item in child_elements(item_group, "ProjectReference"):
                include = (item.get("Include") or "").strip()
                if not include:
                    continue
                # Project files written on Windows use backslash separators.
                relative = PureWindowsPath(include).as_posix()
                name = child_text(item, "Name") or PureWindowsPath(include).stem
                references.append(
                    ProjectReference(
                        name=name,
                        include=include,
                        path=Path(project_dir) / relative,
                    )
                )
        return references

    def resolve(self, project_path: Path, project_dir: Path) -> List[DependencyRecord]:
        records: List[DependencyRecord] = []
        for reference in self.references(project_path, project_dir):
            if not reference.path.is_file():
                self.logger.debug(
                    "Skipping reference %s: %s does not exist", reference.name, reference.path
                )
                continue
            manifest_path = sibling_manifest_path(reference.path.parent, reference.name)
            record = self.manifest_reader(manifest_path)
            if record is None:
                self.logger.debug(
                    "Skipping reference %s: no published manifest at %s",
                    reference.name,
                    manifest_path,
                )
                continue
            self.logger.debug("Reference %s publishes %s %s", reference.name, record.id, record.version)
            records.append(record)
        return records


__all__ = ["TransitiveDependencyResolver"]
