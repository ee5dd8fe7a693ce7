"""Merge assembly metadata and dependency sources into a manifest template."""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Sequence, Tuple

from ..logging import get_logger
from ..models import AssemblyMetadata, DependencyRecord, FileEntry
from .document import ManifestDocument

# Manifest field -> AssemblyMetadata attribute supplying it.
FIELD_SOURCES: Tuple[Tuple[str, str], ...] = (
    ("id", "title"),
    ("version", "published_version"),
    ("authors", "company"),
    ("owners", "company"),
    ("description", "description"),
    ("copyright", "copyright"),
)


class ManifestMerger:
    """Applies field overwrites and the dependency union to a loaded template."""

    def __init__(self) -> None:
        self.logger = get_logger("manifest.merger")

    def merge(
        self,
        template: ManifestDocument,
        metadata: AssemblyMetadata,
        declared: Sequence[DependencyRecord],
        transitive: Sequence[DependencyRecord],
    ) -> ManifestDocument:
        template.ensure(template.metadata, "dependencies")

        for field_name, attribute in FIELD_SOURCES:
            value: Optional[str] = getattr(metadata, attribute)
            if template.set_field(field_name, value):
                self.logger.debug("Set %s to %s", field_name, value)

        recorded: Dict[str, Optional[str]] = {
            record.id: record.version for record in template.dependencies()
        }
        for source, records in (("declared", declared), ("transitive", transitive)):
            self._union(template, records, recorded, source)
        return template

    def append_files(self, document: ManifestDocument, entries: Iterable[FileEntry]) -> None:
        for entry in entries:
            document.add_file(entry)

    def _union(
        self,
        document: ManifestDocument,
        records: Iterable[DependencyRecord],
        recorded: Dict[str, Optional[str]],
        source: str,
    ) -> None:
        for record in records:
            if document.add_dependency(record):
                recorded[record.id] = record.version
                self.logger.debug("Added %s dependency %s %s", source, record.id, record.version)
                continue
            kept = recorded.get(record.id)
            if record.version != kept:
                self.logger.warning(
                    "Ignoring %s dependency %s %s; keeping version %s recorded first",
                    source,
                    record.id,
                    record.version,
                    kept,
                    extra={"path": document.source},
                )


__all__ = ["FIELD_SOURCES", "ManifestMerger"]
