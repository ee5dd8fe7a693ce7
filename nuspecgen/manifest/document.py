"""In-memory nuspec tree with explicit lookup and upsert operations."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Optional

from ..errors import FatalInputError
from ..models import DependencyRecord, FileEntry
from ..xmlutils import child_elements, detect_namespace, find_child, local_name, parse_xml, qualify

_INDENT = "  "


class ManifestDocument:
    """Owns one parsed manifest for the duration of a generation run.

    Lookups (`find`, `get_field`, `dependency_ids`) never modify the tree;
    writes (`ensure`, `set_field`, `add_dependency`, `add_file`) create
    elements as needed. A default namespace on the template root is carried
    onto every created element and kept when serialising.
    """

    def __init__(self, tree: ET.ElementTree, *, source: Path | None = None) -> None:
        root = tree.getroot()
        if root is None or local_name(root.tag) != "package":
            raise FatalInputError(
                f"{_describe(source)} must have a <package> root",
                path=source,
            )
        self._tree = tree
        self.source = source
        self.namespace = detect_namespace(root)
        self.package = root
        metadata = self.find(root, "metadata")
        if metadata is None:
            raise FatalInputError(
                f"{_describe(source)} has no package/metadata element",
                path=source,
            )
        self.metadata = metadata

    @classmethod
    def load(cls, path: Path) -> "ManifestDocument":
        path = Path(path)
        return cls(parse_xml(path, description="manifest template"), source=path)

    @classmethod
    def from_string(cls, text: str) -> "ManifestDocument":
        parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
        try:
            root = ET.fromstring(text, parser=parser)
        except ET.ParseError as exc:
            raise FatalInputError(f"Failed to parse manifest template: {exc}") from exc
        return cls(ET.ElementTree(root))

    # ------------------------------------------------------------------
    # Lookups

    def find(self, parent: ET.Element, name: str) -> Optional[ET.Element]:
        return find_child(parent, name)

    def get_field(self, name: str) -> Optional[str]:
        element = self.find(self.metadata, name)
        if element is None:
            return None
        return element.text or ""

    def dependencies(self) -> List[DependencyRecord]:
        container = self.find(self.metadata, "dependencies")
        if container is None:
            return []
        records = []
        for element in child_elements(container, "dependency"):
            package_id = element.get("id")
            if package_id:
                records.append(DependencyRecord(id=package_id, version=element.get("version")))
        return records

    def dependency_ids(self) -> List[str]:
        return [record.id for record in self.dependencies()]

    def files(self) -> List[FileEntry]:
        container = self.find(self.package, "files")
        if container is None:
            return []
        return [
            FileEntry(src=element.get("src", ""), target=element.get("target", ""))
            for element in child_elements(container, "file")
        ]

    # ------------------------------------------------------------------
    # Writes

    def ensure(self, parent: ET.Element, name: str) -> ET.Element:
        """Return the child `name` of `parent`, appending it when absent."""
        element = self.find(parent, name)
        if element is None:
            element = ET.SubElement(parent, qualify(name, self.namespace))
        return element

    def set_field(self, name: str, value: Optional[str]) -> bool:
        """Overwrite an existing metadata field; absent slots and empty values are ignored."""
        element = self.find(self.metadata, name)
        if element is None or not value:
            return False
        element.text = value
        return True

    def add_dependency(self, record: DependencyRecord) -> bool:
        """Insert `record` unless a dependency with the same id is already present."""
        container = self.ensure(self.metadata, "dependencies")
        for element in child_elements(container, "dependency"):
            if element.get("id") == record.id:
                return False
        element = ET.SubElement(container, qualify("dependency", self.namespace))
        element.set("id", record.id)
        if record.version is not None:
            element.set("version", record.version)
        return True

    def add_file(self, entry: FileEntry) -> None:
        container = self.ensure(self.package, "files")
        element = ET.SubElement(container, qualify("file", self.namespace))
        element.set("src", entry.src)
        element.set("target", entry.target)

    # ------------------------------------------------------------------
    # Serialisation

    def to_bytes(self) -> bytes:
        ET.indent(self._tree, space=_INDENT)
        payload = ET.tostring(
            self.package,
            encoding="utf-8",
            xml_declaration=True,
            default_namespace=self.namespace,
        )
        return payload + b"\n"

    def write(self, path: Path) -> Path:
        """Write the manifest in one step so a failed run leaves no partial file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            tmp_path.write_bytes(self.to_bytes())
            tmp_path.replace(path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
        return path


def _describe(source: Path | None) -> str:
    return f"Manifest template {source}" if source is not None else "Manifest template"


__all__ = ["ManifestDocument"]
