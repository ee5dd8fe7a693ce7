"""Read the package identity a sibling project published into its manifest.

Each project writes its own id and version into ``<Name>.nuspec`` beside its
project file. Dependents recover the package-to-package edge by reading that
file back, which keeps build ordering outside of this package.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..models import DependencyRecord
from ..xmlutils import child_text, find_child, local_name, parse_xml

MANIFEST_SUFFIX = ".nuspec"


def sibling_manifest_path(project_dir: Path, name: str) -> Path:
    """Return the well-known manifest location for project `name` in `project_dir`."""
    return Path(project_dir) / f"{name}{MANIFEST_SUFFIX}"


def read_published_record(manifest_path: Path) -> Optional[DependencyRecord]:
    """Return the published id/version, or None when there is nothing to depend on."""
    manifest_path = Path(manifest_path)
    if not manifest_path.is_file():
        return None

    root = parse_xml(manifest_path, description="sibling manifest").getroot()
    if local_name(root.tag) != "package":
        return None
    metadata = find_child(root, "metadata")
    if metadata is None:
        return None

    package_id = child_text(metadata, "id")
    if not package_id:
        return None
    version = child_text(metadata, "version")
    return DependencyRecord(id=package_id, version=version or None)


__all__ = ["MANIFEST_SUFFIX", "read_published_record", "sibling_manifest_path"]
