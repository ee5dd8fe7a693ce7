"""Collect declared package dependencies from packages.config."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Set

from ..logging import get_logger
from ..models import DependencyRecord
from ..xmlutils import local_name, parse_xml


class DependencyCollector:
    """Reads the flat `packages/package` list of a project, in declaration order."""

    def __init__(
        self,
        *,
        skip_development: bool = False,
        exclude: Iterable[str] = (),
    ) -> None:
        self.skip_development = skip_development
        self.exclude = {item.lower() for item in exclude}
        self.logger = get_logger("sources.packages")

    def collect(self, config_path: Path) -> List[DependencyRecord]:
        config_path = Path(config_path)
        if not config_path.is_file():
            self.logger.debug("No package list at %s; skipping declared dependencies", config_path)
            return []

        root = parse_xml(config_path, description="package list").getroot()
        records: List[DependencyRecord] = []
        seen: Set[str] = set()
        for element in root.iter():
            if local_name(element.tag) != "package":
                continue
            package_id = (element.get("id") or "").strip()
            if not package_id:
                continue
            if package_id.lower() in self.exclude:
                self.logger.debug("Excluding %s by configuration", package_id)
                continue
            if self.skip_development and _is_true(element.get("developmentDependency")):
                self.logger.debug("Skipping development dependency %s", package_id)
                continue
            if package_id in seen:
                continue
            seen.add(package_id)
            records.append(DependencyRecord(id=package_id, version=element.get("version")))

        self.logger.debug("Collected %d declared dependencies from %s", len(records), config_path)
        return records


def _is_true(value: str | None) -> bool:
    return (value or "").strip().lower() == "true"


__all__ = ["DependencyCollector"]
