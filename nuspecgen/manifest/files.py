"""Convention-based file entries for the manifest `files` section."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from ..config import DEFAULT_EXTENSIONS
from ..logging import get_logger
from ..models import FileEntry

_LIB_TARGET = "lib\\{framework}\\{name}{extension}"


class FileListBuilder:
    """Emits the tools glob plus one lib entry per build output that exists."""

    def __init__(
        self,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
        *,
        include_tools: bool = True,
        tools_target: str = "tools",
    ) -> None:
        self.extensions = tuple(extensions)
        self.include_tools = include_tools
        self.tools_target = tools_target
        self.logger = get_logger("manifest.files")

    def build(
        self,
        artifact_dir: Path,
        base_name: str,
        target_framework: str,
        template_dir: Path,
    ) -> List[FileEntry]:
        entries: List[FileEntry] = []
        if self.include_tools:
            entries.append(
                FileEntry(src=str(Path(template_dir) / "tools" / "*"), target=self.tools_target)
            )

        for extension in self.extensions:
            candidate = Path(artifact_dir) / f"{base_name}{extension}"
            if not candidate.is_file():
                self.logger.debug("No %s next to the artifact; skipping", candidate.name)
                continue
            entries.append(
                FileEntry(
                    src=str(candidate),
                    target=_LIB_TARGET.format(
                        framework=target_framework, name=base_name, extension=extension
                    ),
                )
            )
        return entries


__all__ = ["FileListBuilder"]
