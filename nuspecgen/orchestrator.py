"""Pipeline orchestration for a single manifest generation run."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .config import NuspecGenConfig, load_config
from .errors import FatalInputError
from .logging import get_logger
from .manifest import FileListBuilder, ManifestDocument, ManifestMerger
from .metadata import MetadataExtractor, MetadataReader
from .models import DependencyRecord, FileEntry
from .sources import DependencyCollector, TransitiveDependencyResolver


@dataclass
class GenerationRequest:
    """Inputs handed over by the build for one project."""

    target_path: Path
    target_name: str
    project_dir: Path
    project_path: Path
    template_path: Path

    def __post_init__(self) -> None:
        self.target_path = Path(self.target_path)
        self.project_dir = Path(self.project_dir)
        self.project_path = Path(self.project_path)
        self.template_path = Path(self.template_path)


@dataclass
class GenerationResult:
    """Outcome of a run; `version` is the published package version."""

    version: Optional[str]
    output_path: Path
    content: bytes
    written: bool
    dependencies: List[DependencyRecord] = field(default_factory=list)
    files: List[FileEntry] = field(default_factory=list)


class Orchestrator:
    """Runs template load, metadata extraction, dependency merge and file listing."""

    def __init__(
        self,
        reader: MetadataReader | None = None,
        extractor: MetadataExtractor | None = None,
        collector: DependencyCollector | None = None,
        resolver: TransitiveDependencyResolver | None = None,
        file_builder: FileListBuilder | None = None,
        merger: ManifestMerger | None = None,
    ) -> None:
        self._reader = reader
        self._extractor = extractor
        self._collector = collector
        self._resolver = resolver or TransitiveDependencyResolver()
        self._file_builder = file_builder
        self.merger = merger or ManifestMerger()
        self.logger = get_logger("orchestrator")

    def run(self, request: GenerationRequest, *, dry_run: bool = False) -> GenerationResult:
        """Generate the manifest for `request`, writing it unless `dry_run` is set."""
        self.logger.info("Create nuspec file from: %s", request.target_path)
        if not request.project_dir.is_dir():
            raise FatalInputError(
                f"Project directory not found: {request.project_dir}", path=request.project_dir
            )
        self._require(request.target_path, "Artifact")
        self._require(request.project_path, "Project definition")
        self._require(request.template_path, "Manifest template")

        config = load_config(request.project_dir)
        extractor = self._extractor or MetadataExtractor(
            self._reader,
            default_framework=config.framework.default,
            framework_assemblies=config.framework.framework_assemblies,
        )
        collector = self._collector or DependencyCollector(
            skip_development=config.dependencies.skip_development,
            exclude=config.dependencies.exclude,
        )
        file_builder = self._file_builder or self._build_file_builder(config)

        document = ManifestDocument.load(request.template_path)
        metadata = extractor.extract(request.target_path)
        declared = collector.collect(config.packages_config_path())
        transitive = self._resolver.resolve(request.project_path, request.project_dir)

        self.merger.merge(document, metadata, declared, transitive)
        entries = file_builder.build(
            request.target_path.parent,
            request.target_name,
            metadata.target_framework,
            request.template_path.parent,
        )
        self.merger.append_files(document, entries)

        content = document.to_bytes()
        output_path = config.output_path(request.target_name)
        if dry_run:
            self.logger.info("Dry run; not writing %s", output_path)
        else:
            document.write(output_path)
            self.logger.info("Wrote %s", output_path)

        self.logger.info("Published version %s", metadata.published_version)
        return GenerationResult(
            version=metadata.published_version,
            output_path=output_path,
            content=content,
            written=not dry_run,
            dependencies=document.dependencies(),
            files=entries,
        )

    @staticmethod
    def _require(path: Path, description: str) -> None:
        if not path.is_file():
            raise FatalInputError(f"{description} not found: {path}", path=path)

    @staticmethod
    def _build_file_builder(config: NuspecGenConfig) -> FileListBuilder:
        return FileListBuilder(
            config.files.extensions,
            include_tools=config.files.include_tools,
            tools_target=config.files.tools_target,
        )


__all__ = ["GenerationRequest", "GenerationResult", "Orchestrator"]
