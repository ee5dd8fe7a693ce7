"""Configuration loading for nuspecgen (.nuspecgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".nuspecgen.yml"

DEFAULT_FRAMEWORK = "net40"
DEFAULT_FRAMEWORK_ASSEMBLIES = ("mscorlib", "netstandard", "System", "Microsoft")
DEFAULT_EXTENSIONS = (".dll", ".pdb", ".xml")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class FrameworkConfig:
    """Target framework fallback and implicitly resolvable assemblies."""

    default: str = DEFAULT_FRAMEWORK
    framework_assemblies: List[str] = field(
        default_factory=lambda: list(DEFAULT_FRAMEWORK_ASSEMBLIES)
    )


@dataclass
class DependencyConfig:
    """Where declared dependencies come from and which ones to leave out."""

    config_file: str = "packages.config"
    skip_development: bool = False
    exclude: List[str] = field(default_factory=list)


@dataclass
class FilesConfig:
    """Conventional file entries appended to the manifest."""

    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    include_tools: bool = True
    tools_target: str = "tools"


@dataclass
class OutputConfig:
    """Output file naming."""

    filename: Optional[str] = None


@dataclass
class NuspecGenConfig:
    """Represents the settings defined in .nuspecgen.yml."""

    root: Path
    framework: FrameworkConfig = field(default_factory=FrameworkConfig)
    dependencies: DependencyConfig = field(default_factory=DependencyConfig)
    files: FilesConfig = field(default_factory=FilesConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def output_path(self, target_name: str) -> Path:
        return self.root / (self.output.filename or f"{target_name}.nuspec")

    def packages_config_path(self) -> Path:
        return self.root / self.dependencies.config_file


def load_config(config_path: Path) -> NuspecGenConfig:
    """Load configuration from disk, returning defaults when no file exists."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return NuspecGenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    framework = FrameworkConfig()
    framework_data = _as_dict(data.get("framework"))
    if framework_data:
        framework.default = _as_str(framework_data.get("default")) or DEFAULT_FRAMEWORK
        if "framework_assemblies" in framework_data:
            framework.framework_assemblies = _as_str_list(
                framework_data.get("framework_assemblies")
            )

    dependencies = DependencyConfig()
    dependency_data = _as_dict(data.get("dependencies"))
    if dependency_data:
        dependencies.config_file = (
            _as_str(dependency_data.get("config_file")) or dependencies.config_file
        )
        dependencies.skip_development = bool(
            _as_bool(dependency_data.get("skip_development"))
        )
        dependencies.exclude = _as_str_list(dependency_data.get("exclude"))

    files = FilesConfig()
    files_data = _as_dict(data.get("files"))
    if files_data:
        if "extensions" in files_data:
            files.extensions = [
                _normalise_extension(ext)
                for ext in _as_str_list(files_data.get("extensions"))
            ]
        include_tools = _as_bool(files_data.get("include_tools"))
        if include_tools is not None:
            files.include_tools = include_tools
        files.tools_target = _as_str(files_data.get("tools_target")) or files.tools_target

    output = OutputConfig()
    output_data = _as_dict(data.get("output"))
    if output_data:
        output.filename = _as_str(output_data.get("filename"))

    return NuspecGenConfig(
        root=root,
        framework=framework,
        dependencies=dependencies,
        files=files,
        output=output,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name == CONFIG_FILENAME:
        return config_path.resolve()
    if config_path.is_file():
        return (config_path.parent / CONFIG_FILENAME).resolve()
    # A missing directory must not fall back to its parent.
    raise ConfigError(f"Config location does not exist: {config_path}")


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _normalise_extension(value: str) -> str:
    value = value.strip()
    return value if value.startswith(".") else f".{value}"


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DependencyConfig",
    "FilesConfig",
    "FrameworkConfig",
    "NuspecGenConfig",
    "OutputConfig",
    "load_config",
]
