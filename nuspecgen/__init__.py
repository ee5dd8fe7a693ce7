"""Generate NuGet manifests from compiled assemblies and project metadata."""

from .errors import AssemblyNotFoundError, FatalInputError, NuspecGenError
from .models import AssemblyMetadata, DependencyRecord, FileEntry, ProjectReference

__version__ = "0.1.0"

__all__ = [
    "AssemblyMetadata",
    "AssemblyNotFoundError",
    "DependencyRecord",
    "FatalInputError",
    "FileEntry",
    "NuspecGenError",
    "ProjectReference",
]
