"""Error taxonomy for manifest generation runs."""

from __future__ import annotations

from pathlib import Path


class NuspecGenError(RuntimeError):
    """Base class for failures that abort a generation run."""


class FatalInputError(NuspecGenError):
    """Raised when a required input is missing, unreadable or malformed."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class AssemblyNotFoundError(NuspecGenError):
    """Raised when an assembly needed to read attributes cannot be located."""

    def __init__(self, assembly_name: str, search_path: Path) -> None:
        super().__init__(f"Assembly {assembly_name} not found (looked for {search_path})")
        self.assembly_name = assembly_name
        self.search_path = search_path


__all__ = ["AssemblyNotFoundError", "FatalInputError", "NuspecGenError"]
