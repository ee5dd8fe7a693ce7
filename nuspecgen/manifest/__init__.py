"""Manifest document model, merge logic and file list conventions."""

from .document import ManifestDocument
from .files import FileListBuilder
from .merger import FIELD_SOURCES, ManifestMerger

__all__ = ["FIELD_SOURCES", "FileListBuilder", "ManifestDocument", "ManifestMerger"]
