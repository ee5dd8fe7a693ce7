"""Dependency sources merged into the generated manifest."""

from .packages import DependencyCollector
from .projects import TransitiveDependencyResolver
from .published import read_published_record, sibling_manifest_path

__all__ = [
    "DependencyCollector",
    "TransitiveDependencyResolver",
    "read_published_record",
    "sibling_manifest_path",
]
