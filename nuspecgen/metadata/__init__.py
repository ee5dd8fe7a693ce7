"""Assembly metadata readers and the extractor built on top of them."""

from .base import MetadataReader, RawAssemblyInfo
from .clr import ClrMetadataReader, decode_string_argument
from .extractor import MetadataExtractor, framework_moniker

__all__ = [
    "ClrMetadataReader",
    "MetadataExtractor",
    "MetadataReader",
    "RawAssemblyInfo",
    "decode_string_argument",
    "framework_moniker",
]
