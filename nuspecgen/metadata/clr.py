"""Static reader for .NET assembly metadata tables.

The artifact is parsed as a PE file and its CLI metadata tables are walked
directly, so nothing in the assembly is loaded or executed. Only
assembly-level custom attributes are collected: for each one the attribute
type name is recovered through its constructor's ``MemberRef`` -> ``TypeRef``
chain, and the first fixed constructor argument is decoded from the value
blob when it is a string.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Tuple

import dnfile
import pefile

from ..errors import FatalInputError
from ..logging import get_logger
from .base import MetadataReader, RawAssemblyInfo

_PROLOG = b"\x01\x00"
_NULL_STRING = 0xFF
_GENERIC = 0x10
_VOID = 0x01
_ELEMENT_TYPE_STRING = 0x0E


class ClrMetadataReader(MetadataReader):
    """Reads assembly attributes from a managed PE image using dnfile."""

    def __init__(self) -> None:
        self.logger = get_logger("metadata.clr")

    def read(self, artifact_path: Path) -> RawAssemblyInfo:
        try:
            pe = dnfile.dnPE(str(artifact_path))
        except (OSError, pefile.PEFormatError) as exc:
            raise FatalInputError(
                f"Unable to read assembly {artifact_path}: {exc}", path=artifact_path
            ) from exc

        try:
            return self._read_tables(pe, artifact_path)
        finally:
            pe.close()

    def _read_tables(self, pe: Any, artifact_path: Path) -> RawAssemblyInfo:
        net = getattr(pe, "net", None)
        tables = getattr(net, "mdtables", None) if net is not None else None
        if tables is None:
            raise FatalInputError(
                f"{artifact_path} is not a .NET assembly", path=artifact_path
            )

        assembly_table = getattr(tables, "Assembly", None)
        if assembly_table is None or not assembly_table.rows:
            raise FatalInputError(
                f"{artifact_path} has no assembly manifest", path=artifact_path
            )
        assembly = assembly_table.rows[0]
        info = RawAssemblyInfo(
            name=_text(assembly.Name),
            version=(
                f"{assembly.MajorVersion}.{assembly.MinorVersion}."
                f"{assembly.BuildNumber}.{assembly.RevisionNumber}"
            ),
        )

        attribute_table = getattr(tables, "CustomAttribute", None)
        rows = attribute_table.rows if attribute_table is not None else []
        for row in rows:
            if _table_name(row.Parent) != "Assembly":
                continue
            resolved = _attribute_type(row.Type)
            if resolved is None:
                continue
            type_name, scope, takes_string = resolved
            info.attributes[type_name] = (
                decode_string_argument(_blob(row.Value)) if takes_string else None
            )
            if scope:
                info.attribute_scopes[type_name] = scope

        self.logger.debug(
            "Read %d assembly attributes from %s", len(info.attributes), artifact_path
        )
        return info


def decode_string_argument(blob: bytes | None) -> Optional[str]:
    """Decode the first fixed argument of a custom attribute blob as a SerString.

    Returns None for a null string or a blob that does not start with the
    custom attribute prolog.
    """
    if not blob or len(blob) < 3 or blob[:2] != _PROLOG:
        return None
    if blob[2] == _NULL_STRING:
        return None
    length, offset = _read_compressed_uint(blob, 2)
    if length is None or offset + length > len(blob):
        return None
    return blob[offset : offset + length].decode("utf-8", errors="replace")


def _read_compressed_uint(data: bytes, offset: int) -> Tuple[Optional[int], int]:
    first = data[offset]
    if first & 0x80 == 0:
        return first, offset + 1
    if first & 0xC0 == 0x80:
        if offset + 2 > len(data):
            return None, offset
        return ((first & 0x3F) << 8) | data[offset + 1], offset + 2
    if first & 0xE0 == 0xC0:
        if offset + 4 > len(data):
            return None, offset
        value = (
            ((first & 0x1F) << 24)
            | (data[offset + 1] << 16)
            | (data[offset + 2] << 8)
            | data[offset + 3]
        )
        return value, offset + 4
    return None, offset


def first_parameter_is_string(signature: bytes | None) -> bool:
    """Return True when a constructor MethodRefSig starts with a string parameter."""
    if not signature:
        return False
    offset = 1
    if signature[0] & _GENERIC and offset < len(signature):
        _, offset = _read_compressed_uint(signature, offset)
    if offset >= len(signature):
        return False
    count, offset = _read_compressed_uint(signature, offset)
    if not count or offset + 1 >= len(signature):
        return False
    # Constructors return void, a single byte.
    return signature[offset] == _VOID and signature[offset + 1] == _ELEMENT_TYPE_STRING


def _attribute_type(coded_index: Any) -> Optional[Tuple[str, Optional[str], bool]]:
    # Constructors defined inside the artifact itself (MethodDef) never belong
    # to the well-known descriptive attributes.
    if _table_name(coded_index) != "MemberRef":
        return None
    member_ref = coded_index.row
    parent = member_ref.Class
    if _table_name(parent) != "TypeRef":
        return None
    type_ref = parent.row
    namespace = _text(type_ref.TypeNamespace)
    name = _text(type_ref.TypeName)
    full_name = f"{namespace}.{name}" if namespace else name
    takes_string = first_parameter_is_string(_blob(getattr(member_ref, "Signature", None)))
    return full_name, _resolution_scope(type_ref), takes_string


def _resolution_scope(type_ref: Any) -> Optional[str]:
    scope = type_ref.ResolutionScope
    # Nested types are scoped by their enclosing TypeRef.
    while _table_name(scope) == "TypeRef":
        scope = scope.row.ResolutionScope
    if _table_name(scope) == "AssemblyRef":
        return _text(scope.row.Name)
    return None


def _table_name(coded_index: Any) -> Optional[str]:
    table = getattr(coded_index, "table", None)
    return getattr(table, "name", None)


def _text(item: Any) -> str:
    value = getattr(item, "value", item)
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _blob(item: Any) -> bytes | None:
    value = getattr(item, "value", item)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return None


__all__ = ["ClrMetadataReader", "decode_string_argument", "first_parameter_is_string"]
