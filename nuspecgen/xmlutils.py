"""Shared XML helpers for project files, package lists and manifests."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterator, Optional

from .errors import FatalInputError

_NAMESPACE_PATTERN = re.compile(r"\{(.+)}")


def parse_xml(path: Path, *, description: str) -> ET.ElementTree:
    """Parse `path` keeping comments, raising FatalInputError when it cannot be read."""
    if not path.is_file():
        raise FatalInputError(f"{description} not found: {path}", path=path)
    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
    try:
        return ET.parse(path, parser=parser)
    except ET.ParseError as exc:
        raise FatalInputError(f"Failed to parse {description} {path}: {exc}", path=path) from exc
    except OSError as exc:
        raise FatalInputError(f"Failed to read {description} {path}: {exc}", path=path) from exc


def detect_namespace(element: ET.Element) -> Optional[str]:
    if not isinstance(element.tag, str):
        return None
    match = _NAMESPACE_PATTERN.match(element.tag)
    return match.group(1) if match else None


def local_name(tag: object) -> str:
    """Return the tag without its `{namespace}` prefix; comments yield ''."""
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def qualify(name: str, namespace: Optional[str]) -> str:
    return f"{{{namespace}}}{name}" if namespace else name


def child_elements(element: ET.Element, name: str) -> Iterator[ET.Element]:
    """Yield direct children whose local name is `name`, in document order."""
    for child in element:
        if local_name(child.tag) == name:
            yield child


def find_child(element: ET.Element, name: str) -> Optional[ET.Element]:
    return next(child_elements(element, name), None)


def child_text(element: ET.Element, name: str) -> Optional[str]:
    child = find_child(element, name)
    if child is None:
        return None
    return (child.text or "").strip()


__all__ = [
    "child_elements",
    "child_text",
    "detect_namespace",
    "find_child",
    "local_name",
    "parse_xml",
    "qualify",
]
