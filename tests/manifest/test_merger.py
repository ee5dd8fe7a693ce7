"""Tests for nuspecgen.manifest.merger."""

from __future__ import annotations

import logging

from nuspecgen.manifest import ManifestDocument, ManifestMerger
from nuspecgen.models import AssemblyMetadata, DependencyRecord, FileEntry

_TEMPLATE = """<package>
  <metadata>
    <id>placeholder</id>
    <version>0.0.0</version>
    <authors>nobody</authors>
    <owners>nobody</owners>
    <description>X</description>
    <copyright>old</copyright>
  </metadata>
</package>
"""


def _pairs(document: ManifestDocument):
    return [(record.id, record.version) for record in document.dependencies()]


def test_scalar_fields_follow_assembly_metadata() -> None:
    document = ManifestDocument.from_string(_TEMPLATE)
    metadata = AssemblyMetadata(
        title="Contoso.Foo",
        description="Foo helpers",
        company="Contoso",
        copyright="Copyright Contoso",
        informational_version="1.2.3-beta",
        assembly_version="1.2.3.0",
    )

    ManifestMerger().merge(document, metadata, [], [])

    assert document.get_field("id") == "Contoso.Foo"
    assert document.get_field("version") == "1.2.3-beta"
    assert document.get_field("authors") == "Contoso"
    assert document.get_field("owners") == "Contoso"
    assert document.get_field("description") == "Foo helpers"
    assert document.get_field("copyright") == "Copyright Contoso"


def test_absent_attributes_leave_template_values() -> None:
    document = ManifestDocument.from_string(_TEMPLATE)

    ManifestMerger().merge(document, AssemblyMetadata(assembly_version="2.0.0.0"), [], [])

    assert document.get_field("description") == "X"
    assert document.get_field("authors") == "nobody"
    assert document.get_field("version") == "2.0.0.0"


def test_missing_template_slots_are_not_created() -> None:
    document = ManifestDocument.from_string("<package><metadata><id>Foo</id></metadata></package>")

    ManifestMerger().merge(
        document, AssemblyMetadata(title="Bar", copyright="Contoso", assembly_version="1.0.0.0"), [], []
    )

    assert document.get_field("id") == "Bar"
    assert document.get_field("copyright") is None
    assert document.get_field("version") is None
    assert document.find(document.metadata, "dependencies") is not None


def test_declared_dependencies_win_over_transitive() -> None:
    document = ManifestDocument.from_string(_TEMPLATE)
    declared = [DependencyRecord("A", "1.0"), DependencyRecord("B", "2.0")]
    transitive = [DependencyRecord("A", "9.9"), DependencyRecord("C", "3.0")]

    ManifestMerger().merge(document, AssemblyMetadata(), declared, transitive)

    assert _pairs(document) == [("A", "1.0"), ("B", "2.0"), ("C", "3.0")]


def test_template_dependencies_are_kept() -> None:
    document = ManifestDocument.from_string(
        """<package><metadata><id>Foo</id>
        <dependencies><dependency id="B" version="[2.5]" /></dependencies>
        </metadata></package>"""
    )

    ManifestMerger().merge(
        document, AssemblyMetadata(), [DependencyRecord("A", "1.0"), DependencyRecord("B", "2.0")], []
    )

    assert _pairs(document) == [("B", "[2.5]"), ("A", "1.0")]


def test_version_collision_is_logged(caplog, monkeypatch) -> None:
    monkeypatch.setattr(logging.getLogger("nuspecgen"), "propagate", True)
    caplog.set_level(logging.DEBUG, logger="nuspecgen")
    document = ManifestDocument.from_string(_TEMPLATE)

    ManifestMerger().merge(
        document,
        AssemblyMetadata(),
        [DependencyRecord("A", "1.0")],
        [DependencyRecord("A", "9.9"), DependencyRecord("A", "1.0")],
    )

    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "9.9" in warnings[0].getMessage()


def test_append_files_keeps_order() -> None:
    document = ManifestDocument.from_string(_TEMPLATE)
    entries = [FileEntry("tools/*", "tools"), FileEntry("bin/Foo.dll", "lib\\net40\\Foo.dll")]

    ManifestMerger().append_files(document, entries)

    assert document.files() == entries
