"""Tests for nuspecgen.metadata.extractor."""

from __future__ import annotations

from pathlib import Path

import pytest

from nuspecgen.errors import AssemblyNotFoundError, FatalInputError
from nuspecgen.metadata import MetadataExtractor, framework_moniker
from nuspecgen.metadata.extractor import (
    COMPANY_ATTRIBUTE,
    COPYRIGHT_ATTRIBUTE,
    DESCRIPTION_ATTRIBUTE,
    INFORMATIONAL_VERSION_ATTRIBUTE,
    TARGET_FRAMEWORK_ATTRIBUTE,
    TITLE_ATTRIBUTE,
)
from tests._fixtures.project_builder import ProjectBuilder, StaticMetadataReader


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        (".NETFramework,Version=v4.5.2", "net452"),
        (".NETFramework,Version=v4.0", "net40"),
        (".NETStandard,Version=v2.0", "netstandard2.0"),
        (".NETCoreApp,Version=v3.1", "netcoreapp3.1"),
        (".NETCoreApp,Version=v6.0", "net6.0"),
        (None, "net40"),
        ("", "net40"),
        ("not a framework", "net40"),
    ],
)
def test_framework_moniker(token: str | None, expected: str) -> None:
    assert framework_moniker(token) == expected


def test_framework_moniker_uses_supplied_default() -> None:
    assert framework_moniker(None, "net472") == "net472"


def _artifact(project_builder: ProjectBuilder) -> Path:
    project_builder.touch("bin/Foo.dll")
    return project_builder.path("bin/Foo.dll")


def test_extract_maps_descriptive_attributes(project_builder: ProjectBuilder) -> None:
    reader = StaticMetadataReader(
        {
            TITLE_ATTRIBUTE: "Contoso.Foo",
            DESCRIPTION_ATTRIBUTE: "Foo helpers",
            COMPANY_ATTRIBUTE: "Contoso",
            COPYRIGHT_ATTRIBUTE: "Copyright Contoso 2024",
            TARGET_FRAMEWORK_ATTRIBUTE: ".NETFramework,Version=v4.6.1",
        },
        version="2.3.0.0",
    )
    artifact = _artifact(project_builder)

    metadata = MetadataExtractor(reader).extract(artifact)

    assert reader.calls == [artifact]
    assert metadata.title == "Contoso.Foo"
    assert metadata.description == "Foo helpers"
    assert metadata.company == "Contoso"
    assert metadata.copyright == "Copyright Contoso 2024"
    assert metadata.target_framework == "net461"
    assert metadata.assembly_version == "2.3.0.0"
    assert metadata.published_version == "2.3.0.0"


def test_informational_version_wins_over_assembly_version(project_builder: ProjectBuilder) -> None:
    reader = StaticMetadataReader(
        {INFORMATIONAL_VERSION_ATTRIBUTE: "1.2.3-beta"}, version="1.2.3.0"
    )

    metadata = MetadataExtractor(reader).extract(_artifact(project_builder))

    assert metadata.published_version == "1.2.3-beta"


def test_empty_informational_version_falls_back(project_builder: ProjectBuilder) -> None:
    reader = StaticMetadataReader({INFORMATIONAL_VERSION_ATTRIBUTE: ""}, version="1.2.3.0")

    metadata = MetadataExtractor(reader).extract(_artifact(project_builder))

    assert metadata.informational_version is None
    assert metadata.published_version == "1.2.3.0"


def test_absent_attributes_are_none(project_builder: ProjectBuilder) -> None:
    reader = StaticMetadataReader({DESCRIPTION_ATTRIBUTE: None})

    metadata = MetadataExtractor(reader, default_framework="net45").extract(
        _artifact(project_builder)
    )

    assert metadata.title is None
    assert metadata.description is None
    assert metadata.company is None
    assert metadata.target_framework == "net45"


def test_missing_artifact_is_fatal(tmp_path: Path) -> None:
    reader = StaticMetadataReader()

    with pytest.raises(FatalInputError):
        MetadataExtractor(reader).extract(tmp_path / "Missing.dll")

    assert reader.calls == []


def test_framework_scoped_attributes_need_no_lookup(project_builder: ProjectBuilder) -> None:
    reader = StaticMetadataReader(
        {TITLE_ATTRIBUTE: "Foo"},
        attribute_scopes={
            TITLE_ATTRIBUTE: "mscorlib",
            TARGET_FRAMEWORK_ATTRIBUTE: "System.Runtime",
            "Microsoft.CodeAnalysis.EmbeddedAttribute": "Microsoft.CodeAnalysis",
        },
    )

    metadata = MetadataExtractor(reader).extract(_artifact(project_builder))

    assert metadata.title == "Foo"


def test_third_party_attribute_assembly_is_located_next_to_artifact(
    project_builder: ProjectBuilder,
) -> None:
    project_builder.touch("bin/Contoso.Attributes.dll")
    reader = StaticMetadataReader(
        {"Contoso.Attributes.BuildInfoAttribute": "ci"},
        attribute_scopes={"Contoso.Attributes.BuildInfoAttribute": "Contoso.Attributes"},
    )

    metadata = MetadataExtractor(reader).extract(_artifact(project_builder))

    assert metadata.published_version == "1.0.0.0"


def test_unresolvable_attribute_assembly_aborts(project_builder: ProjectBuilder) -> None:
    reader = StaticMetadataReader(
        {"Contoso.Attributes.BuildInfoAttribute": "ci"},
        attribute_scopes={"Contoso.Attributes.BuildInfoAttribute": "Contoso.Attributes"},
    )

    with pytest.raises(AssemblyNotFoundError) as excinfo:
        MetadataExtractor(reader).extract(_artifact(project_builder))

    assert excinfo.value.assembly_name == "Contoso.Attributes"
    assert excinfo.value.search_path == project_builder.path("bin/Contoso.Attributes.dll")


def test_framework_assembly_list_is_configurable(project_builder: ProjectBuilder) -> None:
    reader = StaticMetadataReader(
        {TITLE_ATTRIBUTE: "Foo"}, attribute_scopes={TITLE_ATTRIBUTE: "mscorlib"}
    )
    extractor = MetadataExtractor(reader, framework_assemblies=["netstandard"])

    with pytest.raises(AssemblyNotFoundError):
        extractor.extract(_artifact(project_builder))
