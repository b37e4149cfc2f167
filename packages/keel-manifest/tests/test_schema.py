# SPDX-License-Identifier: MIT
"""Tests for typed section decoding."""

import logging

import pytest
import semantic_version

from keel_manifest.errors import MissingSectionError, SchemaMismatchError
from keel_manifest.schema import (
    TargetEntry,
    decode_project,
    decode_sections,
    decode_targets,
    lookup,
)

PROJECT = {"name": "demo", "version": "0.1.0"}


class TestLookup:
    """Tests for dotted path lookup."""

    def test_top_level_key(self):
        assert lookup({"project": PROJECT}, "project") == PROJECT

    def test_nested_key(self):
        assert lookup({"a": {"b": {"c": 1}}}, "a.b.c") == 1

    def test_missing_key(self):
        assert lookup({"a": {}}, "a.b") is None

    def test_walk_through_scalar(self):
        """Looking through a non-table value finds nothing."""
        assert lookup({"a": "text"}, "a.b") is None


class TestDecodeProject:
    """Tests for decode_project."""

    def test_minimal_project(self):
        """Name and version are enough."""
        project = decode_project({"project": PROJECT})
        assert project.name == "demo"
        assert project.version == semantic_version.Version("0.1.0")
        assert project.authors == ()

    def test_full_project(self):
        """Optional metadata is carried through."""
        project = decode_project(
            {
                "project": {
                    "name": "demo",
                    "version": "1.2.0-beta.1",
                    "authors": ["Ada", "Grace"],
                    "description": "A demo",
                    "license": "MIT",
                    "keywords": ["demo"],
                    "unknown-key": 42,
                }
            }
        )
        assert project.authors == ("Ada", "Grace")
        assert project.description == "A demo"
        assert project.license == "MIT"
        assert project.keywords == ("demo",)
        assert str(project.to_package_id()) == "demo v1.2.0-beta.1"

    def test_missing_project(self):
        """An absent project section is a MissingSectionError."""
        with pytest.raises(MissingSectionError) as exc_info:
            decode_project({"lib": [{"name": "x"}]})
        assert exc_info.value.section == "project"

    def test_project_not_a_table(self):
        """A project section of the wrong type is a SchemaMismatchError."""
        with pytest.raises(SchemaMismatchError) as exc_info:
            decode_project({"project": "demo"})
        assert exc_info.value.errors[0].field == "project"
        assert exc_info.value.errors[0].message == "Expected object, got str"

    def test_missing_name(self):
        """A missing required field is reported by name."""
        with pytest.raises(SchemaMismatchError) as exc_info:
            decode_project({"project": {"version": "1.0.0"}})
        assert exc_info.value.errors[0].message == "Missing required field: name"

    def test_wrong_field_type(self):
        """Field type errors carry a readable path."""
        with pytest.raises(SchemaMismatchError) as exc_info:
            decode_project({"project": {"name": "demo", "version": "1.0.0", "authors": [1]}})
        detail = exc_info.value.errors[0]
        assert detail.field == "project.authors[0]"
        assert detail.value == 1

    def test_invalid_version(self):
        """The project version must be a full semantic version."""
        with pytest.raises(SchemaMismatchError) as exc_info:
            decode_project({"project": {"name": "demo", "version": "1.0"}})
        assert exc_info.value.errors[0].field == "project.version"


class TestDecodeTargets:
    """Tests for decode_targets."""

    def test_absent_section(self):
        assert decode_targets({}, "lib") is None

    def test_entries_in_order(self):
        targets = decode_targets(
            {"bin": [{"name": "a"}, {"name": "b", "path": "tools/b.rs"}]}, "bin"
        )
        assert targets == [TargetEntry("a"), TargetEntry("b", "tools/b.rs")]

    def test_malformed_section_treated_as_absent(self, caplog):
        """A malformed optional section is ignored and logged."""
        with caplog.at_level(logging.WARNING, logger="keel_manifest.schema"):
            assert decode_targets({"lib": [{"path": "src/x.rs"}]}, "lib") is None
        assert "malformed [lib]" in caplog.text

    def test_malformed_section_strict(self):
        """Strict mode reports a malformed optional section."""
        with pytest.raises(SchemaMismatchError) as exc_info:
            decode_targets({"bin": [{"name": 3}]}, "bin", strict=True)
        assert exc_info.value.errors[0].field == "bin[0].name"

    def test_table_instead_of_array(self):
        """A single table where an array is expected does not decode."""
        assert decode_targets({"lib": {"name": "x"}}, "lib") is None


class TestDecodeSections:
    """Tests for decode_sections."""

    def test_multiple_libs_kept_when_lenient(self):
        sections = decode_sections({"project": PROJECT, "lib": [{"name": "a"}, {"name": "b"}]})
        assert [entry.name for entry in sections.lib] == ["a", "b"]

    def test_multiple_libs_rejected_when_strict(self):
        with pytest.raises(SchemaMismatchError) as exc_info:
            decode_sections(
                {"project": PROJECT, "lib": [{"name": "a"}, {"name": "b"}]}, strict=True
            )
        assert exc_info.value.errors[0].field == "lib[1]"

    def test_project_checked_before_targets(self):
        """A missing project wins over malformed optional sections."""
        with pytest.raises(MissingSectionError):
            decode_sections({"lib": "nonsense", "bin": 5}, strict=True)
