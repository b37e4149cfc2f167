# SPDX-License-Identifier: MIT
"""Tests for dependency table classification."""

from __future__ import annotations

import logging

import pytest
from hypothesis import given, strategies as st

from keel_manifest.dependencies import (
    DetailedDependency,
    SimpleDependency,
    resolve_dependencies,
)
from keel_manifest.errors import (
    InvalidDependenciesSectionError,
    InvalidDependencySpecError,
    MissingVersionError,
)


class TestResolveDependencies:
    """Tests for resolve_dependencies function."""

    def test_absent_table(self):
        """No dependencies table means no dependencies."""
        assert resolve_dependencies({"project": {}}) == {}

    def test_simple_dependency(self):
        """A string value is the requirement verbatim."""
        deps = resolve_dependencies({"dependencies": {"foo": "1.0"}})
        assert deps == {"foo": SimpleDependency("1.0")}

    def test_detailed_dependency(self):
        """A table keeps its version and every other key."""
        deps = resolve_dependencies(
            {"dependencies": {"foo": {"version": "1.0", "registry": "custom"}}}
        )
        assert deps == {"foo": DetailedDependency("1.0", {"registry": "custom"})}

    def test_detailed_without_version(self):
        """A table without version raises MissingVersionError."""
        with pytest.raises(MissingVersionError) as exc_info:
            resolve_dependencies({"dependencies": {"foo": {"registry": "custom"}}})
        assert exc_info.value.name == "foo"

    def test_detailed_with_non_string_value(self):
        """Every value in a dependency table must be a string."""
        with pytest.raises(InvalidDependencySpecError) as exc_info:
            resolve_dependencies({"dependencies": {"foo": {"version": "1.0", "optional": True}}})
        assert exc_info.value.name == "foo"
        assert "optional" in str(exc_info.value)

    def test_non_string_checked_before_version(self):
        """A non-string value is reported even when version is also missing."""
        with pytest.raises(InvalidDependencySpecError):
            resolve_dependencies({"dependencies": {"foo": {"features": ["a"]}}})

    @pytest.mark.parametrize("value", ["1.0", 3, ["a"]])
    def test_dependencies_not_a_table(self, value):
        """The dependencies key itself must be a table."""
        with pytest.raises(InvalidDependenciesSectionError):
            resolve_dependencies({"dependencies": value})

    def test_unsupported_values_skipped(self, caplog):
        """Numbers and arrays are skipped with a warning."""
        with caplog.at_level(logging.WARNING, logger="keel_manifest.dependencies"):
            deps = resolve_dependencies(
                {"dependencies": {"foo": 1, "bar": ["1.0"], "baz": "2"}}
            )
        assert deps == {"baz": SimpleDependency("2")}
        assert "'foo'" in caplog.text
        assert "'bar'" in caplog.text

    def test_unsupported_values_strict(self):
        """Strict mode rejects unsupported declarations."""
        with pytest.raises(InvalidDependencySpecError) as exc_info:
            resolve_dependencies({"dependencies": {"foo": 1}}, strict=True)
        assert exc_info.value.value == 1

    def test_preserves_table_order(self):
        deps = resolve_dependencies({"dependencies": {"b": "1", "a": "2", "c": "3"}})
        assert list(deps) == ["b", "a", "c"]


_names = st.text(alphabet="abcdefghijklmnopqrstuvwxyz-_", min_size=1, max_size=12)
_strings = st.text(min_size=0, max_size=10)


@given(
    st.dictionaries(
        _names,
        st.one_of(
            _strings,
            st.dictionaries(_names.filter(lambda k: k != "version"), _strings, max_size=3).flatmap(
                lambda extra: _strings.map(lambda version: {"version": version, **extra})
            ),
        ),
        max_size=8,
    )
)
def test_every_declaration_is_classified(table: dict) -> None:
    """Strings and tables with a version always classify, keeping all keys."""
    deps = resolve_dependencies({"dependencies": table})

    assert set(deps) == set(table)
    for name, value in table.items():
        entry = deps[name]
        if isinstance(value, str):
            assert entry == SimpleDependency(value)
        else:
            assert entry.requirement == value["version"]
            assert entry.extra == {k: v for k, v in value.items() if k != "version"}
