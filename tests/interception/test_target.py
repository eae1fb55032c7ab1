"""Tests for target specifications and the matches() predicate."""

from __future__ import annotations

import re

import pytest

from twiddle.interception.target import (
    ANY,
    AnyMethod,
    ExactName,
    GlobName,
    NamePattern,
    NoMatch,
    OneOf,
    as_target,
    matches,
)

NAMES = ["save", "save_all", "_private", "__repr__", "get_order", "", "Save"]


class TestAsTarget:
    def test_none_is_any(self) -> None:
        assert as_target(None) is ANY

    def test_string_is_exact_name(self) -> None:
        assert as_target("save") == ExactName("save")

    def test_compiled_regex_is_name_pattern(self) -> None:
        spec = as_target(re.compile("^get_"))
        assert isinstance(spec, NamePattern)
        assert spec.pattern.pattern == "^get_"

    def test_sequence_is_one_of(self) -> None:
        spec = as_target(["save", re.compile("load")])
        assert isinstance(spec, OneOf)
        assert spec.specs[0] == ExactName("save")
        assert isinstance(spec.specs[1], NamePattern)

    def test_spec_passes_through(self) -> None:
        spec = GlobName("get_*")
        assert as_target(spec) is spec

    @pytest.mark.parametrize("raw", [42, object(), re.compile(b"bytes"), 3.5])
    def test_unknown_values_become_no_match(self, raw: object) -> None:
        spec = as_target(raw)
        assert isinstance(spec, NoMatch)
        assert spec.raw is raw


class TestMatches:
    @pytest.mark.parametrize("name", NAMES)
    def test_any_matches_everything(self, name: str) -> None:
        assert matches(None, name)
        assert AnyMethod().matches(name)

    def test_exact_name(self) -> None:
        assert matches("save", "save")
        assert not matches("save", "save_all")
        assert not matches("save", "Save")

    def test_pattern_is_unanchored_search(self) -> None:
        assert matches(re.compile("all"), "save_all")
        assert matches(NamePattern("^save"), "save_all")
        assert not matches(NamePattern("^all"), "save_all")

    def test_glob_is_case_sensitive(self) -> None:
        assert matches(GlobName("get_*"), "get_order")
        assert not matches(GlobName("get_*"), "GET_order")
        assert matches(GlobName("__*__"), "__repr__")

    @pytest.mark.parametrize("name", NAMES)
    def test_one_of_is_disjunction(self, name: str) -> None:
        a = ExactName("save")
        b = NamePattern("^_")
        assert matches(OneOf([a, b]), name) == (a.matches(name) or b.matches(name))

    def test_nested_one_of(self) -> None:
        spec = ["load", ["save", ("get_order",)]]
        assert matches(spec, "get_order")
        assert not matches(spec, "get_item")

    def test_empty_one_of_matches_nothing(self) -> None:
        assert not matches([], "save")

    @pytest.mark.parametrize("name", NAMES)
    def test_unknown_spec_matches_nothing(self, name: str) -> None:
        assert not matches(42, name)
        assert not matches(NoMatch(object()), name)

    @pytest.mark.parametrize("name", [None, 42, b"save"])
    def test_non_string_names_never_match(self, name: object) -> None:
        assert not matches(None, name)
        assert not matches("save", name)

    def test_deterministic(self) -> None:
        spec = ["save", re.compile("^get_"), GlobName("_*")]
        first = [matches(spec, n) for n in NAMES]
        second = [matches(spec, n) for n in NAMES]
        assert first == second == [True, False, True, True, True, False, False]
