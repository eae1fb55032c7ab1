"""Tests for HookRegistry — ordered, per-kind hook storage."""

from __future__ import annotations

import re

import pytest

from twiddle.interception.registry import HookRegistry
from twiddle.interception.target import ANY, ExactName, NamePattern
from twiddle.interception.types import HookKind
from twiddle.kernel.exceptions import InvalidHookException


def noop(*args, **kwargs):
    return None


class TestRegister:
    def test_register_appends_per_kind(self) -> None:
        registry = HookRegistry()
        b = registry.register_before("save", noop)
        a = registry.register_after("save", noop)
        r = registry.register_replace("save", noop)

        assert registry.hooks(HookKind.BEFORE) == [b]
        assert registry.hooks(HookKind.AFTER) == [a]
        assert registry.hooks(HookKind.REPLACE) == [r]
        assert len(registry) == 3

    def test_target_is_coerced(self) -> None:
        registry = HookRegistry()
        assert registry.register_before(None, noop).target is ANY
        assert registry.register_before("save", noop).target == ExactName("save")
        assert isinstance(registry.register_before(re.compile("x"), noop).target, NamePattern)

    def test_kind_may_be_given_as_string(self) -> None:
        registry = HookRegistry()
        spec = registry.register("after", "save", noop)
        assert spec.kind is HookKind.AFTER

    def test_missing_callback_rejected(self) -> None:
        registry = HookRegistry()
        with pytest.raises(InvalidHookException) as exc_info:
            registry.register_before("save", None)  # type: ignore[arg-type]
        assert exc_info.value.code == "HOOK_CALLBACK_MISSING"
        assert len(registry) == 0

    def test_non_callable_callback_rejected(self) -> None:
        registry = HookRegistry()
        with pytest.raises(ValueError):
            registry.register_after("save", "not callable")  # type: ignore[arg-type]

    def test_duplicates_are_kept(self) -> None:
        registry = HookRegistry()
        registry.register_before("save", noop)
        registry.register_before("save", noop)
        assert len(registry.get_matching(HookKind.BEFORE, "save")) == 2


class TestLookup:
    def test_get_matching_preserves_registration_order(self) -> None:
        registry = HookRegistry()

        def first(*a):
            pass

        def second(*a):
            pass

        def unrelated(*a):
            pass

        registry.register_before(None, first)
        registry.register_before("load", unrelated)
        registry.register_before(re.compile("^sa"), second)

        callbacks = [s.callback for s in registry.get_matching(HookKind.BEFORE, "save")]
        assert callbacks == [first, second]

    def test_layers_for_orders_before_after_replace(self) -> None:
        registry = HookRegistry()
        r = registry.register_replace("save", noop)
        a = registry.register_after("save", noop)
        b = registry.register_before("save", noop)

        assert registry.layers_for("save") == [b, a, r]

    def test_layers_for_unmatched_name_is_empty(self) -> None:
        registry = HookRegistry()
        registry.register_before("save", noop)
        assert registry.layers_for("load") == []

    def test_hooks_returns_copy(self) -> None:
        registry = HookRegistry()
        registry.register_before("save", noop)
        registry.hooks(HookKind.BEFORE).clear()
        assert len(registry.hooks(HookKind.BEFORE)) == 1
