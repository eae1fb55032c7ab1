"""Tests for ReentrancyGuard — context-local, per-receiver latching."""

from __future__ import annotations

import asyncio
import threading

import pytest

from twiddle.interception.guard import ReentrancyGuard


class TestHold:
    def test_not_held_by_default(self) -> None:
        assert not ReentrancyGuard().is_held(object())

    def test_held_inside_block_only(self) -> None:
        guard = ReentrancyGuard()
        receiver = object()
        with guard.hold(receiver):
            assert guard.is_held(receiver)
        assert not guard.is_held(receiver)

    def test_released_when_block_raises(self) -> None:
        guard = ReentrancyGuard()
        receiver = object()
        with pytest.raises(RuntimeError):
            with guard.hold(receiver):
                raise RuntimeError("hook failed")
        assert not guard.is_held(receiver)

    def test_nested_hold_restores_outer_state(self) -> None:
        guard = ReentrancyGuard()
        receiver = object()
        with guard.hold(receiver):
            with guard.hold(receiver):
                assert guard.is_held(receiver)
            assert guard.is_held(receiver)
        assert not guard.is_held(receiver)

    def test_keyed_by_receiver(self) -> None:
        guard = ReentrancyGuard()
        a, b = object(), object()
        with guard.hold(a):
            assert not guard.is_held(b)

    def test_guards_are_independent(self) -> None:
        first, second = ReentrancyGuard(), ReentrancyGuard()
        receiver = object()
        with first.hold(receiver):
            assert not second.is_held(receiver)


class TestIsolation:
    def test_hold_is_invisible_to_other_threads(self) -> None:
        guard = ReentrancyGuard()
        receiver = object()
        seen: list[bool] = []

        held = threading.Event()

        def observe() -> None:
            held.wait()
            seen.append(guard.is_held(receiver))

        worker = threading.Thread(target=observe)
        worker.start()
        with guard.hold(receiver):
            held.set()
            worker.join()

        assert seen == [False]

    def test_hold_is_invisible_to_sibling_tasks(self) -> None:
        guard = ReentrancyGuard()
        receiver = object()
        seen: list[bool] = []

        async def holder(entered: asyncio.Event, checked: asyncio.Event) -> None:
            with guard.hold(receiver):
                entered.set()
                await checked.wait()

        async def observer(entered: asyncio.Event, checked: asyncio.Event) -> None:
            await entered.wait()
            seen.append(guard.is_held(receiver))
            checked.set()

        async def main() -> None:
            entered, checked = asyncio.Event(), asyncio.Event()
            await asyncio.gather(holder(entered, checked), observer(entered, checked))

        asyncio.run(main())
        assert seen == [False]
