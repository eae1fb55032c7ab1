"""Tests for CallCounter and CallTracer."""

from __future__ import annotations

import io

from twiddle.interception.consumers import CallCounter, CallTracer
from twiddle.interception.types import MethodId


def make_robot() -> type:
    class Robot:
        def walk(self, steps: int) -> int:
            for _ in range(steps):
                self.step()
            return steps

        def step(self) -> None:
            pass

        def beep(self) -> str:
            return "beep"

    return Robot


class TestCallCounter:
    def test_counts_external_calls(self) -> None:
        cls = make_robot()
        counter = CallCounter()
        counter.attach(cls)

        robot = cls()
        robot.beep()
        robot.beep()
        robot.walk(3)

        assert counter.count_for("beep") == 2
        assert counter.count_for("walk") == 1
        # steps run inside walk on the same receiver
        assert counter.count_for("step") == 0
        assert counter.counts[MethodId(cls, "beep")] == 2

    def test_target_restricts_counting(self) -> None:
        cls = make_robot()
        counter = CallCounter("step")
        counter.attach(cls)

        cls().walk(2)
        cls().step()
        # walk is not woven, so nothing latches the receiver around its steps
        assert counter.counts == {MethodId(cls, "step"): 3}

    def test_instance_counting_includes_nested_calls(self) -> None:
        robot = make_robot()()
        counter = CallCounter(["walk", "step"])
        counter.attach(robot)

        robot.walk(3)
        assert counter.count_for("walk") == 1
        assert counter.count_for("step") == 3

    def test_counts_returns_copy(self) -> None:
        cls = make_robot()
        counter = CallCounter("beep")
        counter.attach(cls)
        cls().beep()

        counter.counts.clear()
        assert counter.count_for("beep") == 1

    def test_detach_stops_counting(self) -> None:
        cls = make_robot()
        counter = CallCounter("beep")
        counter.attach(cls)
        cls().beep()
        counter.detach(cls)
        cls().beep()

        assert counter.count_for("beep") == 1


class TestCallTracer:
    def test_writes_owner_and_method(self) -> None:
        cls = make_robot()
        out = io.StringIO()
        tracer = CallTracer(out, "beep")
        tracer.attach(cls)

        cls().beep()
        cls().walk(1)

        lines = out.getvalue().splitlines()
        assert len(lines) == 1
        assert lines[0].endswith("Robot#beep")

    def test_traces_every_matched_method(self) -> None:
        cls = make_robot()
        out = io.StringIO()
        CallTracer(out, ["walk", "beep"]).attach(cls)

        robot = cls()
        robot.walk(2)
        robot.beep()

        assert [line.rsplit("#", 1)[1] for line in out.getvalue().splitlines()] == ["walk", "beep"]

    def test_defaults_to_stdout(self, capsys) -> None:
        cls = make_robot()
        CallTracer(target="beep").attach(cls)
        cls().beep()

        assert capsys.readouterr().out.strip().endswith("Robot#beep")
