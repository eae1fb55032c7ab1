# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Interception core types — hook kinds, hook specs, method identities."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from twiddle.interception.target import TargetSpec


class HookKind(str, Enum):
    """Where a hook sits relative to the method it intercepts."""

    BEFORE = "before"
    AFTER = "after"
    REPLACE = "replace"


@dataclass(frozen=True)
class HookSpec:
    """A callback bound to a target specification.

    Callback signatures by kind:

    * ``BEFORE``  — ``callback(inner, *args, **kwargs)``; return value ignored.
    * ``AFTER``   — ``callback(inner, *args, result, **kwargs)``; returns the
      (possibly transformed) result.
    * ``REPLACE`` — ``callback(inner, *args, **kwargs)``; produces the result
      and may never call *inner*.
    """

    kind: HookKind
    target: TargetSpec
    callback: Callable[..., Any]


@dataclass(frozen=True)
class MethodId:
    """Stable identity of an intercepted method.

    Attributes:
        owner: The class that defined the method when it was woven.
        name: The attribute name the method is reached through.
    """

    owner: type
    name: str

    @property
    def qualified_name(self) -> str:
        return f"{self.owner.__module__}.{self.owner.__qualname__}.{self.name}"

    def __str__(self) -> str:
        return f"{self.owner.__qualname__}#{self.name}"


class InnerMethod:
    """The next layer inward, already bound to the call receiver.

    Hook callbacks receive one of these as their first argument. Calling
    it runs the remaining layers and, eventually, the original method.
    """

    __slots__ = ("method_id", "receiver", "_call")

    def __init__(self, method_id: MethodId, receiver: Any, call: Callable[..., Any]) -> None:
        self.method_id = method_id
        self.receiver = receiver
        self._call = call

    @property
    def name(self) -> str:
        return self.method_id.name

    @property
    def owner(self) -> type:
        return self.method_id.owner

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._call(*args, **kwargs)

    def __repr__(self) -> str:
        return f"<InnerMethod {self.method_id} of {type(self.receiver).__qualname__} at {id(self.receiver):#x}>"
