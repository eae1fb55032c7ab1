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
"""HookRegistry — ordered before/after/replace hooks."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from twiddle.interception.target import as_target
from twiddle.interception.types import HookKind, HookSpec
from twiddle.kernel.exceptions import InvalidHookException


class HookRegistry:
    """Registry holding one ordered sequence of hooks per :class:`HookKind`.

    Registration order is significant: for a given method, hooks
    registered later are woven as outer layers. Duplicate or overlapping
    targets are legal and all apply.

    Usage::

        registry = HookRegistry()
        registry.register_before("save", audit)
        registry.register_after(re.compile("^get_"), cache_result)

        registry.get_matching(HookKind.BEFORE, "save")  # -> [HookSpec(...)]
    """

    def __init__(self) -> None:
        self._hooks: dict[HookKind, list[HookSpec]] = {kind: [] for kind in HookKind}

    def register(self, kind: HookKind, target: Any, callback: Callable[..., Any]) -> HookSpec:
        """Append a hook of *kind*; *target* is coerced with :func:`as_target`."""
        kind = HookKind(kind)
        if callback is None:
            raise InvalidHookException(f"{kind.value} hook requires a callback", code="HOOK_CALLBACK_MISSING")
        if not callable(callback):
            raise InvalidHookException(
                f"{kind.value} hook callback is not callable: {callback!r}",
                code="HOOK_CALLBACK_NOT_CALLABLE",
                context={"callback": callback},
            )
        spec = HookSpec(kind=kind, target=as_target(target), callback=callback)
        self._hooks[spec.kind].append(spec)
        return spec

    def register_before(self, target: Any, callback: Callable[..., Any]) -> HookSpec:
        return self.register(HookKind.BEFORE, target, callback)

    def register_after(self, target: Any, callback: Callable[..., Any]) -> HookSpec:
        return self.register(HookKind.AFTER, target, callback)

    def register_replace(self, target: Any, callback: Callable[..., Any]) -> HookSpec:
        return self.register(HookKind.REPLACE, target, callback)

    def hooks(self, kind: HookKind) -> list[HookSpec]:
        """Return the hooks of *kind* in registration order."""
        return list(self._hooks[kind])

    def get_matching(self, kind: HookKind, name: str) -> list[HookSpec]:
        """Return hooks of *kind* whose target matches *name*."""
        return [spec for spec in self._hooks[kind] if spec.target.matches(name)]

    def layers_for(self, name: str) -> list[HookSpec]:
        """All hooks for *name*, innermost first: before, after, then replace."""
        return [spec for kind in HookKind for spec in self.get_matching(kind, name)]

    def __len__(self) -> int:
        return sum(len(specs) for specs in self._hooks.values())
