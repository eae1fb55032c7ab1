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
"""Twiddle — configure hooks, then attach them to classes or instances."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any, TypeVar

import structlog

from twiddle.core.config import Config
from twiddle.interception.detach import DetachManager
from twiddle.interception.properties import WeavingProperties
from twiddle.interception.registry import HookRegistry
from twiddle.interception.target import TargetSpec
from twiddle.interception.types import HookKind
from twiddle.interception.weaver import Attachment, weave_class, weave_instance
from twiddle.kernel.exceptions import AttachmentException

logger = structlog.get_logger("twiddle.interception")

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Any])


class Twiddle:
    """Method interception engine.

    Register hooks with :meth:`before`, :meth:`after` and :meth:`replace`,
    then :meth:`attach` them to a class (every instance, present and
    future) or to a single object.

    Usage::

        tw = Twiddle()

        @tw.before("save")
        def audit(inner, *args, **kwargs):
            print("saving", inner.receiver)

        @tw.after(re.compile("^total"))
        def double(inner, result):
            return result * 2

        tw.attach(Order)      # class-wide
        tw.attach(order)      # just this one object
        tw.detach(Order)

    A ``configure`` callable receives the new instance and may register
    hooks up front::

        Twiddle(lambda tw: tw.replace("send", lambda inner, *a, **kw: None))

    For class attachments only the outermost hook fires per call chain on
    a receiver: calls nested inside a hook or inside the intercepted
    method pass straight through. Instance attachments fire on every call.
    """

    def __init__(
        self,
        configure: Callable[[Twiddle], Any] | None = None,
        *,
        config: Config | None = None,
    ) -> None:
        self._registry = HookRegistry()
        self._properties = config.bind(WeavingProperties) if config is not None else WeavingProperties()
        self._attachments: dict[type, Attachment] = {}
        self._detacher = DetachManager()
        self._lock = threading.RLock()
        if configure is not None:
            configure(self)

    @property
    def registry(self) -> HookRegistry:
        return self._registry

    @property
    def properties(self) -> WeavingProperties:
        return self._properties

    @property
    def attachments(self) -> list[Attachment]:
        """Live class attachments, in attach order."""
        return list(self._attachments.values())

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def before(self, target: Any = None, callback: Callable[..., Any] | None = None) -> Any:
        """Run *callback(inner, *args, **kwargs)* before matching methods."""
        return self._register(HookKind.BEFORE, target, callback)

    def after(self, target: Any = None, callback: Callable[..., Any] | None = None) -> Any:
        """Pass the result through *callback(inner, *args, result, **kwargs)*."""
        return self._register(HookKind.AFTER, target, callback)

    def replace(self, target: Any = None, callback: Callable[..., Any] | None = None) -> Any:
        """Let *callback(inner, *args, **kwargs)* produce the result instead."""
        return self._register(HookKind.REPLACE, target, callback)

    def _register(self, kind: HookKind, target: Any, callback: Callable[..., Any] | None) -> Any:
        if callback is not None:
            self._registry.register(kind, target, callback)
            return callback

        # Bare decorator: @tw.before
        if callable(target) and not isinstance(target, TargetSpec):
            self._registry.register(kind, None, target)
            return target

        def decorator(fn: F) -> F:
            self._registry.register(kind, target, fn)
            return fn

        return decorator

    # ------------------------------------------------------------------
    # Attach / detach
    # ------------------------------------------------------------------

    def attach(self, target: T) -> T:
        """Weave the registered hooks into *target* and return it."""
        with self._lock:
            if not isinstance(target, type):
                weave_instance(target, self._registry, self._properties)
                return target

            if target in self._attachments:
                raise AttachmentException(
                    f"{target.__qualname__} is already attached; detach it first",
                    code="ALREADY_ATTACHED",
                    context={"target": target},
                )
            self._attachments[target] = weave_class(target, self._registry, self._properties)
            return target

    def detach(self, target: T) -> T:
        """Undo :meth:`attach` for a class.

        Detaching a class that was never attached is a no-op. Detaching an
        instance raises :class:`UnsupportedOperationException`.
        """
        with self._lock:
            self._detacher.check_supported(target)
            cls: type = target  # type: ignore[assignment]
            attachment = self._attachments.get(cls)
            if attachment is None:
                logger.debug("detach_skipped", target=cls.__qualname__, reason="not attached")
                return target
            self._detacher.detach(attachment)
            del self._attachments[cls]
            return target

    def is_attached(self, target: Any) -> bool:
        return isinstance(target, type) and target in self._attachments
