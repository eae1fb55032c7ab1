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
"""Weaver — installs composed hook layers on classes and single instances."""

from __future__ import annotations

import functools
import inspect
import types
from dataclasses import dataclass, field
from typing import Any

import structlog

from twiddle.interception.guard import ReentrancyGuard
from twiddle.interception.properties import WeavingProperties
from twiddle.interception.registry import HookRegistry
from twiddle.interception.types import HookKind, HookSpec, InnerMethod, MethodId
from twiddle.kernel.exceptions import AttachmentException

logger = structlog.get_logger("twiddle.interception.weaver")

# Attribute access and class creation machinery; weaving these would
# route the engine's own lookups through its hooks.
RESERVED_NAMES = frozenset(
    {
        "__class__",
        "__class_getitem__",
        "__delattr__",
        "__getattr__",
        "__getattribute__",
        "__init_subclass__",
        "__new__",
        "__setattr__",
        "__subclasshook__",
    }
)

_ROUTINE_TYPES = (types.FunctionType, types.WrapperDescriptorType, types.MethodDescriptorType)

_ABSENT = object()


def is_special(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def method_names(cls: type, properties: WeavingProperties | None = None) -> list[str]:
    """Names of the instance methods of *cls* that may be woven.

    Includes inherited, non-public and (unless disabled) special methods.
    Static methods, class methods, properties and reserved names are left
    out.
    """
    props = properties or WeavingProperties()
    reserved = RESERVED_NAMES.union(props.reserved)
    names: list[str] = []
    for name in dir(cls):
        if name in reserved or (not props.include_special and is_special(name)):
            continue
        try:
            raw = inspect.getattr_static(cls, name)
        except AttributeError:
            continue
        if isinstance(raw, _ROUTINE_TYPES):
            names.append(name)
    return names


def _subclasses(cls: type) -> list[type]:
    found: list[type] = []
    pending = type.__subclasses__(cls)
    while pending:
        sub = pending.pop()
        if sub not in found:
            found.append(sub)
            pending.extend(type.__subclasses__(sub))
    return found


def _wraps(candidate: Any, target: Any) -> bool:
    """True when *target* is in the ``__wrapped__`` chain of *candidate*."""
    while isinstance(candidate, types.FunctionType):
        candidate = getattr(candidate, "__wrapped__", None)
        if candidate is target:
            return True
    return False


def _defining_owner(cls: type, name: str) -> type:
    for klass in cls.__mro__:
        if name in vars(klass):
            return klass
    return cls


@dataclass
class WovenMethod:
    """What one woven name looked like before and after weaving."""

    method_id: MethodId
    original: Any
    owned: bool
    installed: Any
    layers: tuple[HookSpec, ...]


@dataclass(eq=False)
class Attachment:
    """Record of one attach call on a class or an instance.

    ``methods`` maps every woven name to its :class:`WovenMethod`, in
    weaving order. ``installing`` stays true until weaving finishes and
    makes every layer pass straight through meanwhile.
    """

    target: Any
    guard: ReentrancyGuard | None = None
    methods: dict[str, WovenMethod] = field(default_factory=dict)
    installing: bool = True

    @property
    def is_instance(self) -> bool:
        return not isinstance(self.target, type)

    def _namespace(self) -> Any:
        return vars(self.target)

    def stale_methods(self) -> list[str]:
        """Woven names that no longer resolve to what this attachment installed.

        For a class this also reports names a subclass has rewoven on top
        of our layer; restoring the class would leave that layer live.
        """
        namespace = self._namespace()
        stale = [name for name, woven in self.methods.items() if namespace.get(name) is not woven.installed]
        if not self.is_instance:
            for sub in _subclasses(self.target):
                stale.extend(
                    f"{sub.__qualname__}.{name}"
                    for name, woven in self.methods.items()
                    if _wraps(vars(sub).get(name), woven.installed)
                )
        return stale

    def is_current(self) -> bool:
        return not self.stale_methods()

    def restore(self) -> None:
        """Put every woven name back the way it was, newest first."""
        for name in reversed(list(self.methods)):
            woven = self.methods.pop(name)
            if self.is_instance:
                namespace = self._namespace()
                if woven.owned:
                    namespace[name] = woven.original
                else:
                    namespace.pop(name, None)
            elif woven.owned:
                setattr(self.target, name, woven.original)
            else:
                delattr(self.target, name)


def _fire(spec: HookSpec, method: InnerMethod, args: tuple, kwargs: dict[str, Any]) -> Any:
    if spec.kind is HookKind.BEFORE:
        spec.callback(method, *args, **kwargs)
        return method(*args, **kwargs)
    if spec.kind is HookKind.AFTER:
        result = method(*args, **kwargs)
        return spec.callback(method, *args, result, **kwargs)
    return spec.callback(method, *args, **kwargs)


def _class_layer(spec: HookSpec, inner: Any, attachment: Attachment, method_id: MethodId) -> Any:
    """Wrap the unbound *inner* so it fires *spec* for the outermost call only."""
    owner = attachment.target
    guard: ReentrancyGuard = attachment.guard  # type: ignore[assignment]

    @functools.wraps(inner)
    def layer(receiver: Any, /, *args: Any, **kwargs: Any) -> Any:
        bound = inner.__get__(receiver, owner)
        if attachment.installing or guard.is_held(receiver):
            return bound(*args, **kwargs)
        with guard.hold(receiver):
            return _fire(spec, InnerMethod(method_id, receiver, bound), args, kwargs)

    return layer


def _instance_layer(spec: HookSpec, inner: Any, attachment: Attachment, method_id: MethodId) -> Any:
    """Wrap the bound *inner*; instance layers fire on every call, nested or not."""
    receiver = attachment.target

    @functools.wraps(inner)
    def layer(*args: Any, **kwargs: Any) -> Any:
        if attachment.installing:
            return inner(*args, **kwargs)
        return _fire(spec, InnerMethod(method_id, receiver, inner), args, kwargs)

    return layer


def _compose(layers: list[HookSpec], original: Any, build: Any, attachment: Attachment, method_id: MethodId) -> Any:
    composed = original
    for spec in layers:
        composed = build(spec, composed, attachment, method_id)
    return composed


def weave_class(cls: type, registry: HookRegistry, properties: WeavingProperties | None = None) -> Attachment:
    """Weave matching hooks into *cls*, affecting every present and future instance.

    For each method, the matching hooks are folded over the current
    implementation as before, after, then replace layers, each in
    registration order, and the result is installed with one ``setattr``.
    Unmatched methods are not touched. If the class rejects an override,
    everything installed so far is restored and
    :class:`AttachmentException` is raised.
    """
    attachment = Attachment(target=cls, guard=ReentrancyGuard())
    try:
        for name in method_names(cls, properties):
            layers = registry.layers_for(name)
            if not layers:
                continue
            original = inspect.getattr_static(cls, name)
            method_id = MethodId(_defining_owner(cls, name), name)
            composed = _compose(layers, original, _class_layer, attachment, method_id)
            owned = name in vars(cls)
            try:
                setattr(cls, name, composed)
            except (TypeError, AttributeError) as exc:
                attachment.restore()
                logger.debug("weave_rolled_back", target=cls.__qualname__, method=name, error=str(exc))
                raise AttachmentException(
                    f"Cannot weave {cls.__qualname__}.{name}: {exc}",
                    code="TARGET_NOT_WRITABLE",
                    context={"target": cls, "method": name},
                ) from exc
            attachment.methods[name] = WovenMethod(method_id, original, owned, composed, tuple(layers))
    finally:
        attachment.installing = False

    logger.debug("woven_class", target=cls.__qualname__, methods=list(attachment.methods))
    return attachment


def weave_instance(obj: Any, registry: HookRegistry, properties: WeavingProperties | None = None) -> Attachment:
    """Weave matching hooks into *obj* alone.

    Overrides go into the instance ``__dict__``; the class and its other
    instances are unaffected. Special methods are skipped because Python
    resolves them on the type. No reentrancy guard applies, so nested
    calls through a woven method fire its hooks again.
    """
    try:
        namespace = vars(obj)
    except TypeError as exc:
        raise AttachmentException(
            f"Cannot weave instance of {type(obj).__qualname__}: it has no __dict__",
            code="TARGET_NOT_WRITABLE",
            context={"target": obj},
        ) from exc

    cls = type(obj)
    attachment = Attachment(target=obj)
    try:
        for name in method_names(cls, properties):
            if is_special(name):
                continue
            layers = registry.layers_for(name)
            if not layers:
                continue
            current = getattr(obj, name)
            if not callable(current):
                logger.debug("weave_skipped", target=cls.__qualname__, method=name, reason="shadowed")
                continue
            original = namespace.get(name, _ABSENT)
            method_id = MethodId(_defining_owner(cls, name), name)
            composed = _compose(layers, current, _instance_layer, attachment, method_id)
            namespace[name] = composed
            attachment.methods[name] = WovenMethod(
                method_id, original, original is not _ABSENT, composed, tuple(layers)
            )
    finally:
        attachment.installing = False

    logger.debug("woven_instance", target=cls.__qualname__, methods=list(attachment.methods))
    return attachment
