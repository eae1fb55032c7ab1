"""Interception engine — target matching, hook registry, weaving and detach."""

from twiddle.interception.consumers import CallCounter, CallTracer
from twiddle.interception.detach import DetachManager
from twiddle.interception.guard import ReentrancyGuard
from twiddle.interception.interceptor import Twiddle
from twiddle.interception.properties import WeavingProperties
from twiddle.interception.registry import HookRegistry
from twiddle.interception.target import (
    ANY,
    AnyMethod,
    ExactName,
    GlobName,
    NamePattern,
    NoMatch,
    OneOf,
    TargetSpec,
    as_target,
    matches,
)
from twiddle.interception.types import HookKind, HookSpec, InnerMethod, MethodId
from twiddle.interception.weaver import Attachment, method_names, weave_class, weave_instance

__all__ = [
    "ANY",
    "AnyMethod",
    "Attachment",
    "CallCounter",
    "CallTracer",
    "DetachManager",
    "ExactName",
    "GlobName",
    "HookKind",
    "HookRegistry",
    "HookSpec",
    "InnerMethod",
    "MethodId",
    "NamePattern",
    "NoMatch",
    "OneOf",
    "ReentrancyGuard",
    "TargetSpec",
    "Twiddle",
    "WeavingProperties",
    "as_target",
    "matches",
    "method_names",
    "weave_class",
    "weave_instance",
]
