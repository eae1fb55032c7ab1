"""Target specifications — which method names a hook applies to."""

from __future__ import annotations

import fnmatch
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any


class TargetSpec:
    """Base class for method-name matchers.

    Subclasses implement :meth:`matches`; it must be pure and must not
    raise for any ``str`` name.
    """

    def matches(self, name: str) -> bool:
        return False


@dataclass(frozen=True)
class AnyMethod(TargetSpec):
    """Matches every method, including methods added after registration."""

    def matches(self, name: str) -> bool:
        return True


ANY = AnyMethod()


@dataclass(frozen=True)
class ExactName(TargetSpec):
    name: str

    def matches(self, name: str) -> bool:
        return name == self.name


@dataclass(frozen=True)
class NamePattern(TargetSpec):
    """Matches names where *pattern* is found anywhere (``re.search``).

    Anchor the pattern (``^get_``, ``_id$``) to restrict the match.
    """

    pattern: re.Pattern[str]

    def __init__(self, pattern: str | re.Pattern[str]) -> None:
        object.__setattr__(self, "pattern", re.compile(pattern))

    def matches(self, name: str) -> bool:
        return self.pattern.search(name) is not None


@dataclass(frozen=True)
class GlobName(TargetSpec):
    """Case-sensitive shell-style glob, e.g. ``get_*`` or ``_*``."""

    pattern: str

    def matches(self, name: str) -> bool:
        return fnmatch.fnmatchcase(name, self.pattern)


@dataclass(frozen=True)
class OneOf(TargetSpec):
    """Matches when any nested spec matches."""

    specs: tuple[TargetSpec, ...]

    def __init__(self, specs: Iterable[Any]) -> None:
        object.__setattr__(self, "specs", tuple(as_target(s) for s in specs))

    def matches(self, name: str) -> bool:
        return any(spec.matches(name) for spec in self.specs)


@dataclass(frozen=True)
class NoMatch(TargetSpec):
    """Stand-in for an unrecognized target value; matches nothing."""

    raw: Any = None


def as_target(raw: Any) -> TargetSpec:
    """Coerce a user-supplied target into a :class:`TargetSpec`.

    ``None`` means every method, a string is an exact name, a compiled
    regex is a :class:`NamePattern` and a list, tuple or set becomes
    :class:`OneOf`. Anything else yields :class:`NoMatch`.
    """
    if raw is None:
        return ANY
    if isinstance(raw, TargetSpec):
        return raw
    if isinstance(raw, str):
        return ExactName(raw)
    if isinstance(raw, re.Pattern) and isinstance(raw.pattern, str):
        return NamePattern(raw)
    if isinstance(raw, (list, tuple, set, frozenset)):
        return OneOf(raw)
    return NoMatch(raw)


def matches(spec: Any, name: Any) -> bool:
    """Check whether *spec* selects the method called *name*.

    Total over every input: unknown spec values and non-string names
    simply do not match.

    >>> matches(None, "save")
    True
    >>> matches(["load", re.compile("^save")], "save_all")
    True
    >>> matches(42, "save")
    False
    """
    if not isinstance(name, str):
        return False
    return as_target(spec).matches(name)
