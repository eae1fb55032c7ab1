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
"""ReentrancyGuard — suppresses nested hook firing on the same receiver.

The held set lives in a :class:`~contextvars.ContextVar`, so each thread
and each asyncio task sees its own call stack. The guard only silences
hooks for calls nested inside an intercepted call; it is not a lock and
does not serialize concurrent callers.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

_held: ContextVar[frozenset[tuple[int, int]]] = ContextVar("twiddle_held_receivers", default=frozenset())

_guard_ids = itertools.count(1)


class ReentrancyGuard:
    """Per-attachment latch keyed by receiver identity."""

    __slots__ = ("_id",)

    def __init__(self) -> None:
        self._id = next(_guard_ids)

    def _key(self, receiver: Any) -> tuple[int, int]:
        return (self._id, id(receiver))

    def is_held(self, receiver: Any) -> bool:
        return self._key(receiver) in _held.get()

    @contextmanager
    def hold(self, receiver: Any) -> Iterator[None]:
        """Latch *receiver* for the duration of the block.

        The previous state is restored on exit, including when the block
        raises.
        """
        token = _held.set(_held.get() | {self._key(receiver)})
        try:
            yield
        finally:
            _held.reset(token)
