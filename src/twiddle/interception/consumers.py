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
"""Ready-made interceptors built on :class:`Twiddle`."""

from __future__ import annotations

import sys
from collections import Counter
from typing import Any, TextIO

from twiddle.core.config import Config
from twiddle.interception.interceptor import Twiddle
from twiddle.interception.types import InnerMethod, MethodId


class CallCounter(Twiddle):
    """Counts calls per method.

    Usage::

        counter = CallCounter()
        counter.attach(Order)
        Order().total()
        counter.counts  # {MethodId(owner=Order, name='total'): 1, ...}
    """

    def __init__(self, target: Any = None, *, config: Config | None = None) -> None:
        self._counts: Counter[MethodId] = Counter()
        super().__init__(config=config)
        self.before(target, self._count)

    def _count(self, inner: InnerMethod, *args: Any, **kwargs: Any) -> None:
        self._counts[inner.method_id] += 1

    @property
    def counts(self) -> dict[MethodId, int]:
        return dict(self._counts)

    def count_for(self, name: str) -> int:
        """Total calls across all owners for methods called *name*."""
        return sum(n for method_id, n in self._counts.items() if method_id.name == name)


class CallTracer(Twiddle):
    """Writes ``Owner#method`` to *out* for every intercepted call."""

    def __init__(self, out: TextIO | None = None, target: Any = None, *, config: Config | None = None) -> None:
        self._out = out if out is not None else sys.stdout
        super().__init__(config=config)
        self.before(target, self._trace)

    def _trace(self, inner: InnerMethod, *args: Any, **kwargs: Any) -> None:
        self._out.write(f"{inner.method_id}\n")
