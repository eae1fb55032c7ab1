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
"""Weaving configuration bound from ``twiddle.weaving``."""

from __future__ import annotations

from dataclasses import dataclass, field

from twiddle.core.config import config_properties


@config_properties(prefix="twiddle.weaving")
@dataclass
class WeavingProperties:
    """Controls which methods are candidates for weaving.

    Attributes:
        include_special: Weave ``__dunder__`` methods on classes.
        reserved: Extra method names never woven, on top of the
            attribute-access and class-creation machinery.
    """

    include_special: bool = True
    reserved: list[str] = field(default_factory=list)
