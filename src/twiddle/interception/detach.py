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
"""DetachManager — restores woven classes to their pre-attach behavior."""

from __future__ import annotations

from typing import Any

import structlog

from twiddle.interception.weaver import Attachment
from twiddle.kernel.exceptions import DetachException, UnsupportedOperationException

logger = structlog.get_logger("twiddle.interception.detach")


class DetachManager:
    """Undoes class attachments recorded by the weaver.

    Instance attachments cannot be undone and are reported as such rather
    than ignored.
    """

    def check_supported(self, target: Any) -> None:
        if not isinstance(target, type):
            raise UnsupportedOperationException(
                f"Detaching a single instance of {type(target).__qualname__} is not supported",
                code="DETACH_UNSUPPORTED",
                context={"target": target},
            )

    def detach(self, attachment: Attachment) -> type:
        """Restore every method woven by *attachment* and return its class.

        Raises :class:`DetachException`, leaving the class untouched, when
        some woven method has been replaced since (typically by a later
        attachment that has not been detached yet).
        """
        self.check_supported(attachment.target)
        cls: type = attachment.target
        stale = attachment.stale_methods()
        if stale:
            raise DetachException(
                f"Cannot detach {cls.__qualname__}: {', '.join(stale)} changed after attach",
                code="DETACH_CONFLICT",
                context={"target": cls, "methods": stale},
            )

        restored = list(attachment.methods)
        attachment.restore()
        attachment.guard = None
        logger.debug("detached_class", target=cls.__qualname__, methods=restored)
        return cls
