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
"""Unified exception hierarchy for Twiddle.

All engine exceptions inherit from TwiddleException so callers can catch
every weaving failure in one place, or a specific subclass for targeted
handling.

Exceptions raised by hook callbacks are never wrapped: they reach the
caller of the intercepted method unchanged.
"""

from __future__ import annotations


class TwiddleException(Exception):
    """Base exception for all Twiddle errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "ALREADY_ATTACHED").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class InvalidHookException(TwiddleException, ValueError):
    """A hook was registered without a usable callback."""


class AttachmentException(TwiddleException):
    """The target could not be woven."""


class DetachException(TwiddleException):
    """The target could not be restored to its pre-attach behavior."""


class UnsupportedOperationException(TwiddleException, NotImplementedError):
    """The requested operation is not supported for this kind of target."""
