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
"""Exception hierarchy for dynparam.

All library errors derive from :class:`DynParamException`, which carries an
optional error code and a context dict for structured error data.
"""

from __future__ import annotations

# =============================================================================
# Base Exception
# =============================================================================


class DynParamException(Exception):
    """Base exception for all dynparam errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "INVALID_ARGUMENT").
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


# =============================================================================
# Business Exceptions
# =============================================================================


class BusinessException(DynParamException):
    """Errors caused by the caller's input or by bound parameter values."""


class ValidationException(BusinessException):
    """A value failed a validation attribute."""


class InvalidArgumentException(ValidationException):
    """Malformed or missing option, or an ambiguous mode selection."""

    def __init__(
        self,
        message: str,
        code: str | None = "INVALID_ARGUMENT",
        context: dict | None = None,
    ) -> None:
        super().__init__(message, code=code, context=context)


class ConflictException(BusinessException):
    """Operation conflicts with current state."""


class DuplicateKeyException(ConflictException):
    """A parameter name is already present in the target dictionary."""

    def __init__(
        self,
        message: str,
        code: str | None = "DUPLICATE_KEY",
        context: dict | None = None,
    ) -> None:
        super().__init__(message, code=code, context=context)


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(DynParamException):
    """Failures originating in the host environment."""


class CapabilityUnavailableException(InfrastructureException):
    """The host does not provide the attribute type a directive needs."""

    def __init__(
        self,
        message: str,
        code: str | None = "CAPABILITY_UNAVAILABLE",
        context: dict | None = None,
    ) -> None:
        super().__init__(message, code=code, context=context)
