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
"""Attribute types attached to a :class:`ParameterDescriptor`.

A descriptor carries one :class:`ParameterAttribute` describing how the
binder exposes the parameter, followed by any number of validation
attributes, an optional :class:`AliasAttribute` and an optional
:class:`ArgumentCompleter`.

Validation attributes check a bound value through :meth:`validate` and raise
:class:`~dynparam.kernel.exceptions.ValidationException` on failure.
Range-shaped attributes reject ``min > max`` when constructed.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import PureWindowsPath
from typing import Any

from dynparam.kernel.exceptions import InvalidArgumentException, ValidationException

ALL_PARAMETER_SETS = "__AllParameterSets"


def _elements(value: Any) -> list[Any]:
    """Return the elements of a collection value, or ``[value]`` for a scalar."""
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
        return [value]
    return list(value)


def _check_bounds(kind: str, min_value: int, max_value: int) -> None:
    if min_value > max_value:
        raise InvalidArgumentException(
            f"{kind}: minimum {min_value} is greater than maximum {max_value}",
            context={"min": min_value, "max": max_value},
        )


# ---------------------------------------------------------------------------
# Binding
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ParameterAttribute:
    """Primary binding attribute: how the binder exposes the parameter."""

    mandatory: bool = False
    position: int | None = None
    parameter_set_name: str = ALL_PARAMETER_SETS
    value_from_pipeline: bool = False
    value_from_pipeline_by_property_name: bool = False
    value_from_remaining_arguments: bool = False
    help_message: str | None = None
    help_message_base_name: str | None = None
    help_message_resource_id: str | None = None
    dont_show: bool = False

    def applies_to(self, parameter_set: str | None) -> bool:
        """Return ``True`` if the attribute binds in *parameter_set*."""
        if parameter_set is None or self.parameter_set_name == ALL_PARAMETER_SETS:
            return True
        return self.parameter_set_name == parameter_set


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class ValidationAttribute:
    """Base class for attributes that constrain a bound value."""

    code: str = "VALIDATION_ERROR"

    def validate(self, value: Any) -> None:
        raise NotImplementedError

    def _fail(self, message: str, value: Any) -> ValidationException:
        return ValidationException(message, code=self.code, context={"value": value})


@dataclass(frozen=True)
class ValidateLength(ValidationAttribute):
    """Each element's string length must lie within ``[min_length, max_length]``."""

    min_length: int
    max_length: int
    code = "VALIDATE_LENGTH"

    def __post_init__(self) -> None:
        if self.min_length < 0:
            raise InvalidArgumentException(
                f"ValidateLength: minimum {self.min_length} must not be negative",
                context={"min": self.min_length},
            )
        _check_bounds("ValidateLength", self.min_length, self.max_length)

    def validate(self, value: Any) -> None:
        for element in _elements(value):
            length = len(str(element))
            if length < self.min_length:
                raise self._fail(
                    f"'{element}' is shorter than the minimum length of {self.min_length}", element
                )
            if length > self.max_length:
                raise self._fail(
                    f"'{element}' is longer than the maximum length of {self.max_length}", element
                )


@dataclass(frozen=True)
class ValidateRange(ValidationAttribute):
    """Each element must lie within ``[min_range, max_range]``."""

    min_range: int
    max_range: int
    code = "VALIDATE_RANGE"

    def __post_init__(self) -> None:
        _check_bounds("ValidateRange", self.min_range, self.max_range)

    def validate(self, value: Any) -> None:
        for element in _elements(value):
            try:
                in_range = self.min_range <= element <= self.max_range
            except TypeError:
                raise self._fail(
                    f"'{element}' cannot be compared with the range {self.min_range}..{self.max_range}",
                    element,
                ) from None
            if not in_range:
                raise self._fail(
                    f"{element} is outside the range {self.min_range}..{self.max_range}", element
                )


@dataclass(frozen=True)
class ValidatePattern(ValidationAttribute):
    """Each element must match ``regex`` (searched, case-insensitive by default)."""

    regex: str
    flags: re.RegexFlag = re.IGNORECASE
    _compiled: re.Pattern[str] = field(init=False, repr=False, compare=False)
    code = "VALIDATE_PATTERN"

    def __post_init__(self) -> None:
        try:
            compiled = re.compile(self.regex, self.flags)
        except re.error as exc:
            raise InvalidArgumentException(
                f"ValidatePattern: '{self.regex}' is not a valid regular expression: {exc}",
                context={"regex": self.regex},
            ) from exc
        object.__setattr__(self, "_compiled", compiled)

    def validate(self, value: Any) -> None:
        for element in _elements(value):
            if self._compiled.search(str(element)) is None:
                raise self._fail(f"'{element}' does not match the pattern '{self.regex}'", element)


@dataclass(frozen=True)
class ValidateScript(ValidationAttribute):
    """Each element must satisfy ``predicate``.

    A predicate that raises counts as a rejection.
    """

    predicate: Callable[[Any], Any]
    code = "VALIDATE_SCRIPT"

    def validate(self, value: Any) -> None:
        name = getattr(self.predicate, "__name__", repr(self.predicate))
        for element in _elements(value):
            try:
                accepted = self.predicate(element)
            except ValidationException:
                raise
            except Exception as exc:
                raise self._fail(f"'{element}' was rejected by {name}: {exc}", element) from exc
            if not accepted:
                raise self._fail(f"'{element}' was rejected by {name}", element)


@dataclass(frozen=True)
class ValidateCount(ValidationAttribute):
    """The number of values must lie within ``[min_length, max_length]``.

    A scalar counts as one value.
    """

    min_length: int
    max_length: int
    code = "VALIDATE_COUNT"

    def __post_init__(self) -> None:
        _check_bounds("ValidateCount", self.min_length, self.max_length)

    def validate(self, value: Any) -> None:
        count = len(_elements(value))
        if not self.min_length <= count <= self.max_length:
            raise self._fail(
                f"{count} value(s) supplied, expected between {self.min_length} and {self.max_length}",
                value,
            )


@dataclass(frozen=True)
class ValidateSet(ValidationAttribute):
    """Each element must be one of ``valid_values``."""

    valid_values: tuple[str, ...]
    ignore_case: bool = True
    code = "VALIDATE_SET"

    def __post_init__(self) -> None:
        if not self.valid_values:
            raise InvalidArgumentException("ValidateSet requires at least one value")

    def validate(self, value: Any) -> None:
        if self.ignore_case:
            allowed = {v.casefold() for v in self.valid_values}
        else:
            allowed = set(self.valid_values)
        for element in _elements(value):
            candidate = str(element).casefold() if self.ignore_case else str(element)
            if candidate not in allowed:
                raise self._fail(
                    f"'{element}' is not one of {', '.join(self.valid_values)}", element
                )


@dataclass(frozen=True)
class ValidateTrustedData(ValidationAttribute):
    """Marks the parameter as accepting trusted data only.

    Binders that track data provenance honour the marker. There is no
    value-level check.
    """

    code = "VALIDATE_TRUSTED_DATA"

    def validate(self, value: Any) -> None:
        return None


@dataclass(frozen=True)
class ValidateDrive(ValidationAttribute):
    """Each element must be a path rooted on one of ``valid_root_drives``."""

    valid_root_drives: tuple[str, ...]
    code = "VALIDATE_DRIVE"

    def __post_init__(self) -> None:
        if not self.valid_root_drives:
            raise InvalidArgumentException("ValidateDrive requires at least one drive")

    def validate(self, value: Any) -> None:
        allowed = {d.rstrip(":").casefold() for d in self.valid_root_drives}
        for element in _elements(value):
            drive = PureWindowsPath(str(element)).drive.rstrip(":").casefold()
            if not drive:
                raise self._fail(f"'{element}' is not rooted on a drive", element)
            if drive not in allowed:
                raise self._fail(
                    f"'{element}' is not on one of the drives {', '.join(self.valid_root_drives)}",
                    element,
                )


@dataclass(frozen=True)
class ValidateNotNull(ValidationAttribute):
    """The value, and each of its elements, must not be ``None``."""

    code = "VALIDATE_NOT_NULL"

    def validate(self, value: Any) -> None:
        if value is None or any(e is None for e in _elements(value)):
            raise self._fail("value must not be null", value)


@dataclass(frozen=True)
class ValidateNotNullOrEmpty(ValidationAttribute):
    """The value must not be ``None``, an empty string or an empty collection."""

    code = "VALIDATE_NOT_NULL_OR_EMPTY"

    def validate(self, value: Any) -> None:
        if value is None or value == "":
            raise self._fail("value must not be null or empty", value)
        elements = _elements(value)
        if not elements:
            raise self._fail("collection must not be empty", value)
        if any(e is None or e == "" for e in elements):
            raise self._fail("collection must not contain null or empty elements", value)


# ---------------------------------------------------------------------------
# Aliases and completion
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AliasAttribute:
    """Alternative names for the parameter."""

    alias_names: tuple[str, ...]


@dataclass(frozen=True)
class ArgumentCompleter:
    """Supplies completion candidates for the parameter.

    ``completer`` is called as
    ``completer(command_name, parameter_name, word_to_complete, bound_parameters)``
    and returns an iterable of candidate strings.
    """

    completer: Callable[[str, str, str, dict[str, Any]], Iterable[str]]

    def complete(
        self,
        command_name: str,
        parameter_name: str,
        word_to_complete: str,
        bound_parameters: dict[str, Any],
    ) -> list[str]:
        return [
            str(candidate)
            for candidate in self.completer(command_name, parameter_name, word_to_complete, bound_parameters)
        ]
