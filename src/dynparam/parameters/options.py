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
"""Recognised options for building one parameter.

:class:`ParameterOptions` is the option-parsing boundary: malformed shapes
(an empty name, a range with other than two bounds, an empty value list,
an unknown option) are rejected here, before the builder runs.
"""

from __future__ import annotations

import types
import typing
from collections.abc import Callable, Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dynparam.parameters.attributes import ALL_PARAMETER_SETS

_MAX_VALUES = 4096

# Binding fields copied onto ParameterAttribute only when explicitly given.
BINDING_FIELDS: tuple[str, ...] = (
    "mandatory",
    "position",
    "parameter_set_name",
    "value_from_pipeline",
    "value_from_pipeline_by_property_name",
    "value_from_remaining_arguments",
    "help_message",
    "help_message_base_name",
    "help_message_resource_id",
    "dont_show",
)


class ParameterOptions(BaseModel):
    """The full set of options for one dynamic parameter."""

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    name: str = Field(min_length=1)
    param_type: Any = str

    mandatory: bool | None = None
    position: int | None = None
    parameter_set_name: str = Field(default=ALL_PARAMETER_SETS, min_length=1)
    value_from_pipeline: bool | None = None
    value_from_pipeline_by_property_name: bool | None = None
    value_from_remaining_arguments: bool | None = None
    help_message: str | None = None
    help_message_base_name: str | None = None
    help_message_resource_id: str | None = None
    dont_show: bool | None = None

    aliases: list[str] | None = Field(default=None, min_length=1, max_length=_MAX_VALUES)

    validate_length: tuple[int, int] | None = None
    validate_range: tuple[int, int] | None = None
    validate_pattern: str | None = None
    validate_script: Callable[[Any], Any] | None = None
    validate_count: tuple[int, int] | None = None
    validate_set: list[str] | None = Field(default=None, min_length=1, max_length=_MAX_VALUES)
    validate_trusted_data: bool = False
    validate_drive: list[str] | None = Field(default=None, min_length=1, max_length=_MAX_VALUES)
    validate_not_null: bool = False
    validate_not_null_or_empty: bool = False
    argument_completer: Callable[[str, str, str, dict[str, Any]], Iterable[str]] | None = None

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value

    @field_validator("param_type")
    @classmethod
    def check_param_type(cls, value: Any) -> Any:
        if isinstance(value, type) or isinstance(value, types.GenericAlias) or typing.get_origin(value) is not None:
            return value
        raise ValueError(f"param_type must be a type, got {value!r}")

    def binding_overrides(self) -> dict[str, Any]:
        """Return the binding fields that were explicitly given, minus ``None``."""
        explicit = self.model_fields_set | {"parameter_set_name"}
        return {
            f: getattr(self, f)
            for f in BINDING_FIELDS
            if f in explicit and getattr(self, f) is not None
        }
