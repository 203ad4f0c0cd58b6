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
"""Host capability table used to gate validation directives.

Older hosts may lack some attribute types. Rather than probing at build time,
the builder is handed an explicit :class:`HostCapabilities` table and skips
any directive whose kind the table does not list.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

import click

from dynparam.kernel.exceptions import CapabilityUnavailableException, InvalidArgumentException
from dynparam.parameters.properties import ParameterProperties

if TYPE_CHECKING:
    from dynparam.core.config import Config


class ValidationKind(StrEnum):
    """Attribute kinds whose availability depends on the host."""

    LENGTH = "length"
    RANGE = "range"
    PATTERN = "pattern"
    SCRIPT = "script"
    COUNT = "count"
    SET = "set"
    TRUSTED_DATA = "trusted_data"
    DRIVE = "drive"
    NOT_NULL = "not_null"
    NOT_NULL_OR_EMPTY = "not_null_or_empty"
    ARGUMENT_COMPLETER = "argument_completer"


@dataclass(frozen=True)
class HostCapabilities:
    """The set of attribute kinds the current host supports."""

    supported: frozenset[ValidationKind]

    @classmethod
    def all(cls) -> HostCapabilities:
        return cls(frozenset(ValidationKind))

    @classmethod
    def none(cls) -> HostCapabilities:
        return cls(frozenset())

    @classmethod
    def detect(cls) -> HostCapabilities:
        """Probe the installed click for the features the binder relies on."""
        supported = set(ValidationKind)
        if "shell_complete" not in inspect.signature(click.Parameter.__init__).parameters:
            supported.discard(ValidationKind.ARGUMENT_COMPLETER)
        return cls(frozenset(supported))

    @classmethod
    def from_config(cls, config: Config) -> HostCapabilities:
        """Build the table from ``dynparam.parameters.*`` configuration."""
        props = config.bind(ParameterProperties)
        base = cls.detect() if props.detect_host else cls.all()
        return base.without(*props.disabled_validations)

    def without(self, *kinds: ValidationKind | str) -> HostCapabilities:
        """Return a copy with *kinds* removed."""
        return HostCapabilities(self.supported - {_to_kind(k) for k in kinds})

    def supports(self, kind: ValidationKind | str) -> bool:
        return _to_kind(kind) in self.supported

    def require(self, kind: ValidationKind | str) -> None:
        """Raise :class:`CapabilityUnavailableException` if *kind* is unsupported."""
        if not self.supports(kind):
            raise CapabilityUnavailableException(
                f"Host does not support '{kind}' attributes",
                context={"kind": str(kind)},
            )


def _to_kind(kind: ValidationKind | str) -> ValidationKind:
    try:
        return ValidationKind(kind)
    except ValueError:
        raise InvalidArgumentException(
            f"Unknown validation kind '{kind}'",
            context={"kind": kind, "known": [k.value for k in ValidationKind]},
        ) from None
