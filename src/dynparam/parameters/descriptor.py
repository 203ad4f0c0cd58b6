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
"""Parameter descriptor and the name-keyed parameter dictionary."""

from __future__ import annotations

from collections.abc import Iterator, MutableMapping
from dataclasses import dataclass
from typing import Any, TypeVar

from dynparam.kernel.exceptions import DuplicateKeyException, InvalidArgumentException
from dynparam.parameters.attributes import (
    AliasAttribute,
    ArgumentCompleter,
    ParameterAttribute,
    ValidationAttribute,
)

A = TypeVar("A")


@dataclass(frozen=True)
class ParameterDescriptor:
    """A fully configured parameter, ready for a binder to expose.

    ``attributes`` is ordered: the binding attribute first, then validation
    attributes, then the alias attribute and the argument completer.
    """

    name: str
    param_type: Any = str
    attributes: tuple[object, ...] = ()

    @property
    def binding(self) -> ParameterAttribute:
        """The primary :class:`ParameterAttribute`."""
        for attr in self.attributes:
            if isinstance(attr, ParameterAttribute):
                return attr
        return ParameterAttribute()

    @property
    def validations(self) -> list[ValidationAttribute]:
        return self.attributes_of(ValidationAttribute)

    @property
    def aliases(self) -> tuple[str, ...]:
        alias = next(iter(self.attributes_of(AliasAttribute)), None)
        return alias.alias_names if alias is not None else ()

    @property
    def completer(self) -> ArgumentCompleter | None:
        return next(iter(self.attributes_of(ArgumentCompleter)), None)

    def attributes_of(self, kind: type[A]) -> list[A]:
        """Return the attributes that are instances of *kind*, in order."""
        return [attr for attr in self.attributes if isinstance(attr, kind)]


class ParameterDictionary(MutableMapping[str, ParameterDescriptor]):
    """Insertion-ordered mapping of parameter name to descriptor.

    Assigning to an existing name raises :class:`DuplicateKeyException`;
    entries are never overwritten.
    """

    def __init__(self) -> None:
        self._entries: dict[str, ParameterDescriptor] = {}

    def add(self, descriptor: ParameterDescriptor) -> None:
        """Insert *descriptor* under its own name."""
        self[descriptor.name] = descriptor

    def __setitem__(self, name: str, descriptor: ParameterDescriptor) -> None:
        if not isinstance(descriptor, ParameterDescriptor):
            raise InvalidArgumentException(
                f"Expected a ParameterDescriptor for '{name}', got {type(descriptor).__name__}",
            )
        if name in self._entries:
            raise DuplicateKeyException(
                f"A parameter named '{name}' is already in the dictionary",
                context={"names": [name]},
            )
        self._entries[name] = descriptor

    def __getitem__(self, name: str) -> ParameterDescriptor:
        return self._entries[name]

    def __delitem__(self, name: str) -> None:
        del self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ParameterDictionary({list(self._entries)!r})"
