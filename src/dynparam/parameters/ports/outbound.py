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
"""Outbound port: parameter binder interface."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from dynparam.parameters.descriptor import ParameterDictionary


@runtime_checkable
class ParameterBinderPort(Protocol):
    """Abstract binder that exposes a :class:`ParameterDictionary` on a command.

    Any CLI adapter (Click, Typer, etc.) must implement this protocol.
    """

    def bind(
        self,
        command: Any,
        dictionary: ParameterDictionary,
        parameter_set: str | None = None,
    ) -> Any: ...
