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
"""Translate :class:`ParameterOptions` into a :class:`ParameterDescriptor`."""

from __future__ import annotations

from collections.abc import Callable, Mapping, MutableMapping
from typing import Any

import structlog

from dynparam.kernel.exceptions import CapabilityUnavailableException, DuplicateKeyException
from dynparam.parameters.attributes import (
    AliasAttribute,
    ArgumentCompleter,
    ParameterAttribute,
    ValidateCount,
    ValidateDrive,
    ValidateLength,
    ValidateNotNull,
    ValidateNotNullOrEmpty,
    ValidatePattern,
    ValidateRange,
    ValidateScript,
    ValidateSet,
    ValidateTrustedData,
)
from dynparam.parameters.capabilities import HostCapabilities, ValidationKind
from dynparam.parameters.descriptor import ParameterDescriptor
from dynparam.parameters.options import ParameterOptions
from dynparam.validation.helpers import validate_model

logger = structlog.get_logger("dynparam.parameters.builder")

_Factory = Callable[[ParameterOptions], object]

# (kind, option field, factory), in the order attributes follow the binding attribute.
_VALIDATIONS: tuple[tuple[ValidationKind, str, _Factory], ...] = (
    (ValidationKind.LENGTH, "validate_length", lambda o: ValidateLength(*o.validate_length)),
    (ValidationKind.RANGE, "validate_range", lambda o: ValidateRange(*o.validate_range)),
    (ValidationKind.PATTERN, "validate_pattern", lambda o: ValidatePattern(o.validate_pattern)),
    (ValidationKind.SCRIPT, "validate_script", lambda o: ValidateScript(o.validate_script)),
    (ValidationKind.COUNT, "validate_count", lambda o: ValidateCount(*o.validate_count)),
    (ValidationKind.SET, "validate_set", lambda o: ValidateSet(tuple(o.validate_set))),
    (ValidationKind.TRUSTED_DATA, "validate_trusted_data", lambda o: ValidateTrustedData()),
    (ValidationKind.DRIVE, "validate_drive", lambda o: ValidateDrive(tuple(o.validate_drive))),
    (ValidationKind.NOT_NULL, "validate_not_null", lambda o: ValidateNotNull()),
    (ValidationKind.NOT_NULL_OR_EMPTY, "validate_not_null_or_empty", lambda o: ValidateNotNullOrEmpty()),
)


class ParameterDescriptorBuilder:
    """Build parameter descriptors, skipping directives the host cannot honour.

    Parameters
    ----------
    capabilities:
        The host capability table. Defaults to :meth:`HostCapabilities.all`.
    """

    def __init__(self, capabilities: HostCapabilities | None = None) -> None:
        self._capabilities = capabilities if capabilities is not None else HostCapabilities.all()

    @property
    def capabilities(self) -> HostCapabilities:
        return self._capabilities

    def build(
        self,
        options: ParameterOptions | Mapping[str, Any],
        target: MutableMapping[str, ParameterDescriptor] | None = None,
    ) -> ParameterDescriptor | None:
        """Build a descriptor from *options*.

        Returns the descriptor, or inserts it into *target* under its name
        and returns ``None`` when a target dictionary is given.

        Raises:
            InvalidArgumentException: If *options* is malformed.
            DuplicateKeyException: If *target* already holds the name.
        """
        if not isinstance(options, ParameterOptions):
            options = validate_model(ParameterOptions, dict(options))

        attributes: list[object] = [ParameterAttribute(**options.binding_overrides())]

        for kind, field, factory in _VALIDATIONS:
            attribute = self._gated(kind, field, factory, options)
            if attribute is not None:
                attributes.append(attribute)

        if options.aliases is not None:
            attributes.append(AliasAttribute(tuple(options.aliases)))

        completer = self._gated(
            ValidationKind.ARGUMENT_COMPLETER,
            "argument_completer",
            lambda o: ArgumentCompleter(o.argument_completer),
            options,
        )
        if completer is not None:
            attributes.append(completer)

        descriptor = ParameterDescriptor(
            name=options.name,
            param_type=options.param_type,
            attributes=tuple(attributes),
        )
        logger.debug(
            "parameter_built",
            parameter=descriptor.name,
            attributes=[type(a).__name__ for a in descriptor.attributes],
        )

        if target is None:
            return descriptor
        if descriptor.name in target:
            raise DuplicateKeyException(
                f"A parameter named '{descriptor.name}' is already in the dictionary",
                context={"names": [descriptor.name]},
            )
        target[descriptor.name] = descriptor
        return None

    def _gated(
        self,
        kind: ValidationKind,
        field: str,
        factory: _Factory,
        options: ParameterOptions,
    ) -> object | None:
        value = getattr(options, field)
        if value is None or value is False:
            return None
        try:
            self._capabilities.require(kind)
        except CapabilityUnavailableException:
            logger.debug("validation_skipped", parameter=options.name, kind=str(kind))
            return None
        return factory(options)


def build_parameter(
    name: str,
    *,
    target: MutableMapping[str, ParameterDescriptor] | None = None,
    capabilities: HostCapabilities | None = None,
    **options: Any,
) -> ParameterDescriptor | None:
    """Build one dynamic parameter.

    Keyword options are those of :class:`ParameterOptions`. With *target*
    the descriptor is inserted into that dictionary and ``None`` is returned.

    Example::

        build_parameter("Email", mandatory=True, aliases=["Mail"],
                        validate_pattern=r"^.+@.+\\..+$")
    """
    builder = ParameterDescriptorBuilder(capabilities)
    return builder.build({"name": name, **options}, target=target)


dparam = build_parameter
