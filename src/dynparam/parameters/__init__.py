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
"""dynparam parameters — declare dynamic, validated CLI parameters.

Build descriptors with :func:`build_parameter`, bundle them with
:func:`build_parameter_dictionary`, and expose the result on a click command
through :class:`ClickParameterBinder`.
"""

from dynparam.parameters.adapters.click_adapter import ClickParameterBinder
from dynparam.parameters.assembler import (
    ParameterDictionaryAssembler,
    build_parameter_dictionary,
    dparams,
)
from dynparam.parameters.attributes import (
    ALL_PARAMETER_SETS,
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
    ValidationAttribute,
)
from dynparam.parameters.builder import ParameterDescriptorBuilder, build_parameter, dparam
from dynparam.parameters.capabilities import HostCapabilities, ValidationKind
from dynparam.parameters.descriptor import ParameterDescriptor, ParameterDictionary
from dynparam.parameters.options import ParameterOptions
from dynparam.parameters.ports.outbound import ParameterBinderPort
from dynparam.parameters.properties import ParameterProperties

__all__ = [
    # Operations
    "build_parameter",
    "build_parameter_dictionary",
    "dparam",
    "dparams",
    # Components
    "ParameterDescriptorBuilder",
    "ParameterDictionaryAssembler",
    "ClickParameterBinder",
    "ParameterBinderPort",
    # Model
    "ParameterOptions",
    "ParameterDescriptor",
    "ParameterDictionary",
    "ParameterProperties",
    "HostCapabilities",
    "ValidationKind",
    # Attributes
    "ALL_PARAMETER_SETS",
    "ParameterAttribute",
    "ValidationAttribute",
    "ValidateLength",
    "ValidateRange",
    "ValidatePattern",
    "ValidateScript",
    "ValidateCount",
    "ValidateSet",
    "ValidateTrustedData",
    "ValidateDrive",
    "ValidateNotNull",
    "ValidateNotNullOrEmpty",
    "AliasAttribute",
    "ArgumentCompleter",
]
