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
"""Collect parameter descriptors into one :class:`ParameterDictionary`."""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterable

import structlog

from dynparam.kernel.exceptions import DuplicateKeyException, InvalidArgumentException
from dynparam.parameters.descriptor import ParameterDescriptor, ParameterDictionary

logger = structlog.get_logger("dynparam.parameters.assembler")

DescriptorSource = Iterable[ParameterDescriptor] | ParameterDescriptor | None


class ParameterDictionaryAssembler:
    """Assemble descriptors supplied directly or produced by a deferred block.

    Exactly one source is used per call: an iterable of *descriptors*, or a
    zero-argument *create* callable invoked once. Supplying neither yields an
    empty dictionary. All names are checked for uniqueness before anything
    is inserted.
    """

    def assemble(
        self,
        descriptors: DescriptorSource = None,
        *,
        create: Callable[[], DescriptorSource] | None = None,
    ) -> ParameterDictionary:
        """Return a dictionary holding the descriptors, keyed by name.

        Raises:
            InvalidArgumentException: If both sources are given, *create* is
                not callable, or an item is not a :class:`ParameterDescriptor`.
            DuplicateKeyException: If two descriptors share a name.
        """
        if descriptors is not None and create is not None:
            raise InvalidArgumentException(
                "Supply either descriptors or a create block, not both",
            )
        if create is not None:
            if not callable(create):
                raise InvalidArgumentException(
                    f"create must be callable, got {type(create).__name__}",
                )
            descriptors = create()

        items = self._collect(descriptors)
        self._check_unique(items)

        dictionary = ParameterDictionary()
        for descriptor in items:
            dictionary.add(descriptor)

        logger.debug("parameter_dictionary_built", parameters=list(dictionary))
        return dictionary

    @staticmethod
    def _collect(source: DescriptorSource) -> list[ParameterDescriptor]:
        if source is None:
            return []
        if isinstance(source, ParameterDescriptor):
            return [source]
        if isinstance(source, (str, bytes)) or not isinstance(source, Iterable):
            raise InvalidArgumentException(
                f"Expected parameter descriptors, got {type(source).__name__}",
            )
        items = list(source)
        for index, item in enumerate(items):
            if not isinstance(item, ParameterDescriptor):
                raise InvalidArgumentException(
                    f"Item {index} is a {type(item).__name__}, not a ParameterDescriptor",
                    context={"index": index},
                )
        return items

    @staticmethod
    def _check_unique(items: list[ParameterDescriptor]) -> None:
        counts = Counter(d.name for d in items)
        duplicates = [name for name, count in counts.items() if count > 1]
        if duplicates:
            raise DuplicateKeyException(
                f"Duplicate parameter name(s): {', '.join(duplicates)}",
                context={"names": duplicates},
            )


def build_parameter_dictionary(
    descriptors: DescriptorSource = None,
    *,
    create: Callable[[], DescriptorSource] | None = None,
) -> ParameterDictionary:
    """Build a :class:`ParameterDictionary`; see :meth:`ParameterDictionaryAssembler.assemble`."""
    return ParameterDictionaryAssembler().assemble(descriptors, create=create)


dparams = build_parameter_dictionary
