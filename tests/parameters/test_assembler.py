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
"""Tests for ParameterDictionaryAssembler and build_parameter_dictionary."""

from __future__ import annotations

import pytest

from dynparam.kernel.exceptions import DuplicateKeyException, InvalidArgumentException
from dynparam.parameters.assembler import (
    ParameterDictionaryAssembler,
    build_parameter_dictionary,
    dparams,
)
from dynparam.parameters.builder import build_parameter
from dynparam.parameters.descriptor import ParameterDescriptor, ParameterDictionary


def _descriptors(*names: str) -> list[ParameterDescriptor]:
    return [build_parameter(name) for name in names]


# ---------------------------------------------------------------------------
# Mode A: descriptors supplied directly
# ---------------------------------------------------------------------------


class TestDirectMode:
    def test_no_arguments_returns_empty_dictionary(self):
        result = build_parameter_dictionary()
        assert isinstance(result, ParameterDictionary)
        assert len(result) == 0

    def test_empty_sequence(self):
        assert len(build_parameter_dictionary([])) == 0

    def test_keys_by_name_in_insertion_order(self):
        items = _descriptors("Zeta", "Alpha", "Mid")
        result = build_parameter_dictionary(items)
        assert list(result) == ["Zeta", "Alpha", "Mid"]
        assert [result[n] for n in result] == items

    def test_single_descriptor(self):
        d = build_parameter("Path")
        result = build_parameter_dictionary(d)
        assert result["Path"] is d

    def test_generator_input(self):
        result = build_parameter_dictionary(d for d in _descriptors("A", "B"))
        assert list(result) == ["A", "B"]

    def test_non_descriptor_item_rejected(self):
        with pytest.raises(InvalidArgumentException) as exc_info:
            build_parameter_dictionary([build_parameter("A"), "B"])
        assert exc_info.value.context == {"index": 1}

    def test_string_source_rejected(self):
        with pytest.raises(InvalidArgumentException):
            build_parameter_dictionary("Path")  # type: ignore[arg-type]

    def test_alias_function(self):
        assert dparams is build_parameter_dictionary


# ---------------------------------------------------------------------------
# Mode B: deferred block
# ---------------------------------------------------------------------------


class TestDeferredMode:
    def test_block_invoked_exactly_once(self):
        calls = []

        def create():
            calls.append(1)
            return _descriptors("A", "B")

        result = build_parameter_dictionary(create=create)
        assert calls == [1]
        assert list(result) == ["A", "B"]

    def test_matches_direct_mode(self):
        items = _descriptors("A", "B", "C")
        direct = build_parameter_dictionary(items)
        deferred = build_parameter_dictionary(create=lambda: items)
        assert dict(direct) == dict(deferred)
        assert list(direct) == list(deferred)

    def test_block_returning_none(self):
        assert len(build_parameter_dictionary(create=lambda: None)) == 0

    def test_block_returning_single_descriptor(self):
        result = build_parameter_dictionary(create=lambda: build_parameter("Only"))
        assert list(result) == ["Only"]

    def test_conditional_inclusion(self):
        verbose = False

        def create():
            yield build_parameter("Path")
            if verbose:
                yield build_parameter("Trace")

        assert list(build_parameter_dictionary(create=create)) == ["Path"]

    def test_block_errors_propagate(self):
        def create():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            build_parameter_dictionary(create=create)

    def test_non_callable_block_rejected(self):
        with pytest.raises(InvalidArgumentException):
            build_parameter_dictionary(create=[build_parameter("A")])  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Mode selection and duplicates
# ---------------------------------------------------------------------------


class TestModeSelection:
    def test_both_modes_rejected(self):
        called = []
        with pytest.raises(InvalidArgumentException):
            build_parameter_dictionary(_descriptors("A"), create=lambda: called.append(1))
        assert called == []


class TestDuplicates:
    def test_duplicate_in_direct_mode(self):
        with pytest.raises(DuplicateKeyException) as exc_info:
            build_parameter_dictionary(_descriptors("A", "B", "A"))
        assert exc_info.value.context == {"names": ["A"]}

    def test_duplicate_in_deferred_mode(self):
        with pytest.raises(DuplicateKeyException):
            build_parameter_dictionary(create=lambda: _descriptors("A", "A"))

    def test_no_partial_insertion(self, monkeypatch):
        added = []
        original_add = ParameterDictionary.add

        def spy(self, descriptor):
            added.append(descriptor.name)
            original_add(self, descriptor)

        monkeypatch.setattr(ParameterDictionary, "add", spy)
        with pytest.raises(DuplicateKeyException):
            ParameterDictionaryAssembler().assemble(_descriptors("A", "B", "B"))
        assert added == []


# ---------------------------------------------------------------------------
# End-to-end
# ---------------------------------------------------------------------------


class TestEndToEnd:
    def test_email_parameter(self):
        email = build_parameter(
            "Email",
            mandatory=True,
            aliases=["Mail"],
            validate_pattern=r"^.+@.+\..+$",
        )
        result = build_parameter_dictionary([email])

        assert list(result) == ["Email"]
        descriptor = result["Email"]
        assert descriptor.binding.mandatory is True
        assert descriptor.aliases == ("Mail",)
        patterns = [v for v in descriptor.validations if type(v).__name__ == "ValidatePattern"]
        assert len(patterns) == 1
        assert patterns[0].regex == r"^.+@.+\..+$"

    def test_builder_appends_to_assembled_dictionary(self):
        result = build_parameter_dictionary(_descriptors("A"))
        build_parameter("B", target=result)
        assert list(result) == ["A", "B"]
