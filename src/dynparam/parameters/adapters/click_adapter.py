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
"""Click-based adapter implementing :class:`ParameterBinderPort`."""

from __future__ import annotations

import typing
from collections import Counter
from collections.abc import Callable
from typing import Any

import click
from click.core import ParameterSource

from dynparam.kernel.exceptions import DuplicateKeyException, ValidationException
from dynparam.parameters.descriptor import ParameterDescriptor, ParameterDictionary

# ---- type mapping from Python types to Click parameter types ----

_TYPE_MAP: dict[type, click.types.ParamType] = {
    str: click.STRING,
    int: click.INT,
    float: click.FLOAT,
    bool: click.BOOL,
}

_COLLECTIONS = (list, tuple, set, frozenset)

# Values from these sources are left unvalidated, as an unbound parameter is.
_UNBOUND_SOURCES = (None, ParameterSource.DEFAULT, ParameterSource.DEFAULT_MAP)


def _unwrap_collection(tp: Any) -> tuple[Any, bool]:
    """Return ``(item_type, is_multi_valued)`` for a declared type."""
    if tp in _COLLECTIONS:
        return str, True
    if typing.get_origin(tp) in _COLLECTIONS:
        args = [a for a in typing.get_args(tp) if a is not Ellipsis]
        return (args[0] if args else str), True
    return tp, False


def _dest(name: str) -> str:
    # click lowercases argument names; options follow suit so both read alike.
    return name.replace("-", "_").lower()


def _flag(name: str) -> str:
    return "--" + name.lower().replace("_", "-")


def _make_callback(descriptor: ParameterDescriptor, *, enforce_presence: bool = False) -> Callable[..., Any] | None:
    validations = descriptor.validations
    if not validations and not enforce_presence:
        return None

    def _callback(ctx: click.Context, param: click.Parameter, value: Any) -> Any:
        unbound = value == () or ctx.get_parameter_source(param.name) in _UNBOUND_SOURCES  # type: ignore[arg-type]
        if unbound:
            # click treats a flag's False default as a value, so presence is checked here.
            if enforce_presence:
                raise click.MissingParameter(ctx=ctx, param=param)
            return value
        subject = list(value) if isinstance(value, tuple) else value
        try:
            for validation in validations:
                validation.validate(subject)
        except ValidationException as exc:
            raise click.BadParameter(str(exc), ctx=ctx, param=param) from exc
        return value

    return _callback


def _make_shell_complete(descriptor: ParameterDescriptor) -> Callable[..., Any] | None:
    completer = descriptor.completer
    if completer is None:
        return None

    def _shell_complete(ctx: click.Context, param: click.Parameter, incomplete: str) -> list[str]:
        command_name = ctx.info_name or (ctx.command.name or "")
        return completer.complete(command_name, descriptor.name, incomplete, dict(ctx.params))

    return _shell_complete


def _is_positional(descriptor: ParameterDescriptor) -> bool:
    binding = descriptor.binding
    return binding.position is not None or binding.value_from_remaining_arguments


def _build_click_param(descriptor: ParameterDescriptor) -> click.Parameter:
    """Convert a :class:`ParameterDescriptor` into a :class:`click.Parameter`."""
    binding = descriptor.binding
    item_type, multiple = _unwrap_collection(descriptor.param_type)
    click_type = _TYPE_MAP.get(item_type, click.STRING)

    is_flag = item_type is bool and not multiple and not _is_positional(descriptor)
    common: dict[str, Any] = {
        "callback": _make_callback(descriptor, enforce_presence=is_flag and binding.mandatory),
    }
    shell_complete = _make_shell_complete(descriptor)
    if shell_complete is not None:
        common["shell_complete"] = shell_complete

    if _is_positional(descriptor):
        nargs = -1 if multiple or binding.value_from_remaining_arguments else 1
        return click.Argument(
            [_dest(descriptor.name)],
            type=click_type,
            required=binding.mandatory,
            nargs=nargs,
            **common,
        )

    decls = [_flag(descriptor.name), *(_flag(a) for a in descriptor.aliases), _dest(descriptor.name)]

    if is_flag:
        return click.Option(
            decls,
            is_flag=True,
            default=False,
            required=binding.mandatory,
            help=binding.help_message,
            hidden=binding.dont_show,
            **common,
        )

    return click.Option(
        decls,
        type=click_type,
        required=binding.mandatory,
        multiple=multiple,
        help=binding.help_message,
        hidden=binding.dont_show,
        **common,
    )


class ClickParameterBinder:
    """Parameter binder backed by `click <https://click.palletsprojects.com>`_.

    Implements the :class:`~dynparam.parameters.ports.outbound.ParameterBinderPort`
    protocol.
    """

    def to_click_params(
        self,
        dictionary: ParameterDictionary,
        parameter_set: str | None = None,
    ) -> list[click.Parameter]:
        """Convert *dictionary* into click parameters.

        Options keep dictionary order; positional arguments follow, sorted by
        position, with remaining-argument parameters last.

        Raises:
            DuplicateKeyException: If two names map to the same click parameter name.
        """
        selected = [d for d in dictionary.values() if d.binding.applies_to(parameter_set)]
        clashes = [name for name, count in Counter(_dest(d.name) for d in selected).items() if count > 1]
        if clashes:
            raise DuplicateKeyException(
                f"Parameter names collide once lowercased: {', '.join(clashes)}",
                context={"names": clashes},
            )
        options = [d for d in selected if not _is_positional(d)]
        arguments = sorted(
            (d for d in selected if _is_positional(d)),
            key=lambda d: (d.binding.position is None, d.binding.position or 0),
        )
        return [_build_click_param(d) for d in (*options, *arguments)]

    def bind(
        self,
        command: click.Command,
        dictionary: ParameterDictionary,
        parameter_set: str | None = None,
    ) -> click.Command:
        """Append the dictionary's parameters to *command* and return it."""
        params = self.to_click_params(dictionary, parameter_set)
        existing = {p.name for p in command.params}
        clashes = [p.name for p in params if p.name in existing]
        if clashes:
            raise DuplicateKeyException(
                f"Command '{command.name}' already has parameter(s): {', '.join(clashes)}",
                context={"names": clashes},
            )
        command.params.extend(params)
        return command

    def command(
        self,
        name: str,
        callback: Callable[..., Any],
        dictionary: ParameterDictionary,
        *,
        help_text: str = "",
        parameter_set: str | None = None,
    ) -> click.Command:
        """Build a :class:`click.Command` exposing the dictionary's parameters."""
        return click.Command(
            name=name,
            callback=callback,
            params=self.to_click_params(dictionary, parameter_set),
            help=help_text or None,
        )
