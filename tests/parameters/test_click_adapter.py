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
"""Tests for :class:`ClickParameterBinder`."""

from __future__ import annotations

import click
import pytest
from click.testing import CliRunner

from dynparam.kernel.exceptions import DuplicateKeyException
from dynparam.parameters.adapters.click_adapter import ClickParameterBinder
from dynparam.parameters.assembler import build_parameter_dictionary
from dynparam.parameters.builder import build_parameter
from dynparam.parameters.ports.outbound import ParameterBinderPort


def _run(command: click.Command, args: list[str]):
    return CliRunner().invoke(command, args)


def _capture_command(dictionary, **kwargs):
    captured: dict[str, object] = {}

    def callback(**params):
        captured.update(params)

    command = ClickParameterBinder().command("deploy", callback, dictionary, **kwargs)
    return command, captured


# ---------------------------------------------------------------------------
# Protocol conformance
# ---------------------------------------------------------------------------


class TestProtocolConformance:
    def test_isinstance_check(self) -> None:
        assert isinstance(ClickParameterBinder(), ParameterBinderPort)


# ---------------------------------------------------------------------------
# Parameter shapes
# ---------------------------------------------------------------------------


class TestParameterShapes:
    def test_option_named_after_descriptor(self) -> None:
        (param,) = ClickParameterBinder().to_click_params(build_parameter_dictionary([build_parameter("Path")]))
        assert isinstance(param, click.Option)
        assert param.name == "path"
        assert param.opts == ["--path"]
        assert param.required is False

    def test_aliases_become_extra_option_names(self) -> None:
        dictionary = build_parameter_dictionary([build_parameter("Email", aliases=["Mail", "E_Addr"])])
        (param,) = ClickParameterBinder().to_click_params(dictionary)
        assert param.opts == ["--email", "--mail", "--e-addr"]

    def test_mandatory_is_required(self) -> None:
        dictionary = build_parameter_dictionary([build_parameter("Path", mandatory=True)])
        (param,) = ClickParameterBinder().to_click_params(dictionary)
        assert param.required is True

    def test_bool_is_flag(self) -> None:
        dictionary = build_parameter_dictionary([build_parameter("Force", param_type=bool)])
        (param,) = ClickParameterBinder().to_click_params(dictionary)
        assert param.is_flag is True

    def test_mandatory_flag_is_required(self) -> None:
        dictionary = build_parameter_dictionary([build_parameter("Force", param_type=bool, mandatory=True)])
        (param,) = ClickParameterBinder().to_click_params(dictionary)
        assert param.is_flag is True
        assert param.required is True

    def test_names_colliding_once_lowercased_rejected(self) -> None:
        dictionary = build_parameter_dictionary([build_parameter("Name"), build_parameter("name")])
        with pytest.raises(DuplicateKeyException) as exc_info:
            ClickParameterBinder().to_click_params(dictionary)
        assert exc_info.value.context == {"names": ["name"]}

    def test_dash_and_underscore_collide(self) -> None:
        dictionary = build_parameter_dictionary([build_parameter("dry-run"), build_parameter("Dry_Run")])
        with pytest.raises(DuplicateKeyException) as exc_info:
            ClickParameterBinder().to_click_params(dictionary)
        assert exc_info.value.context == {"names": ["dry_run"]}

    def test_list_type_is_multiple(self) -> None:
        dictionary = build_parameter_dictionary([build_parameter("Tag", param_type=list[int])])
        (param,) = ClickParameterBinder().to_click_params(dictionary)
        assert param.multiple is True
        assert param.type is click.INT

    def test_help_and_hidden(self) -> None:
        dictionary = build_parameter_dictionary(
            [build_parameter("Secret", help_message="Do not use", dont_show=True)]
        )
        (param,) = ClickParameterBinder().to_click_params(dictionary)
        assert param.help == "Do not use"
        assert param.hidden is True

    def test_positional_arguments_sorted_after_options(self) -> None:
        dictionary = build_parameter_dictionary(
            [
                build_parameter("Rest", value_from_remaining_arguments=True),
                build_parameter("Second", position=1),
                build_parameter("Verbose", param_type=bool),
                build_parameter("First", position=0),
            ]
        )
        params = ClickParameterBinder().to_click_params(dictionary)
        assert [p.name for p in params] == ["verbose", "first", "second", "rest"]
        assert isinstance(params[1], click.Argument)
        assert params[3].nargs == -1

    def test_parameter_set_filter(self) -> None:
        dictionary = build_parameter_dictionary(
            [
                build_parameter("Common"),
                build_parameter("DeployOnly", parameter_set_name="Deploy"),
                build_parameter("RollbackOnly", parameter_set_name="Rollback"),
            ]
        )
        binder = ClickParameterBinder()
        assert [p.name for p in binder.to_click_params(dictionary, "Deploy")] == ["common", "deployonly"]
        assert len(binder.to_click_params(dictionary)) == 3


# ---------------------------------------------------------------------------
# Invocation
# ---------------------------------------------------------------------------


class TestInvocation:
    def test_values_passed_to_callback(self) -> None:
        dictionary = build_parameter_dictionary(
            [
                build_parameter("Path", position=0, mandatory=True),
                build_parameter("Retries", param_type=int),
                build_parameter("Force", param_type=bool),
            ]
        )
        command, captured = _capture_command(dictionary)
        result = _run(command, ["/srv/app", "--retries", "3", "--force"])
        assert result.exit_code == 0, result.output
        assert captured == {"path": "/srv/app", "retries": 3, "force": True}

    def test_alias_usable_on_command_line(self) -> None:
        dictionary = build_parameter_dictionary([build_parameter("Email", aliases=["Mail"])])
        command, captured = _capture_command(dictionary)
        result = _run(command, ["--mail", "a@b.io"])
        assert result.exit_code == 0, result.output
        assert captured["email"] == "a@b.io"

    def test_missing_mandatory_fails(self) -> None:
        dictionary = build_parameter_dictionary([build_parameter("Path", mandatory=True)])
        command, _ = _capture_command(dictionary)
        result = _run(command, [])
        assert result.exit_code == 2

    def test_missing_mandatory_flag_fails(self) -> None:
        dictionary = build_parameter_dictionary([build_parameter("Force", param_type=bool, mandatory=True)])
        command, captured = _capture_command(dictionary)
        result = _run(command, [])
        assert result.exit_code == 2
        assert "--force" in result.output
        assert captured == {}

    def test_mandatory_flag_given(self) -> None:
        dictionary = build_parameter_dictionary([build_parameter("Force", param_type=bool, mandatory=True)])
        command, captured = _capture_command(dictionary)
        result = _run(command, ["--force"])
        assert result.exit_code == 0, result.output
        assert captured == {"force": True}

    def test_optional_flag_may_be_omitted(self) -> None:
        dictionary = build_parameter_dictionary([build_parameter("Force", param_type=bool)])
        command, captured = _capture_command(dictionary)
        result = _run(command, [])
        assert result.exit_code == 0, result.output
        assert captured == {"force": False}

    def test_raising_script_is_usage_error(self) -> None:
        dictionary = build_parameter_dictionary(
            [build_parameter("Count", validate_script=lambda v: int(v) > 0)]
        )
        command, captured = _capture_command(dictionary)
        result = _run(command, ["--count", "abc"])
        assert result.exit_code == 2
        assert "abc" in result.output
        assert captured == {}

    def test_validation_failure_is_usage_error(self) -> None:
        dictionary = build_parameter_dictionary(
            [build_parameter("Email", validate_pattern=r"^.+@.+\..+$")]
        )
        command, captured = _capture_command(dictionary)
        result = _run(command, ["--email", "nope"])
        assert result.exit_code == 2
        assert "does not match the pattern" in result.output
        assert captured == {}

    def test_validations_applied_in_order(self) -> None:
        dictionary = build_parameter_dictionary(
            [build_parameter("Code", validate_length=[2, 3], validate_set=["ab", "abc"])]
        )
        command, _ = _capture_command(dictionary)
        result = _run(command, ["--code", "abcd"])
        assert result.exit_code == 2
        assert "longer than the maximum length" in result.output

    def test_count_checked_on_multiple_values(self) -> None:
        dictionary = build_parameter_dictionary(
            [build_parameter("Tag", param_type=list[str], validate_count=[1, 2])]
        )
        command, captured = _capture_command(dictionary)
        assert _run(command, ["--tag", "a", "--tag", "b", "--tag", "c"]).exit_code == 2
        result = _run(command, ["--tag", "a", "--tag", "b"])
        assert result.exit_code == 0, result.output
        assert captured["tag"] == ("a", "b")

    def test_unbound_parameter_not_validated(self) -> None:
        dictionary = build_parameter_dictionary([build_parameter("Name", validate_not_null=True)])
        command, captured = _capture_command(dictionary)
        result = _run(command, [])
        assert result.exit_code == 0, result.output
        assert captured["name"] is None


# ---------------------------------------------------------------------------
# Completion
# ---------------------------------------------------------------------------


class TestCompletion:
    def test_completer_receives_context(self) -> None:
        seen: dict[str, object] = {}

        def complete(command_name, parameter_name, word, bound):
            seen.update(command=command_name, parameter=parameter_name, word=word)
            return [env for env in ("prod", "preview", "dev") if env.startswith(word)]

        dictionary = build_parameter_dictionary([build_parameter("Env", argument_completer=complete)])
        command, _ = _capture_command(dictionary)
        (param,) = command.params
        ctx = click.Context(command, info_name="deploy")
        items = param.shell_complete(ctx, "pr")
        assert [item.value for item in items] == ["prod", "preview"]
        assert seen == {"command": "deploy", "parameter": "Env", "word": "pr"}


# ---------------------------------------------------------------------------
# Binding onto an existing command
# ---------------------------------------------------------------------------


class TestBind:
    def test_bind_appends_parameters(self) -> None:
        captured: dict[str, object] = {}

        @click.command()
        @click.option("--region")
        def deploy(**params):
            captured.update(params)

        dictionary = build_parameter_dictionary([build_parameter("Replicas", param_type=int)])
        ClickParameterBinder().bind(deploy, dictionary)
        result = _run(deploy, ["--region", "eu", "--replicas", "2"])
        assert result.exit_code == 0, result.output
        assert captured == {"region": "eu", "replicas": 2}

    def test_bind_rejects_name_collision(self) -> None:
        @click.command()
        @click.option("--path")
        def deploy(**params):
            pass

        dictionary = build_parameter_dictionary([build_parameter("Path")])
        with pytest.raises(DuplicateKeyException) as exc_info:
            ClickParameterBinder().bind(deploy, dictionary)
        assert exc_info.value.context == {"names": ["path"]}
        assert len(deploy.params) == 1
