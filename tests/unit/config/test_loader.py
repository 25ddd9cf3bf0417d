# pyright: reportAny=false, reportUnknownArgumentType=false
import copy
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from nyargit.config import (
    deep_merge,
    parse_env_vars,
    parse_string_value,
    read_toml_file,
    set_nested_key,
)
from nyargit.exceptions import ConfigLoadError

if TYPE_CHECKING:
    from pyfakefs.fake_filesystem import FakeFilesystem


class TestReadTomlFile:
    def test_parses_valid_toml(self, fs: FakeFilesystem) -> None:
        content = """
[pull]
remote = "upstream"
"""
        path = Path("/repo/.nyargit.toml")
        fs.create_file(path, contents=content)

        assert read_toml_file(path) == {"pull": {"remote": "upstream"}}

    def test_raises_file_not_found_for_missing_file(self, fs: FakeFilesystem) -> None:
        with pytest.raises(FileNotFoundError):
            _ = read_toml_file(Path("/repo/missing.toml"))

    def test_raises_config_load_error_with_location(self, fs: FakeFilesystem) -> None:
        path = Path("/repo/invalid.toml")
        fs.create_file(path, contents='[pull\nremote = "x"\n')

        with pytest.raises(ConfigLoadError) as exc_info:
            _ = read_toml_file(path)

        error = exc_info.value
        assert error.path == path
        assert error.line is not None
        assert error.column is not None


class TestDeepMerge:
    def test_nested_dicts_are_merged(self) -> None:
        base = {"pull": {"remote": "origin", "strategy": "merge"}}
        override = {"pull": {"remote": "upstream"}}

        result = deep_merge(base, override)

        assert result == {"pull": {"remote": "upstream", "strategy": "merge"}}

    def test_lists_are_replaced(self) -> None:
        assert deep_merge({"a": [1, 2]}, {"a": [3]}) == {"a": [3]}

    def test_type_mismatch_override_wins(self) -> None:
        assert deep_merge({"a": {"b": 1}}, {"a": "flat"}) == {"a": "flat"}

    def test_inputs_are_not_modified(self) -> None:
        base = {"pull": {"remote": "origin"}}
        override = {"pull": {"strategy": "stage-only"}}
        base_copy = copy.deepcopy(base)
        override_copy = copy.deepcopy(override)

        result = deep_merge(base, override)
        result["pull"]["remote"] = "changed"

        assert base == base_copy
        assert override == override_copy


class TestParseStringValue:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("true", True),
            ("FALSE", False),
            ("1", True),
            ("0", False),
            ("42", 42),
            ("1.5", 1.5),
            ('["a", "b"]', ["a", "b"]),
            ('{"k": 1}', {"k": 1}),
            ("origin", "origin"),
            ("[not json", "[not json"),
        ],
    )
    def test_infers_types(self, raw: str, expected: object) -> None:
        assert parse_string_value(raw) == expected


class TestParseEnvVars:
    def test_maps_double_underscore_to_sections(self) -> None:
        environ = {
            "NYARGIT_PULL__REMOTE": "upstream",
            "NYARGIT_STATUS__INCLUDE_IGNORED": "true",
        }

        result = parse_env_vars(environ=environ)

        assert result == {
            "pull": {"remote": "upstream"},
            "status": {"include_ignored": True},
        }

    def test_ignores_flat_process_variables(self) -> None:
        environ = {"NYARGIT_DEBUG": "1", "NYARGIT_HOME": "/tmp/x"}

        assert parse_env_vars(environ=environ) == {}

    def test_ignores_other_prefixes(self) -> None:
        assert parse_env_vars(environ={"OTHER_PULL__REMOTE": "x"}) == {}

    def test_message_values_stay_strings(self) -> None:
        environ = {"NYARGIT_MESSAGES__CANCELLED": "1"}

        assert parse_env_vars(environ=environ) == {"messages": {"cancelled": "1"}}

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NYARGIT_AUTHOR__NAME", "Ada")

        assert parse_env_vars() == {"author": {"name": "Ada"}}


class TestSetNestedKey:
    def test_creates_intermediate_dicts(self) -> None:
        d: dict[str, object] = {}

        set_nested_key(d, "a.b.c", 1)

        assert d == {"a": {"b": {"c": 1}}}

    def test_replaces_non_dict_intermediate(self) -> None:
        d: dict[str, object] = {"a": "flat"}

        set_nested_key(d, "a.b", 1)

        assert d == {"a": {"b": 1}}
