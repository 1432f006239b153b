"""Tests for seatsweep.cli._resolve: CLI > environment > default."""

import pytest

from seatsweep.cli._resolve import (
    apply_environment,
    build_parser,
    resolve_config,
    unset_options,
)
from seatsweep.config import OPTIONS, ServerConfig
from seatsweep.errors import ConfigurationError


class TestPrecedence:
    def test_defaults_when_nothing_set(self) -> None:
        assert resolve_config([], {}) == ServerConfig()

    def test_env_overrides_unset_flag(self) -> None:
        cfg = resolve_config([], {"SEATSWEEP_ADDRESS": ":8080"})
        assert cfg.address == ":8080"

    def test_cli_wins_over_env(self) -> None:
        cfg = resolve_config(["--address", ":9000"], {"SEATSWEEP_ADDRESS": ":8080"})
        assert cfg.address == ":9000"

    def test_cli_equals_form(self) -> None:
        cfg = resolve_config(["--address=:9000"], {})
        assert cfg.address == ":9000"

    @pytest.mark.parametrize(
        ("env_var", "value", "field", "expected"),
        [
            ("SEATSWEEP_ADDRESS", "127.0.0.1:1234", "address", "127.0.0.1:1234"),
            ("SEATSWEEP_DEBUG", "true", "debug", True),
            ("SEATSWEEP_STATICDIR", "/srv/assets", "static_dir", "/srv/assets"),
            ("SEATSWEEP_TEMPLATESDIR", "/srv/views", "templates_dir", "/srv/views"),
        ],
    )
    def test_every_option_reads_its_env_var(
        self, env_var: str, value: str, field: str, expected: object
    ) -> None:
        cfg = resolve_config([], {env_var: value})
        assert getattr(cfg, field) == expected

    @pytest.mark.parametrize(
        ("argv", "env", "field", "expected"),
        [
            (["--address", ":1"], {"SEATSWEEP_ADDRESS": ":2"}, "address", ":1"),
            (["--debug=false"], {"SEATSWEEP_DEBUG": "true"}, "debug", False),
            (["--staticdir", "a"], {"SEATSWEEP_STATICDIR": "b"}, "static_dir", "a"),
            (["--templatesdir", "a"], {"SEATSWEEP_TEMPLATESDIR": "b"}, "templates_dir", "a"),
        ],
    )
    def test_every_option_cli_overrides_env(
        self, argv: list[str], env: dict[str, str], field: str, expected: object
    ) -> None:
        cfg = resolve_config(argv, env)
        assert getattr(cfg, field) == expected

    def test_empty_env_value_is_unset(self) -> None:
        cfg = resolve_config([], {"SEATSWEEP_ADDRESS": "", "SEATSWEEP_DEBUG": ""})
        assert cfg.address == ":8877"
        assert cfg.debug is False

    def test_unrelated_env_ignored(self) -> None:
        cfg = resolve_config([], {"SEATSWEEP_PORT": "1", "ADDRESS": ":1"})
        assert cfg == ServerConfig()

    def test_idempotent(self) -> None:
        env = {"SEATSWEEP_DEBUG": "1", "SEATSWEEP_STATICDIR": "assets"}
        argv = ["--address", ":9001"]
        assert resolve_config(argv, env) == resolve_config(argv, env)


class TestDebugFlag:
    def test_bare_flag_is_true(self) -> None:
        assert resolve_config(["--debug"], {}).debug is True

    def test_explicit_false(self) -> None:
        assert resolve_config(["--debug=false"], {}).debug is False

    def test_bare_flag_beats_env_false(self) -> None:
        assert resolve_config(["--debug"], {"SEATSWEEP_DEBUG": "false"}).debug is True

    def test_env_numeric(self) -> None:
        assert resolve_config([], {"SEATSWEEP_DEBUG": "1"}).debug is True
        assert resolve_config([], {"SEATSWEEP_DEBUG": "0"}).debug is False


class TestUnsetDetection:
    def test_all_unset_without_arguments(self) -> None:
        namespace = build_parser().parse_args([])
        assert unset_options(namespace) == list(OPTIONS)

    def test_set_flags_removed(self) -> None:
        namespace = build_parser().parse_args(["--address", ":1", "--debug"])
        assert [o.name for o in unset_options(namespace)] == ["staticdir", "templatesdir"]

    def test_flag_set_to_its_default_still_counts_as_set(self) -> None:
        namespace = build_parser().parse_args(["--address", ":8877"])
        values = apply_environment(namespace, {"SEATSWEEP_ADDRESS": ":1"})
        assert values["address"] == ":8877"


class TestErrors:
    def test_bad_env_bool(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_config([], {"SEATSWEEP_DEBUG": "maybe"})
        exc = exc_info.value
        assert exc.option == "debug"
        assert exc.env_var == "SEATSWEEP_DEBUG"
        assert exc.value == "maybe"
        message = str(exc)
        assert "debug" in message
        assert "SEATSWEEP_DEBUG" in message
        assert '"maybe"' in message

    def test_bad_env_address(self) -> None:
        with pytest.raises(ConfigurationError, match="SEATSWEEP_ADDRESS"):
            resolve_config([], {"SEATSWEEP_ADDRESS": "nope"})

    def test_bad_env_ignored_when_cli_set(self) -> None:
        cfg = resolve_config(["--debug"], {"SEATSWEEP_DEBUG": "maybe"})
        assert cfg.debug is True

    def test_unknown_cli_option(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            resolve_config(["--port", "1"], {})
        assert exc_info.value.code == 2

    @pytest.mark.parametrize("flag", ["--add", "--static", "--templates", "--deb"])
    def test_option_prefix_is_not_accepted(self, flag: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            resolve_config([flag, "x"], {})
        assert exc_info.value.code == 2

    def test_bad_cli_value(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            resolve_config(["--address", "nope"], {})
        assert exc_info.value.code == 2


class TestHelp:
    def test_help_exits_zero(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            resolve_config(["--help"], {})
        assert exc_info.value.code == 0

    def test_help_lists_banner_defaults_and_env_vars(self, capsys) -> None:
        with pytest.raises(SystemExit):
            resolve_config(["--help"], {})
        out = capsys.readouterr().out
        flat = " ".join(out.split())

        assert "SeatSweep" in out
        assert "Version 0.0.3" in out
        assert "The possible environment variables:" in out
        for option in OPTIONS:
            assert f"--{option.name}" in out
            assert option.env_var in out
        assert "default: :8877" in flat
        assert "default: templates" in flat
