"""Tests for configuration resolution."""

from datetime import datetime

import pytest

from datepicker_tui.config import (
    ConfigError,
    _load_config_dict,
    _table_to_unit_map,
    load_theme,
    parse_args,
    parse_default,
    parse_format,
    parse_unit_map,
    resolve_options,
)


class TestParseArgs:
    """Tests for CLI argument parsing."""

    def test_no_args(self):
        args = parse_args([])
        assert args.format is None
        assert args.min is None
        assert args.max is None
        assert args.step is None
        assert args.default is None
        assert args.log_level == "WARNING"

    def test_message_short_flag(self):
        args = parse_args(["-m", "When?"])
        assert args.message == "When?"

    def test_bounds(self):
        args = parse_args(["--min", "year=2016", "--max", "year=2018"])
        assert args.min == "year=2016"
        assert args.max == "year=2018"

    def test_invalid_log_level_exits(self):
        with pytest.raises(SystemExit):
            parse_args(["--log-level", "LOUD"])


class TestParseUnitMap:
    """Tests for unit=value parsing."""

    def test_pairs(self):
        assert parse_unit_map("hour=6, minute=30", "--min") == {"hour": 6, "minute": 30}

    def test_plural_and_case(self):
        assert parse_unit_map("Minutes=15", "--step") == {"minute": 15}

    def test_empty(self):
        assert parse_unit_map("", "--min") == {}

    def test_unknown_unit(self):
        with pytest.raises(ConfigError, match="--min"):
            parse_unit_map("week=2", "--min")

    def test_missing_equals(self):
        with pytest.raises(ConfigError):
            parse_unit_map("hour", "--max")

    def test_non_integer(self):
        with pytest.raises(ConfigError, match="integer") as exc_info:
            parse_unit_map("hour=six", "--max")
        assert isinstance(exc_info.value.__cause__, ValueError)


class TestTableToUnitMap:
    """Tests for validating config.toml unit tables."""

    def test_missing_table(self):
        assert _table_to_unit_map(None, "min") is None

    def test_plural_keys_and_string_values(self):
        assert _table_to_unit_map({"minutes": 15, "Hour": " 2 "}, "steps") == {"minute": 15, "hour": 2}

    def test_comma_in_value_is_not_split(self):
        with pytest.raises(ConfigError, match="integer"):
            _table_to_unit_map({"hour": "6,minute=3"}, "min")

    def test_boolean_value(self):
        with pytest.raises(ConfigError, match="integer"):
            _table_to_unit_map({"hour": True}, "max")


class TestParseFormat:
    """Tests for format token splitting."""

    def test_tokens(self):
        assert parse_format("YYYY - MM - DD") == ["YYYY", "-", "MM", "-", "DD"]

    def test_quoted_space_literal(self):
        assert parse_format("DD \" \" HH") == ["DD", " ", "HH"]

    def test_unbalanced_quote(self):
        with pytest.raises(ConfigError) as exc_info:
            parse_format('YYYY "')
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_empty(self):
        with pytest.raises(ConfigError):
            parse_format("   ")


class TestLoadConfigDict:
    """Tests for the _load_config_dict private helper."""

    def test_returns_empty_dict_when_config_missing(self):
        """Returns an empty dict when the config file does not exist."""
        assert _load_config_dict() == {}

    def test_returns_empty_dict_on_malformed_toml(self, tmp_path, monkeypatch):
        """Returns an empty dict when the TOML file is invalid."""
        bad_toml = tmp_path / "bad.toml"
        bad_toml.write_text("not valid toml === !!!")
        monkeypatch.setattr("datepicker_tui.config._CONFIG_PATH", bad_toml)
        assert _load_config_dict() == {}

    def test_returns_parsed_dict_from_valid_toml(self, tmp_path, monkeypatch):
        """Returns the correct dict when the TOML file is valid."""
        config = tmp_path / "config.toml"
        config.write_text('theme = "nord"\n')
        monkeypatch.setattr("datepicker_tui.config._CONFIG_PATH", config)
        assert _load_config_dict() == {"theme": "nord"}

    def test_load_theme(self, isolated_config):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text('theme = "gruvbox"\n')
        assert load_theme() == "gruvbox"

    def test_load_theme_returns_none_when_not_set(self):
        assert load_theme() is None


class TestResolveOptions:
    """Tests for merging config.toml with CLI arguments."""

    CONFIG = (
        'message = "Pick:"\n'
        'format = ["YYYY", "-", "MM"]\n'
        'default = "2021-06-01"\n'
        "\n[min]\nyear = 2016\n"
        "\n[max]\nyear = 2030\n"
        "\n[steps]\nminute = 15\n"
    )

    @pytest.fixture
    def configured(self, isolated_config):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text(self.CONFIG)
        return isolated_config

    def test_builtin_defaults(self):
        options = resolve_options(parse_args([]))
        assert options.format is None
        assert options.minimum is None
        assert options.maximum is None
        assert options.steps == {}
        assert options.default is None
        assert options.message == "Select a date time: "

    def test_config_toml(self, configured):
        options = resolve_options(parse_args([]))
        assert options.message == "Pick:"
        assert options.format == ["YYYY", "-", "MM"]
        assert options.minimum == {"year": 2016}
        assert options.maximum == {"year": 2030}
        assert options.steps == {"minute": 15}
        assert options.default == datetime(2021, 6, 1)

    def test_cli_overrides_config(self, configured):
        args = parse_args(
            ["--min", "year=2020", "--format", "DD", "--step", "hour=2", "--default", "2022-02-02"]
        )
        options = resolve_options(args)
        assert options.minimum == {"year": 2020}
        assert options.maximum == {"year": 2030}
        assert options.format == ["DD"]
        assert options.steps == {"minute": 15, "hour": 2}
        assert options.default == datetime(2022, 2, 2)

    def test_without_args_uses_config_only(self, configured):
        assert resolve_options().message == "Pick:"

    def test_bad_format_in_config(self, isolated_config):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text('format = "YYYY-MM"\n')
        with pytest.raises(ConfigError, match="format"):
            resolve_options(parse_args([]))

    def test_bad_table_in_config(self, isolated_config):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text('min = 2016\n')
        with pytest.raises(ConfigError, match=r"\[min\]"):
            resolve_options(parse_args([]))

    def test_comma_in_table_value(self, isolated_config):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text('[min]\nhour = "6,minute=3"\n')
        with pytest.raises(ConfigError, match="min: hour must be an integer"):
            resolve_options(parse_args([]))

    def test_bad_default(self):
        with pytest.raises(ConfigError, match="--default"):
            resolve_options(parse_args(["--default", "someday"]))

    def test_bad_default_keeps_cause(self):
        with pytest.raises(ConfigError) as exc_info:
            parse_default("someday")
        assert isinstance(exc_info.value.__cause__, (ValueError, OverflowError))
