"""
Test suite for the partman CLI.

Runs ``main()`` in-process and checks output and exit codes.
"""

import json

import pytest

from partman.cli import build_parser, main
from partman.cli.errors import CLIConfigError, CLIValidationError, format_cli_error
from partman.errors import ConfigError, ConfigStateError
from partman.settings.config import default_config_text


class TestCheck:
    def test_valid_file(self, write_config, sample_config_text, capsys):
        path = write_config(sample_config_text)
        main(["check", str(path)])
        assert f"OK: {path}" in capsys.readouterr().out

    def test_invalid_file_exits_nonzero(self, write_config, capsys):
        good = write_config("Grid 1 1 1\n", name="good.conf")
        bad = write_config("Grid 1 1 1\nSetServer Staging\n", name="bad.conf")
        with pytest.raises(SystemExit) as exc_info:
            main(["check", str(good), str(bad)])
        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert f"OK: {good}" in captured.out
        assert "Line 2" in captured.err
        assert "UNKNOWN_SERVER_KIND" in captured.err
        assert "Found: Staging" in captured.err


class TestShow:
    def test_json_summary(self, write_config, sample_config_text, capsys):
        path = write_config(sample_config_text)
        main(["--config", str(path), "show", "--json"])
        data = json.loads(capsys.readouterr().out)
        assert data == {
            "grid": {"rows": 10, "columns": 10, "zs": 2},
            "server_kind": "Development",
            "keyboard": {"ctrl+q": "Quit"},
        }

    def test_table_of_default(self, capsys):
        main(["show"])
        out = capsys.readouterr().out
        assert "ctrl+q" in out
        assert "Quit" in out
        assert "Server: Production" in out

    def test_config_from_environment(self, write_config, monkeypatch, capsys):
        path = write_config("SetServer Development\n")
        monkeypatch.setenv("PARTMAN_CONFIG", str(path))
        main(["show", "--json"])
        assert json.loads(capsys.readouterr().out)["server_kind"] == "Development"

    def test_broken_config_reports_error(self, write_config, capsys):
        path = write_config("Bind ctrl+q\n")
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(path), "show"])
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "CLI_CONFIG_ERROR" in err
        assert "ARITY_MISMATCH" in err

    def test_missing_config_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit):
            main(["--config", str(tmp_path / "nope.conf"), "show"])
        assert "CLI_FILE_NOT_FOUND" in capsys.readouterr().err

    def test_fallback_setting(self, write_config, monkeypatch, capsys):
        path = write_config("Bind ctrl+q\n")
        monkeypatch.setenv("PARTMAN_FALLBACK_TO_DEFAULT", "1")
        main(["--config", str(path), "show", "--json"])
        assert json.loads(capsys.readouterr().out)["keyboard"]["ctrl+q"] == "Quit"


class TestResolve:
    def test_bound(self, capsys):
        main(["resolve", "Ctrl+Q"])
        assert capsys.readouterr().out.strip() == "ctrl+q -> Quit (Quit())"

    def test_unbound(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["resolve", "ctrl+z"])
        assert exc_info.value.code == 1
        assert "ctrl+z is not bound" in capsys.readouterr().err

    def test_invalid_chord(self, capsys):
        with pytest.raises(SystemExit):
            main(["resolve", "ctrl+"])
        assert "CLI_VALIDATION_ERROR" in capsys.readouterr().err

    def test_reraise(self, monkeypatch):
        monkeypatch.setenv("PARTMAN_RERAISE", "1")
        with pytest.raises(CLIValidationError):
            main(["resolve", "ctrl+"])


class TestMisc:
    def test_default_prints_builtin_text(self, capsys):
        main(["default"])
        assert capsys.readouterr().out == default_config_text()

    def test_no_command_prints_help(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2
        assert "usage: partman" in capsys.readouterr().out

    def test_parser_log_level_choices(self):
        args = build_parser().parse_args(["--log-level", "debug", "default"])
        assert args.log_level == "debug"

    def test_format_cli_error_verbose_context(self):
        err = CLIConfigError("broken", hint="fix it", context={"path": "a.conf"})
        text = format_cli_error(err, verbose=True)
        assert "Error [CLI_CONFIG_ERROR]: broken" in text
        assert "Hint: fix it" in text
        assert "path: a.conf" in text

    def test_parser_accepts_warning_level(self):
        args = build_parser().parse_args(["--log-level", "warning", "default"])
        assert args.log_level == "warning"

    def test_format_plain_config_error(self):
        text = format_cli_error(ConfigError("boom"))
        assert text.startswith("Error: ConfigError: [CONFIG_ERROR] boom")


class TestEnvironmentSettings:
    """Bad ``PARTMAN_*`` values are reported, not raised."""

    def test_unknown_log_level(self, monkeypatch, capsys):
        monkeypatch.setenv("PARTMAN_LOG_LEVEL", "loud")
        with pytest.raises(SystemExit) as exc_info:
            main(["default"])
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "CLI_CONFIG_ERROR" in err
        assert "PARTMAN_LOG_LEVEL='loud'" in err
        assert "debug, info, warn, warning, error" in err

    def test_unparsable_fallback_flag(self, monkeypatch, capsys):
        monkeypatch.setenv("PARTMAN_FALLBACK_TO_DEFAULT", "sometimes")
        with pytest.raises(SystemExit) as exc_info:
            main(["show"])
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "PARTMAN_FALLBACK_TO_DEFAULT" in err
        assert "Traceback" not in err

    def test_reraise_keeps_cli_error(self, monkeypatch):
        monkeypatch.setenv("PARTMAN_LOG_LEVEL", "loud")
        monkeypatch.setenv("PARTMAN_RERAISE", "1")
        with pytest.raises(CLIConfigError):
            main(["default"])


class TestUnwrappedConfigError:
    def test_config_error_from_handler_exits_cleanly(self, monkeypatch, capsys):
        def already_loaded(args):
            raise ConfigStateError(message="Configuration already loaded from test")

        monkeypatch.setattr("partman.cli.cmd_default", already_loaded)
        with pytest.raises(SystemExit) as exc_info:
            main(["default"])
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "Error: ConfigStateError: [CONFIG_STATE]" in err
        assert "already loaded" in err
