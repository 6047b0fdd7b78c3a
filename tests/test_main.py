"""Tests for the command line entry point and settings."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from taskdeck.__main__ import build_settings, main, parse_args
from taskdeck.config import Settings
from taskdeck.logging import setup_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep TASKDECK_* variables from the developer's shell out of the tests."""
    for name in (
        "TASKDECK_API_BASE_URL",
        "TASKDECK_REQUEST_TIMEOUT",
        "TASKDECK_DEFAULT_LIMIT",
        "TASKDECK_VERBOSE",
        "TASKDECK_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = parse_args([])
        assert args.api_url is None
        assert args.timeout is None
        assert args.limit is None
        assert args.list is False
        assert args.completed is None
        assert args.verbose == 0
        assert args.log_file is None

    def test_status_flags(self):
        assert parse_args(["--list", "--completed"]).completed is True
        assert parse_args(["--list", "--active"]).completed is False

    def test_status_flags_are_exclusive(self):
        with pytest.raises(SystemExit):
            parse_args(["--completed", "--active"])

    def test_verbosity_counts(self):
        assert parse_args(["-vv"]).verbose == 2


class TestBuildSettings:
    """Tests for mapping CLI flags onto settings."""

    def test_defaults(self):
        settings = build_settings(parse_args([]))
        assert settings.api_base_url == "http://localhost:8080/api/v1"
        assert settings.request_timeout == 30.0
        assert settings.default_limit is None
        assert settings.verbose == 0
        assert settings.log_file is None

    def test_flags_override(self, tmp_path: Path):
        log_file = tmp_path / "taskdeck.log"
        args = parse_args(
            [
                "--api-url",
                "http://tasks.test/api/v1",
                "--timeout",
                "5",
                "--limit",
                "20",
                "-v",
                "--log-file",
                str(log_file),
            ]
        )
        settings = build_settings(args)
        assert settings.api_base_url == "http://tasks.test/api/v1"
        assert settings.request_timeout == 5.0
        assert settings.default_limit == 20
        assert settings.verbose == 1
        assert settings.log_file == log_file

    def test_env_used_when_flag_absent(self, monkeypatch):
        monkeypatch.setenv("TASKDECK_API_BASE_URL", "http://env.test/api/v1")
        monkeypatch.setenv("TASKDECK_DEFAULT_LIMIT", "15")
        settings = build_settings(parse_args([]))
        assert settings.api_base_url == "http://env.test/api/v1"
        assert settings.default_limit == 15

    def test_flag_beats_env(self, monkeypatch):
        monkeypatch.setenv("TASKDECK_API_BASE_URL", "http://env.test/api/v1")
        settings = build_settings(parse_args(["--api-url", "http://flag.test"]))
        assert settings.api_base_url == "http://flag.test"

    def test_invalid_limit_rejected(self):
        with pytest.raises(ValidationError):
            build_settings(parse_args(["--limit", "0"]))

    def test_invalid_timeout_rejected(self):
        with pytest.raises(ValidationError):
            Settings(request_timeout=0)


class TestMain:
    """Tests for main()."""

    def test_list_mode_exits_with_code(self):
        with (
            patch("taskdeck.__main__.setup_logging"),
            patch("taskdeck.cli.list_tasks.run_list", return_value=1) as run_list,
            pytest.raises(SystemExit) as exc_info,
        ):
            main(["--list", "--active", "--limit", "3"])

        assert exc_info.value.code == 1
        settings = run_list.call_args.args[0]
        assert settings.default_limit == 3
        assert run_list.call_args.kwargs == {"completed": False}

    def test_invalid_setting_prints_usage_error(self, capsys):
        with (
            patch("taskdeck.cli.list_tasks.run_list") as run_list,
            pytest.raises(SystemExit) as exc_info,
        ):
            main(["--list", "--limit", "0"])

        assert exc_info.value.code == 2
        err = capsys.readouterr().err
        assert "usage: taskdeck" in err
        assert "invalid default_limit" in err
        run_list.assert_not_called()

    def test_tui_mode_runs_app(self):
        with (
            patch("taskdeck.__main__.setup_logging") as setup,
            patch("taskdeck.app.run") as run,
        ):
            main(["--api-url", "http://tasks.test/api/v1"])

        setup.assert_called_once_with(0, None)
        run.assert_called_once()
        assert run.call_args.args[0].api_base_url == "http://tasks.test/api/v1"


class TestSetupLogging:
    """Tests for logging configuration."""

    @pytest.fixture(autouse=True)
    def reset_logger(self):
        logger = logging.getLogger("taskdeck")
        handlers = list(logger.handlers)
        level = logger.level
        yield logger
        for handler in logger.handlers[len(handlers):]:
            handler.close()
        logger.handlers = handlers
        logger.setLevel(level)

    def test_silent_by_default(self, reset_logger):
        before = list(reset_logger.handlers)
        setup_logging()
        assert reset_logger.handlers == before

    def test_verbose_levels(self, reset_logger):
        setup_logging(verbose=1)
        assert reset_logger.level == logging.INFO

        setup_logging(verbose=2)
        assert reset_logger.level == logging.DEBUG

    def test_log_file_written(self, reset_logger, tmp_path: Path):
        log_file = tmp_path / "logs" / "taskdeck.log"

        setup_logging(log_file=log_file)
        logging.getLogger("taskdeck.api.client").info("GET /tasks: 200 (12ms)")
        for handler in reset_logger.handlers:
            handler.flush()

        content = log_file.read_text()
        assert "taskdeck starting" in content
        assert "GET /tasks: 200 (12ms)" in content
