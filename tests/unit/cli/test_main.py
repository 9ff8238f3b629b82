"""Tests for the root command group and logging setup."""

import logging

from rich.logging import RichHandler

from verifyctl import __version__
from verifyctl.cli.main import setup_logging


class TestRootCommand:
    def test_version(self, run):
        result = run("--version")

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_without_subcommand(self, run):
        result = run()

        assert result.exit_code == 0
        for name in ("auth", "create", "get", "replace", "delete", "set", "logs"):
            assert name in result.output

    def test_short_help_flag(self, run):
        result = run("get", "-h")

        assert result.exit_code == 0
        assert "users" in result.output

    def test_trace_log_is_written_under_verify_home(self, run, verify_home):
        run("get", "user")

        assert (verify_home / "trace.log").exists()


class TestSetupLogging:
    def teardown_method(self):
        logging.getLogger().handlers.clear()

    def test_console_level_follows_debug_flag(self):
        setup_logging(debug=False)
        (handler,) = logging.getLogger().handlers
        assert isinstance(handler, RichHandler)
        assert handler.level == logging.WARNING

        setup_logging(debug=True)
        (handler,) = logging.getLogger().handlers
        assert handler.level == logging.DEBUG

    def test_trace_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "trace.log"

        setup_logging(log_file=log_file, file_level=logging.DEBUG)

        handlers = logging.getLogger().handlers
        file_handlers = [h for h in handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].level == logging.DEBUG
        assert logging.getLogger().level == logging.DEBUG

        logging.getLogger("verifyctl.test").debug("traced")
        file_handlers[0].flush()
        file_handlers[0].close()
        assert "traced" in log_file.read_text()
