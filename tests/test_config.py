"""Tests for settings and command line parsing."""

import logging
import logging.handlers

from config import DEFAULT_LEVEL, DEFAULT_TOPIC, LoggingSettings, QuizSettings
from logging_config import setup_logging
from main import create_parser, settings_from_args


def parse(*argv: str) -> QuizSettings:
    return settings_from_args(create_parser().parse_args(list(argv)))


class TestSettingsFromArgs:
    """Tests for settings_from_args()."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DM_SOURCE_URL", raising=False)
        settings = parse()
        assert settings.topic == DEFAULT_TOPIC
        assert settings.level == DEFAULT_LEVEL
        assert settings.filters == {}
        assert settings.persist_best_score
        assert settings.source_url is None

    def test_topic_and_level_lowercased(self):
        settings = parse("Faelle", "--level", "A2")
        assert settings.topic == "faelle"
        assert settings.level == "a2"

    def test_filters_collected(self):
        settings = parse("faelle", "-c", "dativ", "-c", "akkusativ", "-g", "maskulin")
        assert settings.filters == {
            "case": ["dativ", "akkusativ"],
            "gender": ["maskulin"],
        }

    def test_paths_and_flags(self, tmp_path):
        settings = parse(
            "--data-dir", str(tmp_path), "--db", str(tmp_path / "x.db"), "--no-save", "--seed", "3"
        )
        assert settings.data_dir == tmp_path
        assert settings.db_path == tmp_path / "x.db"
        assert not settings.persist_best_score
        assert settings.seed == 3

    def test_environment_defaults(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DM_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("DM_SOURCE_URL", "https://example.org/data")
        monkeypatch.setenv("DM_LOG_LEVEL", "DEBUG")
        settings = parse()
        assert settings.data_dir == tmp_path
        assert settings.source_url == "https://example.org/data"
        assert settings.logging.level == "DEBUG"

    def test_command_line_overrides_environment(self, monkeypatch):
        monkeypatch.setenv("DM_LOG_LEVEL", "DEBUG")
        settings = parse("--log-level", "error")
        assert settings.logging.level == "error"


class TestSetupLogging:
    def test_level_and_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "quiz.log"
        setup_logging(LoggingSettings(level="info", file=log_file))

        root = logging.getLogger()
        try:
            assert root.level == logging.INFO
            assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)
            assert log_file.parent.is_dir()
        finally:
            root.setLevel(logging.WARNING)
            for handler in list(root.handlers):
                handler.close()
                root.removeHandler(handler)

    def test_repeated_setup_does_not_stack_handlers(self):
        setup_logging(LoggingSettings(level="warning", file=None))
        setup_logging(LoggingSettings(level="warning", file=None))
        root = logging.getLogger()
        try:
            assert len(root.handlers) == 1
        finally:
            root.setLevel(logging.WARNING)
            for handler in list(root.handlers):
                root.removeHandler(handler)
