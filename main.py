import argparse
import logging
import random
import signal
import sys

from config import DEFAULT_LEVEL, DEFAULT_TOPIC, LoggingSettings, QuizSettings
from logging_config import setup_logging
from models import CompletionSignal, SessionStatus
from session import QuizEngine, SessionBuilder
from storage import (
    JsonFileExerciseSource,
    LoadError,
    get_best_score_repo,
    get_exercise_source,
    quiz_key,
)
from ui import QUIT, QuizUI

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(description="Deutsch-Meister quiz")
    parser.add_argument(
        "topic",
        nargs="?",
        default=DEFAULT_TOPIC,
        help=f"Quiz topic, e.g. artikel, faelle, wortschatz (default: {DEFAULT_TOPIC})",
    )
    parser.add_argument(
        "--level",
        "-l",
        default=DEFAULT_LEVEL,
        help=f"Level within the topic (default: {DEFAULT_LEVEL})",
    )
    parser.add_argument(
        "--case",
        "-c",
        action="append",
        help="Only practice this grammatical case (nominativ|akkusativ|dativ|genitiv)",
    )
    parser.add_argument(
        "--gender",
        "-g",
        action="append",
        help="Only practice this gender (maskulin|feminin|neutral|plural)",
    )
    parser.add_argument(
        "--tag",
        "-t",
        action="append",
        help="Only practice exercises carrying this tag",
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help="Directory with <topic>/<level>.json exercise files",
    )
    parser.add_argument(
        "--source-url",
        type=str,
        default=None,
        help="Fetch <url>/<topic>/<level>.json instead of reading local files",
    )
    parser.add_argument(
        "--db",
        type=str,
        default=None,
        help="SQLite database for best scores",
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Do not persist the best score",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible question order",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write logs to this file",
    )
    return parser


def settings_from_args(args: argparse.Namespace) -> QuizSettings:
    """Merge command line arguments over environment defaults."""
    overrides: dict = {
        "topic": args.topic.lower(),
        "level": args.level.lower(),
        "persist_best_score": not args.no_save,
        "seed": args.seed,
        "filters": {
            key: values
            for key, values in (("case", args.case), ("gender", args.gender), ("tag", args.tag))
            if values
        },
    }
    if args.data_dir:
        overrides["data_dir"] = args.data_dir
    if args.source_url:
        overrides["source_url"] = args.source_url
    if args.db:
        overrides["db_path"] = args.db

    logging_overrides = {}
    if args.log_level:
        logging_overrides["level"] = args.log_level
    if args.log_file:
        logging_overrides["file"] = args.log_file
    overrides["logging"] = LoggingSettings(**logging_overrides)

    return QuizSettings(**overrides)


def create_engine(settings: QuizSettings, rng: random.Random) -> QuizEngine:
    """Load the exercises for the configured quiz and build its engine.

    Raises:
        LoadError: If the exercise source cannot be loaded.
    """
    source = get_exercise_source(settings.data_dir, settings.source_url)
    records = source.load(settings.topic, settings.level)

    key = quiz_key(settings.topic, settings.level)
    builder = SessionBuilder(settings.generator, rng)
    session = builder.build(records, settings.filters, quiz_key=key)

    store = get_best_score_repo(settings.db_path, settings.persist_best_score)
    return QuizEngine(session, store, rng)


def play(engine: QuizEngine, ui: QuizUI) -> bool:
    """Run one pass over the session.

    Returns:
        True if the learner finished every question, False if they quit.
    """
    question = engine.current_question()
    while True:
        ui.clear_screen()
        user_input = ui.ask_question(
            question, score=engine.session.score, best_score=engine.session.best_score
        )
        if user_input == QUIT:
            return False

        result = engine.submit(user_input)
        ui.show_feedback(result, user_input)

        step = engine.advance()
        if isinstance(step, CompletionSignal):
            ui.show_completion(step, engine.session.total, engine.session.best_score)
            return True

        ui.wait_for_continue()
        question = step


def create_sigint_handler(ui: QuizUI):
    """Create a SIGINT handler that says goodbye before exiting."""

    def sigint_handler(signum, frame):
        ui.show_quit_message()
        sys.exit(0)

    return sigint_handler


def run_interactive(settings: QuizSettings) -> int:
    """Run the interactive quiz. Returns the process exit status."""
    ui = QuizUI()
    rng = random.Random(settings.seed)

    signal.signal(signal.SIGINT, create_sigint_handler(ui))

    ui.clear_screen()

    try:
        engine = create_engine(settings, rng)
    except LoadError as e:
        logger.error("Could not load exercises: %s", e)
        ui.show_error(f"Konnte die Übungen nicht laden. ({e})")
        if not settings.source_url:
            topics = JsonFileExerciseSource(settings.data_dir).available_topics()
            if topics:
                ui.show_info(f"Verfügbare Themen: {', '.join(topics)}")
        return 1

    engine.start()
    if engine.status == SessionStatus.EMPTY:
        ui.show_nothing_to_practice()
        return 0

    ui.show_welcome(
        topic=settings.topic,
        level=settings.level,
        exercise_count=engine.session.total,
        best_score=engine.session.best_score,
    )

    while True:
        if not play(engine, ui):
            ui.show_quit_message()
            return 0
        if not ui.ask_restart():
            ui.show_goodbye()
            return 0
        engine.restart()


def main():
    """Main entry point with CLI routing."""
    parser = create_parser()
    args = parser.parse_args()
    settings = settings_from_args(args)
    setup_logging(settings.logging)
    sys.exit(run_interactive(settings))


if __name__ == "__main__":
    main()
