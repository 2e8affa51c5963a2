from rich.console import Console
from rich.text import Text
from rich.panel import Panel
from ui.components import (
    ExercisePanel,
    FeedbackPanel,
    SessionSummary,
    WelcomeScreen,
)
from ui.styles import DEFAULT_THEME
from typing import Optional

from exercises.base import parse_letter_input
from models import AnswerResult, CompletionSignal, QuestionView

QUIT = "quit"


class QuizUI:
    """Terminal presentation consumer for the quiz engine.

    Renders questions, feedback and the completion summary, and turns what
    the learner types into the answer string the engine grades (for
    multiple choice the selected option text, not its letter).
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.console.push_theme(DEFAULT_THEME)

    def show_welcome(self, topic: str, level: str, exercise_count: int, best_score: int) -> None:
        """Display the welcome screen and wait for user to press Enter."""
        self.console.print(
            WelcomeScreen(
                topic=topic,
                level=level,
                exercise_count=exercise_count,
                best_score=best_score,
            )
        )
        self.console.print()
        self.console.input(Text("Enter drücken zum Starten...", style="prompt"))

    def ask_question(self, question: QuestionView, score: int = 0, best_score: int = 0) -> str:
        """Display a question and collect the learner's answer.

        Returns:
            QUIT if the learner quits, otherwise the answer to grade.
        """
        panel = ExercisePanel(
            prompt_text=question.prompt,
            options=question.options,
            exercise_number=question.number,
            total_exercises=question.total,
            score=score,
            best_score=best_score,
        )
        self.console.print(panel)
        self.console.print()

        if question.options:
            return self._get_choice_input(question.options)
        return self._get_text_input()

    def _get_choice_input(self, options: list[str]) -> str:
        """Get a letter or number choice and return the option text."""
        while True:
            user_input = self.console.input(
                Text("Deine Antwort: ", style="prompt")
            ).strip()

            if user_input.lower() == "q":
                return QUIT

            index = parse_letter_input(user_input, len(options))
            if index is not None:
                return options[index]

            letters = ", ".join(chr(65 + i) for i in range(len(options)))
            self.console.print(
                Text(f"Bitte {letters} eingeben (oder 'q' zum Beenden)\n", style="error")
            )

    def _get_text_input(self) -> str:
        """Get free-text input from the learner."""
        while True:
            user_input = self.console.input(
                Text("Deine Antwort: ", style="prompt")
            ).strip()

            if user_input.lower() == "q":
                return QUIT
            if user_input:
                return user_input

            self.console.print(Text("Bitte eine Antwort eingeben\n", style="error"))

    def show_feedback(self, result: AnswerResult, user_answer: str = "") -> None:
        """Display feedback for the learner's answer."""
        feedback = FeedbackPanel(
            is_correct=result.correct,
            correct_answer=result.expected_answer,
            user_answer=user_answer,
            explanation=result.explanation,
        )
        self.console.print(feedback)
        self.console.print()

    def show_completion(self, signal: CompletionSignal, total: int, best_score: int) -> None:
        """Display the session summary."""
        self.console.print(
            SessionSummary(
                final_score=signal.final_score,
                total=total,
                best_score=best_score,
                is_new_best=signal.is_new_best_score,
            )
        )
        self.console.print()

    def ask_restart(self) -> bool:
        """Ask whether to play the same set again."""
        answer = self.console.input(
            Text("Nochmal spielen? (j/n): ", style="prompt")
        ).strip().lower()
        return answer in ("j", "ja", "y", "yes")

    def show_error(self, message: str) -> None:
        """Display an error message."""
        self.console.print(
            Panel(
                Text(f"Fehler: {message}", style="error"),
                title="Fehler",
                border_style="error",
            )
        )

    def show_info(self, message: str) -> None:
        """Display an informational message."""
        self.console.print(Text(message, style="info"))

    def show_nothing_to_practice(self) -> None:
        """Display message when no exercise survived loading and filtering."""
        self.console.print(
            Panel(
                Text("Keine passenden Übungen gefunden.", style="info"),
                title="Nichts zu üben",
                border_style="info",
            )
        )

    def show_quit_message(self) -> None:
        """Display the quit message."""
        self.console.print()
        self.console.print(Text("Tschüss! Bis zum nächsten Mal.", style="muted"))

    def show_goodbye(self) -> None:
        self.console.print(Text("Danke fürs Üben!", style="success"))

    def clear_screen(self) -> None:
        """Clear the terminal screen."""
        self.console.clear()

    def wait_for_continue(self) -> None:
        """Wait for user to press Enter to continue."""
        self.console.input(Text("Enter drücken für die nächste Frage...", style="prompt"))
