from rich.text import Text
from rich.panel import Panel
from rich.table import Table
from rich.style import Style
from rich.align import Align
from rich.columns import Columns
from rich import box
from typing import Optional, List

from ui.styles import (
    FLAG_RED,
    FLAG_GOLD,
    SUCCESS_GREEN,
    ERROR_RED,
    MUTED_GRAY,
    TEXT_WHITE,
    OPTION_LABEL_STYLE,
    create_error_header,
    create_success_header,
    create_welcome_banner,
)


class ExercisePanel:
    """A styled panel for displaying one question."""

    def __init__(
        self,
        prompt_text: str,
        options: Optional[List[str]] = None,
        exercise_number: int = 0,
        total_exercises: int = 0,
        score: int = 0,
        best_score: int = 0,
    ):
        self.prompt_text = prompt_text
        self.options = options or []
        self.exercise_number = exercise_number
        self.total_exercises = total_exercises
        self.score = score
        self.best_score = best_score

    @property
    def progress_percent(self) -> float:
        if self.total_exercises <= 0:
            return 0.0
        return self.exercise_number / self.total_exercises * 100

    def render(self) -> Panel:
        content = Text()

        if self.total_exercises > 0:
            content.append(self._create_progress_bar(), Style(color=MUTED_GRAY))
            content.append("\n")
            content.append(
                f"Frage {self.exercise_number} von {self.total_exercises}"
                f"   Punkte: {self.score}   Highscore: {self.best_score}\n",
                Style(color=MUTED_GRAY),
            )

        content.append(self.prompt_text, Style(color=FLAG_RED, bold=True))
        content.append("\n\n")

        for i, option in enumerate(self.options):
            content.append(f"{chr(65 + i)}. ", OPTION_LABEL_STYLE)
            content.append(option, Style(color=TEXT_WHITE))
            content.append("\n")

        if self.options:
            letters = ", ".join(chr(65 + i) for i in range(len(self.options)))
            subtitle = f"Wähle {letters} (oder 'q' zum Beenden)"
        else:
            subtitle = "Antwort eingeben (oder 'q' zum Beenden)"

        return Panel(
            Align.left(content),
            title="Deutsch-Meister",
            subtitle=subtitle,
            border_style=FLAG_RED,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def _create_progress_bar(self) -> str:
        """Create a text-based progress bar."""
        width = 30
        filled = int(width * self.progress_percent / 100)
        remaining = width - filled
        bar = "█" * filled + "░" * remaining
        return f"[{bar}] {self.progress_percent:.0f}%"

    def __rich__(self) -> Panel:
        return self.render()


class FeedbackPanel:
    """A styled panel for displaying answer feedback."""

    def __init__(
        self,
        is_correct: bool,
        correct_answer: str,
        user_answer: str = "",
        explanation: Optional[str] = None,
    ):
        self.is_correct = is_correct
        self.correct_answer = correct_answer
        self.user_answer = user_answer
        self.explanation = explanation

    def render(self) -> Panel:
        content = Text()

        if self.is_correct:
            content.append(create_success_header())
            content.append("\n")
        else:
            content.append(create_error_header())
            content.append("\n")
            if self.user_answer:
                content.append(
                    f"Deine Antwort: {self.user_answer}\n", Style(color=MUTED_GRAY)
                )

        content.append("\n")
        content.append("Richtig ist: ", Style(color=MUTED_GRAY))
        content.append(self.correct_answer, Style(color=SUCCESS_GREEN, bold=True))

        if self.explanation:
            content.append("\n\n")
            content.append("Erklärung:\n", Style(color=FLAG_GOLD, bold=True))
            content.append(self.explanation, Style(color=TEXT_WHITE))

        return Panel(
            Align.left(content),
            title="Ergebnis",
            border_style=SUCCESS_GREEN if self.is_correct else ERROR_RED,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class WelcomeScreen:
    """Welcome screen with banner and quiz info."""

    def __init__(self, topic: str, level: str, exercise_count: int, best_score: int):
        self.topic = topic
        self.level = level
        self.exercise_count = exercise_count
        self.best_score = best_score

    def render(self) -> Panel:
        banner = create_welcome_banner(self.topic, self.level)
        banner.append("\n\n")
        banner.append("Tippe jederzeit 'q', um zu beenden.\n", Style(color=MUTED_GRAY))

        stats = Table(show_header=False, border_style=MUTED_GRAY, box=box.ROUNDED)
        stats.add_column("Label", justify="center")
        stats.add_column("Value", justify="center")
        stats.add_row(
            Text("Übungen", style=Style(color=MUTED_GRAY)),
            Text(str(self.exercise_count), style=Style(color=FLAG_GOLD, bold=True)),
        )
        stats.add_row(
            Text("Highscore", style=Style(color=MUTED_GRAY)),
            Text(str(self.best_score), style=Style(color=FLAG_GOLD, bold=True)),
        )

        return Panel(
            Columns(
                [Align.center(banner), Align.center(stats)],
                align="center",
                padding=(3, 3),
            ),
            border_style=FLAG_RED,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class SessionSummary:
    """Final score panel shown when every question was answered."""

    def __init__(self, final_score: int, total: int, best_score: int, is_new_best: bool):
        self.final_score = final_score
        self.total = total
        self.best_score = best_score
        self.is_new_best = is_new_best

    def render(self) -> Panel:
        accuracy = (self.final_score / self.total * 100) if self.total > 0 else 0

        stats = Table(show_header=False, border_style=MUTED_GRAY, box=box.SIMPLE)
        stats.add_column("Label", style=Style(color=MUTED_GRAY))
        stats.add_column("Value", justify="right")
        stats.add_row(
            "Punkte",
            Text(f"{self.final_score}/{self.total}", style=Style(color=SUCCESS_GREEN)),
        )
        stats.add_row(
            "Quote",
            Text(f"{accuracy:.0f}%", style=Style(color=FLAG_GOLD, bold=True)),
        )
        stats.add_row("Highscore", Text(str(self.best_score), style=Style(color=FLAG_GOLD)))

        content = Text()
        content.append(
            "Fantastisch! Du hast alle Übungen abgeschlossen!\n\n",
            Style(color=FLAG_RED, bold=True),
        )
        if self.is_new_best:
            content.append("Neuer Highscore! 🎉\n", Style(color=SUCCESS_GREEN, bold=True))

        return Panel(
            Columns(
                [Align.center(content), Align.center(stats)],
                align="center",
                padding=(0, 1),
            ),
            title="Zusammenfassung",
            border_style=FLAG_GOLD,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()
