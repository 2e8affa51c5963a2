from rich.style import Style
from rich.text import Text
from rich.theme import Theme

FLAG_RED = "#DD0000"
FLAG_GOLD = "#FFCE00"
SUCCESS_GREEN = "#27AE60"
ERROR_RED = "#C0392B"
INFO_BLUE = "#3498DB"
MUTED_GRAY = "#7F8C8D"
TEXT_WHITE = "#FFFFFF"

DEFAULT_THEME = Theme(
    {
        "prompt": Style(color=MUTED_GRAY, bold=True),
        "muted": Style(color=MUTED_GRAY),
        "success": Style(color=SUCCESS_GREEN),
        "error": Style(color=ERROR_RED),
        "info": Style(color=INFO_BLUE),
    }
)

OPTION_LABEL_STYLE = Style(color=FLAG_GOLD, bold=True)


def create_welcome_banner(topic: str, level: str) -> Text:
    """Create the welcome banner text."""
    banner = Text()
    banner.append("╔══════════════════════════════════╗\n", Style(color=FLAG_RED))
    banner.append("║         Deutsch-Meister          ║\n", Style(color=FLAG_GOLD, bold=True))
    banner.append(
        f"║  {f'{topic.title()} · {level.upper()}':^30}  ║\n", Style(color=FLAG_RED)
    )
    banner.append("╚══════════════════════════════════╝", Style(color=FLAG_RED))
    return banner


def create_success_header() -> Text:
    """Create a success/correct answer header."""
    header = Text()
    header.append("✓ ", Style(color=SUCCESS_GREEN, bold=True))
    header.append("Perfekt!", Style(color=SUCCESS_GREEN, bold=True))
    return header


def create_error_header() -> Text:
    """Create an error/incorrect answer header."""
    header = Text()
    header.append("✗ ", Style(color=ERROR_RED, bold=True))
    header.append("Knapp daneben!", Style(color=ERROR_RED, bold=True))
    return header
