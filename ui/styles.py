from rich.theme import Theme
from rich.style import Style
from rich.text import Text

PTE_BLUE = "#1F5AA6"
WRITING_GOLD = "#F1C40F"
SUCCESS_GREEN = "#27AE60"
ERROR_RED = "#C0392B"
INFO_BLUE = "#3498DB"
MUTED_GRAY = "#7F8C8D"
TEXT_WHITE = "#FFFFFF"

# Seconds left at which the clock turns amber, then red
TIMER_WARNING_SECONDS = 60
TIMER_CRITICAL_SECONDS = 10

DEFAULT_THEME = Theme(
    {
        "success": Style(color=SUCCESS_GREEN),
        "error": Style(color=ERROR_RED, bold=True),
        "info": Style(color=INFO_BLUE),
        "muted": Style(color=MUTED_GRAY),
        "prompt": Style(color=MUTED_GRAY, bold=True),
    }
)


def get_score_style(percentage: float) -> Style:
    """Get color style based on a score percentage."""
    if percentage >= 80:
        return Style(color=SUCCESS_GREEN, bold=True)
    elif percentage >= 50:
        return Style(color=WRITING_GOLD)
    else:
        return Style(color=ERROR_RED)


def get_timer_style(seconds_left: int) -> Style:
    """Get style for the countdown clock."""
    if seconds_left <= TIMER_CRITICAL_SECONDS:
        return Style(color=ERROR_RED, bold=True)
    elif seconds_left <= TIMER_WARNING_SECONDS:
        return Style(color=WRITING_GOLD, bold=True)
    return Style(color=INFO_BLUE)


def get_zone_color(is_writing: bool) -> str:
    """Writing exercises are gold, reading exercises blue."""
    return WRITING_GOLD if is_writing else PTE_BLUE


def create_success_header() -> Text:
    """Create the header shown after a successful submission."""
    header = Text()
    header.append("✓ ", Style(color=SUCCESS_GREEN, bold=True))
    header.append("Submitted!", Style(color=SUCCESS_GREEN, bold=True))
    return header


def create_time_up_header() -> Text:
    header = Text()
    header.append("⏰ ", Style(color=ERROR_RED))
    header.append("Time's up!", Style(color=ERROR_RED, bold=True))
    return header
