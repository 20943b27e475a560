import sys

from kctx.config import Settings

RESET = "\033[0m"


def use_color(settings: Settings, stream=None) -> bool:
    """Decide whether listings get ANSI highlighting"""
    if settings.force_color:
        return True
    if settings.no_color:
        return False
    stream = stream or sys.stdout
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def highlight(name: str, settings: Settings) -> str:
    """Wrap ``name`` in the configured current-context colors"""
    return f"{settings.current_bgcolor}{settings.current_fgcolor}{name}{RESET}"


def format_listing(entries, settings: Settings, color: bool) -> str:
    """Render ``(name, is_current)`` pairs one per line"""
    lines = []
    for name, is_current in entries:
        lines.append(highlight(name, settings) if color and is_current else name)
    return "\n".join(lines)
