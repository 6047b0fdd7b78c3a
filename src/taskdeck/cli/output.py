"""Colorful CLI output helpers."""

import sys

from ..models import Priority, Task

# ANSI color codes
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
RED = "\033[31m"
DIM = "\033[2m"
RESET = "\033[0m"
CHECK = "\u2713"  # ✓
BOX = "\u25a1"  # □
CROSS = "\u2717"  # ✗

PRIORITY_COLORS = {
    Priority.LOW: GREEN,
    Priority.MEDIUM: YELLOW,
    Priority.HIGH: RED,
}


def _supports_color() -> bool:
    """Check if stdout is a terminal."""
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _colorize(text: str, color: str) -> str:
    """Apply color to text if terminal supports it."""
    if _supports_color():
        return f"{color}{text}{RESET}"
    return text


def format_task(task: Task) -> str:
    """Format a task as a single line: marker, id, priority, title, due date."""
    marker = _colorize(CHECK, GREEN) if task.completed else BOX
    priority = _colorize(f"{task.priority.value:<6}", PRIORITY_COLORS[task.priority])
    line = f"{marker} #{task.id:<4} {priority} {task.title}"
    if task.due_date:
        line += " " + _colorize(f"(due {task.due_date.isoformat()})", DIM)
    return line


def print_task(task: Task) -> None:
    """Print one task line."""
    print(format_task(task))


def header(message: str) -> None:
    """Print header message in blue."""
    print(_colorize(message, BLUE))


def info(message: str) -> None:
    """Print dimmed informational message."""
    print(_colorize(message, DIM))


def error(message: str) -> None:
    """Print error message with red cross to stderr."""
    cross = _colorize(CROSS, RED)
    print(f"{cross} {message}", file=sys.stderr)
