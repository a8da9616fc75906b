"""Colorful CLI output helpers."""

import sys

# ANSI color codes
GREEN = "\033[32m"
YELLOW = "\033[33m"
RED = "\033[31m"
RESET = "\033[0m"
CHECK = "\u2713"  # ✓
BULLET = "\u2022"  # •
CROSS = "\u2717"  # ✗


def _colorize(text: str, color: str, stream=None) -> str:
    """Apply color to text if the stream is a terminal."""
    stream = stream or sys.stdout
    if hasattr(stream, "isatty") and stream.isatty():
        return f"{color}{text}{RESET}"
    return text


def success(message: str) -> None:
    """Print success message with green checkmark."""
    print(f"{_colorize(CHECK, GREEN)} {message}")


def info(message: str) -> None:
    """Print a summary line with a yellow bullet to stderr."""
    print(f"{_colorize(BULLET, YELLOW, sys.stderr)} {message}", file=sys.stderr)


def error(message: str) -> None:
    """Print error message with red cross to stderr."""
    print(f"{_colorize(CROSS, RED, sys.stderr)} {message}", file=sys.stderr)
