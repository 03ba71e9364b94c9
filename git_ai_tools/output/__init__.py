"""Terminal Output - colors, symbols and a progress spinner for the gitai CLI."""

import os
import re
import sys
import threading
from typing import TextIO

from git_ai_tools import COMMIT_TYPES
from git_ai_tools.git.status import StatusCategory


class Colors:
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'


def _stream_is_tty(stream: TextIO) -> bool:
    return hasattr(stream, 'isatty') and stream.isatty()


def _detect_color(stream: TextIO) -> bool:
    """NO_COLOR wins over FORCE_COLOR; otherwise color only on a terminal."""
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    if not _stream_is_tty(stream):
        return False
    if sys.platform == 'win32':
        # Enable VT processing on the Windows console
        try:
            import ctypes
            kernel32 = ctypes.windll.kernel32
            return bool(kernel32.SetConsoleMode(kernel32.GetStdHandle(-11), 7))
        except (AttributeError, OSError):
            return False
    return True


def _detect_unicode(stream: TextIO) -> bool:
    try:
        '✓─⠋'.encode(getattr(stream, 'encoding', None) or 'utf-8')
    except (UnicodeEncodeError, LookupError):
        return False
    return True


COLORS_ENABLED = _detect_color(sys.stdout)
UNICODE_ENABLED = _detect_unicode(sys.stdout)

CHECK = '✓' if UNICODE_ENABLED else '[OK]'
CROSS = '✗' if UNICODE_ENABLED else '[X]'
RULE = '─' if UNICODE_ENABLED else '-'


def paint(text: str, *codes: str) -> str:
    if not COLORS_ENABLED or not codes:
        return text
    return f"{''.join(codes)}{text}{Colors.RESET}"


def success(text: str) -> str:
    return paint(text, Colors.GREEN)


def error(text: str) -> str:
    return paint(text, Colors.RED)


def warning(text: str) -> str:
    return paint(text, Colors.YELLOW)


def info(text: str) -> str:
    return paint(text, Colors.CYAN)


def dim(text: str) -> str:
    return paint(text, Colors.DIM)


def bold(text: str) -> str:
    return paint(text, Colors.BOLD)


def print_success(message: str) -> None:
    print(f"{success(CHECK)} {message}")


def print_error(message: str) -> None:
    """Errors go to stderr so piped output stays a bare commit message."""
    print(f"{error(CROSS)} {error(message)}", file=sys.stderr)


# Same palette as `git status`: index green, worktree red, untracked magenta
CATEGORY_COLORS = {
    StatusCategory.STAGED: Colors.GREEN,
    StatusCategory.ADDED: Colors.GREEN,
    StatusCategory.RENAMED: Colors.GREEN,
    StatusCategory.COPIED: Colors.GREEN,
    StatusCategory.DELETED_STAGED: Colors.GREEN,
    StatusCategory.MODIFIED_STAGED_AND_UNSTAGED: Colors.YELLOW,
    StatusCategory.MODIFIED: Colors.RED,
    StatusCategory.DELETED: Colors.RED,
    StatusCategory.UNTRACKED: Colors.MAGENTA,
}


def colorize_category(category: StatusCategory) -> str:
    return paint(category.label, CATEGORY_COLORS.get(category, Colors.DIM))


COMMIT_TYPE_COLORS = {
    'feat': Colors.GREEN,
    'fix': Colors.RED,
    'perf': Colors.GREEN,
    'refactor': Colors.YELLOW,
    'docs': Colors.CYAN,
    'ci': Colors.CYAN,
    'build': Colors.CYAN,
    'test': Colors.MAGENTA,
}

# type, optional (scope), optional breaking "!", then ":"
_HEADER_RE = re.compile(r'^(?P<type>[a-z]+)(\([^)]*\))?!?:')


def colorize_commit_type(message: str) -> str:
    """Highlight the `type(scope):` prefix of the subject line."""
    subject, sep, rest = message.partition('\n')
    match = _HEADER_RE.match(subject)
    if not match or match.group('type') not in COMMIT_TYPES:
        return message
    color = COMMIT_TYPE_COLORS.get(match.group('type'), Colors.DIM)
    prefix = match.group(0)
    return paint(prefix, Colors.BOLD, color) + subject[len(prefix):] + sep + rest


class Spinner:
    """
    Animated spinner shown while a provider request is in flight.

    Draws on stderr and only when stderr is a terminal, so it never ends
    up in redirected output. Use as a context manager.
    """

    FRAMES = ['⠋', '⠙', '⠹', '⠸', '⠼', '⠴', '⠦', '⠧', '⠇', '⠏']
    FRAMES_ASCII = ['-', '\\', '|', '/']
    INTERVAL = 0.08

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream or sys.stderr
        self.frames = self.FRAMES if _detect_unicode(self.stream) else self.FRAMES_ASCII
        self._active = _stream_is_tty(self.stream)
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def _spin(self) -> None:
        idx = 0
        while not self._stop.is_set():
            self.stream.write(f'\r\033[K{self.frames[idx % len(self.frames)]} ')
            self.stream.flush()
            idx += 1
            self._stop.wait(self.INTERVAL)

    def __enter__(self):
        if self._active:
            self._stop.clear()
            self._thread = threading.Thread(target=self._spin, daemon=True)
            self._thread.start()
        return self

    def __exit__(self, *args):
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        if self._active:
            self.stream.write('\r\033[K')
            self.stream.flush()


__all__ = [
    "Colors", "COLORS_ENABLED", "UNICODE_ENABLED",
    "CHECK", "CROSS", "RULE",
    "paint", "success", "error", "warning", "info", "dim", "bold",
    "print_success", "print_error",
    "CATEGORY_COLORS", "colorize_category",
    "COMMIT_TYPE_COLORS", "colorize_commit_type",
    "Spinner",
]
