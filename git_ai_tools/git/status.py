"""Porcelain Status - Turn `git status --porcelain=v1` output into a change model."""

from dataclasses import dataclass, field
from enum import Enum


class StatusCategory(Enum):
    """Human-readable category for a two-character status code."""
    STAGED = "Staged"
    MODIFIED = "Modified"
    MODIFIED_STAGED_AND_UNSTAGED = "Modified (staged and unstaged)"
    ADDED = "Added"
    DELETED = "Deleted"
    DELETED_STAGED = "Deleted (staged)"
    RENAMED = "Renamed"
    COPIED = "Copied"
    UNTRACKED = "Untracked"
    IGNORED = "Ignored"
    UNKNOWN = "Unknown"

    @property
    def label(self) -> str:
        return self.value


STATUS_CODES: dict[str, StatusCategory] = {
    "M ": StatusCategory.STAGED,
    " M": StatusCategory.MODIFIED,
    "MM": StatusCategory.MODIFIED_STAGED_AND_UNSTAGED,
    "A ": StatusCategory.ADDED,
    " D": StatusCategory.DELETED,
    "D ": StatusCategory.DELETED_STAGED,
    "R ": StatusCategory.RENAMED,
    "C ": StatusCategory.COPIED,
    "??": StatusCategory.UNTRACKED,
    "!!": StatusCategory.IGNORED,
}

# Index-state characters that mean "recorded in the index"
STAGED_INDEX_STATES = frozenset("MARC")

RENAME_SEPARATOR = "->"
SUMMARY_MARKER = "##"
UNBORN_PREFIX = "No commits yet on "


def lookup_category(code: str) -> StatusCategory:
    """Map a status code to its category. Unrecognized codes are UNKNOWN."""
    return STATUS_CODES.get(code, StatusCategory.UNKNOWN)


@dataclass(frozen=True)
class FileChange:
    """A changed path and how git classifies it."""
    path: str
    category: StatusCategory

    @property
    def status(self) -> str:
        return self.category.label


@dataclass(frozen=True)
class RepositoryStatus:
    """Snapshot of a working tree. Built once per query, never mutated."""
    branch: str = ""
    staged: tuple[FileChange, ...] = field(default_factory=tuple)
    unstaged: tuple[FileChange, ...] = field(default_factory=tuple)
    untracked: tuple[str, ...] = field(default_factory=tuple)
    is_repository: bool = True

    @property
    def has_changes(self) -> bool:
        return bool(self.staged or self.unstaged or self.untracked)

    @property
    def total_files(self) -> int:
        return len(self.staged) + len(self.unstaged) + len(self.untracked)


def resolve_branch(branch_line: str = "", summary_line: str = "") -> str:
    """
    Resolve the current branch name.

    `branch_line` is the output of `git rev-parse --abbrev-ref HEAD`.
    `summary_line` is the first line of `git status -sb`
    (e.g. "## main...origin/main [ahead 1]"); when present its first
    field wins. Tracking info after "..." and ahead/behind counts are dropped.
    """
    branch = branch_line.strip()

    summary = summary_line.strip()
    if summary.startswith(SUMMARY_MARKER):
        summary = summary[len(SUMMARY_MARKER):].strip()
    if summary.startswith(UNBORN_PREFIX):
        summary = summary[len(UNBORN_PREFIX):]

    tokens = summary.split()
    if tokens:
        branch = tokens[0].split("...", 1)[0]

    return branch


# git's C-style quoting; octal escapes are handled separately
_C_ESCAPES = {
    'a': '\a', 'b': '\b', 't': '\t', 'n': '\n', 'v': '\v',
    'f': '\f', 'r': '\r', '"': '"', '\\': '\\',
}


def _read_quoted(text: str) -> tuple[str, str]:
    """
    Decode a C-quoted path at the start of `text`.

    Returns the decoded path and whatever follows the closing quote.
    Octal escapes are raw bytes (git quotes non-ASCII as UTF-8 octets).
    """
    out = bytearray()
    i = 1
    while i < len(text):
        ch = text[i]
        if ch == '"':
            return out.decode('utf-8', errors='replace'), text[i + 1:]
        if ch == '\\' and i + 1 < len(text):
            nxt = text[i + 1]
            digits = text[i + 1:i + 4]
            if len(digits) == 3 and all(c in '01234567' for c in digits):
                out.append(int(digits, 8))
                i += 4
                continue
            out.extend(_C_ESCAPES.get(nxt, nxt).encode('utf-8'))
            i += 2
            continue
        out.extend(ch.encode('utf-8'))
        i += 1
    # Unterminated quote: keep the text as written
    return text, ""


def unquote_path(path: str) -> str:
    """Undo git's quoting of paths with spaces, quotes or non-ASCII bytes."""
    if len(path) >= 2 and path.startswith('"'):
        decoded, rest = _read_quoted(path)
        if not rest.strip():
            return decoded
    return path


def _resolve_path(raw_path: str) -> str:
    """Renamed and copied entries read "ORIG -> NEW"; keep NEW, unquoted."""
    if raw_path.startswith('"'):
        orig, rest = _read_quoted(raw_path)
        rest = rest.strip()
        if rest.startswith(RENAME_SEPARATOR):
            return unquote_path(rest[len(RENAME_SEPARATOR):].strip())
        return orig
    if RENAME_SEPARATOR in raw_path:
        return unquote_path(raw_path.rsplit(RENAME_SEPARATOR, 1)[1].strip())
    return raw_path


def parse_porcelain(raw_output: str, branch_line: str = "", summary_line: str = "") -> RepositoryStatus:
    """
    Parse `git status --porcelain=v1` output.

    The staged, untracked and unstaged rules are independent: "MM" lands in
    both staged and unstaged, while "??" only ever lands in untracked.
    Lines shorter than three characters are skipped.
    """
    branch = resolve_branch(branch_line, summary_line)

    if not raw_output.strip():
        return RepositoryStatus(branch=branch)

    staged: list[FileChange] = []
    unstaged: list[FileChange] = []
    untracked: list[str] = []

    for line in raw_output.split('\n'):
        line = line.rstrip('\r')
        if len(line) < 3:
            continue

        code = line[:2]
        index_state, worktree_state = code[0], code[1]
        path = _resolve_path(line[3:])
        change = FileChange(path=path, category=lookup_category(code))

        if index_state in STAGED_INDEX_STATES:
            staged.append(change)

        if index_state == '?':
            untracked.append(path)

        if worktree_state == 'M' or code == '??':
            if index_state != '?':
                unstaged.append(change)

    return RepositoryStatus(
        branch=branch,
        staged=tuple(staged),
        unstaged=tuple(unstaged),
        untracked=tuple(untracked),
    )
