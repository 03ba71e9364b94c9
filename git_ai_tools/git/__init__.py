"""Git Operations Package"""

from git_ai_tools.git.status import (
    STATUS_CODES,
    FileChange,
    RepositoryStatus,
    StatusCategory,
    lookup_category,
    parse_porcelain,
    resolve_branch,
)
from git_ai_tools.git.repository import GitError, GitSession

__all__ = [
    "STATUS_CODES",
    "FileChange",
    "RepositoryStatus",
    "StatusCategory",
    "lookup_category",
    "parse_porcelain",
    "resolve_branch",
    "GitError",
    "GitSession",
]
