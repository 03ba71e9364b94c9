"""Git Session - Run git commands against one explicitly chosen working tree."""

import subprocess
from pathlib import Path

from git_ai_tools.git.status import RepositoryStatus, parse_porcelain


class GitError(Exception):
    """Raised when git operations fail."""
    pass


class GitSession:
    """
    A working tree the caller has selected.

    Every operation runs inside `path`, so several sessions can coexist
    without sharing a global "current repository".
    """

    def __init__(self, path: str | Path = "."):
        self.path = Path(path).resolve()
        if not self.path.is_dir():
            raise GitError(f"Directory does not exist: {self.path}")
        self._verify_git_available()
        self._verify_in_repo()

    def run_git(self, *args: str) -> str:
        """Run a git command in the session directory and return stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                cwd=self.path,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_git_available(self) -> None:
        """Fail fast if git isn't available."""
        try:
            self.run_git('--version')
        except GitError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_in_repo(self) -> None:
        """Fail fast if the directory is not inside a git repository."""
        try:
            self.run_git('rev-parse', '--git-dir')
        except GitError:
            raise GitError(f"Not a git repository: {self.path}")

    def get_status(self) -> RepositoryStatus:
        """Collect branch and porcelain output, then parse them."""
        try:
            branch_line = self.run_git('rev-parse', '--abbrev-ref', 'HEAD')
        except GitError:
            # Unborn branch: HEAD does not resolve until the first commit
            branch_line = ""

        summary = self.run_git('status', '-sb')
        summary_line = summary.split('\n', 1)[0]

        output = self.run_git('status', '--porcelain=v1')
        return parse_porcelain(output, branch_line=branch_line, summary_line=summary_line)

    def get_diff(self, file_path: str, staged: bool = False) -> str:
        """Diff for a single path, staged or working tree."""
        if staged:
            return self.run_git('diff', '--staged', '--', file_path)
        return self.run_git('diff', '--', file_path)

    def collect_staged_diff(self, status: RepositoryStatus | None = None) -> str:
        """
        Concatenate the staged diff of every staged file.

        A file whose diff cannot be fetched, or comes back empty, is left
        out rather than failing the whole collection.
        """
        if status is None:
            status = self.get_status()
        parts = []
        for change in status.staged:
            try:
                file_diff = self.get_diff(change.path, staged=True)
            except GitError:
                continue
            if not file_diff.strip():
                continue
            parts.append(f"\n=== {change.path} ===\n{file_diff}\n")
        return "".join(parts)

    def commit(self, message: str) -> str:
        """Commit the index with `message`."""
        if not message.strip():
            raise GitError("Commit message cannot be empty")
        return self.run_git('commit', '-m', message)
