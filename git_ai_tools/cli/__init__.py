"""Command Line Interface Package"""

from git_ai_tools.cli.main import main

__all__ = ["main"]
