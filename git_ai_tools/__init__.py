"""
Git AI Tools

Inspect a git working tree and draft commit messages from staged changes
with an AI text-completion provider.
"""

__version__ = "1.0.0"

# Centralized commit types - single source of truth
# Used by: ai/base.py (system prompt), output (type coloring)
COMMIT_TYPES = {
    'feat': 'A new feature or capability',
    'fix': 'A bug fix',
    'docs': 'Documentation only changes',
    'style': 'Formatting, whitespace, no code change',
    'refactor': 'Code restructuring without behavior change',
    'test': 'Adding or updating tests',
    'chore': 'Maintenance tasks, dependencies, tooling',
    'perf': 'Performance improvement',
    'ci': 'CI/CD configuration changes',
    'build': 'Build system or external dependency changes',
}

COMMIT_TYPE_NAMES = list(COMMIT_TYPES.keys())
