"""CLI Commands"""

import sys
import time
from dataclasses import fields, replace

from git_ai_tools.ai import AIError, AIGateway, ConfigError, get_adapter, parse_provider, validate_config
from git_ai_tools.config import (
    ENV_OVERRIDES, Config, get_config_path, get_local_config_path, load_config, save_config,
)
from git_ai_tools.git import GitError, GitSession, RepositoryStatus
from git_ai_tools.output import (
    CHECK, RULE, Spinner, bold, colorize_category, colorize_commit_type, dim, info,
    print_error, print_success, success, warning,
)
from git_ai_tools.cli.utils import copy_to_clipboard, mask_secret, resolve_config


def display_status(status: RepositoryStatus) -> None:
    """Print branch and the three change lists."""
    print(f"On branch {bold(status.branch or '(unknown)')}")

    if not status.has_changes:
        print(dim("Nothing to commit, working tree clean"))
        return

    if status.staged:
        print(f"\n{bold('Staged changes:')}")
        for change in status.staged:
            print(f"  {colorize_category(change.category)}: {change.path}")

    if status.unstaged:
        print(f"\n{bold('Unstaged changes:')}")
        for change in status.unstaged:
            print(f"  {colorize_category(change.category)}: {change.path}")

    if status.untracked:
        print(f"\n{bold('Untracked files:')}")
        for path in status.untracked:
            print(f"  {path}")


def display_message(message: str) -> None:
    """Display commit message with horizontal rules and colored type."""
    lines = colorize_commit_type(message).split('\n')
    # Width from the raw message, colored lines carry ANSI codes
    width = max((len(line) for line in message.split('\n')), default=40)
    print(f"\n{dim(RULE * width)}")
    print(bold(lines[0]))
    for line in lines[1:]:
        print(line)
    print(dim(RULE * width))


def _describe_provider(config: Config) -> str:
    try:
        adapter = get_adapter(parse_provider(config.provider))
    except ConfigError:
        return config.provider or "(none)"
    return f"{adapter.name} ({config.model or adapter.DEFAULT_MODEL})"


def run_status(args) -> int:
    try:
        session = GitSession(args.path)
        status = session.get_status()
    except GitError as e:
        print_error(str(e))
        return 1

    display_status(status)
    return 0


def run_generate(args) -> int:
    """Collect the staged diff, ask the provider, show and optionally commit."""
    is_pipe = not sys.stdout.isatty()
    timings = {}

    t0 = time.time()
    try:
        session = GitSession(args.path)
        status = session.get_status()
    except GitError as e:
        print_error(str(e))
        return 1

    if not status.staged:
        print_error("No staged changes. Run 'git add' first.")
        return 1

    diff = session.collect_staged_diff(status)
    timings['git'] = time.time() - t0

    config = resolve_config(args)
    if not is_pipe:
        print(f"Analyzing {bold(str(len(status.staged)))} staged files using {info(_describe_provider(config))}... ", end='', flush=True)

    t0 = time.time()
    try:
        with AIGateway(config.to_ai_config(), timeout=config.timeout) as gateway:
            with Spinner():
                message = gateway.generate_commit_message(diff)
    except AIError as e:
        if not is_pipe:
            print()
        print_error(str(e))
        return 1
    timings['generate'] = time.time() - t0

    if is_pipe:
        print(message)
    else:
        print(success("done!"))
        if args.verbose:
            print(dim(f"  Diff: {len(diff)} chars from {len(status.staged)} files"))
            print(dim(f"  Timings: git={timings['git']:.2f}s, generate={timings['generate']:.2f}s"))

        display_message(message)

        if not args.no_copy:
            copied, reason = copy_to_clipboard(message)
            if copied:
                print(f"{success(CHECK)} Copied to clipboard!")
            else:
                print(f"{warning('!')} Could not copy to clipboard{': ' + reason if reason else ''}")

    if args.commit:
        try:
            session.commit(message)
        except GitError as e:
            print_error(str(e))
            return 1
        if not is_pipe:
            print_success("Committed")

    return 0


def _parse_assignment(assignment: str) -> tuple[str, object]:
    key, sep, value = assignment.partition('=')
    key = key.strip().replace('-', '_')
    valid_keys = {f.name for f in fields(Config)}
    if not sep or key not in valid_keys:
        raise ValueError(f"Expected KEY=VALUE with KEY in: {', '.join(sorted(valid_keys))}")
    value = value.strip()
    if key == 'timeout':
        if not value.isdigit() or int(value) <= 0:
            raise ValueError(f"timeout must be a positive integer, got '{value}'")
        return key, int(value)
    return key, value


def display_config() -> int:
    """Display current configuration."""
    config = load_config()
    config_path = get_config_path()

    print(f"\n{bold('Current Configuration')}\n")
    print(f"  {dim('Loaded from:')} {config_path or 'defaults (no .gitairc found)'}")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    provider:  {info(config.provider or '(not set)')}")
    print(f"    model:     {info(config.model or 'provider default')}")
    print(f"    base_url:  {info(config.base_url or 'provider default')}")
    print(f"    api_key:   {info(mask_secret(config.api_key))}")
    print(f"    timeout:   {info(str(config.timeout))}s")

    print(f"\n  {dim('Environment overrides:')} {', '.join(ENV_OVERRIDES)}")
    print(f"  {dim('Run')} gitai config --set KEY=VALUE {dim('to change a value')}\n")
    return 0


def run_config(args) -> int:
    if not args.assignments:
        return display_config()

    try:
        updates = dict(_parse_assignment(a) for a in args.assignments)
    except ValueError as e:
        print_error(str(e))
        return 1

    config = replace(load_config(), **updates)
    try:
        validate_config(config.to_ai_config())
    except ConfigError as e:
        print_error(str(e))
        return 1

    local_path = get_local_config_path()
    if args.local:
        global_config = False
    elif args.global_config:
        global_config = True
        if local_path.exists():
            print(f"{warning('!')} {local_path} overrides the home config in this directory", file=sys.stderr)
    else:
        # Update the file that load_config() reads from here
        global_config = not local_path.exists()

    path = save_config(config, global_config=global_config)
    print_success(f"Saved to {path}")
    if args.show:
        return display_config()
    return 0


def run_test_connection(args) -> int:
    """Try the resolved settings against the provider without saving them."""
    config = resolve_config(args)
    candidate = config.to_ai_config()

    print(f"Testing {info(_describe_provider(config))}... ", end='', flush=True)
    try:
        with AIGateway(timeout=config.timeout) as gateway:
            with Spinner():
                reply = gateway.test_connection(candidate)
    except AIError as e:
        print()
        print_error(str(e))
        return 1

    print(success("ok"))
    print(dim(f"  Sample reply: {reply.splitlines()[0]}"))
    return 0
