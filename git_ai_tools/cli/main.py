"""CLI Main Entry Point"""

from git_ai_tools.cli.args import parse_args
from git_ai_tools.cli.commands import run_config, run_generate, run_status, run_test_connection

COMMANDS = {
    'status': run_status,
    'generate': run_generate,
    'config': run_config,
    'test-connection': run_test_connection,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)
    try:
        return COMMANDS[args.command](args)
    except KeyboardInterrupt:
        return 130
