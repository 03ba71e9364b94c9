"""CLI Argument Parsing"""

import argparse
import argcomplete

from git_ai_tools import __version__
from git_ai_tools.config import VALID_PROVIDERS


def _add_repo_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('-C', dest='path', default='.', metavar='PATH', help='Run as if started in PATH (default: current directory)')


def _add_provider_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('-p', '--provider', type=str, choices=sorted(VALID_PROVIDERS), help='AI provider')
    parser.add_argument('-m', '--model', type=str, metavar='MODEL', help='Model name (default depends on provider)')
    parser.add_argument('--base-url', type=str, metavar='URL', help='Provider API base URL')
    parser.add_argument('--api-key', type=str, metavar='KEY', help='Provider API key (prefer GITAI_API_KEY)')
    parser.add_argument('--timeout', type=int, metavar='SECONDS', help='Request timeout in seconds')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='gitai',
        description='Inspect a git working tree and draft commit messages with AI',
        epilog='Example: gitai generate (copies message to clipboard)'
    )
    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    subparsers.required = True

    status = subparsers.add_parser('status', help='Show staged, unstaged and untracked files')
    _add_repo_option(status)

    generate = subparsers.add_parser('generate', help='Generate a commit message from staged changes')
    _add_repo_option(generate)
    _add_provider_options(generate)
    generate.add_argument('--commit', action='store_true', help='Commit staged changes with the generated message')
    generate.add_argument('--no-copy', action='store_true', help='Print message only, do not copy to clipboard')
    generate.add_argument('--verbose', action='store_true', help='Show debug info (diff size, timings)')

    config = subparsers.add_parser('config', help='Show or change saved configuration')
    config.add_argument('--set', dest='assignments', action='append', default=[], metavar='KEY=VALUE',
                        help='Set a value (provider, api_key, base_url, model, timeout); repeatable')
    config.add_argument('--show', action='store_true', help='Show the current configuration (default without --set)')
    target = config.add_mutually_exclusive_group()
    target.add_argument('--local', action='store_true', help='Save to .gitairc in the current directory')
    target.add_argument('--global', dest='global_config', action='store_true', help='Save to .gitairc in the home directory')

    test = subparsers.add_parser('test-connection', help='Check provider settings with a tiny request')
    _add_provider_options(test)

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
