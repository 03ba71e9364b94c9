"""CLI Utility Functions"""

import subprocess
import sys
from dataclasses import replace

from git_ai_tools.config import Config, load_config

CLI_OVERRIDES = ("provider", "model", "base_url", "api_key", "timeout")


def resolve_config(args) -> Config:
    """Resolve settings for this run.

    Precedence: CLI args > environment variables > config file
    """
    config = replace(load_config())
    config.apply_env()
    for key in CLI_OVERRIDES:
        value = getattr(args, key, None)
        if value is not None:
            setattr(config, key, value)
    config.validate()
    return config


def mask_secret(value: str) -> str:
    """Show only the last four characters of an API key."""
    if not value:
        return "(not set)"
    if len(value) <= 8:
        return "*" * len(value)
    return f"{'*' * 8}{value[-4:]}"


def copy_to_clipboard(text: str) -> tuple[bool, str]:
    """Copy text to clipboard. Returns (success, failure_reason)."""
    try:
        if sys.platform == 'win32':
            subprocess.run(['clip'], input=text.encode('utf-8'), check=True)
        elif sys.platform == 'darwin':
            subprocess.run(['pbcopy'], input=text.encode('utf-8'), check=True)
        else:
            try:
                subprocess.run(['xclip', '-selection', 'clipboard'], input=text.encode('utf-8'), check=True)
            except FileNotFoundError:
                subprocess.run(['xsel', '--clipboard', '--input'], input=text.encode('utf-8'), check=True)
        return True, ""
    except FileNotFoundError:
        if sys.platform.startswith('linux'):
            return False, "Install xclip or xsel: sudo apt install xclip"
        return False, "No clipboard tool found"
    except (subprocess.CalledProcessError, OSError) as e:
        return False, f"Clipboard command failed: {e}"
