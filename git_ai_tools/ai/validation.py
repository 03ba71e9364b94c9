"""Provider configuration validation."""

from git_ai_tools.ai.base import AIConfig, Provider
from git_ai_tools.ai.errors import MissingCredentialError, ProviderRequiredError, UnsupportedProviderError


def parse_provider(name: str) -> Provider:
    """Map a configured provider name to a Provider, or raise."""
    name = (name or "").strip()
    if not name:
        raise ProviderRequiredError()
    try:
        return Provider(name.lower())
    except ValueError:
        raise UnsupportedProviderError(name) from None


def validate_config(config: AIConfig) -> None:
    """
    Raise if `config` cannot be used to generate a message.

    Has no side effects, so it is safe for checking a candidate
    configuration before it is saved or tried.
    """
    provider = parse_provider(config.provider)
    if provider.requires_api_key and not config.api_key.strip():
        raise MissingCredentialError(provider.value)
