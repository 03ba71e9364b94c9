"""AI Provider Package"""

from git_ai_tools.ai.base import (
    SYSTEM_PROMPT,
    AIConfig,
    GenerationRequest,
    Provider,
    ProviderAdapter,
    ProviderRequest,
)
from git_ai_tools.ai.claude import MessagesAdapter
from git_ai_tools.ai.errors import (
    AIError,
    ConfigError,
    EmptyDiffError,
    MalformedResponseError,
    MissingCredentialError,
    ProviderConnectionError,
    ProviderHTTPError,
    ProviderRequiredError,
    UnsupportedProviderError,
)
from git_ai_tools.ai.gateway import ADAPTERS, AIGateway, get_adapter
from git_ai_tools.ai.ollama import LocalGenerateAdapter
from git_ai_tools.ai.openai import ChatCompletionAdapter
from git_ai_tools.ai.validation import parse_provider, validate_config

__all__ = [
    "SYSTEM_PROMPT",
    "AIConfig",
    "GenerationRequest",
    "Provider",
    "ProviderAdapter",
    "ProviderRequest",
    "ChatCompletionAdapter",
    "MessagesAdapter",
    "LocalGenerateAdapter",
    "ADAPTERS",
    "AIGateway",
    "get_adapter",
    "parse_provider",
    "validate_config",
    "AIError",
    "ConfigError",
    "EmptyDiffError",
    "MalformedResponseError",
    "MissingCredentialError",
    "ProviderConnectionError",
    "ProviderHTTPError",
    "ProviderRequiredError",
    "UnsupportedProviderError",
]
