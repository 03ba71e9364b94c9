"""AI gateway exceptions."""


class AIError(Exception):
    """Base exception for commit message generation."""


class EmptyDiffError(AIError):
    """Raised when there is no diff to describe."""

    def __init__(self, message: str = "Diff is empty. Stage some changes first."):
        super().__init__(message)


class ConfigError(AIError):
    """Base exception for an unusable provider configuration."""


class ProviderRequiredError(ConfigError):
    """Raised when no provider is configured."""

    def __init__(self, message: str = "Provider must be specified"):
        super().__init__(message)


class UnsupportedProviderError(ConfigError):
    """Raised for a provider name outside the known set."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Unsupported AI provider: {provider}")


class MissingCredentialError(ConfigError):
    """Raised when a provider that needs an API key has none."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"API key is required for {provider}")


class ProviderHTTPError(AIError):
    """Raised when the provider answers with a non-2xx status."""

    SNIPPET_LENGTH = 500

    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body[:self.SNIPPET_LENGTH]
        super().__init__(f"API error (status {status}): {self.body}")


class ProviderConnectionError(AIError):
    """Raised when the provider cannot be reached or times out."""


class MalformedResponseError(AIError):
    """Raised when a response body does not have the expected shape."""
