"""AI Gateway - One entry point for commit message generation across providers."""

import threading

import httpx

from git_ai_tools.ai.base import AIConfig, GenerationRequest, Provider, ProviderAdapter
from git_ai_tools.ai.claude import MessagesAdapter
from git_ai_tools.ai.errors import EmptyDiffError, ProviderConnectionError
from git_ai_tools.ai.ollama import LocalGenerateAdapter
from git_ai_tools.ai.openai import ChatCompletionAdapter
from git_ai_tools.ai.validation import parse_provider, validate_config

ADAPTERS: dict[Provider, type[ProviderAdapter]] = {
    Provider.OPENAI: ChatCompletionAdapter,
    Provider.CLAUDE: MessagesAdapter,
    Provider.OLLAMA: LocalGenerateAdapter,
}

DEFAULT_TIMEOUT = 60.0

# Small diff used to check that a provider answers at all
CONNECTION_TEST_DIFF = """diff --git a/README.md b/README.md
--- a/README.md
+++ b/README.md
@@ -1 +1,2 @@
 # Project
+Connection test.
"""


def get_adapter(provider: Provider) -> ProviderAdapter:
    return ADAPTERS[provider]()


class AIGateway:
    """
    Holds the active provider configuration and performs one HTTP
    exchange per generation. No retries; callers add their own policy.

    The held configuration is replaced atomically under a lock. A
    generation call snapshots it first, so a concurrent `set_config`
    never changes a request already in flight.
    """

    def __init__(
        self,
        config: AIConfig | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        self._config = config or AIConfig()
        self._lock = threading.Lock()
        self.timeout = timeout
        self._client = httpx.Client(timeout=timeout, transport=transport)

    @property
    def config(self) -> AIConfig:
        with self._lock:
            return self._config

    def set_config(self, config: AIConfig) -> None:
        with self._lock:
            self._config = config

    def validate(self, config: AIConfig | None = None) -> None:
        """Validate `config`, or the held configuration when omitted."""
        validate_config(config if config is not None else self.config)

    def build_request(self, diff: str, config: AIConfig | None = None) -> GenerationRequest:
        """Check the diff and configuration and pin down the provider."""
        if not diff.strip():
            raise EmptyDiffError()

        config = config if config is not None else self.config
        validate_config(config)

        return GenerationRequest(
            diff=diff,
            provider=parse_provider(config.provider),
            base_url=config.base_url.strip(),
            api_key=config.api_key.strip(),
            model=config.model.strip(),
        )

    def generate_commit_message(self, diff: str, config: AIConfig | None = None) -> str:
        """
        Generate a commit message for `diff`.

        Uses the held configuration unless `config` is given; a supplied
        configuration is used for this call only and is not stored.
        """
        request = self.build_request(diff, config)
        return self._send(request)

    def test_connection(self, config: AIConfig) -> str:
        """Try a candidate configuration with a tiny diff, without keeping it."""
        return self.generate_commit_message(CONNECTION_TEST_DIFF, config)

    def _send(self, request: GenerationRequest) -> str:
        adapter = get_adapter(request.provider)
        outgoing = adapter.build_request(request)

        try:
            response = self._client.post(outgoing.url, headers=outgoing.headers, json=outgoing.body)
        except httpx.TimeoutException as e:
            raise ProviderConnectionError(
                f"Request to {adapter.name} timed out after {self.timeout:g}s"
            ) from e
        except httpx.InvalidURL as e:
            raise ProviderConnectionError(f"Invalid base URL '{outgoing.url}': {e}") from e
        except httpx.TransportError as e:
            raise ProviderConnectionError(f"Failed to reach {adapter.name} at {outgoing.url}: {e}") from e

        return adapter.parse_response(response.status_code, response.content)

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
