"""
Unit tests for AIGateway and configuration validation.

Uses httpx.MockTransport, no network access. Run with:
    pytest tests/test_gateway.py -v
"""

import json
import threading

import httpx
import pytest

from git_ai_tools.ai import (
    AIConfig,
    AIGateway,
    EmptyDiffError,
    MalformedResponseError,
    MissingCredentialError,
    Provider,
    ProviderConnectionError,
    ProviderHTTPError,
    ProviderRequiredError,
    UnsupportedProviderError,
    validate_config,
)

DIFF = "\n=== app.py ===\ndiff --git a/app.py b/app.py\n+print('hello')\n"

REPLIES = {
    "openai": {"choices": [{"message": {"role": "assistant", "content": "feat(app): greet on start\n"}}]},
    "claude": {"content": [{"type": "text", "text": "feat(app): greet on start"}]},
    "ollama": {"response": "  feat(app): greet on start  ", "done": True},
}


class RecordingTransport:
    """Call-counting stand-in for the provider HTTP server."""

    def __init__(self, status_code=200, payload=None, raw=None, exc=None):
        self.status_code = status_code
        self.payload = payload
        self.raw = raw
        self.exc = exc
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.raw is not None:
            return httpx.Response(self.status_code, text=self.raw)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def last_body(self) -> dict:
        return json.loads(self.requests[-1].content)


def make_gateway(config, handler):
    return AIGateway(config, timeout=5, transport=httpx.MockTransport(handler))


# ---------------------------------------------------------------------------
# validate_config
# ---------------------------------------------------------------------------

class TestValidateConfig:

    def test_ollama_without_key_is_valid(self):
        assert validate_config(AIConfig(provider="ollama", api_key="")) is None

    @pytest.mark.parametrize("provider", ["openai", "claude"])
    def test_hosted_provider_without_key_fails(self, provider):
        with pytest.raises(MissingCredentialError, match=f"API key is required for {provider}"):
            validate_config(AIConfig(provider=provider, api_key=""))

    def test_whitespace_key_counts_as_missing(self):
        with pytest.raises(MissingCredentialError):
            validate_config(AIConfig(provider="openai", api_key="   "))

    @pytest.mark.parametrize("provider", ["", "  "])
    def test_empty_provider(self, provider):
        with pytest.raises(ProviderRequiredError):
            validate_config(AIConfig(provider=provider, api_key="sk-test"))

    def test_unknown_provider(self):
        with pytest.raises(UnsupportedProviderError, match="gemini"):
            validate_config(AIConfig(provider="gemini", api_key="sk-test"))

    def test_unknown_provider_reported_before_missing_key(self):
        with pytest.raises(UnsupportedProviderError):
            validate_config(AIConfig(provider="gemini", api_key=""))

    def test_provider_names_are_case_insensitive(self):
        validate_config(AIConfig(provider="Claude", api_key="sk-test"))


# ---------------------------------------------------------------------------
# AIGateway: held configuration
# ---------------------------------------------------------------------------

class TestGatewayConfig:

    def test_default_config(self):
        with AIGateway() as gateway:
            assert gateway.config.provider == Provider.OPENAI.value

    def test_set_config_replaces_held_config(self):
        new = AIConfig(provider="ollama")
        with AIGateway() as gateway:
            gateway.set_config(new)
            assert gateway.config == new

    def test_validate_uses_held_config(self):
        with AIGateway(AIConfig(provider="openai", api_key="")) as gateway:
            with pytest.raises(MissingCredentialError):
                gateway.validate()

    def test_validate_candidate_does_not_mutate(self):
        held = AIConfig(provider="ollama")
        with AIGateway(held) as gateway:
            with pytest.raises(MissingCredentialError):
                gateway.validate(AIConfig(provider="claude", api_key=""))
            assert gateway.config is held
            gateway.validate()

    def test_concurrent_set_config(self):
        gateway = AIGateway()
        configs = [AIConfig(provider="ollama", model=f"m{i}") for i in range(20)]
        threads = [threading.Thread(target=gateway.set_config, args=(c,)) for c in configs]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert gateway.config in configs
        gateway.close()


# ---------------------------------------------------------------------------
# AIGateway: generate_commit_message
# ---------------------------------------------------------------------------

class TestGenerateCommitMessage:

    @pytest.mark.parametrize("diff", ["", "   ", "\n\t\n"])
    @pytest.mark.parametrize("provider", ["openai", "claude", "ollama", "", "gemini"])
    def test_empty_diff_never_calls_network(self, diff, provider):
        transport = RecordingTransport(payload=REPLIES["openai"])
        gateway = make_gateway(AIConfig(provider=provider, api_key=""), transport)
        with pytest.raises(EmptyDiffError):
            gateway.generate_commit_message(diff)
        assert transport.calls == 0

    @pytest.mark.parametrize("provider, api_key, url", [
        ("openai", "sk-test", "https://api.openai.com/v1/chat/completions"),
        ("claude", "sk-ant", "https://api.anthropic.com/v1/messages"),
        ("ollama", "", "http://localhost:11434/api/generate"),
    ])
    def test_round_trip(self, provider, api_key, url):
        transport = RecordingTransport(payload=REPLIES[provider])
        gateway = make_gateway(AIConfig(provider=provider, api_key=api_key), transport)

        message = gateway.generate_commit_message(DIFF)

        assert message == "feat(app): greet on start"
        assert transport.calls == 1
        request = transport.requests[0]
        assert request.method == "POST"
        assert str(request.url) == url
        assert request.headers["content-type"] == "application/json"

    def test_openai_headers_and_body(self):
        transport = RecordingTransport(payload=REPLIES["openai"])
        gateway = make_gateway(AIConfig(provider="openai", api_key="sk-test"), transport)
        gateway.generate_commit_message(DIFF)

        request = transport.requests[0]
        assert request.headers["authorization"] == "Bearer sk-test"
        body = transport.last_body
        assert body["model"] == "gpt-4"
        assert DIFF in body["messages"][1]["content"]

    def test_claude_headers(self):
        transport = RecordingTransport(payload=REPLIES["claude"])
        gateway = make_gateway(AIConfig(provider="claude", api_key="sk-ant"), transport)
        gateway.generate_commit_message(DIFF)

        request = transport.requests[0]
        assert request.headers["x-api-key"] == "sk-ant"
        assert request.headers["anthropic-version"] == "2023-06-01"
        assert "authorization" not in request.headers
        assert transport.last_body["model"] == "claude-3-sonnet-20240229"

    def test_ollama_sends_no_auth(self):
        transport = RecordingTransport(payload=REPLIES["ollama"])
        gateway = make_gateway(AIConfig(provider="ollama"), transport)
        gateway.generate_commit_message(DIFF)

        request = transport.requests[0]
        assert "authorization" not in request.headers
        assert "x-api-key" not in request.headers
        assert transport.last_body["stream"] is False
        assert DIFF in transport.last_body["prompt"]

    def test_custom_base_url_and_model(self):
        transport = RecordingTransport(payload=REPLIES["ollama"])
        config = AIConfig(provider="ollama", base_url="http://gpu-box:11434/", model="qwen2.5-coder:7b")
        gateway = make_gateway(config, transport)
        gateway.generate_commit_message(DIFF)

        assert str(transport.requests[0].url) == "http://gpu-box:11434/api/generate"
        assert transport.last_body["model"] == "qwen2.5-coder:7b"

    def test_explicit_config_is_not_stored(self):
        transport = RecordingTransport(payload=REPLIES["claude"])
        held = AIConfig(provider="openai", api_key="sk-held")
        gateway = make_gateway(held, transport)

        gateway.generate_commit_message(DIFF, AIConfig(provider="claude", api_key="sk-ant"))

        assert str(transport.requests[0].url).endswith("/messages")
        assert gateway.config is held

    def test_missing_key_fails_before_network(self):
        transport = RecordingTransport(payload=REPLIES["openai"])
        gateway = make_gateway(AIConfig(provider="openai", api_key=""), transport)
        with pytest.raises(MissingCredentialError):
            gateway.generate_commit_message(DIFF)
        assert transport.calls == 0

    @pytest.mark.parametrize("provider, expected", [
        ("", ProviderRequiredError),
        ("gemini", UnsupportedProviderError),
    ])
    def test_bad_provider_fails_before_network(self, provider, expected):
        transport = RecordingTransport(payload=REPLIES["openai"])
        gateway = make_gateway(AIConfig(provider=provider, api_key="sk-test"), transport)
        with pytest.raises(expected):
            gateway.generate_commit_message(DIFF)
        assert transport.calls == 0

    @pytest.mark.parametrize("provider", ["openai", "claude", "ollama"])
    def test_server_error(self, provider):
        transport = RecordingTransport(status_code=500, raw="internal error")
        gateway = make_gateway(AIConfig(provider=provider, api_key="sk-test"), transport)

        with pytest.raises(ProviderHTTPError) as exc_info:
            gateway.generate_commit_message(DIFF)

        assert exc_info.value.status == 500
        assert exc_info.value.body == "internal error"
        assert transport.calls == 1

    def test_unauthorized_is_not_retried(self):
        transport = RecordingTransport(status_code=401, payload={"error": {"message": "bad key"}})
        gateway = make_gateway(AIConfig(provider="openai", api_key="sk-wrong"), transport)
        with pytest.raises(ProviderHTTPError, match="status 401"):
            gateway.generate_commit_message(DIFF)
        assert transport.calls == 1

    @pytest.mark.parametrize("provider, payload", [
        ("openai", {"choices": [{"finish_reason": "stop"}]}),
        ("claude", {"type": "message", "content": []}),
        ("ollama", {"done": True}),
    ])
    def test_missing_field_is_malformed(self, provider, payload):
        transport = RecordingTransport(payload=payload)
        gateway = make_gateway(AIConfig(provider=provider, api_key="sk-test"), transport)
        with pytest.raises(MalformedResponseError):
            gateway.generate_commit_message(DIFF)

    def test_timeout_is_connection_error(self):
        transport = RecordingTransport(exc=httpx.ReadTimeout("timed out"))
        gateway = make_gateway(AIConfig(provider="ollama"), transport)
        with pytest.raises(ProviderConnectionError, match="timed out after 5s"):
            gateway.generate_commit_message(DIFF)

    def test_connection_refused_is_connection_error(self):
        transport = RecordingTransport(exc=httpx.ConnectError("connection refused"))
        gateway = make_gateway(AIConfig(provider="ollama"), transport)
        with pytest.raises(ProviderConnectionError, match="Failed to reach Ollama"):
            gateway.generate_commit_message(DIFF)


# ---------------------------------------------------------------------------
# AIGateway: test_connection
# ---------------------------------------------------------------------------

class TestConnectionCheck:

    def test_uses_candidate_without_storing(self):
        transport = RecordingTransport(payload=REPLIES["ollama"])
        held = AIConfig(provider="openai", api_key="sk-held")
        gateway = make_gateway(held, transport)

        reply = gateway.test_connection(AIConfig(provider="ollama"))

        assert reply == "feat(app): greet on start"
        assert transport.calls == 1
        assert gateway.config is held

    def test_invalid_candidate_skips_network(self):
        transport = RecordingTransport(payload=REPLIES["openai"])
        gateway = make_gateway(AIConfig(provider="ollama"), transport)
        with pytest.raises(MissingCredentialError):
            gateway.test_connection(AIConfig(provider="openai", api_key=""))
        assert transport.calls == 0
