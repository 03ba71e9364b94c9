"""Provider Adapter Base Classes and Shared Code"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ValidationError

from git_ai_tools import COMMIT_TYPE_NAMES
from git_ai_tools.ai.errors import MalformedResponseError, ProviderHTTPError


SYSTEM_PROMPT = f"""You are a helpful assistant that generates concise and clear git commit messages following the Conventional Commits specification.

Analyze the git diff and generate a single commit message that:
1. Starts with a type ({', '.join(COMMIT_TYPE_NAMES)})
2. Followed by a short description (max 72 characters)
3. Optionally includes a more detailed body paragraph
4. Uses imperative mood ("add" not "added" or "adds")
5. Is clear and specific about what changed

Return ONLY the commit message, no explanations or additional text."""

USER_PROMPT_TEMPLATE = "Generate a commit message for this diff:\n\n{diff}"

MAX_TOKENS = 200
TEMPERATURE = 0.3


class Provider(str, Enum):
    """Provider identifiers, as stored in configuration."""
    OPENAI = "openai"
    CLAUDE = "claude"
    OLLAMA = "ollama"

    @property
    def requires_api_key(self) -> bool:
        return self is not Provider.OLLAMA


@dataclass(frozen=True)
class AIConfig:
    """
    Provider settings held by the gateway.

    `provider` stays a plain string so an empty or unknown value can reach
    validation and be rejected there.
    """
    provider: str = Provider.OPENAI.value
    api_key: str = ""
    base_url: str = ""
    model: str = ""


@dataclass(frozen=True)
class GenerationRequest:
    """A validated, single-use request for one commit message."""
    diff: str
    provider: Provider
    base_url: str = ""
    api_key: str = ""
    model: str = ""


@dataclass(frozen=True)
class ProviderRequest:
    """Everything needed to POST to a provider."""
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: dict = field(default_factory=dict)


class ProviderAdapter(ABC):
    """
    Translates a GenerationRequest into one provider's wire format and
    extracts the generated text from its reply.
    """

    DEFAULT_MODEL: str = ""
    DEFAULT_BASE_URL: str = ""
    PATH: str = ""
    response_model: type[BaseModel]

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable provider name."""
        pass

    def resolve_model(self, request: GenerationRequest) -> str:
        return request.model or self.DEFAULT_MODEL

    def resolve_base_url(self, request: GenerationRequest) -> str:
        return (request.base_url or self.DEFAULT_BASE_URL).rstrip('/')

    def auth_headers(self, request: GenerationRequest) -> dict[str, str]:
        return {}

    @abstractmethod
    def build_body(self, request: GenerationRequest, model: str) -> dict:
        pass

    @abstractmethod
    def extract_text(self, response) -> str:
        """Pull the generated text out of a validated response model."""
        pass

    def build_request(self, request: GenerationRequest) -> ProviderRequest:
        headers = {"Content-Type": "application/json"}
        headers.update(self.auth_headers(request))
        return ProviderRequest(
            url=f"{self.resolve_base_url(request)}{self.PATH}",
            headers=headers,
            body=self.build_body(request, self.resolve_model(request)),
        )

    def parse_response(self, status_code: int, body: str | bytes) -> str:
        """Return the trimmed generated text or raise a typed error."""
        if isinstance(body, bytes):
            body = body.decode('utf-8', errors='replace')

        if not 200 <= status_code < 300:
            raise ProviderHTTPError(status_code, body)

        try:
            parsed = self.response_model.model_validate_json(body)
        except ValidationError as e:
            raise MalformedResponseError(
                f"Unexpected response from {self.name}: {e.errors()[0]['msg']}"
            ) from e

        text = self.extract_text(parsed).strip()
        if not text:
            raise MalformedResponseError(f"Empty response from {self.name}")
        return text
