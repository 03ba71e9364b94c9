"""Messages-style adapter (Anthropic Claude and compatible servers)"""

from pydantic import BaseModel, Field

from git_ai_tools.ai.base import (
    MAX_TOKENS, SYSTEM_PROMPT, USER_PROMPT_TEMPLATE,
    GenerationRequest, ProviderAdapter,
)


class _ContentBlock(BaseModel):
    type: str = "text"
    text: str


class MessagesResponse(BaseModel):
    content: list[_ContentBlock] = Field(min_length=1)


class MessagesAdapter(ProviderAdapter):
    """POST {base}/messages with an x-api-key header."""

    DEFAULT_MODEL = "claude-3-sonnet-20240229"
    DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
    PATH = "/messages"
    API_VERSION = "2023-06-01"
    response_model = MessagesResponse

    @property
    def name(self) -> str:
        return "Claude-compatible"

    def auth_headers(self, request: GenerationRequest) -> dict[str, str]:
        return {
            "x-api-key": request.api_key,
            "anthropic-version": self.API_VERSION,
        }

    def build_body(self, request: GenerationRequest, model: str) -> dict:
        return {
            "model": model,
            "max_tokens": MAX_TOKENS,
            "system": SYSTEM_PROMPT,
            "messages": [
                {"role": "user", "content": USER_PROMPT_TEMPLATE.format(diff=request.diff)},
            ],
        }

    def extract_text(self, response: MessagesResponse) -> str:
        return response.content[0].text
