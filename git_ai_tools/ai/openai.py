"""ChatCompletion-style adapter (OpenAI and compatible servers)"""

from pydantic import BaseModel, Field

from git_ai_tools.ai.base import (
    MAX_TOKENS, SYSTEM_PROMPT, TEMPERATURE, USER_PROMPT_TEMPLATE,
    GenerationRequest, ProviderAdapter,
)


class _Message(BaseModel):
    content: str


class _Choice(BaseModel):
    message: _Message


class ChatCompletionResponse(BaseModel):
    choices: list[_Choice] = Field(min_length=1)


class ChatCompletionAdapter(ProviderAdapter):
    """POST {base}/chat/completions with a bearer token."""

    DEFAULT_MODEL = "gpt-4"
    DEFAULT_BASE_URL = "https://api.openai.com/v1"
    PATH = "/chat/completions"
    response_model = ChatCompletionResponse

    @property
    def name(self) -> str:
        return "OpenAI-compatible"

    def auth_headers(self, request: GenerationRequest) -> dict[str, str]:
        return {"Authorization": f"Bearer {request.api_key}"}

    def build_body(self, request: GenerationRequest, model: str) -> dict:
        return {
            "model": model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": USER_PROMPT_TEMPLATE.format(diff=request.diff)},
            ],
            "temperature": TEMPERATURE,
            "max_tokens": MAX_TOKENS,
        }

    def extract_text(self, response: ChatCompletionResponse) -> str:
        return response.choices[0].message.content
