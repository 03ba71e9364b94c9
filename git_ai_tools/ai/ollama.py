"""Local generate adapter (Ollama)"""

from pydantic import BaseModel

from git_ai_tools.ai.base import SYSTEM_PROMPT, GenerationRequest, ProviderAdapter


class GenerateResponse(BaseModel):
    response: str


class LocalGenerateAdapter(ProviderAdapter):
    """
    POST {base}/api/generate, no authentication.

    The endpoint takes a single prompt string, so the system instruction
    and the diff are sent together. Streaming is turned off to get one
    JSON object back.
    """

    DEFAULT_MODEL = "llama2"
    DEFAULT_BASE_URL = "http://localhost:11434"
    PATH = "/api/generate"
    response_model = GenerateResponse

    @property
    def name(self) -> str:
        return "Ollama"

    def build_prompt(self, diff: str) -> str:
        return f"{SYSTEM_PROMPT}\n\nDiff:\n{diff}\n\nCommit message:"

    def build_body(self, request: GenerationRequest, model: str) -> dict:
        return {
            "model": model,
            "prompt": self.build_prompt(request.diff),
            "stream": False,
        }

    def extract_text(self, response: GenerateResponse) -> str:
        return response.response
