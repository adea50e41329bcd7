"""
Client for the local model server (Ollama).

Completions go through the openai SDK against the server's OpenAI-compatible
/v1 endpoint. Model listing uses the native /api/tags endpoint, which also
reports size and digest.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional
import requests
from openai import OpenAI, APIError
from story_drafter.config import settings
from story_drafter.models.llm import ModelInfo

logger = logging.getLogger(__name__)

FALLBACK_MODEL_NAME = "deepseek-r1:14b"
FALLBACK_MODEL_SIZE = 14_000_000_000


class LLMClientError(Exception):
    """Raised when a model call fails."""
    pass


class LLMClient:
    """Thin wrapper around the local model server."""

    def __init__(self, base_url: Optional[str] = None, client: Optional[OpenAI] = None):
        """
        Args:
            base_url: Model server root URL (default: settings.ollama_base_url)
            client: Pre-built OpenAI client, mainly for tests
        """
        self.base_url = (base_url or settings.ollama_base_url).rstrip("/")
        self._client = client

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            # Ollama ignores the key but the SDK requires one
            self._client = OpenAI(
                base_url=f"{self.base_url}/v1",
                api_key="ollama",
                timeout=settings.llm_timeout_seconds,
            )
        return self._client

    def generate_completion(self, model: str, prompt: str) -> str:
        """
        Run a single non-streaming completion.

        Args:
            model: Model name on the server (e.g. "deepseek-r1:14b")
            prompt: Full prompt text

        Returns:
            Completion text ("" if the server returned no content)

        Raises:
            LLMClientError: If the server call fails
        """
        try:
            response = self.client.chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": prompt}],
                temperature=settings.llm_temperature,
                top_p=settings.llm_top_p,
                max_tokens=settings.llm_max_tokens,
            )
        except APIError as e:
            logger.error("Error generating completion with model %s: %s", model, str(e))
            raise LLMClientError(f"Failed to generate completion: {str(e)}") from e

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    def list_models(self) -> List[ModelInfo]:
        """
        List models available on the server.

        Returns:
            Available models; a single fallback model if the server is unreachable
        """
        try:
            response = requests.get(f"{self.base_url}/api/tags", timeout=10)
            response.raise_for_status()
            data = response.json()
            return [ModelInfo(**model) for model in data.get("models") or []]
        except (requests.RequestException, ValueError) as e:
            logger.error("Error fetching models from %s: %s", self.base_url, str(e))
            return [
                ModelInfo(
                    name=FALLBACK_MODEL_NAME,
                    size=FALLBACK_MODEL_SIZE,
                    digest="default",
                    modified_at=datetime.now(timezone.utc).isoformat(),
                )
            ]
