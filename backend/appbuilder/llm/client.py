import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from appbuilder.config import Settings
from appbuilder.errors import ConfigurationError, UpstreamError
from appbuilder.llm.prompt import build_messages


logger = logging.getLogger(__name__)

TEXT_PREVIEW = 200


@dataclass
class Completion:
    """Text of one Messages API response plus what we log about it."""
    text: str
    keys: List[str] = field(default_factory=list)
    usage: Dict[str, Any] = field(default_factory=dict)


def response_text(data: Dict[str, Any]) -> str:
    """Join the text blocks of a Messages API `content` array."""
    blocks = data.get("content") or []
    parts = []
    for block in blocks:
        if isinstance(block, dict) and block.get("type", "text") == "text":
            text = block.get("text")
            if isinstance(text, str):
                parts.append(text)
    return "".join(parts)


class AnthropicClient:
    def __init__(
        self,
        api_key: str,
        model: str,
        max_tokens: int,
        base_url: str,
        api_version: str,
        timeout: float = 300,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self.base_url = base_url.rstrip("/")
        self.api_version = api_version
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        session: Optional[requests.Session] = None,
    ) -> "AnthropicClient":
        return cls(
            api_key=settings.anthropic_api_key,
            model=settings.anthropic_model,
            max_tokens=settings.max_tokens,
            base_url=settings.anthropic_base_url,
            api_version=settings.anthropic_version,
            timeout=settings.request_timeout,
            session=session,
        )

    def close(self) -> None:
        """Close the HTTP session, unless the caller passed it in."""
        if self._owns_session:
            self.session.close()

    def generate(self, prompt: str) -> Completion:
        if not self.api_key:
            raise ConfigurationError(details="ANTHROPIC_API_KEY is not configured")

        payload = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": build_messages(prompt),
        }

        response = self.session.post(
            f"{self.base_url}/v1/messages",
            json=payload,
            headers={
                "Content-Type": "application/json",
                "x-api-key": self.api_key,
                "anthropic-version": self.api_version,
            },
            timeout=self.timeout,
        )

        if not response.ok:
            logger.error("Anthropic error: %s %s", response.status_code, response.text[:500])
            raise UpstreamError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as e:
            raise ValueError(f"Invalid JSON from API: {e}") from e

        if not isinstance(data, dict):
            data = {}

        completion = Completion(
            text=response_text(data),
            keys=list(data.keys()),
            usage=data.get("usage") or {},
        )

        logger.info("Anthropic API JSON keys: %s", completion.keys)
        if completion.usage:
            logger.info(
                "Tokens used: input=%s output=%s",
                completion.usage.get("input_tokens"),
                completion.usage.get("output_tokens"),
            )
        logger.info("Model text output (first %d chars): %s", TEXT_PREVIEW, completion.text[:TEXT_PREVIEW])

        return completion
