"""Relay a prompt to the model and pull generated code out of its answer."""

import logging
from typing import Any, Iterator, Optional

from appbuilder.config import Settings, get_settings
from appbuilder.errors import PromptRequired
from appbuilder.llm.client import AnthropicClient
from appbuilder.llm.parser import classify_payload, payload_code
from appbuilder.utils.json_extract import extract_json


logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 512


class AppGenerationService:
    """One blocking model call per prompt; no state kept between calls."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        client: Any = None,
    ):
        self.settings = settings or get_settings()
        self.client = client or AnthropicClient.from_settings(self.settings)

    def generate(self, prompt: Any) -> str:
        if not isinstance(prompt, str) or not prompt.strip():
            raise PromptRequired()

        logger.info("Prompt received (%d chars)", len(prompt))
        completion = self.client.generate(prompt)

        parsed = extract_json(completion.text)
        payload = classify_payload(parsed)
        return payload_code(payload)

    def close(self) -> None:
        close = getattr(self.client, "close", None)
        if close is not None:
            close()


def chunk_code(code: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[str]:
    """Slice generated code into partial chunks for streaming."""
    for i in range(0, len(code), chunk_size):
        yield code[i:i + chunk_size]
