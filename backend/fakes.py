from typing import List, Optional

from appbuilder.llm.client import Completion


class DummyClient:
    """Stands in for AnthropicClient; returns canned text or raises."""

    def __init__(self, text: str = "", error: Optional[Exception] = None) -> None:
        self.text = text
        self.error = error
        self.prompts: List[str] = []

    def generate(self, prompt: str) -> Completion:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return Completion(text=self.text)
