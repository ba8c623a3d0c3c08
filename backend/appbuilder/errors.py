"""
Error kinds raised while turning a prompt into generated code.

Each error knows the HTTP status it maps to and how to render itself as the
JSON body returned to the client. All of them are terminal for the request.
"""

from typing import Any, Dict, Optional


PREVIEW_LIMIT = 500


def preview(text: str, limit: int = PREVIEW_LIMIT) -> str:
    return text[:limit] if text else ""


class GenerationError(Exception):
    """Base class for failures surfaced to the API client."""

    status_code: int = 500
    error: str = "generation_failed"

    def __init__(
        self,
        error: Optional[str] = None,
        *,
        details: Optional[str] = None,
        raw: Optional[str] = None,
        candidate: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        if error is not None:
            self.error = error
        if status_code is not None:
            self.status_code = status_code
        self.details = details
        self.raw = raw
        self.candidate = candidate
        super().__init__(details or self.error)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        if self.raw is not None:
            body["raw"] = self.raw
        if self.candidate is not None:
            body["candidate"] = self.candidate
        return body


class PromptRequired(GenerationError):
    status_code = 400
    error = "prompt required"


class BodyTooLarge(GenerationError):
    status_code = 413
    error = "request body too large"


class ConfigurationError(GenerationError):
    status_code = 500
    error = "configuration_error"


class UpstreamError(GenerationError):
    """The LLM API answered with a non-success status."""

    status_code = 502

    def __init__(self, upstream_status: int, body: str = ""):
        self.upstream_status = upstream_status
        super().__init__(
            f"Anthropic API error: {upstream_status}",
            details=preview(body),
        )


class NoJsonFound(GenerationError, ValueError):
    status_code = 500
    error = "no_json_found"


class InvalidJson(GenerationError, ValueError):
    status_code = 500
    error = "invalid_json"


class InvalidStructure(GenerationError, ValueError):
    status_code = 422
    error = "invalid_structure"
