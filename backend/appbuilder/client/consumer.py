"""
Client side of the streaming endpoint.

Reads a newline-delimited JSON body chunk by chunk and keeps a display
state up to date: partial lines append code, a final line replaces it,
and the first error line wins. Lines that are not JSON objects are
skipped with a warning.
"""

import codecs
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

import requests


logger = logging.getLogger(__name__)

STREAM_PATH = "/api/generate-app/stream"


@dataclass
class DisplayState:
    code: str = ""
    error: str = ""
    partial: bool = False


class StreamConsumer:
    def __init__(self, state: Optional[DisplayState] = None):
        self.state = state or DisplayState()
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""

    def feed(self, chunk: bytes) -> DisplayState:
        self._buffer += self._decoder.decode(chunk)
        parts = self._buffer.split("\n")
        # keep last incomplete part
        self._buffer = parts.pop()
        for part in parts:
            self.apply_line(part)
        return self.state

    def close(self) -> DisplayState:
        self._buffer += self._decoder.decode(b"", final=True)
        rest, self._buffer = self._buffer, ""
        self.apply_line(rest)
        return self.state

    def apply_line(self, line: str) -> None:
        if not line.strip():
            return

        try:
            message = json.loads(line)
        except json.JSONDecodeError:
            logger.warning("Non-JSON chunk: %s", line)
            return

        if not isinstance(message, dict):
            logger.warning("Unexpected chunk: %s", line)
            return

        self._apply(message)

    def _apply(self, message: Dict[str, Any]) -> None:
        code = message.get("code")
        if message.get("partial"):
            self.state.code += code if isinstance(code, str) else ""
            self.state.partial = True
        elif code:
            self.state.code = str(code)
            self.state.partial = False

        error = message.get("error")
        if error and not self.state.error:
            self.state.error = str(error)


def consume_stream(chunks: Iterable[bytes]) -> DisplayState:
    consumer = StreamConsumer()
    for chunk in chunks:
        if chunk:
            consumer.feed(chunk)
    return consumer.close()


def generate_app(
    prompt: str,
    base_url: str,
    *,
    timeout: Optional[float] = None,
    session: Optional[requests.Session] = None,
) -> DisplayState:
    """Post a prompt to the streaming endpoint and collect the result."""
    http = session or requests.Session()
    try:
        with http.post(
            f"{base_url.rstrip('/')}{STREAM_PATH}",
            json={"prompt": prompt},
            stream=True,
            timeout=timeout,
        ) as response:
            return consume_stream(response.iter_content(chunk_size=None))
    except requests.RequestException as e:
        logger.error("Error generating app: %s", e)
        return DisplayState(error=str(e))
    finally:
        if session is None:
            http.close()
