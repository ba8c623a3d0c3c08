"""Tests for the prompt relay service."""

import pytest

from fakes import DummyClient

from appbuilder.errors import InvalidJson, InvalidStructure, NoJsonFound, PromptRequired, UpstreamError
from appbuilder.service import AppGenerationService, chunk_code


def _service(dummy: DummyClient, settings) -> AppGenerationService:
    return AppGenerationService(settings, client=dummy)


def test_fenced_code_object_is_returned(settings) -> None:
    dummy = DummyClient('Here is the result:\n```json\n{"code":"console.log(1)"}\n```')

    assert _service(dummy, settings).generate("log one") == "console.log(1)"
    assert dummy.prompts == ["log one"]


def test_string_inside_array_is_rejected_as_structure(settings) -> None:
    dummy = DummyClient('["<h1>Hello</h1>"]')

    with pytest.raises(InvalidStructure):
        _service(dummy, settings).generate("hello page")


@pytest.mark.parametrize("prompt", ["", "   ", None, 5])
def test_blank_or_non_string_prompt_is_rejected(prompt, settings) -> None:
    dummy = DummyClient('{"code": "x"}')

    with pytest.raises(PromptRequired):
        _service(dummy, settings).generate(prompt)

    assert dummy.prompts == []


def test_text_without_json(settings) -> None:
    dummy = DummyClient("Sure, here's some HTML: <div>hi</div>")

    with pytest.raises(NoJsonFound) as exc_info:
        _service(dummy, settings).generate("a div")

    assert exc_info.value.raw == "Sure, here's some HTML: <div>hi</div>"


def test_invalid_json_candidate(settings) -> None:
    dummy = DummyClient("{code: `x`}")

    with pytest.raises(InvalidJson):
        _service(dummy, settings).generate("x")


def test_upstream_errors_propagate(settings) -> None:
    dummy = DummyClient(error=UpstreamError(401, "invalid x-api-key"))

    with pytest.raises(UpstreamError):
        _service(dummy, settings).generate("x")


def test_chunk_code_covers_whole_text() -> None:
    code = "abcdefghij"

    chunks = list(chunk_code(code, chunk_size=4))

    assert chunks == ["abcd", "efgh", "ij"]
    assert list(chunk_code("", chunk_size=4)) == []
