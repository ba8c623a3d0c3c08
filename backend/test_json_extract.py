"""Tests for pulling JSON out of free-form model text."""

import json

import pytest

from appbuilder.errors import InvalidJson, NoJsonFound
from appbuilder.utils.json_extract import (
    extract_json,
    extract_json_string,
    strip_code_fences,
)


def test_fenced_object_is_returned_exactly() -> None:
    text = 'Here is the result:\n```json\n{"code":"console.log(1)"}\n```'

    assert extract_json_string(text) == '{"code":"console.log(1)"}'


def test_text_without_brackets_is_not_found() -> None:
    assert extract_json_string("Sure, here's some HTML: <div>hi</div>") is None


def test_unterminated_object_is_not_found() -> None:
    assert extract_json_string('{"code": "console.log(1)"') is None
    assert extract_json_string('prefix {"a": {"b": 1}') is None


@pytest.mark.parametrize("value", [None, "", 42, ["{}"]])
def test_non_text_input_is_not_found(value) -> None:
    assert extract_json_string(value) is None


def test_prose_before_and_after_is_ignored() -> None:
    text = 'Okay! {"code": "x = 1"} Let me know if you need more.'

    assert extract_json_string(text) == '{"code": "x = 1"}'


def test_braces_and_quotes_inside_strings_do_not_change_depth() -> None:
    obj = {"code": 'function f() { return "}"; } // it\'s {fine}'}
    text = "Result: " + json.dumps(obj) + " trailing }"

    candidate = extract_json_string(text)

    assert candidate == json.dumps(obj)
    assert json.loads(candidate) == obj


def test_escaped_backslash_before_closing_quote() -> None:
    text = r'{"path": "C:\\", "code": "ok"} extra'

    assert extract_json_string(text) == r'{"path": "C:\\", "code": "ok"}'


def test_array_wins_when_it_opens_first() -> None:
    text = 'list: [1, {"a": 2}, 3] and then {"b": 4}'

    assert extract_json_string(text) == '[1, {"a": 2}, 3]'


def test_only_first_of_several_objects_is_returned() -> None:
    assert extract_json_string('{"a": 1}{"b": 2}') == '{"a": 1}'


def test_byte_order_mark_is_stripped() -> None:
    assert strip_code_fences('\ufeff{"code": "a"}') == '{"code": "a"}'
    assert extract_json_string('\ufeff{"code": "a"}') == '{"code": "a"}'


def test_fences_with_other_languages_are_unwrapped() -> None:
    text = "```HTML\n<p>{not json</p>\n```\n```javascript\n[1, 2]\n```"

    assert strip_code_fences(text) == "<p>{not json</p>\n\n[1, 2]\n"


def test_fence_markers_inside_string_values_are_stripped_too() -> None:
    text = "```json\n{\"code\": \"```js\\nx\\n```\"}\n```"

    assert extract_json(text) == {"code": "js\nx\n"}


def test_extract_then_parse_round_trips_original_value() -> None:
    original = {
        "code": "<html>\n  <body>\"hi\" {{ name }}</body>\n</html>",
        "files": [{"name": "index.html", "size": 42}, None, True],
        "nested": {"deep": {"deeper": [1.5, -2, "]"]}},
    }
    text = (
        "Sure! Here is your app:\n```json\n"
        + json.dumps(original, indent=2)
        + "\n```\nHope this helps."
    )

    assert extract_json(text) == original


def test_extract_json_raises_when_nothing_found() -> None:
    with pytest.raises(NoJsonFound) as exc_info:
        extract_json("no json here")

    assert exc_info.value.status_code == 500
    assert exc_info.value.to_dict() == {"error": "no_json_found", "raw": "no json here"}


def test_extract_json_raises_on_balanced_but_invalid_candidate() -> None:
    with pytest.raises(InvalidJson) as exc_info:
        extract_json("here: {code: 'single quoted'}")

    body = exc_info.value.to_dict()
    assert body["error"] == "invalid_json"
    assert body["candidate"] == "{code: 'single quoted'}"
    assert body["details"]
