import json
import logging

import pytest

from src.core.errors import ModelOutputError
from src.evaluation.normalizer import normalize_model_output, strip_json_fence
from src.evaluation.love_chain import PersonalityType

VALID_RESULT = {
    "type": "teto-boy",
    "explanation": "Paragraph one.\n\nParagraph two.",
    "advice": "Be patient.",
    "next_type": "egen-girl",
    "love_chain_info": "Teto-boys are drawn to egen-girls.",
}


def test_plain_json_is_accepted():
    result = normalize_model_output(json.dumps(VALID_RESULT))
    assert result.model_dump(mode="json") == VALID_RESULT


def test_fenced_json_matches_unwrapped_json():
    raw = json.dumps(VALID_RESULT, ensure_ascii=False, indent=2)
    fenced = f"```json\n{raw}\n```"
    assert normalize_model_output(fenced) == normalize_model_output(raw)


def test_fenced_json_with_surrounding_whitespace():
    fenced = f"\n  ```json\n{json.dumps(VALID_RESULT)}\n```  \n"
    assert normalize_model_output(fenced).type == PersonalityType.TETO_BOY


def test_only_first_closing_fence_is_removed():
    text = "```json\n{}\n```\ntrailing ```"
    assert strip_json_fence(text) == "{}\n\ntrailing ```"


def test_text_without_fence_is_left_alone():
    assert strip_json_fence("  {\"a\": 1}  ") == "{\"a\": 1}"
    assert strip_json_fence("```python\n{}\n```") == "```python\n{}\n```"


def test_non_json_is_a_parse_error():
    with pytest.raises(ModelOutputError) as exc_info:
        normalize_model_output("not json")
    assert exc_info.value.kind == "parse"
    assert exc_info.value.raw_text == "not json"


def test_json_array_is_a_parse_error():
    with pytest.raises(ModelOutputError) as exc_info:
        normalize_model_output("[1, 2, 3]")
    assert exc_info.value.kind == "parse"


@pytest.mark.parametrize("missing_key", list(VALID_RESULT))
def test_missing_key_is_a_schema_error(missing_key):
    payload = {k: v for k, v in VALID_RESULT.items() if k != missing_key}
    with pytest.raises(ModelOutputError) as exc_info:
        normalize_model_output(json.dumps(payload))
    assert exc_info.value.kind == "schema"


def test_unknown_type_is_a_schema_error():
    payload = dict(VALID_RESULT, type="테토남")
    with pytest.raises(ModelOutputError) as exc_info:
        normalize_model_output(json.dumps(payload))
    assert exc_info.value.kind == "schema"


def test_extra_keys_are_dropped():
    payload = dict(VALID_RESULT, confidence=0.9)
    result = normalize_model_output(json.dumps(payload))
    assert "confidence" not in result.model_dump()


def test_chain_mismatch_is_relayed_with_warning(caplog):
    payload = dict(VALID_RESULT, next_type="teto-girl")
    with caplog.at_level(logging.WARNING, logger="src.evaluation.normalizer"):
        result = normalize_model_output(json.dumps(payload))
    assert result.next_type == PersonalityType.TETO_GIRL
    assert "Love Food Chain expects egen-girl" in caplog.text
