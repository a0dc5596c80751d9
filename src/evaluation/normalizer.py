import json
import logging

from pydantic import ValidationError

from src.core.errors import ModelOutputError
from src.evaluation.love_chain import next_type
from src.schemas.evaluation import EvaluationResult

logger = logging.getLogger(__name__)

JSON_FENCE_OPEN = "```json"
FENCE_CLOSE = "```"


def strip_json_fence(text: str) -> str:
    """
    Unwraps a ```json ... ``` block.

    Only the first opening marker and the first closing marker after it are
    removed; anything else that looks like markdown is left alone.
    """
    stripped = text.strip()
    if not stripped.startswith(JSON_FENCE_OPEN):
        return stripped
    body = stripped[len(JSON_FENCE_OPEN):]
    return body.replace(FENCE_CLOSE, "", 1).strip()


def normalize_model_output(raw_text: str) -> EvaluationResult:
    """
    Turns the raw model text into a validated EvaluationResult.

    Raises:
        ModelOutputError: kind="parse" if the text is not a JSON object,
                          kind="schema" if keys or type values are wrong.
    """
    text = strip_json_fence(raw_text or "")

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ModelOutputError(f"Model output is not valid JSON: {e}", kind="parse", raw_text=raw_text) from e

    if not isinstance(payload, dict):
        raise ModelOutputError(
            f"Model output must be a JSON object, got {type(payload).__name__}",
            kind="parse",
            raw_text=raw_text,
        )

    try:
        result = EvaluationResult.model_validate(payload)
    except ValidationError as e:
        raise ModelOutputError(f"Model output failed schema validation: {e}", kind="schema", raw_text=raw_text) from e

    expected_next = next_type(result.type)
    if result.next_type != expected_next:
        # Relayed as-is; the chain is an instruction to the model, not something we rewrite.
        logger.warning(
            f"Model returned next_type={result.next_type.value} for type={result.type.value}, "
            f"Love Food Chain expects {expected_next.value}"
        )

    return result
