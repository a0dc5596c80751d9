from fastapi import APIRouter, Depends
import logging

from src.core.config import Settings
from src.core.errors import ModelInvocationError, ModelOutputError, error_response
from src.evaluation.normalizer import normalize_model_output
from src.evaluation.prompt_builder import build_evaluation_prompt
from src.gemini.client import GeminiClient
from src.routers.dependencies import get_model_client, get_settings
from src.schemas.evaluation import EvaluationRequest

router = APIRouter()
logger = logging.getLogger(__name__)

EVALUATION_FAILED = "Failed to process evaluation."


@router.post("/evaluate")
async def evaluate(
    request: EvaluationRequest,
    model_client: GeminiClient = Depends(get_model_client),
    settings: Settings = Depends(get_settings),
):
    """
    Builds the evaluation prompt from the submitted answers, asks the model
    for a verdict and relays the validated JSON result.

    Any failure after the body has been validated is answered with a 500
    and the same generic message; the failure kind is only visible in the
    X-Error-Code header and the logs.
    """
    lang = request.lang or settings.default_lang
    try:
        prompt = build_evaluation_prompt(request.gender, request.answers, lang)
        logger.info(f"Sending prompt to AI: {prompt}")

        raw_text = await model_client.generate_text(prompt)
        logger.info(f"Received raw AI response: {raw_text}")

        result = normalize_model_output(raw_text)
    except ModelInvocationError as e:
        logger.exception(f"Model call failed: {e}")
        return error_response(500, EVALUATION_FAILED, e)
    except ModelOutputError as e:
        logger.exception(f"Model output rejected ({e.kind}): {e}")
        return error_response(500, EVALUATION_FAILED, e)
    except Exception as e:
        logger.exception(f"Unexpected error during evaluation: {e}")
        return error_response(500, EVALUATION_FAILED, e)

    logger.info(f"Evaluation complete: type={result.type.value}, next_type={result.next_type.value}")
    return result.model_dump(mode="json")
