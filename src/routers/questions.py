from fastapi import APIRouter, Depends, Query
import logging

from src.core.config import Settings
from src.core.errors import error_response
from src.db.gateway import TranslationStoreGateway
from src.routers.dependencies import get_gateway, get_settings

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/questions")
async def list_questions(
    lang: str = Query(default="", description="Language code of the question texts"),
    gateway: TranslationStoreGateway = Depends(get_gateway),
    settings: Settings = Depends(get_settings),
):
    """
    Returns every quiz question translated into `lang`, ordered by step.
    """
    lang_code = lang or settings.default_lang
    try:
        questions = await gateway.get_questions(lang_code)
    except Exception as e:
        logger.exception(f"Database query error: {e}")
        return error_response(500, "Failed to retrieve question data.", e)
    return [question.model_dump() for question in questions]
