from fastapi import APIRouter, Depends, Query
import logging

from src.core.config import Settings
from src.core.errors import error_response
from src.db.gateway import TranslationStoreGateway
from src.routers.dependencies import get_gateway, get_settings

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/translations")
async def get_translations(
    lang: str = Query(default="", description="Language code of the UI strings"),
    gateway: TranslationStoreGateway = Depends(get_gateway),
    settings: Settings = Depends(get_settings),
):
    lang_code = lang or settings.default_lang
    try:
        return await gateway.get_translations(lang_code)
    except Exception as e:
        logger.exception(f"Database query error: {e}")
        return error_response(500, "Failed to retrieve translations.", e)
