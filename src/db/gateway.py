import logging
from typing import Dict, List

from sqlalchemy import and_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.orm import aliased

from src.core.errors import UpstreamDataError
from src.db.models import QuizQuestion, Translation
from src.schemas.quiz import Question

logger = logging.getLogger(__name__)


class TranslationStoreGateway:
    """Read-only access to the quiz questions and their translations."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    async def get_questions(self, lang_code: str) -> List[Question]:
        """
        Returns the questions translated into `lang_code`, ordered by (step, id).

        Both the question text and the options text must exist in that
        language; a question missing either one is left out. There is no
        fallback to another language.
        """
        question_i18n = aliased(Translation, name="question_i18n")
        options_i18n = aliased(Translation, name="options_i18n")

        stmt = (
            select(
                QuizQuestion.id,
                QuizQuestion.step,
                question_i18n.translated_text.label("question"),
                options_i18n.translated_text.label("options"),
            )
            .join(
                question_i18n,
                and_(
                    QuizQuestion.question_key == question_i18n.key_name,
                    question_i18n.lang_code == lang_code,
                ),
            )
            .join(
                options_i18n,
                and_(
                    QuizQuestion.options_key == options_i18n.key_name,
                    options_i18n.lang_code == lang_code,
                ),
            )
            .order_by(QuizQuestion.step, QuizQuestion.id)
        )

        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(stmt)
                rows = result.mappings().all()
        except SQLAlchemyError as e:
            raise UpstreamDataError(f"Question query failed for lang={lang_code}: {e}") from e

        logger.info(f"Fetched {len(rows)} questions for lang={lang_code}")
        return [Question(**row) for row in rows]

    async def get_translations(self, lang_code: str) -> Dict[str, str]:
        """Returns {key_name: translated_text} for one language; later rows win on duplicate keys."""
        stmt = (
            select(Translation.key_name, Translation.translated_text)
            .where(Translation.lang_code == lang_code)
            .order_by(Translation.id)
        )

        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(stmt)
                rows = result.all()
        except SQLAlchemyError as e:
            raise UpstreamDataError(f"Translation query failed for lang={lang_code}: {e}") from e

        translations: Dict[str, str] = {}
        for key_name, translated_text in rows:
            translations[key_name] = translated_text
        logger.info(f"Fetched {len(translations)} translations for lang={lang_code}")
        return translations
