from typing import Dict, Optional
from pydantic import BaseModel, Field

from src.evaluation.love_chain import PersonalityType


class EvaluationRequest(BaseModel):
    gender: str
    answers: Dict[str, str]  # question_id → selected answer
    lang: Optional[str] = Field(default=None, description="Language of the evaluation; DEFAULT_LANG when omitted")


class EvaluationResult(BaseModel):
    type: PersonalityType
    explanation: str
    advice: str
    next_type: PersonalityType
    love_chain_info: str
