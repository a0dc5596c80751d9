from pydantic import BaseModel


class Question(BaseModel):
    """One quiz question rendered in the requested language."""
    id: int
    step: int
    question: str
    options: str # Stored as an opaque string; the frontend decides how to split it
