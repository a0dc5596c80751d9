from sqlalchemy import (
    MetaData,
    Column,
    Integer,
    String,
    Text,
    Index,
)
from sqlalchemy.orm import declarative_base

# Define naming conventions for constraints and indexes
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)
Base = declarative_base(metadata=metadata)


class QuizQuestion(Base):
    """A quiz question; its text and options live in i18n under the two keys."""
    __tablename__ = "teto_gender_questions"

    id = Column(Integer, primary_key=True)
    step = Column(Integer, nullable=False)
    question_key = Column(String(255), nullable=False)
    options_key = Column(String(255), nullable=False)


class Translation(Base):
    __tablename__ = "i18n"

    id = Column(Integer, primary_key=True, autoincrement=True)
    key_name = Column(String(255), nullable=False)
    lang_code = Column(String(16), nullable=False)
    translated_text = Column(Text, nullable=False)

    __table_args__ = (
        Index("ix_i18n_lang_code_key_name", "lang_code", "key_name"),
    )
