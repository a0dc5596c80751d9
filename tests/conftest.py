import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock

from main import create_app
from src.core.config import Settings
from src.db.gateway import TranslationStoreGateway
from src.db.models import Base, QuizQuestion, Translation
from src.db.session import get_async_engine
from src.gemini.client import GeminiClient
from src.routers.dependencies import get_gateway, get_model_client


# --- Seed data for the on-disk SQLite store ---
SEED_QUESTIONS = [
    {"id": 1, "step": 1, "question_key": "q1_text", "options_key": "q1_options"},
    {"id": 2, "step": 1, "question_key": "q2_text", "options_key": "q2_options"},
    {"id": 3, "step": 2, "question_key": "q3_text", "options_key": "q3_options"},
    # Only translated into Korean
    {"id": 4, "step": 0, "question_key": "q4_text", "options_key": "q4_options"},
]
SEED_TRANSLATIONS = [
    ("q1_text", "ko", "주말에 무엇을 하나요?"),
    ("q1_options", "ko", "집에서 쉰다|밖에 나간다"),
    ("q2_text", "ko", "갈등이 생기면?"),
    ("q2_options", "ko", "바로 말한다|참는다"),
    ("q3_text", "ko", "연애 스타일은?"),
    ("q3_options", "ko", "리드한다|따라간다"),
    ("q4_text", "ko", "첫인상은?"),
    ("q4_options", "ko", "부드럽다|강하다"),
    ("q1_text", "en", "What do you do on weekends?"),
    ("q1_options", "en", "Stay home|Go out"),
    ("q2_text", "en", "When a conflict arises?"),
    ("q2_options", "en", "Speak up|Hold back"),
    ("q3_text", "en", "Your dating style?"),
    ("q3_options", "en", "Lead|Follow"),
    # q4 has an English question text but no English options
    ("q4_text", "en", "First impression?"),
    ("title", "en", "Teto/Egen Test"),
    ("title", "en", "Teto or Egen?"),
    ("start_button", "en", "Start"),
]


def make_settings(**overrides) -> Settings:
    values = {
        "gemini_api_key": "test-key",
        "database_url": "sqlite+aiosqlite:///:memory:",
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def app(settings):
    application = create_app(settings)
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def mock_model_client(app):
    """Replaces the Gemini collaborator with an AsyncMock; set .generate_text.return_value per test."""
    mock_client = MagicMock(spec=GeminiClient)
    mock_client.generate_text = AsyncMock()
    app.dependency_overrides[get_model_client] = lambda: mock_client
    return mock_client


@pytest.fixture
def mock_gateway(app):
    mock = MagicMock(spec=TranslationStoreGateway)
    mock.get_questions = AsyncMock(return_value=[])
    mock.get_translations = AsyncMock(return_value={})
    app.dependency_overrides[get_gateway] = lambda: mock
    return mock


@pytest_asyncio.fixture
async def seeded_engine(tmp_path):
    """An aiosqlite engine on a temporary file, with both tables created and seeded."""
    engine = get_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'quiz.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.execute(QuizQuestion.__table__.insert(), SEED_QUESTIONS)
        await conn.execute(
            Translation.__table__.insert(),
            [
                {"key_name": key, "lang_code": lang, "translated_text": text}
                for key, lang, text in SEED_TRANSLATIONS
            ],
        )
    yield engine
    await engine.dispose()
