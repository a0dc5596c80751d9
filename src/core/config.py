from typing import List, Optional
import os

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

from src.core.errors import ConfigurationError

# Load .env file if it exists, for local development
# In production, environment variables should be set directly.
if os.path.exists(".env"):
    from dotenv import load_dotenv
    load_dotenv()

DEFAULT_FRONTEND_ORIGINS = (
    "https://git-coni.github.io,"
    "http://localhost:3000,"
    "https://test.coniteck.cc"
)


class Settings(BaseSettings):
    """
    Process-wide configuration, read once at startup.

    Instances are frozen; handlers receive the instance through app.state
    rather than reading the environment themselves.
    """
    # Generative model
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_api_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    model_timeout_seconds: float = 30.0

    # Relational store
    db_host: str = "localhost"
    db_port: int = 3306
    db_user: str = "root"
    db_password: str = ""
    db_name: str = "teto_egen"
    database_url: Optional[str] = None # Full SQLAlchemy URL, overrides the DB_* parts
    db_pool_size: int = 5

    # HTTP surface
    port: int = 4000
    frontend_origins: str = DEFAULT_FRONTEND_ORIGINS # Comma-separated allow-list
    default_lang: str = "ko"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(frozen=True, extra="ignore", protected_namespaces=())

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.frontend_origins.split(",") if origin.strip()]

    @property
    def sqlalchemy_url(self):
        if self.database_url:
            return self.database_url
        return URL.create(
            "mysql+aiomysql",
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )

    def require_model_credentials(self) -> None:
        """Raises ConfigurationError when the model API key is absent."""
        if not self.gemini_api_key:
            raise ConfigurationError("Environment variable GEMINI_API_KEY is not set.")


def load_settings(**overrides) -> Settings:
    return Settings(**overrides)
