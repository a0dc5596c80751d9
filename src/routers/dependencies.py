from fastapi import Request

from src.core.config import Settings
from src.db.gateway import TranslationStoreGateway
from src.gemini.client import GeminiClient


# Collaborators are built once in main.create_app and kept on app.state;
# tests swap them out through app.dependency_overrides.
def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_gateway(request: Request) -> TranslationStoreGateway:
    return request.app.state.gateway


def get_model_client(request: Request) -> GeminiClient:
    return request.app.state.model_client
