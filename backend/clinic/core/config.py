import os
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    """Runtime settings for the clinic backend."""

    # Azure AI Configuration
    AZURE_FOUNDRY_API_KEY: str = os.getenv("AZURE_FOUNDRY_API_KEY", "")
    AZURE_FOUNDRY_ENDPOINT: str = os.getenv("AZURE_FOUNDRY_ENDPOINT", "")
    AZURE_API_VERSION: str = os.getenv("AZURE_API_VERSION", "2024-12-01-preview")
    AZURE_CHAT_DEPLOYMENT: str = os.getenv("AZURE_CHAT_DEPLOYMENT", "gpt-4o")

    # Consultation agent
    AI_TEMPERATURE: float = float(os.getenv("AI_TEMPERATURE", "0.4"))
    AI_TIMEOUT_SECONDS: float = float(os.getenv("AI_TIMEOUT_SECONDS", "30"))

    # Server
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: List[str] = [
        "http://127.0.0.1:5173",
        "http://localhost:5173",
    ]
    SEED_DEMO_USERS: bool = os.getenv("SEED_DEMO_USERS", "true").lower() == "true"

    class Config:
        case_sensitive = True

    @property
    def ai_backend_configured(self) -> bool:
        return bool(self.AZURE_FOUNDRY_API_KEY and self.AZURE_FOUNDRY_ENDPOINT)


settings = Settings()
