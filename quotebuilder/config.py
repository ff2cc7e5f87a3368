import logging
from typing import List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

# Charger les variables d'environnement AVANT de définir la classe Settings
load_dotenv()


class Settings(BaseSettings):
    """Configuration générale de l'application (chargée depuis l'environnement / .env)."""

    # --- Base de Données ---
    # URL complète prioritaire; sinon construite depuis les paramètres POSTGRES_*
    DATABASE_URL: Optional[str] = None
    POSTGRES_DB: Optional[str] = None
    POSTGRES_USER: str = "quotebuilder"
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: str = "5432"
    SQLITE_PATH: str = "./quotes.db"
    DB_ECHO_LOG: bool = False

    # --- API ---
    APP_TITLE: str = "Quote Builder API"
    API_V1_PREFIX: str = "/api/v1"
    CORS_ORIGINS: List[str] = ["*"]

    # --- Logging ---
    LOG_LEVEL: str = "INFO"

    # --- Fonction get-secret ---
    # Seuls ces noms peuvent être lus via /functions/get-secret
    EXPOSED_SECRETS: List[str] = ["OLLAMA_URL"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def database_url(self) -> str:
        """URL SQLAlchemy async effectivement utilisée."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.POSTGRES_DB and self.POSTGRES_PASSWORD:
            return (
                f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@"
                f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
            )
        return f"sqlite+aiosqlite:///{self.SQLITE_PATH}"


settings = Settings()


def get_settings() -> Settings:
    """Retourne l'instance globale des paramètres."""
    return settings


logger.info(f"Configuration chargée: DB={settings.database_url.split('@')[-1]}, API={settings.API_V1_PREFIX}")
