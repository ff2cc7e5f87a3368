from typing import Optional

from pydantic_settings import BaseSettings


class EmailSettings(BaseSettings):
    """Configuration du module mailer.

    Les paramètres sont chargés depuis les variables d'environnement avec le préfixe EMAIL_.
    Les valeurs SMTP sont optionnelles: leur absence n'est détectée qu'à l'envoi.
    """
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    USE_TLS: bool = True
    SENDER_EMAIL: str = "orders@bradley.build"
    DEFAULT_FROM_NAME: Optional[str] = None

    # Fonction d'envoi distante (si vide: envoi dans le processus)
    FUNCTION_URL: Optional[str] = None
    REQUEST_TIMEOUT: float = 15.0

    class Config:
        env_prefix = "EMAIL_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Instance globale des paramètres
email_settings = EmailSettings()


def get_email_settings() -> EmailSettings:
    return email_settings
