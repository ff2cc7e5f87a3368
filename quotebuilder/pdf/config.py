"""Configuration spécifique au module PDF.

Utilise Pydantic BaseSettings pour permettre la surcharge par
des variables d'environnement (préfixe PDF_).
"""
from typing import Optional

from pydantic_settings import BaseSettings


class PDFSettings(BaseSettings):
    """Paramètres de mise en page du bon de commande."""

    TITLE: str = "Order Details"
    LOGO_PATH: Optional[str] = None
    # Dossier racine des images d'articles (windows/..., doors/...)
    ASSETS_DIR: str = "static/items"
    # Police TrueType optionnelle (nécessaire pour afficher ″ tel quel)
    FONT_PATH: Optional[str] = None

    PAGE_SIZE: str = "letter"  # "letter" ou "A4"
    MARGIN: float = 54.0  # points
    IMAGE_SIZE: float = 72.0
    GUTTER: float = 12.0
    ITEM_SPACING: float = 14.0
    FONT_SIZE: float = 10.0
    LINE_HEIGHT: float = 14.0
    TITLE_FONT_SIZE: float = 20.0

    class Config:
        env_prefix = "PDF_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Instance globale unique des paramètres (peut être utilisée directement ou injectée)
pdf_settings = PDFSettings()
