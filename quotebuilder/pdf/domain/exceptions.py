"""Exceptions spécifiques au domaine PDF."""

from typing import Optional


class PDFDomainException(Exception):
    """Classe de base pour les exceptions du domaine PDF."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class PDFGenerationException(PDFDomainException):
    """Levée lorsqu'une erreur empêche la construction du document."""
    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        super().__init__(message)
        self.original_exception = original_exception


class AssetLoadError(PDFDomainException):
    """Image d'article introuvable ou illisible.

    Récupérée par le générateur: l'article est rendu sans image.
    """
    def __init__(self, path: str, original_exception: Optional[Exception] = None):
        message = f"Image '{path}' impossible à charger."
        if original_exception:
            message += f" (Erreur originale: {original_exception})"
        super().__init__(message)
        self.path = path
        self.original_exception = original_exception
