"""Exceptions spécifiques au domaine Quote."""

from typing import Optional


class QuoteDomainException(Exception):
    """Classe de base pour les exceptions du domaine Quote."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ValidationError(QuoteDomainException):
    """Levée quand les données du devis sont incomplètes, avant toute opération sur le store.

    `code` identifie la règle violée: not_authenticated, missing_information,
    empty_quote, missing_field, invalid_field, invalid_dimension.
    """
    def __init__(self, code: str, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.field = field


class StoreError(QuoteDomainException):
    """Levée lorsqu'une opération du store (insert/update/delete) échoue."""
    def __init__(self, operation: str, original_exception: Optional[Exception] = None):
        message = f"Échec de l'opération '{operation}' sur le store."
        if original_exception:
            message += f" (Erreur originale: {original_exception})"
        super().__init__(message)
        self.operation = operation
        self.original_exception = original_exception


class NotFoundError(QuoteDomainException):
    """Levée lorsqu'un devis référencé n'existe pas."""
    def __init__(self, quote_id: str):
        super().__init__(f"Devis avec ID {quote_id} non trouvé.")
        self.quote_id = quote_id
