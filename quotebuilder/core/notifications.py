"""Notifications affichables à l'utilisateur (toasts).

Les erreurs des adaptateurs (store, PDF, email) sont converties ici au lieu
d'être propagées à l'interface.
"""
import logging
from typing import Literal, Optional

from pydantic import BaseModel

from quotebuilder.mailer.domain.exceptions import EmailDomainException
from quotebuilder.pdf.domain.exceptions import PDFDomainException
from quotebuilder.quotes.domain.exceptions import (
    NotFoundError,
    QuoteDomainException,
    StoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)

QUOTE_LIST_PATH = "/"

VALIDATION_MESSAGES = {
    "not_authenticated": ("Error", "You must be logged in to perform this action."),
    "missing_information": ("Missing Information", "Please fill in both Builder Name and Job Name."),
    "empty_quote": ("Empty Quote", "Please add at least one window or door to your quote."),
    "missing_field": ("Missing Information", "Please fill in all required fields."),
    "invalid_dimension": ("Invalid Dimension", "Width and height must be numbers."),
    "invalid_field": ("Invalid Information", "Please check the values entered in the form."),
}


class Notification(BaseModel):
    title: str
    description: str = ""
    variant: Literal["default", "destructive"] = "default"
    redirect: Optional[str] = None

    @classmethod
    def success(cls, title: str, description: str = "") -> "Notification":
        return cls(title=title, description=description)

    @classmethod
    def error(cls, title: str, description: str = "", redirect: Optional[str] = None) -> "Notification":
        return cls(title=title, description=description, variant="destructive", redirect=redirect)


def notification_from_exception(exc: Exception, action: str = "") -> Notification:
    """Convertit une exception de domaine en notification d'erreur."""
    if isinstance(exc, ValidationError):
        title, description = VALIDATION_MESSAGES.get(exc.code, ("Invalid Quote", exc.message))
        return Notification.error(title, description)
    if isinstance(exc, NotFoundError):
        return Notification.error("Quote Not Found", "This quote no longer exists.", redirect=QUOTE_LIST_PATH)
    if isinstance(exc, StoreError):
        return Notification.error("Error", f"Failed to {action or exc.operation}. Please try again.")
    if isinstance(exc, (QuoteDomainException, PDFDomainException, EmailDomainException)):
        return Notification.error("Error", exc.message)
    logger.error(f"[Notifications] Exception inattendue convertie en notification: {exc}", exc_info=True)
    return Notification.error("Error", "An unexpected error occurred.")
