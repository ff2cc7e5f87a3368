import logging
from typing import Annotated, Optional

from fastapi import Depends

from quotebuilder.mailer.application.services import InProcessOrderDelivery, OrderEmailService
from quotebuilder.mailer.config import EmailSettings, get_email_settings
from quotebuilder.mailer.domain.delivery import AbstractOrderDelivery
from quotebuilder.mailer.domain.exceptions import EmailConfigurationException
from quotebuilder.mailer.domain.sender import AbstractEmailSender
from quotebuilder.mailer.infrastructure.function_client import HttpOrderEmailFunction
from quotebuilder.mailer.infrastructure.smtp_sender import SmtpEmailSender

logger = logging.getLogger(__name__)

EmailSettingsDep = Annotated[EmailSettings, Depends(get_email_settings)]

# --- Email Sender Dependency ---

def get_email_sender(settings: EmailSettingsDep) -> Optional[AbstractEmailSender]:
    """Sender SMTP, ou None si la configuration SMTP est absente."""
    try:
        return SmtpEmailSender(settings=settings)
    except EmailConfigurationException as e:
        logger.error(f"[MailerDependencies] {e.message}")
        return None

EmailSenderDep = Annotated[Optional[AbstractEmailSender], Depends(get_email_sender)]

# --- Order Delivery Dependency ---

def get_order_delivery(settings: EmailSettingsDep, email_sender: EmailSenderDep) -> Optional[AbstractOrderDelivery]:
    """Fonction distante si EMAIL_FUNCTION_URL est défini, sinon envoi dans le processus.

    None si aucun moyen d'envoi n'est configuré (ni SMTP ni fonction distante).
    """
    if settings.FUNCTION_URL:
        return HttpOrderEmailFunction(settings.FUNCTION_URL, timeout=settings.REQUEST_TIMEOUT)
    if email_sender is None:
        logger.error("[MailerDependencies] Aucun moyen d'envoi configuré (SMTP ou fonction distante).")
        return None
    return InProcessOrderDelivery(OrderEmailService(email_sender))

OrderDeliveryDep = Annotated[Optional[AbstractOrderDelivery], Depends(get_order_delivery)]
