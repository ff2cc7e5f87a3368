import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from quotebuilder.mailer.config import EmailSettings, email_settings
from quotebuilder.mailer.domain.exceptions import EmailConfigurationException, EmailSendingException
from quotebuilder.mailer.domain.sender import AbstractEmailSender

logger = logging.getLogger(__name__)


class SmtpEmailSender(AbstractEmailSender):
    """Implémentation de l'envoi d'email via SMTP (STARTTLS + login)."""

    def __init__(self, settings: Optional[EmailSettings] = None):
        settings = settings or email_settings
        if not all([settings.SMTP_HOST, settings.SMTP_PORT, settings.SMTP_USER, settings.SMTP_PASSWORD]):
            logger.error("[SmtpEmailSender] Configuration SMTP incomplète.")
            raise EmailConfigurationException("Configuration SMTP (host, port, user, password) incomplète.")

        self.smtp_host = settings.SMTP_HOST
        self.smtp_port = settings.SMTP_PORT
        self.smtp_user = settings.SMTP_USER
        self.smtp_password = settings.SMTP_PASSWORD
        self.default_sender = settings.SENDER_EMAIL
        self.from_name = settings.DEFAULT_FROM_NAME
        self.use_tls = settings.USE_TLS
        logger.info(f"[SmtpEmailSender] Initialisé pour {self.smtp_host}:{self.smtp_port}")

    def _build_message(self, sender: str, recipient_email: str, subject: str, html_content: str) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["From"] = f"{self.from_name} <{sender}>" if self.from_name else sender
        msg["To"] = recipient_email
        msg["Subject"] = subject
        msg.attach(MIMEText(html_content, "html", "utf-8"))
        return msg

    def _send_blocking(self, sender: str, recipient_email: str, msg: MIMEMultipart) -> None:
        logger.debug(f"[SmtpEmailSender] Connexion à {self.smtp_host}:{self.smtp_port}")
        with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
            if self.use_tls:
                server.starttls()
            logger.debug(f"[SmtpEmailSender] Authentification avec {self.smtp_user}")
            server.login(self.smtp_user, self.smtp_password)
            server.sendmail(sender, [recipient_email], msg.as_string())

    async def send_email(
        self,
        recipient_email: str,
        subject: str,
        html_content: str,
        sender_email: Optional[str] = None,
    ) -> bool:
        final_sender = sender_email or self.default_sender
        msg = self._build_message(final_sender, recipient_email, subject, html_content)
        logger.info(f"[SmtpEmailSender] Envoi de l'email à {recipient_email} (Sujet: {subject})")
        try:
            await asyncio.to_thread(self._send_blocking, final_sender, recipient_email, msg)
        except smtplib.SMTPAuthenticationError as e:
            logger.error(f"[SmtpEmailSender] Échec authentification SMTP: {e}", exc_info=True)
            raise EmailSendingException("Échec authentification SMTP.", original_exception=e)
        except smtplib.SMTPRecipientsRefused as e:
            logger.error(f"[SmtpEmailSender] Destinataire refusé: {recipient_email}. Détails: {e.recipients}")
            return False
        except smtplib.SMTPSenderRefused as e:
            logger.error(f"[SmtpEmailSender] Expéditeur refusé: {final_sender}. Détails: {e.sender}", exc_info=True)
            raise EmailSendingException(f"Expéditeur refusé par le serveur: {final_sender}", original_exception=e)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"[SmtpEmailSender] Erreur SMTP lors de l'envoi à {recipient_email}: {e}", exc_info=True)
            raise EmailSendingException(f"Erreur SMTP: {e}", original_exception=e)
        logger.info(f"[SmtpEmailSender] Email envoyé avec succès à {recipient_email}")
        return True
