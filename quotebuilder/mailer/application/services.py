import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import jinja2

from quotebuilder.items.domain.entities import Item
from quotebuilder.mailer.domain.delivery import AbstractOrderDelivery, OrderEmailPayload
from quotebuilder.mailer.domain.exceptions import EmailConfigurationException
from quotebuilder.mailer.domain.sender import AbstractEmailSender
from quotebuilder.pdf.domain.formatting import describe_item, item_type_label

logger = logging.getLogger(__name__)

# Configuration du moteur de templates Jinja2
TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=jinja2.select_autoescape(["html", "xml"]),
)

ORDER_TEMPLATE = "order_email.html"


class OrderEmailService:
    """Fonction d'envoi du bon de commande: rendu HTML puis envoi SMTP."""

    def __init__(self, email_sender: AbstractEmailSender):
        self.email_sender = email_sender
        logger.info("[OrderEmailService] Initialisé.")

    def _render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Charge et rend un template Jinja2."""
        try:
            template = env.get_template(template_name)
        except jinja2.TemplateNotFound as e:
            logger.error(f"[OrderEmailService] Template email non trouvé: {template_name} dans {TEMPLATE_DIR}")
            raise EmailConfigurationException(f"Template '{template_name}' non trouvé.") from e
        return template.render(context)

    def render_order_html(self, payload: OrderEmailPayload) -> str:
        rows = [
            {
                "type": item_type_label(item),
                "details": describe_item(item),
                "notes": (item.notes or "").strip() or "-",
            }
            for item in payload.items
        ]
        return self._render_template(ORDER_TEMPLATE, {
            "builder_name": payload.builder_name,
            "job_name": payload.job_name,
            "rows": rows,
        })

    @staticmethod
    def subject_for(job_name: str) -> str:
        return f"Order Details - {job_name}"

    async def send_order_email(self, payload: OrderEmailPayload) -> bool:
        """Envoie le récapitulatif de commande au demandeur.

        Raises:
            EmailSendingException: erreur SMTP (hors refus du destinataire).
        """
        logger.info(
            f"[OrderEmailService] Préparation email commande '{payload.job_name}' pour {payload.user_email}"
        )
        html_content = self.render_order_html(payload)
        success = await self.email_sender.send_email(
            recipient_email=payload.user_email,
            subject=self.subject_for(payload.job_name),
            html_content=html_content,
        )
        if success:
            logger.info(f"[OrderEmailService] Email commande '{payload.job_name}' envoyé à {payload.user_email}")
        else:
            logger.warning(
                f"[OrderEmailService] L'envoi de l'email commande '{payload.job_name}' a échoué pour {payload.user_email}"
            )
        return success


class InProcessOrderDelivery(AbstractOrderDelivery):
    """Livraison sans aller-retour HTTP: appelle directement OrderEmailService."""

    def __init__(self, email_service: OrderEmailService):
        self.email_service = email_service

    async def send_order(
        self,
        owner_id: Optional[str],
        owner_email: str,
        builder_name: str,
        job_name: str,
        items: Sequence[Item],
    ) -> bool:
        payload = OrderEmailPayload(
            user_id=owner_id,
            user_email=owner_email,
            builder_name=builder_name,
            job_name=job_name,
            items=list(items),
        )
        return await self.email_service.send_order_email(payload)
