import logging
from datetime import datetime
from typing import Optional, Sequence

from quotebuilder.items.domain.entities import Item
from quotebuilder.pdf.domain.exceptions import PDFGenerationException
from quotebuilder.pdf.domain.formatting import order_pdf_filename
from quotebuilder.pdf.domain.generator import AbstractPDFGenerator, OrderDocument, RenderedDocument

logger = logging.getLogger(__name__)

__all__ = ["PDFService", "order_pdf_filename"]


class PDFService:
    """Service applicatif pour la génération du bon de commande."""

    def __init__(self, pdf_generator: AbstractPDFGenerator):
        self.pdf_generator = pdf_generator
        logger.info("[PDFService] Initialisé.")

    async def generate_order_pdf(
        self,
        builder_name: str,
        job_name: str,
        items: Sequence[Item],
        requester_email: Optional[str] = None,
        quote_number: Optional[int] = None,
        quote_date: Optional[datetime] = None,
    ) -> RenderedDocument:
        """Génère le bon de commande pour la liste d'articles courante.

        Raises:
            PDFGenerationException: Si la génération échoue.
        """
        order = OrderDocument(
            builder_name=builder_name,
            job_name=job_name,
            items=list(items),
            requester_email=requester_email,
            quote_number=quote_number,
            quote_date=quote_date,
        )
        logger.info(f"[PDFService] Demande de génération PDF pour '{job_name}'.")
        try:
            return await self.pdf_generator.generate_order_pdf(order)
        except PDFGenerationException as e:
            logger.error(f"[PDFService] Échec génération PDF '{job_name}': {e.message}")
            raise
        except Exception as e:
            logger.error(f"[PDFService] Erreur inattendue génération PDF '{job_name}': {e}", exc_info=True)
            raise PDFGenerationException(f"Erreur inattendue: {e}", original_exception=e)
