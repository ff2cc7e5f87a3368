from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from quotebuilder.items.domain.entities import Item
from quotebuilder.pdf.domain.layout import ItemPlacement


class OrderDocument(BaseModel):
    """Données d'entrée du bon de commande."""
    builder_name: str
    job_name: str
    items: List[Item] = Field(default_factory=list)
    requester_email: Optional[str] = None
    quote_number: Optional[int] = None
    quote_date: Optional[datetime] = None
    generated_at: Optional[datetime] = None


class RenderedDocument(BaseModel):
    """Résultat de la génération: contenu binaire et placement des articles."""
    content: bytes
    filename: str
    page_count: int
    placements: List[ItemPlacement] = Field(default_factory=list)


class AbstractPDFGenerator(ABC):
    """Interface abstraite pour un générateur de bons de commande PDF.
    Approche orientée données, l'implémentation gère la mise en page.
    """

    @abstractmethod
    async def generate_order_pdf(self, order: OrderDocument) -> RenderedDocument:
        """Génère le bon de commande.

        Args:
            order: Métadonnées du devis, demandeur et articles dans l'ordre de la liste.

        Returns:
            Le document rendu (octets PDF, nom de fichier, pages, placements).

        Raises:
            PDFGenerationException: Si une erreur survient durant la génération.
        """
        raise NotImplementedError
