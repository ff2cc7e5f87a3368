"""Pagination manuelle du bon de commande.

Les positions sont exprimées en distance depuis le haut de la zone utile
de la page (marges exclues).
"""
import logging
from typing import List, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class ItemPlacement(BaseModel):
    """Position d'un article dans le document rendu."""
    index: int
    page: int
    top: float
    height: float
    lines: List[str] = Field(default_factory=list)
    note_lines: List[str] = Field(default_factory=list)
    image_path: Optional[str] = None
    image_drawn: bool = False
    # Dernière page occupée (différente de `page` si le texte continue)
    last_page: Optional[int] = None

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def end_page(self) -> int:
        return self.last_page or self.page


class PageCursor:
    """Suit le décalage vertical courant et décide des sauts de page.

    Un bloc n'est jamais coupé: s'il ne tient pas sur la page courante, il
    commence une nouvelle page. Une page encore vide ne provoque jamais de
    saut; un bloc plus haut qu'une page entière part d'une page neuve et
    son texte se poursuit sur les pages suivantes (`line_capacity`).
    """

    def __init__(self, usable_height: float):
        if usable_height <= 0:
            raise ValueError("La hauteur utile de la page doit être positive.")
        self.usable_height = usable_height
        self.page = 1
        self.offset = 0.0

    @property
    def is_page_empty(self) -> bool:
        return self.offset == 0

    @property
    def remaining(self) -> float:
        return self.usable_height - self.offset

    def fits(self, height: float) -> bool:
        return self.offset + height <= self.usable_height

    def needs_break(self, height: float) -> bool:
        return not self.is_page_empty and not self.fits(height)

    def line_capacity(self, line_height: float) -> int:
        """Nombre de lignes de hauteur `line_height` qui tiennent encore sur la page."""
        return max(1, int(self.remaining // line_height))

    def new_page(self) -> None:
        self.page += 1
        self.offset = 0.0
        logger.debug(f"[PageCursor] Nouvelle page {self.page}")

    def take(self, height: float) -> float:
        """Réserve `height` sur la page courante et retourne le haut du bloc."""
        top = self.offset
        self.offset += height
        return top

    def advance(self, height: float) -> None:
        self.offset += height
