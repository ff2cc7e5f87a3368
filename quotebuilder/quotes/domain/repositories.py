from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from .entities import Quote, QuoteSummary


class AbstractQuoteRepository(ABC):
    """Interface abstraite pour le repository des Devis.

    Chaque méthode d'écriture travaille dans la transaction courante;
    `commit()` / `rollback()` la terminent. Toute erreur du store est levée
    en `StoreError`.
    """

    @abstractmethod
    async def get_by_id(self, quote_id: str) -> Optional[Quote]:
        """Récupère un devis et ses articles (dans l'ordre de la liste)."""
        raise NotImplementedError

    @abstractmethod
    async def list_for_user(self, user_id: str) -> List[QuoteSummary]:
        """Liste les devis d'un utilisateur, du plus récent au plus ancien."""
        raise NotImplementedError

    @abstractmethod
    async def add_quote(self, quote_id: str, builder_name: str, job_name: str, user_id: str) -> int:
        """Insère la ligne Quote et retourne le `quote_number` attribué."""
        raise NotImplementedError

    @abstractmethod
    async def update_quote(self, quote_id: str, builder_name: str, job_name: str) -> bool:
        """Met à jour les champs modifiables; False si le devis n'existe pas."""
        raise NotImplementedError

    @abstractmethod
    async def add_items(self, quote_id: str, rows: List[Dict[str, Any]]) -> None:
        """Insère en masse les lignes OrderItem du devis."""
        raise NotImplementedError

    @abstractmethod
    async def delete_items(self, quote_id: str) -> int:
        """Supprime toutes les lignes OrderItem du devis; retourne le nombre supprimé."""
        raise NotImplementedError

    @abstractmethod
    async def delete_quote(self, quote_id: str) -> bool:
        """Supprime la ligne Quote; False si elle n'existait pas."""
        raise NotImplementedError

    @abstractmethod
    async def commit(self) -> None:
        raise NotImplementedError

    @abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError
