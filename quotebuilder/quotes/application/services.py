import logging
import uuid
from typing import List, Optional, Sequence, Union

from quotebuilder.items.domain.entities import DoorItem, WindowItem
from quotebuilder.quotes.domain.entities import Quote, QuoteMeta, QuoteSummary
from quotebuilder.quotes.domain.exceptions import NotFoundError, StoreError, ValidationError
from quotebuilder.quotes.domain.mapping import item_to_row
from quotebuilder.quotes.domain.repositories import AbstractQuoteRepository

logger = logging.getLogger(__name__)

ItemType = Union[WindowItem, DoorItem]


def validate_quote_input(meta: QuoteMeta, items: Sequence[ItemType], owner_id: Optional[str]) -> None:
    """Contrôles préalables à toute opération sur le store."""
    if not owner_id:
        raise ValidationError("not_authenticated", "Vous devez être connecté pour enregistrer un devis.")
    if not (meta.builder_name or "").strip() or not (meta.job_name or "").strip():
        raise ValidationError("missing_information", "Le nom du constructeur et le nom du chantier sont requis.")
    if not items:
        raise ValidationError("empty_quote", "Le devis est vide: ajoutez au moins une fenêtre ou une porte.")


class QuotePersistenceService:
    """Traduit la liste d'articles + métadonnées en lignes Quote / OrderItem et inversement.

    Un enregistrement de devis existant supprime TOUTES ses lignes d'articles
    puis réinsère la liste courante (pas de diff, pas d'identifiant d'article
    stable). Les étapes partagent la transaction du repository: un échec
    annule l'ensemble.
    """

    def __init__(self, quote_repo: AbstractQuoteRepository):
        self.quote_repo = quote_repo

    async def save(
        self,
        meta: QuoteMeta,
        items: Sequence[ItemType],
        owner_id: Optional[str],
        existing_quote_id: Optional[str] = None,
    ) -> Quote:
        """Enregistre le devis et retourne la version persistée (avec `quote_number`).

        Raises:
            ValidationError: métadonnées manquantes, liste vide, dimension non numérique.
            NotFoundError: `existing_quote_id` ne correspond à aucun devis.
            StoreError: échec d'une opération du store.
        """
        validate_quote_input(meta, items, owner_id)
        # Conversion complète avant la première écriture
        rows = [item_to_row(item, position) for position, item in enumerate(items)]
        builder_name = meta.builder_name.strip()
        job_name = meta.job_name.strip()

        try:
            if existing_quote_id:
                logger.info(f"[QuotePersistenceService] MAJ devis {existing_quote_id} ({len(rows)} articles).")
                updated = await self.quote_repo.update_quote(existing_quote_id, builder_name, job_name)
                if not updated:
                    raise NotFoundError(existing_quote_id)
                deleted = await self.quote_repo.delete_items(existing_quote_id)
                logger.debug(f"[QuotePersistenceService] {deleted} ancienne(s) ligne(s) supprimée(s).")
                quote_id = existing_quote_id
            else:
                quote_id = str(uuid.uuid4())
                logger.info(f"[QuotePersistenceService] Création devis {quote_id} pour user {owner_id}.")
                await self.quote_repo.add_quote(quote_id, builder_name, job_name, owner_id)
            await self.quote_repo.add_items(quote_id, rows)
            await self.quote_repo.commit()
        except (StoreError, NotFoundError):
            await self.quote_repo.rollback()
            raise

        saved = await self.quote_repo.get_by_id(quote_id)
        if saved is None:
            logger.error(f"[QuotePersistenceService] Devis {quote_id} introuvable après enregistrement!")
            raise StoreError("reload quote")
        logger.info(f"[QuotePersistenceService] Devis #{saved.quote_number} enregistré.")
        return saved

    async def load(self, quote_id: str) -> Quote:
        """Charge un devis et reconstruit ses articles typés."""
        logger.debug(f"[QuotePersistenceService] Chargement devis {quote_id}")
        quote = await self.quote_repo.get_by_id(quote_id)
        if quote is None:
            logger.warning(f"[QuotePersistenceService] Devis {quote_id} non trouvé.")
            raise NotFoundError(quote_id)
        return quote

    async def delete(self, quote_id: str) -> None:
        """Supprime les lignes d'articles puis la ligne du devis."""
        logger.info(f"[QuotePersistenceService] Suppression devis {quote_id}")
        try:
            await self.quote_repo.delete_items(quote_id)
            deleted = await self.quote_repo.delete_quote(quote_id)
            if not deleted:
                raise NotFoundError(quote_id)
            await self.quote_repo.commit()
        except (StoreError, NotFoundError):
            await self.quote_repo.rollback()
            raise

    async def list_for_user(self, user_id: str) -> List[QuoteSummary]:
        return await self.quote_repo.list_for_user(user_id)
