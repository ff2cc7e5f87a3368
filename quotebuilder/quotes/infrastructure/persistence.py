import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from quotebuilder.quotes.domain.entities import Quote, QuoteSummary
from quotebuilder.quotes.domain.exceptions import StoreError
from quotebuilder.quotes.domain.mapping import row_to_item
from quotebuilder.quotes.domain.repositories import AbstractQuoteRepository

from .orm_models import OrderItemDB, QuoteDB

logger = logging.getLogger(__name__)


class SQLAlchemyQuoteRepository(AbstractQuoteRepository):
    """Implémentation SQLAlchemy du repository de Devis."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _to_entity(quote_db: QuoteDB) -> Quote:
        return Quote(
            id=quote_db.id,
            builder_name=quote_db.builder_name,
            job_name=quote_db.job_name,
            quote_number=quote_db.quote_number,
            user_id=quote_db.user_id,
            created_at=quote_db.created_at,
            updated_at=quote_db.updated_at,
            items=[row_to_item(item_db.to_row()) for item_db in quote_db.items],
        )

    async def get_by_id(self, quote_id: str) -> Optional[Quote]:
        stmt = (
            select(QuoteDB)
            .where(QuoteDB.id == quote_id)
            .options(selectinload(QuoteDB.items))
            # Les articles ont pu être supprimés/réinsérés dans cette session
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Erreur lecture devis {quote_id}: {e}", exc_info=True)
            raise StoreError("select", original_exception=e)
        quote_db = result.scalar_one_or_none()
        if not quote_db:
            logger.debug(f"Devis ID {quote_id} non trouvé dans get_by_id().")
            return None
        return self._to_entity(quote_db)

    async def list_for_user(self, user_id: str) -> List[QuoteSummary]:
        stmt = (
            select(QuoteDB)
            .where(QuoteDB.user_id == user_id)
            .order_by(QuoteDB.created_at.desc(), QuoteDB.quote_number.desc())
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Erreur listage devis user {user_id}: {e}", exc_info=True)
            raise StoreError("select", original_exception=e)
        return [QuoteSummary.model_validate(q_db) for q_db in result.scalars().all()]

    async def add_quote(self, quote_id: str, builder_name: str, job_name: str, user_id: str) -> int:
        try:
            # Numéro séquentiel attribué dans la même transaction que l'insertion
            next_number = await self.session.scalar(
                select(func.coalesce(func.max(QuoteDB.quote_number), 0) + 1)
            )
            quote_db = QuoteDB(
                id=quote_id,
                builder_name=builder_name,
                job_name=job_name,
                user_id=user_id,
                quote_number=next_number,
            )
            self.session.add(quote_db)
            await self.session.flush()
        except SQLAlchemyError as e:
            logger.error(f"Erreur insertion devis pour user {user_id}: {e}", exc_info=True)
            raise StoreError("insert quote", original_exception=e)
        logger.info(f"Devis ID {quote_id} (#{next_number}) ajouté pour user {user_id}.")
        return next_number

    async def update_quote(self, quote_id: str, builder_name: str, job_name: str) -> bool:
        try:
            quote_db = await self.session.get(QuoteDB, quote_id)
            if not quote_db:
                logger.warning(f"Tentative MAJ devis ID {quote_id} non trouvé.")
                return False
            quote_db.builder_name = builder_name
            quote_db.job_name = job_name
            quote_db.updated_at = datetime.now(timezone.utc)
            await self.session.flush()
        except SQLAlchemyError as e:
            logger.error(f"Erreur MAJ devis {quote_id}: {e}", exc_info=True)
            raise StoreError("update quote", original_exception=e)
        return True

    async def add_items(self, quote_id: str, rows: List[Dict[str, Any]]) -> None:
        try:
            self.session.add_all(
                [OrderItemDB(id=str(uuid.uuid4()), quote_id=quote_id, **row) for row in rows]
            )
            await self.session.flush()
        except SQLAlchemyError as e:
            logger.error(f"Erreur insertion articles devis {quote_id}: {e}", exc_info=True)
            raise StoreError("insert items", original_exception=e)
        logger.debug(f"{len(rows)} article(s) inséré(s) pour devis {quote_id}.")

    async def delete_items(self, quote_id: str) -> int:
        try:
            result = await self.session.execute(
                delete(OrderItemDB).where(OrderItemDB.quote_id == quote_id)
            )
        except SQLAlchemyError as e:
            logger.error(f"Erreur suppression articles devis {quote_id}: {e}", exc_info=True)
            raise StoreError("delete items", original_exception=e)
        return result.rowcount or 0

    async def delete_quote(self, quote_id: str) -> bool:
        try:
            result = await self.session.execute(delete(QuoteDB).where(QuoteDB.id == quote_id))
        except SQLAlchemyError as e:
            logger.error(f"Erreur suppression devis {quote_id}: {e}", exc_info=True)
            raise StoreError("delete quote", original_exception=e)
        return bool(result.rowcount)

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Erreur commit: {e}", exc_info=True)
            await self.session.rollback()
            raise StoreError("commit", original_exception=e)

    async def rollback(self) -> None:
        await self.session.rollback()
