import logging
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from quotebuilder.database import get_db_session

# Repositories
from quotebuilder.quotes.domain.repositories import AbstractQuoteRepository
from quotebuilder.quotes.infrastructure.persistence import SQLAlchemyQuoteRepository

# Services
from quotebuilder.quotes.application.services import QuotePersistenceService

logger = logging.getLogger(__name__)

# --- Dépendances Repository ---
def get_quote_repository(db: AsyncSession = Depends(get_db_session)) -> AbstractQuoteRepository:
    """Injecte SQLAlchemyQuoteRepository."""
    logger.debug("Fourniture de SQLAlchemyQuoteRepository")
    return SQLAlchemyQuoteRepository(session=db)

QuoteRepositoryDep = Annotated[AbstractQuoteRepository, Depends(get_quote_repository)]

# --- Dépendances Service ---
def get_quote_service(quote_repo: QuoteRepositoryDep) -> QuotePersistenceService:
    """Injecte QuotePersistenceService avec son repository."""
    return QuotePersistenceService(quote_repo=quote_repo)

QuoteServiceDep = Annotated[QuotePersistenceService, Depends(get_quote_service)]
