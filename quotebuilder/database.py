import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
# Importer SQLModel pour utiliser ses métadonnées
from sqlmodel import SQLModel

from quotebuilder.config import settings

logger = logging.getLogger(__name__)

# Base déclarative partageant les métadonnées de SQLModel
Base = declarative_base(metadata=SQLModel.metadata)

try:
    engine = create_async_engine(
        settings.database_url,
        echo=settings.DB_ECHO_LOG,
    )

    AsyncSessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False  # Empêche les objets d'expirer après commit
    )
    logger.info("Moteur et Session Factory SQLAlchemy Async configurés. Base utilise SQLModel.metadata.")

except Exception as e:
    logger.critical(f"Erreur lors de la configuration de SQLAlchemy Async: {e}", exc_info=True)
    engine = None
    AsyncSessionLocal = None


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that provides an async database session."""
    if AsyncSessionLocal is None:
        logger.error("La factory de session SQLAlchemy n'est pas initialisée.")
        raise RuntimeError("Database session factory is not initialized.")

    async with AsyncSessionLocal() as session:
        try:
            yield session
            # Pas de commit ici: les services applicatifs contrôlent leurs transactions.
        except Exception as e:
            logger.error(f"Erreur durant la session DB, rollback: {e}", exc_info=True)
            await session.rollback()
            raise
        finally:
            await session.close()
            logger.debug("Session DB fermée.")


async def create_tables() -> None:
    """Crée toutes les tables déclarées sur SQLModel.metadata."""
    # Enregistre les tables des devis sur les métadonnées partagées
    from quotebuilder.quotes.infrastructure import orm_models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def drop_tables() -> None:
    """Supprime toutes les tables déclarées sur SQLModel.metadata."""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
