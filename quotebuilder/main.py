"""
Module principal de l'application FastAPI Quote Builder.

Configure le logging, CORS, la création des tables au démarrage et inclut
les routeurs: devis, bon de commande PDF et fonctions serveur
(envoi de l'email de commande, lecture de secret).
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quotebuilder.config import settings
from quotebuilder.database import create_tables

# --- Importer les routeurs ---
from quotebuilder.mailer.interfaces.api import functions_router, order_email_router
from quotebuilder.pdf.interfaces.api import document_router
from quotebuilder.quotes.interfaces.api import quote_router
from quotebuilder.secret_store.api import secret_router

# Configurer le logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Création des tables (si absentes)...")
    await create_tables()
    yield


app = FastAPI(
    title=settings.APP_TITLE,
    description="API de composition de devis fenêtres / portes et génération de bons de commande.",
    version="1.0.0",
    lifespan=lifespan,
)

# Configurer CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ======================================================
# Inclure les routeurs
# ======================================================
app.include_router(quote_router, prefix=settings.API_V1_PREFIX)
app.include_router(document_router, prefix=settings.API_V1_PREFIX)
app.include_router(order_email_router, prefix=settings.API_V1_PREFIX)

# Fonctions serveur (hors préfixe d'API)
app.include_router(functions_router)
app.include_router(secret_router)
