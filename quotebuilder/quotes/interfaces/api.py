import logging
from typing import List, NoReturn, Optional

from fastapi import APIRouter, HTTPException, Path, status

# Services Applicatifs (via dépendances)
from .dependencies import QuoteServiceDep

# Schémas/DTOs
from quotebuilder.quotes.application.schemas import QuoteResponse, QuoteSaveRequest, QuoteSummaryResponse

# Exceptions du Domaine (pour mapping)
from quotebuilder.quotes.domain.exceptions import (
    NotFoundError,
    QuoteDomainException,
    StoreError,
    ValidationError,
)

# Dépendances d'Authentification
from quotebuilder.core.security import CurrentUserDep, OptionalUserDep

logger = logging.getLogger(__name__)

# --- Création du Routeur ---
quote_router = APIRouter(
    prefix="/quotes",
    tags=["Quotes"]
)


def _raise_http(e: QuoteDomainException) -> NoReturn:
    """Traduit une exception du domaine Quote en HTTPException."""
    if isinstance(e, ValidationError):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"code": e.code, "message": e.message, "field": e.field},
        )
    if isinstance(e, NotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    if isinstance(e, StoreError):
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message)
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)


def _owner_or_404(quote: QuoteResponse, user_id: str) -> None:
    # Un devis d'un autre utilisateur est traité comme inexistant
    if quote.user_id != user_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Devis avec ID {quote.id} non trouvé.")


# --- Endpoints pour les Devis ---

@quote_router.get("/", response_model=List[QuoteSummaryResponse])
async def list_my_quotes(quote_service: QuoteServiceDep, current_user: CurrentUserDep):
    """Liste les devis de l'utilisateur, du plus récent au plus ancien."""
    logger.info(f"API list_my_quotes pour user ID: {current_user.id}")
    try:
        summaries = await quote_service.list_for_user(current_user.id)
    except QuoteDomainException as e:
        logger.error(f"Erreur API list_my_quotes pour user {current_user.id}: {e.message}")
        _raise_http(e)
    return [QuoteSummaryResponse.from_entity(s) for s in summaries]


@quote_router.post("/", response_model=QuoteResponse, status_code=status.HTTP_201_CREATED)
async def create_quote(
    quote_request: QuoteSaveRequest,
    quote_service: QuoteServiceDep,
    current_user: OptionalUserDep,
):
    """Enregistre un nouveau devis pour l'utilisateur."""
    owner_id: Optional[str] = current_user.id if current_user else None
    logger.info(f"API create_quote pour user ID: {owner_id} ({len(quote_request.items)} articles)")
    try:
        quote = await quote_service.save(quote_request.meta, quote_request.items, owner_id)
    except QuoteDomainException as e:
        logger.warning(f"Erreur création devis user {owner_id}: {e.message}")
        _raise_http(e)
    return QuoteResponse.from_entity(quote)


@quote_router.get("/{quote_id}", response_model=QuoteResponse)
async def read_quote(
    quote_service: QuoteServiceDep,
    current_user: CurrentUserDep,
    quote_id: str = Path(..., title="ID du devis"),
):
    """Charge un devis et ses articles."""
    logger.info(f"API read_quote: ID={quote_id} par user {current_user.id}")
    try:
        quote = QuoteResponse.from_entity(await quote_service.load(quote_id))
    except QuoteDomainException as e:
        _raise_http(e)
    _owner_or_404(quote, current_user.id)
    return quote


@quote_router.put("/{quote_id}", response_model=QuoteResponse)
async def update_quote(
    quote_request: QuoteSaveRequest,
    quote_service: QuoteServiceDep,
    current_user: CurrentUserDep,
    quote_id: str = Path(..., title="ID du devis à MAJ"),
):
    """Remplace les métadonnées et la liste complète d'articles d'un devis existant."""
    logger.info(f"API update_quote: ID={quote_id} par user {current_user.id}")
    try:
        existing = QuoteResponse.from_entity(await quote_service.load(quote_id))
        _owner_or_404(existing, current_user.id)
        quote = await quote_service.save(
            quote_request.meta, quote_request.items, current_user.id, existing_quote_id=quote_id
        )
    except QuoteDomainException as e:
        logger.warning(f"Erreur MAJ devis {quote_id}: {e.message}")
        _raise_http(e)
    return QuoteResponse.from_entity(quote)


@quote_router.delete("/{quote_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_quote(
    quote_service: QuoteServiceDep,
    current_user: CurrentUserDep,
    quote_id: str = Path(..., title="ID du devis à supprimer"),
):
    """Supprime un devis et toutes ses lignes d'articles."""
    logger.info(f"API delete_quote: ID={quote_id} par user {current_user.id}")
    try:
        existing = QuoteResponse.from_entity(await quote_service.load(quote_id))
        _owner_or_404(existing, current_user.id)
        await quote_service.delete(quote_id)
    except QuoteDomainException as e:
        logger.warning(f"Erreur suppression devis {quote_id}: {e.message}")
        _raise_http(e)
    return None
