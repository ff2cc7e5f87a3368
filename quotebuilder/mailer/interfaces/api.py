import logging

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse

from quotebuilder.core.security import CurrentUserDep
from quotebuilder.mailer.application.services import OrderEmailService
from quotebuilder.mailer.domain.delivery import OrderEmailPayload
from quotebuilder.mailer.domain.exceptions import EmailDomainException
from quotebuilder.mailer.interfaces.dependencies import EmailSenderDep, OrderDeliveryDep
from quotebuilder.pdf.application.schemas import OrderDocumentRequest
from quotebuilder.quotes.application.services import validate_quote_input
from quotebuilder.quotes.domain.entities import QuoteMeta
from quotebuilder.quotes.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)

# --- Fonctions serveur (appelées par le client, hors préfixe /api/v1) ---
functions_router = APIRouter(
    prefix="/functions",
    tags=["Functions"]
)

# --- Envoi du bon de commande pour l'utilisateur connecté (préfixe /api/v1) ---
order_email_router = APIRouter(
    prefix="/documents",
    tags=["Documents"]
)


def _error(message: str) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": message})


@functions_router.post("/send-order-email")
async def send_order_email(payload: OrderEmailPayload, email_sender: EmailSenderDep):
    """Envoie le récapitulatif de commande au demandeur."""
    if email_sender is None:
        logger.error("[send-order-email] Configuration SMTP manquante.")
        return _error("Server configuration error")

    logger.info(f"[send-order-email] Requête reçue: '{payload.job_name}' pour {payload.user_email}")
    try:
        sent = await OrderEmailService(email_sender).send_order_email(payload)
    except EmailDomainException as e:
        logger.error(f"[send-order-email] Échec: {e.message}")
        return _error(e.message)
    if not sent:
        return _error(f"Recipient refused: {payload.user_email}")
    return {"success": True}


@order_email_router.post("/order/email")
async def email_order(
    order_request: OrderDocumentRequest,
    delivery: OrderDeliveryDep,
    current_user: CurrentUserDep,
):
    """Transmet la liste courante à la fonction d'envoi, à destination de l'utilisateur."""
    logger.info(f"Demande d'envoi du bon de commande '{order_request.job_name}' par user {current_user.id}")
    meta = QuoteMeta(builder_name=order_request.builder_name, job_name=order_request.job_name)
    try:
        validate_quote_input(meta, order_request.items, current_user.id)
        if not current_user.email:
            raise ValidationError("not_authenticated", "Adresse email du demandeur inconnue.", field="email")
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"code": e.code, "message": e.message, "field": e.field},
        )

    if delivery is None:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server configuration error")

    try:
        sent = await delivery.send_order(
            current_user.id,
            current_user.email,
            order_request.builder_name,
            order_request.job_name,
            order_request.items,
        )
    except EmailDomainException as e:
        logger.error(f"Erreur envoi bon de commande '{order_request.job_name}': {e.message}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to send order email.")
    if not sent:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to send order email.")
    return {"success": True, "recipient": current_user.email}
