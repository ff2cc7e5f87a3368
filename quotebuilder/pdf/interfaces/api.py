"""
Routes FastAPI pour le module PDF.
"""
import logging
import re
import unicodedata
from urllib.parse import quote

from fastapi import APIRouter, HTTPException, Response, status

from quotebuilder.core.security import CurrentUserDep
from quotebuilder.pdf.application.schemas import OrderDocumentRequest
from quotebuilder.pdf.domain.exceptions import PDFDomainException
from quotebuilder.pdf.interfaces.dependencies import PDFServiceDep
from quotebuilder.quotes.application.services import validate_quote_input
from quotebuilder.quotes.domain.entities import QuoteMeta
from quotebuilder.quotes.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)

document_router = APIRouter(
    prefix="/documents",
    tags=["Documents"],
)


def content_disposition(filename: str) -> str:
    """En-tête de pièce jointe: nom ASCII de repli + nom UTF-8 (RFC 6266)."""
    ascii_name = unicodedata.normalize("NFKD", filename).encode("ascii", "ignore").decode("ascii")
    ascii_name = re.sub(r'[^\w.\-]', "_", ascii_name) or "order.pdf"
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename, safe='')}"


@document_router.post(
    "/order",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
async def create_order_document(
    order_request: OrderDocumentRequest,
    pdf_service: PDFServiceDep,
    current_user: CurrentUserDep,
):
    """Génère le bon de commande PDF et le retourne en pièce jointe."""
    logger.info(f"Demande de bon de commande '{order_request.job_name}' par user {current_user.id}")
    meta = QuoteMeta(builder_name=order_request.builder_name, job_name=order_request.job_name)
    try:
        validate_quote_input(meta, order_request.items, current_user.id)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"code": e.code, "message": e.message, "field": e.field},
        )

    try:
        document = await pdf_service.generate_order_pdf(
            builder_name=order_request.builder_name,
            job_name=order_request.job_name,
            items=order_request.items,
            requester_email=current_user.email,
            quote_number=order_request.quote_number,
            quote_date=order_request.quote_date,
        )
    except PDFDomainException as e:
        logger.error(f"Erreur génération bon de commande '{order_request.job_name}': {e.message}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur interne lors de la génération du PDF.",
        )

    return Response(
        content=document.content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": content_disposition(document.filename),
            "X-Page-Count": str(document.page_count),
        },
    )
