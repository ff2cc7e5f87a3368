import logging
from datetime import datetime
from typing import Any, Mapping, Optional, Tuple, Type, Union

from pydantic import ValidationError as PydanticValidationError

from quotebuilder.core.notifications import QUOTE_LIST_PATH, Notification, notification_from_exception
from quotebuilder.items.application.forms import DoorForm, WindowForm
from quotebuilder.items.domain.item_list import ItemList
from quotebuilder.mailer.domain.delivery import AbstractOrderDelivery
from quotebuilder.mailer.domain.exceptions import EmailDomainException
from quotebuilder.pdf.application.services import PDFService
from quotebuilder.pdf.domain.exceptions import PDFDomainException
from quotebuilder.pdf.domain.generator import RenderedDocument
from quotebuilder.quotes.application.services import QuotePersistenceService, validate_quote_input
from quotebuilder.quotes.domain.entities import Quote, QuoteMeta
from quotebuilder.quotes.domain.exceptions import QuoteDomainException, ValidationError

logger = logging.getLogger(__name__)

FormInput = Union[WindowForm, DoorForm, Mapping[str, Any]]


class QuoteEditor:
    """Session d'édition d'un devis.

    Détient les métadonnées, l'identifiant du devis courant, le propriétaire
    et la liste d'articles. Les erreurs des adaptateurs ne sont jamais
    propagées: elles deviennent des `Notification`.

    Un compteur de révision est incrémenté à chaque chargement; le résultat
    d'un enregistrement ou d'un chargement dépassé par un chargement plus
    récent est ignoré.
    """

    def __init__(
        self,
        persistence: QuotePersistenceService,
        pdf_service: Optional[PDFService] = None,
        delivery: Optional[AbstractOrderDelivery] = None,
        owner_id: Optional[str] = None,
        owner_email: Optional[str] = None,
    ):
        self.persistence = persistence
        self.pdf_service = pdf_service
        self.delivery = delivery
        self.owner_id = owner_id
        self.owner_email = owner_email

        self.builder_name = ""
        self.job_name = ""
        self.quote_id: Optional[str] = None
        self.quote_number: Optional[int] = None
        self.quote_date: Optional[datetime] = None
        self.items = ItemList()
        self._revision = 0

    @property
    def meta(self) -> QuoteMeta:
        return QuoteMeta(builder_name=self.builder_name, job_name=self.job_name)

    @property
    def revision(self) -> int:
        return self._revision

    def set_meta(self, builder_name: Optional[str] = None, job_name: Optional[str] = None) -> None:
        if builder_name is not None:
            self.builder_name = builder_name
        if job_name is not None:
            self.job_name = job_name

    def reset(self) -> None:
        """Repart d'un devis vierge."""
        self._revision += 1
        self.builder_name = ""
        self.job_name = ""
        self.quote_id = None
        self.quote_number = None
        self.quote_date = None
        self.items.clear()

    def _apply(self, quote: Quote) -> None:
        self.quote_id = quote.id
        self.quote_number = quote.quote_number
        self.quote_date = quote.created_at
        self.builder_name = quote.builder_name
        self.job_name = quote.job_name
        self.items.replace(quote.items)

    # --- Articles ---

    def _add(self, form_class: Type[Union[WindowForm, DoorForm]], form: FormInput) -> Optional[Notification]:
        try:
            if not isinstance(form, form_class):
                form = form_class.model_validate(dict(form))
            self.items.add(form.to_item())
        except ValidationError as e:
            return notification_from_exception(e)
        except PydanticValidationError as e:
            errors = e.errors()
            field = ".".join(str(part) for part in errors[0]["loc"]) if errors else None
            logger.warning(f"[QuoteEditor] Formulaire {form_class.__name__} invalide: {e.error_count()} erreur(s)")
            return notification_from_exception(
                ValidationError("invalid_field", f"Saisie invalide pour '{field}'.", field=field)
            )
        return None

    def add_window(self, form: FormInput) -> Optional[Notification]:
        return self._add(WindowForm, form)

    def add_door(self, form: FormInput) -> Optional[Notification]:
        return self._add(DoorForm, form)

    def delete_item(self, index: int) -> bool:
        return self.items.delete(index)

    def duplicate_item(self, index: int) -> bool:
        return self.items.duplicate(index) is not None

    def move_item(self, from_index: int, to_index: int) -> bool:
        return self.items.move(from_index, to_index)

    # --- Store ---

    async def save(self) -> Optional[Notification]:
        """Enregistre (création ou mise à jour). None si le résultat a été ignoré."""
        revision = self._revision
        try:
            quote = await self.persistence.save(
                self.meta, self.items.items, self.owner_id, existing_quote_id=self.quote_id
            )
        except QuoteDomainException as e:
            logger.warning(f"[QuoteEditor] Échec enregistrement: {e.message}")
            if revision != self._revision:
                return None
            return notification_from_exception(e, action="save quote")

        if revision != self._revision:
            logger.info(f"[QuoteEditor] Résultat d'enregistrement #{quote.quote_number} ignoré (session rechargée).")
            return None
        self.quote_id = quote.id
        self.quote_number = quote.quote_number
        self.quote_date = quote.created_at
        return Notification.success(
            "Quote Saved", f"Quote #{quote.quote_number} has been saved successfully."
        )

    async def load(self, quote_id: str) -> Optional[Notification]:
        """Charge un devis dans la session. None en cas de succès ou de résultat ignoré."""
        self._revision += 1
        revision = self._revision
        try:
            quote = await self.persistence.load(quote_id)
        except QuoteDomainException as e:
            logger.warning(f"[QuoteEditor] Échec chargement {quote_id}: {e.message}")
            if revision != self._revision:
                return None
            return notification_from_exception(e, action="load quote")

        if revision != self._revision:
            logger.info(f"[QuoteEditor] Chargement {quote_id} ignoré (dépassé par un chargement plus récent).")
            return None
        self._apply(quote)
        return None

    async def delete_quote(self) -> Notification:
        if not self.quote_id:
            return Notification.error("Error", "This quote has not been saved yet.")
        try:
            await self.persistence.delete(self.quote_id)
        except QuoteDomainException as e:
            logger.warning(f"[QuoteEditor] Échec suppression {self.quote_id}: {e.message}")
            return notification_from_exception(e, action="delete quote")
        number = self.quote_number
        self.reset()
        return Notification(
            title="Quote Deleted",
            description=f"Quote #{number} has been deleted.",
            redirect=QUOTE_LIST_PATH,
        )

    # --- Documents ---

    async def submit_order(self) -> Tuple[Notification, Optional[RenderedDocument]]:
        """Génère le bon de commande PDF de la liste courante."""
        if self.pdf_service is None:
            return Notification.error("Error", "Order documents are not available."), None
        try:
            validate_quote_input(self.meta, self.items.items, self.owner_id)
            document = await self.pdf_service.generate_order_pdf(
                builder_name=self.builder_name,
                job_name=self.job_name,
                items=self.items.items,
                requester_email=self.owner_email,
                quote_number=self.quote_number,
                quote_date=self.quote_date,
            )
        except ValidationError as e:
            return notification_from_exception(e), None
        except PDFDomainException as e:
            logger.error(f"[QuoteEditor] Échec génération du bon de commande: {e.message}")
            return Notification.error("Error", "Failed to generate order PDF. Please try again."), None
        return Notification.success(
            "Order Generated", f"Your order PDF {document.filename} is ready."
        ), document

    async def send_order_email(self) -> Notification:
        """Transmet la liste courante à la fonction d'envoi d'email."""
        if self.delivery is None:
            return Notification.error("Error", "Order email delivery is not configured.")
        try:
            validate_quote_input(self.meta, self.items.items, self.owner_id)
            if not self.owner_email:
                raise ValidationError("not_authenticated", "Adresse email du demandeur inconnue.")
            sent = await self.delivery.send_order(
                self.owner_id, self.owner_email, self.builder_name, self.job_name, self.items.items
            )
        except ValidationError as e:
            return notification_from_exception(e)
        except EmailDomainException as e:
            logger.error(f"[QuoteEditor] Échec envoi email commande: {e.message}")
            return Notification.error("Error", "Failed to send order email. Please try again.")
        if not sent:
            return Notification.error("Error", "Failed to send order email. Please try again.")
        return Notification.success("Order Sent", f"Order details have been emailed to {self.owner_email}.")
