import logging
from typing import Optional, Sequence

import httpx

from quotebuilder.items.domain.entities import Item
from quotebuilder.mailer.domain.delivery import AbstractOrderDelivery, OrderEmailPayload
from quotebuilder.mailer.domain.exceptions import EmailSendingException

logger = logging.getLogger(__name__)


class HttpOrderEmailFunction(AbstractOrderDelivery):
    """Appelle la fonction d'envoi distante (POST JSON).

    Réponse `{"success": true}` -> True; réponse d'erreur -> False;
    erreur réseau -> EmailSendingException.
    """

    def __init__(self, function_url: str, client: Optional[httpx.AsyncClient] = None, timeout: float = 15.0):
        self.function_url = function_url
        self._client = client
        self.timeout = timeout

    async def _post(self, body: dict) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(self.function_url, json=body, timeout=self.timeout)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.function_url, json=body)

    async def send_order(
        self,
        owner_id: Optional[str],
        owner_email: str,
        builder_name: str,
        job_name: str,
        items: Sequence[Item],
    ) -> bool:
        payload = OrderEmailPayload(
            user_id=owner_id,
            user_email=owner_email,
            builder_name=builder_name,
            job_name=job_name,
            items=list(items),
        )
        body = payload.model_dump(mode="json", by_alias=True)
        logger.info(f"[HttpOrderEmailFunction] Envoi commande '{job_name}' ({len(payload.items)} articles) à {owner_email}")
        try:
            response = await self._post(body)
        except httpx.HTTPError as e:
            logger.error(f"[HttpOrderEmailFunction] Erreur réseau vers {self.function_url}: {e}", exc_info=True)
            raise EmailSendingException(f"Fonction d'envoi injoignable: {e}", original_exception=e)

        try:
            result = response.json()
        except ValueError:
            result = {}
        if response.is_success and isinstance(result, dict) and result.get("success") is True:
            return True
        error = result.get("error") if isinstance(result, dict) else None
        logger.warning(
            f"[HttpOrderEmailFunction] Échec envoi (HTTP {response.status_code}): {error or response.text[:200]}"
        )
        return False
