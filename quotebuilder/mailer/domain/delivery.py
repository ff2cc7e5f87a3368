from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from quotebuilder.items.domain.entities import Item


class OrderEmailPayload(BaseModel):
    """Corps JSON attendu par la fonction d'envoi du bon de commande."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: Optional[str] = None
    user_email: str
    builder_name: str
    job_name: str
    items: List[Item] = Field(default_factory=list)


class AbstractOrderDelivery(ABC):
    """Transmet la liste d'articles à la fonction d'envoi d'email.

    Seul le succès ou l'échec est remonté à l'appelant.
    """

    @abstractmethod
    async def send_order(
        self,
        owner_id: Optional[str],
        owner_email: str,
        builder_name: str,
        job_name: str,
        items: Sequence[Item],
    ) -> bool:
        raise NotImplementedError
