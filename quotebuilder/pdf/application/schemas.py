from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from quotebuilder.items.domain.entities import Item


class OrderDocumentRequest(BaseModel):
    """Corps de la demande de bon de commande (liste courante, non nécessairement enregistrée)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    builder_name: str = ""
    job_name: str = ""
    items: List[Item] = Field(default_factory=list)
    quote_number: Optional[int] = None
    quote_date: Optional[datetime] = None
