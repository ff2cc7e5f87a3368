from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from quotebuilder.items.domain.entities import DoorItem, WindowItem

# Entités du Domaine "Quotes"


class QuoteMeta(BaseModel):
    """Métadonnées saisies par l'utilisateur en tête de devis."""
    builder_name: str = ""
    job_name: str = ""


class Quote(BaseModel):
    id: str
    builder_name: str
    job_name: str
    quote_number: int  # Attribué par le store, lecture seule côté client
    user_id: str
    created_at: datetime
    updated_at: datetime

    items: List[Union[WindowItem, DoorItem]] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

    @property
    def meta(self) -> QuoteMeta:
        return QuoteMeta(builder_name=self.builder_name, job_name=self.job_name)


class QuoteSummary(BaseModel):
    """Ligne de la liste des devis (sans les articles)."""
    id: str
    quote_number: int
    builder_name: str
    job_name: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
