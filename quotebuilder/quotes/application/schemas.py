from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from quotebuilder.items.domain.entities import Item
from quotebuilder.quotes.domain.entities import Quote, QuoteMeta, QuoteSummary


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# --- Schémas pour Quote ---

class QuoteSaveRequest(_CamelModel):
    builder_name: str = ""
    job_name: str = ""
    items: List[Item] = Field(default_factory=list)

    @property
    def meta(self) -> QuoteMeta:
        return QuoteMeta(builder_name=self.builder_name, job_name=self.job_name)


class QuoteSummaryResponse(_CamelModel):
    id: str
    quote_number: int
    builder_name: str
    job_name: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, summary: QuoteSummary) -> "QuoteSummaryResponse":
        return cls.model_validate(summary.model_dump())


class QuoteResponse(QuoteSummaryResponse):
    user_id: str
    items: List[Item] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, quote: Quote) -> "QuoteResponse":
        return cls(
            id=quote.id,
            quote_number=quote.quote_number,
            builder_name=quote.builder_name,
            job_name=quote.job_name,
            created_at=quote.created_at,
            updated_at=quote.updated_at,
            user_id=quote.user_id,
            items=quote.items,
        )

