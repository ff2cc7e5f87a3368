import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from quotebuilder.config import Settings, get_settings
from quotebuilder.secret_store.services import SecretStore

logger = logging.getLogger(__name__)

secret_router = APIRouter(
    prefix="/functions",
    tags=["Functions"]
)


class SecretRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    secret_name: str


def get_secret_store(settings: Annotated[Settings, Depends(get_settings)]) -> SecretStore:
    return SecretStore(exposed=settings.EXPOSED_SECRETS)

SecretStoreDep = Annotated[SecretStore, Depends(get_secret_store)]


@secret_router.post("/get-secret")
async def get_secret(request: SecretRequest, store: SecretStoreDep):
    """Retourne `{secretName: valeur}` pour un secret exposé."""
    value = store.get_secret(request.secret_name)
    if value is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": f"Secret {request.secret_name} not found"},
        )
    return {request.secret_name: value}
